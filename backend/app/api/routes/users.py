"""Users — registration, login, and the authenticated user's own record.

Invariants:
    - Every response is {"user": AuthUser} with a freshly issued token
    - GET/PUT /user require a token; register/login take none
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import current_user, get_token_service
from app.core.tokens import TokenService
from app.infrastructure.database import get_db
from app.models.user import User
from app.schemas.user import (
    LoginRequest, NewUserRequest, UpdateUserRequest, UserResponse,
)
from app.services import accounts
from app.services.presenters import auth_user_view

router = APIRouter(prefix="/api", tags=["users"])


@router.post(
    "/users", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: NewUserRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = await accounts.register_user(
        db, body.user.username, body.user.email, body.user.password,
    )
    return UserResponse(user=auth_user_view(user, tokens))


@router.post("/users/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = await accounts.authenticate(db, body.user.email, body.user.password)
    return UserResponse(user=auth_user_view(user, tokens))


@router.get("/user", response_model=UserResponse)
async def read_current_user(
    user: User = Depends(current_user),
    tokens: TokenService = Depends(get_token_service),
):
    return UserResponse(user=auth_user_view(user, tokens))


@router.put("/user", response_model=UserResponse)
async def update_current_user(
    body: UpdateUserRequest,
    user: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = await accounts.update_user(
        db, user, **body.user.model_dump(exclude_unset=True),
    )
    return UserResponse(user=auth_user_view(user, tokens))
