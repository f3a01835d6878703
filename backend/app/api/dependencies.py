"""Request Dependencies — token resolution in required and optional modes.

Invariants:
    - required: no token -> CredentialsMissingError; bad token -> TokenInvalid/TokenExpired
    - optional: no token -> anonymous (None); present-but-bad token still fails
    - The TokenService comes from app.state, built once at startup from Settings
    - A token whose subject no longer exists is CredentialsInvalidError (401, not 404)
      in both modes
"""

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import CredentialsInvalidError, CredentialsMissingError
from app.core.tokens import TokenService, TokenSubject, extract_bearer
from app.infrastructure.database import get_db
from app.models.user import User
from app.services.accounts import get_user_by_id


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def optional_subject(
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenSubject | None:
    token = extract_bearer(authorization)
    if token is None:
        return None
    return tokens.verify(token)


async def required_subject(
    subject: TokenSubject | None = Depends(optional_subject),
) -> TokenSubject:
    if subject is None:
        raise CredentialsMissingError()
    return subject


async def current_user(
    subject: TokenSubject = Depends(required_subject),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await get_user_by_id(db, subject.id)
    if user is None:
        raise CredentialsInvalidError("Token subject no longer exists")
    return user


async def optional_user(
    subject: TokenSubject | None = Depends(optional_subject),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if subject is None:
        return None
    user = await get_user_by_id(db, subject.id)
    if user is None:
        raise CredentialsInvalidError("Token subject no longer exists")
    return user
