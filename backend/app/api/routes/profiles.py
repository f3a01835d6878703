"""Profiles — public profile reads and follow/unfollow."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import current_user, optional_user
from app.infrastructure.database import get_db
from app.models.user import User
from app.schemas.profile import ProfileResponse
from app.services import profiles
from app.services.presenters import profile_view

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("/{username}", response_model=ProfileResponse)
async def read_profile(
    username: str,
    viewer: User | None = Depends(optional_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profiles.get_profile_user(db, username)
    return ProfileResponse(profile=await profile_view(db, profile, viewer))


@router.post("/{username}/follow", response_model=ProfileResponse)
async def follow_profile(
    username: str,
    viewer: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profiles.follow(db, viewer, username)
    return ProfileResponse(profile=await profile_view(db, profile, viewer))


@router.delete("/{username}/follow", response_model=ProfileResponse)
async def unfollow_profile(
    username: str,
    viewer: User = Depends(current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profiles.unfollow(db, viewer, username)
    return ProfileResponse(profile=await profile_view(db, profile, viewer))
