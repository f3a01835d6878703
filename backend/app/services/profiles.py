"""Profiles — profile lookup and the follow/unfollow mutations.

Invariants:
    - follow/unfollow are idempotent (delegated to the follow graph)
    - A user may not follow themselves (ForbiddenActionError); unfollowing
      yourself is a harmless no-op
    - Unknown usernames raise ResourceNotFoundError
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import RelationKind
from app.core.errors import ErrorContext, ForbiddenActionError, ResourceNotFoundError
from app.models.user import User
from app.services.accounts import get_user_by_username
from app.services.relation_graph import follow_graph

logger = logging.getLogger(__name__)


async def get_profile_user(db: AsyncSession, username: str) -> User:
    user = await get_user_by_username(db, username)
    if user is None:
        raise ResourceNotFoundError("Profile", username)
    return user


async def follow(db: AsyncSession, viewer: User, username: str) -> User:
    profile = await get_profile_user(db, username)
    if profile.id == viewer.id:
        raise ForbiddenActionError(
            "You cannot follow yourself",
            ErrorContext(user_id=str(viewer.id), relation=RelationKind.FOLLOW.value),
        )
    await follow_graph(db).add(viewer.id, profile.id)
    await db.commit()
    logger.info(
        f"{viewer.username} follows {profile.username}",
        extra={"user_id": viewer.id, "relation": RelationKind.FOLLOW.value},
    )
    return profile


async def unfollow(db: AsyncSession, viewer: User, username: str) -> User:
    profile = await get_profile_user(db, username)
    await follow_graph(db).remove(viewer.id, profile.id)
    await db.commit()
    logger.info(
        f"{viewer.username} unfollowed {profile.username}",
        extra={"user_id": viewer.id, "relation": RelationKind.FOLLOW.value},
    )
    return profile
