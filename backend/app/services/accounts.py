"""Accounts — registration, login, and self-profile updates for identity records.

Invariants:
    - username/email normalized by core.identity_rules before any query
    - Uniqueness reported per field ("is already taken."), checked up front and
      backstopped by the unique indexes on commit
    - A user row is persisted all-or-nothing: any failure rolls the session back
    - Login never reveals whether the email or the password was wrong

Design Decisions:
    - Module functions taking the AsyncSession, mirroring the handlers' db-first style
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import (
    CredentialsInvalidError, ErrorContext, FieldValidationError,
)
from app.core.identity_rules import BLANK, TAKEN, normalize_identity
from app.models.user import User

logger = logging.getLogger(__name__)

# distinguishes "field omitted" from an explicit null that clears it
_UNSET = object()


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(
        select(User).where(User.username == username.strip().lower()),
    )
    return result.scalar_one_or_none()


async def _taken_fields(
    db: AsyncSession, fields: dict[str, str], exclude_id: UUID | None = None,
) -> dict[str, list[str]]:
    clauses = [getattr(User, name) == value for name, value in fields.items()]
    if not clauses:
        return {}
    query = select(User.username, User.email).where(or_(*clauses))
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    taken: dict[str, list[str]] = {}
    for username, email in (await db.execute(query)).all():
        if fields.get("username") == username:
            taken["username"] = [TAKEN]
        if fields.get("email") == email:
            taken["email"] = [TAKEN]
    return taken


async def _commit_user(
    db: AsyncSession, user: User, fields: dict[str, str],
) -> None:
    user_id = user.id
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        taken = await _taken_fields(db, fields, exclude_id=user_id)
        raise FieldValidationError(
            taken or {"username": [TAKEN]},
            ErrorContext(user_id=str(user_id)),
        ) from e
    await db.refresh(user)


async def register_user(
    db: AsyncSession, username: str | None, email: str | None, password: str | None,
) -> User:
    """Create a user with a freshly hashed password."""
    fields = normalize_identity(username, email)
    if not password:
        raise FieldValidationError({"password": [BLANK]})
    taken = await _taken_fields(db, fields)
    if taken:
        raise FieldValidationError(taken)

    user = User(username=fields["username"], email=fields["email"])
    user.set_password(password)
    db.add(user)
    await _commit_user(db, user, fields)
    logger.info(
        f"Registered user {user.username}", extra={"user_id": user.id},
    )
    return user


async def authenticate(
    db: AsyncSession, email: str | None, password: str | None,
) -> User:
    """Resolve an email/password pair to a user or raise CredentialsInvalidError."""
    blanks = {
        name: [BLANK]
        for name, value in (("email", email), ("password", password))
        if not value
    }
    if blanks:
        raise FieldValidationError(blanks)

    result = await db.execute(
        select(User).where(User.email == email.strip().lower()),
    )
    user = result.scalar_one_or_none()
    if user is None or not user.verify_password(password):
        logger.warning("Login rejected", extra={"error_code": "CREDENTIALS_INVALID"})
        raise CredentialsInvalidError()
    return user


async def update_user(
    db: AsyncSession,
    user: User,
    *,
    username: str | None = None,
    email: str | None = None,
    bio: str | None = _UNSET,
    image: str | None = _UNSET,
    password: str | None = None,
) -> User:
    """Apply only the supplied fields; a new password replaces salt and hash.

    bio and image accept None to clear them; omitted fields are left as-is.
    """
    fields = normalize_identity(username, email, require_all=False)
    changed = {
        name: value for name, value in fields.items()
        if getattr(user, name) != value
    }
    taken = await _taken_fields(db, changed, exclude_id=user.id)
    if taken:
        raise FieldValidationError(taken, ErrorContext(user_id=str(user.id)))

    for name, value in changed.items():
        setattr(user, name, value)
    if bio is not _UNSET:
        user.bio = bio
    if image is not _UNSET:
        user.image = image
    if password:
        user.set_password(password)
    await _commit_user(db, user, changed)
    logger.info("Updated user", extra={"user_id": user.id})
    return user
