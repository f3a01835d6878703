"""User ORM — the identity record: credentials, profile fields, timestamps.

Invariants:
    - username and email are unique and stored lowercase
    - password_salt/password_hash are either both set or both NULL
    - Relation sets (favorites, follows) live in edge tables, not on this row

Design Decisions:
    - set_password/verify_password delegate to core.credentials so hashing stays pure
    - No hard delete path: users are created on registration and only updated
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.core.credentials import hash_password, verify_password
from app.db.base import Base


class User(Base):
    """Registered account."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_salt: Mapped[str | None] = mapped_column(String(64), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(128), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def set_password(self, plaintext: str) -> None:
        """Replace salt and hash; the previous password stops verifying."""
        digest = hash_password(plaintext)
        self.password_salt = digest.salt
        self.password_hash = digest.hash

    def verify_password(self, plaintext: str) -> bool:
        return verify_password(plaintext, self.password_salt, self.password_hash)
