"""Article ORM — the content record addressed by its slug.

Invariants:
    - slug is unique, assigned once before the first INSERT, never recomputed
    - author_id is set at creation and never changed
    - favorites_count is a cache of COUNT(favorites WHERE article_id = id)

Design Decisions:
    - tag_list as JSON array: preserves author order, no tag table needed
    - author loaded with selectin: every article view renders the author profile
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.slugs import SLUG_MAX_LENGTH
from app.db.base import Base


class Article(Base):
    """Authored article."""
    __tablename__ = "articles"
    __table_args__ = (
        CheckConstraint(
            "favorites_count >= 0",
            name="ck_articles_favorites_count_non_negative",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    slug: Mapped[str] = mapped_column(
        String(SLUG_MAX_LENGTH), nullable=False, unique=True, index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tag_list: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    favorites_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
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

    author: Mapped["User"] = relationship("User", lazy="selectin")
