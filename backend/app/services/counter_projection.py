"""Favorite Count Projection — articles.favorites_count as a view over favorite edges.

Invariants:
    - After recompute(a), favorites_count(a) == COUNT(favorites WHERE article_id = a)
    - A failed recompute raises; it never leaves a stale count behind silently
    - Flushes only; the calling service commits with the edge mutation

Design Decisions:
    - Full COUNT over the edge table's article_id index per recompute; swapping in an
      incrementally maintained counter only needs another CounterProjection
    - rebuild_all() exists so the cache can be dropped and regenerated at any time
"""

import logging
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DatabaseError, ErrorContext, ResourceNotFoundError
from app.models.article import Article
from app.models.favorite import Favorite

logger = logging.getLogger(__name__)


class FavoriteCountProjection:
    """CounterProjection that recounts favorite edges per article."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def recompute(self, article_id: UUID) -> int:
        try:
            count = await self.db.scalar(
                select(func.count())
                .select_from(Favorite)
                .where(Favorite.article_id == article_id)
            )
            articles = Article.__table__
            # favorites are not content edits: updated_at is kept as-is
            result = await self.db.execute(
                update(articles)
                .where(articles.c.id == article_id)
                .values(favorites_count=count, updated_at=articles.c.updated_at)
            )
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"favorites_count recompute failed for {article_id}: {e}")
            raise DatabaseError(
                "favorites_count recompute failed", "recompute",
                ErrorContext(debug_info={"article_id": str(article_id)}),
            ) from e
        if result.rowcount == 0:
            raise ResourceNotFoundError("Article", str(article_id))
        return count

    async def rebuild_all(self) -> int:
        """Recompute every article's count. Returns the number refreshed."""
        article_ids = (await self.db.scalars(select(Article.id))).all()
        for article_id in article_ids:
            await self.recompute(article_id)
        logger.info(f"Rebuilt favorites_count for {len(article_ids)} articles")
        return len(article_ids)
