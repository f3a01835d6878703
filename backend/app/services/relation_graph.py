"""Edge-Table Relation Graph — favorite and follow relations over normalized edge tables.

Invariants:
    - add() is a set-union at the store: INSERT ... ON CONFLICT DO NOTHING
    - remove() of a missing edge matches zero rows and returns normally
    - exists() is a composite primary-key lookup
    - Flushes only; the calling service commits or rolls back

Design Decisions:
    - One class parameterized by RelationKind: both relations share shape and semantics
    - Dialect-specific upsert for PostgreSQL/SQLite; other dialects use a savepoint
      and read the duplicate-key error as "edge already present"
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import RelationKind
from app.models.favorite import Favorite
from app.models.follow import Follow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeTable:
    model: type
    subject_column: str
    object_column: str


EDGE_TABLES: dict[RelationKind, EdgeTable] = {
    RelationKind.FAVORITE: EdgeTable(Favorite, "user_id", "article_id"),
    RelationKind.FOLLOW: EdgeTable(Follow, "follower_id", "followee_id"),
}

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class EdgeTableRelationGraph:
    """RelationGraph implementation backed by one edge table."""

    def __init__(self, db: AsyncSession, kind: RelationKind):
        self.db = db
        self.kind = kind
        self._table = EDGE_TABLES[kind]
        self._subject = getattr(self._table.model, self._table.subject_column)
        self._object = getattr(self._table.model, self._table.object_column)

    def _values(self, subject_id: UUID, object_id: UUID) -> dict:
        return {
            self._table.subject_column: subject_id,
            self._table.object_column: object_id,
        }

    async def add(self, subject_id: UUID, object_id: UUID) -> None:
        values = self._values(subject_id, object_id)
        dialect = self.db.get_bind().dialect.name
        dialect_insert = _UPSERT_DIALECTS.get(dialect)
        if dialect_insert is not None:
            stmt = dialect_insert(self._table.model).values(**values)
            await self.db.execute(stmt.on_conflict_do_nothing())
        else:
            try:
                async with self.db.begin_nested():
                    await self.db.execute(insert(self._table.model).values(**values))
            except IntegrityError:
                logger.debug(
                    "Edge already present",
                    extra={"relation": self.kind.value, "user_id": subject_id},
                )
        await self.db.flush()

    async def remove(self, subject_id: UUID, object_id: UUID) -> None:
        await self.db.execute(
            delete(self._table.model)
            .where(self._subject == subject_id)
            .where(self._object == object_id)
        )
        await self.db.flush()

    async def exists(self, subject_id: UUID, object_id: UUID) -> bool:
        result = await self.db.execute(
            select(self._subject)
            .where(self._subject == subject_id)
            .where(self._object == object_id)
            .limit(1)
        )
        return result.first() is not None

    async def objects_of(self, subject_id: UUID) -> set[UUID]:
        result = await self.db.execute(
            select(self._object).where(self._subject == subject_id)
        )
        return set(result.scalars().all())


def favorite_graph(db: AsyncSession) -> EdgeTableRelationGraph:
    return EdgeTableRelationGraph(db, RelationKind.FAVORITE)


def follow_graph(db: AsyncSession) -> EdgeTableRelationGraph:
    return EdgeTableRelationGraph(db, RelationKind.FOLLOW)
