"""Relation Protocols — contracts for the social graph and its derived counters.

Invariants:
    - add/remove are idempotent: repeating them never errors and never duplicates
    - exists is an indexed lookup in the subject's edge set, never a full scan
    - A projection's output is a rebuildable cache over the graph, never a source of truth

Design Decisions:
    - Protocol over ABC: structural subtyping, implementations live in services/
    - Async in Protocol: implementations do IO; callers own the transaction
    - The graph layer does not reject self-edges; policy lives in the services
"""

from typing import Protocol
from uuid import UUID


class RelationGraph(Protocol):
    """Set-membership contract for one relation kind (favorite or follow)."""
    async def add(self, subject_id: UUID, object_id: UUID) -> None: ...
    async def remove(self, subject_id: UUID, object_id: UUID) -> None: ...
    async def exists(self, subject_id: UUID, object_id: UUID) -> bool: ...
    async def objects_of(self, subject_id: UUID) -> set[UUID]: ...


class CounterProjection(Protocol):
    """Materialized count over a relation's object side."""
    async def recompute(self, object_id: UUID) -> int: ...
    async def rebuild_all(self) -> int: ...
