"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and ArticleId wrap UUIDs — never mix them in relation calls
    - RelationKind enumerates the only two relations the graph knows about

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log fields without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ArticleId = NewType("ArticleId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class RelationKind(str, Enum):
    """Directed many-to-many relations, subject is always a user."""
    FAVORITE = "favorite"   # user -> article
    FOLLOW = "follow"       # user -> user
