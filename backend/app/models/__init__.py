"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User and Article are the records; Favorite and Follow are edge tables

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.article import Article  # noqa: F401
from app.models.favorite import Favorite  # noqa: F401
from app.models.follow import Follow  # noqa: F401
