"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Tokens are issued by the same TokenService the app holds on app.state

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (the edge-table upsert uses the SQLite dialect's ON CONFLICT DO NOTHING)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.main import app
from app.models.user import User
from app.services import accounts, articles


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def tokens():
    return app.state.token_service


@pytest.fixture
def auth_header(tokens):
    """Build an Authorization header for a user."""
    def _build(user: User) -> dict:
        return {"Authorization": f"Token {tokens.issue(user)}"}
    return _build


@pytest.fixture
async def alice(test_db):
    return await accounts.register_user(test_db, "alice", "a@x.com", "secret123")


@pytest.fixture
async def bob(test_db):
    return await accounts.register_user(test_db, "bob", "b@x.com", "hunter22")


@pytest.fixture
async def carol(test_db):
    return await accounts.register_user(test_db, "carol", "c@x.com", "pass1234")


@pytest.fixture
async def alice_article(test_db, alice):
    return await articles.create_article(
        test_db, alice,
        title="My Title", description="d", body="b", tag_list=["intro", "python"],
    )
