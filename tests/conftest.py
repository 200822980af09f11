"""
Shared test fixtures for the session service test suite.

Every test gets its own on-disk aiosqlite database; ``get_db`` is
overridden so the app and the tests share it.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FIRST_ADMIN_PASSWORD"] = "Test-Admin-Pass1"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.security import get_password_hash
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.user import User
from app.repositories.users import UserRepository

ALICE_PASSWORD = "Sup3rSecr3t!"


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Create all tables in a fresh database and dispose of the engine afterwards."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    yield factory
    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def create_user(
    db: AsyncSession,
    user_name: str,
    password: str,
    *,
    is_admin: bool = False,
) -> User:
    user = await UserRepository(db).add_user(
        user_name,
        user_name.title(),
        "Tester",
        get_password_hash(password),
        f"{user_name}@example.com",
        is_admin=is_admin,
    )
    return user


@pytest.fixture
async def alice(db_session: AsyncSession) -> User:
    return await create_user(db_session, "alice", ALICE_PASSWORD)


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, "boss", "Adm1nPassw0rd", is_admin=True)


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory fixture: ``await make_user("bob", "password1")``."""

    async def _make(user_name: str, password: str, *, is_admin: bool = False) -> User:
        return await create_user(db_session, user_name, password, is_admin=is_admin)

    return _make
