"""
Shared fixtures.

Every test gets its own SQLite file (through aiosqlite) with the full schema,
and a TestClient whose database session dependency points at it.
"""

import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.database import get_async_session, metadata
from src.main import app
from src.users.models import User, UserRole


@pytest.fixture
def session_maker(tmp_path):
    # NullPool: seeding (asyncio.run) and the TestClient run on different event loops
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    asyncio.run(_create())
    yield async_sessionmaker(engine, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def client(session_maker):
    async def _get_test_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    client.cookies.set("mock-role", UserRole.ADMIN.value)
    return client


@pytest.fixture
def seed(session_maker):
    """Insert ORM objects and return them with their ids populated."""

    def _seed(*objects):
        async def _run():
            async with session_maker() as session:
                session.add_all(objects)
                await session.commit()

        asyncio.run(_run())
        return objects[0] if len(objects) == 1 else objects

    return _seed


@pytest.fixture
def fetch(session_maker):
    """Re-read a row by primary key in a fresh session."""

    def _fetch(model, pk):
        async def _run():
            async with session_maker() as session:
                return await session.get(model, pk)

        return asyncio.run(_run())

    return _fetch


@pytest.fixture
def make_user():
    def _make_user(email="employee@example.com", role=UserRole.EMPLOYEE, **kwargs):
        kwargs.setdefault("name", "Test")
        kwargs.setdefault("last_name", "User")
        kwargs.setdefault("hashed_password", "not-a-real-hash")
        return User(email=email, role=role, **kwargs)

    return _make_user
