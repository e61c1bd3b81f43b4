# tests/repositories/conftest.py
"""Fixtures for repository tests backed by a throwaway SQLite database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import PostDB  # noqa: F401
from app.repositories import PostRepository
from app.schemas import CurrentUser


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create an engine on a fresh SQLite file with the posts table."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'posts.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def repo(session: AsyncSession) -> PostRepository:
    return PostRepository(session)


@pytest.fixture
def author() -> CurrentUser:
    return CurrentUser(id=uuid4(), username="alice")


@pytest.fixture
def other_author() -> CurrentUser:
    return CurrentUser(id=uuid4(), username="bob")
