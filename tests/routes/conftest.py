# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator, Callable, Generator
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies.dependencies import get_post_repository
from app.main import app
from app.managers.rate_limiter import limiter
from app.managers.token_manager import create_access_token
from app.models import PostDB
from app.schemas import CurrentUser


@pytest.fixture
def sample_user() -> CurrentUser:
    """Create the user acting on requests."""
    return CurrentUser(id=uuid4(), username="testuser")


@pytest.fixture
def other_user() -> CurrentUser:
    """Create a user who does not own the sample posts."""
    return CurrentUser(id=uuid4(), username="otheruser")


@pytest.fixture
def sample_access_token(sample_user: CurrentUser) -> str:
    """Create a sample access token for testing."""
    return create_access_token(
        user_id=sample_user.id,
        username=sample_user.username,
        expires_delta=timedelta(minutes=30),
    )


@pytest.fixture
def auth_headers(sample_access_token: str) -> dict[str, str]:
    """Create auth headers with a valid access token."""
    return {"Authorization": f"Bearer {sample_access_token}"}


@pytest.fixture
def make_post(sample_user: CurrentUser) -> Callable[..., PostDB]:
    """Build `PostDB` instances owned by the sample user unless told otherwise."""

    def _make_post(
        body: str = "<p>Hello <b>world</b></p>",
        title: str = "Hello",
        tags: list[str] | None = None,
        user_id: UUID | None = None,
        username: str | None = None,
    ) -> PostDB:
        return PostDB(
            id=uuid4(),
            title=title,
            body=body,
            tags=tags if tags is not None else ["intro"],
            user_id=user_id or sample_user.id,
            username=username or sample_user.username,
            published_date=datetime(2026, 1, 1, 10, 0, tzinfo=UTC),
        )

    return _make_post


@pytest.fixture
def mock_post_repo() -> Generator[AsyncMock]:
    """Replace the post repository with an AsyncMock for the test."""
    repo = AsyncMock()
    app.dependency_overrides[get_post_repository] = lambda: repo
    yield repo
    app.dependency_overrides = {}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, raise_app_exceptions=False),
    ) as ac:
        yield ac
    limiter.enabled = True
