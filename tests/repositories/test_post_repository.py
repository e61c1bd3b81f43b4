# tests/repositories/test_post_repository.py
"""Tests for PostRepository."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.errors import DatabaseConnectionError, DatabaseError
from app.models import PostDB
from app.repositories import PostRepository, apply_filters
from app.schemas import CurrentUser, PostCreate, PostUpdate

BASE_DATE = datetime(2026, 1, 1, tzinfo=UTC)


async def seed_posts(
    session: AsyncSession,
    user: CurrentUser,
    count: int,
    tags: list[str] | None = None,
    start: int = 0,
) -> list[PostDB]:
    """Insert `count` posts one minute apart, oldest first."""
    posts = [
        PostDB(
            title=f"Post {start + i}",
            body=f"<p>Body {start + i}</p>",
            tags=tags or [],
            user_id=user.id,
            username=user.username,
            published_date=BASE_DATE + timedelta(minutes=start + i),
        )
        for i in range(count)
    ]
    session.add_all(posts)
    await session.commit()
    return posts


class TestCreateAndGet:
    async def test_create_assigns_id_author_and_date(
        self,
        repo: PostRepository,
        author: CurrentUser,
    ) -> None:
        post = await repo.create(
            PostCreate(title="Hello", body="<p>Hi</p>", tags=["intro"]),
            author,
        )

        assert post.id is not None
        assert post.user_id == author.id
        assert post.username == "alice"
        assert post.tags == ["intro"]
        assert post.published_date is not None
        assert post.updated_at is None

    async def test_get_by_id_round_trip(
        self,
        repo: PostRepository,
        author: CurrentUser,
    ) -> None:
        created = await repo.create(
            PostCreate(title="Hello", body="<p>Hi</p>", tags=[]),
            author,
        )

        found = await repo.get_by_id(created.id)

        assert found is not None
        assert found.title == "Hello"

    async def test_get_by_id_missing(self, repo: PostRepository) -> None:
        assert await repo.get_by_id(uuid4()) is None


class TestListing:
    async def test_newest_first(
        self,
        repo: PostRepository,
        session: AsyncSession,
        author: CurrentUser,
    ) -> None:
        await seed_posts(session, author, 3)

        posts = await repo.get_all()

        assert [p.title for p in posts] == ["Post 2", "Post 1", "Post 0"]

    async def test_pagination(
        self,
        repo: PostRepository,
        session: AsyncSession,
        author: CurrentUser,
    ) -> None:
        await seed_posts(session, author, 11)

        first = await repo.get_all(skip=0, limit=10)
        second = await repo.get_all(skip=10, limit=10)

        assert len(first) == 10
        assert first[0].title == "Post 10"
        assert [p.title for p in second] == ["Post 0"]
        assert await repo.count() == 11

    async def test_username_filter(
        self,
        repo: PostRepository,
        session: AsyncSession,
        author: CurrentUser,
        other_author: CurrentUser,
    ) -> None:
        await seed_posts(session, author, 2)
        await seed_posts(session, other_author, 3, start=2)

        posts = await repo.get_all(username="bob")

        assert len(posts) == 3
        assert {p.username for p in posts} == {"bob"}
        assert await repo.count(username="bob") == 3
        assert await repo.count(username="nobody") == 0

    def test_tag_filter_uses_jsonb_containment(self) -> None:
        query = apply_filters(select(PostDB), tag="python")

        sql = str(query.compile(dialect=postgresql.dialect()))

        assert "@>" in sql
        assert "posts.tags" in sql

    def test_filters_combine(self) -> None:
        query = apply_filters(select(PostDB), username="alice", tag="python")

        sql = str(query.compile(dialect=postgresql.dialect()))

        assert "posts.username" in sql
        assert " AND " in sql

    def test_no_filters_leaves_query_alone(self) -> None:
        query = select(PostDB)
        assert apply_filters(query) is query


class TestUpdate:
    async def test_update_changes_only_supplied_fields(
        self,
        repo: PostRepository,
        author: CurrentUser,
    ) -> None:
        created = await repo.create(
            PostCreate(title="Hello", body="<p>Hi</p>", tags=["a"]),
            author,
        )

        updated = await repo.update(created.id, PostUpdate(title="Changed"))

        assert updated is not None
        assert updated.title == "Changed"
        assert updated.body == "<p>Hi</p>"
        assert updated.tags == ["a"]
        assert updated.updated_at is not None

    async def test_update_missing_returns_none(self, repo: PostRepository) -> None:
        assert await repo.update(uuid4(), PostUpdate(title="x")) is None


class TestDelete:
    async def test_delete_existing(
        self,
        repo: PostRepository,
        author: CurrentUser,
    ) -> None:
        created = await repo.create(
            PostCreate(title="Hello", body="<p>Hi</p>", tags=[]),
            author,
        )

        assert await repo.delete(created.id) is True
        assert await repo.get_by_id(created.id) is None

    async def test_delete_missing(self, repo: PostRepository) -> None:
        assert await repo.delete(uuid4()) is False


class TestDatabaseFailures:
    async def test_create_failure_is_wrapped(self, author: CurrentUser) -> None:
        session = MagicMock()
        session.flush = AsyncMock(side_effect=SQLAlchemyError("connection reset"))
        session.rollback = AsyncMock()
        repo = PostRepository(session)

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await repo.create(PostCreate(title="t", body="b", tags=[]), author)

        assert "connection reset" in exc_info.value.detail
        assert exc_info.value.status_code == 500
        session.rollback.assert_awaited_once()

    async def test_read_failure_is_wrapped(self) -> None:
        session = MagicMock()
        session.execute = AsyncMock(side_effect=SQLAlchemyError("timeout"))
        repo = PostRepository(session)

        with pytest.raises(DatabaseError, match="timeout"):
            await repo.get_all()
