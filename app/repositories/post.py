"""Post repository for database operations."""

from datetime import UTC, datetime
from logging import getLogger
from typing import TypeVar
from uuid import UUID

from sqlalchemy import Select, delete, desc, func, select, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.errors.database import DatabaseConnectionError
from app.models.post import PostDB
from app.schemas.auth import CurrentUser
from app.schemas.post import PostCreate, PostUpdate

logger = file_logger(getLogger(__name__))

T = TypeVar("T", bound=Select)


def apply_filters(
    query: T,
    username: str | None = None,
    tag: str | None = None,
) -> T:
    """
    Narrow a posts query by author username and/or tag.

    Args:
        query: Statement selecting from the posts table
        username: Optional author username (exact match)
        tag: Optional tag the post must carry

    Returns:
        The filtered statement
    """
    if username:
        # pyrefly: ignore [bad-argument-type]
        query = query.where(PostDB.username == username)
    if tag:
        # JSONB containment, served by the GIN index on tags
        query = query.where(type_coerce(PostDB.tags, JSONB).contains([tag]))
    return query


class PostRepository:
    """
    Repository for Post database operations.

    Every SQLAlchemy failure is re-raised as `DatabaseConnectionError`
    carrying the driver message, which the API renders as a 500.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, post: PostCreate, user: CurrentUser) -> PostDB:
        """
        Create a new post in the database.

        Args:
            post: Validated post data (body already sanitized)
            user: Author of the post

        Returns:
            PostDB: Created post database model
        """
        db_post = PostDB(
            title=post.title,
            body=post.body,
            tags=list(post.tags),
            user_id=user.id,
            username=user.username,
            published_date=datetime.now(tz=UTC),
        )

        try:
            self.session.add(db_post)
            await self.session.flush()
            await self.session.refresh(db_post)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save post: {e}") from e

        logger.info(f"Post {db_post.id} created by {user.username}")
        return db_post

    async def get_by_id(self, post_id: UUID) -> PostDB | None:
        """
        Get post by ID.

        Args:
            post_id: Post UUID

        Returns:
            PostDB | None: Post if found, None otherwise
        """
        try:
            result = await self.session.execute(
                # pyrefly: ignore [bad-argument-type]
                select(PostDB).where(PostDB.id == post_id),
            )
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to load post: {e}") from e
        return result.scalar_one_or_none()

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 10,
        username: str | None = None,
        tag: str | None = None,
    ) -> list[PostDB]:
        """
        Get posts, newest first, with pagination and optional filtering.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            username: Optional author username filter
            tag: Optional tag filter

        Returns:
            list[PostDB]: List of posts
        """
        query = apply_filters(select(PostDB), username=username, tag=tag)
        query = (
            # pyrefly: ignore [bad-argument-type]
            query.order_by(desc(PostDB.published_date), desc(PostDB.id))
            .offset(skip)
            .limit(limit)
        )

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to list posts: {e}") from e
        return list(result.scalars().all())

    async def count(self, username: str | None = None, tag: str | None = None) -> int:
        """
        Count posts matching the same filters as `get_all`.

        Args:
            username: Optional author username filter
            tag: Optional tag filter

        Returns:
            int: Number of matching posts
        """
        query = apply_filters(
            select(func.count()).select_from(PostDB),
            username=username,
            tag=tag,
        )

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to count posts: {e}") from e
        count = result.scalar()
        return count if count is not None else 0

    async def update(self, post_id: UUID, post_update: PostUpdate) -> PostDB | None:
        """
        Apply a partial update to a post.

        Args:
            post_id: Post UUID
            post_update: Fields to change (body already sanitized)

        Returns:
            PostDB | None: Updated post if found, None otherwise
        """
        db_post = await self.get_by_id(post_id)
        if not db_post:
            return None

        update_data = post_update.model_dump(exclude_unset=True, exclude_none=True)
        update_data["updated_at"] = datetime.now(tz=UTC)

        for key, value in update_data.items():
            setattr(db_post, key, value)

        try:
            await self.session.flush()
            await self.session.refresh(db_post)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to update post: {e}") from e

        return db_post

    async def delete(self, post_id: UUID) -> bool:
        """
        Delete post by ID.

        Args:
            post_id: Post UUID

        Returns:
            bool: True if a post was deleted, False if none matched
        """
        try:
            result = await self.session.execute(
                # pyrefly: ignore [bad-argument-type]
                delete(PostDB).where(PostDB.id == post_id),
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to delete post: {e}") from e

        return bool(result.rowcount)
