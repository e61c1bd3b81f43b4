"""Post database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import MAX_TITLE_LENGTH, MAX_USERNAME_LENGTH

# JSONB on PostgreSQL (GIN-indexable containment), plain JSON elsewhere
TagsType = JSON().with_variant(JSONB(), "postgresql")


class PostDB(SQLModel, table=True):
    """
    Post database model.

    The author is stored as an id plus a username snapshot taken from the
    access token at creation time, so listing by username needs no join.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (
        Index("ix_posts_tags_gin", "tags", postgresql_using="gin"),
        Index("ix_posts_username_published", "username", "published_date"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )

    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Post title",
    )
    body: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Sanitized HTML body",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(TagsType, nullable=False),
        description="Post tags",
    )

    # Author
    user_id: UUID = Field(
        nullable=False,
        index=True,
        description="Author ID (from the access token)",
    )
    username: str = Field(
        sa_column=Column(String(MAX_USERNAME_LENGTH), nullable=False, index=True),
        description="Author username at creation time",
    )

    # Timestamps (timezone-aware)
    published_date: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Hello, world",
                "body": "<p>My <b>first</b> post</p>",
                "tags": ["intro", "hello"],
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "writer",
            },
        },
    )
