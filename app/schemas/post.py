"""
Post schemas.

Request bodies for creating and updating posts plus the response shapes.
Validation failures on these models are reported as 400 Bad Request.
"""

from datetime import datetime
from typing import Annotated, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from app.configs.settings import MAX_TITLE_LENGTH

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
Title = Annotated[str, StringConstraints(min_length=1, max_length=MAX_TITLE_LENGTH)]


class PostCreate(BaseModel):
    """Post creation model (request body)."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Hello, world",
                "body": "<p>My <b>first</b> post</p>",
                "tags": ["intro", "hello"],
            },
        },
    )

    title: Title = Field(..., description="Post title")
    body: NonEmptyStr = Field(..., description="Post body (HTML, sanitized on write)")
    tags: list[NonEmptyStr] = Field(..., description="Post tags (may be empty)")


class PostUpdate(BaseModel):
    """Post update model (all fields optional, only supplied fields change)."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Hello again",
                "tags": ["intro"],
            },
        },
    )

    title: Title | None = None
    body: NonEmptyStr | None = None
    tags: list[NonEmptyStr] | None = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> Self:
        """Supplied fields must carry a value; leave a field out to keep it."""
        nulls = [name for name in self.model_fields_set if getattr(self, name) is None]
        if nulls:
            mssg = f"Fields may be omitted but not null: {', '.join(sorted(nulls))}"
            raise ValueError(mssg)
        return self


class PostUser(BaseModel):
    """Author information embedded in post responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str


class PostResponse(BaseModel):
    """Post response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    body: str
    tags: list[str]
    published_date: datetime = Field(alias="publishedDate")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    user: PostUser
