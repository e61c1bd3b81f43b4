# app/routes/posts.py

"""
Post Routes.

CRUD endpoints for blog posts.

Summary
-------
Endpoints include:
  - Create post
  - List posts (paginated, filterable by username and tag)
  - Get post by id
  - Update post (partial)
  - Delete post

Dependencies
------------
  - `PostDep`: existence check; 400 for malformed ids, 404 for missing posts.
  - `OwnPostDep`: existence check + authentication + ownership check (403).

Sanitization
------------
Post bodies are reduced to an HTML allow-list before they are written, and
list responses carry a plain-text preview of at most 200 characters.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from app.configs import file_logger, settings
from app.dependencies import (
    CurrentUserDep,
    OwnPostDep,
    PostDep,
    PostListQueryDep,
    PostRepoDep,
)
from app.managers import limiter
from app.models import PostDB
from app.schemas import PostCreate, PostResponse, PostUpdate, PostUser
from app.utils import last_page, remove_html_and_shorten, sanitize_html

router = APIRouter(prefix="/api/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

LAST_PAGE_HEADER = "Last-Page"

POST_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "Hello, world",
    "body": "<p>My <b>first</b> post</p>",
    "tags": ["intro", "hello"],
    "publishedDate": "2026-01-01T10:00:00Z",
    "updatedAt": None,
    "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "username": "writer"},
}

BAD_REQUEST_EXAMPLE = {
    "description": "Bad request",
    "content": {"application/json": {"example": {"detail": "Validation failed", "errors": []}}},
}
NOT_FOUND_EXAMPLE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post with ID <uuid> not found"}}},
}
FORBIDDEN_EXAMPLE = {
    "description": "Forbidden",
    "content": {
        "application/json": {"example": {"detail": "You can only modify your own posts"}},
    },
}
RATE_LIMIT_EXAMPLE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


def db_post_to_response(db_post: PostDB, *, preview: bool = False) -> PostResponse:
    """
    Convert a `PostDB` instance to `PostResponse`.

    Parameters
    ----------
    db_post : PostDB
        Database post entity.
    preview : bool
        Replace the body with its plain-text preview (list responses).

    Returns
    -------
    PostResponse
        Validated response model.
    """
    body = db_post.body
    if preview:
        body = remove_html_and_shorten(body, settings.POST_PREVIEW_LENGTH)

    try:
        return PostResponse(
            id=db_post.id,
            title=db_post.title,
            body=body,
            tags=db_post.tags,
            published_date=db_post.published_date,
            updated_at=db_post.updated_at,
            user=PostUser(id=db_post.user_id, username=db_post.username),
        )
    except ValidationError as e:
        logger.exception("Validation error converting post to response model")
        mssg = f"Validation error converting post to response model: {e}"
        raise ValueError(mssg) from e


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Create a new post",
    description="Create a post. The body HTML is sanitized before it is stored.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: BAD_REQUEST_EXAMPLE,
        401: {"description": "Not authenticated"},
        429: RATE_LIMIT_EXAMPLE,
    },
    operation_id="posts_create",
)
@limiter.limit(settings.POSTS_WRITE_LIMIT)
async def create_post(
    request: Request,
    response: Response,
    post: Annotated[
        PostCreate,
        Body(
            examples=[
                {
                    "title": "Hello, world",
                    "body": "<p>My <b>first</b> post</p>",
                    "tags": ["intro", "hello"],
                },
            ],
        ),
    ],
    repo: PostRepoDep,
    current_user: CurrentUserDep,
) -> PostResponse:
    """
    Create a new post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post : PostCreate
        Post input payload.
    repo : PostRepository
        Repository dependency.
    current_user : CurrentUser
        Author of the post.

    Returns
    -------
    PostResponse
        The stored post.
    """
    clean_post = post.model_copy(update={"body": sanitize_html(post.body)})
    db_post = await repo.create(clean_post, current_user)
    return db_post_to_response(db_post)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[PostResponse],
    summary="List posts",
    description=(
        "List posts newest first, 10 per page, optionally filtered by username and tag. "
        "The `Last-Page` header carries the number of pages. Bodies are shortened "
        "plain-text previews."
    ),
    responses={
        200: {
            "headers": {LAST_PAGE_HEADER: {"description": "Total number of pages"}},
            "content": {"application/json": {"example": [POST_EXAMPLE]}},
        },
        400: BAD_REQUEST_EXAMPLE,
        429: RATE_LIMIT_EXAMPLE,
    },
    operation_id="posts_list",
)
@limiter.limit(settings.POSTS_READ_LIMIT)
async def list_posts(
    request: Request,
    response: Response,
    query: PostListQueryDep,
    repo: PostRepoDep,
) -> list[PostResponse]:
    """
    List posts.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response whose headers receive `Last-Page`.
    query : PostListQuery
        Page number and filters.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    list[PostResponse]
        One page of posts with previewed bodies.
    """
    posts = await repo.get_all(
        skip=query.skip,
        limit=query.page_size,
        username=query.username,
        tag=query.tag,
    )
    total = await repo.count(username=query.username, tag=query.tag)

    response.headers[LAST_PAGE_HEADER] = str(last_page(total, query.page_size))
    return [db_post_to_response(post, preview=True) for post in posts]


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by ID",
    description="Retrieve a single post by its UUID.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: {
            "description": "Malformed ID",
            "content": {"application/json": {"example": {"detail": "Invalid post ID: abc"}}},
        },
        404: NOT_FOUND_EXAMPLE,
        429: RATE_LIMIT_EXAMPLE,
    },
    operation_id="posts_get_by_id",
)
@limiter.limit(settings.POSTS_READ_LIMIT)
async def read_post(
    request: Request,
    response: Response,
    post: PostDep,
) -> PostResponse:
    """
    Get a post by ID.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post : PostDB
        Post loaded by the existence check.

    Returns
    -------
    PostResponse
        The post.
    """
    return db_post_to_response(post)


@router.patch(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update post",
    description="Change the supplied fields of a post you own.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: BAD_REQUEST_EXAMPLE,
        401: {"description": "Not authenticated"},
        403: FORBIDDEN_EXAMPLE,
        404: NOT_FOUND_EXAMPLE,
        429: RATE_LIMIT_EXAMPLE,
    },
    operation_id="posts_update",
)
@limiter.limit(settings.POSTS_WRITE_LIMIT)
async def update_post(
    request: Request,
    response: Response,
    post: OwnPostDep,
    post_update: Annotated[
        PostUpdate,
        Body(examples=[{"title": "Hello again", "tags": ["intro"]}]),
    ],
    repo: PostRepoDep,
) -> PostResponse:
    """
    Update a post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post : PostDB
        Post loaded by the existence check, owned by the caller.
    post_update : PostUpdate
        Partial update payload.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    PostResponse
        The post after the update.

    Raises
    ------
    HTTPException
        If the post disappeared before the update was applied.
    """
    if post_update.body is not None:
        post_update = post_update.model_copy(update={"body": sanitize_html(post_update.body)})

    db_post = await repo.update(post.id, post_update)
    if not db_post:
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Post with ID {post.id} not found",
        )
    return db_post_to_response(db_post)


@router.delete(
    "/{post_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete post",
    description="Delete a post you own.",
    responses={
        204: {"description": "No Content"},
        400: {"description": "Malformed ID"},
        401: {"description": "Not authenticated"},
        403: FORBIDDEN_EXAMPLE,
        404: NOT_FOUND_EXAMPLE,
        429: RATE_LIMIT_EXAMPLE,
    },
    operation_id="posts_delete",
)
@limiter.limit(settings.POSTS_WRITE_LIMIT)
async def delete_post(
    request: Request,
    response: Response,
    post: OwnPostDep,
    repo: PostRepoDep,
) -> None:
    """
    Delete a post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post : PostDB
        Post loaded by the existence check, owned by the caller.
    repo : PostRepository
        Repository dependency.
    """
    await repo.delete(post.id)
    logger.info(f"Post {post.id} deleted")
