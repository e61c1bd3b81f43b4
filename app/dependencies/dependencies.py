# app/dependencies/dependencies.py

"""
Request-scoped dependencies for the posts API.

The `/api/posts/{post_id}` routes are guarded by a chain of dependencies:
`get_post_by_id` (existence check) runs first, then `get_current_user`
(authentication) and `check_own_post` (ownership) for write operations.
A failing link short-circuits the chain, so the handler never runs.
"""

from dataclasses import dataclass
from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)

from app.configs import file_logger, settings
from app.db import get_session
from app.managers.token_manager import decode_access_token
from app.models import PostDB
from app.repositories import PostRepository
from app.schemas.auth import CurrentUser

logger = file_logger(getLogger(__name__))

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=settings.TOKEN_URL)


def get_post_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostRepository:
    """
    Resolve the `PostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostRepository
        Repository instance bound to the session.
    """
    return PostRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
) -> CurrentUser:
    """
    Get the authenticated user from the Bearer token claims.

    Parameters
    ----------
    token : str
        Bearer token.

    Returns
    -------
    CurrentUser
        Id and username of the caller.

    Raises
    ------
    HTTPException
        401 if the token is missing, invalid or expired.
    """
    token_data = decode_access_token(token)
    if not token_data:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentUser(id=token_data.user_id, username=token_data.username)


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


async def get_post_by_id(post_id: str, repo: PostRepoDep) -> PostDB:
    """
    Load the post named in the path or stop the request.

    Parameters
    ----------
    post_id : str
        Raw path parameter.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    PostDB
        The loaded post, handed to the route handler.

    Raises
    ------
    HTTPException
        400 for a malformed identifier (the repository is not queried),
        404 if no post has this identifier.
    """
    try:
        post_uuid = UUID(post_id)
    except ValueError as e:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail=f"Invalid post ID: {post_id}",
        ) from e

    post = await repo.get_by_id(post_uuid)
    if not post:
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Post with ID {post_id} not found",
        )
    return post


PostDep = Annotated[PostDB, Depends(get_post_by_id)]


async def check_own_post(post: PostDep, current_user: CurrentUserDep) -> PostDB:
    """
    Allow the request through only when the caller wrote the post.

    Raises
    ------
    HTTPException
        403 if the post belongs to another user.
    """
    if post.user_id != current_user.id:
        logger.warning(f"User {current_user.username} denied access to post {post.id}")
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="You can only modify your own posts",
        )
    return post


OwnPostDep = Annotated[PostDB, Depends(check_own_post)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listing and filters.

    Parameters
    ----------
    page : int
        1-based page number.
    username : str | None
        Optional author username filter.
    tag : str | None
        Optional tag filter.
    page_size : int
        Posts per page.
    """

    page: int = 1
    username: str | None = None
    tag: str | None = None
    page_size: int = 10

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


def get_post_list_query(
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
    username: Annotated[str | None, Query(description="Only posts by this username")] = None,
    tag: Annotated[str | None, Query(description="Only posts carrying this tag")] = None,
) -> PostListQuery:
    """
    Dependency to construct `PostListQuery` from query parameters.

    Returns
    -------
    PostListQuery
        Aggregated query parameters object.
    """
    return PostListQuery(
        page=page,
        username=username,
        tag=tag,
        page_size=settings.POSTS_PAGE_SIZE,
    )


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]
