# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    CurrentUserDep,
    OwnPostDep,
    PostDep,
    PostListQuery,
    PostListQueryDep,
    PostRepoDep,
    check_own_post,
    get_current_user,
    get_post_by_id,
    get_post_list_query,
    get_post_repository,
)

__all__ = [
    "CurrentUserDep",
    "OwnPostDep",
    "PostDep",
    "PostListQuery",
    "PostListQueryDep",
    "PostRepoDep",
    "check_own_post",
    "get_current_user",
    "get_post_by_id",
    "get_post_list_query",
    "get_post_repository",
]
