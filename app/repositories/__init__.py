"""Repository layer for database operations."""

from app.repositories.post import PostRepository, apply_filters

__all__ = ["PostRepository", "apply_filters"]
