"""
Create the posts table.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# Revision identifiers, used by Alembic
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Apply schema changes for this revision."""
    op.create_table(
        "posts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("tags", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("published_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_posts_user_id", "posts", ["user_id"], unique=False)
    op.create_index("ix_posts_username", "posts", ["username"], unique=False)
    op.create_index("ix_posts_published_date", "posts", ["published_date"], unique=False)
    op.create_index(
        "ix_posts_username_published",
        "posts",
        ["username", "published_date"],
        unique=False,
    )
    op.create_index("ix_posts_tags_gin", "posts", ["tags"], unique=False, postgresql_using="gin")


def downgrade() -> None:
    """Revert schema changes for this revision."""
    op.drop_index("ix_posts_tags_gin", table_name="posts", postgresql_using="gin")
    op.drop_index("ix_posts_username_published", table_name="posts")
    op.drop_index("ix_posts_published_date", table_name="posts")
    op.drop_index("ix_posts_username", table_name="posts")
    op.drop_index("ix_posts_user_id", table_name="posts")
    op.drop_table("posts")
