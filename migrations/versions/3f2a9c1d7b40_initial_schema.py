"""initial_schema

Create the schema for threaded community comments:
- Comments (one row per authored comment)
- Comment paths (closure table, one row per ancestor/descendant pair)
- Communities, community posts and memberships (read by the permission policy)
- Users (profile details shown next to comments)

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS TABLE
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("profile_pic", sa.Text(), nullable=True),
    )

    # ========================================================================
    # COMMUNITIES
    # ========================================================================
    op.create_table(
        "communities",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="active"),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("valid", sa.Boolean(), nullable=False, server_default="true"),
    )

    op.create_table(
        "community_posts",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column(
            "community_id",
            sa.BigInteger(),
            sa.ForeignKey("communities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("valid", sa.Boolean(), nullable=False, server_default="true"),
    )
    op.create_index(
        "idx_community_posts_community", "community_posts", ["community_id"]
    )

    op.create_table(
        "community_members",
        sa.Column(
            "community_id",
            sa.BigInteger(),
            sa.ForeignKey("communities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="active"),
        sa.Column("valid", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("community_id", "user_id", name="pk_community_members"),
    )

    # ========================================================================
    # COMMENTS
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("valid", sa.Boolean(), nullable=False, server_default="true"),
    )
    op.create_index(
        "idx_comments_post_created",
        "comments",
        ["post_id", sa.text("created_at DESC")],
    )
    op.create_index("idx_comments_author", "comments", ["author_id"])

    # ========================================================================
    # COMMENT PATHS (closure table)
    # ========================================================================
    op.create_table(
        "comment_paths",
        sa.Column(
            "ancestor_id",
            sa.BigInteger(),
            sa.ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "descendant_id",
            sa.BigInteger(),
            sa.ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("path_length", sa.Integer(), nullable=False),
        sa.Column("valid", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("ancestor_id", "descendant_id", name="pk_comment_paths"),
        sa.CheckConstraint("path_length >= 0", name="check_path_length_non_negative"),
    )
    # Root predicate and parent lookups filter on (descendant_id, path_length)
    op.create_index(
        "idx_comment_paths_descendant_length",
        "comment_paths",
        ["descendant_id", "path_length"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("comment_paths")
    op.drop_table("comments")
    op.drop_table("community_members")
    op.drop_table("community_posts")
    op.drop_table("communities")
    op.drop_table("users")
