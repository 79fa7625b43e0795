"""SQLAlchemy table definitions for the comment engine.

Repositories build Core statements against these tables. They match the
schema created by the Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("post_id", BigInteger, nullable=False),
    Column("author_id", BigInteger, nullable=False),
    Column("text", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("valid", Boolean, nullable=False, server_default="true"),
)

Index(
    "idx_comments_post_created",
    comments_table.c.post_id,
    comments_table.c.created_at.desc(),
)
Index("idx_comments_author", comments_table.c.author_id)

# ============================================================================
# COMMENT PATHS TABLE (closure table)
# ============================================================================
# One row per (ancestor, descendant) pair; path_length 0 is the self-path,
# 1 is the direct parent.
comment_paths_table = Table(
    "comment_paths",
    metadata,
    Column(
        "ancestor_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "descendant_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("path_length", Integer, nullable=False),
    Column("valid", Boolean, nullable=False, server_default="true"),
    PrimaryKeyConstraint("ancestor_id", "descendant_id", name="pk_comment_paths"),
    CheckConstraint("path_length >= 0", name="check_path_length_non_negative"),
)

Index(
    "idx_comment_paths_descendant_length",
    comment_paths_table.c.descendant_id,
    comment_paths_table.c.path_length,
)

# ============================================================================
# COMMUNITY TABLES (read-only for the comment engine)
# ============================================================================
communities_table = Table(
    "communities",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("status", String(50), nullable=False, server_default="active"),
    Column("is_private", Boolean, nullable=False, server_default="false"),
    Column("valid", Boolean, nullable=False, server_default="true"),
)

community_posts_table = Table(
    "community_posts",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "community_id",
        BigInteger,
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("author_id", BigInteger, nullable=False),
    Column("valid", Boolean, nullable=False, server_default="true"),
)

Index("idx_community_posts_community", community_posts_table.c.community_id)

community_members_table = Table(
    "community_members",
    metadata,
    Column(
        "community_id",
        BigInteger,
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", BigInteger, nullable=False),
    Column("status", String(50), nullable=False, server_default="active"),
    Column("valid", Boolean, nullable=False, server_default="true"),
    PrimaryKeyConstraint("community_id", "user_id", name="pk_community_members"),
)

# ============================================================================
# USERS TABLE (read-only, profile details only)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("profile_pic", Text, nullable=True),
)
