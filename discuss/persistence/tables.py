"""SQLAlchemy table definitions for Discuss.

These match the schema defined in the Alembic migrations. Vote membership
and reply order are stored as join tables so that every set change is a
single-row insert or delete.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Identity,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(30), nullable=False, unique=True),
    Column("avatar_url", Text, nullable=True),
    Column("email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_username", users_table.c.username, unique=True)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("content", String(1000), nullable=False),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_created_at", comments_table.c.created_at.desc())
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# COMMENT_VOTES TABLE (like/dislike membership)
# ============================================================================
comment_votes_table = Table(
    "comment_votes",
    metadata,
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "kind",
        Enum("like", "dislike", name="vote_kind", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("comment_id", "user_id", "kind", name="pk_comment_votes"),
)

Index(
    "idx_comment_votes_comment_kind",
    comment_votes_table.c.comment_id,
    comment_votes_table.c.kind,
)

# ============================================================================
# COMMENT_REPLIES TABLE (ordered parent -> reply edges)
# ============================================================================
comment_replies_table = Table(
    "comment_replies",
    metadata,
    Column(
        "parent_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "reply_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("seq", BigInteger, Identity(always=True), nullable=False),
    PrimaryKeyConstraint("parent_id", "reply_id", name="pk_comment_replies"),
)

Index(
    "idx_comment_replies_parent_seq",
    comment_replies_table.c.parent_id,
    comment_replies_table.c.seq,
)
