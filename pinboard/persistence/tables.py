"""SQLAlchemy table definitions for Pinboard.

Core tables used by the repositories. They match the schema created by the
Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (read-mostly; owned by the identity service)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("handle", String(20), nullable=False),  # Stored lowercase
    Column("name", String(100), nullable=False, server_default=""),
    Column("is_admin", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_handle", users_table.c.handle, unique=True)

# ============================================================================
# THREADS TABLE
# ============================================================================
threads_table = Table(
    "threads",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("board_slug", String(50), nullable=False, server_default="general"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_handle", String(20), nullable=False),  # Denormalized from users
    Column("title", String(300), nullable=False),
    Column("body", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_threads_created_at", threads_table.c.created_at.desc())
Index("idx_threads_author_id", threads_table.c.author_id)

# ============================================================================
# RESPONSES TABLE
# ============================================================================
responses_table = Table(
    "responses",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "thread_id", UUID, ForeignKey("threads.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_handle", String(20), nullable=False),  # Denormalized from users
    Column("body", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_responses_thread_id", responses_table.c.thread_id)
Index("idx_responses_created_at", responses_table.c.created_at)

# ============================================================================
# VOTES TABLE (the ledger scores are summed from)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "votable_type",
        Enum("thread", "response", name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("value IN (-1, 1)", name="vote_value_valid"),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "recipient_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "actor_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "type",
        Enum(
            "reply",
            "mention",
            "follow",
            "direct_message",
            name="notification_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column(
        "entity_type",
        Enum(
            "thread",
            "response",
            "user",
            "message",
            name="notification_entity_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("entity_id", UUID, nullable=False),
    Column(
        "thread_id", UUID, ForeignKey("threads.id", ondelete="CASCADE"), nullable=True
    ),
    Column("message", String(500), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("recipient_id <> actor_id", name="notification_not_self"),
)

Index(
    "idx_notifications_recipient_created",
    notifications_table.c.recipient_id,
    notifications_table.c.created_at.desc(),
)
Index(
    "idx_notifications_recipient_unread",
    notifications_table.c.recipient_id,
    postgresql_where=notifications_table.c.read_at.is_(None),
)

# ============================================================================
# DIRECT MESSAGES TABLE
# ============================================================================
direct_messages_table = Table(
    "direct_messages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "sender_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "recipient_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("body", String(2000), nullable=True),
    Column(
        "shared_thread_id",
        UUID,
        ForeignKey("threads.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "body IS NOT NULL OR shared_thread_id IS NOT NULL",
        name="message_has_content",
    ),
    CheckConstraint("sender_id <> recipient_id", name="message_not_self"),
)

Index(
    "idx_direct_messages_pair",
    direct_messages_table.c.sender_id,
    direct_messages_table.c.recipient_id,
    direct_messages_table.c.created_at,
)
Index(
    "idx_direct_messages_recipient_unread",
    direct_messages_table.c.recipient_id,
    postgresql_where=direct_messages_table.c.read_at.is_(None),
)

# ============================================================================
# FOLLOWS TABLE
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "follower_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "following_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("follower_id", "following_id", name="unique_follow"),
    CheckConstraint("follower_id <> following_id", name="follow_not_self"),
)

Index("idx_follows_following_id", follows_table.c.following_id)
