"""initial_schema

Create the Pinboard engagement schema:
- Users (mirrored from the identity service)
- Threads and Responses
- Votes (ledger of +1/-1 per user per item)
- Notifications (reply, mention, follow, direct_message)
- Direct messages
- Follows

Revision ID: 3f2c9d41a7e0
Revises:
Create Date: 2025-11-02 10:14:52.381204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9d41a7e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "votable_type": ("thread", "response"),
    "notification_type": ("reply", "mention", "follow", "direct_message"),
    "notification_entity_type": ("thread", "response", "user", "message"),
}


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    if nullable:
        return sa.Column(name, sa.TIMESTAMP(timezone=True), nullable=True)
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("handle", sa.String(20), nullable=False),  # Stored lowercase
        sa.Column("name", sa.String(100), nullable=False, server_default=""),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_handle", "users", ["handle"], unique=True)

    # ========================================================================
    # THREADS table
    # ========================================================================
    op.create_table(
        "threads",
        _id(),
        sa.Column("board_slug", sa.String(50), nullable=False, server_default="general"),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_handle", sa.String(20), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_threads_created_at", "threads", [sa.text("created_at DESC")]
    )
    op.create_index("idx_threads_author_id", "threads", ["author_id"])

    # ========================================================================
    # RESPONSES table
    # ========================================================================
    op.create_table(
        "responses",
        _id(),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_handle", sa.String(20), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["thread_id"], ["threads.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_responses_thread_id", "responses", ["thread_id"])
    op.create_index("idx_responses_created_at", "responses", ["created_at"])

    # ========================================================================
    # VOTES table (scores are summed from this ledger on read)
    # ========================================================================
    op.create_table(
        "votes",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("votable_type", _enum("votable_type"), nullable=False),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("value IN (-1, 1)", name="vote_value_valid"),
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _id(),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("actor_id", sa.UUID(), nullable=False),
        sa.Column("type", _enum("notification_type"), nullable=False),
        sa.Column("entity_type", _enum("notification_entity_type"), nullable=False),
        sa.Column("entity_id", sa.UUID(), nullable=False),
        sa.Column("thread_id", sa.UUID(), nullable=True),
        sa.Column("message", sa.String(500), nullable=False),
        _timestamp("created_at"),
        _timestamp("read_at", nullable=True),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["actor_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["thread_id"], ["threads.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("recipient_id <> actor_id", name="notification_not_self"),
    )
    op.create_index(
        "idx_notifications_recipient_created",
        "notifications",
        ["recipient_id", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_notifications_recipient_unread",
        "notifications",
        ["recipient_id"],
        postgresql_where=sa.text("read_at IS NULL"),
    )

    # ========================================================================
    # DIRECT_MESSAGES table
    # ========================================================================
    op.create_table(
        "direct_messages",
        _id(),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("body", sa.String(2000), nullable=True),
        sa.Column("shared_thread_id", sa.UUID(), nullable=True),
        _timestamp("created_at"),
        _timestamp("read_at", nullable=True),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["shared_thread_id"], ["threads.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "body IS NOT NULL OR shared_thread_id IS NOT NULL",
            name="message_has_content",
        ),
        sa.CheckConstraint("sender_id <> recipient_id", name="message_not_self"),
    )
    op.create_index(
        "idx_direct_messages_pair",
        "direct_messages",
        ["sender_id", "recipient_id", "created_at"],
    )
    op.create_index(
        "idx_direct_messages_recipient_unread",
        "direct_messages",
        ["recipient_id"],
        postgresql_where=sa.text("read_at IS NULL"),
    )

    # ========================================================================
    # FOLLOWS table
    # ========================================================================
    op.create_table(
        "follows",
        _id(),
        sa.Column("follower_id", sa.UUID(), nullable=False),
        sa.Column("following_id", sa.UUID(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["follower_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["following_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "following_id", name="unique_follow"),
        sa.CheckConstraint("follower_id <> following_id", name="follow_not_self"),
    )
    op.create_index("idx_follows_following_id", "follows", ["following_id"])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "follows",
        "direct_messages",
        "notifications",
        "votes",
        "responses",
        "threads",
        "users",
    ):
        op.drop_table(table)

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
