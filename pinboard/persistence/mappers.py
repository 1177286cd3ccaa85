"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pinboard.domain.model import (
    DirectMessage,
    Follow,
    Notification,
    Response,
    Thread,
    User,
    Vote,
)
from pinboard.domain.value import (
    DirectMessageId,
    FollowId,
    Handle,
    NotificationEntityType,
    NotificationId,
    NotificationType,
    ResponseId,
    ThreadId,
    UserId,
    VotableType,
    VoteId,
    VoteValue,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        name=row.get("name") or "",
        is_admin=row.get("is_admin", False),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "handle": user.handle.root,
        "name": user.name,
        "is_admin": user.is_admin,
        "created_at": user.created_at,
    }


def row_to_thread(row: Dict[str, Any]) -> Thread:
    """Convert database row to Thread domain model."""
    return Thread(
        id=ThreadId(_uuid(row["id"])),
        board_slug=row["board_slug"],
        author_id=UserId(_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        title=row["title"],
        body=row["body"],
        created_at=row["created_at"],
    )


def thread_to_dict(thread: Thread) -> Dict[str, Any]:
    """Convert Thread domain model to database dict."""
    return {
        "id": thread.id,
        "board_slug": thread.board_slug,
        "author_id": thread.author_id,
        "author_handle": thread.author_handle.root,
        "title": thread.title,
        "body": thread.body,
        "created_at": thread.created_at,
    }


def row_to_response(row: Dict[str, Any]) -> Response:
    """Convert database row to Response domain model."""
    return Response(
        id=ResponseId(_uuid(row["id"])),
        thread_id=ThreadId(_uuid(row["thread_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        body=row["body"],
        created_at=row["created_at"],
    )


def response_to_dict(response: Response) -> Dict[str, Any]:
    """Convert Response domain model to database dict."""
    return {
        "id": response.id,
        "thread_id": response.thread_id,
        "author_id": response.author_id,
        "author_handle": response.author_handle.root,
        "body": response.body,
        "created_at": response.created_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "value": int(vote.value),
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    thread_id = _optional_uuid(row.get("thread_id"))
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        actor_id=UserId(_uuid(row["actor_id"])),
        type=NotificationType(row["type"]),
        entity_type=NotificationEntityType(row["entity_type"]),
        entity_id=_uuid(row["entity_id"]),
        thread_id=ThreadId(thread_id) if thread_id else None,
        message=row["message"],
        created_at=row["created_at"],
        read_at=row.get("read_at"),
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "actor_id": notification.actor_id,
        "type": notification.type.value,
        "entity_type": notification.entity_type.value,
        "entity_id": notification.entity_id,
        "thread_id": notification.thread_id,
        "message": notification.message,
        "created_at": notification.created_at,
        "read_at": notification.read_at,
    }


def row_to_direct_message(row: Dict[str, Any]) -> DirectMessage:
    """Convert database row to DirectMessage domain model."""
    shared_thread_id = _optional_uuid(row.get("shared_thread_id"))
    return DirectMessage(
        id=DirectMessageId(_uuid(row["id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        body=row.get("body"),
        shared_thread_id=ThreadId(shared_thread_id) if shared_thread_id else None,
        created_at=row["created_at"],
        read_at=row.get("read_at"),
    )


def direct_message_to_dict(message: DirectMessage) -> Dict[str, Any]:
    """Convert DirectMessage domain model to database dict."""
    return message.model_dump()


def row_to_follow(row: Dict[str, Any]) -> Follow:
    """Convert database row to Follow domain model."""
    return Follow(
        id=FollowId(_uuid(row["id"])),
        follower_id=UserId(_uuid(row["follower_id"])),
        following_id=UserId(_uuid(row["following_id"])),
        created_at=row["created_at"],
    )


def follow_to_dict(follow: Follow) -> Dict[str, Any]:
    """Convert Follow domain model to database dict."""
    return follow.model_dump()
