"""Shared backing store for the in-memory repositories."""

from dataclasses import dataclass, field

from pinboard.domain.model import (
    DirectMessage,
    Follow,
    Notification,
    Response,
    Thread,
    User,
    Vote,
)


@dataclass
class InMemoryStore:
    """Rows for every in-memory repository.

    One store is shared by all repositories built from it, so writes made
    through one request are visible to the next, like a real database.
    """

    users: list[User] = field(default_factory=list)
    threads: list[Thread] = field(default_factory=list)
    responses: list[Response] = field(default_factory=list)
    votes: list[Vote] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    direct_messages: list[DirectMessage] = field(default_factory=list)
    follows: list[Follow] = field(default_factory=list)
