"""Mention extraction and resolution."""

import re

import logfire

from pinboard.config import MentionSettings
from pinboard.domain.repository import UserRepository
from pinboard.domain.value import Mention, UserId

from .base import Service

# An @ not preceded by a word character (so e-mail addresses are skipped),
# followed by a maximal run of handle characters. Length is checked after
# matching so over-long runs are rejected rather than truncated.
MENTION_PATTERN = re.compile(r"(?<![A-Za-z0-9_@])@([A-Za-z0-9_]+)")


class MentionService(Service):
    """Finds @handle mentions in text and resolves them to users."""

    def __init__(
        self, user_repository: UserRepository, mention_settings: MentionSettings
    ) -> None:
        """Initialize mention service.

        Args:
            user_repository: User repository
            mention_settings: Mention grammar settings
        """
        self.user_repository = user_repository
        self.settings = mention_settings
        self._legacy_handles = {h.lower() for h in mention_settings.legacy_handles}

    def _is_valid_handle(self, handle: str) -> bool:
        if len(handle) > self.settings.max_length:
            return False
        if len(handle) >= self.settings.min_length:
            return True
        return (
            handle in self._legacy_handles
            and len(handle) >= self.settings.legacy_min_length
        )

    def extract_handles(self, text: str | None) -> set[str]:
        """Extract the distinct, lowercased handles mentioned in text.

        Args:
            text: Free text (title or body)

        Returns:
            Set of handles; duplicates collapse to one entry
        """
        if not text:
            return set()

        handles = set()
        for match in MENTION_PATTERN.finditer(text):
            handle = match.group(1).lower()
            if self._is_valid_handle(handle):
                handles.add(handle)
        return handles

    async def resolve(self, *texts: str | None) -> list[Mention]:
        """Resolve the mentions in one or more texts to existing users.

        All handles are looked up in a single batch query; handles that do
        not belong to anyone are dropped.

        Args:
            texts: Texts to scan (e.g. a thread title and body)

        Returns:
            One Mention per mentioned user
        """
        handles: set[str] = set()
        for text in texts:
            handles |= self.extract_handles(text)

        if not handles:
            return []

        with logfire.span("mention_service.resolve", handle_count=len(handles)):
            users = await self.user_repository.find_by_handles(sorted(handles))
            logfire.info(
                "Mentions resolved",
                requested=len(handles),
                resolved=len(users),
            )
            return [Mention(handle=user.handle.root, user_id=user.id) for user in users]

    async def resolve_mentions(self, *texts: str | None) -> set[UserId]:
        """Resolve mentioned handles to the set of user IDs."""
        return {UserId(mention.user_id) for mention in await self.resolve(*texts)}
