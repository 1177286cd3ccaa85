"""User entity.

Accounts are created by the identity service; the engagement engine only
reads them to resolve mentions and check existence.
"""

from datetime import datetime

from pydantic import Field

from pinboard.domain.model.common import DomainModel
from pinboard.domain.value import Handle, UserId


class User(DomainModel):
    """User account as seen by the engagement engine."""

    id: UserId
    handle: Handle
    name: str = Field(default="", max_length=100)
    is_admin: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
