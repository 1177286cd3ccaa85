"""Follow relationship."""

from datetime import datetime

from pydantic import Field, model_validator

from pinboard.domain.model.common import DomainModel
from pinboard.domain.value import FollowId, UserId


class Follow(DomainModel):
    """A follower subscribing to another user's threads."""

    id: FollowId
    follower_id: UserId
    following_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_not_self(self) -> "Follow":
        """Users cannot follow themselves."""
        if self.follower_id == self.following_id:
            raise ValueError("Users cannot follow themselves")
        return self
