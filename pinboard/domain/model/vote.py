"""Vote entity.

Votes form the ledger that thread and response scores are computed from.
Each user holds at most one vote per item; voting again overwrites it.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from pinboard.domain.model.common import DomainModel
from pinboard.domain.value import UserId, VotableType, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Repeat votes overwrite the value (upsert), there is no un-vote
    - Polymorphic reference to votable (thread or response)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # ThreadId or ResponseId (both are UUIDs)
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
