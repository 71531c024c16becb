"""Vote entity.

The vote ledger holds at most one vote per user per target (question or
answer). A vote is created on the first vote, switched in place, and
deleted when retracted.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from qa.domain.model.common import DomainModel
from qa.domain.value import TargetType, UserId, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per voter per target (enforced by database unique constraint)
    - Polymorphic reference to the target (question or answer)
    """

    id: VoteId
    voter_id: UserId
    target_type: TargetType
    target_id: UUID  # QuestionId or AnswerId (both are UUIDs)
    vote_type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
