"""Question aggregate root.

Questions are asked by community members and collect answers and votes.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from qa.domain.model.common import DomainModel
from qa.domain.value import QuestionId, UserId, VoteCounts


class Question(DomainModel):
    """Question aggregate root.

    Vote counters are denormalized from the vote ledger and are only
    changed through committed vote transitions.
    answer_count tracks the number of non-deleted answers.
    """

    id: QuestionId
    author_id: UserId
    title: str = Field(min_length=10, max_length=255)
    content: str = Field(min_length=20)
    upvote_count: int = Field(default=0, ge=0)
    downvote_count: int = Field(default=0, ge=0)
    answer_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def net_votes(self) -> int:
        return self.upvote_count - self.downvote_count

    @property
    def counts(self) -> VoteCounts:
        return VoteCounts(
            upvote_count=self.upvote_count, downvote_count=self.downvote_count
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
