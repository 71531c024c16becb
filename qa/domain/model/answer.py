"""Answer entity.

Answers belong to a question and can be voted on and accepted by the
question's author.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from qa.domain.model.common import DomainModel
from qa.domain.value import AnswerId, QuestionId, UserId, VoteCounts


class Answer(DomainModel):
    """Answer entity.

    Business rules:
    - Vote counters never go below zero
    - At most one accepted answer per question (enforced by AnswerService)
    """

    id: AnswerId
    question_id: QuestionId
    author_id: UserId
    content: str = Field(min_length=2)
    upvote_count: int = Field(default=0, ge=0)
    downvote_count: int = Field(default=0, ge=0)
    is_accepted: bool = False
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
