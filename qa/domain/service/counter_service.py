"""Vote counter domain service."""

from uuid import UUID

import logfire

from qa.domain.error import NotFoundError
from qa.domain.repository import AnswerRepository, QuestionRepository
from qa.domain.value import AnswerId, CountDelta, QuestionId, TargetType, VoteCounts

from .base import Service


class CounterService(Service):
    """Owns the denormalized upvote/downvote counters of questions and answers.

    Counters change only through apply_delta, which the vote service calls
    inside the same unit of work as the ledger write.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
    ) -> None:
        """Initialize counter service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository

    async def apply_delta(
        self, target_type: TargetType, target_id: UUID, delta: CountDelta
    ) -> None:
        """Atomically apply a counter delta to a target.

        Args:
            target_type: Type of target
            target_id: Target ID
            delta: Upvote/downvote changes
        """
        with logfire.span(
            "counter_service.apply_delta",
            target_type=target_type.value,
            target_id=str(target_id),
            upvote=delta.upvote,
            downvote=delta.downvote,
        ):
            if delta.is_zero:
                return
            if target_type == TargetType.QUESTION:
                await self.question_repository.apply_vote_delta(
                    QuestionId(target_id), delta
                )
            else:
                await self.answer_repository.apply_vote_delta(
                    AnswerId(target_id), delta
                )
            logfire.info(
                "Vote counters updated",
                target_type=target_type.value,
                target_id=str(target_id),
            )

    async def get_counts(self, target_type: TargetType, target_id: UUID) -> VoteCounts:
        """Get the current counters of a target.

        Raises:
            NotFoundError: If the target doesn't exist or is deleted
        """
        if target_type == TargetType.QUESTION:
            target = await self.question_repository.find_by_id(QuestionId(target_id))
        else:
            target = await self.answer_repository.find_by_id(AnswerId(target_id))

        if target is None:
            raise NotFoundError(target_type.value.capitalize(), str(target_id))
        return target.counts
