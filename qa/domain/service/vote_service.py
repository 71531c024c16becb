"""Vote domain service."""

from datetime import datetime
from typing import Sequence
from uuid import UUID, uuid4

import logfire

from qa.config import VotingSettings
from qa.domain.error import (
    ForbiddenSelfVoteError,
    NotFoundError,
    UnauthorizedError,
)
from qa.domain.model import Answer, Question, Vote
from qa.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UnitOfWork,
    VoteRepository,
)
from qa.domain.value import (
    AnswerId,
    QuestionId,
    TargetType,
    UserId,
    VoteId,
    VoteTransition,
    VoteType,
)

from .base import Service
from .counter_service import CounterService
from .reputation_service import ReputationService
from .vote_transition import resolve_transition


class VoteService(Service):
    """Domain service for vote operations.

    A vote request moves the (voter, target) pair through the transition
    table. The ledger write, the counter delta and the reputation delta
    happen in one unit of work, under the target's lock.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        counter_service: CounterService,
        reputation_service: ReputationService,
        unit_of_work: UnitOfWork,
        settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository (the ledger)
            question_repository: Question repository
            answer_repository: Answer repository
            counter_service: Counter domain service
            reputation_service: Reputation domain service
            unit_of_work: Atomic scope for the vote
            settings: Voting policy
        """
        self.vote_repository = vote_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.counter_service = counter_service
        self.reputation_service = reputation_service
        self.unit_of_work = unit_of_work
        self.settings = settings

    async def apply_vote(
        self,
        voter_id: UserId | None,
        target_type: TargetType,
        target_id: UUID,
        vote_type: VoteType | str,
    ) -> VoteTransition:
        """Apply a vote request to a question or answer.

        Args:
            voter_id: Authenticated voter (None if not signed in)
            target_type: Type of target
            target_id: Target ID
            vote_type: Requested vote type

        Returns:
            The committed transition (previous state, new state, delta)

        Raises:
            UnauthorizedError: If there is no voter
            InvalidVoteTypeError: If vote_type is not upvote or downvote
            NotFoundError: If the target doesn't exist or is deleted
            ForbiddenSelfVoteError: If self-voting is disabled and the voter
                is the target's author
            ConflictingWriteError: If a concurrent write collided with this one
        """
        if voter_id is None:
            raise UnauthorizedError("vote")
        requested = VoteType.parse(vote_type)

        with logfire.span(
            "vote_service.apply_vote",
            voter_id=str(voter_id),
            target_type=target_type.value,
            target_id=str(target_id),
            vote_type=requested.value,
        ):
            async with self.unit_of_work.atomic():
                await self.unit_of_work.lock_target(target_type, target_id)

                target = await self._find_target(target_type, target_id)
                if target is None:
                    logfire.warn(
                        "Vote on non-existent target",
                        target_type=target_type.value,
                        target_id=str(target_id),
                    )
                    raise NotFoundError(target_type.value.capitalize(), str(target_id))

                if target.author_id == voter_id and not self.settings.allow_self_vote:
                    logfire.warn(
                        "Self-vote rejected",
                        voter_id=str(voter_id),
                        target_id=str(target_id),
                    )
                    raise ForbiddenSelfVoteError(target_type.value, str(target_id))

                existing = await self.vote_repository.find_by_voter_and_target(
                    voter_id, target_type, target_id
                )
                transition = resolve_transition(
                    existing.vote_type if existing else None, requested
                )

                await self._write_ledger(
                    existing, voter_id, target_type, target_id, transition
                )
                await self.counter_service.apply_delta(
                    target_type, target_id, transition.delta
                )
                await self.reputation_service.apply_transition(
                    target.author_id, target_type, transition
                )

            logfire.info(
                transition.message,
                voter_id=str(voter_id),
                target_id=str(target_id),
                previous=transition.previous.value if transition.previous else None,
                current=transition.current.value if transition.current else None,
            )
            return transition

    async def _write_ledger(
        self,
        existing: Vote | None,
        voter_id: UserId,
        target_type: TargetType,
        target_id: UUID,
        transition: VoteTransition,
    ) -> None:
        if existing is None:
            now = datetime.now()
            # IntegrityError on a duplicate is translated by the unit of work
            await self.vote_repository.save(
                Vote(
                    id=VoteId(uuid4()),
                    voter_id=voter_id,
                    target_type=target_type,
                    target_id=target_id,
                    vote_type=transition.requested,
                    created_at=now,
                    updated_at=now,
                )
            )
        elif transition.current is None:
            await self.vote_repository.delete(existing.id)
        else:
            await self.vote_repository.update_vote_type(
                existing.id, transition.current
            )

    async def _find_target(
        self, target_type: TargetType, target_id: UUID
    ) -> Question | Answer | None:
        if target_type == TargetType.QUESTION:
            return await self.question_repository.find_by_id(QuestionId(target_id))
        return await self.answer_repository.find_by_id(AnswerId(target_id))

    async def get_vote_status(
        self, voter_id: UserId | None, target_type: TargetType, target_id: UUID
    ) -> VoteType | None:
        """Get the voter's current vote on a target.

        Returns:
            The vote type, or None if the voter hasn't voted (or is anonymous)
        """
        if voter_id is None:
            return None

        vote = await self.vote_repository.find_by_voter_and_target(
            voter_id, target_type, target_id
        )
        return vote.vote_type if vote else None

    async def get_vote_statuses(
        self,
        voter_id: UserId | None,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> dict[UUID, VoteType]:
        """Get the voter's votes on several targets in one query.

        Args:
            voter_id: Voter (None for anonymous, which yields no statuses)
            target_type: Type of the targets
            target_ids: Targets to check

        Returns:
            Mapping of target ID to vote type; targets without a vote are absent
        """
        if voter_id is None or not target_ids:
            return {}

        # Batch query to avoid N+1
        votes = await self.vote_repository.find_by_voter_and_targets(
            voter_id, target_type, list(target_ids)
        )
        return {vote.target_id: vote.vote_type for vote in votes}
