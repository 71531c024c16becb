"""Reputation domain service."""

from uuid import UUID

import logfire

from qa.config import ReputationSettings
from qa.domain.error import NotFoundError
from qa.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from qa.domain.value import (
    CountDelta,
    TargetType,
    UserId,
    VoteCounts,
    VoteTransition,
)

from .base import Service


class ReputationService(Service):
    """Derives user reputation from the votes their content receives.

    Reputation is kept two ways that must always agree:
    - eagerly, by adding the marginal delta of every vote transition,
      acceptance change and deletion to the user's cached value
    - lazily, by recomputing from the vote ledger over the user's
      non-deleted questions and answers
    """

    def __init__(
        self,
        user_repository: UserRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        vote_repository: VoteRepository,
        settings: ReputationSettings,
    ) -> None:
        """Initialize reputation service.

        Args:
            user_repository: User repository
            question_repository: Question repository
            answer_repository: Answer repository
            vote_repository: Vote repository (the ledger)
            settings: Reputation weights
        """
        self.user_repository = user_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.vote_repository = vote_repository
        self.settings = settings

    def delta_for(self, target_type: TargetType, delta: CountDelta) -> int:
        """Reputation change caused by a counter delta on a target."""
        if target_type == TargetType.ANSWER:
            up, down = self.settings.answer_upvote, self.settings.answer_downvote
        else:
            up, down = self.settings.question_upvote, self.settings.question_downvote
        return up * delta.upvote + down * delta.downvote

    def contribution(
        self, target_type: TargetType, counts: VoteCounts, accepted: bool = False
    ) -> int:
        """Total reputation a single target contributes to its author."""
        score = 0
        if target_type == TargetType.ANSWER:
            score += self.settings.answer_upvote * counts.upvote_count
            score += self.settings.answer_downvote * counts.downvote_count
            if accepted:
                score += self.settings.accepted_answer
        else:
            score += self.settings.question_upvote * counts.upvote_count
            score += self.settings.question_downvote * counts.downvote_count
        return score

    async def apply_transition(
        self, author_id: UserId, target_type: TargetType, transition: VoteTransition
    ) -> int:
        """Apply the marginal reputation delta of a vote transition.

        Args:
            author_id: Author of the voted-on target
            target_type: Type of the voted-on target
            transition: The committed vote transition

        Returns:
            The reputation delta applied
        """
        delta = self.delta_for(target_type, transition.delta)
        if delta:
            await self.user_repository.adjust_stats(author_id, reputation=delta)
            logfire.info(
                "Reputation adjusted",
                user_id=str(author_id),
                delta=delta,
                target_type=target_type.value,
            )
        return delta

    async def apply_acceptance(self, author_id: UserId, accepted: bool) -> int:
        """Apply the accepted-answer bonus (or take it back)."""
        delta = self.settings.accepted_answer if accepted else -self.settings.accepted_answer
        if delta:
            await self.user_repository.adjust_stats(author_id, reputation=delta)
            logfire.info(
                "Acceptance bonus adjusted", user_id=str(author_id), delta=delta
            )
        return delta

    async def retract_target(
        self,
        author_id: UserId,
        target_type: TargetType,
        target_id: UUID,
        accepted: bool = False,
    ) -> int:
        """Remove everything a target contributed, before it is soft-deleted.

        Returns:
            The reputation delta applied
        """
        tallies = await self.vote_repository.tally_by_targets(target_type, [target_id])
        counts = tallies.get(target_id, VoteCounts())
        delta = -self.contribution(target_type, counts, accepted=accepted)
        if delta:
            await self.user_repository.adjust_stats(author_id, reputation=delta)
            logfire.info(
                "Reputation retracted for deleted content",
                user_id=str(author_id),
                target_type=target_type.value,
                target_id=str(target_id),
                delta=delta,
            )
        return delta

    async def recompute(self, user_id: UserId) -> int:
        """Recompute a user's reputation from the ledger.

        Args:
            user_id: User ID

        Returns:
            Reputation derived from votes on the user's non-deleted content
        """
        with logfire.span("reputation_service.recompute", user_id=str(user_id)):
            questions = await self.question_repository.find_by_author(user_id)
            answers = await self.answer_repository.find_by_author(user_id)

            question_tallies = await self.vote_repository.tally_by_targets(
                TargetType.QUESTION, [q.id for q in questions]
            )
            answer_tallies = await self.vote_repository.tally_by_targets(
                TargetType.ANSWER, [a.id for a in answers]
            )

            reputation = sum(
                self.contribution(
                    TargetType.QUESTION, question_tallies.get(q.id, VoteCounts())
                )
                for q in questions
            )
            reputation += sum(
                self.contribution(
                    TargetType.ANSWER,
                    answer_tallies.get(a.id, VoteCounts()),
                    accepted=a.is_accepted,
                )
                for a in answers
            )

            logfire.info(
                "Reputation recomputed", user_id=str(user_id), reputation=reputation
            )
            return reputation

    async def get_cached(self, user_id: UserId) -> int:
        """Get the eagerly maintained reputation.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user.reputation

    async def verify(self, user_id: UserId) -> bool:
        """Check that the cached reputation matches the ledger."""
        cached = await self.get_cached(user_id)
        recomputed = await self.recompute(user_id)
        if cached != recomputed:
            logfire.warn(
                "Cached reputation drifted from ledger",
                user_id=str(user_id),
                cached=cached,
                recomputed=recomputed,
            )
        return cached == recomputed

    async def rebuild(self, user_id: UserId) -> int:
        """Overwrite the cached reputation with the ledger recomputation."""
        with logfire.span("reputation_service.rebuild", user_id=str(user_id)):
            await self.get_cached(user_id)
            reputation = await self.recompute(user_id)
            await self.user_repository.set_reputation(user_id, reputation)
            return reputation
