"""In-memory vote repository for testing."""

from collections import defaultdict
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from qa.domain.error import NotFoundError
from qa.domain.model.vote import Vote
from qa.domain.repository.vote import VoteRepository
from qa.domain.value import TargetType, UserId, VoteCounts, VoteId, VoteType

from . import journal


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[VoteId, Vote] = {}

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        return self._votes.get(vote_id)

    async def find_by_voter_and_target(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by voter and target."""
        for vote in self._votes.values():
            if (
                vote.voter_id == voter_id
                and vote.target_type == target_type
                and vote.target_id == target_id
            ):
                return vote
        return None

    async def find_by_voter_and_targets(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a voter's votes on multiple targets (batch query)."""
        if not target_ids:
            return []

        wanted = set(target_ids)
        return [
            v
            for v in self._votes.values()
            if v.voter_id == voter_id
            and v.target_type == target_type
            and v.target_id in wanted
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the voter already voted on the target
        """
        existing = await self.find_by_voter_and_target(
            vote.voter_id, vote.target_type, vote.target_id
        )
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes[vote.id] = vote
        journal.record(lambda: self._votes.pop(vote.id, None))
        return vote

    async def update_vote_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Switch a vote in place."""
        vote = self._votes.get(vote_id)
        if vote is None:
            raise NotFoundError("Vote", str(vote_id))

        updated = vote.model_copy(
            update={"vote_type": vote_type, "updated_at": datetime.now()}
        )
        self._votes[vote_id] = updated
        journal.record(lambda: self._votes.__setitem__(vote_id, vote))
        return updated

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote by ID."""
        vote = self._votes.pop(vote_id, None)
        if vote is not None:
            journal.record(lambda: self._votes.__setitem__(vote_id, vote))

    async def tally_by_targets(
        self, target_type: TargetType, target_ids: Sequence[UUID]
    ) -> dict[UUID, VoteCounts]:
        """Count upvotes and downvotes per target from the ledger."""
        wanted = set(target_ids)
        tallies: dict[UUID, list[int]] = defaultdict(lambda: [0, 0])
        for vote in self._votes.values():
            if vote.target_type == target_type and vote.target_id in wanted:
                index = 0 if vote.vote_type == VoteType.UPVOTE else 1
                tallies[vote.target_id][index] += 1
        return {
            target_id: VoteCounts(upvote_count=up, downvote_count=down)
            for target_id, (up, down) in tallies.items()
        }
