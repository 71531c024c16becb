"""Vote repository interface (the vote ledger)."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from qa.domain.model.vote import Vote
from qa.domain.value import TargetType, UserId, VoteCounts, VoteId, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    The ledger is the source of truth for vote state: at most one vote
    per (voter, target). Counters and reputation are derived from it.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID.

        Args:
            vote_id: The vote's unique identifier

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_voter_and_target(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target.

        Args:
            voter_id: The voter's ID
            target_type: Type of target (question or answer)
            target_id: ID of the target

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_voter_and_targets(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple targets (batch query).

        Args:
            voter_id: The voter's ID
            target_type: Type of targets
            target_ids: IDs of the targets to check

        Returns:
            Votes by the user on the given targets
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a new vote.

        Raises:
            IntegrityError: If the voter already has a vote on this target
        """
        pass

    @abstractmethod
    async def update_vote_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Switch an existing vote to another vote type.

        Args:
            vote_id: The vote to update
            vote_type: The new vote type

        Returns:
            The updated vote
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote (retraction).

        Args:
            vote_id: The vote ID to delete
        """
        pass

    @abstractmethod
    async def tally_by_targets(
        self,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> dict[UUID, VoteCounts]:
        """Count upvotes and downvotes per target straight from the ledger.

        Args:
            target_type: Type of targets
            target_ids: IDs of the targets

        Returns:
            Mapping of target ID to counts; targets without votes map to zero counts
        """
        pass
