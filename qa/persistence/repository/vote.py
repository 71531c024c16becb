"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import and_, case, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qa.domain.error import NotFoundError
from qa.domain.model import Vote
from qa.domain.repository import VoteRepository
from qa.domain.value import TargetType, UserId, VoteCounts, VoteId, VoteType
from qa.persistence.mappers import row_to_vote, vote_to_dict
from qa.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        stmt = select(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_voter_and_target(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_id: UUID,
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.voter_id == voter_id,
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_voter_and_targets(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a voter's votes on multiple targets (batch query)."""
        if not target_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.voter_id == voter_id,
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        Raises IntegrityError if the voter already voted on the target.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def update_vote_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Switch a vote in place."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote_id)
            .values(vote_type=vote_type.value, updated_at=func.now())
            .returning(votes_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        if row is None:
            raise NotFoundError("Vote", str(vote_id))
        return row_to_vote(row._asdict())

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def tally_by_targets(
        self, target_type: TargetType, target_ids: Sequence[UUID]
    ) -> dict[UUID, VoteCounts]:
        """Count upvotes and downvotes per target straight from the ledger."""
        if not target_ids:
            return {}

        with logfire.span(
            "vote_repository.tally_by_targets",
            target_type=target_type.value,
            targets=len(target_ids),
        ):
            upvotes = func.sum(
                case((votes_table.c.vote_type == VoteType.UPVOTE.value, 1), else_=0)
            )
            downvotes = func.sum(
                case((votes_table.c.vote_type == VoteType.DOWNVOTE.value, 1), else_=0)
            )
            stmt = (
                select(
                    votes_table.c.target_id,
                    upvotes.label("upvote_count"),
                    downvotes.label("downvote_count"),
                )
                .where(
                    votes_table.c.target_type == target_type.value,
                    votes_table.c.target_id.in_(target_ids),
                )
                .group_by(votes_table.c.target_id)
            )
            result = await self.session.execute(stmt)
            return {
                row.target_id: VoteCounts(
                    upvote_count=int(row.upvote_count),
                    downvote_count=int(row.downvote_count),
                )
                for row in result.fetchall()
            }
