"""Get vote status use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import VoteService
from qa.domain.value import TargetType, UserId, VoteType


class GetVoteStatusRequest(BaseModel):
    """Get vote status request."""

    target_type: TargetType
    target_id: str
    voter_id: str | None = None


class GetVoteStatusResponse(BaseModel):
    """The caller's current vote on the target (None if no vote)."""

    vote_status: VoteType | None = None


class GetVoteStatusUseCase:
    """Use case for reading the caller's vote on a question or answer."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize get vote status use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: GetVoteStatusRequest) -> GetVoteStatusResponse:
        """Execute vote status lookup.

        Raises:
            UnauthorizedError: If there is no voter
        """
        if not request.voter_id:
            raise UnauthorizedError("read vote status")

        status = await self.vote_service.get_vote_status(
            UserId(UUID(request.voter_id)),
            request.target_type,
            UUID(request.target_id),
        )
        return GetVoteStatusResponse(vote_status=status)
