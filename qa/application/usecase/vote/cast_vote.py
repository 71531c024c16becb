"""Cast vote use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from qa.config import VotingSettings
from qa.domain.error import ConflictingWriteError
from qa.domain.service import VoteService
from qa.domain.value import TargetType, UserId


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    target_type: TargetType
    target_id: str  # UUID string
    vote_type: str  # Parsed by the vote service, unknown values are rejected
    voter_id: str | None = None  # User ID from authenticated user


class CastVoteResponse(BaseModel):
    """Cast vote response.

    Counts are deliberately absent; clients read them from the next listing.
    """

    success: bool
    message: str
    vote_status: str | None = None


class CastVoteUseCase:
    """Use case for upvoting, downvoting, switching or retracting a vote.

    Each attempt commits when its unit of work ends, so execute() only
    returns once the vote is stored. Conflicts at commit time are retried
    like any other conflicting write.
    """

    def __init__(self, vote_service: VoteService, settings: VotingSettings) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            settings: Voting settings (retry budget)
        """
        self.vote_service = vote_service
        self.settings = settings

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute vote flow.

        A conflicting concurrent write is retried; the retry reads the
        other request's committed vote, so the outcome is the same as if the
        two requests had run one after the other.

        Args:
            request: Cast vote request

        Returns:
            Success flag and a message describing the transition

        Raises:
            UnauthorizedError: If there is no voter
            InvalidVoteTypeError: If the vote type is unknown
            NotFoundError: If the target doesn't exist or is deleted
            ForbiddenSelfVoteError: If self-voting is disabled
            ConflictingWriteError: If every attempt hit a conflict
        """
        voter_id = UserId(UUID(request.voter_id)) if request.voter_id else None
        target_id = UUID(request.target_id)

        attempt = 1
        while True:
            try:
                transition = await self.vote_service.apply_vote(
                    voter_id, request.target_type, target_id, request.vote_type
                )
                break
            except ConflictingWriteError as e:
                if attempt >= self.settings.max_attempts:
                    logfire.error(
                        "Vote failed after retries",
                        target_id=request.target_id,
                        attempts=attempt,
                        error=str(e),
                    )
                    raise
                logfire.warn(
                    "Conflicting vote write, retrying",
                    target_id=request.target_id,
                    attempt=attempt,
                )
                attempt += 1

        return CastVoteResponse(
            success=True,
            message=transition.message,
            vote_status=transition.current.value if transition.current else None,
        )
