"""Get user stats use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.service import ReputationService, UserService
from qa.domain.value import UserId


class GetUserStatsRequest(BaseModel):
    """Get user stats request."""

    user_id: str


class GetUserStatsResponse(BaseModel):
    """Derived user statistics.

    consistent is False when the cached reputation disagrees with a
    recomputation from the vote ledger.
    """

    user_id: str
    question_count: int
    answer_count: int
    reputation: int
    consistent: bool


class GetUserStatsUseCase:
    """Use case for reading a user's question/answer counts and reputation."""

    def __init__(
        self, user_service: UserService, reputation_service: ReputationService
    ) -> None:
        """Initialize get user stats use case.

        Args:
            user_service: User domain service
            reputation_service: Reputation domain service
        """
        self.user_service = user_service
        self.reputation_service = reputation_service

    async def execute(self, request: GetUserStatsRequest) -> GetUserStatsResponse:
        """Execute get user stats flow.

        Raises:
            NotFoundError: If user not found
        """
        user_id = UserId(UUID(request.user_id))
        stats = await self.user_service.get_stats(user_id)
        consistent = await self.reputation_service.verify(user_id)
        return GetUserStatsResponse(
            user_id=str(stats.user_id),
            question_count=stats.question_count,
            answer_count=stats.answer_count,
            reputation=stats.reputation,
            consistent=consistent,
        )
