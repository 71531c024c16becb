"""Get answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.service import AnswerService, UserService, VoteService
from qa.domain.value import AnswerId, TargetType, UserId

from ..common import AnswerItem, build_answer_items


class GetAnswerRequest(BaseModel):
    """Get answer request."""

    answer_id: str
    viewer_id: str | None = None  # Current user ID (if authenticated)


class GetAnswerResponse(BaseModel):
    """Get answer response."""

    success: bool = True
    data: AnswerItem


class GetAnswerUseCase:
    """Use case for reading a single answer."""

    def __init__(
        self,
        answer_service: AnswerService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        self.answer_service = answer_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: GetAnswerRequest) -> GetAnswerResponse:
        """Execute get answer flow.

        Raises:
            NotFoundError: If the answer doesn't exist or is deleted
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        answer = await self.answer_service.get_answer(AnswerId(UUID(request.answer_id)))
        statuses = await self.vote_service.get_vote_statuses(
            viewer_id, TargetType.ANSWER, [answer.id]
        )
        authors = await self.user_service.get_users_by_ids([answer.author_id])
        return GetAnswerResponse(
            data=build_answer_items([answer], authors, statuses)[0]
        )
