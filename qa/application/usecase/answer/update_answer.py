"""Update answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import AnswerService, UserService
from qa.domain.value import AnswerId, UserId

from ..common import AnswerItem, build_answer_items


class UpdateAnswerRequest(BaseModel):
    """Update answer request."""

    answer_id: str
    content: str
    user_id: str | None = None  # User ID from authenticated user


class UpdateAnswerResponse(BaseModel):
    """Update answer response."""

    success: bool = True
    message: str = "Answer updated"
    data: AnswerItem


class UpdateAnswerUseCase:
    """Use case for editing an answer."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        """Initialize update answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: UpdateAnswerRequest) -> UpdateAnswerResponse:
        """Execute update answer flow.

        Raises:
            UnauthorizedError: If there is no user
            NotFoundError: If the answer doesn't exist or is deleted
            NotAuthorizedError: If the user is not the author
            pydantic.ValidationError: If the content is too short
        """
        if not request.user_id:
            raise UnauthorizedError("edit an answer")

        user_id = UserId(UUID(request.user_id))
        answer = await self.answer_service.update_answer(
            AnswerId(UUID(request.answer_id)), user_id, request.content
        )
        authors = await self.user_service.get_users_by_ids([user_id])
        return UpdateAnswerResponse(data=build_answer_items([answer], authors, {})[0])
