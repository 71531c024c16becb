"""Create answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import AnswerService, UserService
from qa.domain.value import QuestionId, UserId

from ..common import AnswerItem, build_answer_items


class CreateAnswerRequest(BaseModel):
    """Create answer request."""

    question_id: str
    content: str
    author_id: str | None = None  # User ID from authenticated user


class CreateAnswerResponse(BaseModel):
    """Create answer response."""

    success: bool = True
    message: str = "Answer created"
    data: AnswerItem


class CreateAnswerUseCase:
    """Use case for answering a question."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        """Initialize create answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: CreateAnswerRequest) -> CreateAnswerResponse:
        """Execute create answer flow.

        Raises:
            UnauthorizedError: If there is no author
            NotFoundError: If the question doesn't exist or is deleted
        """
        if not request.author_id:
            raise UnauthorizedError("answer a question")

        author_id = UserId(UUID(request.author_id))
        answer = await self.answer_service.create_answer(
            QuestionId(UUID(request.question_id)), author_id, request.content
        )
        authors = await self.user_service.get_users_by_ids([author_id])
        return CreateAnswerResponse(data=build_answer_items([answer], authors, {})[0])
