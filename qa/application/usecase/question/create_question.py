"""Create question use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import QuestionService, UserService
from qa.domain.value import UserId

from ..common import QuestionItem, build_question_items


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    title: str
    content: str
    author_id: str | None = None  # User ID from authenticated user


class CreateQuestionResponse(BaseModel):
    """Create question response."""

    success: bool = True
    message: str = "Question created"
    data: QuestionItem


class CreateQuestionUseCase:
    """Use case for asking a new question."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: CreateQuestionRequest) -> CreateQuestionResponse:
        """Execute create question flow.

        Raises:
            UnauthorizedError: If there is no author
            NotFoundError: If the author doesn't exist
            pydantic.ValidationError: If title or content are out of bounds
        """
        if not request.author_id:
            raise UnauthorizedError("ask a question")

        author_id = UserId(UUID(request.author_id))
        question = await self.question_service.create_question(
            author_id, request.title, request.content
        )
        authors = await self.user_service.get_users_by_ids([author_id])

        logfire.info("Question asked", question_id=str(question.id))
        return CreateQuestionResponse(
            data=build_question_items([question], authors, {})[0]
        )
