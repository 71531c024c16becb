"""Delete question use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import QuestionService
from qa.domain.value import QuestionId, UserId


class DeleteQuestionRequest(BaseModel):
    """Delete question request."""

    question_id: str
    user_id: str | None = None  # User ID from authenticated user


class DeleteQuestionResponse(BaseModel):
    """Delete question response."""

    success: bool = True
    message: str = "Question deleted"


class DeleteQuestionUseCase:
    """Use case for deleting a question and its answers."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize delete question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: DeleteQuestionRequest) -> DeleteQuestionResponse:
        """Execute delete question flow.

        Raises:
            UnauthorizedError: If there is no user
            NotFoundError: If the question doesn't exist or is deleted
            NotAuthorizedError: If the user is not the author
        """
        if not request.user_id:
            raise UnauthorizedError("delete a question")

        await self.question_service.delete_question(
            QuestionId(UUID(request.question_id)), UserId(UUID(request.user_id))
        )
        return DeleteQuestionResponse()
