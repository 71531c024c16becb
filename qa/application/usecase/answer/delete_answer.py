"""Delete answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import AnswerService
from qa.domain.value import AnswerId, UserId


class DeleteAnswerRequest(BaseModel):
    """Delete answer request."""

    answer_id: str
    user_id: str | None = None  # User ID from authenticated user


class DeleteAnswerResponse(BaseModel):
    """Delete answer response."""

    success: bool = True
    message: str = "Answer deleted"


class DeleteAnswerUseCase:
    """Use case for deleting an answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize delete answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: DeleteAnswerRequest) -> DeleteAnswerResponse:
        """Execute delete answer flow.

        Raises:
            UnauthorizedError: If there is no user
            NotFoundError: If the answer doesn't exist or is deleted
            NotAuthorizedError: If the user is not the author
        """
        if not request.user_id:
            raise UnauthorizedError("delete an answer")

        await self.answer_service.delete_answer(
            AnswerId(UUID(request.answer_id)), UserId(UUID(request.user_id))
        )
        return DeleteAnswerResponse()
