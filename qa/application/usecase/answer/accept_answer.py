"""Accept answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import AnswerService
from qa.domain.value import AnswerId, UserId


class AcceptAnswerRequest(BaseModel):
    """Accept answer request."""

    answer_id: str
    user_id: str | None = None  # User ID from authenticated user


class AcceptAnswerResponse(BaseModel):
    """Accept answer response."""

    success: bool = True
    message: str
    is_accepted: bool


class AcceptAnswerUseCase:
    """Use case for accepting (or un-accepting) an answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize accept answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: AcceptAnswerRequest) -> AcceptAnswerResponse:
        """Execute accept answer flow.

        Raises:
            UnauthorizedError: If there is no user
            NotFoundError: If the answer or its question doesn't exist
            NotAuthorizedError: If the user didn't ask the question
        """
        if not request.user_id:
            raise UnauthorizedError("accept an answer")

        answer = await self.answer_service.accept_answer(
            AnswerId(UUID(request.answer_id)), UserId(UUID(request.user_id))
        )
        return AcceptAnswerResponse(
            message="Answer accepted" if answer.is_accepted else "Answer un-accepted",
            is_accepted=answer.is_accepted,
        )
