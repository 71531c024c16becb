"""Update question use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.service import QuestionService, UserService
from qa.domain.value import QuestionId, UserId

from ..common import QuestionItem, build_question_items


class UpdateQuestionRequest(BaseModel):
    """Update question request. Omitted fields are left as they are."""

    question_id: str
    title: str | None = None
    content: str | None = None
    user_id: str | None = None  # User ID from authenticated user


class UpdateQuestionResponse(BaseModel):
    """Update question response."""

    success: bool = True
    message: str = "Question updated"
    data: QuestionItem


class UpdateQuestionUseCase:
    """Use case for editing a question."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize update question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: UpdateQuestionRequest) -> UpdateQuestionResponse:
        """Execute update question flow.

        Raises:
            UnauthorizedError: If there is no user
            NotFoundError: If the question doesn't exist or is deleted
            NotAuthorizedError: If the user is not the author
            pydantic.ValidationError: If title or content are out of bounds
        """
        if not request.user_id:
            raise UnauthorizedError("edit a question")

        user_id = UserId(UUID(request.user_id))
        question = await self.question_service.update_question(
            QuestionId(UUID(request.question_id)),
            user_id,
            title=request.title,
            content=request.content,
        )
        authors = await self.user_service.get_users_by_ids([user_id])
        # Authors cannot vote on their own question
        return UpdateQuestionResponse(
            data=build_question_items([question], authors, {})[0]
        )
