"""Get question answers use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.service import AnswerService, QuestionService, UserService, VoteService
from qa.domain.value import QuestionId, TargetType, UserId

from ..common import AnswerItem, build_answer_items


class GetQuestionAnswersRequest(BaseModel):
    """Get question answers request."""

    question_id: str
    viewer_id: str | None = None  # Current user ID (if authenticated)


class GetQuestionAnswersResponse(BaseModel):
    """All answers of a question, highest net votes first (not paginated)."""

    success: bool = True
    data: list[AnswerItem]


class GetQuestionAnswersUseCase:
    """Use case for listing the answers of one question."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        """Initialize get question answers use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.answer_service = answer_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(
        self, request: GetQuestionAnswersRequest
    ) -> GetQuestionAnswersResponse:
        """Execute get question answers flow.

        Raises:
            NotFoundError: If the question doesn't exist or is deleted
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        question = await self.question_service.get_question(
            QuestionId(UUID(request.question_id))
        )
        answers = await self.answer_service.get_answers_for_question(question.id)
        statuses = await self.vote_service.get_vote_statuses(
            viewer_id, TargetType.ANSWER, [answer.id for answer in answers]
        )
        authors = await self.user_service.get_users_by_ids(
            [answer.author_id for answer in answers]
        )
        return GetQuestionAnswersResponse(
            data=build_answer_items(answers, authors, statuses)
        )
