"""Get question use case."""

from uuid import UUID

from pydantic import BaseModel

from qa.domain.service import AnswerService, QuestionService, UserService, VoteService
from qa.domain.value import QuestionId, TargetType, UserId

from ..common import AnswerItem, QuestionItem, build_answer_items, build_question_items


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str
    viewer_id: str | None = None  # Current user ID (if authenticated)


class QuestionDetail(QuestionItem):
    """Question with its answers, highest net votes first."""

    answers: list[AnswerItem]


class GetQuestionResponse(BaseModel):
    """Get question response."""

    success: bool = True
    data: QuestionDetail


class GetQuestionUseCase:
    """Use case for reading a question with its answers."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        """Initialize get question use case.

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

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        Raises:
            NotFoundError: If the question doesn't exist or is deleted
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        question = await self.question_service.get_question(
            QuestionId(UUID(request.question_id))
        )
        answers = await self.answer_service.get_answers_for_question(question.id)

        question_status = await self.vote_service.get_vote_statuses(
            viewer_id, TargetType.QUESTION, [question.id]
        )
        answer_statuses = await self.vote_service.get_vote_statuses(
            viewer_id, TargetType.ANSWER, [answer.id for answer in answers]
        )
        authors = await self.user_service.get_users_by_ids(
            [question.author_id, *(answer.author_id for answer in answers)]
        )

        item = build_question_items([question], authors, question_status)[0]
        return GetQuestionResponse(
            data=QuestionDetail(
                **item.model_dump(),
                answers=build_answer_items(answers, authors, answer_statuses),
            )
        )
