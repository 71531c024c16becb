"""Question domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from qa.domain.error import NotAuthorizedError, NotFoundError
from qa.domain.model import Question
from qa.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UnitOfWork,
    UserRepository,
)
from qa.domain.value import QuestionId, TargetType, UserId

from .base import Service
from .reputation_service import ReputationService


class QuestionService(Service):
    """Domain service for question lifecycle operations."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
        reputation_service: ReputationService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            user_repository: User repository
            reputation_service: Reputation domain service
            unit_of_work: Atomic scope for lifecycle changes
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_repository = user_repository
        self.reputation_service = reputation_service
        self.unit_of_work = unit_of_work

    async def create_question(
        self, author_id: UserId, title: str, content: str
    ) -> Question:
        """Create a question and count it towards the author's stats.

        Args:
            author_id: Author's user ID
            title: Question title
            content: Question body

        Returns:
            The created question
        """
        with logfire.span("question_service.create_question", author_id=str(author_id)):
            now = datetime.now()
            question = Question(
                id=QuestionId(uuid4()),
                author_id=author_id,
                title=title,
                content=content,
                created_at=now,
                updated_at=now,
            )

            async with self.unit_of_work.atomic():
                if await self.user_repository.find_by_id(author_id) is None:
                    raise NotFoundError("User", str(author_id))
                saved = await self.question_repository.save(question)
                await self.user_repository.adjust_stats(author_id, question_count=1)

            logfire.info("Question created", question_id=str(saved.id))
            return saved

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a non-deleted question.

        Raises:
            NotFoundError: If the question doesn't exist or is deleted
        """
        with logfire.span(
            "question_service.get_question", question_id=str(question_id)
        ):
            question = await self.question_repository.find_by_id(question_id)
            if question is None:
                logfire.warn("Question not found", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))
            return question

    async def update_question(
        self,
        question_id: QuestionId,
        user_id: UserId,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Question:
        """Edit a question's title and/or body. Only the author may edit.

        Omitted fields keep their current value. Votes, answers and
        reputation are unaffected.

        Raises:
            NotFoundError: If the question doesn't exist or is deleted
            NotAuthorizedError: If the user is not the question's author
            pydantic.ValidationError: If the edited question is invalid
        """
        with logfire.span(
            "question_service.update_question",
            question_id=str(question_id),
            user_id=str(user_id),
        ):
            async with self.unit_of_work.atomic():
                await self.unit_of_work.lock_target(TargetType.QUESTION, question_id)
                question = await self.get_question(question_id)
                if question.author_id != user_id:
                    logfire.warn(
                        "Question edit by non-author",
                        question_id=str(question_id),
                        user_id=str(user_id),
                    )
                    raise NotAuthorizedError("question", str(question_id), str(user_id))

                edited = Question.model_validate(
                    {
                        **question.model_dump(),
                        "title": question.title if title is None else title,
                        "content": question.content if content is None else content,
                        "updated_at": datetime.now(),
                    }
                )
                await self.question_repository.update_content(
                    question_id, edited.title, edited.content
                )

            logfire.info("Question updated", question_id=str(question_id))
            return edited

    async def delete_question(self, question_id: QuestionId, user_id: UserId) -> None:
        """Soft-delete a question together with its answers.

        Author stats and reputation lose everything the question and its
        answers contributed.

        Args:
            question_id: Question ID
            user_id: User requesting the deletion

        Raises:
            NotFoundError: If the question doesn't exist or is deleted
            NotAuthorizedError: If the user is not the question's author
        """
        with logfire.span(
            "question_service.delete_question",
            question_id=str(question_id),
            user_id=str(user_id),
        ):
            async with self.unit_of_work.atomic():
                await self.unit_of_work.lock_target(TargetType.QUESTION, question_id)
                question = await self.get_question(question_id)
                if question.author_id != user_id:
                    logfire.warn(
                        "Question deletion by non-author",
                        question_id=str(question_id),
                        user_id=str(user_id),
                    )
                    raise NotAuthorizedError("question", str(question_id), str(user_id))

                answers = await self.answer_repository.find_by_question(question_id)
                for answer in answers:
                    await self.unit_of_work.lock_target(TargetType.ANSWER, answer.id)
                    await self.reputation_service.retract_target(
                        answer.author_id,
                        TargetType.ANSWER,
                        answer.id,
                        accepted=answer.is_accepted,
                    )
                    await self.user_repository.adjust_stats(
                        answer.author_id, answer_count=-1
                    )
                    await self.answer_repository.soft_delete(answer.id)
                if answers:
                    await self.question_repository.adjust_answer_count(
                        question_id, -len(answers)
                    )

                await self.reputation_service.retract_target(
                    question.author_id, TargetType.QUESTION, question_id
                )
                await self.user_repository.adjust_stats(
                    question.author_id, question_count=-1
                )
                await self.question_repository.soft_delete(question_id)

            logfire.info(
                "Question deleted",
                question_id=str(question_id),
                answers_deleted=len(answers),
            )
