"""Answer domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from qa.domain.error import NotAuthorizedError, NotFoundError
from qa.domain.model import Answer
from qa.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UnitOfWork,
    UserRepository,
)
from qa.domain.value import AnswerId, QuestionId, TargetType, UserId

from .base import Service
from .reputation_service import ReputationService


class AnswerService(Service):
    """Domain service for answer lifecycle operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
        user_repository: UserRepository,
        reputation_service: ReputationService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            question_repository: Question repository
            user_repository: User repository
            reputation_service: Reputation domain service
            unit_of_work: Atomic scope for lifecycle changes
        """
        self.answer_repository = answer_repository
        self.question_repository = question_repository
        self.user_repository = user_repository
        self.reputation_service = reputation_service
        self.unit_of_work = unit_of_work

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        """Get a non-deleted answer.

        Raises:
            NotFoundError: If the answer doesn't exist or is deleted
        """
        answer = await self.answer_repository.find_by_id(answer_id)
        if answer is None:
            logfire.warn("Answer not found", answer_id=str(answer_id))
            raise NotFoundError("Answer", str(answer_id))
        return answer

    async def get_answers_for_question(self, question_id: QuestionId) -> list[Answer]:
        """Get a question's answers, highest net votes first."""
        with logfire.span(
            "answer_service.get_answers_for_question", question_id=str(question_id)
        ):
            return await self.answer_repository.find_by_question(question_id)

    async def create_answer(
        self, question_id: QuestionId, author_id: UserId, content: str
    ) -> Answer:
        """Answer a question.

        The question's answer_count and the author's answer_count move in the
        same unit of work as the insert.

        Args:
            question_id: Question being answered
            author_id: Author's user ID
            content: Answer body

        Returns:
            The created answer

        Raises:
            NotFoundError: If the question doesn't exist or is deleted
        """
        with logfire.span(
            "answer_service.create_answer",
            question_id=str(question_id),
            author_id=str(author_id),
        ):
            now = datetime.now()
            answer = Answer(
                id=AnswerId(uuid4()),
                question_id=question_id,
                author_id=author_id,
                content=content,
                created_at=now,
                updated_at=now,
            )

            async with self.unit_of_work.atomic():
                await self.unit_of_work.lock_target(TargetType.QUESTION, question_id)
                if await self.question_repository.find_by_id(question_id) is None:
                    logfire.warn(
                        "Answer to non-existent question", question_id=str(question_id)
                    )
                    raise NotFoundError("Question", str(question_id))
                if await self.user_repository.find_by_id(author_id) is None:
                    raise NotFoundError("User", str(author_id))

                saved = await self.answer_repository.save(answer)
                await self.question_repository.adjust_answer_count(question_id, 1)
                await self.user_repository.adjust_stats(author_id, answer_count=1)

            logfire.info("Answer created", answer_id=str(saved.id))
            return saved

    async def delete_answer(self, answer_id: AnswerId, user_id: UserId) -> None:
        """Soft-delete an answer.

        Raises:
            NotFoundError: If the answer doesn't exist or is deleted
            NotAuthorizedError: If the user is not the answer's author
        """
        with logfire.span(
            "answer_service.delete_answer",
            answer_id=str(answer_id),
            user_id=str(user_id),
        ):
            async with self.unit_of_work.atomic():
                answer = await self.get_answer(answer_id)
                # Question first, matching create_answer's lock order
                await self.unit_of_work.lock_target(
                    TargetType.QUESTION, answer.question_id
                )
                await self.unit_of_work.lock_target(TargetType.ANSWER, answer_id)
                answer = await self.get_answer(answer_id)
                if answer.author_id != user_id:
                    logfire.warn(
                        "Answer deletion by non-author",
                        answer_id=str(answer_id),
                        user_id=str(user_id),
                    )
                    raise NotAuthorizedError("answer", str(answer_id), str(user_id))

                await self.reputation_service.retract_target(
                    answer.author_id,
                    TargetType.ANSWER,
                    answer_id,
                    accepted=answer.is_accepted,
                )
                await self.answer_repository.soft_delete(answer_id)
                await self.question_repository.adjust_answer_count(
                    answer.question_id, -1
                )
                await self.user_repository.adjust_stats(
                    answer.author_id, answer_count=-1
                )

            logfire.info("Answer deleted", answer_id=str(answer_id))

    async def update_answer(
        self, answer_id: AnswerId, user_id: UserId, content: str
    ) -> Answer:
        """Edit an answer's body. Only the author may edit.

        Raises:
            NotFoundError: If the answer doesn't exist or is deleted
            NotAuthorizedError: If the user is not the answer's author
            pydantic.ValidationError: If the new body is invalid
        """
        with logfire.span(
            "answer_service.update_answer",
            answer_id=str(answer_id),
            user_id=str(user_id),
        ):
            async with self.unit_of_work.atomic():
                await self.unit_of_work.lock_target(TargetType.ANSWER, answer_id)
                answer = await self.get_answer(answer_id)
                if answer.author_id != user_id:
                    logfire.warn(
                        "Answer edit by non-author",
                        answer_id=str(answer_id),
                        user_id=str(user_id),
                    )
                    raise NotAuthorizedError("answer", str(answer_id), str(user_id))

                edited = Answer.model_validate(
                    {
                        **answer.model_dump(),
                        "content": content,
                        "updated_at": datetime.now(),
                    }
                )
                await self.answer_repository.update_content(answer_id, edited.content)

            logfire.info("Answer updated", answer_id=str(answer_id))
            return edited

    async def accept_answer(self, answer_id: AnswerId, user_id: UserId) -> Answer:
        """Toggle acceptance of an answer.

        Only the question's author may accept. Accepting an answer
        un-accepts the question's previously accepted one; accepting the
        already accepted answer un-accepts it.

        Args:
            answer_id: Answer to accept or un-accept
            user_id: User requesting the change

        Returns:
            The answer with its new acceptance state

        Raises:
            NotFoundError: If the answer or its question doesn't exist
            NotAuthorizedError: If the user is not the question's author
        """
        with logfire.span(
            "answer_service.accept_answer",
            answer_id=str(answer_id),
            user_id=str(user_id),
        ):
            async with self.unit_of_work.atomic():
                answer = await self.get_answer(answer_id)
                await self.unit_of_work.lock_target(
                    TargetType.QUESTION, answer.question_id
                )
                # A delete may have committed while we waited for the lock
                answer = await self.get_answer(answer_id)
                question = await self.question_repository.find_by_id(
                    answer.question_id
                )
                if question is None:
                    raise NotFoundError("Question", str(answer.question_id))
                if question.author_id != user_id:
                    logfire.warn(
                        "Acceptance by non-author of question",
                        answer_id=str(answer_id),
                        user_id=str(user_id),
                    )
                    raise NotAuthorizedError(
                        "question", str(question.id), str(user_id)
                    )

                current = await self.answer_repository.find_accepted(question.id)
                if current is not None:
                    await self.answer_repository.set_accepted(current.id, False)
                    await self.reputation_service.apply_acceptance(
                        current.author_id, accepted=False
                    )

                accepted = current is None or current.id != answer_id
                if accepted:
                    await self.answer_repository.set_accepted(answer_id, True)
                    await self.reputation_service.apply_acceptance(
                        answer.author_id, accepted=True
                    )

            logfire.info(
                "Answer accepted" if accepted else "Answer un-accepted",
                answer_id=str(answer_id),
            )
            return answer.model_copy(update={"is_accepted": accepted})
