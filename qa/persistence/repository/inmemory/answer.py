"""In-memory answer repository for testing."""

from datetime import datetime
from typing import Optional

from qa.domain.model.answer import Answer
from qa.domain.repository.answer import AnswerRepository, AnswerSortOrder
from qa.domain.value import AnswerId, CountDelta, QuestionId, SearchTerm, UserId

from . import journal

SORT_KEYS = {
    AnswerSortOrder.NEWEST: (lambda a: a.created_at, True),
    AnswerSortOrder.OLDEST: (lambda a: a.created_at, False),
    AnswerSortOrder.MOST_VOTED: (lambda a: a.net_votes, True),
}


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self) -> None:
        self._answers: dict[AnswerId, Answer] = {}

    def _matching(
        self, search: Optional[SearchTerm], author_id: Optional[UserId]
    ) -> list[Answer]:
        return [
            a
            for a in self._answers.values()
            if not a.is_deleted
            and (search is None or search.matches(a.content))
            and (author_id is None or a.author_id == author_id)
        ]

    def _set(self, answer_id: AnswerId, **fields) -> None:
        """Overwrite fields, journaling their previous values."""
        answer = self._answers.get(answer_id)
        if answer is None:
            return
        previous = {field: getattr(answer, field) for field in fields}
        self._answers[answer_id] = answer.model_copy(update=fields)
        journal.record(
            lambda: self._answers.__setitem__(
                answer_id, self._answers[answer_id].model_copy(update=previous)
            )
        )

    async def find_by_id(
        self, answer_id: AnswerId, include_deleted: bool = False
    ) -> Optional[Answer]:
        """Find an answer by ID."""
        answer = self._answers.get(answer_id)
        if answer is None or (answer.is_deleted and not include_deleted):
            return None
        return answer

    async def find_by_question(self, question_id: QuestionId) -> list[Answer]:
        """Find a question's non-deleted answers, highest net votes first."""
        answers = sorted(
            (
                a
                for a in self._answers.values()
                if a.question_id == question_id and not a.is_deleted
            ),
            key=lambda a: a.id,
        )
        answers.sort(key=lambda a: a.net_votes, reverse=True)
        return answers

    async def find_accepted(self, question_id: QuestionId) -> Optional[Answer]:
        """Find the accepted answer of a question, if any."""
        for answer in self._answers.values():
            if (
                answer.question_id == question_id
                and answer.is_accepted
                and not answer.is_deleted
            ):
                return answer
        return None

    async def find_all(
        self,
        sort: AnswerSortOrder = AnswerSortOrder.NEWEST,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Answer]:
        """Find answers with filtering, sorting and pagination."""
        answers = sorted(self._matching(search, author_id), key=lambda a: a.id)
        key, descending = SORT_KEYS[sort]
        answers.sort(key=key, reverse=descending)
        return answers[offset : offset + limit]

    async def count(
        self,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count answers matching the given filters."""
        return len(self._matching(search, author_id))

    async def find_by_author(self, author_id: UserId) -> list[Answer]:
        """Find all non-deleted answers by an author."""
        return sorted(self._matching(None, author_id), key=lambda a: a.id)

    async def save(self, answer: Answer) -> Answer:
        """Save or update an answer."""
        previous = self._answers.get(answer.id)
        self._answers[answer.id] = answer

        def undo() -> None:
            if previous is None:
                self._answers.pop(answer.id, None)
            else:
                self._answers[answer.id] = previous

        journal.record(undo)
        return answer

    async def apply_vote_delta(self, answer_id: AnswerId, delta: CountDelta) -> None:
        """Apply a counter delta (never below zero)."""
        answer = self._answers.get(answer_id)
        if answer is None:
            return

        up = max(answer.upvote_count + delta.upvote, 0) - answer.upvote_count
        down = max(answer.downvote_count + delta.downvote, 0) - answer.downvote_count
        self._answers[answer_id] = answer.model_copy(
            update={
                "upvote_count": answer.upvote_count + up,
                "downvote_count": answer.downvote_count + down,
            }
        )

        def undo() -> None:
            current = self._answers[answer_id]
            self._answers[answer_id] = current.model_copy(
                update={
                    "upvote_count": current.upvote_count - up,
                    "downvote_count": current.downvote_count - down,
                }
            )

        journal.record(undo)

    async def set_accepted(self, answer_id: AnswerId, accepted: bool) -> None:
        """Set the accepted flag of an answer."""
        self._set(answer_id, is_accepted=accepted, updated_at=datetime.now())

    async def soft_delete(self, answer_id: AnswerId) -> None:
        """Mark an answer as deleted."""
        now = datetime.now()
        self._set(answer_id, deleted_at=now, updated_at=now)

    async def update_content(self, answer_id: AnswerId, content: str) -> None:
        """Replace an answer's body."""
        self._set(answer_id, content=content, updated_at=datetime.now())
