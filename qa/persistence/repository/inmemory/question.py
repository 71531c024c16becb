"""In-memory question repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from qa.domain.model.question import Question
from qa.domain.repository.question import QuestionRepository, QuestionSortOrder
from qa.domain.value import CountDelta, QuestionId, SearchTerm, UserId

from . import journal

SORT_KEYS = {
    QuestionSortOrder.NEWEST: (lambda q: q.created_at, True),
    QuestionSortOrder.OLDEST: (lambda q: q.created_at, False),
    QuestionSortOrder.MOST_VOTED: (lambda q: q.net_votes, True),
    QuestionSortOrder.MOST_ANSWERED: (lambda q: q.answer_count, True),
}


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self) -> None:
        self._questions: dict[QuestionId, Question] = {}

    def _matching(
        self, search: Optional[SearchTerm], author_id: Optional[UserId]
    ) -> list[Question]:
        return [
            q
            for q in self._questions.values()
            if not q.is_deleted
            and (search is None or search.matches(q.title))
            and (author_id is None or q.author_id == author_id)
        ]

    def _adjust(self, question_id: QuestionId, **deltas: int) -> None:
        """Add deltas to counter fields (clamped at zero), journaling what was applied."""
        question = self._questions.get(question_id)
        if question is None:
            return

        applied = {
            field: max(getattr(question, field) + delta, 0) - getattr(question, field)
            for field, delta in deltas.items()
        }
        self._questions[question_id] = question.model_copy(
            update={f: getattr(question, f) + d for f, d in applied.items()}
        )

        def undo() -> None:
            current = self._questions[question_id]
            self._questions[question_id] = current.model_copy(
                update={f: getattr(current, f) - d for f, d in applied.items()}
            )

        journal.record(undo)

    async def find_by_id(
        self, question_id: QuestionId, include_deleted: bool = False
    ) -> Optional[Question]:
        """Find a question by ID."""
        question = self._questions.get(question_id)
        if question is None or (question.is_deleted and not include_deleted):
            return None
        return question

    async def find_by_ids(self, question_ids: Sequence[QuestionId]) -> list[Question]:
        """Find several questions at once."""
        return [self._questions[i] for i in question_ids if i in self._questions]

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering, sorting and pagination."""
        questions = sorted(self._matching(search, author_id), key=lambda q: q.id)
        key, descending = SORT_KEYS[sort]
        # Stable sort keeps id order among ties
        questions.sort(key=key, reverse=descending)
        return questions[offset : offset + limit]

    async def count(
        self,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count questions matching the given filters."""
        return len(self._matching(search, author_id))

    async def find_by_author(self, author_id: UserId) -> list[Question]:
        """Find all non-deleted questions by an author."""
        return sorted(self._matching(None, author_id), key=lambda q: q.id)

    async def save(self, question: Question) -> Question:
        """Save or update a question."""
        previous = self._questions.get(question.id)
        self._questions[question.id] = question

        def undo() -> None:
            if previous is None:
                self._questions.pop(question.id, None)
            else:
                self._questions[question.id] = previous

        journal.record(undo)
        return question

    async def apply_vote_delta(self, question_id: QuestionId, delta: CountDelta) -> None:
        """Apply a counter delta (never below zero)."""
        self._adjust(
            question_id, upvote_count=delta.upvote, downvote_count=delta.downvote
        )

    async def adjust_answer_count(self, question_id: QuestionId, delta: int) -> None:
        """Change answer_count by delta (minimum 0)."""
        self._adjust(question_id, answer_count=delta)

    async def soft_delete(self, question_id: QuestionId) -> None:
        """Mark a question as deleted."""
        question = self._questions.get(question_id)
        if question is None:
            return
        now = datetime.now()
        self._questions[question_id] = question.model_copy(
            update={"deleted_at": now, "updated_at": now}
        )

        def undo() -> None:
            current = self._questions[question_id]
            self._questions[question_id] = current.model_copy(
                update={"deleted_at": None, "updated_at": question.updated_at}
            )

        journal.record(undo)

    async def update_content(
        self, question_id: QuestionId, title: str, content: str
    ) -> None:
        """Replace a question's title and body."""
        question = self._questions.get(question_id)
        if question is None:
            return
        self._questions[question_id] = question.model_copy(
            update={"title": title, "content": content, "updated_at": datetime.now()}
        )

        def undo() -> None:
            current = self._questions[question_id]
            self._questions[question_id] = current.model_copy(
                update={
                    "title": question.title,
                    "content": question.content,
                    "updated_at": question.updated_at,
                }
            )

        journal.record(undo)
