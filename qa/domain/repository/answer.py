"""Answer repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from qa.domain.model.answer import Answer
from qa.domain.value import AnswerId, CountDelta, QuestionId, SearchTerm, UserId


class AnswerSortOrder(str, Enum):
    """Sort order for answer listings. Ties are broken by id ascending."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_VOTED = "most_voted"


class AnswerRepository(ABC):
    """Repository for Answer entity.

    Defines the contract for answer persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, answer_id: AnswerId, include_deleted: bool = False
    ) -> Optional[Answer]:
        """Find an answer by ID.

        Args:
            answer_id: The answer's unique identifier
            include_deleted: Whether to return soft-deleted answers

        Returns:
            The answer if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_question(self, question_id: QuestionId) -> list[Answer]:
        """Find all non-deleted answers of a question, highest net votes first."""
        pass

    @abstractmethod
    async def find_accepted(self, question_id: QuestionId) -> Optional[Answer]:
        """Find the accepted non-deleted answer of a question, if any."""
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: AnswerSortOrder = AnswerSortOrder.NEWEST,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Answer]:
        """Find non-deleted answers with filtering, sorting and pagination.

        Args:
            sort: Sort order
            search: Case-insensitive content search
            author_id: Only answers by this author
            limit: Maximum number of answers to return
            offset: Number of answers to skip

        Returns:
            Answers matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count non-deleted answers matching the same filters as find_all."""
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> list[Answer]:
        """Find all non-deleted answers by an author."""
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update)."""
        pass

    @abstractmethod
    async def apply_vote_delta(self, answer_id: AnswerId, delta: CountDelta) -> None:
        """Atomically apply a counter delta, clamping each counter at zero."""
        pass

    @abstractmethod
    async def set_accepted(self, answer_id: AnswerId, accepted: bool) -> None:
        """Mark or unmark an answer as accepted."""
        pass

    @abstractmethod
    async def soft_delete(self, answer_id: AnswerId) -> None:
        """Mark an answer as deleted."""
        pass

    @abstractmethod
    async def update_content(self, answer_id: AnswerId, content: str) -> None:
        """Replace an answer's body, leaving counters and acceptance untouched."""
        pass
