"""Question repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

from qa.domain.model.question import Question
from qa.domain.value import CountDelta, QuestionId, SearchTerm, UserId


class QuestionSortOrder(str, Enum):
    """Sort order for question listings. Ties are broken by id ascending."""

    NEWEST = "newest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC
    MOST_VOTED = "most_voted"  # upvote_count - downvote_count DESC
    MOST_ANSWERED = "most_answered"  # answer_count DESC


class QuestionRepository(ABC):
    """Repository for Question aggregate.

    Defines the contract for question persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, question_id: QuestionId, include_deleted: bool = False
    ) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier
            include_deleted: Whether to return soft-deleted questions

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, question_ids: Sequence[QuestionId]) -> list[Question]:
        """Find several questions at once (deleted ones included)."""
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find non-deleted questions with filtering, sorting and pagination.

        Filters are applied before pagination.

        Args:
            sort: Sort order
            search: Case-insensitive title search
            author_id: Only questions by this author
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            Questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count non-deleted questions matching the same filters as find_all."""
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> list[Question]:
        """Find all non-deleted questions by an author."""
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a question (create or update).

        Args:
            question: The question to save

        Returns:
            The saved question
        """
        pass

    @abstractmethod
    async def apply_vote_delta(self, question_id: QuestionId, delta: CountDelta) -> None:
        """Atomically apply a counter delta, clamping each counter at zero.

        Uses SQL-level arithmetic to avoid lost updates.

        Args:
            question_id: The question ID
            delta: Upvote/downvote changes
        """
        pass

    @abstractmethod
    async def adjust_answer_count(self, question_id: QuestionId, delta: int) -> None:
        """Atomically change answer_count by delta (minimum 0)."""
        pass

    @abstractmethod
    async def soft_delete(self, question_id: QuestionId) -> None:
        """Mark a question as deleted."""
        pass

    @abstractmethod
    async def update_content(
        self, question_id: QuestionId, title: str, content: str
    ) -> None:
        """Replace a question's title and body, leaving counters untouched."""
        pass
