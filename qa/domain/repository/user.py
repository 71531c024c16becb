"""User repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

from qa.domain.model.user import User
from qa.domain.value import SearchTerm, UserId, UserRole


class UserSortOrder(str, Enum):
    """Sort order for user listings. Ties are broken by id ascending."""

    NEWEST = "newest"
    OLDEST = "oldest"
    REPUTATION = "reputation"
    MOST_QUESTIONS = "most_questions"
    MOST_ANSWERS = "most_answers"


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query)."""
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: UserSortOrder = UserSortOrder.NEWEST,
        search: Optional[SearchTerm] = None,
        search_email: bool = False,
        active: Optional[bool] = True,
        role: Optional[UserRole] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[User]:
        """Find users with filtering, sorting and pagination.

        Args:
            sort: Sort order
            search: Case-insensitive name search
            search_email: Whether the search also matches email
            active: Only users with this active flag (None for all)
            role: Only users with this role (None for all)
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            Users matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        search: Optional[SearchTerm] = None,
        search_email: bool = False,
        active: Optional[bool] = True,
        role: Optional[UserRole] = None,
    ) -> int:
        """Count users matching the same filters as find_all."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def adjust_stats(
        self,
        user_id: UserId,
        reputation: int = 0,
        question_count: int = 0,
        answer_count: int = 0,
    ) -> None:
        """Atomically add deltas to the user's cached statistics.

        Reputation may go negative; the content counts stop at zero.

        Args:
            user_id: The user's unique identifier
            reputation: Reputation delta
            question_count: Question count delta
            answer_count: Answer count delta
        """
        pass

    @abstractmethod
    async def set_reputation(self, user_id: UserId, reputation: int) -> None:
        """Overwrite the cached reputation (used to rebuild from the ledger)."""
        pass

    @abstractmethod
    async def set_active(self, user_id: UserId, active: bool) -> None:
        """Deactivate or restore a user account."""
        pass
