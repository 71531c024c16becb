"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from qa.domain.model.user import User
from qa.domain.repository.user import UserRepository, UserSortOrder
from qa.domain.value import SearchTerm, UserId, UserRole

from . import journal

SORT_KEYS = {
    UserSortOrder.NEWEST: (lambda u: u.created_at, True),
    UserSortOrder.OLDEST: (lambda u: u.created_at, False),
    UserSortOrder.REPUTATION: (lambda u: u.reputation, True),
    UserSortOrder.MOST_QUESTIONS: (lambda u: u.question_count, True),
    UserSortOrder.MOST_ANSWERS: (lambda u: u.answer_count, True),
}


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _matching(
        self,
        search: Optional[SearchTerm],
        search_email: bool,
        active: Optional[bool],
        role: Optional[UserRole],
    ) -> list[User]:
        def matches_search(user: User) -> bool:
            if search is None:
                return True
            if search_email:
                return search.matches(user.name, user.email)
            return search.matches(user.name)

        return [
            u
            for u in self._users.values()
            if matches_search(u)
            and (active is None or u.active == active)
            and (role is None or u.role == role)
        ]

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._users[i] for i in user_ids if i in self._users]

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
        """Find users with filtering, sorting and pagination."""
        users = sorted(
            self._matching(search, search_email, active, role), key=lambda u: u.id
        )
        key, descending = SORT_KEYS[sort]
        users.sort(key=key, reverse=descending)
        return users[offset : offset + limit]

    async def count(
        self,
        search: Optional[SearchTerm] = None,
        search_email: bool = False,
        active: Optional[bool] = True,
        role: Optional[UserRole] = None,
    ) -> int:
        """Count users matching the given filters."""
        return len(self._matching(search, search_email, active, role))

    async def save(self, user: User) -> User:
        """Save or update a user."""
        previous = self._users.get(user.id)
        self._users[user.id] = user

        def undo() -> None:
            if previous is None:
                self._users.pop(user.id, None)
            else:
                self._users[user.id] = previous

        journal.record(undo)
        return user

    async def adjust_stats(
        self,
        user_id: UserId,
        reputation: int = 0,
        question_count: int = 0,
        answer_count: int = 0,
    ) -> None:
        """Add deltas to the user's cached statistics."""
        user = self._users.get(user_id)
        if user is None:
            return

        applied = {
            "reputation": reputation,
            "question_count": max(user.question_count + question_count, 0)
            - user.question_count,
            "answer_count": max(user.answer_count + answer_count, 0)
            - user.answer_count,
        }
        self._users[user_id] = user.model_copy(
            update={f: getattr(user, f) + d for f, d in applied.items()}
        )

        def undo() -> None:
            current = self._users[user_id]
            self._users[user_id] = current.model_copy(
                update={f: getattr(current, f) - d for f, d in applied.items()}
            )

        journal.record(undo)

    async def set_reputation(self, user_id: UserId, reputation: int) -> None:
        """Overwrite the cached reputation."""
        user = self._users.get(user_id)
        if user is None:
            return
        self._users[user_id] = user.model_copy(update={"reputation": reputation})
        journal.record(
            lambda: self._users.__setitem__(
                user_id,
                self._users[user_id].model_copy(
                    update={"reputation": user.reputation}
                ),
            )
        )

    async def set_active(self, user_id: UserId, active: bool) -> None:
        """Deactivate or restore a user."""
        user = self._users.get(user_id)
        if user is None:
            return
        self._users[user_id] = user.model_copy(
            update={"active": active, "updated_at": datetime.now()}
        )

        def undo() -> None:
            current = self._users[user_id]
            self._users[user_id] = current.model_copy(
                update={"active": user.active, "updated_at": user.updated_at}
            )

        journal.record(undo)
