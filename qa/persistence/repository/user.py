"""PostgreSQL implementation of User repository."""

from typing import Optional, Sequence

import logfire
from sqlalchemy import asc, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qa.domain.model import User
from qa.domain.repository import UserRepository, UserSortOrder
from qa.domain.value import SearchTerm, UserId, UserRole
from qa.persistence.mappers import row_to_user, user_to_dict
from qa.persistence.tables import users_table

u = users_table.c

SORT_COLUMNS = {
    UserSortOrder.NEWEST: [desc(u.created_at)],
    UserSortOrder.OLDEST: [asc(u.created_at)],
    UserSortOrder.REPUTATION: [desc(u.reputation)],
    UserSortOrder.MOST_QUESTIONS: [desc(u.question_count)],
    UserSortOrder.MOST_ANSWERS: [desc(u.answer_count)],
}


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _filtered(
        self,
        stmt,
        search: Optional[SearchTerm],
        search_email: bool,
        active: Optional[bool],
        role: Optional[UserRole],
    ):
        if search:
            pattern = search.like_pattern
            if search_email:
                stmt = stmt.where(
                    or_(
                        u.name.ilike(pattern, escape="\\"),
                        u.email.ilike(pattern, escape="\\"),
                    )
                )
            else:
                stmt = stmt.where(u.name.ilike(pattern, escape="\\"))
        if active is not None:
            stmt = stmt.where(u.active.is_(active))
        if role is not None:
            stmt = stmt.where(u.role == role.value)
        return stmt

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(u.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query)."""
        if not user_ids:
            return []
        stmt = select(users_table).where(u.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

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
        with logfire.span(
            "user_repository.find_all",
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = self._filtered(
                select(users_table), search, search_email, active, role
            )
            stmt = stmt.order_by(*SORT_COLUMNS[sort], asc(u.id))
            stmt = stmt.limit(limit).offset(offset)
            result = await self.session.execute(stmt)
            return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count(
        self,
        search: Optional[SearchTerm] = None,
        search_email: bool = False,
        active: Optional[bool] = True,
        role: Optional[UserRole] = None,
    ) -> int:
        """Count users matching the given filters."""
        stmt = self._filtered(
            select(func.count()).select_from(users_table),
            search,
            search_email,
            active,
            role,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        user_dict = user_to_dict(user)
        existing = await self.find_by_id(user.id)

        if existing:
            stmt = update(users_table).where(u.id == user.id).values(**user_dict)
        else:
            stmt = insert(users_table).values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def adjust_stats(
        self,
        user_id: UserId,
        reputation: int = 0,
        question_count: int = 0,
        answer_count: int = 0,
    ) -> None:
        """Atomically add deltas to the user's cached statistics."""
        if not (reputation or question_count or answer_count):
            return
        stmt = (
            update(users_table)
            .where(u.id == user_id)
            .values(
                reputation=u.reputation + reputation,
                question_count=func.greatest(u.question_count + question_count, 0),
                answer_count=func.greatest(u.answer_count + answer_count, 0),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_reputation(self, user_id: UserId, reputation: int) -> None:
        """Overwrite the cached reputation."""
        stmt = (
            update(users_table)
            .where(u.id == user_id)
            .values(reputation=reputation, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_active(self, user_id: UserId, active: bool) -> None:
        """Deactivate or restore a user."""
        stmt = (
            update(users_table)
            .where(u.id == user_id)
            .values(active=active, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
