"""User domain service."""

from datetime import datetime
from typing import Sequence

import logfire

from qa.domain.error import NotFoundError
from qa.domain.model import User, UserStats
from qa.domain.repository import UserRepository
from qa.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), name=user.name)
            return user

    async def get_users_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Get several users keyed by ID (batch query).

        Unknown IDs are simply absent from the result.
        """
        if not user_ids:
            return {}
        users = await self.user_repository.find_by_ids(list(set(user_ids)))
        return {user.id: user for user in users}

    async def set_active(self, user_id: UserId, active: bool) -> User:
        """Deactivate or restore a user account.

        Inactive users drop out of the community directory; their content,
        votes and reputation are kept.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span(
            "user_service.set_active", user_id=str(user_id), active=active
        ):
            user = await self.get_by_id(user_id)
            await self.user_repository.set_active(user_id, active)
            logfire.info(
                "User restored" if active else "User deactivated",
                user_id=str(user_id),
            )
            return user.model_copy(
                update={"active": active, "updated_at": datetime.now()}
            )

    async def get_stats(self, user_id: UserId) -> UserStats:
        """Get a user's derived statistics.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_by_id(user_id)
        return UserStats(
            user_id=user.id,
            question_count=user.question_count,
            answer_count=user.answer_count,
            reputation=user.reputation,
        )
