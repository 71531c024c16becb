"""Deactivate and restore users (admin)."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from qa.domain.error import NotAuthorizedError, UnauthorizedError
from qa.domain.service import UserService
from qa.domain.value import UserId

from .list_admin_users import AdminUser


class SetUserActiveRequest(BaseModel):
    """Deactivate or restore request."""

    user_id: str
    active: bool
    viewer_id: str | None = None  # Current user ID (must be an admin)


class SetUserActiveResponse(BaseModel):
    """Deactivate or restore response."""

    success: bool = True
    message: str
    user: AdminUser


class SetUserActiveUseCase:
    """Use case for deactivating a user or restoring a deactivated one.

    Deactivation is a soft delete: the account leaves the community
    directory but keeps its content, votes and reputation. Both actions
    are idempotent.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize set user active use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: SetUserActiveRequest) -> SetUserActiveResponse:
        """Execute deactivate/restore flow.

        Raises:
            UnauthorizedError: If the caller is not signed in
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the target user doesn't exist
        """
        action = "restore users" if request.active else "deactivate users"
        if not request.viewer_id:
            raise UnauthorizedError(action)
        viewer = await self.user_service.get_by_id(UserId(UUID(request.viewer_id)))
        if not viewer.is_admin:
            logfire.warn(
                "User activation change by non-admin",
                user_id=request.viewer_id,
                target_id=request.user_id,
            )
            raise NotAuthorizedError("users", "admin", request.viewer_id)

        user = await self.user_service.set_active(
            UserId(UUID(request.user_id)), request.active
        )
        return SetUserActiveResponse(
            message="User restored" if request.active else "User deactivated",
            user=AdminUser.from_user(user),
        )
