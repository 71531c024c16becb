"""List admin users use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from qa.domain.error import NotAuthorizedError, UnauthorizedError
from qa.domain.model import User
from qa.domain.repository import UserSortOrder
from qa.domain.service import ListingService, UserService, parse_role, parse_sort
from qa.domain.value import SearchTerm, UserId, UserRole

from ..common import DirectoryPagination


class AdminUser(BaseModel):
    """User row in the admin listing."""

    id: str
    name: str
    email: str
    role: UserRole
    active: bool
    avatar_url: str | None
    question_count: int
    answer_count: int
    reputation: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AdminUser":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            active=user.active,
            avatar_url=user.avatar_url,
            question_count=user.question_count,
            answer_count=user.answer_count,
            reputation=user.reputation,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ListAdminUsersRequest(BaseModel):
    """Admin listing request (untrusted query values)."""

    page: str | None = None
    limit: str | None = None
    search: str | None = None  # Name or email
    sort: str | None = None
    active: str | None = None  # "true" / "false", anything else means all
    role: str | None = None  # "user" / "admin", "all" means all
    viewer_id: str | None = None  # Current user ID (must be an admin)


class ListAdminUsersResponse(BaseModel):
    """Directory envelope."""

    users: list[AdminUser]
    pagination: DirectoryPagination


def parse_active(value: str | None) -> bool | None:
    """Parse the active filter; only "true" and "false" filter."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


class ListAdminUsersUseCase:
    """Use case for the admin user listing."""

    def __init__(
        self, listing_service: ListingService, user_service: UserService
    ) -> None:
        """Initialize list admin users use case.

        Args:
            listing_service: Listing domain service
            user_service: User domain service (admin check)
        """
        self.listing_service = listing_service
        self.user_service = user_service

    async def execute(self, request: ListAdminUsersRequest) -> ListAdminUsersResponse:
        """Execute admin listing.

        Raises:
            UnauthorizedError: If the caller is not signed in
            NotAuthorizedError: If the caller is not an admin
        """
        if not request.viewer_id:
            raise UnauthorizedError("list users")
        viewer = await self.user_service.get_by_id(UserId(UUID(request.viewer_id)))
        if not viewer.is_admin:
            logfire.warn("Admin listing by non-admin", user_id=request.viewer_id)
            raise NotAuthorizedError("users", "admin", request.viewer_id)

        page_request = self.listing_service.page_request(
            request.page, request.limit, admin=True
        )
        sort = parse_sort(UserSortOrder, request.sort, UserSortOrder.NEWEST)

        page = await self.listing_service.list_users(
            page_request,
            sort=sort,
            search=SearchTerm.from_optional(request.search),
            search_email=True,
            active=parse_active(request.active),
            role=parse_role(request.role),
        )
        return ListAdminUsersResponse(
            users=[AdminUser.from_user(user) for user in page.items],
            pagination=DirectoryPagination.from_page(page),
        )
