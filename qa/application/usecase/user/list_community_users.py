"""List community users use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from qa.domain.model import User
from qa.domain.repository import UserSortOrder
from qa.domain.service import ListingService, parse_sort
from qa.domain.value import SearchTerm

from ..common import DirectoryPagination


class CommunityUserStats(BaseModel):
    """Derived statistics shown in the member directory."""

    questions: int
    answers: int
    reputation: int


class CommunityUser(BaseModel):
    """Member directory entry."""

    id: str
    name: str
    avatar_url: str | None
    bio: str | None
    created_at: datetime
    stats: CommunityUserStats

    @classmethod
    def from_user(cls, user: User) -> "CommunityUser":
        return cls(
            id=str(user.id),
            name=user.name,
            avatar_url=user.avatar_url,
            bio=user.bio,
            created_at=user.created_at,
            stats=CommunityUserStats(
                questions=user.question_count,
                answers=user.answer_count,
                reputation=user.reputation,
            ),
        )


class ListCommunityUsersRequest(BaseModel):
    """Member directory request (untrusted query values)."""

    page: str | None = None
    limit: str | None = None
    search: str | None = None
    sort: str | None = None


class ListCommunityUsersResponse(BaseModel):
    """Directory envelope."""

    users: list[CommunityUser]
    pagination: DirectoryPagination


class ListCommunityUsersUseCase:
    """Use case for the member directory (active users, name search)."""

    def __init__(self, listing_service: ListingService) -> None:
        """Initialize list community users use case.

        Args:
            listing_service: Listing domain service
        """
        self.listing_service = listing_service

    async def execute(
        self, request: ListCommunityUsersRequest
    ) -> ListCommunityUsersResponse:
        """Execute member directory listing."""
        page_request = self.listing_service.page_request(request.page, request.limit)
        sort = parse_sort(UserSortOrder, request.sort, UserSortOrder.REPUTATION)

        with logfire.span(
            "list_community_users.execute",
            page=page_request.page,
            limit=page_request.limit,
            sort=sort.value,
        ):
            page = await self.listing_service.list_users(
                page_request,
                sort=sort,
                search=SearchTerm.from_optional(request.search),
                active=True,
            )
            return ListCommunityUsersResponse(
                users=[CommunityUser.from_user(user) for user in page.items],
                pagination=DirectoryPagination.from_page(page),
            )
