"""User directory and stats routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from qa.application.usecase.user import (
    GetUserStatsRequest,
    GetUserStatsResponse,
    GetUserStatsUseCase,
    ListCommunityUsersRequest,
    ListCommunityUsersResponse,
    ListCommunityUsersUseCase,
)
from qa.domain.error import DomainError
from qa.interface.error import http_error

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/community", response_model=ListCommunityUsersResponse)
async def list_community_users(
    list_community_users_use_case: FromDishka[ListCommunityUsersUseCase],
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    sort: str | None = None,
) -> ListCommunityUsersResponse:
    """Member directory of active users, highest reputation first by default.

    Example:
        GET /users/community?search=ali&sort=name

        Response:
        {
            "users": [
                {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "name": "Alice",
                    "avatar_url": null,
                    "bio": null,
                    "created_at": "2025-01-15T12:34:56Z",
                    "stats": {"questions": 3, "answers": 7, "reputation": 58}
                }
            ],
            "pagination": {
                "currentPage": 1,
                "totalPages": 1,
                "totalItems": 1,
                "itemsPerPage": 10
            }
        }
    """
    try:
        return await list_community_users_use_case.execute(
            ListCommunityUsersRequest(page=page, limit=limit, search=search, sort=sort)
        )
    except DomainError as e:
        raise http_error(e, "List community users")


@router.get("/{user_id}/stats", response_model=GetUserStatsResponse)
async def get_user_stats(
    user_id: UUID,
    get_user_stats_use_case: FromDishka[GetUserStatsUseCase],
) -> GetUserStatsResponse:
    """Question count, answer count and reputation of a user.

    consistent reports whether the cached reputation matches a
    recomputation from the vote ledger.
    """
    try:
        return await get_user_stats_use_case.execute(
            GetUserStatsRequest(user_id=str(user_id))
        )
    except DomainError as e:
        raise http_error(e, "Get user stats")
