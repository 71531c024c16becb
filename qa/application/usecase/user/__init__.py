"""User use cases."""

from .get_user_stats import GetUserStatsRequest, GetUserStatsResponse, GetUserStatsUseCase
from .list_admin_users import (
    AdminUser,
    ListAdminUsersRequest,
    ListAdminUsersResponse,
    ListAdminUsersUseCase,
)
from .list_community_users import (
    CommunityUser,
    ListCommunityUsersRequest,
    ListCommunityUsersResponse,
    ListCommunityUsersUseCase,
)
from .set_user_active import (
    SetUserActiveRequest,
    SetUserActiveResponse,
    SetUserActiveUseCase,
)

__all__ = [
    "AdminUser",
    "CommunityUser",
    "GetUserStatsRequest",
    "GetUserStatsResponse",
    "GetUserStatsUseCase",
    "ListAdminUsersRequest",
    "ListAdminUsersResponse",
    "ListAdminUsersUseCase",
    "ListCommunityUsersRequest",
    "ListCommunityUsersResponse",
    "ListCommunityUsersUseCase",
    "SetUserActiveRequest",
    "SetUserActiveResponse",
    "SetUserActiveUseCase",
]
