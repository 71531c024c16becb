"""Admin routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from qa.application.usecase.user import (
    ListAdminUsersRequest,
    ListAdminUsersResponse,
    ListAdminUsersUseCase,
    SetUserActiveRequest,
    SetUserActiveResponse,
    SetUserActiveUseCase,
)
from qa.domain.error import DomainError
from qa.domain.service import JWTService
from qa.interface.api.session import caller_id
from qa.interface.error import http_error

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/users", response_model=ListAdminUsersResponse)
async def list_users(
    list_admin_users_use_case: FromDishka[ListAdminUsersUseCase],
    jwt_service: FromDishka[JWTService],
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    active: str | None = None,
    role: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> ListAdminUsersResponse:
    """List all users for administration, newest first by default.

    search matches name or email. active is "true" or "false" (anything
    else lists both); role is "user", "admin" or "all".

    Requires an admin.
    """
    try:
        return await list_admin_users_use_case.execute(
            ListAdminUsersRequest(
                page=page,
                limit=limit,
                search=search,
                sort=sort,
                active=active,
                role=role,
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "List admin users")


@router.delete("/users/{user_id}", response_model=SetUserActiveResponse)
async def deactivate_user(
    user_id: UUID,
    set_user_active_use_case: FromDishka[SetUserActiveUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SetUserActiveResponse:
    """Deactivate a user. Their content, votes and reputation are kept.

    Requires an admin.
    """
    try:
        return await set_user_active_use_case.execute(
            SetUserActiveRequest(
                user_id=str(user_id),
                active=False,
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Deactivate user")


@router.put("/users/{user_id}/restore", response_model=SetUserActiveResponse)
async def restore_user(
    user_id: UUID,
    set_user_active_use_case: FromDishka[SetUserActiveUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SetUserActiveResponse:
    """Restore a deactivated user.

    Requires an admin.
    """
    try:
        return await set_user_active_use_case.execute(
            SetUserActiveRequest(
                user_id=str(user_id),
                active=True,
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Restore user")
