"""
Users API Endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from agencyhub.backend.core.dependencies import (
    DbSession,
    RequestId,
    StaffUser,
    require_permission,
)
from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from agencyhub.backend.core.rbac import Permission
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.user import (
    TeamMemberResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from agencyhub.backend.services.auth import UserService

router = APIRouter()

_manage_users = require_permission(Permission.MANAGE_USERS)


@router.get("", summary="List users (paginated)")
async def list_users(
    db: DbSession,
    request_id: RequestId,
    _: User = Depends(_manage_users),
    pagination: PaginationParams = Depends(get_pagination_params),
    role: str | None = Query(default=None, description="Filter by role"),
) -> dict[str, Any]:
    service = UserService(db)
    users, total = await service.list_users(role, limit=pagination.limit, offset=pagination.offset)
    return create_paginated_response(
        items=users,
        item_schema=UserResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get(
    "/team",
    response_model=ApiResponse[list[TeamMemberResponse]],
    summary="Assignable team members",
)
async def list_team(db: DbSession, user: StaffUser) -> ApiResponse[list[TeamMemberResponse]]:
    service = UserService(db)
    members = await service.list_team()
    return ApiResponse(data=[TeamMemberResponse.model_validate(m) for m in members])


@router.get("/{user_id}", response_model=ApiResponse[UserResponse], summary="Get a user")
async def get_user(
    user_id: str,
    db: DbSession,
    _: User = Depends(_manage_users),
) -> ApiResponse[UserResponse]:
    service = UserService(db)
    return ApiResponse(data=UserResponse.model_validate(await service.get_user(user_id)))


@router.post("", response_model=ApiResponse[UserResponse], status_code=201, summary="Create a user")
async def create_user(
    data: UserCreate,
    db: DbSession,
    _: User = Depends(_manage_users),
) -> ApiResponse[UserResponse]:
    service = UserService(db)
    user = await service.create_user(data)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse], summary="Update a user")
async def update_user(
    user_id: str,
    data: UserUpdate,
    db: DbSession,
    _: User = Depends(_manage_users),
) -> ApiResponse[UserResponse]:
    service = UserService(db)
    user = await service.update_user(user_id, data)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.delete("/{user_id}", status_code=204, summary="Delete a user")
async def delete_user(
    user_id: str,
    db: DbSession,
    actor: User = Depends(_manage_users),
) -> None:
    service = UserService(db)
    await service.delete_user(user_id, actor)
