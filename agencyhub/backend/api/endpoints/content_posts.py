"""
Content Calendar API Endpoints.
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Query

from agencyhub.backend.core.dependencies import CurrentUser, DbSession, RequestId, require_permission
from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from agencyhub.backend.core.rbac import Permission
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.content import (
    ApprovalStatus,
    ContentApproval,
    ContentPostCreate,
    ContentPostResponse,
    ContentPostUpdate,
)
from agencyhub.backend.services.content import ContentPostService

router = APIRouter()

_manage_content = require_permission(Permission.MANAGE_CONTENT)
_approve_content = require_permission(Permission.MANAGE_CONTENT, allow_client_users=True)


@router.get(
    "",
    summary="List content posts (paginated)",
    description="start/end bound scheduled_for. Client users see only posts marked visible_to_client.",
)
async def list_posts(
    db: DbSession,
    request_id: RequestId,
    user: CurrentUser,
    pagination: PaginationParams = Depends(get_pagination_params),
    client_id: str | None = Query(default=None),
    approval_status: ApprovalStatus | None = Query(default=None),
    start: datetime | None = Query(default=None),
    end: datetime | None = Query(default=None),
) -> dict[str, Any]:
    service = ContentPostService(db)
    posts, total = await service.list_posts(
        user,
        client_id=client_id,
        approval_status=approval_status,
        start=start,
        end=end,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=posts,
        item_schema=ContentPostResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/{post_id}", response_model=ApiResponse[ContentPostResponse])
async def get_post(
    post_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[ContentPostResponse]:
    service = ContentPostService(db)
    post = await service.get_post(post_id, user)
    return ApiResponse(data=ContentPostResponse.model_validate(post))


@router.post("", response_model=ApiResponse[ContentPostResponse], status_code=201)
async def create_post(
    data: ContentPostCreate,
    db: DbSession,
    user: User = Depends(_manage_content),
) -> ApiResponse[ContentPostResponse]:
    service = ContentPostService(db)
    post = await service.create_post(data, user)
    return ApiResponse(data=ContentPostResponse.model_validate(post))


@router.patch("/{post_id}", response_model=ApiResponse[ContentPostResponse])
async def update_post(
    post_id: str,
    data: ContentPostUpdate,
    db: DbSession,
    _: User = Depends(_manage_content),
) -> ApiResponse[ContentPostResponse]:
    service = ContentPostService(db)
    post = await service.update_post(post_id, data)
    return ApiResponse(data=ContentPostResponse.model_validate(post))


@router.post(
    "/{post_id}/approval",
    response_model=ApiResponse[ContentPostResponse],
    summary="Approve or reject a post",
)
async def set_approval(
    post_id: str,
    data: ContentApproval,
    db: DbSession,
    user: User = Depends(_approve_content),
) -> ApiResponse[ContentPostResponse]:
    service = ContentPostService(db)
    post = await service.set_approval(post_id, data, user)
    return ApiResponse(data=ContentPostResponse.model_validate(post))


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    db: DbSession,
    _: User = Depends(_manage_content),
) -> None:
    service = ContentPostService(db)
    await service.delete_post(post_id)
