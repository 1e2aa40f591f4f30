"""
In-app Notification API Endpoints.

Every route works on the caller's own notifications.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from agencyhub.backend.core.dependencies import CurrentUser, DbSession, RequestId
from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.notification import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from agencyhub.backend.services.notification import NotificationService

router = APIRouter()


@router.get("", summary="List notifications (paginated, newest first)")
async def list_notifications(
    db: DbSession,
    request_id: RequestId,
    user: CurrentUser,
    pagination: PaginationParams = Depends(get_pagination_params),
    unread_only: bool = Query(default=False),
) -> dict[str, Any]:
    service = NotificationService(db)
    notifications, total = await service.list_for_user(
        user.id,
        unread_only=unread_only,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=notifications,
        item_schema=NotificationResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/unread-count", response_model=ApiResponse[UnreadCountResponse])
async def unread_count(db: DbSession, user: CurrentUser) -> ApiResponse[UnreadCountResponse]:
    service = NotificationService(db)
    return ApiResponse(data=UnreadCountResponse(unread=await service.unread_count(user.id)))


@router.post("/read-all", response_model=ApiResponse[MarkAllReadResponse])
async def mark_all_read(db: DbSession, user: CurrentUser) -> ApiResponse[MarkAllReadResponse]:
    service = NotificationService(db)
    return ApiResponse(data=MarkAllReadResponse(updated=await service.mark_all_read(user.id)))


@router.post("/{notification_id}/read", response_model=ApiResponse[NotificationResponse])
async def mark_read(
    notification_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[NotificationResponse]:
    service = NotificationService(db)
    notification = await service.mark_read(notification_id, user.id)
    return ApiResponse(data=NotificationResponse.model_validate(notification))


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(notification_id: str, db: DbSession, user: CurrentUser) -> None:
    service = NotificationService(db)
    await service.delete(notification_id, user.id)
