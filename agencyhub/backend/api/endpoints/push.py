"""
Web Push API Endpoints.
"""

from fastapi import APIRouter

from agencyhub.backend.core.dependencies import AdminUser, CurrentUser, DbSession
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.push import (
    PushDeliveryResult,
    PushSendRequest,
    PushSubscribeRequest,
    PushSubscriptionResponse,
    PushUnsubscribeRequest,
    VapidKeyResponse,
)
from agencyhub.backend.services.push import PushService

router = APIRouter()


@router.get(
    "/vapid-public-key",
    response_model=ApiResponse[VapidKeyResponse],
    description="Public. 503 when VAPID keys are not configured.",
)
async def vapid_public_key() -> ApiResponse[VapidKeyResponse]:
    return ApiResponse(data=VapidKeyResponse(public_key=PushService.public_key()))


@router.post("/subscribe", response_model=ApiResponse[PushSubscriptionResponse], status_code=201)
async def subscribe(
    data: PushSubscribeRequest,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[PushSubscriptionResponse]:
    service = PushService(db)
    subscription = await service.subscribe(user, data)
    return ApiResponse(
        data=PushSubscriptionResponse(subscribed=True, endpoint=subscription.endpoint),
    )


@router.post("/unsubscribe", response_model=ApiResponse[PushSubscriptionResponse])
async def unsubscribe(
    data: PushUnsubscribeRequest,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[PushSubscriptionResponse]:
    service = PushService(db)
    await service.unsubscribe(user, data.endpoint)
    return ApiResponse(data=PushSubscriptionResponse(subscribed=False, endpoint=data.endpoint))


@router.post(
    "/send",
    response_model=ApiResponse[PushDeliveryResult],
    summary="Send a push notification",
    description="Targets user_id, every user with role, or all subscribed users.",
)
async def send(
    data: PushSendRequest,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[PushDeliveryResult]:
    service = PushService(db)
    return ApiResponse(data=await service.send(data))
