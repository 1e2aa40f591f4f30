"""
Second Me API Endpoints.

Clients request an AI avatar and review the content produced for it;
admins run the pipeline.
"""

from fastapi import APIRouter, Depends

from agencyhub.backend.core.dependencies import AdminUser, DbSession, require_roles
from agencyhub.backend.core.rbac import Role
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.second_me import (
    SecondMeContentCreate,
    SecondMeContentResponse,
    SecondMeContentReview,
    SecondMeRequestCreate,
    SecondMeRequestResponse,
    SecondMeRequestUpdate,
)
from agencyhub.backend.services.second_me import SecondMeService

router = APIRouter()

_admin_or_client = require_roles(Role.ADMIN, Role.CLIENT)


@router.post(
    "/requests",
    response_model=ApiResponse[SecondMeRequestResponse],
    status_code=201,
    description="One live (non-paused) request per client.",
)
async def create_request(
    data: SecondMeRequestCreate,
    db: DbSession,
    user: User = Depends(_admin_or_client),
) -> ApiResponse[SecondMeRequestResponse]:
    service = SecondMeService(db)
    request = await service.create_request(data, user)
    return ApiResponse(data=SecondMeRequestResponse.model_validate(request))


@router.get("/requests", response_model=ApiResponse[list[SecondMeRequestResponse]])
async def list_requests(
    db: DbSession,
    user: User = Depends(_admin_or_client),
) -> ApiResponse[list[SecondMeRequestResponse]]:
    service = SecondMeService(db)
    requests = await service.list_requests(user)
    return ApiResponse(data=[SecondMeRequestResponse.model_validate(r) for r in requests])


@router.patch("/requests/{request_id}", response_model=ApiResponse[SecondMeRequestResponse])
async def update_request(
    request_id: str,
    data: SecondMeRequestUpdate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[SecondMeRequestResponse]:
    service = SecondMeService(db)
    request = await service.update_request(request_id, data)
    return ApiResponse(data=SecondMeRequestResponse.model_validate(request))


@router.post(
    "/requests/{request_id}/content",
    response_model=ApiResponse[SecondMeContentResponse],
    status_code=201,
)
async def add_content(
    request_id: str,
    data: SecondMeContentCreate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[SecondMeContentResponse]:
    service = SecondMeService(db)
    content = await service.add_content(request_id, data)
    return ApiResponse(data=SecondMeContentResponse.model_validate(content))


@router.get(
    "/requests/{request_id}/content",
    response_model=ApiResponse[list[SecondMeContentResponse]],
)
async def list_content(
    request_id: str,
    db: DbSession,
    user: User = Depends(_admin_or_client),
) -> ApiResponse[list[SecondMeContentResponse]]:
    service = SecondMeService(db)
    items = await service.list_content(request_id, user)
    return ApiResponse(data=[SecondMeContentResponse.model_validate(c) for c in items])


@router.patch("/content/{content_id}", response_model=ApiResponse[SecondMeContentResponse])
async def review_content(
    content_id: str,
    data: SecondMeContentReview,
    db: DbSession,
    user: User = Depends(_admin_or_client),
) -> ApiResponse[SecondMeContentResponse]:
    service = SecondMeService(db)
    content = await service.review_content(content_id, data, user)
    return ApiResponse(data=SecondMeContentResponse.model_validate(content))
