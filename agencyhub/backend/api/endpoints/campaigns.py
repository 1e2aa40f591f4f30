"""
Campaigns API Endpoints.
"""

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
from agencyhub.backend.schemas.campaign import (
    CampaignCreate,
    CampaignResponse,
    CampaignStatus,
    CampaignUpdate,
)
from agencyhub.backend.services.campaign import CampaignService

router = APIRouter()

_manage_campaigns = require_permission(Permission.MANAGE_CAMPAIGNS)


@router.get(
    "",
    summary="List campaigns (paginated)",
    description="Client users only ever see their own client's campaigns.",
)
async def list_campaigns(
    db: DbSession,
    request_id: RequestId,
    user: CurrentUser,
    pagination: PaginationParams = Depends(get_pagination_params),
    client_id: str | None = Query(default=None),
    status: CampaignStatus | None = Query(default=None),
) -> dict[str, Any]:
    service = CampaignService(db)
    campaigns, total = await service.list_campaigns(
        user,
        client_id=client_id,
        status=status,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=campaigns,
        item_schema=CampaignResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/{campaign_id}", response_model=ApiResponse[CampaignResponse])
async def get_campaign(
    campaign_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[CampaignResponse]:
    service = CampaignService(db)
    campaign = await service.get_campaign(campaign_id, user)
    return ApiResponse(data=CampaignResponse.model_validate(campaign))


@router.post("", response_model=ApiResponse[CampaignResponse], status_code=201)
async def create_campaign(
    data: CampaignCreate,
    db: DbSession,
    _: User = Depends(_manage_campaigns),
) -> ApiResponse[CampaignResponse]:
    service = CampaignService(db)
    campaign = await service.create_campaign(data)
    return ApiResponse(data=CampaignResponse.model_validate(campaign))


@router.patch("/{campaign_id}", response_model=ApiResponse[CampaignResponse])
async def update_campaign(
    campaign_id: str,
    data: CampaignUpdate,
    db: DbSession,
    _: User = Depends(_manage_campaigns),
) -> ApiResponse[CampaignResponse]:
    service = CampaignService(db)
    campaign = await service.update_campaign(campaign_id, data)
    return ApiResponse(data=CampaignResponse.model_validate(campaign))


@router.delete("/{campaign_id}", status_code=204)
async def delete_campaign(
    campaign_id: str,
    db: DbSession,
    _: User = Depends(_manage_campaigns),
) -> None:
    service = CampaignService(db)
    await service.delete_campaign(campaign_id)
