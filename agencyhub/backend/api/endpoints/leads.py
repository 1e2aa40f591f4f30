"""
Lead Pipeline API Endpoints.

Every route needs can_manage_leads. Sales agents only reach the leads
assigned to them.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from agencyhub.backend.core.dependencies import DbSession, RequestId, require_permission
from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from agencyhub.backend.core.rbac import Permission
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.lead import (
    LeadActivityCreate,
    LeadActivityResponse,
    LeadConversionResponse,
    LeadCreate,
    LeadResponse,
    LeadScore,
    LeadSource,
    LeadStage,
    LeadUpdate,
)
from agencyhub.backend.services.lead import LeadService

router = APIRouter()

_leads = require_permission(Permission.MANAGE_LEADS)


@router.get("", summary="List leads (paginated, newest first)")
async def list_leads(
    db: DbSession,
    request_id: RequestId,
    user: User = Depends(_leads),
    pagination: PaginationParams = Depends(get_pagination_params),
    stage: LeadStage | None = Query(default=None),
    score: LeadScore | None = Query(default=None),
    source: LeadSource | None = Query(default=None),
    assigned_to_id: str | None = Query(default=None),
    q: str | None = Query(default=None, max_length=200, description="Match name, company or email"),
) -> dict[str, Any]:
    service = LeadService(db)
    leads, total = await service.list_leads(
        user,
        stage=stage,
        score=score,
        source=source,
        assigned_to_id=assigned_to_id,
        q=q,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=leads,
        item_schema=LeadResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/{lead_id}", response_model=ApiResponse[LeadResponse])
async def get_lead(
    lead_id: str,
    db: DbSession,
    user: User = Depends(_leads),
) -> ApiResponse[LeadResponse]:
    lead = await LeadService(db).get_lead(lead_id, user)
    return ApiResponse(data=LeadResponse.model_validate(lead))


@router.post("", response_model=ApiResponse[LeadResponse], status_code=201)
async def create_lead(
    data: LeadCreate,
    db: DbSession,
    user: User = Depends(_leads),
) -> ApiResponse[LeadResponse]:
    lead = await LeadService(db).create_lead(data, user)
    return ApiResponse(data=LeadResponse.model_validate(lead))


@router.patch(
    "/{lead_id}",
    response_model=ApiResponse[LeadResponse],
    description="Moving a lead to closed_won converts it into a client.",
)
async def update_lead(
    lead_id: str,
    data: LeadUpdate,
    db: DbSession,
    user: User = Depends(_leads),
) -> ApiResponse[LeadResponse]:
    lead = await LeadService(db).update_lead(lead_id, data, user)
    return ApiResponse(data=LeadResponse.model_validate(lead))


@router.delete("/{lead_id}", status_code=204)
async def delete_lead(
    lead_id: str,
    db: DbSession,
    user: User = Depends(_leads),
) -> None:
    await LeadService(db).delete_lead(lead_id, user)


@router.post(
    "/{lead_id}/convert",
    response_model=ApiResponse[LeadConversionResponse],
    summary="Convert a lead into a client",
    description="Idempotent: a lead that was already converted returns its existing client.",
)
async def convert_lead(
    lead_id: str,
    db: DbSession,
    user: User = Depends(_leads),
) -> ApiResponse[LeadConversionResponse]:
    lead, created = await LeadService(db).convert(lead_id, user)
    return ApiResponse(data=LeadConversionResponse(
        lead=LeadResponse.model_validate(lead),
        client_id=lead.converted_to_client_id,
        created=created,
    ))


# =============================================================================
# Activities
# =============================================================================


@router.get("/{lead_id}/activities", response_model=ApiResponse[list[LeadActivityResponse]])
async def list_activities(
    lead_id: str,
    db: DbSession,
    user: User = Depends(_leads),
) -> ApiResponse[list[LeadActivityResponse]]:
    activities = await LeadService(db).list_activities(lead_id, user)
    return ApiResponse(data=[LeadActivityResponse.model_validate(a) for a in activities])


@router.post(
    "/{lead_id}/activities",
    response_model=ApiResponse[LeadActivityResponse],
    status_code=201,
)
async def add_activity(
    lead_id: str,
    data: LeadActivityCreate,
    db: DbSession,
    user: User = Depends(_leads),
) -> ApiResponse[LeadActivityResponse]:
    activity = await LeadService(db).add_activity(lead_id, data, user)
    return ApiResponse(data=LeadActivityResponse.model_validate(activity))
