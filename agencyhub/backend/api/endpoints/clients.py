"""
Clients API Endpoints.

Client records, ordering, social stats and the per-client onboarding
checklist.
"""

from typing import Any

from fastapi import APIRouter, Depends, Path, Query

from agencyhub.backend.core.dependencies import CurrentUser, DbSession, RequestId, require_permission
from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from agencyhub.backend.core.rbac import Permission
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.client import (
    ClientCreate,
    ClientReorderRequest,
    ClientResponse,
    ClientStatus,
    ClientUpdate,
    SocialPlatform,
    SocialStatResponse,
    SocialStatUpsert,
)
from agencyhub.backend.schemas.onboarding import (
    OnboardingChecklistResponse,
    OnboardingTaskCreate,
    OnboardingTaskResponse,
)
from agencyhub.backend.services.client import ClientService, SocialStatService
from agencyhub.backend.services.onboarding import OnboardingService

router = APIRouter()

_manage_clients = require_permission(Permission.MANAGE_CLIENTS)
_read_clients = require_permission(Permission.MANAGE_CLIENTS, allow_client_users=True)


@router.get("", summary="List clients (paginated)")
async def list_clients(
    db: DbSession,
    request_id: RequestId,
    user: User = Depends(_read_clients),
    pagination: PaginationParams = Depends(get_pagination_params),
    status: ClientStatus | None = Query(default=None),
    q: str | None = Query(default=None, max_length=100, description="Name or company contains"),
) -> dict[str, Any]:
    service = ClientService(db)
    clients, total = await service.list_clients(
        user,
        status=status,
        query=q,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=clients,
        item_schema=ClientResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.post(
    "/reorder",
    response_model=ApiResponse[list[ClientResponse]],
    summary="Reorder clients",
    description="Set display_order to each id's index in ordered_ids.",
)
async def reorder_clients(
    data: ClientReorderRequest,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> ApiResponse[list[ClientResponse]]:
    service = ClientService(db)
    clients = await service.reorder(data.ordered_ids)
    return ApiResponse(data=[ClientResponse.model_validate(c) for c in clients])


@router.get("/{client_id}", response_model=ApiResponse[ClientResponse], summary="Get a client")
async def get_client(
    client_id: str,
    db: DbSession,
    user: User = Depends(_read_clients),
) -> ApiResponse[ClientResponse]:
    service = ClientService(db)
    client = await service.get_client(client_id, user)
    return ApiResponse(data=ClientResponse.model_validate(client))


@router.post("", response_model=ApiResponse[ClientResponse], status_code=201, summary="Create a client")
async def create_client(
    data: ClientCreate,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> ApiResponse[ClientResponse]:
    service = ClientService(db)
    client = await service.create_client(data)
    return ApiResponse(data=ClientResponse.model_validate(client))


@router.patch("/{client_id}", response_model=ApiResponse[ClientResponse], summary="Update a client")
async def update_client(
    client_id: str,
    data: ClientUpdate,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> ApiResponse[ClientResponse]:
    service = ClientService(db)
    client = await service.update_client(client_id, data)
    return ApiResponse(data=ClientResponse.model_validate(client))


@router.delete("/{client_id}", status_code=204, summary="Delete a client")
async def delete_client(
    client_id: str,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> None:
    service = ClientService(db)
    await service.delete_client(client_id)


# =============================================================================
# Social stats
# =============================================================================


@router.get(
    "/{client_id}/social-stats",
    response_model=ApiResponse[list[SocialStatResponse]],
    summary="Social stats for a client",
)
async def list_social_stats(
    client_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[list[SocialStatResponse]]:
    service = SocialStatService(db)
    stats = await service.list_stats(client_id, user)
    return ApiResponse(data=[SocialStatResponse.model_validate(s) for s in stats])


@router.put(
    "/{client_id}/social-stats/{platform}",
    response_model=ApiResponse[SocialStatResponse],
    summary="Upsert social stats for a platform",
)
async def upsert_social_stats(
    client_id: str,
    data: SocialStatUpsert,
    db: DbSession,
    platform: SocialPlatform = Path(...),
    user: User = Depends(_manage_clients),
) -> ApiResponse[SocialStatResponse]:
    service = SocialStatService(db)
    stat = await service.upsert(client_id, platform, data, user)
    return ApiResponse(data=SocialStatResponse.model_validate(stat))


@router.delete(
    "/{client_id}/social-stats/{platform}",
    status_code=204,
    summary="Delete social stats for a platform",
)
async def delete_social_stats(
    client_id: str,
    db: DbSession,
    platform: SocialPlatform = Path(...),
    _: User = Depends(_manage_clients),
) -> None:
    service = SocialStatService(db)
    await service.delete(client_id, platform)


# =============================================================================
# Onboarding checklist
# =============================================================================


@router.get(
    "/{client_id}/onboarding",
    response_model=ApiResponse[OnboardingChecklistResponse],
    summary="Onboarding checklist and progress",
)
async def get_onboarding(
    client_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[OnboardingChecklistResponse]:
    service = OnboardingService(db)
    return ApiResponse(data=await service.get_checklist(client_id, user))


@router.post(
    "/{client_id}/onboarding",
    response_model=ApiResponse[OnboardingTaskResponse],
    status_code=201,
    summary="Add an onboarding task",
)
async def add_onboarding_task(
    client_id: str,
    data: OnboardingTaskCreate,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> ApiResponse[OnboardingTaskResponse]:
    service = OnboardingService(db)
    task = await service.add_task(client_id, data)
    return ApiResponse(data=OnboardingTaskResponse.model_validate(task))
