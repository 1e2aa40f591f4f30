"""
Support Ticket API Endpoints.
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
from agencyhub.backend.schemas.ticket import (
    TicketCreate,
    TicketPriority,
    TicketResponse,
    TicketStatus,
    TicketUpdate,
)
from agencyhub.backend.services.ticket import TicketService

router = APIRouter()

_tickets = require_permission(Permission.MANAGE_TICKETS)


@router.get("", summary="List tickets (paginated)")
async def list_tickets(
    db: DbSession,
    request_id: RequestId,
    user: User = Depends(_tickets),
    pagination: PaginationParams = Depends(get_pagination_params),
    status: TicketStatus | None = Query(default=None),
    priority: TicketPriority | None = Query(default=None),
) -> dict[str, Any]:
    service = TicketService(db)
    tickets, total = await service.list_tickets(
        user,
        status=status,
        priority=priority,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=tickets,
        item_schema=TicketResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/{ticket_id}", response_model=ApiResponse[TicketResponse])
async def get_ticket(
    ticket_id: str,
    db: DbSession,
    user: User = Depends(_tickets),
) -> ApiResponse[TicketResponse]:
    service = TicketService(db)
    ticket = await service.get_ticket(ticket_id, user)
    return ApiResponse(data=TicketResponse.model_validate(ticket))


@router.post("", response_model=ApiResponse[TicketResponse], status_code=201)
async def create_ticket(
    data: TicketCreate,
    db: DbSession,
    user: User = Depends(_tickets),
) -> ApiResponse[TicketResponse]:
    service = TicketService(db)
    ticket = await service.create_ticket(data, user)
    return ApiResponse(data=TicketResponse.model_validate(ticket))


@router.patch("/{ticket_id}", response_model=ApiResponse[TicketResponse])
async def update_ticket(
    ticket_id: str,
    data: TicketUpdate,
    db: DbSession,
    user: User = Depends(_tickets),
) -> ApiResponse[TicketResponse]:
    service = TicketService(db)
    ticket = await service.update_ticket(ticket_id, data, user)
    return ApiResponse(data=TicketResponse.model_validate(ticket))


@router.post(
    "/{ticket_id}/advance",
    response_model=ApiResponse[TicketResponse],
    summary="Advance ticket status",
    description="open → in_progress → resolved. Resolved and closed tickets cannot advance.",
)
async def advance_ticket(
    ticket_id: str,
    db: DbSession,
    user: User = Depends(_tickets),
) -> ApiResponse[TicketResponse]:
    service = TicketService(db)
    ticket = await service.advance(ticket_id, user)
    return ApiResponse(data=TicketResponse.model_validate(ticket))


@router.delete("/{ticket_id}", status_code=204)
async def delete_ticket(
    ticket_id: str,
    db: DbSession,
    user: User = Depends(_tickets),
) -> None:
    service = TicketService(db)
    await service.delete_ticket(ticket_id, user)
