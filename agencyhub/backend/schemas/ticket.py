"""
Ticket Schemas.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import reject_null

TicketPriority = Literal["normal", "urgent"]
TicketStatus = Literal["open", "in_progress", "resolved", "closed"]


class TicketCreate(BaseModel):
    """Schema for opening a ticket. Client users' client_id is forced."""

    subject: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=20000)
    priority: TicketPriority = "normal"
    client_id: str | None = None
    assigned_to_id: str | None = None


class TicketUpdate(BaseModel):
    subject: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=20000)
    priority: TicketPriority | None = None
    status: TicketStatus | None = None
    assigned_to_id: str | None = None

    check_not_null = reject_null("subject", "description", "priority", "status")


class TicketResponse(BaseModel):
    id: str
    client_id: str | None
    assigned_to_id: str | None
    subject: str
    description: str
    priority: str
    status: str
    resolved_at: datetime | None
    created_by: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
