"""
Lead Schemas.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import reject_null

LeadStage = Literal["prospect", "qualified", "proposal", "closed_won", "closed_lost"]
LeadScore = Literal["hot", "warm", "cold"]
LeadSource = Literal["website", "ads", "form", "call", "referral", "social"]
ActivityType = Literal["note", "call", "email", "sms", "meeting"]


class LeadCreate(BaseModel):
    """Schema for a new lead. Sales agents are always assigned their own leads."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=500)
    industry: str | None = Field(default=None, max_length=100)
    stage: LeadStage = "prospect"
    score: LeadScore = "warm"
    source: LeadSource = "website"
    value: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=20000)
    tags: list[str] = Field(default_factory=list)
    next_follow_up: datetime | None = None
    assigned_to_id: str | None = None


class LeadUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=500)
    industry: str | None = Field(default=None, max_length=100)
    stage: LeadStage | None = None
    score: LeadScore | None = None
    source: LeadSource | None = None
    value: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=20000)
    tags: list[str] | None = None
    next_follow_up: datetime | None = None
    assigned_to_id: str | None = None

    check_not_null = reject_null("name", "stage", "score", "source", "tags")


class LeadResponse(BaseModel):
    id: str
    assigned_to_id: str | None
    name: str
    email: str | None
    phone: str | None
    company: str | None
    website: str | None
    industry: str | None
    stage: str
    score: str
    source: str
    value: float | None
    notes: str | None
    tags: list[str]
    next_follow_up: datetime | None
    last_contact_method: str | None
    last_contact_at: datetime | None
    last_contact_notes: str | None
    converted_to_client_id: str | None
    converted_at: datetime | None
    created_by: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LeadActivityCreate(BaseModel):
    type: ActivityType
    subject: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)


class LeadActivityResponse(BaseModel):
    id: str
    lead_id: str
    user_id: str | None
    type: str
    subject: str | None
    description: str | None
    details: dict[str, Any]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LeadConversionResponse(BaseModel):
    """Result of converting a lead. ``created`` is False when it was already converted."""

    lead: LeadResponse
    client_id: str
    created: bool
