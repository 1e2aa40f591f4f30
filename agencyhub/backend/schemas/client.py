"""
Client Schemas.

Pydantic schemas for client records and per-platform social stats.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import reject_null

ClientStatus = Literal["active", "inactive", "onboarding"]
SocialPlatform = Literal["instagram", "facebook", "tiktok", "linkedin", "twitter", "youtube"]


class ClientCreate(BaseModel):
    """Schema for creating a new client."""

    name: str = Field(..., min_length=1, max_length=200, examples=["Acme Coffee"])
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=500)
    logo_url: str | None = Field(default=None, max_length=2000)
    service_tags: list[str] = Field(default_factory=list)
    status: ClientStatus = "onboarding"
    assigned_to_id: str | None = None
    notes: str | None = Field(default=None, max_length=20000)
    social_links: dict[str, Any] = Field(default_factory=dict)


class ClientUpdate(BaseModel):
    """Schema for updating a client."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=500)
    logo_url: str | None = Field(default=None, max_length=2000)
    service_tags: list[str] | None = None
    status: ClientStatus | None = None
    assigned_to_id: str | None = None
    notes: str | None = Field(default=None, max_length=20000)
    social_links: dict[str, Any] | None = None

    check_not_null = reject_null("name", "service_tags", "status", "social_links")


class ClientResponse(BaseModel):
    """Schema for client in API responses."""

    id: str
    name: str
    email: str | None
    phone: str | None
    company: str | None
    website: str | None
    logo_url: str | None
    service_tags: list[str]
    status: str
    assigned_to_id: str | None
    notes: str | None
    social_links: dict[str, Any]
    display_order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientReorderRequest(BaseModel):
    ordered_ids: list[str] = Field(..., min_length=1)


class SocialStatUpsert(BaseModel):
    """Body for PUT /clients/{id}/social-stats/{platform}."""

    followers: int = Field(default=0, ge=0)
    posts: int = Field(default=0, ge=0)
    engagement: float = Field(default=0.0, ge=0)
    reach: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    growth_rate: float = 0.0
    notes: str | None = Field(default=None, max_length=5000)


class SocialStatResponse(BaseModel):
    id: str
    client_id: str
    platform: str
    followers: int
    posts: int
    engagement: float
    reach: int
    views: int
    growth_rate: float
    notes: str | None
    updated_by: str | None
    last_updated: datetime

    model_config = ConfigDict(from_attributes=True)
