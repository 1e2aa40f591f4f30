"""
Campaign Schemas.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import reject_null

CampaignType = Literal["social", "ads", "content", "email"]
CampaignStatus = Literal["planning", "active", "paused", "completed"]


class CampaignCreate(BaseModel):
    client_id: str
    name: str = Field(..., min_length=1, max_length=200)
    type: CampaignType
    status: CampaignStatus = "planning"
    start_date: date | None = None
    end_date: date | None = None
    budget: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    description: str | None = Field(default=None, max_length=20000)
    goals: list[str] = Field(default_factory=list)


class CampaignUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    type: CampaignType | None = None
    status: CampaignStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    budget: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    description: str | None = Field(default=None, max_length=20000)
    goals: list[str] | None = None

    check_not_null = reject_null("name", "type", "status", "goals")


class CampaignResponse(BaseModel):
    id: str
    client_id: str
    name: str
    type: str
    status: str
    start_date: date | None
    end_date: date | None
    budget: float | None
    description: str | None
    goals: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
