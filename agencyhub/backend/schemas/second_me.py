"""
Second Me Schemas.

Avatar requests and the content generated from them.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import reject_null

RequestStatus = Literal["pending", "processing", "ready", "active", "paused"]
ContentType = Literal["image", "video"]


class SecondMeRequestCreate(BaseModel):
    photo_urls: list[str] = Field(..., min_length=1)
    notes: str | None = Field(default=None, max_length=5000)


class SecondMeRequestUpdate(BaseModel):
    status: RequestStatus | None = None
    avatar_url: str | None = Field(default=None, max_length=2000)
    setup_paid: bool | None = None
    weekly_subscription_active: bool | None = None
    notes: str | None = Field(default=None, max_length=5000)

    check_not_null = reject_null("status", "setup_paid", "weekly_subscription_active")


class SecondMeRequestResponse(BaseModel):
    id: str
    client_id: str
    status: str
    photo_urls: list[str]
    avatar_url: str | None
    setup_paid: bool
    weekly_subscription_active: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SecondMeContentCreate(BaseModel):
    content_type: ContentType
    media_url: str = Field(..., min_length=1, max_length=2000)
    caption: str | None = Field(default=None, max_length=5000)


class SecondMeContentReview(BaseModel):
    status: Literal["approved", "rejected"]


class SecondMeContentResponse(BaseModel):
    id: str
    request_id: str
    client_id: str
    content_type: str
    media_url: str
    caption: str | None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
