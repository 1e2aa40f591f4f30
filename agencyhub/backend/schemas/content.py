"""
Content Calendar Schemas.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import UtcDateTime, reject_null

ContentPlatform = Literal["facebook", "instagram", "twitter", "linkedin", "tiktok", "youtube"]
ApprovalStatus = Literal["draft", "pending", "approved", "rejected", "published"]


def _dedupe(platforms: list[str]) -> list[str]:
    return list(dict.fromkeys(platforms))


Platforms = Annotated[list[ContentPlatform], AfterValidator(_dedupe)]


class ContentPostCreate(BaseModel):
    """Schema for scheduling a post."""

    client_id: str
    platforms: Platforms = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=300)
    caption: str | None = Field(default=None, max_length=10000)
    media_urls: list[str] = Field(default_factory=list)
    scheduled_for: UtcDateTime | None = None
    approval_status: ApprovalStatus = "draft"
    visible_to_client: bool = True


class ContentPostUpdate(BaseModel):
    platforms: Platforms | None = Field(default=None, min_length=1)
    title: str | None = Field(default=None, min_length=1, max_length=300)
    caption: str | None = Field(default=None, max_length=10000)
    media_urls: list[str] | None = None
    scheduled_for: UtcDateTime | None = None
    approval_status: ApprovalStatus | None = None
    client_feedback: str | None = Field(default=None, max_length=5000)
    visible_to_client: bool | None = None

    check_not_null = reject_null(
        "platforms",
        "title",
        "media_urls",
        "approval_status",
        "visible_to_client",
    )


class ContentApproval(BaseModel):
    """Client decision on a post."""

    approval_status: Literal["approved", "rejected"]
    feedback: str | None = Field(default=None, max_length=5000)


class ContentPostResponse(BaseModel):
    id: str
    client_id: str
    platforms: list[str]
    title: str
    caption: str | None
    media_urls: list[str]
    scheduled_for: datetime | None
    approval_status: str
    client_feedback: str | None
    visible_to_client: bool
    created_by: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
