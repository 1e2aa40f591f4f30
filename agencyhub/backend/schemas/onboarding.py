"""
Onboarding Checklist Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import reject_null


class OnboardingTaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    due_day: int = Field(..., ge=1, le=30)


class OnboardingTaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    due_day: int | None = Field(default=None, ge=1, le=30)

    check_not_null = reject_null("title", "due_day")


class OnboardingTaskResponse(BaseModel):
    id: str
    client_id: str
    title: str
    description: str | None
    due_day: int
    completed: bool
    completed_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class OnboardingChecklistResponse(BaseModel):
    """A client's checklist with the completion percentage."""

    client_id: str
    progress: int
    completed: int
    total: int
    tasks: list[OnboardingTaskResponse]
