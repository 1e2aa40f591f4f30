"""
Task Schemas.

Tasks, task comments and the task-space tree.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import UtcDateTime, reject_null

TaskStatus = Literal["todo", "in_progress", "review", "completed"]
TaskPriority = Literal["low", "normal", "high", "urgent"]
RecurringPattern = Literal["daily", "weekly", "monthly", "yearly"]
ScheduleFrom = Literal["due_date", "completion_date"]


# =============================================================================
# Task spaces
# =============================================================================


class TaskSpaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    icon: str | None = Field(default=None, max_length=50)
    color: str = Field(default="#3B82F6", max_length=20)
    parent_space_id: str | None = None


class TaskSpaceUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    icon: str | None = Field(default=None, max_length=50)
    color: str | None = Field(default=None, max_length=20)

    check_not_null = reject_null("name", "color")


class TaskSpaceMove(BaseModel):
    """Drag-drop target: new parent (None for top level) and sibling index."""

    parent_space_id: str | None = None
    index: int = 0


class TaskSpaceResponse(BaseModel):
    id: str
    name: str
    icon: str | None
    color: str
    parent_space_id: str | None
    order: int
    created_by: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskSpaceNode(TaskSpaceResponse):
    children: list["TaskSpaceNode"] = Field(default_factory=list)


# =============================================================================
# Tasks
# =============================================================================


class ChecklistItem(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    text: str = Field(..., min_length=1, max_length=500)
    completed: bool = False


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str | None = Field(default=None, max_length=20000)
    campaign_id: str | None = None
    client_id: str | None = None
    assigned_to_id: str | None = None
    space_id: str | None = None
    status: TaskStatus = "todo"
    priority: TaskPriority = "normal"
    due_date: UtcDateTime | None = None
    checklist: list[ChecklistItem] = Field(default_factory=list)
    estimated_hours: float | None = Field(default=None, ge=0)
    is_recurring: bool = False
    recurring_pattern: RecurringPattern | None = None
    recurring_interval: int = Field(default=1, ge=1)
    recurring_end_date: UtcDateTime | None = None
    schedule_from: ScheduleFrom = "due_date"


class TaskUpdate(BaseModel):
    """Schema for updating a task. Only provided fields change."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = Field(default=None, max_length=20000)
    campaign_id: str | None = None
    client_id: str | None = None
    assigned_to_id: str | None = None
    space_id: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: UtcDateTime | None = None
    checklist: list[ChecklistItem] | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    is_recurring: bool | None = None
    recurring_pattern: RecurringPattern | None = None
    recurring_interval: int | None = Field(default=None, ge=1)
    recurring_end_date: UtcDateTime | None = None
    schedule_from: ScheduleFrom | None = None

    check_not_null = reject_null(
        "title",
        "status",
        "priority",
        "checklist",
        "is_recurring",
        "recurring_interval",
        "schedule_from",
    )


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str | None
    campaign_id: str | None
    client_id: str | None
    assigned_to_id: str | None
    space_id: str | None
    status: str
    priority: str
    due_date: datetime | None
    completed_at: datetime | None
    checklist: list[ChecklistItem]
    estimated_hours: float | None
    is_recurring: bool
    recurring_pattern: str | None
    recurring_interval: int
    recurring_end_date: datetime | None
    schedule_from: str
    recurrence_series_id: str | None
    created_by: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskCommentCreate(BaseModel):
    comment: str = Field(..., min_length=1, max_length=5000)


class TaskCommentResponse(BaseModel):
    id: str
    task_id: str
    user_id: str
    comment: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
