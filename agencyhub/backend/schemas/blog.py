"""
Blog CMS Schemas.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agencyhub.backend.core.utils import normalize_tags
from agencyhub.backend.schemas.base import UtcDateTime, reject_null

BlogStatus = Literal["draft", "published", "archived"]


class _TagsMixin(BaseModel):
    @field_validator("tags", mode="before", check_fields=False)
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        if value is None:
            return value
        return normalize_tags(value)


class BlogPostCreate(_TagsMixin):
    """Schema for creating a blog post. Tags may be a comma-separated string."""

    title: str = Field(..., min_length=1, max_length=200)
    slug: str | None = Field(default=None, max_length=200)
    excerpt: str | None = Field(default=None, max_length=1000)
    content: str = Field(..., min_length=1)
    author: str | None = Field(default=None, max_length=120)
    category: str | None = Field(default=None, max_length=80)
    tags: list[str] = Field(default_factory=list)
    read_time: int | None = Field(default=None, ge=0)
    featured: bool = False
    image_url: str | None = Field(default=None, max_length=2000)
    status: BlogStatus = "draft"
    published_at: UtcDateTime | None = None


class BlogPostUpdate(_TagsMixin):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    slug: str | None = Field(default=None, max_length=200)
    excerpt: str | None = Field(default=None, max_length=1000)
    content: str | None = Field(default=None, min_length=1)
    author: str | None = Field(default=None, max_length=120)
    category: str | None = Field(default=None, max_length=80)
    tags: list[str] | None = None
    read_time: int | None = Field(default=None, ge=0)
    featured: bool | None = None
    image_url: str | None = Field(default=None, max_length=2000)
    status: BlogStatus | None = None
    published_at: UtcDateTime | None = None

    check_not_null = reject_null("title", "content", "tags", "featured", "status")


class BlogPostResponse(BaseModel):
    id: str
    slug: str
    title: str
    excerpt: str | None
    content: str
    author: str | None
    category: str | None
    tags: list[str]
    read_time: int | None
    featured: bool
    image_url: str | None
    status: str
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BlogPostSummary(BaseModel):
    """List entry for the public blog index (no body)."""

    id: str
    slug: str
    title: str
    excerpt: str | None
    author: str | None
    category: str | None
    tags: list[str]
    read_time: int | None
    featured: bool
    image_url: str | None
    published_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
