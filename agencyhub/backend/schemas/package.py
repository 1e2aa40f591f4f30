"""
Subscription Package Schemas.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.schemas.base import reject_null


class PackageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=5000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    features: list[str] = Field(default_factory=list)
    platform_limit: int = Field(default=1, ge=1)
    is_featured: bool = False
    is_active: bool = True
    display_order: int = 0


class PackageUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=5000)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    features: list[str] | None = None
    platform_limit: int | None = Field(default=None, ge=1)
    is_featured: bool | None = None
    is_active: bool | None = None
    display_order: int | None = None

    check_not_null = reject_null(
        "name",
        "price",
        "features",
        "platform_limit",
        "is_featured",
        "is_active",
        "display_order",
    )


class PackageResponse(BaseModel):
    id: str
    name: str
    description: str | None
    price: float
    features: list[str]
    platform_limit: int
    is_featured: bool
    is_active: bool
    display_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecommendRequest(BaseModel):
    services: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)


class RecommendResponse(BaseModel):
    """
    Recommendation result.

    ``reason`` is "platform_count" when the tier came from the platform
    count and "featured" when the featured package was returned instead.
    """

    reason: str
    tier: str | None = None
    platform_limit: int | None = None
    package: PackageResponse | None = None
