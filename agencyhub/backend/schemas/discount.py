"""
Discount Code Schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from agencyhub.backend.schemas.base import UtcDateTime, reject_null


def _normalize_code(value: object) -> object:
    return value.strip().upper() if isinstance(value, str) else value


DiscountCodeStr = Annotated[
    str,
    BeforeValidator(_normalize_code),
    Field(min_length=3, max_length=50, pattern=r"^[A-Z0-9_-]+$"),
]


class DiscountCodeCreate(BaseModel):
    code: DiscountCodeStr
    description: str | None = Field(default=None, max_length=1000)
    discount_percentage: int = Field(..., ge=1, le=100)
    duration_months: int | None = Field(default=None, ge=1)
    stripe_coupon_id: str | None = Field(default=None, max_length=100)
    max_uses: int | None = Field(default=None, ge=1)
    expires_at: UtcDateTime | None = None
    is_active: bool = True
    applies_to_packages: list[str] = Field(default_factory=list)


class DiscountCodeUpdate(BaseModel):
    description: str | None = Field(default=None, max_length=1000)
    discount_percentage: int | None = Field(default=None, ge=1, le=100)
    duration_months: int | None = Field(default=None, ge=1)
    stripe_coupon_id: str | None = Field(default=None, max_length=100)
    max_uses: int | None = Field(default=None, ge=1)
    expires_at: UtcDateTime | None = None
    is_active: bool | None = None
    applies_to_packages: list[str] | None = None

    check_not_null = reject_null("discount_percentage", "is_active", "applies_to_packages")


class DiscountCodeResponse(BaseModel):
    id: str
    code: str
    description: str | None
    discount_percentage: int
    duration_months: int | None
    stripe_coupon_id: str | None
    max_uses: int | None
    uses_count: int
    expires_at: datetime | None
    is_active: bool
    applies_to_packages: list[str]
    created_by: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DiscountValidateRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    package_id: str | None = None


class DiscountValidateResponse(BaseModel):
    """Summary of a code that is currently redeemable."""

    valid: bool = True
    code: str
    description: str | None
    discount_percentage: int
    duration_months: int | None
    stripe_coupon_id: str | None


class DiscountRedeemRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    package_id: str | None = None
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class DiscountRedemptionResponse(BaseModel):
    id: str
    discount_code_id: str
    user_id: str | None
    client_id: str | None
    package_id: str | None
    discount_amount: float
    redeemed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DiscountStatsResponse(BaseModel):
    total_codes: int
    active_codes: int
    total_redemptions: int
    total_discounted: float
