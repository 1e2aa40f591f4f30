"""
Discount Code Models.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.base import Base, TimestampMixin, UUIDMixin


class DiscountCode(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "discount_codes"

    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    discount_percentage: Mapped[int] = mapped_column(Integer, nullable=False)
    # None means the discount applies once
    duration_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stripe_coupon_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # None means unlimited
    max_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    uses_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Empty list means every package
    applies_to_packages: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_by: Mapped[str | None] = mapped_column(String(36), nullable=True)


class DiscountRedemption(UUIDMixin, Base):
    __tablename__ = "discount_redemptions"

    discount_code_id: Mapped[str] = mapped_column(
        ForeignKey("discount_codes.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
    client_id: Mapped[str | None] = mapped_column(
        ForeignKey("clients.id", ondelete="SET NULL"), nullable=True,
    )
    package_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    redeemed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
