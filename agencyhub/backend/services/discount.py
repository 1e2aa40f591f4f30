"""
Discount Service.

Discount code administration, public validation and redemption.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import ConflictError, ValidationError
from agencyhub.backend.core.utils import round_money, utc_now
from agencyhub.backend.models.discount import DiscountCode, DiscountRedemption
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.discount import (
    DiscountCodeRepository,
    DiscountRedemptionRepository,
)
from agencyhub.backend.schemas.discount import (
    DiscountCodeCreate,
    DiscountCodeUpdate,
    DiscountRedeemRequest,
    DiscountStatsResponse,
)
from agencyhub.backend.services.base import BaseService


def rejection_reason(code: DiscountCode | None, package_id: str | None = None) -> str | None:
    """Why a code cannot be used right now, or None when it can."""
    if code is None:
        return "Discount code not found"
    if not code.is_active:
        return "Discount code is not active"
    if code.expires_at is not None and code.expires_at <= utc_now():
        return "Discount code has expired"
    if code.max_uses is not None and code.uses_count >= code.max_uses:
        return "Discount code has reached its usage limit"
    if package_id and code.applies_to_packages and package_id not in code.applies_to_packages:
        return "Discount code does not apply to this package"
    return None


def discount_amount(amount: Decimal, percentage: int) -> Decimal:
    return round_money(Decimal(amount) * percentage / 100)


class DiscountService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = DiscountCodeRepository(session)
        self.redemption_repo = DiscountRedemptionRepository(session)

    async def list_codes(self) -> list[DiscountCode]:
        return await self.repo.list_codes()

    async def create_code(self, data: DiscountCodeCreate, user: User) -> DiscountCode:
        if await self.repo.get_by_code(data.code):
            raise ConflictError(f"Discount code '{data.code}' already exists")

        self._log_operation("Creating discount code", code=data.code, percentage=data.discount_percentage)
        return await self._execute_db_operation(
            "create_discount_code",
            self.repo.create(**data.model_dump(), created_by=user.id),
        )

    async def update_code(self, code_id: str, data: DiscountCodeUpdate) -> DiscountCode:
        code = await self.repo.get_by_id(code_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return code
        self._log_operation("Updating discount code", code=code.code, fields=list(update_data))
        return await self._execute_db_operation(
            "update_discount_code",
            self.repo.apply(code, **update_data),
        )

    async def delete_code(self, code_id: str) -> None:
        self._log_operation("Deleting discount code", code_id=code_id)
        await self._execute_db_operation("delete_discount_code", self.repo.delete(code_id))

    async def stats(self) -> DiscountStatsResponse:
        redemptions, discounted = await self.redemption_repo.totals()
        return DiscountStatsResponse(
            total_codes=await self.repo.count(),
            active_codes=await self.repo.count_active(),
            total_redemptions=redemptions,
            total_discounted=float(round_money(discounted)),
        )

    async def validate(self, raw_code: str, package_id: str | None = None) -> DiscountCode:
        """
        Look up a code and check it is redeemable.

        Raises:
            ValidationError: With the rejection reason
        """
        normalized = raw_code.strip().upper()
        code = await self.repo.get_by_code(normalized)
        reason = rejection_reason(code, package_id)
        if reason is not None:
            self._log_debug("Discount code rejected", code=normalized, reason=reason)
            raise ValidationError(reason, details={"code": normalized, "valid": False})
        return code

    async def redeem(self, data: DiscountRedeemRequest, user: User) -> DiscountRedemption:
        """Validate, record the redemption and count the use."""
        code = await self.validate(data.code, data.package_id)
        amount = discount_amount(data.amount, code.discount_percentage)

        redemption = await self._execute_db_operation(
            "create_discount_redemption",
            self.redemption_repo.create(
                discount_code_id=code.id,
                user_id=user.id,
                client_id=user.client_id,
                package_id=data.package_id,
                discount_amount=amount,
            ),
        )
        await self._execute_db_operation(
            "count_discount_use",
            self.repo.apply(code, uses_count=code.uses_count + 1),
        )
        self._log_operation(
            "Discount code redeemed",
            code=code.code,
            user_id=user.id,
            discount_amount=str(amount),
        )
        return redemption
