"""
Discount Code Repositories.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.discount import DiscountCode, DiscountRedemption
from agencyhub.backend.repositories.base import BaseRepository


class DiscountCodeRepository(BaseRepository[DiscountCode]):
    model = DiscountCode

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_code(self, code: str) -> DiscountCode | None:
        return await self.find_one(DiscountCode.code == code)

    async def list_codes(self) -> list[DiscountCode]:
        return await self.find(order_by=DiscountCode.created_at.desc())

    async def count_active(self) -> int:
        return await self.count(DiscountCode.is_active == True)  # noqa: E712


class DiscountRedemptionRepository(BaseRepository[DiscountRedemption]):
    model = DiscountRedemption

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def totals(self) -> tuple[int, Decimal]:
        """(redemption count, sum of discount amounts)."""
        result = await self.session.execute(
            select(
                func.count(DiscountRedemption.id),
                func.coalesce(func.sum(DiscountRedemption.discount_amount), 0),
            )
        )
        count, amount = result.one()
        return count, Decimal(str(amount))
