"""
Subscription Package Repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.package import SubscriptionPackage
from agencyhub.backend.repositories.base import BaseRepository


class SubscriptionPackageRepository(BaseRepository[SubscriptionPackage]):
    model = SubscriptionPackage

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_active(self) -> list[SubscriptionPackage]:
        return await self.find(
            SubscriptionPackage.is_active == True,  # noqa: E712
            order_by=[SubscriptionPackage.display_order, SubscriptionPackage.price],
        )

    async def get_by_name(self, name: str) -> SubscriptionPackage | None:
        return await self.find_one(SubscriptionPackage.name == name)

    async def get_active_by_name(self, name: str) -> SubscriptionPackage | None:
        return await self.find_one(
            SubscriptionPackage.name == name,
            SubscriptionPackage.is_active == True,  # noqa: E712
        )

    async def get_featured(self) -> SubscriptionPackage | None:
        return await self.find_one(
            SubscriptionPackage.is_featured == True,  # noqa: E712
            SubscriptionPackage.is_active == True,  # noqa: E712
        )
