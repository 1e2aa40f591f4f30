"""
Campaign Repository.
"""

from decimal import Decimal

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.campaign import Campaign
from agencyhub.backend.repositories.base import BaseRepository


class CampaignRepository(BaseRepository[Campaign]):
    model = Campaign

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _conditions(self, client_id: str | None, status: str | None) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if client_id:
            conditions.append(Campaign.client_id == client_id)
        if status:
            conditions.append(Campaign.status == status)
        return conditions

    async def list_campaigns(
        self,
        client_id: str | None = None,
        status: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Campaign]:
        return await self.find(
            *self._conditions(client_id, status),
            order_by=Campaign.created_at.desc(),
            limit=limit,
            offset=offset,
        )

    async def count_campaigns(self, client_id: str | None = None, status: str | None = None) -> int:
        return await self.count(*self._conditions(client_id, status))

    async def total_budget(self, status: str) -> Decimal:
        result = await self.session.execute(
            select(func.coalesce(func.sum(Campaign.budget), 0)).where(Campaign.status == status)
        )
        return Decimal(str(result.scalar_one()))

    async def search(self, query: str, client_id: str | None = None, limit: int = 5) -> list[Campaign]:
        conditions: list[ColumnElement[bool]] = [Campaign.name.ilike(f"%{query}%")]
        if client_id:
            conditions.append(Campaign.client_id == client_id)
        return await self.find(*conditions, order_by=Campaign.name, limit=limit)
