"""
Client Repository.

Data access for clients and their per-platform social stats.
"""

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.client import Client, SocialStat
from agencyhub.backend.repositories.base import BaseRepository


class ClientRepository(BaseRepository[Client]):
    """Repository for Client model."""

    model = Client

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _conditions(
        self,
        status: str | None = None,
        query: str | None = None,
        client_id: str | None = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if status:
            conditions.append(Client.status == status)
        if query:
            pattern = f"%{query}%"
            conditions.append(or_(Client.name.ilike(pattern), Client.company.ilike(pattern)))
        if client_id:
            conditions.append(Client.id == client_id)
        return conditions

    async def list_clients(
        self,
        status: str | None = None,
        query: str | None = None,
        client_id: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Client]:
        """List clients in display order, then by name."""
        return await self.find(
            *self._conditions(status, query, client_id),
            order_by=[Client.display_order, Client.name],
            limit=limit,
            offset=offset,
        )

    async def count_clients(
        self,
        status: str | None = None,
        query: str | None = None,
        client_id: str | None = None,
    ) -> int:
        return await self.count(*self._conditions(status, query, client_id))

    async def next_display_order(self) -> int:
        result = await self.session.execute(select(func.max(Client.display_order)))
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def search(self, query: str, client_id: str | None = None, limit: int = 5) -> list[Client]:
        pattern = f"%{query}%"
        conditions: list[ColumnElement[bool]] = [
            or_(
                Client.name.ilike(pattern),
                Client.company.ilike(pattern),
                Client.email.ilike(pattern),
            )
        ]
        if client_id:
            conditions.append(Client.id == client_id)
        return await self.find(*conditions, order_by=Client.name, limit=limit)


class SocialStatRepository(BaseRepository[SocialStat]):
    """Repository for per-platform social stats."""

    model = SocialStat

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_for_client(self, client_id: str) -> list[SocialStat]:
        return await self.find(SocialStat.client_id == client_id, order_by=SocialStat.platform)

    async def get_for_platform(self, client_id: str, platform: str) -> SocialStat | None:
        return await self.find_one(
            SocialStat.client_id == client_id,
            SocialStat.platform == platform,
        )
