"""
Ticket Repository.
"""

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.ticket import Ticket
from agencyhub.backend.repositories.base import BaseRepository


class TicketRepository(BaseRepository[Ticket]):
    model = Ticket

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _conditions(
        self,
        status: str | None = None,
        priority: str | None = None,
        created_by: str | None = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if status:
            conditions.append(Ticket.status == status)
        if priority:
            conditions.append(Ticket.priority == priority)
        if created_by:
            conditions.append(Ticket.created_by == created_by)
        return conditions

    async def list_tickets(
        self,
        status: str | None = None,
        priority: str | None = None,
        created_by: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Ticket]:
        return await self.find(
            *self._conditions(status, priority, created_by),
            order_by=Ticket.created_at.desc(),
            limit=limit,
            offset=offset,
        )

    async def count_tickets(
        self,
        status: str | None = None,
        priority: str | None = None,
        created_by: str | None = None,
    ) -> int:
        return await self.count(*self._conditions(status, priority, created_by))

    async def count_open(self) -> int:
        return await self.count(Ticket.status.in_(["open", "in_progress"]))

    async def search(self, query: str, created_by: str | None = None, limit: int = 5) -> list[Ticket]:
        conditions: list[ColumnElement[bool]] = [Ticket.subject.ilike(f"%{query}%")]
        if created_by:
            conditions.append(Ticket.created_by == created_by)
        return await self.find(*conditions, order_by=Ticket.created_at.desc(), limit=limit)
