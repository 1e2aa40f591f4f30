"""
Lead Repositories.
"""

from sqlalchemy import ColumnElement, or_
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.lead import Lead, LeadActivity
from agencyhub.backend.repositories.base import BaseRepository


class LeadRepository(BaseRepository[Lead]):
    model = Lead

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _conditions(
        self,
        stage: str | None = None,
        score: str | None = None,
        source: str | None = None,
        assigned_to_id: str | None = None,
        q: str | None = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if stage:
            conditions.append(Lead.stage == stage)
        if score:
            conditions.append(Lead.score == score)
        if source:
            conditions.append(Lead.source == source)
        if assigned_to_id:
            conditions.append(Lead.assigned_to_id == assigned_to_id)
        if q:
            pattern = f"%{q}%"
            conditions.append(or_(
                Lead.name.ilike(pattern),
                Lead.company.ilike(pattern),
                Lead.email.ilike(pattern),
            ))
        return conditions

    async def list_leads(self, limit: int = 20, offset: int = 0, **filters: str | None) -> list[Lead]:
        return await self.find(
            *self._conditions(**filters),
            order_by=Lead.created_at.desc(),
            limit=limit,
            offset=offset,
        )

    async def count_leads(self, **filters: str | None) -> int:
        return await self.count(*self._conditions(**filters))


class LeadActivityRepository(BaseRepository[LeadActivity]):
    model = LeadActivity

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_for_lead(self, lead_id: str) -> list[LeadActivity]:
        """Timeline for a lead, newest first."""
        return await self.find(LeadActivity.lead_id == lead_id, order_by=LeadActivity.created_at.desc())
