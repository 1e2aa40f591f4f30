"""
Dashboard Service.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.utils import round_money, utc_now
from agencyhub.backend.models.campaign import Campaign
from agencyhub.backend.models.client import Client
from agencyhub.backend.repositories.campaign import CampaignRepository
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.repositories.task import TaskRepository
from agencyhub.backend.repositories.ticket import TicketRepository
from agencyhub.backend.schemas.dashboard import DashboardStatsResponse
from agencyhub.backend.services.base import BaseService


class DashboardService(BaseService):
    """Headline counts for the agency dashboard."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.client_repo = ClientRepository(session)
        self.campaign_repo = CampaignRepository(session)
        self.task_repo = TaskRepository(session)
        self.ticket_repo = TicketRepository(session)

    async def stats(self) -> DashboardStatsResponse:
        tasks_by_status = {status: 0 for status in ("todo", "in_progress", "review", "completed")}
        tasks_by_status.update(await self.task_repo.count_by_status())

        return DashboardStatsResponse(
            total_clients=await self.client_repo.count(),
            active_clients=await self.client_repo.count(Client.status == "active"),
            active_campaigns=await self.campaign_repo.count(Campaign.status == "active"),
            total_campaign_budget=float(round_money(await self.campaign_repo.total_budget("active"))),
            open_tickets=await self.ticket_repo.count_open(),
            tasks_by_status=tasks_by_status,
            overdue_tasks=await self.task_repo.count_overdue(utc_now()),
        )
