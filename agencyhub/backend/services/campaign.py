"""
Campaign Service.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import ValidationError
from agencyhub.backend.models.campaign import Campaign
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.campaign import CampaignRepository
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.schemas.campaign import CampaignCreate, CampaignUpdate
from agencyhub.backend.services.base import BaseService


def _check_dates(start: date | None, end: date | None) -> None:
    if start and end and end < start:
        raise ValidationError(
            "end_date must be on or after start_date",
            details={"start_date": start.isoformat(), "end_date": end.isoformat()},
        )


class CampaignService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = CampaignRepository(session)
        self.client_repo = ClientRepository(session)

    async def list_campaigns(
        self,
        user: User,
        client_id: str | None = None,
        status: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Campaign], int]:
        scope = self._client_scope(user)
        if scope is not None:
            client_id = scope
        campaigns = await self.repo.list_campaigns(client_id, status, limit=limit, offset=offset)
        total = await self.repo.count_campaigns(client_id, status)
        return campaigns, total

    async def get_campaign(self, campaign_id: str, user: User) -> Campaign:
        campaign = await self.repo.get_by_id(campaign_id)
        self._check_tenant(user, campaign.client_id)
        return campaign

    async def create_campaign(self, data: CampaignCreate) -> Campaign:
        _check_dates(data.start_date, data.end_date)
        await self.client_repo.get_by_id(data.client_id)

        self._log_operation("Creating campaign", name=data.name, client_id=data.client_id)
        return await self._execute_db_operation(
            "create_campaign",
            self.repo.create(**data.model_dump()),
        )

    async def update_campaign(self, campaign_id: str, data: CampaignUpdate) -> Campaign:
        campaign = await self.repo.get_by_id(campaign_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return campaign

        _check_dates(
            update_data.get("start_date", campaign.start_date),
            update_data.get("end_date", campaign.end_date),
        )
        self._log_operation("Updating campaign", campaign_id=campaign_id, fields=list(update_data))
        return await self._execute_db_operation(
            "update_campaign",
            self.repo.apply(campaign, **update_data),
        )

    async def delete_campaign(self, campaign_id: str) -> None:
        self._log_operation("Deleting campaign", campaign_id=campaign_id)
        await self._execute_db_operation("delete_campaign", self.repo.delete(campaign_id))
