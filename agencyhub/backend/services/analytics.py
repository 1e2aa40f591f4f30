"""
Analytics Service.

Stores daily metric rows and rolls them up into the summary cards:
ads totals with CTR and ROAS, and the latest social and website figures.
"""

from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import ValidationError
from agencyhub.backend.models.analytics import AnalyticsMetric
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.analytics import AnalyticsMetricRepository
from agencyhub.backend.repositories.campaign import CampaignRepository
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.schemas.analytics import (
    AdsSummary,
    AnalyticsMetricCreate,
    AnalyticsSummaryResponse,
    SocialSummary,
    WebsiteSummary,
)
from agencyhub.backend.services.base import BaseService

ADS_SUM_KEYS = ("spend", "revenue", "impressions", "clicks", "conversions")
SOCIAL_KEYS = ("followers", "engagement", "reach")
WEBSITE_KEYS = ("sessions", "users", "bounce_rate")


def _number(metrics: dict[str, Any], key: str) -> float:
    """Numeric value of a metric key; missing or non-numeric counts as 0."""
    try:
        return float(metrics.get(key) or 0)
    except (TypeError, ValueError):
        return 0.0


def summarize_ads(rows: list[AnalyticsMetric]) -> AdsSummary:
    totals = {key: sum(_number(row.metrics, key) for row in rows) for key in ADS_SUM_KEYS}
    ctr = sum(_number(row.metrics, "ctr") for row in rows) / len(rows) if rows else 0.0
    roas = totals["revenue"] / totals["spend"] if totals["spend"] else 0.0
    return AdsSummary(
        **{key: round(value, 2) for key, value in totals.items()},
        ctr=round(ctr, 2),
        roas=round(roas, 2),
    )


def _latest(rows: list[AnalyticsMetric], keys: tuple[str, ...]) -> dict[str, float]:
    if not rows:
        return {}
    latest = max(rows, key=lambda row: (row.date, row.created_at))
    return {key: round(_number(latest.metrics, key), 2) for key in keys}


def summarize(rows: list[AnalyticsMetric]) -> tuple[AdsSummary, SocialSummary, WebsiteSummary]:
    by_type: dict[str, list[AnalyticsMetric]] = {"ads": [], "social": [], "website": []}
    for row in rows:
        by_type.setdefault(row.metric_type, []).append(row)
    return (
        summarize_ads(by_type["ads"]),
        SocialSummary(**_latest(by_type["social"], SOCIAL_KEYS)),
        WebsiteSummary(**_latest(by_type["website"], WEBSITE_KEYS)),
    )


class AnalyticsService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = AnalyticsMetricRepository(session)
        self.client_repo = ClientRepository(session)
        self.campaign_repo = CampaignRepository(session)

    async def record(self, data: AnalyticsMetricCreate) -> AnalyticsMetric:
        await self.client_repo.get_by_id(data.client_id)
        if data.campaign_id:
            campaign = await self.campaign_repo.get_by_id(data.campaign_id)
            if campaign.client_id != data.client_id:
                raise ValidationError("Campaign does not belong to this client")

        self._log_operation(
            "Recording metrics",
            client_id=data.client_id,
            metric_type=data.metric_type,
            date=data.date.isoformat(),
        )
        return await self._execute_db_operation(
            "create_analytics_metric",
            self.repo.create(**data.model_dump()),
        )

    async def list_metrics(
        self,
        user: User,
        client_id: str | None = None,
        metric_type: str | None = None,
        platform: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[AnalyticsMetric]:
        scope = self._client_scope(user)
        return await self.repo.list_metrics(
            client_id=scope or client_id,
            metric_type=metric_type,
            platform=_platform_filter(platform),
            start=start,
            end=end,
        )

    async def summary(
        self,
        user: User,
        client_id: str | None = None,
        platform: str | None = None,
    ) -> AnalyticsSummaryResponse:
        client_id = self._client_scope(user) or client_id
        rows = await self.repo.list_metrics(client_id=client_id, platform=_platform_filter(platform))
        ads, social, website = summarize(rows)
        self._log_debug("Analytics summary", client_id=client_id, rows=len(rows))
        return AnalyticsSummaryResponse(
            client_id=client_id,
            platform=_platform_filter(platform),
            ads=ads,
            social=social,
            website=website,
        )

    async def delete(self, metric_id: str) -> None:
        self._log_operation("Deleting metric row", metric_id=metric_id)
        await self._execute_db_operation("delete_analytics_metric", self.repo.delete(metric_id))


def _platform_filter(platform: str | None) -> str | None:
    """``all`` and empty mean no platform filter."""
    if not platform or platform.lower() == "all":
        return None
    return platform
