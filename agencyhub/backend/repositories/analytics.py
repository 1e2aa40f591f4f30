"""
Analytics Metric Repository.
"""

from datetime import date

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.analytics import AnalyticsMetric
from agencyhub.backend.repositories.base import BaseRepository


class AnalyticsMetricRepository(BaseRepository[AnalyticsMetric]):
    model = AnalyticsMetric

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_metrics(
        self,
        client_id: str | None = None,
        metric_type: str | None = None,
        platform: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[AnalyticsMetric]:
        """Rows matching the filters, oldest date first."""
        conditions: list[ColumnElement[bool]] = []
        if client_id:
            conditions.append(AnalyticsMetric.client_id == client_id)
        if metric_type:
            conditions.append(AnalyticsMetric.metric_type == metric_type)
        if platform:
            conditions.append(AnalyticsMetric.platform == platform)
        if start:
            conditions.append(AnalyticsMetric.date >= start)
        if end:
            conditions.append(AnalyticsMetric.date <= end)
        return await self.find(
            *conditions,
            order_by=[AnalyticsMetric.date, AnalyticsMetric.created_at],
        )
