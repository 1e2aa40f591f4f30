"""
Analytics Metric Model.

One row per (client, metric type, platform, date). ``metrics`` is a free
JSON object; the keys each summary reads are listed in
services/analytics.py.
"""

import datetime
from typing import Any

from sqlalchemy import JSON, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from agencyhub.backend.models.base import Base, TimestampMixin, UUIDMixin


class AnalyticsMetric(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "analytics_metrics"

    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    campaign_id: Mapped[str | None] = mapped_column(
        ForeignKey("campaigns.id", ondelete="SET NULL"), nullable=True,
    )
    metric_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    platform: Mapped[str | None] = mapped_column(String(40), nullable=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    metrics: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
