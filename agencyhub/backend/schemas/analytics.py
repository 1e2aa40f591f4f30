"""
Analytics Schemas.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

MetricType = Literal["social", "ads", "website"]


class AnalyticsMetricCreate(BaseModel):
    """
    One day of figures for a client.

    ``metrics`` keys by type:
        ads: spend, revenue, impressions, clicks, conversions, ctr
        social: followers, engagement, reach
        website: sessions, users, bounce_rate
    """

    client_id: str
    campaign_id: str | None = None
    metric_type: MetricType
    platform: str | None = Field(default=None, max_length=40)
    date: date
    metrics: dict[str, Any] = Field(default_factory=dict)


class AnalyticsMetricResponse(BaseModel):
    id: str
    client_id: str
    campaign_id: str | None
    metric_type: str
    platform: str | None
    date: date
    metrics: dict[str, Any]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdsSummary(BaseModel):
    spend: float = 0.0
    revenue: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    ctr: float = 0.0
    roas: float = 0.0


class SocialSummary(BaseModel):
    followers: float = 0.0
    engagement: float = 0.0
    reach: float = 0.0


class WebsiteSummary(BaseModel):
    sessions: float = 0.0
    users: float = 0.0
    bounce_rate: float = 0.0


class AnalyticsSummaryResponse(BaseModel):
    client_id: str | None
    platform: str | None
    ads: AdsSummary
    social: SocialSummary
    website: WebsiteSummary
