"""
Analytics API Endpoints.

Client users are always pinned to their own client's rows.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from agencyhub.backend.core.dependencies import CurrentUser, DbSession, require_permission
from agencyhub.backend.core.rbac import Permission
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.analytics import (
    AnalyticsMetricCreate,
    AnalyticsMetricResponse,
    AnalyticsSummaryResponse,
    MetricType,
)
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.services.analytics import AnalyticsService

router = APIRouter()

_record_metrics = require_permission(Permission.VIEW_REPORTS, Permission.MANAGE_CAMPAIGNS)


@router.post("/metrics", response_model=ApiResponse[AnalyticsMetricResponse], status_code=201)
async def record_metric(
    data: AnalyticsMetricCreate,
    db: DbSession,
    _: User = Depends(_record_metrics),
) -> ApiResponse[AnalyticsMetricResponse]:
    service = AnalyticsService(db)
    metric = await service.record(data)
    return ApiResponse(data=AnalyticsMetricResponse.model_validate(metric))


@router.get("/metrics", response_model=ApiResponse[list[AnalyticsMetricResponse]])
async def list_metrics(
    db: DbSession,
    user: CurrentUser,
    client_id: str | None = Query(default=None),
    metric_type: MetricType | None = Query(default=None),
    platform: str | None = Query(default=None, max_length=50),
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
) -> ApiResponse[list[AnalyticsMetricResponse]]:
    service = AnalyticsService(db)
    rows = await service.list_metrics(
        user,
        client_id=client_id,
        metric_type=metric_type,
        platform=platform,
        start=start,
        end=end,
    )
    return ApiResponse(data=[AnalyticsMetricResponse.model_validate(r) for r in rows])


@router.get(
    "/summary",
    response_model=ApiResponse[AnalyticsSummaryResponse],
    description="Ads totals plus the latest social and website figures. platform=all disables the platform filter.",
)
async def summary(
    db: DbSession,
    user: CurrentUser,
    client_id: str | None = Query(default=None),
    platform: str | None = Query(default=None, max_length=50),
) -> ApiResponse[AnalyticsSummaryResponse]:
    service = AnalyticsService(db)
    return ApiResponse(data=await service.summary(user, client_id=client_id, platform=platform))


@router.delete("/metrics/{metric_id}", status_code=204)
async def delete_metric(
    metric_id: str,
    db: DbSession,
    _: User = Depends(_record_metrics),
) -> None:
    service = AnalyticsService(db)
    await service.delete(metric_id)
