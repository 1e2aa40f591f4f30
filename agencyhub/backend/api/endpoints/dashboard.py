"""
Dashboard API Endpoint.
"""

from fastapi import APIRouter

from agencyhub.backend.core.dependencies import DbSession, StaffUser
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.dashboard import DashboardStatsResponse
from agencyhub.backend.services.dashboard import DashboardService

router = APIRouter()


@router.get("/stats", response_model=ApiResponse[DashboardStatsResponse])
async def dashboard_stats(db: DbSession, user: StaffUser) -> ApiResponse[DashboardStatsResponse]:
    service = DashboardService(db)
    return ApiResponse(data=await service.stats())
