"""
Dashboard Schemas.
"""

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    total_clients: int
    active_clients: int
    active_campaigns: int
    total_campaign_budget: float
    open_tickets: int
    tasks_by_status: dict[str, int]
    overdue_tasks: int
