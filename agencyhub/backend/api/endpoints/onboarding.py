"""
Onboarding Task API Endpoints.

Item-level routes; the per-client list and create live under /clients.
"""

from fastapi import APIRouter, Depends

from agencyhub.backend.core.dependencies import DbSession, require_permission
from agencyhub.backend.core.rbac import Permission
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.onboarding import OnboardingTaskResponse, OnboardingTaskUpdate
from agencyhub.backend.services.onboarding import OnboardingService

router = APIRouter()

_manage_clients = require_permission(Permission.MANAGE_CLIENTS)


@router.patch("/{task_id}", response_model=ApiResponse[OnboardingTaskResponse])
async def update_onboarding_task(
    task_id: str,
    data: OnboardingTaskUpdate,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> ApiResponse[OnboardingTaskResponse]:
    service = OnboardingService(db)
    task = await service.update_task(task_id, data)
    return ApiResponse(data=OnboardingTaskResponse.model_validate(task))


@router.post(
    "/{task_id}/toggle",
    response_model=ApiResponse[OnboardingTaskResponse],
    summary="Toggle completion",
)
async def toggle_onboarding_task(
    task_id: str,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> ApiResponse[OnboardingTaskResponse]:
    service = OnboardingService(db)
    task = await service.toggle(task_id)
    return ApiResponse(data=OnboardingTaskResponse.model_validate(task))


@router.delete("/{task_id}", status_code=204)
async def delete_onboarding_task(
    task_id: str,
    db: DbSession,
    _: User = Depends(_manage_clients),
) -> None:
    service = OnboardingService(db)
    await service.delete_task(task_id)
