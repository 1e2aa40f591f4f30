"""
Onboarding Service.

Per-client onboarding checklist: default seeding, toggling and progress.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.onboarding import OnboardingTask
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.repositories.onboarding import OnboardingTaskRepository
from agencyhub.backend.schemas.onboarding import (
    OnboardingChecklistResponse,
    OnboardingTaskCreate,
    OnboardingTaskResponse,
    OnboardingTaskUpdate,
)
from agencyhub.backend.services.base import BaseService

# Day numbers fall within the 30-day onboarding window.
DEFAULT_CHECKLIST: list[dict[str, object]] = [
    {"title": "Review business goals and target audience", "due_day": 1},
    {"title": "Access social media accounts", "due_day": 2},
    {"title": "Setup communication channels", "due_day": 3},
    {"title": "Schedule first strategy call", "due_day": 5},
    {"title": "Content calendar draft review", "due_day": 10},
    {"title": "Review first 30-day performance report", "due_day": 30},
]


def onboarding_progress(completed: int, total: int) -> int:
    """Whole-number completion percentage; an empty checklist is 0."""
    if total == 0:
        return 0
    return round(completed / total * 100)


class OnboardingService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = OnboardingTaskRepository(session)
        self.client_repo = ClientRepository(session)

    async def seed_default(self, client_id: str) -> None:
        self._log_debug("Seeding onboarding checklist", client_id=client_id)
        await self._execute_db_operation(
            "seed_onboarding",
            self.repo.bulk_create(client_id, [dict(item) for item in DEFAULT_CHECKLIST]),
        )

    async def get_checklist(self, client_id: str, user: User) -> OnboardingChecklistResponse:
        self._check_tenant(user, client_id)
        await self.client_repo.get_by_id(client_id)

        tasks = await self.repo.get_for_client(client_id)
        completed = sum(1 for task in tasks if task.completed)
        return OnboardingChecklistResponse(
            client_id=client_id,
            progress=onboarding_progress(completed, len(tasks)),
            completed=completed,
            total=len(tasks),
            tasks=[OnboardingTaskResponse.model_validate(task) for task in tasks],
        )

    async def add_task(self, client_id: str, data: OnboardingTaskCreate) -> OnboardingTask:
        await self.client_repo.get_by_id(client_id)
        self._log_operation("Adding onboarding task", client_id=client_id, title=data.title)
        return await self._execute_db_operation(
            "create_onboarding_task",
            self.repo.create(client_id=client_id, **data.model_dump()),
        )

    async def update_task(self, task_id: str, data: OnboardingTaskUpdate) -> OnboardingTask:
        update_data = data.model_dump(exclude_unset=True)
        task = await self.repo.get_by_id(task_id)
        if not update_data:
            return task
        return await self._execute_db_operation(
            "update_onboarding_task",
            self.repo.apply(task, **update_data),
        )

    async def toggle(self, task_id: str) -> OnboardingTask:
        """Flip completion, stamping or clearing completed_at."""
        task = await self.repo.get_by_id(task_id)
        completed = not task.completed
        self._log_operation(
            "Toggling onboarding task",
            task_id=task_id,
            client_id=task.client_id,
            completed=completed,
        )
        return await self._execute_db_operation(
            "toggle_onboarding_task",
            self.repo.apply(
                task,
                completed=completed,
                completed_at=utc_now() if completed else None,
            ),
        )

    async def delete_task(self, task_id: str) -> None:
        self._log_operation("Deleting onboarding task", task_id=task_id)
        await self._execute_db_operation("delete_onboarding_task", self.repo.delete(task_id))
