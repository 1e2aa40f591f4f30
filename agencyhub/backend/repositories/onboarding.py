"""
Onboarding Task Repository.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.onboarding import OnboardingTask
from agencyhub.backend.repositories.base import BaseRepository


class OnboardingTaskRepository(BaseRepository[OnboardingTask]):
    model = OnboardingTask

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_for_client(self, client_id: str) -> list[OnboardingTask]:
        return await self.find(
            OnboardingTask.client_id == client_id,
            order_by=[OnboardingTask.due_day, OnboardingTask.created_at],
        )

    async def count_incomplete(self, client_id: str) -> int:
        return await self.count(
            OnboardingTask.client_id == client_id,
            OnboardingTask.completed == False,  # noqa: E712
        )

    async def bulk_create(self, client_id: str, items: list[dict[str, Any]]) -> None:
        self.session.add_all(OnboardingTask(client_id=client_id, **item) for item in items)
        await self.session.flush()
