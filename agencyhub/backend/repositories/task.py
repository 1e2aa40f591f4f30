"""
Task Repositories.

Tasks, their comments, and the task-space tree.
"""

from datetime import datetime

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.task import Task, TaskComment, TaskSpace
from agencyhub.backend.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for Task model."""

    model = Task

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _conditions(
        self,
        status: str | None = None,
        client_id: str | None = None,
        space_id: str | None = None,
        assigned_to_id: str | None = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if status:
            conditions.append(Task.status == status)
        if client_id:
            conditions.append(Task.client_id == client_id)
        if space_id:
            conditions.append(Task.space_id == space_id)
        if assigned_to_id:
            conditions.append(Task.assigned_to_id == assigned_to_id)
        return conditions

    async def list_tasks(
        self,
        status: str | None = None,
        client_id: str | None = None,
        space_id: str | None = None,
        assigned_to_id: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Task]:
        """List tasks, soonest due first; undated tasks last."""
        return await self.find(
            *self._conditions(status, client_id, space_id, assigned_to_id),
            order_by=[Task.due_date.is_(None), Task.due_date, Task.created_at.desc()],
            limit=limit,
            offset=offset,
        )

    async def count_tasks(
        self,
        status: str | None = None,
        client_id: str | None = None,
        space_id: str | None = None,
        assigned_to_id: str | None = None,
    ) -> int:
        return await self.count(*self._conditions(status, client_id, space_id, assigned_to_id))

    async def count_by_status(self) -> dict[str, int]:
        result = await self.session.execute(
            select(Task.status, func.count()).group_by(Task.status)
        )
        return {status: count for status, count in result.all()}

    async def count_overdue(self, now: datetime) -> int:
        return await self.count(
            Task.due_date.is_not(None),
            Task.due_date < now,
            Task.status != "completed",
        )

    async def detach_space(self, space_id: str) -> None:
        """Move every task out of a space that is being deleted."""
        await self.session.execute(
            update(Task).where(Task.space_id == space_id).values(space_id=None)
        )
        await self.session.flush()

    async def search(self, query: str, client_id: str | None = None, limit: int = 5) -> list[Task]:
        conditions: list[ColumnElement[bool]] = [Task.title.ilike(f"%{query}%")]
        if client_id:
            conditions.append(Task.client_id == client_id)
        return await self.find(*conditions, order_by=Task.created_at.desc(), limit=limit)


class TaskCommentRepository(BaseRepository[TaskComment]):
    model = TaskComment

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_for_task(self, task_id: str) -> list[TaskComment]:
        return await self.find(TaskComment.task_id == task_id, order_by=TaskComment.created_at)


class TaskSpaceRepository(BaseRepository[TaskSpace]):
    """Repository for the task-space tree."""

    model = TaskSpace

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_all_ordered(self) -> list[TaskSpace]:
        return await self.find(order_by=[TaskSpace.order, TaskSpace.created_at])

    async def get_siblings(self, parent_space_id: str | None) -> list[TaskSpace]:
        """Children of a parent (top level when None), in display order."""
        if parent_space_id is None:
            condition = TaskSpace.parent_space_id.is_(None)
        else:
            condition = TaskSpace.parent_space_id == parent_space_id
        return await self.find(condition, order_by=[TaskSpace.order, TaskSpace.created_at])
