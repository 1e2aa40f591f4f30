"""
Task Service.

Task visibility by role, status transitions, recurring instances,
assignment notifications and comments.
"""

import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.config import get_app_config
from agencyhub.backend.core.exceptions import NotFoundError, ValidationError
from agencyhub.backend.core.rbac import Role
from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.task import Task, TaskComment
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.task import TaskCommentRepository, TaskRepository
from agencyhub.backend.repositories.user import UserRepository
from agencyhub.backend.schemas.task import TaskCreate, TaskUpdate
from agencyhub.backend.services.base import BaseService
from agencyhub.backend.services.notification import NotificationService
from agencyhub.backend.services.recurrence import local_date, next_due_date

COMPLETED = "completed"

# POST /tasks/{id}/advance cycles through these in order.
STATUS_CYCLE = ("todo", "in_progress", "review", COMPLETED)

# Fields copied from a recurring task onto its next instance.
_TEMPLATE_FIELDS = (
    "title",
    "description",
    "campaign_id",
    "client_id",
    "assigned_to_id",
    "space_id",
    "priority",
    "estimated_hours",
    "is_recurring",
    "recurring_pattern",
    "recurring_interval",
    "recurring_end_date",
    "schedule_from",
    "created_by",
)


def next_status(status: str) -> str:
    try:
        index = STATUS_CYCLE.index(status)
    except ValueError:
        return STATUS_CYCLE[0]
    return STATUS_CYCLE[(index + 1) % len(STATUS_CYCLE)]


class TaskService(BaseService):
    """
    Service for task business logic.

    Visibility: ``staff`` see the tasks assigned to them, client users see
    their client's tasks and every other agency role sees all tasks.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = TaskRepository(session)
        self.comment_repo = TaskCommentRepository(session)
        self.user_repo = UserRepository(session)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_tasks(
        self,
        user: User,
        status: str | None = None,
        client_id: str | None = None,
        space_id: str | None = None,
        assigned_to_id: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Task], int]:
        scope = self._client_scope(user)
        if scope is not None:
            client_id = scope
        elif user.role == Role.STAFF:
            assigned_to_id = user.id

        filters = {
            "status": status,
            "client_id": client_id,
            "space_id": space_id,
            "assigned_to_id": assigned_to_id,
        }
        tasks = await self.repo.list_tasks(**filters, limit=limit, offset=offset)
        total = await self.repo.count_tasks(**filters)
        return tasks, total

    def _check_visible(self, task: Task, user: User) -> None:
        scope = self._client_scope(user)
        if scope is not None:
            visible = task.client_id == scope
        elif user.role == Role.STAFF:
            visible = task.assigned_to_id == user.id
        else:
            visible = True
        if not visible:
            raise NotFoundError("Task not found")

    async def get_task(self, task_id: str, user: User) -> Task:
        task = await self.repo.get_by_id(task_id)
        self._check_visible(task, user)
        return task

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _check_recurrence(self, is_recurring: bool, pattern: str | None) -> None:
        if is_recurring and not pattern:
            raise ValidationError(
                "Recurring tasks need a recurring_pattern",
                details={"recurring_pattern": "required when is_recurring is true"},
            )

    async def _check_assignee(self, assigned_to_id: str | None) -> None:
        if assigned_to_id and not await self.user_repo.exists(assigned_to_id):
            raise NotFoundError("Assignee not found")

    async def create_task(self, data: TaskCreate, user: User) -> Task:
        self._check_recurrence(data.is_recurring, data.recurring_pattern)
        await self._check_assignee(data.assigned_to_id)

        values = data.model_dump()
        if data.status == COMPLETED:
            values["completed_at"] = utc_now()
        if data.is_recurring:
            values["recurrence_series_id"] = str(uuid.uuid4())

        self._log_operation("Creating task", title=data.title, assigned_to_id=data.assigned_to_id)
        task = await self._execute_db_operation(
            "create_task",
            self.repo.create(**values, created_by=user.id),
        )

        if task.assigned_to_id and task.assigned_to_id != user.id:
            await self._notify_assignment(task, user)
        return task

    async def update_task(self, task_id: str, data: TaskUpdate, user: User) -> Task:
        task = await self.get_task(task_id, user)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return task

        self._check_recurrence(
            update_data.get("is_recurring", task.is_recurring),
            update_data.get("recurring_pattern", task.recurring_pattern),
        )
        previous_assignee = task.assigned_to_id
        if "assigned_to_id" in update_data:
            await self._check_assignee(update_data["assigned_to_id"])

        status = update_data.pop("status", None)
        self._log_operation("Updating task", task_id=task_id, fields=list(data.model_fields_set))
        task = await self._execute_db_operation("update_task", self.repo.apply(task, **update_data))

        if status is not None:
            task = await self._set_status(task, status)

        assignee = task.assigned_to_id
        if assignee and assignee != previous_assignee and assignee != user.id:
            await self._notify_assignment(task, user)
        return task

    async def advance(self, task_id: str, user: User) -> Task:
        """Move the task to the next status in the cycle."""
        task = await self.get_task(task_id, user)
        return await self._set_status(task, next_status(task.status))

    async def delete_task(self, task_id: str, user: User) -> None:
        await self.get_task(task_id, user)
        self._log_operation("Deleting task", task_id=task_id)
        await self._execute_db_operation("delete_task", self.repo.delete(task_id))

    async def _set_status(self, task: Task, status: str) -> Task:
        """
        Apply a status change.

        Entering ``completed`` stamps completed_at (kept if the task was
        already completed) and spawns the next recurring instance. Any other
        status clears completed_at.
        """
        newly_completed = status == COMPLETED and task.status != COMPLETED
        if status == COMPLETED:
            completed_at = task.completed_at if task.status == COMPLETED else utc_now()
        else:
            completed_at = None

        self._log_debug("Task status change", task_id=task.id, old=task.status, new=status)
        task = await self._execute_db_operation(
            "set_task_status",
            self.repo.apply(task, status=status, completed_at=completed_at),
        )

        if newly_completed and task.is_recurring:
            await self._spawn_next(task, completed_at)
        return task

    async def _spawn_next(self, task: Task, completed_at: datetime) -> Task | None:
        """Create the next instance of a recurring task, unless the series has ended."""
        if not get_app_config().features.recurring_tasks_enabled or not task.recurring_pattern:
            return None

        use_completion = task.schedule_from == "completion_date" or task.due_date is None
        base = completed_at if use_completion else task.due_date
        due = next_due_date(base, task.recurring_pattern, task.recurring_interval or 1)

        if task.recurring_end_date and local_date(due) > local_date(task.recurring_end_date):
            self._log_operation(
                "Recurring series ended",
                task_id=task.id,
                series_id=task.recurrence_series_id,
            )
            return None

        values = {field: getattr(task, field) for field in _TEMPLATE_FIELDS}
        next_task = await self._execute_db_operation(
            "spawn_recurring_task",
            self.repo.create(
                **values,
                status="todo",
                due_date=due,
                checklist=[{**item, "completed": False} for item in task.checklist or []],
                recurrence_series_id=task.recurrence_series_id or task.id,
            ),
        )
        self._log_operation(
            "Spawned recurring task",
            task_id=task.id,
            next_task_id=next_task.id,
            due_date=due.isoformat(),
        )
        return next_task

    async def _notify_assignment(self, task: Task, actor: User) -> None:
        if not get_app_config().features.task_assignment_notifications:
            return
        await NotificationService(self.session).notify(
            user_id=task.assigned_to_id,
            title="New task assigned",
            message=f"{actor.display_name} assigned you: {task.title}",
            category="task",
            action_url=f"/tasks/{task.id}",
        )

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    async def list_comments(self, task_id: str, user: User) -> list[TaskComment]:
        await self.get_task(task_id, user)
        return await self.comment_repo.get_for_task(task_id)

    async def add_comment(self, task_id: str, comment: str, user: User) -> TaskComment:
        task = await self.get_task(task_id, user)
        if not comment.strip():
            raise ValidationError("Comment cannot be empty")

        created = await self._execute_db_operation(
            "create_task_comment",
            self.comment_repo.create(task_id=task.id, user_id=user.id, comment=comment),
        )
        self._log_operation("Task comment added", task_id=task.id, comment_id=created.id)

        if task.assigned_to_id and task.assigned_to_id != user.id:
            await NotificationService(self.session).notify(
                user_id=task.assigned_to_id,
                title="New comment on your task",
                message=f"{user.display_name} commented on: {task.title}",
                category="task",
                action_url=f"/tasks/{task.id}",
            )
        return created
