"""
Task Space Service.

Spaces form a tree through parent_space_id. Siblings are kept contiguously
indexed 0..n-1 in ``order``; drag-drop moves splice a node into its target
sibling list and re-index both the old and new lists.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import ValidationError
from agencyhub.backend.models.task import Task, TaskSpace
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.task import TaskRepository, TaskSpaceRepository
from agencyhub.backend.schemas.task import (
    TaskSpaceCreate,
    TaskSpaceMove,
    TaskSpaceNode,
    TaskSpaceUpdate,
)
from agencyhub.backend.services.base import BaseService


def splice(siblings: list[TaskSpace], node: TaskSpace, index: int) -> list[TaskSpace]:
    """Return ``siblings`` without ``node``, then with it inserted at ``index``.

    The index is clamped to [0, len].
    """
    remaining = [s for s in siblings if s.id != node.id]
    position = max(0, min(index, len(remaining)))
    remaining.insert(position, node)
    return remaining


def reindex(siblings: list[TaskSpace]) -> None:
    for position, space in enumerate(siblings):
        space.order = position


def creates_cycle(parents: dict[str, str | None], node_id: str, new_parent_id: str | None) -> bool:
    """True if ``new_parent_id`` is ``node_id`` itself or one of its descendants."""
    current = new_parent_id
    seen: set[str] = set()
    while current is not None and current not in seen:
        if current == node_id:
            return True
        seen.add(current)
        current = parents.get(current)
    return False


def build_tree(spaces: list[TaskSpace]) -> list[TaskSpaceNode]:
    """Nest a flat list of spaces; siblings sorted by order."""
    nodes = {s.id: TaskSpaceNode.model_validate(s) for s in spaces}
    roots: list[TaskSpaceNode] = []
    for space in sorted(spaces, key=lambda s: (s.order, s.created_at)):
        node = nodes[space.id]
        parent = nodes.get(space.parent_space_id) if space.parent_space_id else None
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots


class TaskSpaceService(BaseService):
    """Service for the task-space tree."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = TaskSpaceRepository(session)
        self.task_repo = TaskRepository(session)

    async def list_spaces(self) -> list[TaskSpace]:
        spaces = await self.repo.get_all_ordered()
        return sorted(spaces, key=lambda s: (s.parent_space_id or "", s.order))

    async def get_tree(self) -> list[TaskSpaceNode]:
        return build_tree(await self.repo.get_all_ordered())

    async def create_space(self, data: TaskSpaceCreate, user: User) -> TaskSpace:
        if data.parent_space_id:
            await self.repo.get_by_id(data.parent_space_id)
        siblings = await self.repo.get_siblings(data.parent_space_id)

        self._log_operation("Creating task space", name=data.name, parent=data.parent_space_id)
        return await self._execute_db_operation(
            "create_task_space",
            self.repo.create(**data.model_dump(), order=len(siblings), created_by=user.id),
        )

    async def update_space(self, space_id: str, data: TaskSpaceUpdate) -> TaskSpace:
        space = await self.repo.get_by_id(space_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return space
        return await self._execute_db_operation(
            "update_task_space",
            self.repo.apply(space, **update_data),
        )

    async def delete_space(self, space_id: str) -> None:
        """
        Delete a space.

        Its children take its place in the parent's sibling list and its
        tasks are left without a space.
        """
        space = await self.repo.get_by_id(space_id)
        siblings = await self.repo.get_siblings(space.parent_space_id)
        children = await self.repo.get_siblings(space.id)

        merged: list[TaskSpace] = []
        for sibling in siblings:
            if sibling.id == space.id:
                merged.extend(children)
            else:
                merged.append(sibling)
        for child in children:
            child.parent_space_id = space.parent_space_id
        reindex(merged)

        self._log_operation(
            "Deleting task space",
            space_id=space_id,
            reparented_children=len(children),
        )
        await self.task_repo.detach_space(space.id)
        await self._execute_db_operation("delete_task_space", self.repo.delete(space.id))

    async def move_space(self, space_id: str, data: TaskSpaceMove) -> TaskSpace:
        """
        Drag-drop a space under ``parent_space_id`` at sibling ``index``.

        Raises:
            ValidationError: If the move would make the space its own ancestor
        """
        space = await self.repo.get_by_id(space_id)
        target_parent = data.parent_space_id

        if target_parent is not None:
            await self.repo.get_by_id(target_parent)
            all_spaces = await self.repo.get_all_ordered()
            parents = {s.id: s.parent_space_id for s in all_spaces}
            if creates_cycle(parents, space.id, target_parent):
                raise ValidationError(
                    "Cannot move a space into itself or one of its descendants",
                    details={"space_id": space.id, "parent_space_id": target_parent},
                )

        old_parent = space.parent_space_id
        if old_parent != target_parent:
            old_siblings = [s for s in await self.repo.get_siblings(old_parent) if s.id != space.id]
            reindex(old_siblings)

        new_siblings = splice(await self.repo.get_siblings(target_parent), space, data.index)
        space.parent_space_id = target_parent
        reindex(new_siblings)

        self._log_operation(
            "Moving task space",
            space_id=space.id,
            from_parent=old_parent,
            to_parent=target_parent,
            index=space.order,
        )
        await self._execute_db_operation("move_task_space", self.session.flush())
        await self.session.refresh(space)
        return space

    async def list_space_tasks(self, space_id: str) -> list[Task]:
        await self.repo.get_by_id(space_id)
        return await self.task_repo.find(Task.space_id == space_id, order_by=Task.created_at)

