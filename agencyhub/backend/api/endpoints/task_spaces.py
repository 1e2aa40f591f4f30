"""
Task Space API Endpoints.

Flat and nested views of the space tree plus drag-drop moves.
"""

from fastapi import APIRouter

from agencyhub.backend.core.dependencies import DbSession, StaffUser
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.task import (
    TaskResponse,
    TaskSpaceCreate,
    TaskSpaceMove,
    TaskSpaceNode,
    TaskSpaceResponse,
    TaskSpaceUpdate,
)
from agencyhub.backend.services.task_space import TaskSpaceService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[TaskSpaceResponse]],
    summary="List task spaces",
    description="Flat list ordered by parent, then sibling order.",
)
async def list_spaces(db: DbSession, user: StaffUser) -> ApiResponse[list[TaskSpaceResponse]]:
    service = TaskSpaceService(db)
    spaces = await service.list_spaces()
    return ApiResponse(data=[TaskSpaceResponse.model_validate(s) for s in spaces])


@router.get(
    "/tree",
    response_model=ApiResponse[list[TaskSpaceNode]],
    summary="Task space tree",
)
async def get_tree(db: DbSession, user: StaffUser) -> ApiResponse[list[TaskSpaceNode]]:
    service = TaskSpaceService(db)
    return ApiResponse(data=await service.get_tree())


@router.post("", response_model=ApiResponse[TaskSpaceResponse], status_code=201)
async def create_space(
    data: TaskSpaceCreate,
    db: DbSession,
    user: StaffUser,
) -> ApiResponse[TaskSpaceResponse]:
    service = TaskSpaceService(db)
    space = await service.create_space(data, user)
    return ApiResponse(data=TaskSpaceResponse.model_validate(space))


@router.patch("/{space_id}", response_model=ApiResponse[TaskSpaceResponse])
async def update_space(
    space_id: str,
    data: TaskSpaceUpdate,
    db: DbSession,
    user: StaffUser,
) -> ApiResponse[TaskSpaceResponse]:
    service = TaskSpaceService(db)
    space = await service.update_space(space_id, data)
    return ApiResponse(data=TaskSpaceResponse.model_validate(space))


@router.delete(
    "/{space_id}",
    status_code=204,
    description="Children move up to the deleted space's parent; its tasks are unassigned from any space.",
)
async def delete_space(space_id: str, db: DbSession, user: StaffUser) -> None:
    service = TaskSpaceService(db)
    await service.delete_space(space_id)


@router.post(
    "/{space_id}/move",
    response_model=ApiResponse[TaskSpaceResponse],
    summary="Move a task space",
    description="Re-parent and/or reorder. Moves that create a cycle are rejected.",
)
async def move_space(
    space_id: str,
    data: TaskSpaceMove,
    db: DbSession,
    user: StaffUser,
) -> ApiResponse[TaskSpaceResponse]:
    service = TaskSpaceService(db)
    space = await service.move_space(space_id, data)
    return ApiResponse(data=TaskSpaceResponse.model_validate(space))


@router.get("/{space_id}/tasks", response_model=ApiResponse[list[TaskResponse]])
async def list_space_tasks(
    space_id: str,
    db: DbSession,
    user: StaffUser,
) -> ApiResponse[list[TaskResponse]]:
    service = TaskSpaceService(db)
    tasks = await service.list_space_tasks(space_id)
    return ApiResponse(data=[TaskResponse.model_validate(t) for t in tasks])
