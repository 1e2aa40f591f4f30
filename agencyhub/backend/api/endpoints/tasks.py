"""
Tasks API Endpoints.

Reads are open to every authenticated user and narrowed by the service;
writes need an editor role (admin, manager, staff).
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from agencyhub.backend.core.dependencies import CurrentUser, DbSession, RequestId, TaskEditor
from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.task import (
    TaskCommentCreate,
    TaskCommentResponse,
    TaskCreate,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)
from agencyhub.backend.services.task import TaskService

router = APIRouter()


@router.get("", summary="List tasks (paginated)")
async def list_tasks(
    db: DbSession,
    request_id: RequestId,
    user: CurrentUser,
    pagination: PaginationParams = Depends(get_pagination_params),
    status: TaskStatus | None = Query(default=None),
    client_id: str | None = Query(default=None),
    space_id: str | None = Query(default=None),
    assigned_to_id: str | None = Query(default=None),
) -> dict[str, Any]:
    service = TaskService(db)
    tasks, total = await service.list_tasks(
        user,
        status=status,
        client_id=client_id,
        space_id=space_id,
        assigned_to_id=assigned_to_id,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=tasks,
        item_schema=TaskResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse])
async def get_task(task_id: str, db: DbSession, user: CurrentUser) -> ApiResponse[TaskResponse]:
    service = TaskService(db)
    task = await service.get_task(task_id, user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.post("", response_model=ApiResponse[TaskResponse], status_code=201)
async def create_task(
    data: TaskCreate,
    db: DbSession,
    user: TaskEditor,
) -> ApiResponse[TaskResponse]:
    service = TaskService(db)
    task = await service.create_task(data, user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.patch("/{task_id}", response_model=ApiResponse[TaskResponse])
async def update_task(
    task_id: str,
    data: TaskUpdate,
    db: DbSession,
    user: TaskEditor,
) -> ApiResponse[TaskResponse]:
    service = TaskService(db)
    task = await service.update_task(task_id, data, user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.post(
    "/{task_id}/advance",
    response_model=ApiResponse[TaskResponse],
    summary="Advance task status",
    description="todo → in_progress → review → completed → todo. Completing a recurring task spawns the next one.",
)
async def advance_task(task_id: str, db: DbSession, user: TaskEditor) -> ApiResponse[TaskResponse]:
    service = TaskService(db)
    task = await service.advance(task_id, user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: str, db: DbSession, user: TaskEditor) -> None:
    service = TaskService(db)
    await service.delete_task(task_id, user)


# =============================================================================
# Comments
# =============================================================================


@router.get("/{task_id}/comments", response_model=ApiResponse[list[TaskCommentResponse]])
async def list_comments(
    task_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[list[TaskCommentResponse]]:
    service = TaskService(db)
    comments = await service.list_comments(task_id, user)
    return ApiResponse(data=[TaskCommentResponse.model_validate(c) for c in comments])


@router.post(
    "/{task_id}/comments",
    response_model=ApiResponse[TaskCommentResponse],
    status_code=201,
)
async def add_comment(
    task_id: str,
    data: TaskCommentCreate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[TaskCommentResponse]:
    service = TaskService(db)
    comment = await service.add_comment(task_id, data.comment, user)
    return ApiResponse(data=TaskCommentResponse.model_validate(comment))
