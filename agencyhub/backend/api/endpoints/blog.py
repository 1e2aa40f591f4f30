"""
Blog API Endpoints.

``router`` serves published posts without auth; ``admin_router`` is the
CMS and is mounted under /admin/blog-posts.
"""

from typing import Any

from fastapi import APIRouter, Depends

from agencyhub.backend.core.dependencies import DbSession, RequestId, require_permission
from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from agencyhub.backend.core.rbac import Permission
from agencyhub.backend.models.user import User
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.blog import (
    BlogPostCreate,
    BlogPostResponse,
    BlogPostSummary,
    BlogPostUpdate,
)
from agencyhub.backend.services.blog import BlogService

router = APIRouter()
admin_router = APIRouter()

_manage_content = require_permission(Permission.MANAGE_CONTENT)


@router.get(
    "",
    summary="Published blog posts",
    description="Newest published first. No authentication required.",
)
async def list_published(
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> dict[str, Any]:
    service = BlogService(db)
    posts, total = await service.list_published(limit=pagination.limit, offset=pagination.offset)
    return create_paginated_response(
        items=posts,
        item_schema=BlogPostSummary,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/{slug}", response_model=ApiResponse[BlogPostResponse])
async def get_published(slug: str, db: DbSession) -> ApiResponse[BlogPostResponse]:
    service = BlogService(db)
    post = await service.get_published(slug)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


# =============================================================================
# Admin
# =============================================================================


@admin_router.get("", summary="All blog posts (paginated)")
async def list_all(
    db: DbSession,
    request_id: RequestId,
    _: User = Depends(_manage_content),
    pagination: PaginationParams = Depends(get_pagination_params),
) -> dict[str, Any]:
    service = BlogService(db)
    posts, total = await service.list_all(limit=pagination.limit, offset=pagination.offset)
    return create_paginated_response(
        items=posts,
        item_schema=BlogPostResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@admin_router.post("", response_model=ApiResponse[BlogPostResponse], status_code=201)
async def create_post(
    data: BlogPostCreate,
    db: DbSession,
    _: User = Depends(_manage_content),
) -> ApiResponse[BlogPostResponse]:
    service = BlogService(db)
    post = await service.create_post(data)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


@admin_router.patch("/{post_id}", response_model=ApiResponse[BlogPostResponse])
async def update_post(
    post_id: str,
    data: BlogPostUpdate,
    db: DbSession,
    _: User = Depends(_manage_content),
) -> ApiResponse[BlogPostResponse]:
    service = BlogService(db)
    post = await service.update_post(post_id, data)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


@admin_router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    db: DbSession,
    _: User = Depends(_manage_content),
) -> None:
    service = BlogService(db)
    await service.delete_post(post_id)
