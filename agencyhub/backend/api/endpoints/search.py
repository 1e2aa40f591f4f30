"""
Global Search API Endpoint.
"""

from fastapi import APIRouter, Query

from agencyhub.backend.core.dependencies import CurrentUser, DbSession
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.search import SearchResponse
from agencyhub.backend.services.search import SearchService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[SearchResponse],
    summary="Search across resources",
    description="Queries shorter than two characters return empty groups.",
)
async def search(
    db: DbSession,
    user: CurrentUser,
    q: str = Query(default="", max_length=100),
) -> ApiResponse[SearchResponse]:
    service = SearchService(db)
    return ApiResponse(data=await service.search(q, user))
