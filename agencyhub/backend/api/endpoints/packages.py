"""
Subscription Package API Endpoints.
"""

from fastapi import APIRouter

from agencyhub.backend.core.dependencies import AdminUser, DbSession
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.package import (
    PackageCreate,
    PackageResponse,
    PackageUpdate,
    RecommendRequest,
    RecommendResponse,
)
from agencyhub.backend.services.package import PackageService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[PackageResponse]],
    description="Public. Active packages ordered by display_order.",
)
async def list_packages(db: DbSession) -> ApiResponse[list[PackageResponse]]:
    service = PackageService(db)
    packages = await service.list_active()
    return ApiResponse(data=[PackageResponse.model_validate(p) for p in packages])


@router.post(
    "/recommend",
    response_model=ApiResponse[RecommendResponse],
    summary="Recommend a package",
)
async def recommend(data: RecommendRequest, db: DbSession) -> ApiResponse[RecommendResponse]:
    service = PackageService(db)
    return ApiResponse(data=await service.recommend(data))


@router.post("", response_model=ApiResponse[PackageResponse], status_code=201)
async def create_package(
    data: PackageCreate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[PackageResponse]:
    service = PackageService(db)
    package = await service.create_package(data)
    return ApiResponse(data=PackageResponse.model_validate(package))


@router.patch("/{package_id}", response_model=ApiResponse[PackageResponse])
async def update_package(
    package_id: str,
    data: PackageUpdate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[PackageResponse]:
    service = PackageService(db)
    package = await service.update_package(package_id, data)
    return ApiResponse(data=PackageResponse.model_validate(package))


@router.delete("/{package_id}", status_code=204)
async def delete_package(package_id: str, db: DbSession, user: AdminUser) -> None:
    service = PackageService(db)
    await service.delete_package(package_id)
