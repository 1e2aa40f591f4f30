"""
Package Service.

Subscription packages and the platform-count recommendation.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import ConflictError
from agencyhub.backend.models.package import SubscriptionPackage
from agencyhub.backend.repositories.package import SubscriptionPackageRepository
from agencyhub.backend.schemas.package import (
    PackageCreate,
    PackageResponse,
    PackageUpdate,
    RecommendRequest,
    RecommendResponse,
)
from agencyhub.backend.services.base import BaseService

SOCIAL_MEDIA_MANAGEMENT = "Social Media Management"


def recommend_tier(platform_count: int) -> tuple[str, int]:
    """(tier name, platform limit) for a number of selected platforms."""
    if platform_count <= 2:
        return "Gold", 2
    if platform_count == 3:
        return "Business", 3
    if platform_count == 4:
        return "Digital Domination", 4
    return "Brand Takeover", 6


class PackageService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = SubscriptionPackageRepository(session)

    async def list_active(self) -> list[SubscriptionPackage]:
        return await self.repo.list_active()

    async def create_package(self, data: PackageCreate) -> SubscriptionPackage:
        if await self.repo.get_by_name(data.name):
            raise ConflictError(f"Package '{data.name}' already exists")
        self._log_operation("Creating package", name=data.name, price=str(data.price))
        return await self._execute_db_operation(
            "create_package",
            self.repo.create(**data.model_dump()),
        )

    async def update_package(self, package_id: str, data: PackageUpdate) -> SubscriptionPackage:
        package = await self.repo.get_by_id(package_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return package

        new_name = update_data.get("name")
        if new_name and new_name != package.name and await self.repo.get_by_name(new_name):
            raise ConflictError(f"Package '{new_name}' already exists")

        self._log_operation("Updating package", package_id=package_id, fields=list(update_data))
        return await self._execute_db_operation(
            "update_package",
            self.repo.apply(package, **update_data),
        )

    async def delete_package(self, package_id: str) -> None:
        self._log_operation("Deleting package", package_id=package_id)
        await self._execute_db_operation("delete_package", self.repo.delete(package_id))

    async def recommend(self, data: RecommendRequest) -> RecommendResponse:
        """
        Recommend a tier from the platform count.

        Only applies when Social Media Management is among the selected
        services; otherwise the featured package is returned.
        """
        if SOCIAL_MEDIA_MANAGEMENT not in data.services:
            featured = await self.repo.get_featured()
            return RecommendResponse(
                reason="featured",
                package=PackageResponse.model_validate(featured) if featured else None,
            )

        platform_count = len(set(data.platforms))
        tier, limit = recommend_tier(platform_count)
        package = await self.repo.get_active_by_name(tier)
        self._log_debug("Package recommended", platforms=platform_count, tier=tier)
        return RecommendResponse(
            reason="platform_count",
            tier=tier,
            platform_limit=limit,
            package=PackageResponse.model_validate(package) if package else None,
        )
