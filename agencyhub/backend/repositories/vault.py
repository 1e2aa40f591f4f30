"""
Vault Item Repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.vault import VaultItem
from agencyhub.backend.repositories.base import BaseRepository


class VaultItemRepository(BaseRepository[VaultItem]):
    model = VaultItem

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_recent_first(self) -> list[VaultItem]:
        return await self.find(order_by=[VaultItem.updated_at.desc(), VaultItem.created_at.desc()])
