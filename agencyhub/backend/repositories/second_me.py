"""
Second Me Repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.second_me import SecondMeContent, SecondMeRequest
from agencyhub.backend.repositories.base import BaseRepository


class SecondMeRequestRepository(BaseRepository[SecondMeRequest]):
    model = SecondMeRequest

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_requests(self, client_id: str | None = None) -> list[SecondMeRequest]:
        conditions = [SecondMeRequest.client_id == client_id] if client_id else []
        return await self.find(*conditions, order_by=SecondMeRequest.created_at.desc())

    async def count_live_for_client(self, client_id: str) -> int:
        """Requests that still occupy the client's single slot."""
        return await self.count(
            SecondMeRequest.client_id == client_id,
            SecondMeRequest.status != "paused",
        )


class SecondMeContentRepository(BaseRepository[SecondMeContent]):
    model = SecondMeContent

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_for_request(self, request_id: str) -> list[SecondMeContent]:
        return await self.find(
            SecondMeContent.request_id == request_id,
            order_by=SecondMeContent.created_at.desc(),
        )
