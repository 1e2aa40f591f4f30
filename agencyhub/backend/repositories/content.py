"""
Content Post Repository.
"""

from datetime import datetime

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.content import ContentPost
from agencyhub.backend.repositories.base import BaseRepository


class ContentPostRepository(BaseRepository[ContentPost]):
    model = ContentPost

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _conditions(
        self,
        client_id: str | None = None,
        approval_status: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        client_visible_only: bool = False,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if client_id:
            conditions.append(ContentPost.client_id == client_id)
        if approval_status:
            conditions.append(ContentPost.approval_status == approval_status)
        if start:
            conditions.append(ContentPost.scheduled_for >= start)
        if end:
            conditions.append(ContentPost.scheduled_for <= end)
        if client_visible_only:
            conditions.append(ContentPost.visible_to_client == True)  # noqa: E712
        return conditions

    async def list_posts(self, limit: int = 20, offset: int = 0, **filters) -> list[ContentPost]:
        return await self.find(
            *self._conditions(**filters),
            order_by=[ContentPost.scheduled_for.is_(None), ContentPost.scheduled_for],
            limit=limit,
            offset=offset,
        )

    async def count_posts(self, **filters) -> int:
        return await self.count(*self._conditions(**filters))

    async def search(self, query: str, client_id: str | None = None, limit: int = 5) -> list[ContentPost]:
        conditions: list[ColumnElement[bool]] = [ContentPost.title.ilike(f"%{query}%")]
        if client_id:
            conditions.append(ContentPost.client_id == client_id)
            conditions.append(ContentPost.visible_to_client == True)  # noqa: E712
        return await self.find(*conditions, order_by=ContentPost.created_at.desc(), limit=limit)
