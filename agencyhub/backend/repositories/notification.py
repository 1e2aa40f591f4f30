"""
Notification Repositories.

In-app notifications and Web Push subscriptions.
"""

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.notification import Notification, PushSubscription
from agencyhub.backend.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _conditions(self, user_id: str, unread_only: bool) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [Notification.user_id == user_id]
        if unread_only:
            conditions.append(Notification.is_read == False)  # noqa: E712
        return conditions

    async def list_for_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Notification]:
        return await self.find(
            *self._conditions(user_id, unread_only),
            order_by=Notification.created_at.desc(),
            limit=limit,
            offset=offset,
        )

    async def count_for_user(self, user_id: str, unread_only: bool = False) -> int:
        return await self.count(*self._conditions(user_id, unread_only))

    async def get_for_user(self, notification_id: str, user_id: str) -> Notification | None:
        return await self.find_one(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )

    async def mark_all_read(self, user_id: str) -> int:
        result = await self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
            .values(is_read=True)
        )
        await self.session.flush()
        return result.rowcount or 0


class PushSubscriptionRepository(BaseRepository[PushSubscription]):
    model = PushSubscription

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_endpoint(self, endpoint: str) -> PushSubscription | None:
        return await self.find_one(PushSubscription.endpoint == endpoint)

    async def get_for_users(self, user_ids: list[str]) -> list[PushSubscription]:
        if not user_ids:
            return []
        return await self.find(PushSubscription.user_id.in_(user_ids))

    async def delete_by_endpoint(self, endpoint: str, user_id: str | None = None) -> int:
        conditions: list[ColumnElement[bool]] = [PushSubscription.endpoint == endpoint]
        if user_id:
            conditions.append(PushSubscription.user_id == user_id)
        result = await self.session.execute(delete(PushSubscription).where(*conditions))
        await self.session.flush()
        return result.rowcount or 0

    async def delete_by_ids(self, ids: list[str]) -> None:
        if not ids:
            return
        await self.session.execute(delete(PushSubscription).where(PushSubscription.id.in_(ids)))
        await self.session.flush()

    async def subscribed_user_ids(self) -> list[str]:
        result = await self.session.execute(select(PushSubscription.user_id).distinct())
        return list(result.scalars().all())
