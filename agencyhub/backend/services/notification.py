"""
Notification Service.

In-app notifications for the current user, plus ``notify`` which other
services call to create a notification and push it to the recipient.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import NotFoundError
from agencyhub.backend.models.notification import Notification
from agencyhub.backend.repositories.notification import NotificationRepository
from agencyhub.backend.services.base import BaseService
from agencyhub.backend.services.push import PushService


class NotificationService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NotificationRepository(session)

    async def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        type: str = "info",
        category: str = "general",
        action_url: str | None = None,
        push: bool = True,
    ) -> Notification:
        """Create an in-app notification and push it to the user's devices."""
        notification = await self._execute_db_operation(
            "create_notification",
            self.repo.create(
                user_id=user_id,
                title=title,
                message=message,
                type=type,
                category=category,
                action_url=action_url,
            ),
        )
        self._log_operation("Notification created", user_id=user_id, category=category)

        if push:
            await PushService(self.session).send_to_users([user_id], title, message, action_url)
        return notification

    async def list_for_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Notification], int]:
        items = await self.repo.list_for_user(user_id, unread_only, limit=limit, offset=offset)
        total = await self.repo.count_for_user(user_id, unread_only)
        return items, total

    async def unread_count(self, user_id: str) -> int:
        return await self.repo.count_for_user(user_id, unread_only=True)

    async def _get_own(self, notification_id: str, user_id: str) -> Notification:
        notification = await self.repo.get_for_user(notification_id, user_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    async def mark_read(self, notification_id: str, user_id: str) -> Notification:
        notification = await self._get_own(notification_id, user_id)
        return await self._execute_db_operation(
            "mark_notification_read",
            self.repo.apply(notification, is_read=True),
        )

    async def mark_all_read(self, user_id: str) -> int:
        updated = await self._execute_db_operation(
            "mark_all_notifications_read",
            self.repo.mark_all_read(user_id),
        )
        self._log_debug("Notifications marked read", user_id=user_id, updated=updated)
        return updated

    async def delete(self, notification_id: str, user_id: str) -> None:
        notification = await self._get_own(notification_id, user_id)
        await self._execute_db_operation("delete_notification", self.repo.delete(notification.id))
