"""
Content Calendar Service.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import NotFoundError
from agencyhub.backend.models.content import ContentPost
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.repositories.content import ContentPostRepository
from agencyhub.backend.schemas.content import ContentApproval, ContentPostCreate, ContentPostUpdate
from agencyhub.backend.services.base import BaseService


class ContentPostService(BaseService):
    """
    Scheduled social posts.

    Client users only see their own client's posts that are marked
    visible_to_client, and may approve or reject them.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ContentPostRepository(session)
        self.client_repo = ClientRepository(session)

    async def list_posts(
        self,
        user: User,
        client_id: str | None = None,
        approval_status: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[ContentPost], int]:
        scope = self._client_scope(user)
        filters = {
            "client_id": scope or client_id,
            "approval_status": approval_status,
            "start": start,
            "end": end,
            "client_visible_only": scope is not None,
        }
        posts = await self.repo.list_posts(limit=limit, offset=offset, **filters)
        total = await self.repo.count_posts(**filters)
        return posts, total

    async def get_post(self, post_id: str, user: User) -> ContentPost:
        post = await self.repo.get_by_id(post_id)
        scope = self._client_scope(user)
        if scope is not None and (post.client_id != scope or not post.visible_to_client):
            raise NotFoundError("ContentPost not found")
        return post

    async def create_post(self, data: ContentPostCreate, user: User) -> ContentPost:
        await self.client_repo.get_by_id(data.client_id)
        self._log_operation("Creating content post", client_id=data.client_id, platforms=data.platforms)
        return await self._execute_db_operation(
            "create_content_post",
            self.repo.create(**data.model_dump(), created_by=user.id),
        )

    async def update_post(self, post_id: str, data: ContentPostUpdate) -> ContentPost:
        post = await self.repo.get_by_id(post_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return post
        self._log_operation("Updating content post", post_id=post_id, fields=list(update_data))
        return await self._execute_db_operation(
            "update_content_post",
            self.repo.apply(post, **update_data),
        )

    async def set_approval(self, post_id: str, data: ContentApproval, user: User) -> ContentPost:
        """Record a client's approve/reject decision and optional feedback."""
        post = await self.get_post(post_id, user)
        self._log_operation(
            "Content approval",
            post_id=post_id,
            approval_status=data.approval_status,
            by=user.id,
        )
        return await self._execute_db_operation(
            "set_content_approval",
            self.repo.apply(
                post,
                approval_status=data.approval_status,
                client_feedback=data.feedback,
            ),
        )

    async def delete_post(self, post_id: str) -> None:
        self._log_operation("Deleting content post", post_id=post_id)
        await self._execute_db_operation("delete_content_post", self.repo.delete(post_id))
