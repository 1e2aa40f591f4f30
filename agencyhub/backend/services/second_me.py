"""
Second Me Service.

Avatar setup requests from clients and the content produced for them.
A client has at most one request that is not paused.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import AuthorizationError, ConflictError
from agencyhub.backend.core.rbac import Role
from agencyhub.backend.models.second_me import SecondMeContent, SecondMeRequest
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.second_me import (
    SecondMeContentRepository,
    SecondMeRequestRepository,
)
from agencyhub.backend.repositories.user import UserRepository
from agencyhub.backend.schemas.second_me import (
    SecondMeContentCreate,
    SecondMeContentReview,
    SecondMeRequestCreate,
    SecondMeRequestUpdate,
)
from agencyhub.backend.services.base import BaseService
from agencyhub.backend.services.notification import NotificationService


class SecondMeService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = SecondMeRequestRepository(session)
        self.content_repo = SecondMeContentRepository(session)

    async def create_request(self, data: SecondMeRequestCreate, user: User) -> SecondMeRequest:
        if user.role != Role.CLIENT:
            raise AuthorizationError("Only client users can request a Second Me avatar")
        client_id = self._client_scope(user)

        if await self.repo.count_live_for_client(client_id):
            raise ConflictError("An active Second Me request already exists for this client")

        self._log_operation("Creating Second Me request", client_id=client_id)
        return await self._execute_db_operation(
            "create_second_me_request",
            self.repo.create(client_id=client_id, **data.model_dump()),
        )

    async def list_requests(self, user: User) -> list[SecondMeRequest]:
        return await self.repo.list_requests(self._client_scope(user))

    async def get_request(self, request_id: str, user: User) -> SecondMeRequest:
        request = await self.repo.get_by_id(request_id)
        self._check_tenant(user, request.client_id)
        return request

    async def update_request(self, request_id: str, data: SecondMeRequestUpdate) -> SecondMeRequest:
        request = await self.repo.get_by_id(request_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return request

        new_status = update_data.get("status")
        if new_status and new_status != "paused" and request.status == "paused":
            live = await self.repo.count_live_for_client(request.client_id)
            if live:
                raise ConflictError("Another Second Me request is already active for this client")

        self._log_operation("Updating Second Me request", request_id=request_id, fields=list(update_data))
        return await self._execute_db_operation(
            "update_second_me_request",
            self.repo.apply(request, **update_data),
        )

    async def add_content(self, request_id: str, data: SecondMeContentCreate) -> SecondMeContent:
        request = await self.repo.get_by_id(request_id)
        content = await self._execute_db_operation(
            "create_second_me_content",
            self.content_repo.create(
                request_id=request.id,
                client_id=request.client_id,
                **data.model_dump(),
            ),
        )
        self._log_operation("Second Me content added", request_id=request_id, content_id=content.id)
        await self._notify_client_users(request.client_id, content)
        return content

    async def list_content(self, request_id: str, user: User) -> list[SecondMeContent]:
        await self.get_request(request_id, user)
        return await self.content_repo.get_for_request(request_id)

    async def review_content(
        self,
        content_id: str,
        data: SecondMeContentReview,
        user: User,
    ) -> SecondMeContent:
        content = await self.content_repo.get_by_id(content_id)
        self._check_tenant(user, content.client_id)
        self._log_operation("Second Me content reviewed", content_id=content_id, status=data.status)
        return await self._execute_db_operation(
            "review_second_me_content",
            self.content_repo.apply(content, status=data.status),
        )

    async def _notify_client_users(self, client_id: str, content: SecondMeContent) -> None:
        notifications = NotificationService(self.session)
        for client_user in await UserRepository(self.session).get_by_client(client_id):
            await notifications.notify(
                user_id=client_user.id,
                title="New Second Me content",
                message=f"A new {content.content_type} is ready for your review",
                category="second_me",
                action_url="/second-me",
            )
