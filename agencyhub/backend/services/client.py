"""
Client Service.

CRM records, display ordering and per-platform social stats.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.config import get_app_config
from agencyhub.backend.core.exceptions import NotFoundError, ValidationError
from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.client import Client, SocialStat
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.client import ClientRepository, SocialStatRepository
from agencyhub.backend.repositories.onboarding import OnboardingTaskRepository
from agencyhub.backend.schemas.client import ClientCreate, ClientUpdate, SocialStatUpsert
from agencyhub.backend.services.base import BaseService
from agencyhub.backend.services.onboarding import OnboardingService


class ClientService(BaseService):
    """
    Service for client business logic.

    A client cannot be switched to ``active`` while any of its onboarding
    tasks is incomplete.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ClientRepository(session)
        self.onboarding_repo = OnboardingTaskRepository(session)

    async def list_clients(
        self,
        user: User,
        status: str | None = None,
        query: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Client], int]:
        scope = self._client_scope(user)
        query = query.strip() if query else None
        clients = await self.repo.list_clients(status, query, scope, limit=limit, offset=offset)
        total = await self.repo.count_clients(status, query, scope)
        return clients, total

    async def get_client(self, client_id: str, user: User | None = None) -> Client:
        if user is not None:
            self._check_tenant(user, client_id)
        return await self.repo.get_by_id(client_id)

    async def create_client(self, data: ClientCreate) -> Client:
        """Create a client at the end of the display order and seed onboarding."""
        self._log_operation("Creating client", name=data.name)

        client = await self._execute_db_operation(
            "create_client",
            self.repo.create(
                **data.model_dump(),
                display_order=await self.repo.next_display_order(),
            ),
        )

        if get_app_config().features.onboarding_seed_checklist:
            await OnboardingService(self.session).seed_default(client.id)

        self._log_debug("Client created", client_id=client.id)
        return client

    async def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """
        Update a client.

        Raises:
            ValidationError: Activation while onboarding is incomplete
        """
        client = await self.repo.get_by_id(client_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return client

        if update_data.get("status") == "active" and client.status != "active":
            remaining = await self.onboarding_repo.count_incomplete(client_id)
            if remaining:
                raise ValidationError(
                    f"Cannot set client to active: {remaining} onboarding task(s) still incomplete",
                    details={"incomplete_onboarding_tasks": remaining},
                )

        self._log_operation(
            "Updating client",
            client_id=client_id,
            fields=list(update_data.keys()),
        )
        return await self._execute_db_operation(
            "update_client",
            self.repo.apply(client, **update_data),
        )

    async def delete_client(self, client_id: str) -> None:
        self._log_operation("Deleting client", client_id=client_id)
        await self._execute_db_operation("delete_client", self.repo.delete(client_id))

    async def reorder(self, ordered_ids: list[str]) -> list[Client]:
        """Set display_order to each id's position in the list."""
        clients = {c.id: c for c in await self.repo.find(Client.id.in_(ordered_ids))}
        missing = [cid for cid in ordered_ids if cid not in clients]
        if missing:
            raise NotFoundError(f"Client not found: {missing[0]}")

        self._log_operation("Reordering clients", count=len(ordered_ids))
        for index, client_id in enumerate(ordered_ids):
            clients[client_id].display_order = index
        await self._execute_db_operation("reorder_clients", self.session.flush())
        return [clients[cid] for cid in ordered_ids]


class SocialStatService(BaseService):
    """Per-platform audience figures entered by staff."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = SocialStatRepository(session)
        self.client_repo = ClientRepository(session)

    async def list_stats(self, client_id: str, user: User) -> list[SocialStat]:
        self._check_tenant(user, client_id)
        await self.client_repo.get_by_id(client_id)
        return await self.repo.get_for_client(client_id)

    async def upsert(
        self,
        client_id: str,
        platform: str,
        data: SocialStatUpsert,
        user: User,
    ) -> SocialStat:
        """Insert the platform row or update it in place."""
        await self.client_repo.get_by_id(client_id)
        existing = await self.repo.get_for_platform(client_id, platform)
        values = data.model_dump()

        self._log_operation(
            "Saving social stats",
            client_id=client_id,
            platform=platform,
            created=existing is None,
        )
        if existing is None:
            return await self._execute_db_operation(
                "create_social_stat",
                self.repo.create(
                    client_id=client_id,
                    platform=platform,
                    updated_by=user.id,
                    last_updated=utc_now(),
                    **values,
                ),
            )
        return await self._execute_db_operation(
            "update_social_stat",
            self.repo.apply(existing, updated_by=user.id, last_updated=utc_now(), **values),
        )

    async def delete(self, client_id: str, platform: str) -> None:
        existing = await self.repo.get_for_platform(client_id, platform)
        if existing is None:
            raise NotFoundError("Social stats not found")
        self._log_operation("Deleting social stats", client_id=client_id, platform=platform)
        await self._execute_db_operation("delete_social_stat", self.repo.delete(existing.id))
