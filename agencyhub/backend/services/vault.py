"""
Vault Service.

Admin password vault. Items are only readable or writable while the
requesting user's vault session is unlocked; the unlock window is stored
on the user row and lasts ``security.vault.unlock_minutes``.
"""

from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.config import get_app_config, get_settings
from agencyhub.backend.core.encryption import DecryptionError, decrypt_secret, encrypt_secret
from agencyhub.backend.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    VaultLockedError,
)
from agencyhub.backend.core.security import verify_password
from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.user import User
from agencyhub.backend.models.vault import VaultItem
from agencyhub.backend.repositories.user import UserRepository
from agencyhub.backend.repositories.vault import VaultItemRepository
from agencyhub.backend.schemas.vault import (
    VaultItemCreate,
    VaultItemResponse,
    VaultItemUpdate,
    VaultStatusResponse,
)
from agencyhub.backend.services.base import BaseService


def is_unlocked(user: User, now: datetime | None = None) -> bool:
    until = user.vault_unlocked_until
    return until is not None and until > (now or utc_now())


class VaultService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = VaultItemRepository(session)
        self.user_repo = UserRepository(session)

    # -------------------------------------------------------------------------
    # Lock state
    # -------------------------------------------------------------------------

    def status(self, user: User) -> VaultStatusResponse:
        if is_unlocked(user):
            return VaultStatusResponse(unlocked=True, unlocked_until=user.vault_unlocked_until)
        return VaultStatusResponse(unlocked=False)

    async def unlock(self, user: User, password: str) -> VaultStatusResponse:
        """
        Verify the vault password and open the unlock window.

        Raises:
            ConfigurationError: VAULT_PASSWORD_HASH is not set
            AuthenticationError: Wrong vault password
        """
        password_hash = get_settings().vault_password_hash
        if not password_hash:
            raise ConfigurationError("VAULT_PASSWORD_HASH is not set")
        if not verify_password(password, password_hash):
            self._logger.warning("Vault unlock failed", extra={"user_id": user.id})
            raise AuthenticationError("Invalid vault password")

        minutes = get_app_config().security.vault.unlock_minutes
        until = utc_now() + timedelta(minutes=minutes)
        await self._execute_db_operation(
            "unlock_vault",
            self.user_repo.apply(user, vault_unlocked_until=until),
        )
        self._log_operation("Vault unlocked", user_id=user.id, minutes=minutes)
        return self.status(user)

    async def lock(self, user: User) -> VaultStatusResponse:
        await self._execute_db_operation(
            "lock_vault",
            self.user_repo.apply(user, vault_unlocked_until=None),
        )
        self._log_operation("Vault locked", user_id=user.id)
        return self.status(user)

    def require_unlocked(self, user: User) -> None:
        if not is_unlocked(user):
            raise VaultLockedError()

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    @staticmethod
    def _encrypt_notes(notes: str | None) -> str | None:
        return encrypt_secret(notes) if notes else None

    @staticmethod
    def to_response(item: VaultItem) -> VaultItemResponse:
        try:
            password = decrypt_secret(item.encrypted_password)
            notes = decrypt_secret(item.encrypted_notes) if item.encrypted_notes else None
        except DecryptionError as e:
            raise ConfigurationError(
                "Vault item could not be decrypted; check VAULT_MASTER_KEY",
            ) from e
        return VaultItemResponse(
            id=item.id,
            name=item.name,
            username=item.username,
            url=item.url,
            notes=notes,
            password=password,
            created_by=item.created_by,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    async def list_items(self, user: User) -> list[VaultItemResponse]:
        self.require_unlocked(user)
        return [self.to_response(item) for item in await self.repo.list_recent_first()]

    async def create_item(self, user: User, data: VaultItemCreate) -> VaultItemResponse:
        self.require_unlocked(user)
        values = data.model_dump(exclude={"password", "notes"})
        self._log_operation("Creating vault item", name=data.name)
        item = await self._execute_db_operation(
            "create_vault_item",
            self.repo.create(
                **values,
                encrypted_password=encrypt_secret(data.password),
                encrypted_notes=self._encrypt_notes(data.notes),
                created_by=user.id,
            ),
        )
        return self.to_response(item)

    async def update_item(self, user: User, item_id: str, data: VaultItemUpdate) -> VaultItemResponse:
        self.require_unlocked(user)
        item = await self.repo.get_by_id(item_id)
        update_data = data.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        if password:
            update_data["encrypted_password"] = encrypt_secret(password)
        if "notes" in update_data:
            update_data["encrypted_notes"] = self._encrypt_notes(update_data.pop("notes"))
        if update_data:
            self._log_operation(
                "Updating vault item",
                item_id=item_id,
                fields=sorted(data.model_fields_set),
            )
            item = await self._execute_db_operation(
                "update_vault_item",
                self.repo.apply(item, **update_data),
            )
        return self.to_response(item)

    async def delete_item(self, user: User, item_id: str) -> None:
        self.require_unlocked(user)
        self._log_operation("Deleting vault item", item_id=item_id)
        await self._execute_db_operation("delete_vault_item", self.repo.delete(item_id))
