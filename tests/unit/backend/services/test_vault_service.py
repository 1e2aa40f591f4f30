"""Unit tests for vault lock state."""

from datetime import timedelta
from unittest.mock import patch

import pytest

from agencyhub.backend.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    VaultLockedError,
)
from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.services.vault import VaultService, is_unlocked

SETTINGS = "agencyhub.backend.services.vault.get_settings"
VERIFY = "agencyhub.backend.services.vault.verify_password"


@pytest.fixture
def service(mock_db_session):
    return VaultService(mock_db_session)


class TestIsUnlocked:
    def test_never_unlocked(self, make_user_stub):
        assert not is_unlocked(make_user_stub(role="admin"))

    def test_window_open(self, make_user_stub):
        user = make_user_stub(role="admin", vault_unlocked_until=utc_now() + timedelta(minutes=5))
        assert is_unlocked(user)

    def test_window_expired(self, make_user_stub):
        user = make_user_stub(role="admin", vault_unlocked_until=utc_now() - timedelta(seconds=1))
        assert not is_unlocked(user)


class TestStatus:
    def test_locked(self, service, make_user_stub):
        status = service.status(make_user_stub(role="admin"))
        assert status.unlocked is False
        assert status.unlocked_until is None

    def test_unlocked(self, service, make_user_stub):
        until = utc_now() + timedelta(minutes=10)
        status = service.status(make_user_stub(role="admin", vault_unlocked_until=until))
        assert status.unlocked is True
        assert status.unlocked_until == until

    def test_require_unlocked(self, service, make_user_stub):
        with pytest.raises(VaultLockedError) as exc_info:
            service.require_unlocked(make_user_stub(role="admin"))
        assert exc_info.value.details == {"needs_unlock": True}


class TestUnlock:
    async def test_opens_configured_window(self, service, mock_settings, make_user_stub):
        mock_settings.vault_password_hash = "$2b$04$hash"
        user = make_user_stub(role="admin")

        with patch(SETTINGS, return_value=mock_settings), patch(VERIFY, return_value=True):
            status = await service.unlock(user, "open-sesame")

        assert status.unlocked is True
        window = user.vault_unlocked_until - utc_now()
        assert timedelta(minutes=14) < window <= timedelta(minutes=15)

    async def test_wrong_password(self, service, mock_settings, make_user_stub):
        mock_settings.vault_password_hash = "$2b$04$hash"
        user = make_user_stub(role="admin")

        with patch(SETTINGS, return_value=mock_settings), patch(VERIFY, return_value=False):
            with pytest.raises(AuthenticationError):
                await service.unlock(user, "guess")

        assert user.vault_unlocked_until is None

    async def test_missing_hash(self, service, mock_settings, make_user_stub):
        mock_settings.vault_password_hash = ""

        with patch(SETTINGS, return_value=mock_settings):
            with pytest.raises(ConfigurationError):
                await service.unlock(make_user_stub(role="admin"), "anything")

    async def test_lock_clears_window(self, service, make_user_stub):
        user = make_user_stub(role="admin", vault_unlocked_until=utc_now() + timedelta(minutes=5))

        status = await service.lock(user)

        assert status.unlocked is False
        assert user.vault_unlocked_until is None
