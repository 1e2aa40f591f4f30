"""
Integration Tests for the Auth API.
"""

from httpx import AsyncClient

from agencyhub.backend.core.security import create_access_token, create_refresh_token
from tests.conftest import TEST_PASSWORD
from tests.integration.conftest import API


class TestLogin:
    async def test_login_success(self, client: AsyncClient, admin, api):
        response = await client.post(
            f"{API}/auth/login",
            json={"username": "admin", "password": TEST_PASSWORD},
        )

        data = api.assert_success(response)["data"]
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["user"]["id"] == admin.id
        assert "password_hash" not in data["user"]

    async def test_username_is_trimmed(self, client: AsyncClient, admin, api):
        response = await client.post(
            f"{API}/auth/login",
            json={"username": "  admin ", "password": TEST_PASSWORD},
        )
        api.assert_success(response)

    async def test_wrong_password(self, client: AsyncClient, admin, api):
        response = await client.post(
            f"{API}/auth/login",
            json={"username": "admin", "password": "not-it"},
        )
        data = api.assert_error(response, 401, "AUTH_UNAUTHORIZED")
        assert data["error"]["message"] == "Invalid username or password"

    async def test_unknown_user_same_message(self, client: AsyncClient, api):
        response = await client.post(
            f"{API}/auth/login",
            json={"username": "ghost", "password": TEST_PASSWORD},
        )
        data = api.assert_error(response, 401)
        assert data["error"]["message"] == "Invalid username or password"

    async def test_missing_fields(self, client: AsyncClient, api):
        response = await client.post(f"{API}/auth/login", json={"username": "admin"})
        api.assert_validation_error(response, "password")


class TestRefresh:
    async def test_refresh_issues_access_token(self, client: AsyncClient, admin, auth_headers_for, api):
        login = await client.post(
            f"{API}/auth/login",
            json={"username": "admin", "password": TEST_PASSWORD},
        )
        refresh_token = login.json()["data"]["refresh_token"]

        response = await client.post(f"{API}/auth/refresh", json={"refresh_token": refresh_token})

        token = api.assert_success(response)["data"]["access_token"]
        me = await client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["data"]["id"] == admin.id

    async def test_access_token_rejected_as_refresh(self, client: AsyncClient, admin, api):
        token = create_access_token({"sub": admin.id, "role": admin.role})
        response = await client.post(f"{API}/auth/refresh", json={"refresh_token": token})
        api.assert_error(response, 401)

    async def test_refresh_for_deleted_user(self, client: AsyncClient, api):
        token = create_refresh_token({"sub": "no-such-user"})
        response = await client.post(f"{API}/auth/refresh", json={"refresh_token": token})
        api.assert_error(response, 401)


class TestMe:
    async def test_profile_and_permissions(self, client: AsyncClient, admin_headers, api):
        data = api.assert_success(await client.get(f"{API}/auth/me", headers=admin_headers))["data"]

        assert data["username"] == "admin"
        assert data["display_name"] == "Ada"
        assert data["permissions"]["can_manage_users"] is True

    async def test_display_name_falls_back_to_username(self, client: AsyncClient, staff_headers, api):
        data = api.assert_success(await client.get(f"{API}/auth/me", headers=staff_headers))["data"]

        assert data["display_name"] == "staff"
        assert data["permissions"]["can_manage_users"] is False
        assert data["permissions"]["can_manage_clients"] is True

    async def test_requires_token(self, client: AsyncClient, api):
        api.assert_error(await client.get(f"{API}/auth/me"), 401, "AUTH_UNAUTHORIZED")

    async def test_rejects_garbage_token(self, client: AsyncClient, api):
        response = await client.get(f"{API}/auth/me", headers={"Authorization": "Bearer nope"})
        api.assert_error(response, 401)

    async def test_rejects_refresh_token(self, client: AsyncClient, admin, api):
        token = create_refresh_token({"sub": admin.id})
        response = await client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        api.assert_error(response, 401)
