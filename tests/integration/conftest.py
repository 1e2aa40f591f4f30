"""
Integration Test Fixtures.

Fixtures for integration tests: the real app, a real (SQLite) database
and real services. Builds on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.database import get_db_session
from agencyhub.backend.core.rbac import Role
from agencyhub.backend.core.security import create_access_token
from agencyhub.backend.models import Client, User

API = "/api"


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    The client uses the test database session, so everything an API call
    writes is rolled back after the test.
    """

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from agencyhub.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Users and Authentication
# =============================================================================


def auth_for(user: User) -> dict[str, str]:
    """Bearer headers for a user."""
    token = create_access_token(data={"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def tenant(make_client) -> Client:
    return await make_client("Tenant Co", company="Tenant Holdings", email="ops@tenant.test")


@pytest.fixture
async def other_tenant(make_client) -> Client:
    return await make_client("Other Co")


@pytest.fixture
async def admin(make_user) -> User:
    return await make_user(Role.ADMIN, username="admin", first_name="Ada")


@pytest.fixture
async def manager(make_user) -> User:
    return await make_user(Role.MANAGER, username="manager")


@pytest.fixture
async def staff(make_user) -> User:
    return await make_user(Role.STAFF, username="staff")


@pytest.fixture
async def creator(make_user) -> User:
    return await make_user(Role.CREATOR, username="creator")


@pytest.fixture
async def client_user(make_user, tenant: Client) -> User:
    return await make_user(Role.CLIENT, username="client", client_id=tenant.id)


@pytest.fixture
def admin_headers(admin: User) -> dict[str, str]:
    return auth_for(admin)


@pytest.fixture
def manager_headers(manager: User) -> dict[str, str]:
    return auth_for(manager)


@pytest.fixture
def staff_headers(staff: User) -> dict[str, str]:
    return auth_for(staff)


@pytest.fixture
def creator_headers(creator: User) -> dict[str, str]:
    return auth_for(creator)


@pytest.fixture
def client_headers(client_user: User) -> dict[str, str]:
    return auth_for(client_user)


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()


@pytest.fixture
def auth_headers_for():
    """Build bearer headers for an arbitrary user: ``auth_headers_for(user)``."""
    return auth_for
