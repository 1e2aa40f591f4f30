"""
Integration Tests for Request Context Middleware.

Tests that request context is propagated through the API.
"""

from httpx import AsyncClient

from tests.integration.conftest import API


class TestRequestIdHeader:
    async def test_generates_request_id(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert len(response.headers["X-Request-ID"]) == 36

    async def test_propagates_provided_request_id(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "req-12345"})
        assert response.headers["X-Request-ID"] == "req-12345"

    async def test_present_on_api_routes(self, client: AsyncClient):
        for path in ("/health", f"{API}/blog-posts", f"{API}/packages"):
            response = await client.get(path)
            assert len(response.headers["X-Request-ID"]) == 36, path


class TestResponseTimeHeader:
    async def test_numeric_milliseconds(self, client: AsyncClient):
        response = await client.get("/health")

        value = response.headers["X-Response-Time"]
        assert value.endswith("ms")
        assert value[:-2].isdigit()

    async def test_present_on_errors(self, client: AsyncClient, admin_headers):
        response = await client.get(f"{API}/clients/does-not-exist", headers=admin_headers)

        assert response.status_code == 404
        assert "X-Response-Time" in response.headers


class TestRequestContextInErrors:
    async def test_not_found_includes_request_id(self, client: AsyncClient, admin_headers):
        response = await client.get(
            f"{API}/clients/does-not-exist",
            headers={**admin_headers, "X-Request-ID": "error-test-id"},
        )

        assert response.status_code == 404
        assert response.json()["metadata"]["request_id"] == "error-test-id"

    async def test_auth_error_includes_request_id(self, client: AsyncClient):
        response = await client.get(f"{API}/auth/me", headers={"X-Request-ID": "anon-id"})

        assert response.status_code == 401
        assert response.json()["metadata"]["request_id"] == "anon-id"

    async def test_validation_error_includes_request_id(self, client: AsyncClient):
        response = await client.post(
            f"{API}/auth/login",
            json={},
            headers={"X-Request-ID": "validation-id"},
        )

        assert response.status_code == 422
        assert response.json()["metadata"]["request_id"] == "validation-id"
