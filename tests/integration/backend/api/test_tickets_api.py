"""
Integration Tests for the Support Tickets API.
"""

from httpx import AsyncClient

from agencyhub.backend.core.rbac import Role
from tests.integration.conftest import API, auth_for


async def _open(client: AsyncClient, headers, **fields) -> dict:
    body = {"subject": "Login broken", "description": "Cannot sign in to the portal", **fields}
    response = await client.post(f"{API}/tickets", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreate:
    async def test_client_ticket_forced_to_own_tenant(
        self, client: AsyncClient, client_headers, client_user, tenant, other_tenant, staff,
    ):
        ticket = await _open(
            client,
            client_headers,
            client_id=other_tenant.id,
            assigned_to_id=staff.id,
            priority="urgent",
        )

        assert ticket["client_id"] == tenant.id
        assert ticket["assigned_to_id"] is None
        assert ticket["created_by"] == client_user.id
        assert (ticket["status"], ticket["priority"]) == ("open", "urgent")

    async def test_staff_ticket_for_unknown_client(self, client: AsyncClient, staff_headers, api):
        response = await client.post(
            f"{API}/tickets",
            json={"subject": "S", "description": "D", "client_id": "ghost"},
            headers=staff_headers,
        )
        api.assert_error(response, 404)

    async def test_invalid_priority(self, client: AsyncClient, staff_headers, api):
        response = await client.post(
            f"{API}/tickets",
            json={"subject": "S", "description": "D", "priority": "high"},
            headers=staff_headers,
        )
        api.assert_validation_error(response, "priority")

    async def test_role_without_ticket_permission(self, client: AsyncClient, make_user, api):
        outsider = await make_user(Role.CREATOR_MANAGER)
        response = await client.get(f"{API}/tickets", headers=auth_for(outsider))
        api.assert_error(response, 403, "AUTHZ_FORBIDDEN")


class TestAccess:
    async def test_client_sees_only_own_tickets(
        self, client: AsyncClient, client_headers, staff_headers, make_user, tenant, api,
    ):
        colleague = await make_user(Role.CLIENT, client_id=tenant.id)
        mine = await _open(client, client_headers, subject="Mine")
        theirs = await _open(client, auth_for(colleague), subject="Colleague's")
        await _open(client, staff_headers, subject="Internal")

        data = api.assert_success(await client.get(f"{API}/tickets", headers=client_headers))
        assert [t["id"] for t in data["data"]] == [mine["id"]]

        response = await client.get(f"{API}/tickets/{theirs['id']}", headers=client_headers)
        api.assert_error(response, 403, "AUTHZ_FORBIDDEN")

    async def test_staff_see_everything_newest_first(
        self, client: AsyncClient, client_headers, staff_headers, api,
    ):
        await _open(client, client_headers, subject="First")
        await _open(client, staff_headers, subject="Second")

        data = api.assert_success(await client.get(f"{API}/tickets", headers=staff_headers))
        assert [t["subject"] for t in data["data"]] == ["Second", "First"]

    async def test_filters(self, client: AsyncClient, staff_headers, api):
        await _open(client, staff_headers, subject="Calm")
        await _open(client, staff_headers, subject="Fire", priority="urgent")

        data = api.assert_success(await client.get(
            f"{API}/tickets", params={"priority": "urgent"}, headers=staff_headers,
        ))
        assert [t["subject"] for t in data["data"]] == ["Fire"]


class TestLifecycle:
    async def test_advance_to_resolved_then_stops(self, client: AsyncClient, staff_headers, api):
        ticket = await _open(client, staff_headers)
        url = f"{API}/tickets/{ticket['id']}/advance"

        first = api.assert_success(await client.post(url, headers=staff_headers))["data"]
        second = api.assert_success(await client.post(url, headers=staff_headers))["data"]

        assert (first["status"], first["resolved_at"]) == ("in_progress", None)
        assert second["status"] == "resolved"
        assert second["resolved_at"] is not None

        data = api.assert_error(await client.post(url, headers=staff_headers), 400, "VAL_VALIDATION_ERROR")
        assert data["error"]["details"] == {"status": "resolved"}

    async def test_reopen_clears_resolved_at(self, client: AsyncClient, staff_headers, api):
        ticket = await _open(client, staff_headers)
        url = f"{API}/tickets/{ticket['id']}"

        resolved = api.assert_success(
            await client.patch(url, json={"status": "resolved"}, headers=staff_headers),
        )["data"]
        assert resolved["resolved_at"] is not None

        closed = api.assert_success(
            await client.patch(url, json={"status": "closed"}, headers=staff_headers),
        )["data"]
        assert closed["resolved_at"] == resolved["resolved_at"]

        reopened = api.assert_success(
            await client.patch(url, json={"status": "open"}, headers=staff_headers),
        )["data"]
        assert reopened["resolved_at"] is None

    async def test_client_cannot_assign(
        self, client: AsyncClient, client_headers, staff, api,
    ):
        ticket = await _open(client, client_headers)
        data = api.assert_success(await client.patch(
            f"{API}/tickets/{ticket['id']}",
            json={"assigned_to_id": staff.id, "subject": "Still broken"},
            headers=client_headers,
        ))["data"]

        assert data["assigned_to_id"] is None
        assert data["subject"] == "Still broken"

    async def test_delete(self, client: AsyncClient, client_headers, api):
        ticket = await _open(client, client_headers)
        response = await client.delete(f"{API}/tickets/{ticket['id']}", headers=client_headers)
        assert response.status_code == 204
        api.assert_error(await client.get(f"{API}/tickets/{ticket['id']}", headers=client_headers), 404)
