"""
Integration Tests for the Campaigns API.
"""

from httpx import AsyncClient

from tests.integration.conftest import API


async def _create(client: AsyncClient, headers, client_id: str, name: str, **fields) -> dict:
    body = {"client_id": client_id, "name": name, "type": "social", **fields}
    response = await client.post(f"{API}/campaigns", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateCampaign:
    async def test_create(self, client: AsyncClient, staff_headers, tenant, api):
        data = await _create(
            client, staff_headers, tenant.id, "Spring Launch",
            type="ads", budget="2500.00", goals=["awareness"],
            start_date="2024-03-01", end_date="2024-03-31",
        )

        assert data["status"] == "planning"
        assert data["budget"] == 2500.0
        assert data["goals"] == ["awareness"]

    async def test_end_before_start(self, client: AsyncClient, staff_headers, tenant, api):
        response = await client.post(
            f"{API}/campaigns",
            json={
                "client_id": tenant.id, "name": "Backwards", "type": "social",
                "start_date": "2024-03-31", "end_date": "2024-03-01",
            },
            headers=staff_headers,
        )
        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")

    async def test_unknown_client(self, client: AsyncClient, staff_headers, api):
        response = await client.post(
            f"{API}/campaigns",
            json={"client_id": "ghost", "name": "Orphan", "type": "social"},
            headers=staff_headers,
        )
        api.assert_error(response, 404)

    async def test_unknown_type(self, client: AsyncClient, staff_headers, tenant, api):
        response = await client.post(
            f"{API}/campaigns",
            json={"client_id": tenant.id, "name": "Fax blast", "type": "fax"},
            headers=staff_headers,
        )
        api.assert_validation_error(response, "type")

    async def test_creator_cannot_create(self, client: AsyncClient, creator_headers, tenant, api):
        response = await client.post(
            f"{API}/campaigns",
            json={"client_id": tenant.id, "name": "Nope", "type": "social"},
            headers=creator_headers,
        )
        api.assert_error(response, 403)


class TestListCampaigns:
    async def test_filters(self, client: AsyncClient, staff_headers, tenant, other_tenant, api):
        await _create(client, staff_headers, tenant.id, "Tenant Social", status="active")
        await _create(client, staff_headers, tenant.id, "Tenant Paused", status="paused")
        await _create(client, staff_headers, other_tenant.id, "Other Social", status="active")

        by_client = api.assert_success(
            await client.get(f"{API}/campaigns?client_id={tenant.id}", headers=staff_headers),
        )
        assert {c["name"] for c in by_client["data"]} == {"Tenant Social", "Tenant Paused"}

        active = api.assert_success(await client.get(f"{API}/campaigns?status=active", headers=staff_headers))
        assert {c["name"] for c in active["data"]} == {"Tenant Social", "Other Social"}

    async def test_client_user_scoped(
        self, client: AsyncClient, staff_headers, client_headers, tenant, other_tenant, api,
    ):
        await _create(client, staff_headers, tenant.id, "Mine")
        theirs = await _create(client, staff_headers, other_tenant.id, "Theirs")

        body = api.assert_success(
            await client.get(f"{API}/campaigns?client_id={other_tenant.id}", headers=client_headers),
        )
        assert [c["name"] for c in body["data"]] == ["Mine"]

        api.assert_error(await client.get(f"{API}/campaigns/{theirs['id']}", headers=client_headers), 403)


class TestUpdateAndDelete:
    async def test_update(self, client: AsyncClient, staff_headers, tenant, api):
        campaign = await _create(client, staff_headers, tenant.id, "Spring", start_date="2024-03-01")

        data = api.assert_success(await client.patch(
            f"{API}/campaigns/{campaign['id']}",
            json={"status": "active", "end_date": "2024-04-30"},
            headers=staff_headers,
        ))["data"]

        assert data["status"] == "active"
        assert data["end_date"] == "2024-04-30"

    async def test_update_checks_stored_start(self, client: AsyncClient, staff_headers, tenant, api):
        campaign = await _create(client, staff_headers, tenant.id, "Spring", start_date="2024-03-01")

        response = await client.patch(
            f"{API}/campaigns/{campaign['id']}",
            json={"end_date": "2024-02-01"},
            headers=staff_headers,
        )
        api.assert_error(response, 400)

    async def test_delete(self, client: AsyncClient, staff_headers, tenant, api):
        campaign = await _create(client, staff_headers, tenant.id, "Spring")

        assert (await client.delete(f"{API}/campaigns/{campaign['id']}", headers=staff_headers)).status_code == 204
        api.assert_error(await client.get(f"{API}/campaigns/{campaign['id']}", headers=staff_headers), 404)
