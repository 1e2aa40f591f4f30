"""
Integration Tests for the onboarding checklist.
"""

from httpx import AsyncClient

from tests.integration.conftest import API


async def _add(client: AsyncClient, headers, client_id: str, title: str, due_day: int) -> dict:
    response = await client.post(
        f"{API}/clients/{client_id}/onboarding",
        json={"title": title, "due_day": due_day},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestChecklist:
    async def test_empty_checklist(self, client: AsyncClient, staff_headers, tenant, api):
        data = api.assert_success(
            await client.get(f"{API}/clients/{tenant.id}/onboarding", headers=staff_headers),
        )["data"]
        assert data == {"client_id": tenant.id, "progress": 0, "completed": 0, "total": 0, "tasks": []}

    async def test_tasks_ordered_by_due_day(self, client: AsyncClient, staff_headers, tenant, api):
        await _add(client, staff_headers, tenant.id, "Kickoff report", 14)
        await _add(client, staff_headers, tenant.id, "Brand questionnaire", 2)

        data = api.assert_success(
            await client.get(f"{API}/clients/{tenant.id}/onboarding", headers=staff_headers),
        )["data"]
        assert [t["title"] for t in data["tasks"]] == ["Brand questionnaire", "Kickoff report"]

    async def test_progress_rounds(self, client: AsyncClient, staff_headers, tenant, api):
        tasks = [await _add(client, staff_headers, tenant.id, f"Step {n}", n) for n in (1, 2, 3)]
        await client.post(f"{API}/onboarding/{tasks[0]['id']}/toggle", headers=staff_headers)

        data = api.assert_success(
            await client.get(f"{API}/clients/{tenant.id}/onboarding", headers=staff_headers),
        )["data"]
        assert (data["completed"], data["total"], data["progress"]) == (1, 3, 33)

    async def test_client_sees_own_checklist_only(
        self, client: AsyncClient, client_headers, tenant, other_tenant, api,
    ):
        api.assert_success(await client.get(f"{API}/clients/{tenant.id}/onboarding", headers=client_headers))
        api.assert_error(
            await client.get(f"{API}/clients/{other_tenant.id}/onboarding", headers=client_headers),
            403,
        )

    async def test_unknown_client(self, client: AsyncClient, staff_headers, api):
        api.assert_error(await client.get(f"{API}/clients/ghost/onboarding", headers=staff_headers), 404)

    async def test_due_day_outside_window(self, client: AsyncClient, staff_headers, tenant, api):
        response = await client.post(
            f"{API}/clients/{tenant.id}/onboarding",
            json={"title": "Too late", "due_day": 31},
            headers=staff_headers,
        )
        api.assert_validation_error(response, "due_day")


class TestTaskActions:
    async def test_toggle_stamps_and_clears(self, client: AsyncClient, staff_headers, tenant, api):
        task = await _add(client, staff_headers, tenant.id, "Access accounts", 2)

        done = api.assert_success(
            await client.post(f"{API}/onboarding/{task['id']}/toggle", headers=staff_headers),
        )["data"]
        assert done["completed"] is True
        assert done["completed_at"] is not None

        undone = api.assert_success(
            await client.post(f"{API}/onboarding/{task['id']}/toggle", headers=staff_headers),
        )["data"]
        assert undone["completed"] is False
        assert undone["completed_at"] is None

    async def test_update(self, client: AsyncClient, staff_headers, tenant, api):
        task = await _add(client, staff_headers, tenant.id, "Access accounts", 2)

        data = api.assert_success(await client.patch(
            f"{API}/onboarding/{task['id']}",
            json={"title": "Access all accounts", "due_day": 4},
            headers=staff_headers,
        ))["data"]

        assert data["title"] == "Access all accounts"
        assert data["due_day"] == 4

    async def test_delete(self, client: AsyncClient, staff_headers, tenant, api):
        task = await _add(client, staff_headers, tenant.id, "Access accounts", 2)

        assert (await client.delete(f"{API}/onboarding/{task['id']}", headers=staff_headers)).status_code == 204
        api.assert_error(await client.post(f"{API}/onboarding/{task['id']}/toggle", headers=staff_headers), 404)

    async def test_client_cannot_toggle(self, client: AsyncClient, client_headers, staff_headers, tenant, api):
        task = await _add(client, staff_headers, tenant.id, "Access accounts", 2)
        api.assert_error(await client.post(f"{API}/onboarding/{task['id']}/toggle", headers=client_headers), 403)
