"""
Integration Tests for the Clients API.

CRM records, display ordering, the activation gate, tenant scoping and
per-platform social stats.
"""

from httpx import AsyncClient

from tests.integration.conftest import API


async def _create(client: AsyncClient, headers, name: str, **fields) -> dict:
    response = await client.post(f"{API}/clients", json={"name": name, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateClient:
    async def test_defaults_and_order(self, client: AsyncClient, staff_headers, api):
        first = await _create(client, staff_headers, "Acme Coffee", service_tags=["seo"])
        second = await _create(client, staff_headers, "Bolt Gyms")

        assert first["status"] == "onboarding"
        assert first["service_tags"] == ["seo"]
        assert second["display_order"] == first["display_order"] + 1

    async def test_seeds_onboarding_checklist(self, client: AsyncClient, staff_headers, api):
        created = await _create(client, staff_headers, "Acme Coffee")

        response = await client.get(f"{API}/clients/{created['id']}/onboarding", headers=staff_headers)

        checklist = api.assert_success(response)["data"]
        assert checklist["total"] == 6
        assert checklist["progress"] == 0
        assert [t["due_day"] for t in checklist["tasks"]] == [1, 2, 3, 5, 10, 30]

    async def test_creator_cannot_create(self, client: AsyncClient, creator_headers, api):
        response = await client.post(f"{API}/clients", json={"name": "Nope"}, headers=creator_headers)
        api.assert_error(response, 403)

    async def test_invalid_status(self, client: AsyncClient, staff_headers, api):
        response = await client.post(
            f"{API}/clients",
            json={"name": "Acme", "status": "archived"},
            headers=staff_headers,
        )
        api.assert_validation_error(response, "status")


class TestListClients:
    async def test_filters(self, client: AsyncClient, staff_headers, make_client, api):
        await make_client("Acme Coffee", status="active", company="Acme Holdings")
        await make_client("Bolt Gyms", status="inactive")
        await make_client("Cedar Dental", status="active", company="Bolt Partners")

        active = api.assert_success(
            await client.get(f"{API}/clients?status=active", headers=staff_headers),
        )
        assert [c["name"] for c in active["data"]] == ["Acme Coffee", "Cedar Dental"]
        assert active["pagination"]["total"] == 2

        matched = api.assert_success(await client.get(f"{API}/clients?q=bolt", headers=staff_headers))
        assert [c["name"] for c in matched["data"]] == ["Bolt Gyms", "Cedar Dental"]

    async def test_client_user_sees_only_own_tenant(
        self, client: AsyncClient, client_headers, tenant, other_tenant, api,
    ):
        body = api.assert_success(await client.get(f"{API}/clients", headers=client_headers))

        assert [c["id"] for c in body["data"]] == [tenant.id]
        assert body["pagination"]["total"] == 1

    async def test_client_user_cannot_read_other_tenant(
        self, client: AsyncClient, client_headers, other_tenant, api,
    ):
        response = await client.get(f"{API}/clients/{other_tenant.id}", headers=client_headers)
        api.assert_error(response, 403)

    async def test_creator_has_no_access(self, client: AsyncClient, creator_headers, api):
        api.assert_error(await client.get(f"{API}/clients", headers=creator_headers), 403)


class TestReorder:
    async def test_reorder(self, client: AsyncClient, staff_headers, make_client, api):
        a = await make_client("A", display_order=0)
        b = await make_client("B", display_order=1)
        c = await make_client("C", display_order=2)

        response = await client.post(
            f"{API}/clients/reorder",
            json={"ordered_ids": [c.id, a.id, b.id]},
            headers=staff_headers,
        )

        data = api.assert_success(response)["data"]
        assert [(row["name"], row["display_order"]) for row in data] == [("C", 0), ("A", 1), ("B", 2)]

        listed = api.assert_success(await client.get(f"{API}/clients", headers=staff_headers))
        assert [row["name"] for row in listed["data"]] == ["C", "A", "B"]

    async def test_unknown_id(self, client: AsyncClient, staff_headers, make_client, api):
        a = await make_client("A")
        response = await client.post(
            f"{API}/clients/reorder",
            json={"ordered_ids": [a.id, "ghost"]},
            headers=staff_headers,
        )
        api.assert_error(response, 404)


class TestActivationGate:
    async def test_blocked_while_onboarding_incomplete(self, client: AsyncClient, staff_headers, api):
        created = await _create(client, staff_headers, "Acme Coffee")

        response = await client.patch(
            f"{API}/clients/{created['id']}",
            json={"status": "active"},
            headers=staff_headers,
        )

        data = api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        assert data["error"]["details"]["incomplete_onboarding_tasks"] == 6

    async def test_allowed_once_checklist_done(self, client: AsyncClient, staff_headers, api):
        created = await _create(client, staff_headers, "Acme Coffee")
        checklist = (await client.get(
            f"{API}/clients/{created['id']}/onboarding", headers=staff_headers,
        )).json()["data"]
        for task in checklist["tasks"]:
            await client.post(f"{API}/onboarding/{task['id']}/toggle", headers=staff_headers)

        response = await client.patch(
            f"{API}/clients/{created['id']}",
            json={"status": "active"},
            headers=staff_headers,
        )

        assert api.assert_success(response)["data"]["status"] == "active"

    async def test_client_without_checklist_can_activate(
        self, client: AsyncClient, staff_headers, make_client, api,
    ):
        bare = await make_client("Bare Co")
        response = await client.patch(f"{API}/clients/{bare.id}", json={"status": "active"}, headers=staff_headers)
        api.assert_success(response)

    async def test_other_fields_unaffected(self, client: AsyncClient, staff_headers, api):
        created = await _create(client, staff_headers, "Acme Coffee")
        response = await client.patch(
            f"{API}/clients/{created['id']}",
            json={"notes": "Prefers email", "status": "inactive"},
            headers=staff_headers,
        )

        data = api.assert_success(response)["data"]
        assert data["notes"] == "Prefers email"
        assert data["status"] == "inactive"

    async def test_null_name_rejected(self, client: AsyncClient, staff_headers, api):
        created = await _create(client, staff_headers, "Acme Coffee")
        response = await client.patch(
            f"{API}/clients/{created['id']}", json={"name": None}, headers=staff_headers,
        )
        api.assert_validation_error(response, "name")

    async def test_null_optional_field_clears_it(self, client: AsyncClient, staff_headers, api):
        created = await _create(client, staff_headers, "Acme Coffee", notes="Call first")
        data = api.assert_success(await client.patch(
            f"{API}/clients/{created['id']}", json={"notes": None}, headers=staff_headers,
        ))["data"]
        assert data["notes"] is None


class TestDeleteClient:
    async def test_delete(self, client: AsyncClient, staff_headers, make_client, api):
        doomed = await make_client("Doomed")

        assert (await client.delete(f"{API}/clients/{doomed.id}", headers=staff_headers)).status_code == 204
        api.assert_error(await client.get(f"{API}/clients/{doomed.id}", headers=staff_headers), 404)


class TestSocialStats:
    async def test_upsert_inserts_then_updates(self, client: AsyncClient, staff_headers, staff, tenant, api):
        url = f"{API}/clients/{tenant.id}/social-stats/instagram"

        first = api.assert_success(
            await client.put(url, json={"followers": 1200, "engagement": 3.4}, headers=staff_headers),
        )["data"]
        second = api.assert_success(
            await client.put(url, json={"followers": 1350, "posts": 40}, headers=staff_headers),
        )["data"]

        assert second["id"] == first["id"]
        assert second["followers"] == 1350
        assert second["posts"] == 40
        assert second["updated_by"] == staff.id

    async def test_listing_sorted_by_platform(self, client: AsyncClient, staff_headers, tenant, api):
        for platform in ("tiktok", "facebook"):
            await client.put(
                f"{API}/clients/{tenant.id}/social-stats/{platform}",
                json={"followers": 10},
                headers=staff_headers,
            )

        data = api.assert_success(
            await client.get(f"{API}/clients/{tenant.id}/social-stats", headers=staff_headers),
        )["data"]
        assert [row["platform"] for row in data] == ["facebook", "tiktok"]

    async def test_client_reads_own_stats_only(
        self, client: AsyncClient, client_headers, tenant, other_tenant, api,
    ):
        api.assert_success(await client.get(f"{API}/clients/{tenant.id}/social-stats", headers=client_headers))
        api.assert_error(
            await client.get(f"{API}/clients/{other_tenant.id}/social-stats", headers=client_headers),
            403,
        )

    async def test_client_cannot_write(self, client: AsyncClient, client_headers, tenant, api):
        response = await client.put(
            f"{API}/clients/{tenant.id}/social-stats/instagram",
            json={"followers": 1},
            headers=client_headers,
        )
        api.assert_error(response, 403)

    async def test_unknown_platform(self, client: AsyncClient, staff_headers, tenant):
        response = await client.put(
            f"{API}/clients/{tenant.id}/social-stats/myspace",
            json={"followers": 1},
            headers=staff_headers,
        )
        assert response.status_code == 422

    async def test_negative_followers(self, client: AsyncClient, staff_headers, tenant, api):
        response = await client.put(
            f"{API}/clients/{tenant.id}/social-stats/instagram",
            json={"followers": -1},
            headers=staff_headers,
        )
        api.assert_validation_error(response, "followers")

    async def test_delete(self, client: AsyncClient, staff_headers, tenant, api):
        url = f"{API}/clients/{tenant.id}/social-stats/youtube"
        await client.put(url, json={"views": 99}, headers=staff_headers)

        assert (await client.delete(url, headers=staff_headers)).status_code == 204
        api.assert_error(await client.delete(url, headers=staff_headers), 404)
