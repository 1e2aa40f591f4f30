"""
Integration Tests for the Content Calendar API.
"""

from httpx import AsyncClient

from tests.integration.conftest import API


async def _post(client: AsyncClient, headers, client_id: str, **fields) -> dict:
    body = {"client_id": client_id, "platforms": ["instagram"], "title": "Spring teaser", **fields}
    response = await client.post(f"{API}/content-posts", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreate:
    async def test_create_dedupes_platforms(self, client: AsyncClient, creator_headers, creator, tenant):
        post = await _post(
            client,
            creator_headers,
            tenant.id,
            platforms=["instagram", "tiktok", "instagram"],
            scheduled_for="2024-04-01T10:00:00+02:00",
        )

        assert post["platforms"] == ["instagram", "tiktok"]
        assert post["scheduled_for"].startswith("2024-04-01T08:00:00")
        assert post["approval_status"] == "draft"
        assert post["created_by"] == creator.id

    async def test_needs_a_platform(self, client: AsyncClient, creator_headers, tenant, api):
        response = await client.post(
            f"{API}/content-posts",
            json={"client_id": tenant.id, "platforms": [], "title": "Empty"},
            headers=creator_headers,
        )
        api.assert_validation_error(response, "platforms")

    async def test_unknown_platform(self, client: AsyncClient, creator_headers, tenant, api):
        response = await client.post(
            f"{API}/content-posts",
            json={"client_id": tenant.id, "platforms": ["myspace"], "title": "Retro"},
            headers=creator_headers,
        )
        api.assert_validation_error(response, "platforms")

    async def test_unknown_client(self, client: AsyncClient, creator_headers, api):
        response = await client.post(
            f"{API}/content-posts",
            json={"client_id": "ghost", "platforms": ["youtube"], "title": "Nobody"},
            headers=creator_headers,
        )
        api.assert_error(response, 404)

    async def test_client_users_cannot_create(self, client: AsyncClient, client_headers, tenant, api):
        response = await client.post(
            f"{API}/content-posts",
            json={"client_id": tenant.id, "platforms": ["youtube"], "title": "Mine"},
            headers=client_headers,
        )
        api.assert_error(response, 403, "AUTHZ_FORBIDDEN")


class TestListing:
    async def test_scheduled_order_and_window(self, client: AsyncClient, creator_headers, tenant, api):
        await _post(client, creator_headers, tenant.id, title="Unscheduled")
        await _post(client, creator_headers, tenant.id, title="May", scheduled_for="2024-05-02T12:00:00Z")
        await _post(client, creator_headers, tenant.id, title="April", scheduled_for="2024-04-02T12:00:00Z")

        everything = api.assert_success(await client.get(f"{API}/content-posts", headers=creator_headers))
        assert [p["title"] for p in everything["data"]] == ["April", "May", "Unscheduled"]

        april = api.assert_success(await client.get(
            f"{API}/content-posts",
            params={"start": "2024-04-01T00:00:00", "end": "2024-04-30T23:59:59"},
            headers=creator_headers,
        ))
        assert [p["title"] for p in april["data"]] == ["April"]

    async def test_client_sees_visible_own_posts(
        self, client: AsyncClient, creator_headers, client_headers, tenant, other_tenant, api,
    ):
        shown = await _post(client, creator_headers, tenant.id, title="Shown")
        hidden = await _post(client, creator_headers, tenant.id, title="Hidden", visible_to_client=False)
        foreign = await _post(client, creator_headers, other_tenant.id, title="Foreign")

        data = api.assert_success(await client.get(f"{API}/content-posts", headers=client_headers))
        assert [p["id"] for p in data["data"]] == [shown["id"]]

        for post in (hidden, foreign):
            response = await client.get(f"{API}/content-posts/{post['id']}", headers=client_headers)
            api.assert_error(response, 404)


class TestApproval:
    async def test_client_approves_with_feedback(
        self, client: AsyncClient, creator_headers, client_headers, tenant, api,
    ):
        post = await _post(client, creator_headers, tenant.id, approval_status="pending")

        data = api.assert_success(await client.post(
            f"{API}/content-posts/{post['id']}/approval",
            json={"approval_status": "rejected", "feedback": "Use the new logo"},
            headers=client_headers,
        ))["data"]

        assert data["approval_status"] == "rejected"
        assert data["client_feedback"] == "Use the new logo"

        pending = api.assert_success(await client.get(
            f"{API}/content-posts",
            params={"approval_status": "rejected"},
            headers=creator_headers,
        ))
        assert pending["pagination"]["total"] == 1

    async def test_only_approve_or_reject(self, client: AsyncClient, creator_headers, client_headers, tenant, api):
        post = await _post(client, creator_headers, tenant.id)
        response = await client.post(
            f"{API}/content-posts/{post['id']}/approval",
            json={"approval_status": "published"},
            headers=client_headers,
        )
        api.assert_validation_error(response, "approval_status")

    async def test_other_tenant_cannot_approve(
        self, client: AsyncClient, creator_headers, client_headers, other_tenant, api,
    ):
        post = await _post(client, creator_headers, other_tenant.id)
        response = await client.post(
            f"{API}/content-posts/{post['id']}/approval",
            json={"approval_status": "approved"},
            headers=client_headers,
        )
        api.assert_error(response, 404)


class TestUpdateAndDelete:
    async def test_update(self, client: AsyncClient, creator_headers, tenant, api):
        post = await _post(client, creator_headers, tenant.id)
        data = api.assert_success(await client.patch(
            f"{API}/content-posts/{post['id']}",
            json={"caption": "Fresh looks for spring", "approval_status": "published"},
            headers=creator_headers,
        ))["data"]
        assert (data["caption"], data["approval_status"]) == ("Fresh looks for spring", "published")

    async def test_delete(self, client: AsyncClient, creator_headers, tenant, api):
        post = await _post(client, creator_headers, tenant.id)
        response = await client.delete(f"{API}/content-posts/{post['id']}", headers=creator_headers)
        assert response.status_code == 204
        api.assert_error(await client.get(f"{API}/content-posts/{post['id']}", headers=creator_headers), 404)
