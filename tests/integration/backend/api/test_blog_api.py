"""
Integration Tests for the Blog API.

Public reads need no token; the admin routes need can_manage_content.
"""

from httpx import AsyncClient

from tests.integration.conftest import API

ADMIN_BLOG = f"{API}/admin/blog-posts"


async def _create(client: AsyncClient, headers, **fields) -> dict:
    body = {"title": "Ten Tips: Grow Your Brand's Reach!", "content": "Body", **fields}
    response = await client.post(ADMIN_BLOG, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestSlugs:
    async def test_slug_from_title(self, client: AsyncClient, admin_headers):
        post = await _create(client, admin_headers)
        assert post["slug"] == "ten-tips-grow-your-brands-reach"

    async def test_collisions_get_suffixes(self, client: AsyncClient, admin_headers):
        slugs = [(await _create(client, admin_headers, title="Hello World"))["slug"] for _ in range(3)]
        assert slugs == ["hello-world", "hello-world-2", "hello-world-3"]

    async def test_explicit_slug_is_normalised(self, client: AsyncClient, admin_headers):
        post = await _create(client, admin_headers, slug="My Custom Slug")
        assert post["slug"] == "my-custom-slug"

    async def test_symbol_only_title_falls_back(self, client: AsyncClient, admin_headers):
        post = await _create(client, admin_headers, title="!!!")
        assert post["slug"] == "post"

    async def test_renaming_to_own_slug_keeps_it(self, client: AsyncClient, admin_headers, api):
        post = await _create(client, admin_headers, title="Launch Day")
        data = api.assert_success(await client.patch(
            f"{ADMIN_BLOG}/{post['id']}", json={"slug": "launch-day"}, headers=admin_headers,
        ))["data"]
        assert data["slug"] == "launch-day"

    async def test_new_title_regenerates_slug(self, client: AsyncClient, admin_headers, api):
        await _create(client, admin_headers, title="New Title")
        post = await _create(client, admin_headers, title="Old Title")

        data = api.assert_success(await client.patch(
            f"{ADMIN_BLOG}/{post['id']}", json={"title": "New Title"}, headers=admin_headers,
        ))["data"]
        assert data["slug"] == "new-title-2"

    async def test_explicit_slug_beats_title(self, client: AsyncClient, admin_headers, api):
        post = await _create(client, admin_headers, title="Old Title")
        data = api.assert_success(await client.patch(
            f"{ADMIN_BLOG}/{post['id']}",
            json={"title": "Another Title", "slug": "kept-slug"},
            headers=admin_headers,
        ))["data"]
        assert data["slug"] == "kept-slug"


class TestTagsAndPublishing:
    async def test_comma_separated_tags(self, client: AsyncClient, admin_headers):
        post = await _create(client, admin_headers, tags=" seo, , social ,ads")
        assert post["tags"] == ["seo", "social", "ads"]

    async def test_publishing_stamps_published_at(self, client: AsyncClient, admin_headers, api):
        draft = await _create(client, admin_headers)
        assert draft["published_at"] is None

        published = api.assert_success(await client.patch(
            f"{ADMIN_BLOG}/{draft['id']}", json={"status": "published"}, headers=admin_headers,
        ))["data"]
        assert published["published_at"] is not None

    async def test_explicit_published_at_kept(self, client: AsyncClient, admin_headers):
        post = await _create(
            client, admin_headers, status="published", published_at="2024-02-01T09:00:00Z",
        )
        assert post["published_at"].startswith("2024-02-01T09:00:00")


class TestPublicReads:
    async def test_only_published_newest_first(self, client: AsyncClient, admin_headers, api):
        await _create(client, admin_headers, title="Draft")
        await _create(client, admin_headers, title="Older", status="published", published_at="2024-01-01T00:00:00Z")
        await _create(client, admin_headers, title="Newer", status="published", published_at="2024-03-01T00:00:00Z")

        data = api.assert_success(await client.get(f"{API}/blog-posts"))
        assert [p["title"] for p in data["data"]] == ["Newer", "Older"]
        assert data["pagination"]["total"] == 2
        assert "content" not in data["data"][0]

    async def test_get_by_slug(self, client: AsyncClient, admin_headers, api):
        await _create(client, admin_headers, title="Live Post", status="published")
        await _create(client, admin_headers, title="Hidden Post")

        data = api.assert_success(await client.get(f"{API}/blog-posts/live-post"))
        assert data["data"]["content"] == "Body"

        api.assert_error(await client.get(f"{API}/blog-posts/hidden-post"), 404, "RES_NOT_FOUND")


class TestAdmin:
    async def test_admin_list_includes_drafts(self, client: AsyncClient, admin_headers, api):
        await _create(client, admin_headers, title="Draft")
        await _create(client, admin_headers, title="Live", status="published")

        data = api.assert_success(await client.get(ADMIN_BLOG, headers=admin_headers))
        assert data["pagination"]["total"] == 2

    async def test_requires_content_permission(self, client: AsyncClient, client_headers, api):
        api.assert_error(await client.get(ADMIN_BLOG, headers=client_headers), 403)
        api.assert_error(await client.get(ADMIN_BLOG), 401)

    async def test_delete(self, client: AsyncClient, admin_headers, api):
        post = await _create(client, admin_headers, status="published", title="Gone Soon")
        response = await client.delete(f"{ADMIN_BLOG}/{post['id']}", headers=admin_headers)
        assert response.status_code == 204
        api.assert_error(await client.get(f"{API}/blog-posts/gone-soon"), 404)
