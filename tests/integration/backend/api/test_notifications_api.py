"""
Integration Tests for the Notifications API.
"""

import pytest
from httpx import AsyncClient

from agencyhub.backend.models.user import User
from agencyhub.backend.services.notification import NotificationService
from tests.integration.conftest import API

NOTIFICATIONS = f"{API}/notifications"


@pytest.fixture
async def inbox(db_session, staff: User) -> list[str]:
    service = NotificationService(db_session)
    ids = []
    for title in ("Welcome", "Task assigned", "Comment"):
        notification = await service.notify(staff.id, title, f"{title} body", push=False)
        ids.append(notification.id)
    return ids


class TestInbox:
    async def test_list_newest_first(self, client: AsyncClient, staff_headers, inbox, api):
        data = api.assert_success(await client.get(NOTIFICATIONS, headers=staff_headers))
        assert data["pagination"]["total"] == 3
        assert {n["title"] for n in data["data"]} == {"Welcome", "Task assigned", "Comment"}
        assert all(n["is_read"] is False for n in data["data"])

    async def test_only_own_notifications(self, client: AsyncClient, manager_headers, inbox, api):
        data = api.assert_success(await client.get(NOTIFICATIONS, headers=manager_headers))
        assert data["data"] == []

        response = await client.post(f"{NOTIFICATIONS}/{inbox[0]}/read", headers=manager_headers)
        api.assert_error(response, 404, "RES_NOT_FOUND")


class TestReadState:
    async def test_mark_one_read(self, client: AsyncClient, staff_headers, inbox, api):
        data = api.assert_success(
            await client.post(f"{NOTIFICATIONS}/{inbox[0]}/read", headers=staff_headers),
        )["data"]
        assert data["is_read"] is True

        count = api.assert_success(await client.get(f"{NOTIFICATIONS}/unread-count", headers=staff_headers))
        assert count["data"] == {"unread": 2}

        unread = api.assert_success(
            await client.get(NOTIFICATIONS, params={"unread_only": True}, headers=staff_headers),
        )
        assert inbox[0] not in {n["id"] for n in unread["data"]}

    async def test_mark_all_read(self, client: AsyncClient, staff_headers, inbox, api):
        data = api.assert_success(await client.post(f"{NOTIFICATIONS}/read-all", headers=staff_headers))
        assert data["data"] == {"updated": 3}

        again = api.assert_success(await client.post(f"{NOTIFICATIONS}/read-all", headers=staff_headers))
        assert again["data"] == {"updated": 0}

        count = api.assert_success(await client.get(f"{NOTIFICATIONS}/unread-count", headers=staff_headers))
        assert count["data"] == {"unread": 0}

    async def test_delete(self, client: AsyncClient, staff_headers, inbox, api):
        response = await client.delete(f"{NOTIFICATIONS}/{inbox[1]}", headers=staff_headers)
        assert response.status_code == 204

        data = api.assert_success(await client.get(NOTIFICATIONS, headers=staff_headers))
        assert data["pagination"]["total"] == 2
