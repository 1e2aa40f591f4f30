"""
Integration Tests for Database Fixtures.

Checks the per-test session, rollback isolation and the model mixins,
and doubles as documentation for the entity factories.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.rbac import Role
from agencyhub.backend.core.security import verify_password
from agencyhub.backend.models import Client, User
from tests.conftest import TEST_PASSWORD

ISOLATION_MARKER = "Isolation Check Co"


class TestDatabaseSession:
    async def test_session_is_provided(self, db_session: AsyncSession):
        assert isinstance(db_session, AsyncSession)

    async def test_can_query_created_records(self, db_session: AsyncSession, make_client):
        await make_client("Alpha")
        await make_client("Beta")

        result = await db_session.execute(select(Client.name).order_by(Client.name))
        assert result.scalars().all() == ["Alpha", "Beta"]


class TestDatabaseIsolation:
    async def test_first_test_creates_client(self, db_session: AsyncSession, make_client):
        await make_client(ISOLATION_MARKER)
        count = await db_session.scalar(select(func.count()).where(Client.name == ISOLATION_MARKER))
        assert count == 1

    async def test_second_test_sees_clean_database(self, db_session: AsyncSession):
        count = await db_session.scalar(select(func.count()).where(Client.name == ISOLATION_MARKER))
        assert count == 0


class TestMixins:
    async def test_uuid_primary_keys(self, make_client):
        first = await make_client("One")
        second = await make_client("Two")

        assert len(first.id) == 36
        assert first.id != second.id

    async def test_timestamps_set_on_create(self, make_client):
        client = await make_client()
        assert client.created_at is not None
        assert client.updated_at is not None

    async def test_column_defaults(self, make_client):
        client = await make_client()
        assert client.status == "onboarding"
        assert client.service_tags == []
        assert client.display_order == 0


class TestFactories:
    async def test_make_user_defaults(self, make_user):
        user = await make_user()

        assert isinstance(user, User)
        assert user.role == "staff"
        assert user.username.startswith("staff-")
        assert verify_password(TEST_PASSWORD, user.password_hash)

    async def test_make_user_bound_to_tenant(self, make_user, make_client):
        tenant = await make_client()
        user = await make_user(Role.CLIENT, client_id=tenant.id)

        assert user.role == "client"
        assert user.client_id == tenant.id
