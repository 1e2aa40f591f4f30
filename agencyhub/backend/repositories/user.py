"""
User Repository.
"""

from collections.abc import Iterable

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_username(self, username: str) -> User | None:
        return await self.find_one(User.username == username)

    def _conditions(self, role: str | None) -> list[ColumnElement[bool]]:
        return [User.role == role] if role else []

    async def list_users(self, role: str | None = None, limit: int = 20, offset: int = 0) -> list[User]:
        return await self.find(
            *self._conditions(role),
            order_by=User.username,
            limit=limit,
            offset=offset,
        )

    async def count_users(self, role: str | None = None) -> int:
        return await self.count(*self._conditions(role))

    async def get_by_roles(self, roles: Iterable[str]) -> list[User]:
        return await self.find(User.role.in_(list(roles)), order_by=User.username)

    async def get_by_client(self, client_id: str) -> list[User]:
        return await self.find(User.client_id == client_id)
