"""
Auth Service.

Login, token refresh and user administration.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from agencyhub.backend.core.rbac import ASSIGNABLE_ROLES, Role, permission_map
from agencyhub.backend.core.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.repositories.user import UserRepository
from agencyhub.backend.schemas.user import (
    AccessTokenResponse,
    MeResponse,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from agencyhub.backend.services.base import BaseService

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService(BaseService):
    """Credential checks and token issuance."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    async def login(self, username: str, password: str) -> TokenResponse:
        """
        Authenticate and issue an access/refresh token pair.

        Raises:
            AuthenticationError: Unknown username or wrong password
        """
        user = await self.repo.get_by_username(username.strip())
        if user is None or not verify_password(password, user.password_hash):
            self._logger.warning("Login failed", extra={"username": username})
            raise AuthenticationError(INVALID_CREDENTIALS)

        self._log_operation("User logged in", user_id=user.id, role=user.role)
        claims = {"sub": user.id, "role": user.role}
        return TokenResponse(
            access_token=create_access_token(claims),
            refresh_token=create_refresh_token({"sub": user.id}),
            user=UserResponse.model_validate(user),
        )

    async def refresh(self, refresh_token: str) -> AccessTokenResponse:
        """Exchange a refresh token for a new access token."""
        payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN)
        user = await self.repo.get_by_id_or_none(str(payload.get("sub", "")))
        if user is None:
            raise AuthenticationError("Invalid or expired token")

        self._log_debug("Access token refreshed", user_id=user.id)
        return AccessTokenResponse(
            access_token=create_access_token({"sub": user.id, "role": user.role}),
        )

    @staticmethod
    def describe(user: User) -> MeResponse:
        return MeResponse(
            **UserResponse.model_validate(user).model_dump(),
            display_name=user.display_name,
            permissions=permission_map(user.role),
        )


class UserService(BaseService):
    """User administration."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)
        self.client_repo = ClientRepository(session)

    async def list_users(
        self,
        role: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[User], int]:
        users = await self.repo.list_users(role=role, limit=limit, offset=offset)
        total = await self.repo.count_users(role=role)
        return users, total

    async def get_user(self, user_id: str) -> User:
        return await self.repo.get_by_id(user_id)

    async def list_team(self) -> list[User]:
        """Users that tasks can be assigned to."""
        return await self.repo.get_by_roles(ASSIGNABLE_ROLES)

    async def _check_client_binding(self, role: str, client_id: str | None) -> None:
        if role == Role.CLIENT and not client_id:
            raise ValidationError(
                "Client users must be linked to a client",
                details={"client_id": "required for role client"},
            )
        if client_id and not await self.client_repo.exists(client_id):
            raise NotFoundError("Client not found")

    async def create_user(self, data: UserCreate) -> User:
        """
        Create a user.

        Raises:
            ConflictError: Username already taken
            ValidationError: Client-role user without a client_id
        """
        username = data.username.strip()
        if await self.repo.get_by_username(username):
            raise ConflictError(f"Username '{username}' is already taken")
        await self._check_client_binding(data.role, data.client_id)

        self._log_operation("Creating user", username=username, role=data.role.value)
        return await self._execute_db_operation(
            "create_user",
            self.repo.create(
                username=username,
                password_hash=hash_password(data.password),
                email=data.email,
                first_name=data.first_name,
                last_name=data.last_name,
                role=data.role.value,
                client_id=data.client_id,
            ),
        )

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        user = await self.repo.get_by_id(user_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return user

        password = update_data.pop("password", None)
        if password:
            update_data["password_hash"] = hash_password(password)
        if update_data.get("role") is not None:
            update_data["role"] = Role(update_data["role"]).value

        role = update_data.get("role", user.role)
        client_id = update_data.get("client_id", user.client_id)
        await self._check_client_binding(role, client_id)

        self._log_operation(
            "Updating user",
            user_id=user_id,
            fields=sorted(k for k in update_data if k != "password_hash"),
        )
        return await self._execute_db_operation(
            "update_user",
            self.repo.apply(user, **update_data),
        )

    async def delete_user(self, user_id: str, actor: User) -> None:
        if user_id == actor.id:
            raise ValidationError("You cannot delete your own account")

        self._log_operation("Deleting user", user_id=user_id)
        await self._execute_db_operation("delete_user", self.repo.delete(user_id))
