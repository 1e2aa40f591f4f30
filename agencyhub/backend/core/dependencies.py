"""
FastAPI Dependencies.

Shared dependencies for request handling: database session, request id,
the authenticated user and role/permission guards.
"""

import uuid
from collections.abc import Awaitable, Callable
from typing import Annotated

import structlog
from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.database import get_db_session
from agencyhub.backend.core.exceptions import AuthenticationError, AuthorizationError
from agencyhub.backend.core.logging import get_logger
from agencyhub.backend.core.rbac import (
    STAFF_ROLES,
    TASK_EDITOR_ROLES,
    Permission,
    Role,
    has_permission,
)
from agencyhub.backend.core.security import ACCESS_TOKEN, decode_token
from agencyhub.backend.models.user import User

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer = HTTPBearer(auto_error=False)


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    """
    Resolve the authenticated user from the bearer access token.

    Raises:
        AuthenticationError: Missing, invalid or expired token, or the
            token's user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(credentials.credentials, expected_type=ACCESS_TOKEN)
    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid or expired token")

    user = await db.get(User, str(user_id))
    if user is None:
        logger.warning("Token subject not found", extra={"user_id": user_id})
        raise AuthenticationError("Invalid or expired token")

    structlog.contextvars.bind_contextvars(user_id=user.id, role=user.role)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: Role) -> Callable[..., Awaitable[User]]:
    """
    Dependency factory restricting an endpoint to the given roles.

    Usage:
        @router.post("/things")
        async def create_thing(user: User = Depends(require_roles(Role.ADMIN))):
            ...
    """
    allowed = {str(role) for role in roles}

    async def _guard(user: CurrentUser) -> User:
        if user.role not in allowed:
            logger.info(
                "Role check failed",
                extra={"role": user.role, "allowed": sorted(allowed)},
            )
            raise AuthorizationError("Insufficient role for this action")
        return user

    return _guard


def require_permission(
    *permissions: Permission,
    allow_client_users: bool = False,
) -> Callable[..., Awaitable[User]]:
    """
    Dependency factory restricting an endpoint to roles holding any of the
    given permissions.

    With ``allow_client_users`` the client role is let through as well; the
    service then restricts it to its own tenant.
    """
    names = [p.value for p in permissions]
    label = " or ".join(names)

    async def _guard(user: CurrentUser) -> User:
        if allow_client_users and user.role == Role.CLIENT:
            return user
        if not any(has_permission(user.role, p) for p in permissions):
            logger.info(
                "Permission check failed",
                extra={"role": user.role, "permissions": names},
            )
            raise AuthorizationError(f"Missing permission: {label}")
        return user

    return _guard


StaffUser = Annotated[User, Depends(require_roles(*STAFF_ROLES))]
AdminUser = Annotated[User, Depends(require_roles(Role.ADMIN))]
TaskEditor = Annotated[User, Depends(require_roles(*TASK_EDITOR_ROLES))]
