"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, handle transactions, and implement
business rules.

Usage:
    from agencyhub.backend.services.base import BaseService

    class CampaignService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = CampaignRepository(session)

        async def create_campaign(self, data: CampaignCreate) -> Campaign:
            if data.end_date and data.start_date and data.end_date < data.start_date:
                raise ValidationError("end_date must be on or after start_date")
            return await self._execute_db_operation(
                "create_campaign", self.repo.create(**data.model_dump()),
            )
"""

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import (
    AuthorizationError,
    ConflictError,
    DatabaseError,
)
from agencyhub.backend.core.logging import get_logger
from agencyhub.backend.core.rbac import is_staff
from agencyhub.backend.models.user import User

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Implement business logic methods
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            # Check for unique constraint violation
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists")
            raise DatabaseError(f"Database constraint violation: {operation}")
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}")

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )

    def _client_scope(self, user: User) -> str | None:
        """
        Tenant restriction for reads.

        Returns None for agency staff (no restriction) and the bound
        client_id for client-side users.

        Raises:
            AuthorizationError: If a client-side user has no client linked
        """
        if is_staff(user.role):
            return None
        if not user.client_id:
            raise AuthorizationError("No client account is linked to this user")
        return user.client_id

    def _check_tenant(self, user: User, client_id: str | None) -> None:
        """Deny access when a row belongs to another tenant."""
        scope = self._client_scope(user)
        if scope is not None and client_id != scope:
            raise AuthorizationError("Not allowed to access this client's data")
