"""
Exception Handlers.

Every error leaves the API in the ErrorResponse envelope. Application errors
map to a status through EXCEPTION_STATUS_MAP; subclasses inherit their
parent's status, so VaultLockedError answers 403. Request-body problems
answer 422 with one entry per offending field.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agencyhub.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from agencyhub.backend.core.logging import get_logger
from agencyhub.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    ConflictError: 409,
    ConfigurationError: 500,
    ExternalServiceError: 502,
    DatabaseError: 503,
    ServiceUnavailableError: 503,
}


def status_code_for(exc: ApplicationError) -> int:
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


def _get_request_id(request: Request) -> str | None:
    """Request ID bound by RequestContextMiddleware, else the raw header."""
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def _envelope(status_code: int, error: ErrorDetail, request_id: str | None) -> JSONResponse:
    body = ErrorResponse(error=error, metadata=ResponseMetadata(request_id=request_id))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    status_code = status_code_for(exc)
    request_id = _get_request_id(request)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Server error" if status_code >= 500 else "Client error",
        extra={
            "code": exc.code,
            "message": exc.message,
            "status": status_code,
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id,
        },
    )

    error = ErrorDetail(code=exc.code, message=exc.message, details=exc.details or None)
    return _envelope(status_code, error, request_id)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject a malformed request body or query with field-level detail."""
    request_id = _get_request_id(request)
    errors = exc.errors()

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": request_id,
        },
    )

    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", [])),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in errors
    ]
    error = ErrorDetail(
        code="VAL_REQUEST_INVALID",
        message="Request validation failed",
        details={"validation_errors": validation_errors},
    )
    return _envelope(422, error, request_id)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback; the client only sees a generic 500."""
    request_id = _get_request_id(request)
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": request_id,
        },
    )

    error = ErrorDetail(code="SYS_INTERNAL_ERROR", message="An unexpected error occurred")
    return _envelope(500, error, request_id)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Exception handlers registered")
