"""
Domain exceptions and their HTTP rendering.

Services raise these; the handlers registered in ``register_exception_handlers``
turn them into ``{"message": ...}`` JSON bodies with the matching status code.
"""
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

from tenant_admin.core.config import settings
from tenant_admin.core.logging import get_logger


logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class TenantAdminError(Exception):
    """Base exception for all API errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(TenantAdminError):
    """Missing, malformed or out-of-enum input, including unknown keys."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__(", ".join(self.violations))


class ConflictError(TenantAdminError):
    """A unique field collides with an existing tenant."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "A tenant with this email already exists"):
        super().__init__(message)


class MalformedIdError(TenantAdminError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid tenant ID format", invalid_ids: Optional[list[str]] = None):
        super().__init__(message, details={"invalidIds": invalid_ids} if invalid_ids else None)


class NotFoundError(TenantAdminError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Tenant not found"):
        super().__init__(message)


class AuthenticationError(TenantAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(TenantAdminError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden: Insufficient permissions"):
        super().__init__(message)


class InfrastructureError(TenantAdminError):
    """Storage is unreachable or misbehaving."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _server_error_message(message: str) -> str:
    # Underlying messages are only surfaced outside production
    return GENERIC_ERROR_MESSAGE if settings.is_production else message


async def tenant_admin_error_handler(request: Request, exc: TenantAdminError) -> JSONResponse:
    message = exc.message
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        message = _server_error_message(exc.message)
    elif exc.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        logger.warning(f"Access rejected on {request.method} {request.url.path}: {exc.message}")

    content: dict[str, Any] = {"message": message}
    if "invalidIds" in exc.details:
        content["invalidIds"] = exc.details["invalidIds"]

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render framework-level request shape errors (bad body or query types) as 400."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        text = error.get("msg", "Invalid request")
        messages.append(f"{location}: {text}" if location else text)
    logger.debug(f"Request validation failed: {messages}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": ", ".join(messages) or "Invalid request"},
    )


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Database unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": _server_error_message("Database connection not available")},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": _server_error_message(str(exc) or type(exc).__name__)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TenantAdminError, tenant_admin_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(OperationalError, storage_error_handler)
    app.add_exception_handler(InterfaceError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
