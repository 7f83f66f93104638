"""API exceptions and the handlers that render them as ``{"error": ...}`` bodies."""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error"


class ApiException(HTTPException):
    """
    Base exception for errors returned to API clients.

    Every subclass is rendered as a JSON object with a single ``error`` key
    holding a human-readable message.
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize API exception.

        Args:
            status_code: HTTP status code
            error: Message shown to the client
            headers: HTTP headers to include in response
            context: Extra fields for logs, never sent to the client
        """
        self.error = error
        self.context = context or {}
        super().__init__(status_code=status_code, detail=error, headers=headers)

    def to_content(self) -> Dict[str, str]:
        return {"error": self.error}


class ValidationError(ApiException):
    """Exception for missing or invalid request fields."""

    def __init__(self, error: str = "The request data failed validation", **context: Any):
        super().__init__(status_code=400, error=error, context=context)


class AlreadyReviewedError(ValidationError):
    """Exception when a tourist reviews the same target twice."""

    def __init__(self, target_type: str, target_id: int, tourist_id: int):
        super().__init__(
            f"You have already reviewed this {target_type}",
            target_type=target_type,
            target_id=target_id,
            tourist_id=tourist_id,
        )


class AuthenticationError(ApiException):
    """Exception for missing credentials."""

    def __init__(self, error: str = "Access token required"):
        super().__init__(
            status_code=401,
            error=error,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(ApiException):
    """Exception for invalid tokens and forbidden actions."""

    def __init__(self, error: str = "Insufficient permissions to access this resource"):
        super().__init__(status_code=403, error=error)


class NotFoundError(ApiException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[Any] = None,
        error: Optional[str] = None,
    ):
        if not error:
            error = f"{resource_type.capitalize()} not found"

        super().__init__(
            status_code=404,
            error=error,
            context={"resource_type": resource_type, "resource_id": resource_id},
        )


class InternalServerError(ApiException):
    """
    Exception for storage and other unexpected failures.

    ``error`` carries the raw cause; the handler hides it outside development.
    """

    def __init__(self, error: str = GENERIC_SERVER_ERROR):
        super().__init__(status_code=500, error=error)


def _expose_raw_errors(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.debug)


async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    """
    Exception handler for API exceptions.

    Args:
        request: FastAPI request object
        exc: API exception

    Returns:
        JSONResponse: ``{"error": ...}`` body with the exception's status
    """
    content = exc.to_content()
    if exc.status_code >= 500:
        logger.error(
            "Request failed with server error",
            extra={"path": request.url.path, "error": exc.error},
        )
        if not _expose_raw_errors(request):
            content = {"error": GENERIC_SERVER_ERROR}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the same envelope."""
    error = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and exc.detail == "Not Found":
        error = f"Route not found: {request.method} {request.url.path}"

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error},
        headers=getattr(exc, "headers", None),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "The request data failed validation"

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 with the first violation."""
    error = _describe_validation_error(exc)
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "error": error},
    )
    return JSONResponse(status_code=400, content={"error": error})


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Convert unhandled exceptions to a 500 response.

    The raw message is returned in development; other environments get a
    generic message.
    """
    logger.error(
        "Unhandled error",
        extra={"path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )
    error = str(exc) or GENERIC_SERVER_ERROR
    if not _expose_raw_errors(request):
        error = GENERIC_SERVER_ERROR

    return JSONResponse(status_code=500, content={"error": error})


def register_exception_handlers(app) -> None:
    """Attach every handler above to the application."""
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
