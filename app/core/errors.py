"""Error taxonomy shared by repositories, services and routers.

Errors are plain values: repositories return them inside ``Err`` results and
routers turn them into ``{"error": ...}`` JSON responses with ``error_response``.
"""
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from structlog import get_logger

logger = get_logger()


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        # Internal diagnostic text; logged, never sent to clients
        self.detail = detail
        super().__init__(message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Storage failure", detail: Optional[str] = None):
        super().__init__(message, detail)


class MethodNotAllowedError(AppError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class GeocodingError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str = "Geocoding service unavailable", detail: Optional[str] = None):
        super().__init__(message, detail)


def error_response(
    error: AppError,
    public_message: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
    **context: Any,
) -> JSONResponse:
    """Build the JSON error body for ``error``.

    ``public_message`` replaces the error's own message for server-side
    failures so driver or upstream text never reaches the client.
    """
    message = error.message
    if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            error.message,
            error_type=type(error).__name__,
            detail=error.detail,
            **context,
        )
        if public_message:
            message = public_message
    else:
        logger.info("Request rejected", status_code=error.status_code, reason=error.message, **context)

    body: Dict[str, Any] = dict(extra or {})
    body["error"] = message
    return JSONResponse(status_code=error.status_code, content=body)
