"""API error envelope helpers and exception handlers.

Successful responses are the bare JSON documents each route documents.
Failures always use the same envelope:

    { "error": "<message>", "code": "E_...", "request_id": "..." }

The request_id is included in error responses for debugging and support.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from filmroom.db.session import store_error_message
from filmroom.errors import ApiError, ApiErrorCode
from filmroom.logging import get_logger, get_request_id

logger = get_logger(__name__)


def error_response(
    code: ApiErrorCode, message: str, request_id: str | None = None
) -> dict[str, Any]:
    """Create an error response envelope.

    Args:
        code: The error code enum value.
        message: Human-readable error message.
        request_id: Optional request ID for correlation (auto-populated from context if None).

    Returns:
        Dict with "error" (the message), "code" and, when known, "request_id".
    """
    if request_id is None:
        request_id = get_request_id()

    body: dict[str, Any] = {"error": message, "code": code.value}
    if request_id:
        body["request_id"] = request_id

    return body


def ok_response() -> dict[str, bool]:
    """Acknowledgement body for mutations that return no entity."""
    return {"ok": True}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Handle ApiError exceptions and return proper JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.code, exc.message),
    )


async def http_exception_handler(request: Request, exc: Any) -> JSONResponse:
    """Handle Starlette HTTPException (404 routes, 405 methods, ...)."""
    status_to_code = {
        400: ApiErrorCode.E_INVALID_REQUEST,
        401: ApiErrorCode.E_UNAUTHENTICATED,
        403: ApiErrorCode.E_FORBIDDEN,
        404: ApiErrorCode.E_NOT_FOUND,
        422: ApiErrorCode.E_INVALID_REQUEST,
    }
    code = status_to_code.get(exc.status_code, ApiErrorCode.E_INTERNAL)
    message = str(exc.detail) if exc.detail else "An error occurred"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(code, message),
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Surface a failed store call as 500 with the store's message verbatim."""
    message = store_error_message(exc)
    logger.exception("store_call_failed", error=message)
    return JSONResponse(
        status_code=500,
        content=error_response(ApiErrorCode.E_BACKEND, message),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions and return 500 with E_INTERNAL.

    Logs the exception server-side but never leaks details to client.
    """
    logger.exception("unhandled_exception", error=str(exc))

    return JSONResponse(
        status_code=500,
        content=error_response(ApiErrorCode.E_INTERNAL, "Internal server error"),
    )
