"""FastAPI application creation and configuration.

Registers exception handlers, auth middleware, request-id middleware, and
routes.

Middleware Ordering (Critical):
- Middleware runs in reverse order of registration
- RequestIDMiddleware is added LAST (add_request_id_middleware) so it runs
  FIRST and every response, including failures, carries X-Request-ID

Actual execution order per request:
1. RequestIDMiddleware (sets request_id, starts timer)
2. Malformed-JSON guard
3. AuthMiddleware (reads the session cookie, sets request.state.viewer)
4. Route handler
5. RequestIDMiddleware (logs, sets response header)

Outbound HTTP:
- One httpx.AsyncClient is created at startup, stored in app.state and
  closed at shutdown. It is only used by the Google Sheet import.
"""

import json
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from filmroom import __version__
from filmroom.api.routes import create_api_router
from filmroom.auth.middleware import AuthMiddleware
from filmroom.config import get_settings
from filmroom.errors import ApiError, ApiErrorCode
from filmroom.logging import configure_logging, get_logger
from filmroom.middleware.request_id import RequestIDMiddleware
from filmroom.responses import (
    api_error_handler,
    error_response,
    http_exception_handler,
    store_error_handler,
    unhandled_exception_handler,
)

# Configure structured logging at import time
configure_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared outbound HTTP client and close it on shutdown."""
    settings = get_settings()
    app.state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.sheet_fetch_timeout_s, connect=5.0),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
    )
    logger.info("http_client_initialized")

    yield

    await app.state.http_client.aclose()
    logger.info("http_client_closed")


def _validation_message(exc: RequestValidationError) -> str:
    """First validation problem as "field: message", for the error body."""
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def create_app(skip_auth_middleware: bool = False) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        skip_auth_middleware: If True, skip adding auth middleware (for testing).

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Filmroom API",
        description="Backend API for Filmroom - team video review",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors (body, path and query)."""
        return JSONResponse(
            status_code=400,
            content=error_response(ApiErrorCode.E_INVALID_REQUEST, _validation_message(exc)),
        )

    app.include_router(create_api_router())

    if not skip_auth_middleware:
        app.add_middleware(AuthMiddleware)
        logger.info("auth_middleware_enabled", env=settings.filmroom_env.value)

    @app.middleware("http")
    async def catch_json_decode_errors(request: Request, call_next):
        """Reject malformed JSON bodies before they reach route handlers."""
        if request.method in ("POST", "PUT", "PATCH"):
            content_type = request.headers.get("content-type", "")
            if "application/json" in content_type:
                body = await request.body()
                if body:
                    try:
                        json.loads(body)
                    except json.JSONDecodeError:
                        return JSONResponse(
                            status_code=400,
                            content=error_response(
                                ApiErrorCode.E_INVALID_REQUEST, "Malformed JSON body"
                            ),
                        )
        return await call_next(request)

    return app


def add_request_id_middleware(app: FastAPI, log_requests: bool = True) -> None:
    """Add request-id middleware to the app.

    Call AFTER all other middleware is added, so it runs FIRST.

    Args:
        app: The FastAPI application.
        log_requests: Whether to log access entries for each request.
    """
    app.add_middleware(RequestIDMiddleware, log_requests=log_requests)
    logger.info("request_id_middleware_enabled")
