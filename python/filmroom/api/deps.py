"""FastAPI dependencies for route handlers."""

import httpx
from fastapi import Request

from filmroom.db.session import get_db

__all__ = ["get_db", "get_http_client"]


def get_http_client(request: Request) -> httpx.AsyncClient:
    """The shared outbound HTTP client created in the app lifespan."""
    return request.app.state.http_client
