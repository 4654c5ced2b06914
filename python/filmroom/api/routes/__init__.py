"""API route definitions.

Uses a factory pattern to avoid import-time settings loading.
This allows tests to import modules without requiring all environment
variables to be configured upfront.
"""

from fastapi import APIRouter

from filmroom.api.routes.articles import router as articles_router
from filmroom.api.routes.auth import router as auth_router
from filmroom.api.routes.comments import router as comments_router
from filmroom.api.routes.health import router as health_router
from filmroom.api.routes.import_sheet import router as import_sheet_router
from filmroom.api.routes.reference_folders import router as reference_folders_router
from filmroom.api.routes.reference_videos import router as reference_videos_router
from filmroom.api.routes.sessions import router as sessions_router

API_PREFIX = "/api"


def create_api_router() -> APIRouter:
    """Create and configure the API router.

    Returns:
        APIRouter with every route registered under /api.
    """
    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(auth_router, tags=["auth"])
    api_router.include_router(sessions_router, tags=["sessions"])
    api_router.include_router(comments_router, tags=["comments"])
    api_router.include_router(reference_videos_router, tags=["reference"])
    api_router.include_router(reference_folders_router, tags=["reference"])
    api_router.include_router(articles_router, tags=["articles"])
    api_router.include_router(import_sheet_router, tags=["import"])
    return api_router


__all__ = ["create_api_router"]
