"""Article routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from filmroom.api.deps import get_db
from filmroom.auth.middleware import Viewer, get_optional_viewer
from filmroom.auth.permissions import AccessTier, requires
from filmroom.responses import ok_response
from filmroom.schemas.articles import CreateArticleRequest, UpdateArticleRequest
from filmroom.services import articles as articles_service

router = APIRouter()


@router.get("/articles")
def list_articles(
    viewer: Annotated[Viewer | None, Depends(get_optional_viewer)],
    db: Annotated[Session, Depends(get_db)],
    drafts: Annotated[bool, Query(description="Include drafts (signed-in viewers only)")] = False,
) -> list[dict]:
    """Published articles, or all of them with drafts=true and a session."""
    result = articles_service.list_articles(db, viewer, drafts=drafts)
    return [a.model_dump(mode="json") for a in result]


@router.post("/articles", status_code=201)
def create_article(
    body: CreateArticleRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.AUTHENTICATED))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    return articles_service.create_article(db, viewer, body).model_dump(mode="json")


@router.get("/articles/{article_id}/render")
def render_article(
    article_id: UUID,
    viewer: Annotated[Viewer | None, Depends(get_optional_viewer)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """The article with video blocks resolved to embed URLs."""
    return articles_service.render_article(db, viewer, article_id).model_dump(mode="json")


@router.get("/articles/{article_id}")
def get_article(
    article_id: UUID,
    viewer: Annotated[Viewer | None, Depends(get_optional_viewer)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    return articles_service.get_article(db, viewer, article_id).model_dump(mode="json")


@router.patch("/articles/{article_id}")
def update_article(
    article_id: UUID,
    body: UpdateArticleRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.AUTHENTICATED))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Edit or publish an article. Captain or author only."""
    result = articles_service.update_article(db, viewer, article_id, body)
    return result.model_dump(mode="json")


@router.delete("/articles/{article_id}")
def delete_article(
    article_id: UUID,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.AUTHENTICATED))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    articles_service.delete_article(db, viewer, article_id)
    return ok_response()
