"""Article service layer.

Articles are drafts until published. Published articles are public; drafts
are visible to any signed-in viewer and masked as 404 for anonymous callers.
Only the captain or the article's author may edit or delete it.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, authorize, can_read_draft
from filmroom.db.models import Article, ReferenceFolder, utcnow
from filmroom.db.session import transaction
from filmroom.errors import ApiErrorCode, InvalidRequestError, NotFoundError
from filmroom.logging import get_logger
from filmroom.schemas.articles import (
    ArticleOut,
    CreateArticleRequest,
    RenderedArticleOut,
    UpdateArticleRequest,
)
from filmroom.services.blocks import block_documents, render_blocks

logger = get_logger(__name__)

UNKNOWN_AUTHOR = "Unknown"


def _article_not_found() -> NotFoundError:
    return NotFoundError(ApiErrorCode.E_ARTICLE_NOT_FOUND, "Article not found")


def _get_article(db: Session, article_id: UUID) -> Article:
    article = db.get(Article, article_id)
    if article is None:
        raise _article_not_found()
    return article


def _get_readable_article(db: Session, viewer: Viewer | None, article_id: UUID) -> Article:
    article = _get_article(db, article_id)
    if not article.is_published and not can_read_draft(viewer):
        raise _article_not_found()
    return article


def _require_folder(db: Session, folder_id: UUID | None) -> None:
    if folder_id is not None and db.get(ReferenceFolder, folder_id) is None:
        raise NotFoundError(ApiErrorCode.E_FOLDER_NOT_FOUND, "Folder not found")


# =============================================================================
# Reads
# =============================================================================


def list_articles(db: Session, viewer: Viewer | None, drafts: bool = False) -> list[ArticleOut]:
    """Articles, most recently updated first.

    Drafts are included only when requested by a signed-in viewer.
    """
    query = select(Article)
    if not (drafts and can_read_draft(viewer)):
        query = query.where(Article.is_published.is_(True))
    rows = db.scalars(query.order_by(Article.updated_at.desc()))
    return [ArticleOut.model_validate(a) for a in rows]


def get_article(db: Session, viewer: Viewer | None, article_id: UUID) -> ArticleOut:
    """One article as stored."""
    return ArticleOut.model_validate(_get_readable_article(db, viewer, article_id))


def render_article(db: Session, viewer: Viewer | None, article_id: UUID) -> RenderedArticleOut:
    """One article with legacy video blocks resolved for display."""
    article = _get_readable_article(db, viewer, article_id)
    rendered = RenderedArticleOut.model_validate(article)
    rendered.blocks = render_blocks(db, article.blocks)
    return rendered


# =============================================================================
# Writes
# =============================================================================


def create_article(
    db: Session, viewer: Viewer | None, request: CreateArticleRequest
) -> ArticleOut:
    """Create a draft authored by the viewer."""
    viewer = authorize(viewer, AccessTier.AUTHENTICATED)

    title = request.title.strip()
    if not title:
        raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Title is required")
    _require_folder(db, request.folder_id)

    with transaction(db):
        article = Article(
            title=title,
            author_id=viewer.user_id,
            author_name=viewer.user_name or UNKNOWN_AUTHOR,
            blocks=block_documents(request.blocks),
            is_published=False,
            folder_id=request.folder_id,
        )
        db.add(article)

    logger.info("article_created", article_id=str(article.id))
    return ArticleOut.model_validate(article)


def update_article(
    db: Session, viewer: Viewer | None, article_id: UUID, request: UpdateArticleRequest
) -> ArticleOut:
    """Apply a partial update and bump updated_at. Captain or author only."""
    authorize(viewer, AccessTier.AUTHENTICATED)
    article = _get_article(db, article_id)
    authorize(viewer, AccessTier.CAPTAIN_OR_OWNER, owner_id=article.author_id)

    fields = request.model_fields_set
    if not fields:
        raise InvalidRequestError(message="No fields to update")

    if "title" in fields:
        title = (request.title or "").strip()
        if not title:
            raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Title is required")
    if "folder_id" in fields:
        _require_folder(db, request.folder_id)

    with transaction(db):
        if "title" in fields:
            article.title = title
        if "blocks" in fields and request.blocks is not None:
            article.blocks = block_documents(request.blocks)
        if "is_published" in fields and request.is_published is not None:
            article.is_published = request.is_published
        if "folder_id" in fields:
            article.folder_id = request.folder_id
        article.updated_at = utcnow()

    logger.info("article_updated", article_id=str(article_id), fields=sorted(fields))
    return ArticleOut.model_validate(article)


def delete_article(db: Session, viewer: Viewer | None, article_id: UUID) -> None:
    """Delete an article. Captain or author only."""
    authorize(viewer, AccessTier.AUTHENTICATED)
    article = _get_article(db, article_id)
    authorize(viewer, AccessTier.CAPTAIN_OR_OWNER, owner_id=article.author_id)

    with transaction(db):
        db.delete(article)
    logger.info("article_deleted", article_id=str(article_id))
