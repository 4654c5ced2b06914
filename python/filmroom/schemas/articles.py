"""Article schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from filmroom.schemas.common import OptionalRef
from filmroom.services.blocks import ArticleBlock

# =============================================================================
# Request Schemas
# =============================================================================


class CreateArticleRequest(BaseModel):
    """Request body for creating a draft article."""

    title: str = ""
    blocks: list[ArticleBlock] = Field(default_factory=list)
    folder_id: OptionalRef = None


class UpdateArticleRequest(BaseModel):
    """Partial update of an article. Only fields present are applied."""

    title: str | None = None
    blocks: list[ArticleBlock] | None = None
    is_published: bool | None = None
    folder_id: OptionalRef = None


# =============================================================================
# Response Schemas
# =============================================================================


class ArticleOut(BaseModel):
    """An article as stored."""

    id: UUID
    title: str
    author_id: UUID | None
    author_name: str
    blocks: list[dict[str, Any]]
    is_published: bool
    folder_id: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RenderedArticleOut(ArticleOut):
    """An article whose blocks are ready to display."""

    pass
