"""Article block variants and rendering.

Articles are an ordered list of blocks:

- text:  {"type": "text", "content": "<markdown>"}
- video: two historical shapes share the "video" tag
    * self-contained: {"videoType", "videoRef", "title", "startSeconds"?, "caption"?}
    * legacy lookup:  {"referenceVideoId", "startSeconds"?, "caption"?}

classify_video_block() turns a video block into one of two explicit variants.
render_blocks() resolves legacy lookups against the reference library in a
single query per render. There is no cache.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from filmroom.db.models import ReferenceVideo, VideoType
from filmroom.logging import get_logger
from filmroom.schemas.common import Timestamp
from filmroom.services import media_links

logger = get_logger(__name__)


class TextBlock(BaseModel):
    """Markdown paragraph block."""

    type: Literal["text"]
    content: str = ""

    model_config = ConfigDict(extra="ignore")


class VideoBlock(BaseModel):
    """Video block in either historical shape."""

    type: Literal["video"]
    video_type: Literal["drive", "youtube"] | None = Field(default=None, alias="videoType")
    video_ref: str | None = Field(default=None, alias="videoRef")
    title: str | None = None
    start_seconds: Timestamp = Field(default=None, alias="startSeconds")
    caption: str | None = None
    reference_video_id: str | None = Field(default=None, alias="referenceVideoId")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


ArticleBlock = Annotated[TextBlock | VideoBlock, Field(discriminator="type")]

_blocks_adapter = TypeAdapter(list[ArticleBlock])


@dataclass(frozen=True)
class SelfContainedVideo:
    video_type: str
    video_ref: str
    title: str | None
    start_seconds: int | None
    caption: str | None


@dataclass(frozen=True)
class LegacyReferenceLookup:
    reference_video_id: UUID | None
    start_seconds: int | None
    caption: str | None


def block_documents(blocks: list[TextBlock | VideoBlock]) -> list[dict[str, Any]]:
    """Serialize validated blocks for storage (camelCase keys, no nulls)."""
    return [b.model_dump(by_alias=True, exclude_none=True) for b in blocks]


def classify_video_block(block: VideoBlock) -> SelfContainedVideo | LegacyReferenceLookup | None:
    """Pick the variant a video block represents.

    Returns:
        SelfContainedVideo when the block carries its own provider ref,
        LegacyReferenceLookup when it only points at a reference video,
        None for an empty block.
    """
    if block.video_ref and block.video_type:
        return SelfContainedVideo(
            video_type=block.video_type,
            video_ref=block.video_ref,
            title=block.title,
            start_seconds=block.start_seconds,
            caption=block.caption,
        )

    if block.reference_video_id:
        try:
            reference_id = UUID(block.reference_video_id)
        except ValueError:
            reference_id = None
        return LegacyReferenceLookup(
            reference_video_id=reference_id,
            start_seconds=block.start_seconds,
            caption=block.caption,
        )

    return None


def parse_stored_blocks(raw: list[dict[str, Any]]) -> list[TextBlock | VideoBlock]:
    """Parse stored block documents, skipping any that no longer validate."""
    parsed: list[TextBlock | VideoBlock] = []
    for item in raw or []:
        try:
            parsed.extend(_blocks_adapter.validate_python([item]))
        except ValidationError:
            logger.warning("article_block_skipped", block_type=item.get("type"))
    return parsed


def _rendered_video(
    video_type: str,
    video_ref: str,
    title: str | None,
    caption: str | None,
    start_seconds: int | None,
) -> dict[str, Any]:
    return {
        "type": "video",
        "available": True,
        "videoType": video_type,
        "videoRef": video_ref,
        "title": title,
        "caption": caption or title,
        "startSeconds": start_seconds,
        "embedUrl": media_links.embed_url(video_type, video_ref, start_seconds),
        "thumbnailUrl": media_links.thumbnail_url(video_type, video_ref),
    }


def render_blocks(db: Session, raw_blocks: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Render stored blocks for display, resolving legacy video lookups.

    Args:
        db: Database session used for the reference-video join.
        raw_blocks: Stored block documents.

    Returns:
        Display-ready block documents in stored order.
    """
    blocks = parse_stored_blocks(raw_blocks)
    variants = [classify_video_block(b) if isinstance(b, VideoBlock) else None for b in blocks]

    lookup_ids = {
        v.reference_video_id
        for v in variants
        if isinstance(v, LegacyReferenceLookup) and v.reference_video_id is not None
    }
    references: dict[UUID, ReferenceVideo] = {}
    if lookup_ids:
        rows = db.scalars(select(ReferenceVideo).where(ReferenceVideo.id.in_(lookup_ids)))
        references = {row.id: row for row in rows}

    rendered: list[dict[str, Any]] = []
    for block, variant in zip(blocks, variants, strict=True):
        if isinstance(block, TextBlock):
            rendered.append({"type": "text", "content": block.content})
        elif isinstance(variant, SelfContainedVideo):
            rendered.append(
                _rendered_video(
                    variant.video_type,
                    variant.video_ref,
                    variant.title,
                    variant.caption,
                    variant.start_seconds,
                )
            )
        elif isinstance(variant, LegacyReferenceLookup):
            reference = references.get(variant.reference_video_id)  # type: ignore[arg-type]
            if reference is None:
                rendered.append({"type": "video", "available": False, "reason": "Video not found"})
                continue
            start = variant.start_seconds
            if start is None and reference.type == VideoType.youtube:
                start = reference.note_timestamp
            rendered.append(
                _rendered_video(
                    reference.type.value,
                    reference.video_ref,
                    reference.title,
                    variant.caption,
                    start,
                )
            )
        else:
            rendered.append({"type": "video", "available": False, "reason": "Video not available"})

    return rendered
