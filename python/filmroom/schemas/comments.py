"""Comment schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from filmroom.schemas.common import OptionalRef, Timestamp


class CreateCommentRequest(BaseModel):
    """Request body for posting a comment.

    Required text fields default to empty so the handler can report a
    single "Missing required fields" error.
    """

    session_id: OptionalRef = None
    video_id: str = ""
    video_title: str = ""
    author_name: str = ""
    timestamp_seconds: Timestamp = None
    comment_text: str = ""
    send_to_captain: bool = False


class CommentOut(BaseModel):
    id: UUID
    session_id: UUID | None
    video_id: str
    video_title: str
    author_name: str
    timestamp_seconds: int | None
    comment_text: str
    send_to_captain: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
