"""Comment service layer.

Comments are create/read only; there is no edit or delete.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, authorize
from filmroom.db.models import Comment
from filmroom.db.session import transaction
from filmroom.errors import InvalidRequestError
from filmroom.logging import get_logger
from filmroom.schemas.comments import CommentOut, CreateCommentRequest

logger = get_logger(__name__)


def list_comments(
    db: Session,
    viewer: Viewer | None,
    video_id: str | None = None,
    session_id: UUID | None = None,
    captain_only: bool = False,
) -> list[CommentOut]:
    """List comments oldest first.

    Args:
        db: Database session.
        viewer: Resolved viewer (None when anonymous).
        video_id: Restrict to one video.
        session_id: Restrict to one session.
        captain_only: Only comments flagged for the captain. Captain-only.

    Raises:
        UnauthenticatedError / ForbiddenError: captain_only without captain access.
    """
    if captain_only:
        authorize(viewer, AccessTier.CAPTAIN)

    query = select(Comment)
    if video_id:
        query = query.where(Comment.video_id == video_id)
    if session_id is not None:
        query = query.where(Comment.session_id == session_id)
    if captain_only:
        query = query.where(Comment.send_to_captain.is_(True))

    rows = db.scalars(query.order_by(Comment.created_at.asc(), Comment.id.asc()))
    return [CommentOut.model_validate(c) for c in rows]


def create_comment(db: Session, request: CreateCommentRequest) -> CommentOut:
    """Insert a comment. Open to anonymous callers.

    Raises:
        InvalidRequestError: A required text field is blank.
    """
    author_name = request.author_name.strip()
    comment_text = request.comment_text.strip()
    if not request.video_id or not request.video_title or not author_name or not comment_text:
        raise InvalidRequestError(message="Missing required fields")

    with transaction(db):
        comment = Comment(
            session_id=request.session_id,
            video_id=request.video_id,
            video_title=request.video_title,
            author_name=author_name,
            timestamp_seconds=request.timestamp_seconds,
            comment_text=comment_text,
            send_to_captain=request.send_to_captain,
        )
        db.add(comment)

    logger.info(
        "comment_created",
        video_id=comment.video_id,
        send_to_captain=comment.send_to_captain,
    )
    return CommentOut.model_validate(comment)
