"""Single normalization point for video notes.

Two representations coexist in stored records:

- legacy: one ``note`` string plus an optional ``noteTimestamp`` (sessions)
  or ``note_timestamp`` column (reference videos)
- current: a ``notes`` array of ``{text, timestamp?}``

Readers see one shape: the array if present, otherwise a one-element list
synthesized from the legacy note, otherwise empty. Writers only ever persist
the array and drop the legacy fields; there is no conversion back.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from filmroom.services.timecodes import coerce_timestamp

LEGACY_NOTE_KEYS = ("note", "noteTimestamp")


class Note(BaseModel):
    """One timestamped note on a video."""

    text: str = Field(..., min_length=1)
    timestamp: int | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("note text must not be empty")
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> int | None:
        return coerce_timestamp(value)

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"text": self.text}
        if self.timestamp is not None:
            doc["timestamp"] = self.timestamp
        return doc


def normalize_notes(
    note: str | None,
    note_timestamp: int | None,
    notes: list[dict[str, Any]] | None,
) -> list[Note]:
    """Read-side view of a record's notes.

    Args:
        note: Legacy single note text.
        note_timestamp: Legacy note timestamp in seconds.
        notes: Current notes array, if the record has been migrated.

    Returns:
        The notes in display order.
    """
    if notes is not None:
        return [Note.model_validate(item) for item in notes if str(item.get("text", "")).strip()]
    if note and note.strip():
        return [Note(text=note, timestamp=note_timestamp)]
    return []


def note_documents(notes: list[Note]) -> list[dict[str, Any]]:
    """Serialize notes for storage."""
    return [n.to_document() for n in notes]


def session_video_notes(video: dict[str, Any]) -> list[Note]:
    """Read-side notes of an embedded session video document."""
    return normalize_notes(video.get("note"), video.get("noteTimestamp"), video.get("notes"))


def write_session_video_notes(video: dict[str, Any], notes: list[Note]) -> dict[str, Any]:
    """Return a copy of a session video document carrying only the notes array."""
    updated = {k: v for k, v in video.items() if k not in LEGACY_NOTE_KEYS}
    updated["notes"] = note_documents(notes)
    return updated


def present_session_video(video: dict[str, Any]) -> dict[str, Any]:
    """Outgoing shape of a session video: legacy fields folded into notes."""
    presented = {k: v for k, v in video.items() if k not in LEGACY_NOTE_KEYS}
    presented["notes"] = note_documents(session_video_notes(video))
    return presented
