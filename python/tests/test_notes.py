"""Tests for note normalization.

Verifies:
- Readers see the notes array, synthesized from the legacy note if needed
- Writers drop the legacy fields
"""

import pytest
from pydantic import ValidationError

from filmroom.services.notes import (
    Note,
    normalize_notes,
    present_session_video,
    session_video_notes,
    write_session_video_notes,
)


class TestNormalizeNotes:
    """Tests for the read-side view."""

    def test_array_wins_over_legacy_note(self):
        notes = normalize_notes("old", 5, [{"text": "new", "timestamp": 10}])
        assert notes == [Note(text="new", timestamp=10)]

    def test_legacy_note_becomes_single_note(self):
        assert normalize_notes("Watch the jib", 30, None) == [Note(text="Watch the jib", timestamp=30)]

    def test_blank_legacy_note_is_empty(self):
        assert normalize_notes("   ", 30, None) == []

    def test_nothing_is_empty(self):
        assert normalize_notes(None, None, None) == []

    def test_empty_array_does_not_fall_back(self):
        assert normalize_notes("legacy", None, []) == []

    def test_blank_notes_in_array_are_skipped(self):
        assert normalize_notes(None, None, [{"text": " "}, {"text": "ok"}]) == [Note(text="ok")]


class TestNote:
    """Tests for the Note model."""

    def test_text_is_trimmed(self):
        assert Note(text="  tack  ").text == "tack"

    def test_blank_text_is_rejected(self):
        with pytest.raises(ValidationError):
            Note(text="   ")

    def test_timestamp_accepts_timecode(self):
        assert Note(text="x", timestamp="2:00").timestamp == 120

    def test_document_omits_missing_timestamp(self):
        assert Note(text="x").to_document() == {"text": "x"}


class TestSessionVideoNotes:
    """Tests for embedded session video documents."""

    def test_write_drops_legacy_keys(self):
        video = {"id": "f1", "name": "Start", "note": "old", "noteTimestamp": 3}
        updated = write_session_video_notes(video, [Note(text="new", timestamp=4)])

        assert updated == {"id": "f1", "name": "Start", "notes": [{"text": "new", "timestamp": 4}]}
        # Input is not mutated
        assert video["note"] == "old"

    def test_reads_legacy_video(self):
        video = {"id": "f1", "name": "Start", "note": "old", "noteTimestamp": 3}
        assert session_video_notes(video) == [Note(text="old", timestamp=3)]

    def test_present_folds_legacy_fields(self):
        video = {"id": "f1", "name": "Start", "note": "old"}
        assert present_session_video(video) == {
            "id": "f1",
            "name": "Start",
            "notes": [{"text": "old"}],
        }
