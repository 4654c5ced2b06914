"""Tests for article block classification and rendering."""

from uuid import uuid4

from filmroom.db.models import ReferenceVideo, VideoType
from filmroom.services.blocks import (
    LegacyReferenceLookup,
    SelfContainedVideo,
    VideoBlock,
    block_documents,
    classify_video_block,
    parse_stored_blocks,
    render_blocks,
)

YT_ID = "dQw4w9WgXcQ"


class TestClassifyVideoBlock:
    """Tests for classify_video_block."""

    def test_self_contained(self):
        block = VideoBlock(type="video", videoType="youtube", videoRef=YT_ID, title="Mark rounding")
        variant = classify_video_block(block)

        assert isinstance(variant, SelfContainedVideo)
        assert variant.video_ref == YT_ID

    def test_self_contained_wins_when_both_present(self):
        ref_id = str(uuid4())
        block = VideoBlock(
            type="video", videoType="drive", videoRef="abcdefghijk", referenceVideoId=ref_id
        )
        assert isinstance(classify_video_block(block), SelfContainedVideo)

    def test_legacy_lookup(self):
        ref_id = uuid4()
        block = VideoBlock(type="video", referenceVideoId=str(ref_id), caption="Look here")
        variant = classify_video_block(block)

        assert variant == LegacyReferenceLookup(
            reference_video_id=ref_id, start_seconds=None, caption="Look here"
        )

    def test_empty_block(self):
        assert classify_video_block(VideoBlock(type="video")) is None


class TestBlockDocuments:
    def test_camel_case_and_no_nulls(self):
        blocks = parse_stored_blocks(
            [{"type": "video", "videoType": "youtube", "videoRef": YT_ID, "startSeconds": "1:05"}]
        )
        assert block_documents(blocks) == [
            {"type": "video", "videoType": "youtube", "videoRef": YT_ID, "startSeconds": 65}
        ]

    def test_invalid_stored_blocks_are_skipped(self):
        blocks = parse_stored_blocks([{"type": "poll"}, {"type": "text", "content": "hi"}])
        assert len(blocks) == 1


class TestRenderBlocks:
    """Tests for render_blocks against the reference library."""

    def test_resolves_legacy_and_self_contained(self, db_session):
        reference = ReferenceVideo(
            title="Downwind gybe", type=VideoType.youtube, video_ref=YT_ID, note_timestamp=30
        )
        db_session.add(reference)
        db_session.commit()

        rendered = render_blocks(
            db_session,
            [
                {"type": "text", "content": "Intro"},
                {"type": "video", "referenceVideoId": str(reference.id)},
                {"type": "video", "videoType": "drive", "videoRef": "driveFile123", "title": "Start"},
            ],
        )

        assert rendered[0] == {"type": "text", "content": "Intro"}

        legacy = rendered[1]
        assert legacy["available"] is True
        assert legacy["title"] == "Downwind gybe"
        assert legacy["caption"] == "Downwind gybe"
        assert legacy["startSeconds"] == 30
        assert legacy["embedUrl"] == f"https://www.youtube.com/embed/{YT_ID}?start=30"

        own = rendered[2]
        assert own["videoType"] == "drive"
        assert own["embedUrl"] == "https://drive.google.com/file/d/driveFile123/preview"

    def test_block_start_overrides_reference_note(self, db_session):
        reference = ReferenceVideo(
            title="Tack", type=VideoType.youtube, video_ref=YT_ID, note_timestamp=30
        )
        db_session.add(reference)
        db_session.commit()

        rendered = render_blocks(
            db_session,
            [{"type": "video", "referenceVideoId": str(reference.id), "startSeconds": 5, "caption": "c"}],
        )

        assert rendered[0]["startSeconds"] == 5
        assert rendered[0]["caption"] == "c"

    def test_missing_reference_is_unavailable(self, db_session):
        rendered = render_blocks(
            db_session, [{"type": "video", "referenceVideoId": str(uuid4())}, {"type": "video"}]
        )

        assert rendered == [
            {"type": "video", "available": False, "reason": "Video not found"},
            {"type": "video", "available": False, "reason": "Video not available"},
        ]
