"""Tests for Drive / YouTube / Sheets link helpers."""

import pytest

from filmroom.services.media_links import (
    drive_embed_url,
    embed_url,
    extract_drive_file_id,
    extract_sheet_id,
    extract_youtube_id,
    extract_youtube_start,
    sheet_csv_export_url,
    thumbnail_url,
    youtube_embed_url,
)

YT_ID = "dQw4w9WgXcQ"


class TestExtractDriveFileId:
    @pytest.mark.parametrize(
        "value",
        [
            "https://drive.google.com/file/d/1AbC_def-GHIjkl/view?usp=sharing",
            "https://drive.google.com/open?id=1AbC_def-GHIjkl",
            "1AbC_def-GHIjkl",
        ],
    )
    def test_extracts_id(self, value):
        assert extract_drive_file_id(value) == "1AbC_def-GHIjkl"

    def test_rejects_garbage(self):
        assert extract_drive_file_id("not a link") is None


class TestExtractYoutubeId:
    @pytest.mark.parametrize(
        "value",
        [
            YT_ID,
            f"https://www.youtube.com/watch?v={YT_ID}",
            f"https://youtube.com/watch?v={YT_ID}&t=42",
            f"https://youtu.be/{YT_ID}",
            f"youtu.be/{YT_ID}?t=10",
            f"https://www.youtube.com/embed/{YT_ID}",
            f"https://www.youtube.com/shorts/{YT_ID}",
            f"https://m.youtube.com/live/{YT_ID}",
        ],
    )
    def test_extracts_id(self, value):
        assert extract_youtube_id(value) == YT_ID

    @pytest.mark.parametrize(
        "value", ["https://vimeo.com/123", "https://www.youtube.com/watch?v=short", "hello"]
    )
    def test_rejects_non_youtube(self, value):
        assert extract_youtube_id(value) is None


class TestExtractYoutubeStart:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (f"https://youtu.be/{YT_ID}?t=42", 42),
            (f"https://youtu.be/{YT_ID}?t=42s", 42),
            (f"https://youtu.be/{YT_ID}?t=1m5s", 65),
            (f"https://youtu.be/{YT_ID}?t=1h2m3s", 3723),
            (f"https://www.youtube.com/embed/{YT_ID}?start=90", 90),
            (f"https://youtu.be/{YT_ID}", None),
        ],
    )
    def test_start(self, value, expected):
        assert extract_youtube_start(value) == expected


class TestSheets:
    def test_extracts_sheet_id(self):
        url = "https://docs.google.com/spreadsheets/d/1sHeEt_Id-9/edit#gid=0"
        assert extract_sheet_id(url) == "1sHeEt_Id-9"

    def test_rejects_non_sheet_url(self):
        assert extract_sheet_id("https://example.com/doc") is None

    def test_export_url(self):
        assert (
            sheet_csv_export_url("abc")
            == "https://docs.google.com/spreadsheets/d/abc/export?format=csv"
        )


class TestUrlBuilders:
    def test_youtube_embed_with_start(self):
        assert youtube_embed_url(YT_ID, 65) == f"https://www.youtube.com/embed/{YT_ID}?start=65"

    def test_drive_embed_without_start(self):
        assert drive_embed_url("abc") == "https://drive.google.com/file/d/abc/preview"

    def test_dispatch_by_type(self):
        assert embed_url("drive", "abc", 5) == "https://drive.google.com/file/d/abc/preview#t=5"
        assert thumbnail_url("youtube", YT_ID) == f"https://img.youtube.com/vi/{YT_ID}/hqdefault.jpg"
