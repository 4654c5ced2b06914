"""Google Drive / YouTube / Google Sheets link helpers.

Extraction functions accept either a share URL or a bare id and return the
provider id, or None when nothing usable is found.
"""

import re
from urllib.parse import parse_qs, urlparse

from filmroom.services.timecodes import parse_timestamp

_DRIVE_FILE_PATH = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
_DRIVE_ID_PARAM = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")
_DRIVE_BARE_ID = re.compile(r"^[a-zA-Z0-9_-]{10,}$")

_YOUTUBE_ID = re.compile(r"^[a-zA-Z0-9_-]{11}$")
_YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com"}
_YOUTUBE_PATH_PREFIXES = ("/embed/", "/shorts/", "/live/", "/v/")
_YOUTUBE_DURATION = re.compile(r"^(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s?)?$")

_SHEET_ID = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")


def extract_drive_file_id(value: str) -> str | None:
    """Extract a Drive file id from a share URL or raw id string."""
    s = value.strip()
    match = _DRIVE_FILE_PATH.search(s)
    if match:
        return match.group(1)
    match = _DRIVE_ID_PARAM.search(s)
    if match:
        return match.group(1)
    if _DRIVE_BARE_ID.match(s):
        return s
    return None


def extract_youtube_id(value: str) -> str | None:
    """Extract an 11-character YouTube video id from a URL or raw id."""
    s = value.strip()
    if _YOUTUBE_ID.match(s):
        return s

    parsed = urlparse(s if "://" in s else f"https://{s}")
    host = (parsed.hostname or "").lower()

    candidate = None
    if host == "youtu.be":
        candidate = parsed.path.lstrip("/").split("/")[0]
    elif host in _YOUTUBE_HOSTS:
        if parsed.path == "/watch":
            candidate = parse_qs(parsed.query).get("v", [""])[0]
        else:
            for prefix in _YOUTUBE_PATH_PREFIXES:
                if parsed.path.startswith(prefix):
                    candidate = parsed.path[len(prefix) :].split("/")[0]
                    break

    if candidate and _YOUTUBE_ID.match(candidate):
        return candidate
    return None


def extract_youtube_start(value: str) -> int | None:
    """Start offset in seconds from a YouTube URL's t= / start= parameter."""
    parsed = urlparse(value.strip())
    params = parse_qs(parsed.query)
    raw = (params.get("t") or params.get("start") or [None])[0]
    if not raw:
        return None

    match = _YOUTUBE_DURATION.match(raw)
    if match and any(match.groups()):
        hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
        return hours * 3600 + minutes * 60 + seconds
    return parse_timestamp(raw)


def extract_sheet_id(url: str) -> str | None:
    """Extract a spreadsheet id from a Google Sheets URL."""
    match = _SHEET_ID.search(url)
    return match.group(1) if match else None


def sheet_csv_export_url(sheet_id: str) -> str:
    return f"https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv"


def drive_thumbnail_url(file_id: str) -> str:
    return f"https://drive.google.com/thumbnail?id={file_id}&sz=w400-h225"


def drive_embed_url(file_id: str, start_seconds: int | None = None) -> str:
    url = f"https://drive.google.com/file/d/{file_id}/preview"
    if start_seconds:
        url += f"#t={start_seconds}"
    return url


def youtube_thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


def youtube_embed_url(video_id: str, start_seconds: int | None = None) -> str:
    url = f"https://www.youtube.com/embed/{video_id}"
    if start_seconds:
        url += f"?start={start_seconds}"
    return url


def embed_url(video_type: str, video_ref: str, start_seconds: int | None = None) -> str:
    """Player URL for a video hosted on either provider."""
    if video_type == "youtube":
        return youtube_embed_url(video_ref, start_seconds)
    return drive_embed_url(video_ref, start_seconds)


def thumbnail_url(video_type: str, video_ref: str) -> str:
    if video_type == "youtube":
        return youtube_thumbnail_url(video_ref)
    return drive_thumbnail_url(video_ref)
