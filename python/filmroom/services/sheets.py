"""Google Sheet import.

A published sheet is fetched through its CSV export. Rows are
``name, fileId, link``; the first row is a header. A row is usable when it
has a name and a Drive file id, taken from the fileId column or, failing
that, from the Drive link.
"""

import csv
import io

import httpx

from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, authorize
from filmroom.config import get_settings
from filmroom.errors import ApiErrorCode, InvalidRequestError
from filmroom.logging import get_logger
from filmroom.schemas.imports import SheetVideoOut
from filmroom.services import media_links

logger = get_logger(__name__)


def parse_sheet_rows(text: str) -> list[SheetVideoOut]:
    """Parse CSV export text into importable videos.

    Examples:
        >>> parse_sheet_rows("name,fileId\\nDrill A,abc\\n,\\nDrill B,def")
        [SheetVideoOut(name='Drill A', id='abc'), SheetVideoOut(name='Drill B', id='def')]
    """
    rows = list(csv.reader(io.StringIO(text)))
    videos: list[SheetVideoOut] = []
    for row in rows[1:]:
        name = row[0].strip() if len(row) > 0 else ""
        file_id = row[1].strip() if len(row) > 1 else ""
        if not file_id and len(row) > 2 and row[2].strip():
            file_id = media_links.extract_drive_file_id(row[2]) or ""
        if name and file_id:
            videos.append(SheetVideoOut(name=name, id=file_id))
    return videos


async def import_sheet(
    client: httpx.AsyncClient, viewer: Viewer | None, url: str
) -> list[SheetVideoOut]:
    """Fetch a sheet's CSV export and return its videos.

    Raises:
        InvalidRequestError: Bad sheet URL, failed fetch, or no usable rows.
    """
    authorize(viewer, AccessTier.CAPTAIN)

    sheet_id = media_links.extract_sheet_id(url.strip()) if url else None
    if not sheet_id:
        raise InvalidRequestError(ApiErrorCode.E_INVALID_SHEET, "Invalid Google Sheet URL")

    export_url = media_links.sheet_csv_export_url(sheet_id)
    try:
        response = await client.get(
            export_url,
            timeout=get_settings().sheet_fetch_timeout_s,
            follow_redirects=True,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("sheet_fetch_failed", sheet_id=sheet_id, error=str(e))
        raise InvalidRequestError(
            ApiErrorCode.E_INVALID_SHEET,
            "Could not fetch sheet. Make sure it is published to the web.",
        ) from e

    videos = parse_sheet_rows(response.text)
    if not videos:
        raise InvalidRequestError(ApiErrorCode.E_INVALID_SHEET, "No videos found in sheet")

    logger.info("sheet_imported", sheet_id=sheet_id, video_count=len(videos))
    return videos
