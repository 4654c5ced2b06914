"""Tests for the Google Sheet import.

The CSV export fetch is mocked with respx.
"""

import httpx
import pytest
import respx

from filmroom.schemas.imports import SheetVideoOut
from filmroom.services.sheets import parse_sheet_rows

SHEET_URL = "https://docs.google.com/spreadsheets/d/sheet123/edit#gid=0"
EXPORT_HOST = "docs.google.com"
EXPORT_PATH = "/spreadsheets/d/sheet123/export"

CSV_TEXT = (
    "Name,File ID,Link\n"
    "Start sequence,1AbCdEfGhIj,\n"
    ",orphanFileId1,\n"
    "Windward mark,,https://drive.google.com/file/d/2XyZ_windward/view\n"
    "No id at all,,\n"
)


class TestParseSheetRows:
    """Tests for parse_sheet_rows."""

    def test_parses_rows_and_skips_header(self):
        assert parse_sheet_rows(CSV_TEXT) == [
            SheetVideoOut(name="Start sequence", id="1AbCdEfGhIj"),
            SheetVideoOut(name="Windward mark", id="2XyZ_windward"),
        ]

    def test_header_only(self):
        assert parse_sheet_rows("Name,File ID\n") == []

    def test_quoted_names(self):
        text = 'Name,File ID\n"Gybe, heavy air",abcdefghijk\n'
        assert parse_sheet_rows(text) == [SheetVideoOut(name="Gybe, heavy air", id="abcdefghijk")]


class TestImportSheetRoute:
    """Tests for POST /api/import-sheet."""

    @respx.mock
    def test_imports_videos(self, captain_client):
        route = respx.get(host=EXPORT_HOST, path=EXPORT_PATH).mock(
            return_value=httpx.Response(200, text=CSV_TEXT)
        )

        response = captain_client.post("/api/import-sheet", json={"url": SHEET_URL})

        assert response.status_code == 200
        assert response.json() == [
            {"name": "Start sequence", "id": "1AbCdEfGhIj"},
            {"name": "Windward mark", "id": "2XyZ_windward"},
        ]
        assert route.called
        assert route.calls.last.request.url.params["format"] == "csv"

    def test_bad_url(self, captain_client):
        response = captain_client.post("/api/import-sheet", json={"url": "https://example.com/x"})

        assert response.status_code == 400
        assert response.json()["code"] == "E_INVALID_SHEET"

    @respx.mock
    def test_fetch_failure(self, captain_client):
        respx.get(host=EXPORT_HOST, path=EXPORT_PATH).mock(return_value=httpx.Response(404))

        response = captain_client.post("/api/import-sheet", json={"url": SHEET_URL})

        assert response.status_code == 400
        assert "published" in response.json()["error"]

    @respx.mock
    def test_network_error(self, captain_client):
        respx.get(host=EXPORT_HOST, path=EXPORT_PATH).mock(side_effect=httpx.ConnectError("down"))

        response = captain_client.post("/api/import-sheet", json={"url": SHEET_URL})

        assert response.status_code == 400

    @respx.mock
    def test_no_videos(self, captain_client):
        respx.get(host=EXPORT_HOST, path=EXPORT_PATH).mock(
            return_value=httpx.Response(200, text="Name,File ID\n")
        )

        response = captain_client.post("/api/import-sheet", json={"url": SHEET_URL})

        assert response.status_code == 400
        assert response.json()["error"] == "No videos found in sheet"

    @pytest.mark.parametrize("client_fixture,status", [("client", 401), ("contributor_client", 403)])
    def test_captain_only(self, request, client_fixture, status):
        client = request.getfixturevalue(client_fixture)

        response = client.post("/api/import-sheet", json={"url": SHEET_URL})

        assert response.status_code == status
