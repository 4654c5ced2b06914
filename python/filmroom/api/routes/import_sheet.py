"""Google Sheet import route."""

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends

from filmroom.api.deps import get_http_client
from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, requires
from filmroom.schemas.imports import ImportSheetRequest
from filmroom.services import sheets as sheets_service

router = APIRouter()


@router.post("/import-sheet")
async def import_sheet(
    body: ImportSheetRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> list[dict]:
    """Read [{name, id}] rows from a published Google Sheet. Captain only."""
    result = await sheets_service.import_sheet(client, viewer, body.url)
    return [v.model_dump(mode="json") for v in result]
