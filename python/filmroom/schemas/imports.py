"""Google Sheet import schemas."""

from pydantic import BaseModel


class ImportSheetRequest(BaseModel):
    url: str = ""


class SheetVideoOut(BaseModel):
    """One importable video row."""

    name: str
    id: str
