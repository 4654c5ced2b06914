"""Shared field types for request schemas."""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator

from filmroom.services.timecodes import coerce_timestamp


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional foreign reference: a UUID, or null when missing/blank
OptionalRef = Annotated[UUID | None, BeforeValidator(_blank_to_none)]

# Seconds as an integer, or a timecode string such as "1:23"
Timestamp = Annotated[int | None, BeforeValidator(coerce_timestamp)]


def _strip_to_none(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


# Free text stored trimmed, or null when missing/blank
OptionalText = Annotated[str | None, BeforeValidator(_strip_to_none)]
