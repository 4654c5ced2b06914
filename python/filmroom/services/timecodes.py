"""Video timecode parsing and formatting.

Accepted input grammar (surrounding whitespace ignored):
- H:MM:SS  (H one or two digits)
- M:SS     (M one or two digits)
- bare non-negative integer seconds

Minute and second components must be below 60.
"""

import re

_HMS = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})$")
_MS = re.compile(r"^(\d{1,2}):(\d{2})$")
_SECONDS = re.compile(r"^\d+$")


def parse_timestamp(raw: str) -> int | None:
    """Parse a timecode into whole seconds.

    Returns:
        Seconds, or None if the input does not match the grammar.

    Examples:
        >>> parse_timestamp("83")
        83
        >>> parse_timestamp("1:23")
        83
        >>> parse_timestamp("1:01:02")
        3662
        >>> parse_timestamp("0:60") is None
        True
    """
    value = raw.strip()

    match = _HMS.match(value)
    if match:
        hours, minutes, seconds = (int(part) for part in match.groups())
        if minutes >= 60 or seconds >= 60:
            return None
        return hours * 3600 + minutes * 60 + seconds

    match = _MS.match(value)
    if match:
        minutes, seconds = (int(part) for part in match.groups())
        if seconds >= 60:
            return None
        return minutes * 60 + seconds

    if _SECONDS.match(value):
        return int(value)

    return None


def format_time(seconds: int) -> str:
    """Format whole seconds as M:SS, or H:MM:SS from one hour up."""
    if seconds < 0:
        raise ValueError("seconds must be non-negative")
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def coerce_timestamp(value: int | str | None) -> int | None:
    """Normalize a client-supplied timestamp (seconds or timecode string).

    Used by request schemas; raises ValueError so pydantic reports a 400.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("timestamp must be seconds or a timecode")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("timestamp must be non-negative")
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        parsed = parse_timestamp(value)
        if parsed is None:
            raise ValueError(f"invalid timestamp: {value!r}")
        return parsed
    raise ValueError("timestamp must be seconds or a timecode")
