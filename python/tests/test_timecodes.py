"""Tests for timecode parsing and formatting."""

import pytest

from filmroom.services.timecodes import coerce_timestamp, format_time, parse_timestamp


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("83", 83),
            ("0", 0),
            ("1:23", 83),
            ("12:05", 725),
            ("1:01:02", 3662),
            ("10:00:00", 36000),
            ("  1:23  ", 83),
        ],
    )
    def test_accepts_valid_timecodes(self, raw, expected):
        assert parse_timestamp(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "1:2", "0:60", "1:60:00", "1:00:60", "123:00", "-5", "1.5", "1:23:45:67"],
    )
    def test_rejects_invalid_timecodes(self, raw):
        assert parse_timestamp(raw) is None


class TestFormatTime:
    """Tests for format_time."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "0:00"), (83, "1:23"), (599, "9:59"), (3599, "59:59"), (3600, "1:00:00"), (3662, "1:01:02")],
    )
    def test_formats(self, seconds, expected):
        assert format_time(seconds) == expected

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            format_time(-1)

    def test_parse_inverts_format(self):
        for seconds in (0, 59, 61, 3599, 3600, 7322):
            assert parse_timestamp(format_time(seconds)) == seconds


class TestCoerceTimestamp:
    """Tests for the request-side coercion used by schemas."""

    def test_int_passes_through(self):
        assert coerce_timestamp(42) == 42

    def test_string_is_parsed(self):
        assert coerce_timestamp("1:05") == 65

    def test_blank_string_is_none(self):
        assert coerce_timestamp("  ") is None

    def test_none_is_none(self):
        assert coerce_timestamp(None) is None

    @pytest.mark.parametrize("value", [-1, "nope", True, 1.5])
    def test_invalid_values_raise(self, value):
        with pytest.raises(ValueError):
            coerce_timestamp(value)
