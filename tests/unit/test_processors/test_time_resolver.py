"""
Unit tests for time resolution: 12-hour clock, zones and numeric offsets.
"""

import logging
from datetime import time, timedelta

import pytest

from chronoscan.core.error_handler import UnrecognizedTimeZoneError
from chronoscan.processors.core.models import FormatPreference, Span
from chronoscan.processors.core.patterns import PatternMatch, find_time
from chronoscan.processors.core.time_resolver import (
    ResolvedTime,
    numeric_offset,
    resolve_time,
    to_24_hour,
    zone_offset
)


def clock_match(**groups):
    """Build a clock-time hit without going through the patterns"""
    return PatternMatch(kind="clock_free", groups=groups, span=Span(0, 5))


class TestClockConversion:
    """Test suite for 12-hour to 24-hour conversion"""

    @pytest.mark.unit
    @pytest.mark.parametrize("hour,marker,expected", [
        (2, "pm", 14),
        (2, "PM", 14),
        (12, "PM", 12),
        (12, "am", 0),
        (11, "AM", 11),
        (14, None, 14),
        (14, "PM", 14),
    ])
    def test_to_24_hour(self, hour, marker, expected):
        assert to_24_hour(hour, marker) == expected


class TestOffsets:
    """Test suite for zone and numeric offsets"""

    @pytest.mark.unit
    @pytest.mark.parametrize("zone,expected", [
        ("UTC", timedelta(0)),
        ("GMT", timedelta(0)),
        ("CST", timedelta(hours=-6)),
        ("EST", timedelta(hours=-5)),
    ])
    def test_zone_offset(self, zone, expected):
        assert zone_offset(zone) == expected

    @pytest.mark.unit
    def test_unknown_zone_raises(self):
        with pytest.raises(UnrecognizedTimeZoneError) as exc_info:
            zone_offset("PST")

        assert exc_info.value.zone == "PST"
        assert "PST" in exc_info.value.message

    @pytest.mark.unit
    @pytest.mark.parametrize("sign,hours,minutes,expected", [
        ("+", "05", "30", timedelta(hours=5, minutes=30)),
        ("-", "05", "00", timedelta(hours=-5)),
        ("-", "03", "30", -timedelta(hours=3, minutes=30)),
        ("+", "01", None, timedelta(hours=1)),
    ])
    def test_numeric_offset(self, sign, hours, minutes, expected):
        assert numeric_offset(sign, hours, minutes) == expected

    @pytest.mark.unit
    def test_offset_found_threshold(self):
        span = Span(0, 5)

        assert ResolvedTime(time(1), span, timedelta(hours=11, minutes=59)).utc_offset_found
        assert not ResolvedTime(time(1), span, timedelta(hours=12)).utc_offset_found
        assert not ResolvedTime(time(1), span, timedelta(hours=-12)).utc_offset_found
        assert not ResolvedTime(time(1), span).utc_offset_found


class TestResolveTime:
    """Test suite for resolve_time"""

    @pytest.mark.unit
    def test_plain_clock_time(self):
        resolved = resolve_time(clock_match(hour="9", minute="05", second=None))

        assert resolved.time == time(9, 5)
        assert resolved.utc_offset is None

    @pytest.mark.unit
    def test_hour_only_with_marker(self):
        resolved = resolve_time(clock_match(hour="2", ampm_bare="pm", zone="UTC"))

        assert resolved.time == time(14, 0)
        assert resolved.utc_offset == timedelta(0)
        assert resolved.utc_offset_found

    @pytest.mark.unit
    @pytest.mark.parametrize("hour,minute,second", [
        ("24", "00", None),
        ("10", "60", None),
        ("10", "30", "60"),
    ])
    def test_out_of_range(self, hour, minute, second):
        assert resolve_time(clock_match(hour=hour, minute=minute, second=second)) is None

    @pytest.mark.unit
    def test_unknown_zone_is_no_match(self, caplog):
        with caplog.at_level(logging.WARNING):
            resolved = resolve_time(clock_match(hour="9", minute="00", zone="PST"))

        assert resolved is None
        assert "PST" in caplog.text

    @pytest.mark.unit
    def test_numeric_offset_from_text(self):
        match = find_time("14:30:00 -05:00", FormatPreference.DAY_FIRST)
        resolved = resolve_time(match)

        assert resolved.time == time(14, 30)
        assert resolved.utc_offset == timedelta(hours=-5)
        assert resolved.span == Span(0, 15)

    @pytest.mark.unit
    def test_large_offset_kept_but_not_found(self):
        match = find_time("14:30:00 +13:00", FormatPreference.DAY_FIRST)
        resolved = resolve_time(match)

        assert resolved.utc_offset == timedelta(hours=13)
        assert not resolved.utc_offset_found
