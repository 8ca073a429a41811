"""Turns a matched time token into a time of day and an optional UTC offset."""

from dataclasses import dataclass
from datetime import time, timedelta
from typing import Optional

from .models import MAX_UTC_OFFSET, Span
from .patterns import PatternMatch
from ...core.error_handler import UnrecognizedTimeZoneError
from ...core.logging_manager import LoggingManager


logger = LoggingManager.get_logger(__name__)


ZONE_OFFSETS = {
    "UTC": timedelta(0),
    "GMT": timedelta(0),
    "CST": timedelta(hours=-6),
    "EST": timedelta(hours=-5),
}


@dataclass(frozen=True)
class ResolvedTime:
    """Time of day read from the text, plus the offset found next to it."""
    time: time
    span: Span
    utc_offset: Optional[timedelta] = None

    @property
    def utc_offset_found(self) -> bool:
        return self.utc_offset is not None and abs(self.utc_offset) < MAX_UTC_OFFSET


def zone_offset(zone: str) -> timedelta:
    """Look up a zone abbreviation.

    Raises:
        UnrecognizedTimeZoneError: If the abbreviation is not in the table
    """
    try:
        return ZONE_OFFSETS[zone.upper()]
    except KeyError:
        raise UnrecognizedTimeZoneError(zone) from None


def to_24_hour(hour: int, ampm: Optional[str]) -> int:
    marker = (ampm or "").upper()
    if marker == "PM" and hour < 12:
        return hour + 12
    if marker == "AM" and hour == 12:
        return 0
    return hour


def numeric_offset(sign: str, hours: str, minutes: Optional[str]) -> timedelta:
    offset = timedelta(hours=int(hours), minutes=int(minutes) if minutes else 0)
    return -offset if sign == "-" else offset


def resolve_time(match: PatternMatch) -> Optional[ResolvedTime]:
    """Resolve a time pattern hit.

    Out-of-range clock values and unknown zone abbreviations both give
    ``None``, the same answer as no match at all.

    Args:
        match: Hit returned by :func:`patterns.find_time`

    Returns:
        Resolved time or None
    """
    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    second = int(match.group("second") or 0)

    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        logger.debug(f"Rejected time {hour}:{minute}:{second}: out of range")
        return None

    hour = to_24_hour(hour, match.group("ampm") or match.group("ampm_bare"))
    clock = time(hour, minute, second)

    if match.group("offset_hh") is not None:
        offset = numeric_offset(
            match.group("offset_sign"), match.group("offset_hh"), match.group("offset_mm")
        )
        return ResolvedTime(time=clock, span=match.span, utc_offset=offset)

    zone = match.group("zone")
    if zone:
        try:
            offset = zone_offset(zone)
        except UnrecognizedTimeZoneError as e:
            logger.warning(f"{e.message} Treating '{zone}' as no match")
            return None
        return ResolvedTime(time=clock, span=match.span, utc_offset=offset)

    return ResolvedTime(time=clock, span=match.span)
