"""Temporal Extractor for free-text date and time parsing

Locates a date, a time or both inside arbitrary text and merges them into a
single timestamp, falling back to the default date when only a time is
present. Four operations share one algorithm:

* ``parse_date_and_time``: both sides must be found
* ``parse_date_or_time``: either side is enough
* ``parse_date_only``: dates only, times are ignored
* ``parse_time_only``: times only, dates are ignored

Each has a ``*_full`` variant returning :class:`ParsedResult`, which also
says where in the text the date and time were found.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from dateutil import parser as dateutil_parser

from .date_resolver import resolve_date
from .defaults import current_defaults
from .models import (
    DATETIME_UNDEFINED,
    DefaultDateConfig,
    FormatPreference,
    ParsedResult,
    Span,
)
from .patterns import find_date, find_time
from .time_resolver import ResolvedTime, resolve_time
from ...core.logging_manager import LoggingManager


# Calendar date standing in for "no date" when converting time-only results to UTC.
SENTINEL_DATE = datetime(1, 1, 1)


class TemporalExtractor:
    """Date and time extractor bound to a format preference."""

    def __init__(
        self,
        format_preference: FormatPreference = FormatPreference.DAY_FIRST,
        defaults: Optional[DefaultDateConfig] = None
    ):
        """Initialize temporal extractor.

        Args:
            format_preference: Ordering for ambiguous numeric dates
            defaults: Fixed default-date configuration; when omitted the
                process-wide settings are snapshotted on every parse
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.format_preference = format_preference
        self.defaults = defaults

    # ── Full results ──────────────────────────────────────────────

    def parse_date_or_time_full(
        self,
        text: str,
        fmt: Optional[FormatPreference] = None,
        defaults: Optional[DefaultDateConfig] = None
    ) -> Optional[ParsedResult]:
        """Find a date and/or a time in ``text``.

        If only a date is found the time is midnight. If only a time is
        found the date comes from the default date configuration and
        ``date_found`` stays false.

        Args:
            text: Text that may contain a date and/or a time
            fmt: Overrides the extractor's format preference for this call
            defaults: Overrides the default date configuration for this call

        Returns:
            ParsedResult, or None when neither a date nor a time was found
        """
        fmt, config = self._call_settings(text, fmt, defaults)

        found_date = self._locate_date(text, fmt, config)
        if found_date is None:
            found_time = self._locate_time(text, fmt, None)
            if found_time is None:
                self.logger.debug("No date or time found")
                return None

            default_day = config.resolve()
            return self._build_result(
                datetime.combine(default_day, found_time.time), None, found_time
            )

        day, date_span = found_date
        found_time = self._locate_time(text, fmt, date_span)
        if found_time is None:
            return self._build_result(datetime.combine(day, time()), date_span, None)

        return self._build_result(datetime.combine(day, found_time.time), date_span, found_time)

    def parse_date_and_time_full(
        self,
        text: str,
        fmt: Optional[FormatPreference] = None,
        defaults: Optional[DefaultDateConfig] = None
    ) -> Optional[ParsedResult]:
        """Like :meth:`parse_date_or_time_full` but both sides must be found."""
        result = self.parse_date_or_time_full(text, fmt, defaults)
        if result is None or not (result.date_found and result.time_found):
            return None
        return result

    def parse_date_only_full(
        self,
        text: str,
        fmt: Optional[FormatPreference] = None,
        defaults: Optional[DefaultDateConfig] = None
    ) -> Optional[ParsedResult]:
        """Find a date, ignoring any time; the result's time is midnight.

        A month-day date without a year takes the default date's year.
        """
        fmt, config = self._call_settings(text, fmt, defaults)

        found_date = self._locate_date(text, fmt, config)
        if found_date is None:
            return None

        day, date_span = found_date
        return ParsedResult(local_datetime=datetime.combine(day, time()), date_span=date_span)

    def parse_time_only_full(
        self,
        text: str,
        fmt: Optional[FormatPreference] = None
    ) -> Optional[ParsedResult]:
        """Find a time, ignoring any date; the result's date is 0001-01-01."""
        fmt, _ = self._call_settings(text, fmt, None)

        found_time = self._locate_time(text, fmt, None)
        if found_time is None:
            return None

        return self._build_result(
            datetime.combine(SENTINEL_DATE.date(), found_time.time), None, found_time
        )

    # ── Plain values ──────────────────────────────────────────────

    def parse_date_or_time(self, text, fmt=None, defaults=None) -> Optional[datetime]:
        result = self.parse_date_or_time_full(text, fmt, defaults)
        return result.local_datetime if result else None

    def parse_date_and_time(self, text, fmt=None, defaults=None) -> Optional[datetime]:
        result = self.parse_date_and_time_full(text, fmt, defaults)
        return result.local_datetime if result else None

    def parse_date_only(self, text, fmt=None, defaults=None) -> Optional[date]:
        result = self.parse_date_only_full(text, fmt, defaults)
        return result.local_datetime.date() if result else None

    def parse_time_only(self, text, fmt=None) -> Optional[time]:
        result = self.parse_time_only_full(text, fmt)
        return result.local_datetime.time() if result else None

    def coerce_date(
        self,
        text: str,
        fmt: Optional[FormatPreference] = None
    ) -> Optional[datetime]:
        """Best-effort conversion of a whole string to a datetime.

        Tries :meth:`parse_date_or_time` first and falls back to
        ``dateutil``'s parser, with ``dayfirst`` following the preference.

        Returns:
            Parsed datetime or None
        """
        fmt, _ = self._call_settings(text, fmt, None)

        parsed = self.parse_date_or_time(text, fmt)
        if parsed is not None:
            return parsed

        try:
            return dateutil_parser.parse(text, dayfirst=fmt is FormatPreference.DAY_FIRST)
        except (ValueError, OverflowError) as e:
            self.logger.debug(f"dateutil could not parse {text!r}: {e}")
            return None

    # ── Helpers ───────────────────────────────────────────────────

    def _call_settings(
        self,
        text: str,
        fmt: Optional[FormatPreference],
        defaults: Optional[DefaultDateConfig]
    ) -> Tuple[FormatPreference, DefaultDateConfig]:
        """Validate the input and pin down the settings for one parse."""
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, got {type(text).__name__}")

        fmt = fmt or self.format_preference
        if not isinstance(fmt, FormatPreference):
            raise TypeError(f"fmt must be a FormatPreference, got {type(fmt).__name__}")

        return fmt, current_defaults(defaults or self.defaults)

    def _locate_date(
        self,
        text: str,
        fmt: FormatPreference,
        config: DefaultDateConfig
    ) -> Optional[Tuple[date, Span]]:
        """Find and resolve a date; an impossible date counts as no date."""
        match = find_date(text)
        if match is None:
            return None

        day = resolve_date(match, fmt, config)
        if day is None:
            self.logger.debug(f"Date candidate at {match.span} does not resolve to a real date")
            return None

        return day, match.span

    def _locate_time(
        self,
        text: str,
        fmt: FormatPreference,
        date_span: Optional[Span]
    ) -> Optional[ResolvedTime]:
        match = find_time(text, fmt, date_span)
        if match is None:
            return None
        return resolve_time(match)

    def _build_result(
        self,
        local: datetime,
        date_span: Optional[Span],
        found_time: Optional[ResolvedTime]
    ) -> ParsedResult:
        """Assemble the result, attaching the UTC offset when one was found."""
        time_span = found_time.span if found_time else None

        if found_time is None or found_time.utc_offset is None:
            return ParsedResult(local_datetime=local, date_span=date_span, time_span=time_span)

        offset = found_time.utc_offset
        if not found_time.utc_offset_found:
            self.logger.debug(f"Ignoring UTC offset {offset}: magnitude of 12 hours or more")
            return ParsedResult(
                local_datetime=local, date_span=date_span, time_span=time_span,
                utc_offset=offset, utc_offset_found=False, utc_datetime=DATETIME_UNDEFINED
            )

        utc = self._to_utc(local, offset, date_found=date_span is not None)
        if utc is None:
            return ParsedResult(local_datetime=local, date_span=date_span, time_span=time_span,
                                utc_offset=offset)

        return ParsedResult(
            local_datetime=local, date_span=date_span, time_span=time_span,
            utc_offset=offset, utc_offset_found=True, utc_datetime=utc
        )

    def _to_utc(self, local: datetime, offset: timedelta, date_found: bool) -> Optional[datetime]:
        """Convert local time at ``offset`` to UTC.

        The offset is subtracted, so local 10:00 at -05:00 is 15:00 UTC.
        Without a date the conversion runs on 0001-01-01, moving to
        0001-01-02 when the result would fall before it.
        """
        if not date_found:
            since_midnight = local - datetime.combine(local.date(), time()) - offset
            base = SENTINEL_DATE if since_midnight >= timedelta(0) else SENTINEL_DATE + timedelta(days=1)
            return base + since_midnight

        try:
            return local - offset
        except OverflowError:
            self.logger.debug(f"UTC conversion of {local.isoformat()} overflows the calendar")
            return None

