"""chronoscan - Date and time extraction from free text

Finds the first date and/or time mentioned in arbitrary text (emails, log
lines, chat messages) and returns it as a ``datetime``, together with where
in the text it was found and any UTC offset written next to it.
"""

__version__ = "0.1.0"
__description__ = "Date and time extraction from free text"

from .core.error_handler import (
    ChronoscanError,
    ConfigurationError,
    ErrorHandler,
    ErrorSeverity,
    UnrecognizedTimeZoneError
)
from .core.logging_manager import LoggingManager
from .processors.core import (
    DATETIME_UNDEFINED,
    UTC_OFFSET_NOT_FOUND,
    DefaultDateConfig,
    FormatPreference,
    ParsedResult,
    Span,
    TemporalExtractor,
    set_default_date,
    set_use_current_date_as_default
)
from .core.config_manager import AppConfig, ConfigManager, validate_config


_extractor = TemporalExtractor()


def parse_date_or_time(text, fmt=FormatPreference.DAY_FIRST, defaults=None):
    return _extractor.parse_date_or_time(text, fmt, defaults)


def parse_date_or_time_full(text, fmt=FormatPreference.DAY_FIRST, defaults=None):
    return _extractor.parse_date_or_time_full(text, fmt, defaults)


def parse_date_and_time(text, fmt=FormatPreference.DAY_FIRST, defaults=None):
    return _extractor.parse_date_and_time(text, fmt, defaults)


def parse_date_and_time_full(text, fmt=FormatPreference.DAY_FIRST, defaults=None):
    return _extractor.parse_date_and_time_full(text, fmt, defaults)


def parse_date_only(text, fmt=FormatPreference.DAY_FIRST, defaults=None):
    return _extractor.parse_date_only(text, fmt, defaults)


def parse_date_only_full(text, fmt=FormatPreference.DAY_FIRST, defaults=None):
    return _extractor.parse_date_only_full(text, fmt, defaults)


def parse_time_only(text, fmt=FormatPreference.DAY_FIRST):
    return _extractor.parse_time_only(text, fmt)


def parse_time_only_full(text, fmt=FormatPreference.DAY_FIRST):
    return _extractor.parse_time_only_full(text, fmt)


def coerce_date(text, fmt=FormatPreference.DAY_FIRST):
    return _extractor.coerce_date(text, fmt)


__all__ = [
    "AppConfig",
    "ChronoscanError",
    "ConfigManager",
    "ConfigurationError",
    "DATETIME_UNDEFINED",
    "DefaultDateConfig",
    "ErrorHandler",
    "ErrorSeverity",
    "FormatPreference",
    "LoggingManager",
    "ParsedResult",
    "Span",
    "TemporalExtractor",
    "UTC_OFFSET_NOT_FOUND",
    "UnrecognizedTimeZoneError",
    "coerce_date",
    "parse_date_and_time",
    "parse_date_and_time_full",
    "parse_date_only",
    "parse_date_only_full",
    "parse_date_or_time",
    "parse_date_or_time_full",
    "parse_time_only",
    "parse_time_only_full",
    "set_default_date",
    "set_use_current_date_as_default",
    "validate_config"
]
