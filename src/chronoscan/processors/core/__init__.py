"""Core extraction pipeline: patterns, resolvers and the combining extractor."""

from .models import (
    DATETIME_UNDEFINED,
    UTC_OFFSET_NOT_FOUND,
    DefaultDateConfig,
    FormatPreference,
    ParsedResult,
    Span
)
from .defaults import (
    current_defaults,
    default_date_settings,
    set_default_date,
    set_use_current_date_as_default
)
from .temporal_extractor import TemporalExtractor

__all__ = [
    "DATETIME_UNDEFINED",
    "UTC_OFFSET_NOT_FOUND",
    "DefaultDateConfig",
    "FormatPreference",
    "ParsedResult",
    "Span",
    "current_defaults",
    "default_date_settings",
    "set_default_date",
    "set_use_current_date_as_default",
    "TemporalExtractor"
]
