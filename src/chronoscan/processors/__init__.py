"""Data Processing Module

Temporal extraction from free text plus calendar arithmetic helpers.
"""

from .core.temporal_extractor import TemporalExtractor
from .core.models import ParsedResult, FormatPreference
from . import calendar_utils

__all__ = [
    "TemporalExtractor",
    "ParsedResult",
    "FormatPreference",
    "calendar_utils"
]
