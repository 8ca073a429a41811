"""Core modules for chronoscan.

Logging, error handling and configuration shared by the extraction engine
and the command-line tool. ``config_manager`` is imported directly since it
depends on the processors package.
"""

from .error_handler import (
    ChronoscanError,
    ConfigurationError,
    UnrecognizedTimeZoneError,
    ErrorHandler,
    ErrorSeverity
)
from .logging_manager import LoggingManager

__all__ = [
    "ChronoscanError",
    "ConfigurationError",
    "UnrecognizedTimeZoneError",
    "ErrorHandler",
    "ErrorSeverity",
    "LoggingManager"
]
