"""Process-wide default date used when text carries a time but no date.

Parsing never reads the mutable state directly: each parse takes one
:meth:`DefaultDateSettings.snapshot` up front, so a concurrent
``set_default_date`` is seen either completely or not at all.
"""

import threading
from datetime import date
from typing import Optional

from .models import DefaultDateConfig
from ...core.logging_manager import LoggingManager


logger = LoggingManager.get_logger(__name__)


class DefaultDateSettings:
    """Lock-guarded holder for the default date configuration."""

    def __init__(self):
        self._lock = threading.Lock()
        self._config = DefaultDateConfig()

    def set_default_date(self, default_date: date):
        """Use ``default_date`` from now on instead of the current date."""
        if not isinstance(default_date, date):
            raise TypeError(f"default_date must be a date, got {type(default_date).__name__}")

        # datetime is a date subclass; keep only the calendar part
        default_date = date(default_date.year, default_date.month, default_date.day)
        with self._lock:
            self._config = DefaultDateConfig(default_date=default_date, use_current_date=False)
        logger.debug(f"Default date set to {default_date.isoformat()}")

    def set_use_current_date_as_default(self, use_current_date: bool):
        """Switch between the configured date and the current date."""
        with self._lock:
            self._config = DefaultDateConfig(
                default_date=self._config.default_date,
                use_current_date=bool(use_current_date)
            )
        logger.debug(f"Use current date as default: {bool(use_current_date)}")

    def snapshot(self) -> DefaultDateConfig:
        with self._lock:
            return self._config

    def reset(self):
        """Return to current-date mode."""
        with self._lock:
            self._config = DefaultDateConfig()


default_date_settings = DefaultDateSettings()


def set_default_date(default_date: date):
    default_date_settings.set_default_date(default_date)


def set_use_current_date_as_default(use_current_date: bool):
    default_date_settings.set_use_current_date_as_default(use_current_date)


def current_defaults(override: Optional[DefaultDateConfig] = None) -> DefaultDateConfig:
    """Return ``override`` when given, else a snapshot of the process-wide settings."""
    if override is not None:
        return override
    return default_date_settings.snapshot()
