"""Configuration Management for chronoscan

Handles loading, validation, and management of parser configuration.
Supports hierarchical YAML files with environment variable overrides.
"""

import os
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .error_handler import ConfigurationError
from .logging_manager import LoggingManager
from ..processors.core.defaults import set_default_date, set_use_current_date_as_default
from ..processors.core.models import FormatPreference
from ..processors.core.temporal_extractor import TemporalExtractor


ENV_PREFIX = "CHRONOSCAN_"


class ParsingConfig(BaseModel):
    """Configuration for date and time extraction."""
    format_preference: str = Field(default="day_first", pattern="^(day_first|month_first)$")
    default_date: Optional[date] = None
    # None leaves the mode alone; setting default_date alone implies using it
    use_current_date: Optional[bool] = None

    @field_validator('format_preference', mode='before')
    @classmethod
    def normalize_format_preference(cls, v):
        """Accept ``DAY_FIRST``, ``month-first`` and similar spellings"""
        if isinstance(v, str):
            return v.strip().lower().replace('-', '_')
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_to_console: bool = Field(default=True)
    log_to_file: bool = Field(default=False)
    log_dir: str = Field(default="logs")

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class AppConfig(BaseModel):
    """Main application configuration."""
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="chronoscan")
    environment: str = Field(default="development", pattern="^(development|staging|production|test)$")

    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def format_preference(self) -> FormatPreference:
        return FormatPreference(self.parsing.format_preference)


def validate_config(data: Dict[str, Any]) -> List[str]:
    """Check raw configuration data without applying it.

    Args:
        data: Configuration dictionary as loaded from YAML

    Returns:
        One ``"<dotted.path>: <problem>"`` string per error, empty when valid
    """
    try:
        AppConfig(**(data or {}))
    except ValidationError as e:
        return [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
    return []


class ConfigManager:
    """Manages application configuration loading and validation."""

    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional directory holding the configuration files
            environment: Environment name (development, staging, production, test)
        """
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or os.getenv('CHRONOSCAN_ENV', 'development')
        self._config: Optional[AppConfig] = None
        self._lock = threading.RLock()
        self.logger = LoggingManager.get_logger(__name__)

        # Configuration file paths
        self.config_files = self._get_config_files()

    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        config_locations = [
            Path("config"),
            Path.home() / ".chronoscan",
            Path("/etc/chronoscan"),
        ]

        for location in config_locations:
            if location.exists() and location.is_dir():
                return location

        return Path("config")

    def _get_config_files(self) -> Dict[str, Path]:
        """Get configuration file paths for hierarchical loading."""
        base_dir = self.config_base_path

        return {
            'default': base_dir / 'default_config.yaml',
            'environment': base_dir / f'{self.environment}.yaml',
            'local': base_dir / 'local.yaml'
        }

    @property
    def config(self) -> AppConfig:
        return self.load_config()

    def load_config(self) -> AppConfig:
        """Load and validate configuration with hierarchical overrides.

        Files are merged in the order default, environment, local; environment
        variables of the form ``CHRONOSCAN_<SECTION>_<KEY>`` are applied last.

        Returns:
            Validated application configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        with self._lock:
            if self._config:
                return self._config

            config_data: Dict[str, Any] = {}

            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    self._deep_merge(config_data, self._load_yaml_file(config_file))

            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)

            config_data.setdefault('environment', self.environment)

            try:
                self._config = AppConfig(**config_data)
            except ValidationError as e:
                self.logger.error(f"Configuration validation failed: {e}")
                raise ConfigurationError(f"Invalid configuration: {e}") from e

            return self._config

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file.

        Returns:
            Configuration dictionary
        """
        try:
            with open(file_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {file_path} must be a mapping")
        return data

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.

        Environment variables follow pattern: CHRONOSCAN_<SECTION>_<KEY>
        Example: CHRONOSCAN_PARSING_FORMAT_PREFERENCE -> parsing.format_preference
        """
        overrides: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            # Section is the first word; the key keeps its own underscores
            remainder = key[len(ENV_PREFIX):].lower()
            if '_' not in remainder:
                continue
            section, option = remainder.split('_', 1)

            overrides.setdefault(section, {})[option] = self._convert_env_value(value)

        return overrides

    def _convert_env_value(self, value: str) -> Union[str, int, float, bool, None]:
        """Convert environment variable string to appropriate type."""
        lowered = value.lower()
        if lowered in ('true', 'false'):
            return lowered == 'true'
        if lowered in ('', 'null', 'none'):
            return None

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(self, base_dict: Dict[str, Any], update_dict: Dict[str, Any]):
        """Recursively merge nested dictionaries."""
        for key, value in update_dict.items():
            if isinstance(value, dict) and key in base_dict and isinstance(base_dict[key], dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value

    def update_config(self, updates: Dict[str, Any]) -> AppConfig:
        """Update configuration with new values.

        Args:
            updates: Nested dictionary of configuration updates

        Returns:
            Updated configuration

        Raises:
            ConfigurationError: If the updated configuration is invalid; the
                previous configuration stays in place
        """
        with self._lock:
            config_dict = self.load_config().model_dump()
            self._deep_merge(config_dict, updates)

            try:
                self._config = AppConfig(**config_dict)
            except ValidationError as e:
                self.logger.error(f"Failed to update configuration: {e}")
                raise ConfigurationError(f"Invalid configuration update: {e}") from e

            changes = self._get_config_changes(config_dict, updates)
            if changes:
                self.logger.info(f"Configuration changes: {changes}")
            return self._config

    def _get_config_changes(self, config_dict: Dict[str, Any], updates: Dict[str, Any],
                            prefix: str = "") -> List[str]:
        """List the dotted paths touched by ``updates``."""
        changes = []
        for key, value in updates.items():
            current_path = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                changes.extend(self._get_config_changes(config_dict.get(key, {}), value, current_path))
            else:
                changes.append(f"{current_path} -> {value}")
        return changes

    def reload_config(self) -> AppConfig:
        """Reload configuration from files, keeping the old one on failure."""
        self.logger.info("Reloading configuration...")
        with self._lock:
            old_config = self._config
            self._config = None
            try:
                return self.load_config()
            except ConfigurationError:
                self._config = old_config
                raise

    def save_config(self, target: str = "local"):
        """Save current configuration to file.

        Args:
            target: Which config file to save to ('default', 'environment', 'local')
        """
        with self._lock:
            if not self._config:
                raise ConfigurationError("No configuration loaded")

            if target not in self.config_files:
                raise ConfigurationError(f"Invalid target: {target}")

            target_file = self.config_files[target]
            self._write_yaml(target_file, self._config.model_dump(mode='json'))
            self.logger.info(f"Configuration saved to {target_file}")

    def export_config(self, file_path: Path) -> bool:
        """Export current configuration to file.

        Args:
            file_path: Path to export configuration

        Returns:
            True if export successful
        """
        try:
            config_dict = self.load_config().model_dump(mode='json')
            self._write_yaml(Path(file_path), config_dict)
        except OSError as e:
            self.logger.error(f"Failed to export configuration: {e}")
            return False

        self.logger.info(f"Configuration exported to {file_path}")
        return True

    def _write_yaml(self, target_file: Path, data: Dict[str, Any]):
        target_file.parent.mkdir(parents=True, exist_ok=True)
        with open(target_file, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def configure_logging(self):
        """Apply the logging section to :class:`LoggingManager`."""
        settings = self.load_config().logging
        LoggingManager().configure(
            level=settings.level,
            log_to_console=settings.log_to_console,
            log_to_file=settings.log_to_file,
            log_dir=Path(settings.log_dir)
        )

    def apply(self) -> TemporalExtractor:
        """Push the parsing section into the process-wide default date.

        Returns:
            Extractor using the configured format preference
        """
        config = self.load_config()
        parsing = config.parsing

        if parsing.default_date is not None:
            set_default_date(parsing.default_date)
        if parsing.use_current_date is not None:
            set_use_current_date_as_default(parsing.use_current_date)

        self.logger.debug(
            f"Applied parsing config: {parsing.format_preference}, "
            f"default_date={parsing.default_date}, use_current_date={parsing.use_current_date}"
        )
        return TemporalExtractor(format_preference=config.format_preference)
