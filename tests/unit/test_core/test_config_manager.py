"""
Unit tests for ConfigManager: hierarchical loading, environment overrides,
validation and applying the parsing section.
"""

from datetime import date, datetime

import pytest
import yaml

from chronoscan.core.config_manager import AppConfig, ConfigManager, validate_config
from chronoscan.core.error_handler import ConfigurationError
from chronoscan.processors.core.defaults import default_date_settings
from chronoscan.processors.core.models import FormatPreference
from tests.fixtures.sample_data import SAMPLE_CONFIGURATIONS


class TestConfigManager:
    """Test suite for ConfigManager"""

    @pytest.mark.unit
    def test_defaults_without_files(self, tmp_path):
        config = ConfigManager(config_path=tmp_path).load_config()

        assert isinstance(config, AppConfig)
        assert config.parsing.format_preference == "day_first"
        assert config.parsing.use_current_date is None
        assert config.environment == "test"

    @pytest.mark.unit
    def test_loads_default_file(self, temp_config_dir):
        config = ConfigManager(config_path=temp_config_dir).load_config()

        assert config.app_name == "chronoscan-test"
        assert config.logging.level == "WARNING"

    @pytest.mark.unit
    def test_environment_file_overrides_default(self, temp_config_dir, write_config):
        write_config("test.yaml", SAMPLE_CONFIGURATIONS["us"])

        config = ConfigManager(config_path=temp_config_dir).load_config()

        assert config.app_name == "chronoscan-test"
        assert config.format_preference is FormatPreference.MONTH_FIRST
        assert config.parsing.default_date == date(2020, 1, 1)
        assert not config.parsing.use_current_date

    @pytest.mark.unit
    def test_local_file_wins_over_environment_file(self, temp_config_dir, write_config):
        write_config("test.yaml", SAMPLE_CONFIGURATIONS["us"])
        write_config("local.yaml", {"parsing": {"format_preference": "DAY-FIRST"}})

        config = ConfigManager(config_path=temp_config_dir).load_config()

        assert config.format_preference is FormatPreference.DAY_FIRST
        assert config.parsing.default_date == date(2020, 1, 1)

    @pytest.mark.unit
    def test_env_overrides(self, temp_config_dir, monkeypatch):
        monkeypatch.setenv("CHRONOSCAN_PARSING_FORMAT_PREFERENCE", "month_first")
        monkeypatch.setenv("CHRONOSCAN_PARSING_DEFAULT_DATE", "2021-03-04")
        monkeypatch.setenv("CHRONOSCAN_PARSING_USE_CURRENT_DATE", "false")
        monkeypatch.setenv("CHRONOSCAN_LOGGING_LEVEL", "debug")

        config = ConfigManager(config_path=temp_config_dir).load_config()

        assert config.format_preference is FormatPreference.MONTH_FIRST
        assert config.parsing.default_date == date(2021, 3, 4)
        assert not config.parsing.use_current_date
        assert config.logging.level == "DEBUG"
        assert not config.logging.log_to_console

    @pytest.mark.unit
    def test_environment_from_env_var(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CHRONOSCAN_ENV", "production")

        manager = ConfigManager(config_path=tmp_path)

        assert manager.environment == "production"
        assert manager.config_files["environment"] == tmp_path / "production.yaml"

    @pytest.mark.unit
    def test_invalid_values_raise(self, temp_config_dir, write_config):
        write_config("local.yaml", SAMPLE_CONFIGURATIONS["invalid"])

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=temp_config_dir).load_config()

    @pytest.mark.unit
    def test_invalid_yaml_raises(self, temp_config_dir):
        (temp_config_dir / "local.yaml").write_text("parsing: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=temp_config_dir).load_config()

    @pytest.mark.unit
    def test_non_mapping_yaml_raises(self, temp_config_dir):
        (temp_config_dir / "local.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=temp_config_dir).load_config()

    @pytest.mark.unit
    def test_config_is_cached(self, temp_config_dir):
        manager = ConfigManager(config_path=temp_config_dir)

        assert manager.load_config() is manager.config

    @pytest.mark.unit
    def test_update_config(self, temp_config_dir):
        manager = ConfigManager(config_path=temp_config_dir)
        config = manager.update_config({"parsing": {"format_preference": "month_first"}})

        assert config.format_preference is FormatPreference.MONTH_FIRST
        assert config.app_name == "chronoscan-test"

    @pytest.mark.unit
    def test_invalid_update_keeps_previous(self, temp_config_dir):
        manager = ConfigManager(config_path=temp_config_dir)
        before = manager.load_config()

        with pytest.raises(ConfigurationError):
            manager.update_config({"logging": {"level": "LOUD"}})

        assert manager.config is before

    @pytest.mark.unit
    def test_reload_picks_up_changes(self, temp_config_dir, write_config):
        manager = ConfigManager(config_path=temp_config_dir)
        assert manager.load_config().format_preference is FormatPreference.DAY_FIRST

        write_config("local.yaml", {"parsing": {"format_preference": "month_first"}})

        assert manager.reload_config().format_preference is FormatPreference.MONTH_FIRST

    @pytest.mark.unit
    def test_failed_reload_keeps_previous(self, temp_config_dir, write_config):
        manager = ConfigManager(config_path=temp_config_dir)
        before = manager.load_config()

        write_config("local.yaml", SAMPLE_CONFIGURATIONS["invalid"])

        with pytest.raises(ConfigurationError):
            manager.reload_config()
        assert manager.config is before

    @pytest.mark.unit
    def test_save_and_export(self, temp_config_dir, tmp_path):
        manager = ConfigManager(config_path=temp_config_dir)
        manager.update_config({"parsing": {"default_date": "2020-01-01"}})
        manager.save_config("local")

        with open(temp_config_dir / "local.yaml") as f:
            saved = yaml.safe_load(f)
        assert str(saved["parsing"]["default_date"]) == "2020-01-01"

        export_path = tmp_path / "export" / "config.yaml"
        assert manager.export_config(export_path)
        assert export_path.exists()

    @pytest.mark.unit
    def test_save_requires_loaded_config(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=tmp_path).save_config()

    @pytest.mark.unit
    def test_save_rejects_unknown_target(self, tmp_path):
        manager = ConfigManager(config_path=tmp_path)
        manager.load_config()

        with pytest.raises(ConfigurationError):
            manager.save_config("user")

    @pytest.mark.unit
    def test_apply_sets_default_date(self, temp_config_dir, write_config):
        write_config("test.yaml", SAMPLE_CONFIGURATIONS["us"])

        extractor = ConfigManager(config_path=temp_config_dir).apply()

        assert extractor.format_preference is FormatPreference.MONTH_FIRST
        assert default_date_settings.snapshot().resolve() == date(2020, 1, 1)
        assert extractor.parse_date_only("01/02/2012") == date(2012, 1, 2)

    @pytest.mark.unit
    def test_apply_with_current_date(self, temp_config_dir):
        ConfigManager(config_path=temp_config_dir).apply()

        assert default_date_settings.snapshot().use_current_date

    @pytest.mark.unit
    def test_apply_default_date_alone(self, temp_config_dir, write_config):
        write_config("local.yaml", {"parsing": {"default_date": "2020-01-01"}})

        extractor = ConfigManager(config_path=temp_config_dir).apply()

        assert not default_date_settings.snapshot().use_current_date
        assert extractor.parse_date_or_time("14:30") == datetime(2020, 1, 1, 14, 30)

    @pytest.mark.unit
    def test_apply_explicit_current_date_wins(self, temp_config_dir, write_config):
        write_config("local.yaml", {"parsing": {"default_date": "2020-01-01", "use_current_date": True}})

        ConfigManager(config_path=temp_config_dir).apply()

        assert default_date_settings.snapshot().resolve() == date.today()


class TestValidateConfig:
    """Test suite for validate_config"""

    @pytest.mark.unit
    def test_valid(self):
        assert validate_config(SAMPLE_CONFIGURATIONS["default"]) == []
        assert validate_config({}) == []

    @pytest.mark.unit
    def test_errors_name_the_field(self):
        errors = validate_config(SAMPLE_CONFIGURATIONS["invalid"])

        assert len(errors) == 2
        assert any(error.startswith("parsing.format_preference:") for error in errors)
        assert any(error.startswith("logging.level:") for error in errors)

    @pytest.mark.unit
    def test_bad_date(self):
        errors = validate_config({"parsing": {"default_date": "not-a-date"}})

        assert len(errors) == 1
        assert errors[0].startswith("parsing.default_date:")
