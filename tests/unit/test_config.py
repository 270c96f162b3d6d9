"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from qlab_app.config.defaults import get_default_config
from qlab_app.config.loader import ConfigLoader
from qlab_app.config.validation import ConfigValidator


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config.benchmark.timestamp_format == "%Y-%m-%dT%H:%M:%S.%fZ"
        assert config.benchmark.timezone == "UTC"
        assert config.benchmark.source_path.endswith("kospi.csv")
        assert config.chart.percent_scale == 100.0
        assert config.alignment.default_anchor == "right"


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader can be created."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_merge_config_defaults_only(self, tmp_path) -> None:
        """Without settings.yaml the defaults are used."""
        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["chart"]["default_mode"] == "relative"
        assert config["benchmark"]["timezone"] == "UTC"

    def test_settings_file_overrides_defaults(self, tmp_path) -> None:
        """settings.yaml overrides defaults."""
        (tmp_path / "settings.yaml").write_text("benchmark:\n  timezone: Asia/Seoul\n")

        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["benchmark"]["timezone"] == "Asia/Seoul"
        assert config["benchmark"]["timestamp_format"] == "%Y-%m-%dT%H:%M:%S.%fZ"

    def test_call_overrides_win(self, tmp_path) -> None:
        """Call-site overrides beat settings.yaml."""
        (tmp_path / "settings.yaml").write_text("chart:\n  default_mode: absolute\n")

        config = ConfigLoader.create(tmp_path).merge_config({"chart": {"default_mode": "relative"}})

        assert config["chart"]["default_mode"] == "relative"
        assert config["chart"]["percent_scale"] == 100.0

    def test_empty_settings_file(self, tmp_path) -> None:
        """An empty settings.yaml is ignored."""
        (tmp_path / "settings.yaml").write_text("")
        assert ConfigLoader.create(tmp_path).merge_config()["logging"]["level"] == "INFO"

    def test_load_builds_typed_config(self, tmp_path) -> None:
        """load() returns frozen dataclasses."""
        config = ConfigLoader.create(tmp_path).load({"chart": {"default_window": 30}})

        assert config.chart.default_window == 30
        with pytest.raises(AttributeError):
            config.chart.default_window = 10

    def test_bundled_settings_are_valid(self) -> None:
        """The shipped config/settings.yaml passes validation."""
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_config(self) -> None:
        """Defaults are valid."""
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []

    def test_unknown_timezone(self) -> None:
        """Timezones must resolve."""
        errors = ConfigValidator.validate_benchmark_params({"timezone": "Mars/Olympus"})
        assert len(errors) == 1
        assert errors[0].field == "timezone"

    def test_empty_source_path(self) -> None:
        """Source path must be non-empty."""
        errors = ConfigValidator.validate_benchmark_params({"source_path": " "})
        assert errors[0].field == "source_path"

    def test_invalid_mode_and_window(self) -> None:
        """Chart mode and window are checked."""
        errors = ConfigValidator.validate_chart_params({
            "default_mode": "log",
            "default_window": -5,
            "percent_scale": 0,
        })
        assert {e.field for e in errors} == {"default_mode", "default_window", "percent_scale"}

    def test_null_window_is_valid(self) -> None:
        """A null window means the whole series."""
        assert ConfigValidator.validate_chart_params({"default_window": None}) == []

    def test_invalid_anchor(self) -> None:
        """Anchor must be right or date."""
        errors = ConfigValidator.validate_alignment_params({"default_anchor": "left"})
        assert errors[0].field == "default_anchor"

    def test_invalid_logging(self) -> None:
        """Logging level and format flag are checked."""
        errors = ConfigValidator.validate_logging_params({"level": "LOUD", "format_json": "yes"})
        assert {e.field for e in errors} == {"level", "format_json"}

    def test_non_mapping_section(self) -> None:
        """Sections must be mappings."""
        errors = ConfigValidator.validate_config({"benchmark": None, "chart": ["relative"]})
        assert {e.field for e in errors} == {"benchmark", "chart"}
