"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import FatalLoadError
from .defaults import (
    AlignmentParams,
    BenchmarkParams,
    ChartParams,
    DefaultConfig,
    LoggingParams,
    PROJECT_ROOT,
    get_default_config,
)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = PROJECT_ROOT / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_settings_file(self) -> dict[str, Any]:
        """Load deployment overrides from settings.yaml, if present."""
        settings_file = self.config_dir / "settings.yaml"

        if not settings_file.exists():
            return {}

        try:
            with open(settings_file) as f:
                settings = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise FatalLoadError(f"Cannot read {settings_file}: {e}", context={"file": str(settings_file)})

        if settings is None:
            return {}

        if not isinstance(settings, dict):
            raise FatalLoadError(
                f"{settings_file} must contain a mapping, got {type(settings).__name__}",
                context={"file": str(settings_file)},
            )

        return settings

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. settings.yaml overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_settings_file())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge configuration and build the typed config object."""
        merged = self.merge_config(overrides)
        return DefaultConfig(
            benchmark=BenchmarkParams(**merged.get("benchmark", {})),
            alignment=AlignmentParams(**merged.get("alignment", {})),
            chart=ChartParams(**merged.get("chart", {})),
            logging=LoggingParams(**merged.get("logging", {})),
        )

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
