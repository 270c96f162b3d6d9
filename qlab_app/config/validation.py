"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..utils.time import resolve_timezone

VALID_MODES = ("absolute", "relative")
VALID_ANCHORS = ("right", "date")
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_benchmark_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate benchmark source parameters."""
        errors = []

        if "source_path" in params:
            value = params["source_path"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="source_path",
                    message="Must be a non-empty path",
                    value=value
                ))

        if "timestamp_format" in params:
            value = params["timestamp_format"]
            if not isinstance(value, str) or "%" not in value:
                errors.append(ValidationError(
                    field="timestamp_format",
                    message="Must be a strptime format string",
                    value=value
                ))

        if "timezone" in params:
            value = params["timezone"]
            try:
                if not isinstance(value, str):
                    raise TypeError(value)
                resolve_timezone(value)
            except (KeyError, ValueError, TypeError):
                errors.append(ValidationError(
                    field="timezone",
                    message="Must be a known IANA timezone name",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_alignment_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate alignment parameters."""
        errors = []

        if "default_anchor" in params:
            value = params["default_anchor"]
            if value not in VALID_ANCHORS:
                errors.append(ValidationError(
                    field="default_anchor",
                    message=f"Must be one of {', '.join(VALID_ANCHORS)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_chart_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate chart composition parameters."""
        errors = []

        if "default_mode" in params:
            value = params["default_mode"]
            if value not in VALID_MODES:
                errors.append(ValidationError(
                    field="default_mode",
                    message=f"Must be one of {', '.join(VALID_MODES)}",
                    value=value
                ))

        if "default_window" in params:
            value = params["default_window"]
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                errors.append(ValidationError(
                    field="default_window",
                    message="Must be a non-negative integer or null",
                    value=value
                ))

        if "percent_scale" in params:
            value = params["percent_scale"]
            if not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="percent_scale",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in VALID_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(VALID_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        sections = {
            "benchmark": ConfigValidator.validate_benchmark_params,
            "alignment": ConfigValidator.validate_alignment_params,
            "chart": ConfigValidator.validate_chart_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        for section, validate in sections.items():
            if section not in config:
                continue

            params = config[section]
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping of parameters",
                    value=params
                ))
                continue

            errors.extend(validate(params))

        return errors
