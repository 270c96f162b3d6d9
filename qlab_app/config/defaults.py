"""Default configuration parameters for the benchmark engine."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).parent.parent.parent


@dataclass(frozen=True)
class BenchmarkParams:
    """Benchmark source file parameters."""
    source_path: str = str(PROJECT_ROOT / "data" / "kospi.csv")
    timestamp_format: str = "%Y-%m-%dT%H:%M:%S.%fZ"   # date, time, millis, UTC marker
    timezone: str = "UTC"                              # Calendar used for trading dates


@dataclass(frozen=True)
class AlignmentParams:
    """Series alignment parameters."""
    default_anchor: str = "right"                      # "right" or "date"


@dataclass(frozen=True)
class ChartParams:
    """Chart composition parameters."""
    default_mode: str = "relative"                     # "absolute" or "relative"
    default_window: Optional[int] = None               # None serves the whole series
    percent_scale: float = 100.0                       # 100.0 -> percent, 1.0 -> fraction


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    benchmark: BenchmarkParams
    alignment: AlignmentParams
    chart: ChartParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        benchmark=BenchmarkParams(),
        alignment=AlignmentParams(),
        chart=ChartParams(),
        logging=LoggingParams(),
    )
