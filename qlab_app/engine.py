"""
Benchmark service coordinator.

Wires the loader, store, aligner and chart composer together behind the
calls the quant lifecycle layer makes: load the benchmark at startup, serve
raw benchmark windows, align strategy series and compose comparison charts.
"""

from pathlib import Path
from typing import Any, Optional, Sequence, Union

import structlog

from .alignment.aligner import SeriesAligner
from .charts.composer import ChartComposer
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import (
    AlignedComparison,
    AlignmentResult,
    AnchorPolicy,
    BenchmarkSeries,
    ChartMode,
    ChartPayload,
    StrategyReturnSeries,
)
from .data.parsers import BenchmarkSource
from .data.store import BenchmarkStore
from .errors import FatalLoadError
from .logging.config import configure_logging, get_benchmark_logger

logger = structlog.get_logger(__name__)
benchmark_logger = get_benchmark_logger(__name__)


class BenchmarkService:
    """
    In-process entry point for benchmark charts and strategy comparisons.

    Pipeline:
    Source file → Loader → Store snapshot → Aligner → Composer → Chart payload
    """

    def __init__(self, config: Optional[DefaultConfig] = None,
                 config_dir: Optional[Union[str, Path]] = None,
                 store: Optional[BenchmarkStore] = None) -> None:
        """Initialize the service. Nothing is loaded until load_benchmark()."""
        if config is None:
            config = ConfigLoader.create(Path(config_dir) if config_dir else None).load()

        self.config = config
        self.logger = logger
        self.store = store if store is not None else BenchmarkStore()
        self.aligner = SeriesAligner(self.store, default_anchor=config.alignment.default_anchor)
        self.composer = ChartComposer(percent_scale=config.chart.percent_scale)

    @classmethod
    def start(cls, config_dir: Optional[Union[str, Path]] = None,
              overrides: Optional[dict[str, Any]] = None,
              source: Optional[BenchmarkSource] = None) -> "BenchmarkService":
        """
        Build a ready-to-serve service: validate config, configure logging, load.

        Raises:
            FatalLoadError: If the configuration is invalid or the benchmark
                source cannot be loaded. The process must not serve traffic.
        """
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        merged = loader.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            logger.critical("Invalid benchmark configuration", errors=error_msgs)
            raise FatalLoadError(
                f"Invalid configuration: {'; '.join(error_msgs)}",
                context={"errors": error_msgs},
            )

        try:
            config = loader.load(overrides)
        except TypeError as e:
            logger.critical("Unknown benchmark configuration key", error=str(e))
            raise FatalLoadError(f"Invalid configuration: {e}")

        configure_logging(level=config.logging.level, format_json=config.logging.format_json)

        service = cls(config=config)
        service.load_benchmark(source)
        return service

    def load_benchmark(self, source: Optional[BenchmarkSource] = None) -> BenchmarkSeries:
        """
        Load (or reload) the benchmark and publish it to the store.

        Args:
            source: Path or text handle; defaults to the configured source path

        Raises:
            FatalLoadError: If the source is unreadable or malformed
        """
        if source is None:
            source = self.config.benchmark.source_path

        series = self.store.reload(
            source,
            timestamp_format=self.config.benchmark.timestamp_format,
            timezone=self.config.benchmark.timezone,
        )
        benchmark_logger.info(
            "Benchmark ready",
            points=len(series),
            last_date=str(series.last_date) if series.last_date else None,
        )
        return series

    reload = load_benchmark

    def get_benchmark_window(self, n: Optional[int] = None) -> tuple[float, ...]:
        """
        Most recent benchmark values, oldest first.

        Args:
            n: Window size; None falls back to the configured default window,
               and to the whole series when that is unset too
        """
        if n is None:
            n = self.config.chart.default_window

        if n is None:
            return self.store.snapshot.values
        return tuple(p.index_value for p in self.store.latest(n))

    def align_series(self, strategy: Union[StrategyReturnSeries, Sequence[float]],
                     anchor: Optional[Union[AnchorPolicy, str]] = None) -> AlignmentResult:
        """Align a strategy series with the benchmark timeline."""
        return self.aligner.align(strategy, anchor)

    def compose(self, aligned: Union[AlignmentResult, AlignedComparison],
                mode: Optional[Union[ChartMode, str]] = None) -> ChartPayload:
        """Shape an aligned comparison into a chart payload."""
        if mode is None:
            mode = self.config.chart.default_mode
        return self.composer.compose(aligned, mode)

    def compare(self, strategy: Union[StrategyReturnSeries, Sequence[float]],
                anchor: Optional[Union[AnchorPolicy, str]] = None,
                mode: Optional[Union[ChartMode, str]] = None) -> ChartPayload:
        """Align and compose in one call."""
        return self.compose(self.align_series(strategy, anchor), mode)
