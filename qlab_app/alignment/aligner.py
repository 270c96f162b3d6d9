"""Alignment of strategy return series onto the benchmark timeline"""

from typing import Optional, Sequence, Union

import structlog

from ..data.models import (
    AlignedComparison,
    AlignmentResult,
    AnchorPolicy,
    BenchmarkSeries,
    StrategyReturnSeries,
)
from ..data.store import BenchmarkStore
from ..errors import DateNotFoundError, MalformedDataError
from ..logging.config import get_benchmark_logger, log_truncation

logger = structlog.get_logger(__name__)
benchmark_logger = get_benchmark_logger(__name__)


class SeriesAligner:
    """
    Maps strategy series onto the benchmark so both can be compared point for point.

    Each call works on one snapshot of the store, so a concurrent reload
    never mixes two benchmark versions into a single comparison.
    """

    def __init__(self, store: BenchmarkStore, default_anchor: Union[AnchorPolicy, str] = AnchorPolicy.RIGHT):
        self.store = store
        self.default_anchor = AnchorPolicy(default_anchor)

    def align(self, strategy: Union[StrategyReturnSeries, Sequence[float]],
              anchor: Optional[Union[AnchorPolicy, str]] = None) -> AlignmentResult:
        """
        Align a strategy series with the benchmark.

        Args:
            strategy: Strategy values, oldest first. A bare sequence is
                treated as an undated series.
            anchor: AnchorPolicy.RIGHT pins the last strategy point to the
                latest trading day. AnchorPolicy.DATE pins it to the
                strategy's own end_date. Defaults to the aligner's default.

        Returns:
            AlignmentResult. When the strategy is longer than the benchmark
            window its oldest points are dropped and counted in
            truncated_points.

        Raises:
            DateNotFoundError: If a date-anchored series names a date that is
                not on the benchmark timeline
            MalformedDataError: If a date-anchored series has no end date or
                its dates disagree with its length
        """
        if not isinstance(strategy, StrategyReturnSeries):
            strategy = StrategyReturnSeries(values=tuple(strategy))

        try:
            anchor = AnchorPolicy(anchor) if anchor is not None else self.default_anchor
        except ValueError:
            raise MalformedDataError(
                f"Unknown anchor policy {anchor!r}",
                raw_data=repr(anchor),
                expected_format=" or ".join(p.value for p in AnchorPolicy),
            )

        series = self.store.snapshot
        length = len(strategy)

        if length == 0:
            return AlignmentResult(
                comparison=AlignedComparison(),
                anchor=anchor,
                quant_id=strategy.quant_id,
            )

        if anchor is AnchorPolicy.DATE:
            end_pos = self._date_anchored_end(strategy, series)
        else:
            end_pos = len(series) - 1

        available = end_pos + 1
        kept = min(length, available)
        truncated = length - kept

        if truncated:
            log_truncation(
                benchmark_logger,
                dropped_points=truncated,
                strategy_length=length,
                benchmark_length=available,
                quant_id=strategy.quant_id,
            )

        if kept == 0:
            return AlignmentResult(
                comparison=AlignedComparison(),
                anchor=anchor,
                truncated_points=truncated,
                quant_id=strategy.quant_id,
            )

        window = series.points[available - kept:available]
        comparison = AlignedComparison(
            benchmark_values=tuple(p.index_value for p in window),
            strategy_values=strategy.values[length - kept:],
            dates=tuple(p.trading_date for p in window),
        )

        logger.debug(
            "Strategy series aligned",
            quant_id=strategy.quant_id,
            anchor=anchor.value,
            points=kept,
            truncated_points=truncated,
        )

        return AlignmentResult(
            comparison=comparison,
            anchor=anchor,
            truncated_points=truncated,
            aligned_start_date=window[0].trading_date,
            aligned_end_date=window[-1].trading_date,
            quant_id=strategy.quant_id,
        )

    def _date_anchored_end(self, strategy: StrategyReturnSeries, series: BenchmarkSeries) -> int:
        """Benchmark position of a date-anchored strategy's last point."""
        if not strategy.has_dates:
            raise MalformedDataError(
                "Date-anchored alignment requires an end date",
                context={"quant_id": strategy.quant_id},
            )

        end_pos = series.date_to_position.get(strategy.end_date)
        if end_pos is None:
            benchmark_logger.warning(
                "Alignment end date not on benchmark timeline",
                quant_id=strategy.quant_id,
                end_date=str(strategy.end_date),
            )
            raise DateNotFoundError(
                f"No benchmark data for end date {strategy.end_date}",
                requested_date=strategy.end_date,
                context={"first_date": str(series.first_date), "last_date": str(series.last_date)},
            )

        start = strategy.start_date
        if start is None:
            return end_pos

        if start < series.first_date:
            # Older than the benchmark: only valid if there is an excess to truncate
            if len(strategy) <= end_pos + 1:
                raise MalformedDataError(
                    f"Strategy has {len(strategy)} points but claims to start at {start}, "
                    f"before the benchmark's first trading date {series.first_date}",
                    context={"quant_id": strategy.quant_id, "points": len(strategy),
                             "available": end_pos + 1},
                )
            return end_pos

        start_pos = series.date_to_position.get(start)
        if start_pos is None:
            benchmark_logger.warning(
                "Alignment start date not on benchmark timeline",
                quant_id=strategy.quant_id,
                start_date=str(start),
            )
            raise DateNotFoundError(
                f"No benchmark data for start date {start}",
                requested_date=start,
                context={"first_date": str(series.first_date), "last_date": str(series.last_date)},
            )

        span = end_pos - start_pos + 1
        if span != len(strategy):
            raise MalformedDataError(
                f"Strategy has {len(strategy)} points but {start}..{strategy.end_date} "
                f"spans {span} trading days",
                context={"quant_id": strategy.quant_id, "points": len(strategy), "trading_days": span},
            )

        return end_pos
