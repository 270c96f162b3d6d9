"""Chart composer shaping aligned comparisons for the presentation layer"""

import math
from typing import Optional, Union

import numpy as np
import structlog

from ..data.models import AlignedComparison, AlignmentResult, ChartMode, ChartPayload
from ..errors import InvalidBaselineError, MalformedDataError

logger = structlog.get_logger(__name__)


class ChartComposer:
    """
    Turns aligned comparisons into parallel chart arrays.

    Absolute charts pass values through. Relative charts rebase both series
    to 0 at the first aligned point, since index levels and strategy
    returns are in different units.
    """

    def __init__(self, percent_scale: float = 100.0):
        self.percent_scale = percent_scale

    def absolute(self, comparison: AlignedComparison) -> ChartPayload:
        """Benchmark and strategy values as given."""
        return ChartPayload(
            mode=ChartMode.ABSOLUTE,
            benchmark=comparison.benchmark_values,
            strategy=comparison.strategy_values,
            dates=comparison.dates,
        )

    def relative_to_baseline(self, comparison: AlignedComparison) -> ChartPayload:
        """
        Percentage change of each series from its first aligned value.

        Raises:
            InvalidBaselineError: If either first value is zero or not finite
        """
        return ChartPayload(
            mode=ChartMode.RELATIVE,
            benchmark=self._rebase(comparison.benchmark_values, "benchmark"),
            strategy=self._rebase(comparison.strategy_values, "strategy"),
            dates=comparison.dates,
        )

    def compose(self, aligned: Union[AlignmentResult, AlignedComparison],
                mode: Optional[Union[ChartMode, str]] = None) -> ChartPayload:
        """
        Compose a chart in the requested mode.

        Alignment metadata (truncation count, aligned dates, quant id) is
        carried onto the payload when an AlignmentResult is given.
        """
        try:
            mode = ChartMode(mode) if mode is not None else ChartMode.RELATIVE
        except ValueError:
            raise MalformedDataError(
                f"Unknown chart mode {mode!r}",
                raw_data=repr(mode),
                expected_format=" or ".join(m.value for m in ChartMode),
            )

        comparison = aligned.comparison if isinstance(aligned, AlignmentResult) else aligned

        if mode is ChartMode.ABSOLUTE:
            payload = self.absolute(comparison)
        else:
            payload = self.relative_to_baseline(comparison)

        if not isinstance(aligned, AlignmentResult):
            return payload

        return ChartPayload(
            mode=payload.mode,
            benchmark=payload.benchmark,
            strategy=payload.strategy,
            dates=payload.dates,
            truncated_points=aligned.truncated_points,
            aligned_start_date=aligned.aligned_start_date,
            aligned_end_date=aligned.aligned_end_date,
            quant_id=aligned.quant_id,
        )

    def _rebase(self, values: tuple[float, ...], series_name: str) -> tuple[float, ...]:
        if not values:
            return ()

        baseline = values[0]
        if baseline is None or not math.isfinite(baseline) or baseline == 0:
            logger.warning("Invalid chart baseline", series=series_name, baseline=baseline)
            raise InvalidBaselineError(
                f"Cannot rebase {series_name} series on baseline {baseline!r}",
                series_name=series_name,
                baseline_value=baseline,
            )

        arr = np.asarray(values, dtype=np.float64)
        rebased = (arr / baseline - 1.0) * self.percent_scale
        return tuple(rebased.tolist())
