"""
Canonical data models for the benchmark timeline and strategy comparisons.

This module defines immutable data structures shared between the loader,
the store, the aligner and the chart composer. A BenchmarkSeries is built
once and then only ever replaced as a whole, never edited.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..errors import MalformedDataError
from ..utils.time import coerce_date, format_trading_date


class AnchorPolicy(str, Enum):
    """Rule used to place a strategy series on the benchmark's date axis."""
    RIGHT = "right"    # Last strategy point sits on the latest trading day
    DATE = "date"      # Strategy carries its own start/end trading dates


class ChartMode(str, Enum):
    """Presentation form of a composed chart."""
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


@dataclass(frozen=True)
class BenchmarkPoint:
    """Index value recorded on one trading day."""
    trading_date: date     # Calendar date in the benchmark timezone
    index_value: float     # Rounded to float32 precision on load


@dataclass(frozen=True)
class BenchmarkSeries:
    """
    Chronologically ascending benchmark timeline.

    Dates are strictly increasing, so no date appears twice. The
    date_to_position index maps each trading date to its zero-based position
    and is the join key used when aligning strategy series.
    """
    points: tuple[BenchmarkPoint, ...] = ()
    date_to_position: Mapping[date, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Freeze the points and build the date index."""
        points = tuple(self.points)
        for prev, curr in zip(points, points[1:]):
            if curr.trading_date <= prev.trading_date:
                raise ValueError(
                    f"Benchmark dates must be strictly increasing: "
                    f"{prev.trading_date} followed by {curr.trading_date}"
                )

        object.__setattr__(self, "points", points)
        object.__setattr__(
            self,
            "date_to_position",
            MappingProxyType({p.trading_date: i for i, p in enumerate(points)}),
        )

    def __len__(self) -> int:
        return len(self.points)

    @property
    def dates(self) -> tuple[date, ...]:
        return tuple(p.trading_date for p in self.points)

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(p.index_value for p in self.points)

    @property
    def first_date(self) -> Optional[date]:
        """Earliest trading date, None for an empty series."""
        return self.points[0].trading_date if self.points else None

    @property
    def last_date(self) -> Optional[date]:
        """Most recent trading date, None for an empty series."""
        return self.points[-1].trading_date if self.points else None


@dataclass(frozen=True)
class StrategyReturnSeries:
    """
    Strategy performance over a contiguous span of trading days.

    Values are oldest first. Dates are optional: without an end date the
    series can only be right-anchored.
    """
    values: tuple[float, ...] = ()
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    quant_id: Optional[Any] = None

    def __post_init__(self):
        """Normalize inputs and reject values that cannot be charted."""
        if isinstance(self.values, (str, bytes)):
            raise MalformedDataError(
                "Strategy values must be a sequence of numbers, not a string",
                raw_data=repr(self.values)[:200],
                expected_format="sequence of numbers",
            )

        try:
            values = tuple(float(v) for v in self.values)
        except (TypeError, ValueError) as e:
            raise MalformedDataError(
                f"Strategy values must be numeric: {e}",
                raw_data=repr(self.values)[:200],
                expected_format="sequence of numbers",
            )

        bad = [i for i, v in enumerate(values) if not math.isfinite(v)]
        if bad:
            raise MalformedDataError(
                f"Strategy values must be finite, got non-finite value at index {bad[0]}",
                expected_format="sequence of finite numbers",
                context={"non_finite_positions": bad[:10]},
            )

        object.__setattr__(self, "values", values)
        for name in ("start_date", "end_date"):
            raw = getattr(self, name)
            if raw is None:
                continue
            try:
                object.__setattr__(self, name, coerce_date(raw))
            except (TypeError, ValueError) as e:
                raise MalformedDataError(
                    f"Invalid {name} '{raw}': {e}",
                    raw_data=str(raw),
                    expected_format="YYYY-MM-DD",
                )

        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise MalformedDataError(
                f"start_date {self.start_date} is after end_date {self.end_date}",
                context={"start_date": str(self.start_date), "end_date": str(self.end_date)},
            )

    def __len__(self) -> int:
        return len(self.values)

    @property
    def has_dates(self) -> bool:
        """True when the series can be date-anchored."""
        return self.end_date is not None


@dataclass(frozen=True)
class AlignedComparison:
    """Benchmark and strategy values covering the same trading days."""
    benchmark_values: tuple[float, ...] = ()
    strategy_values: tuple[float, ...] = ()
    dates: tuple[date, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "benchmark_values", tuple(self.benchmark_values))
        object.__setattr__(self, "strategy_values", tuple(self.strategy_values))
        object.__setattr__(self, "dates", tuple(self.dates))

        if len(self.benchmark_values) != len(self.strategy_values):
            raise ValueError(
                f"Aligned series lengths differ: benchmark={len(self.benchmark_values)}, "
                f"strategy={len(self.strategy_values)}"
            )
        if self.dates and len(self.dates) != len(self.benchmark_values):
            raise ValueError("Aligned dates must match the aligned series length")

    def __len__(self) -> int:
        return len(self.benchmark_values)


@dataclass(frozen=True)
class AlignmentResult:
    """Aligned comparison plus the metadata reported alongside it."""
    comparison: AlignedComparison
    anchor: AnchorPolicy
    truncated_points: int = 0
    aligned_start_date: Optional[date] = None
    aligned_end_date: Optional[date] = None
    quant_id: Optional[Any] = None

    @property
    def truncated(self) -> bool:
        return self.truncated_points > 0


@dataclass(frozen=True)
class ChartPayload:
    """Presentation-ready parallel arrays for one chart."""
    mode: ChartMode
    benchmark: tuple[float, ...]
    strategy: tuple[float, ...]
    dates: tuple[date, ...] = ()
    truncated_points: int = 0
    aligned_start_date: Optional[date] = None
    aligned_end_date: Optional[date] = None
    quant_id: Optional[Any] = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view for the presentation layer."""
        return {
            "quant_id": self.quant_id,
            "mode": self.mode.value,
            "benchmark": list(self.benchmark),
            "strategy": list(self.strategy),
            "dates": [format_trading_date(d) for d in self.dates],
            "truncated_points": self.truncated_points,
            "aligned_start_date": (
                format_trading_date(self.aligned_start_date) if self.aligned_start_date else None
            ),
            "aligned_end_date": (
                format_trading_date(self.aligned_end_date) if self.aligned_end_date else None
            ),
        }
