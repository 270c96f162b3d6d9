"""Process-wide benchmark store with atomic snapshot replacement."""

import threading
from datetime import date
from typing import Optional

import structlog

from ..errors import DateNotFoundError, MalformedDataError, PositionOutOfRangeError
from ..utils.time import DateLike, coerce_date
from .models import BenchmarkPoint, BenchmarkSeries
from .parsers import BenchmarkSource, load_benchmark

logger = structlog.get_logger(__name__)


class BenchmarkStore:
    """
    Holds the current BenchmarkSeries and answers read queries against it.

    Readers never lock: every query reads the snapshot reference once and
    works on that immutable object, so a concurrent reload can never expose
    a half-built series. Reloads are serialized among themselves only.
    """

    def __init__(self, series: Optional[BenchmarkSeries] = None):
        self._series = series if series is not None else BenchmarkSeries()
        self._reload_lock = threading.Lock()

    @classmethod
    def from_source(cls, source: BenchmarkSource, **load_kwargs) -> "BenchmarkStore":
        """Build a store from a benchmark file. FatalLoadError propagates."""
        return cls(load_benchmark(source, **load_kwargs))

    @property
    def snapshot(self) -> BenchmarkSeries:
        """Current immutable series."""
        return self._series

    def __len__(self) -> int:
        return len(self._series)

    def length(self) -> int:
        return len(self._series)

    def find_position(self, trading_date: DateLike) -> Optional[int]:
        """Position of a trading date, or None when it is not on the timeline."""
        return self._series.date_to_position.get(self._coerce(trading_date))

    def lookup_by_date(self, trading_date: DateLike) -> int:
        """
        Zero-based position of a trading date.

        Raises:
            DateNotFoundError: If the date is not a benchmark trading date
        """
        series = self._series
        day = self._coerce(trading_date)
        position = series.date_to_position.get(day)

        if position is None:
            raise DateNotFoundError(
                f"No benchmark data for {day}",
                requested_date=day,
                context={"first_date": str(series.first_date), "last_date": str(series.last_date)},
            )
        return position

    def value_at_position(self, position: int) -> float:
        """
        Index value at a zero-based position.

        Raises:
            PositionOutOfRangeError: If position is outside [0, length)
        """
        series = self._series

        if isinstance(position, bool) or not isinstance(position, int) \
                or not 0 <= position < len(series):
            raise PositionOutOfRangeError(
                f"Position {position!r} out of range for benchmark of length {len(series)}",
                position=position if isinstance(position, int) else None,
                length=len(series),
            )
        return series.points[position].index_value

    def latest(self, n: int) -> tuple[BenchmarkPoint, ...]:
        """
        The last n points, oldest first.

        Asking for more points than exist returns the whole series.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise MalformedDataError(
                f"Window size must be a non-negative integer, got {n!r}",
                raw_data=repr(n),
                expected_format="non-negative integer",
            )

        points = self._series.points
        if n == 0:
            return ()
        return points[-n:]

    def replace(self, series: BenchmarkSeries) -> BenchmarkSeries:
        """Publish a prebuilt series. Returns the snapshot it replaced."""
        with self._reload_lock:
            previous = self._series
            self._series = series

        logger.info(
            "Benchmark snapshot swapped",
            previous_length=len(previous),
            new_length=len(series),
            last_date=str(series.last_date) if series.last_date else None,
        )
        return previous

    def reload(self, source: BenchmarkSource, **load_kwargs) -> BenchmarkSeries:
        """
        Build a new snapshot from source and swap it in.

        The new series is fully built before the swap. If loading fails the
        current snapshot stays in place and FatalLoadError propagates.
        """
        series = load_benchmark(source, **load_kwargs)
        self.replace(series)
        return series

    @staticmethod
    def _coerce(trading_date: DateLike) -> date:
        try:
            return coerce_date(trading_date)
        except (TypeError, ValueError) as e:
            raise MalformedDataError(
                f"Invalid trading date {trading_date!r}: {e}",
                raw_data=repr(trading_date),
                expected_format="YYYY-MM-DD",
            )
