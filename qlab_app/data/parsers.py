"""
Benchmark source parsing.

The canonical benchmark file is a two-column CSV of (timestamp, index value)
rows stored newest-first, with timestamps like "2024-01-05T00:00:00.000Z".
This module turns that file into an ascending BenchmarkSeries. Any defect in
the file is fatal: the process must not serve a partial benchmark.
"""

import csv
import math
from datetime import tzinfo
from pathlib import Path
from typing import IO, Iterable, Optional, Sequence, Union

import numpy as np
import structlog

from ..config.defaults import BenchmarkParams
from ..errors import FatalLoadError
from ..utils.time import parse_timestamp, resolve_timezone, to_trading_date
from .models import BenchmarkPoint, BenchmarkSeries

logger = structlog.get_logger(__name__)

BenchmarkSource = Union[str, Path, IO[str]]

_DEFAULTS = BenchmarkParams()


def load_benchmark(source: BenchmarkSource, *,
                   timestamp_format: str = _DEFAULTS.timestamp_format,
                   timezone: str = _DEFAULTS.timezone) -> BenchmarkSeries:
    """
    Load a benchmark series from a file path or an open text handle.

    Args:
        source: Path to the CSV file, or a readable text stream
        timestamp_format: strptime format of the timestamp column
        timezone: Timezone whose calendar defines trading dates

    Returns:
        Ascending BenchmarkSeries with its date index built. An empty source
        yields an empty series.

    Raises:
        FatalLoadError: If the source cannot be read or any row is malformed
    """
    source_name = _describe_source(source)

    try:
        tz = resolve_timezone(timezone)
    except (KeyError, ValueError) as e:
        raise FatalLoadError(f"Unknown benchmark timezone '{timezone}': {e}", source=source_name)

    try:
        if isinstance(source, (str, Path)):
            with open(source, newline="", encoding="utf-8") as f:
                rows = list(csv.reader(f))
        else:
            rows = list(csv.reader(source))
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        logger.critical("Benchmark source unreadable", source=source_name, error=str(e))
        raise FatalLoadError(f"Error reading benchmark source {source_name}: {e}", source=source_name)

    try:
        series = parse_benchmark_rows(rows, timestamp_format=timestamp_format, tz=tz,
                                      source_name=source_name)
    except FatalLoadError as e:
        logger.critical(
            "Benchmark source malformed",
            source=source_name,
            row_number=e.row_number,
            error=str(e),
        )
        raise

    logger.info(
        "Benchmark loaded",
        source=source_name,
        rows=len(series),
        first_date=str(series.first_date) if series.first_date else None,
        last_date=str(series.last_date) if series.last_date else None,
    )
    return series


def parse_benchmark_rows(rows: Iterable[Sequence[str]], *,
                         timestamp_format: str = _DEFAULTS.timestamp_format,
                         tz: Optional[tzinfo] = None,
                         source_name: Optional[str] = None) -> BenchmarkSeries:
    """
    Convert newest-first (timestamp, value) rows into an ascending series.

    Blank rows are skipped. Row numbers in errors are 1-based positions in
    the source, counted in file order.

    Raises:
        FatalLoadError: On a wrong field count, bad timestamp, bad value,
            or a date that is not strictly older than the row above it
    """
    if tz is None:
        tz = resolve_timezone(_DEFAULTS.timezone)

    numbered = [(i, row) for i, row in enumerate(rows, start=1) if row]

    points: list[BenchmarkPoint] = []
    for row_number, row in reversed(numbered):
        point = _parse_benchmark_row(row, row_number, timestamp_format, tz, source_name)

        if points and point.trading_date <= points[-1].trading_date:
            kind = "Duplicate" if point.trading_date == points[-1].trading_date else "Out-of-order"
            raise FatalLoadError(
                f"{kind} trading date {point.trading_date} at row {row_number}",
                source=source_name,
                row_number=row_number,
                raw_row=list(row),
            )

        points.append(point)

    return BenchmarkSeries(points=tuple(points))


def _parse_benchmark_row(row: Sequence[str], row_number: int, timestamp_format: str,
                         tz: tzinfo, source_name: Optional[str]) -> BenchmarkPoint:
    """Parse one (timestamp, value) row into a BenchmarkPoint."""
    if len(row) != 2:
        raise FatalLoadError(
            f"Row {row_number} must have exactly 2 fields, got {len(row)}",
            source=source_name,
            row_number=row_number,
            raw_row=list(row),
        )

    raw_ts, raw_value = row

    try:
        trading_date = to_trading_date(parse_timestamp(raw_ts, timestamp_format), tz)
    except ValueError as e:
        raise FatalLoadError(
            f"Invalid timestamp '{raw_ts}' at row {row_number}: {e}",
            source=source_name,
            row_number=row_number,
            raw_row=list(row),
        )

    try:
        value = np.float32(float(raw_value))
    except ValueError as e:
        raise FatalLoadError(
            f"Invalid index value '{raw_value}' at row {row_number}: {e}",
            source=source_name,
            row_number=row_number,
            raw_row=list(row),
        )

    if not math.isfinite(value):
        raise FatalLoadError(
            f"Index value '{raw_value}' at row {row_number} is not finite in 32-bit precision",
            source=source_name,
            row_number=row_number,
            raw_row=list(row),
        )

    return BenchmarkPoint(trading_date=trading_date, index_value=float(value))


def _describe_source(source: BenchmarkSource) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", type(source).__name__)
