"""
Per-request error classifications.

These exceptions describe bad or unanswerable queries against the benchmark
timeline. They never indicate a broken process and are always recoverable
at the request boundary.
"""

from datetime import date
from typing import Any, Dict, Optional


class DataQualityError(Exception):
    """Base class for request-level issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class DateNotFoundError(DataQualityError):
    """Requested date is not a trading date on the benchmark timeline."""

    def __init__(self, message: str, requested_date: Optional[date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.requested_date = requested_date


class PositionOutOfRangeError(DataQualityError):
    """Positional access outside the benchmark series."""

    def __init__(self, message: str, position: Optional[int] = None,
                 length: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.position = position
        self.length = length


class InvalidBaselineError(DataQualityError):
    """Rebasing requested on a series whose first value is zero or missing."""

    def __init__(self, message: str, series_name: Optional[str] = None,
                 baseline_value: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.series_name = series_name
        self.baseline_value = baseline_value


class MalformedDataError(DataQualityError):
    """Caller-supplied series exists but is in an unusable shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format
