"""
Error classification for the benchmark store and alignment engine.

Startup failures are unrecoverable and must stop the process. Everything
raised while serving a request is a data quality error the caller turns
into a client-facing response.
"""

from .data_quality import (
    DataQualityError,
    DateNotFoundError,
    InvalidBaselineError,
    MalformedDataError,
    PositionOutOfRangeError,
)
from .system_failures import (
    FatalLoadError,
    SystemFailureError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "DateNotFoundError",
    "InvalidBaselineError",
    "MalformedDataError",
    "PositionOutOfRangeError",
    # System Failures
    "SystemFailureError",
    "FatalLoadError",
]
