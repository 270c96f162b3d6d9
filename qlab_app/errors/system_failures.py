"""
System failure error classifications for unrecoverable errors.

The benchmark source file is foundational startup data; failing to load it
means the process must not go on to serve requests.
"""

from typing import Any, Dict, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class FatalLoadError(SystemFailureError):
    """Benchmark source is unreadable or contains a malformed row."""

    def __init__(self, message: str, source: Optional[str] = None,
                 row_number: Optional[int] = None, raw_row: Optional[list] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.row_number = row_number
        self.raw_row = raw_row
