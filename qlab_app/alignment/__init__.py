"""Series alignment onto the benchmark timeline"""

from .aligner import SeriesAligner

__all__ = ["SeriesAligner"]
