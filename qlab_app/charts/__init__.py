"""Chart composition for aligned benchmark/strategy comparisons"""

from .composer import ChartComposer

__all__ = ["ChartComposer"]
