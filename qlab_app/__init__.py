"""
QLab App - Benchmark Time-Series Store and Alignment Engine

Loads a market benchmark index series, serves it as an immutable in-memory
timeline, and aligns strategy return series onto that timeline so the two
can be charted side by side in the quant lab.
"""

__version__ = "0.1.0"
__author__ = "QLab Team"
