"""
Utility functions module.

Trading-date semantics:
- Benchmark timestamps are UTC instants; only their calendar date matters
- Calendar dates are taken in one configured timezone for the whole series
- Sub-day precision is discarded on load and never used as a lookup key
"""
