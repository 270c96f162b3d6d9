"""
Benchmark data module.

Loads the benchmark source file, defines the immutable timeline and
comparison models, and holds the process-wide benchmark store.
"""
