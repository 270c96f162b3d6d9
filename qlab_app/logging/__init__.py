"""
Logging configuration and utilities for the QLab benchmark engine.
"""
from .config import configure_logging, get_benchmark_logger, get_logger

__all__ = ["configure_logging", "get_logger", "get_benchmark_logger"]
