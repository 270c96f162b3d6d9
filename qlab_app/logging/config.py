"""
Centralized logging configuration for the QLab benchmark engine.

This module provides standardized logging configuration using structlog
for all components. Loader, store, aligner and composer all log through
this configuration so benchmark events share one structured format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_benchmark_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the benchmark subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for benchmark load and alignment events
    """
    return structlog.get_logger(name, subsystem="benchmark")


def log_truncation(
    logger: FilteringBoundLogger,
    dropped_points: int,
    strategy_length: int,
    benchmark_length: int,
    quant_id: Optional[Any] = None,
) -> None:
    """
    Log a truncation notice with standardized format.

    Truncation is reported, not raised: the partial comparison is still served.

    Args:
        logger: Structlog logger instance
        dropped_points: Number of oldest strategy points dropped
        strategy_length: Length of the strategy series as supplied
        benchmark_length: Length of the benchmark window available
        quant_id: Identifier of the strategy, if known
    """
    logger.bind(
        quant_id=quant_id,
        dropped_points=dropped_points,
        strategy_length=strategy_length,
        benchmark_length=benchmark_length,
    ).warning("Strategy series truncated to benchmark window")
