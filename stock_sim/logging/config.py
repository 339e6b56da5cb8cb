"""
Centralized logging configuration for the simulation engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the engine should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from datetime import date
from decimal import Decimal
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
        processors.append(structlog.processors.JSONRenderer(default=_json_default))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _json_default(value: Any) -> Any:
    # Prices are Decimals and record dates are dates
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return repr(value)


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_tick_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for simulation tick processing.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for tick processing
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="simulation",
    )


def log_day_close(
    logger: FilteringBoundLogger,
    symbol: str,
    record_date: date,
    open_price: Decimal,
    close_price: Decimal,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a committed trading day with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Stock symbol whose day closed
        record_date: Date of the committed historical record
        open_price: Opening price of the closed day
        close_price: Price carried into the new day
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        record_date=record_date.isoformat(),
        open_price=str(open_price),
        close_price=str(close_price),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Trading day closed")
