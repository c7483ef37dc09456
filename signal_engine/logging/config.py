"""
Centralized logging configuration for the market signal engine.

This module provides standardized logging configuration using structlog
for all components. The engine is a library, so nothing here runs at import
time: applications call ``configure_logging`` once at startup and every module
fetches its logger through ``get_logger``.
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
        format="%(message)s",
        force=True,
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
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

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


def get_diagnostic_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for diagnostic flag decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the diagnostic subsystem
    """
    return structlog.get_logger(
        name,
        subsystem="diagnostic",
        audit_trail=True
    )


def get_planning_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the entry planning subsystem."""
    return structlog.get_logger(name, subsystem="planning")


def log_flag_decision(
    logger: FilteringBoundLogger,
    rule_key: str,
    triggered: bool,
    symbol: str,
    severity: str,
    value: Any = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a single diagnostic rule evaluation with standardized format.

    Args:
        logger: Structlog logger instance
        rule_key: Key of the rule being evaluated
        triggered: Whether the rule emitted a flag
        symbol: Symbol under diagnosis
        severity: Severity the rule carries
        value: Observed value the rule compared
        context: Additional context data
    """
    bound_logger = logger.bind(
        rule=rule_key,
        rule_result="FLAG" if triggered else "CLEAR",
        symbol=symbol,
        severity=severity,
        observed=value,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Diagnostic rule evaluated")


def log_overall_action(
    logger: FilteringBoundLogger,
    symbol: str,
    action: str,
    red_count: int,
    yellow_count: int,
    risk_level: int
) -> None:
    """Log the overall diagnostic verdict for a symbol."""
    logger.info(
        "Diagnostic verdict",
        symbol=symbol,
        action=action,
        red_flags=red_count,
        yellow_flags=yellow_count,
        risk_level=risk_level,
    )
