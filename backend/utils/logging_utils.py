"""
Logging Utilities for Consistent Structured Logging

Provides helpers for structured logging with context and duration tracking.
"""

import time
import logging
from typing import Dict, Any, Optional
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def log_operation(operation_name: str, context: Dict[str, Any], logger: Optional[logging.Logger] = None):
    """
    Context manager for logging operation start, end, and duration with context.

    Usage:
        with log_operation("refresh_derived_fields", {"postal_code": "38000"}):
            # Do operation
            pass
    """
    logger = logger or logging.getLogger(__name__)
    start_time = time.perf_counter()

    logger.debug(f"Starting {operation_name}", extra={
        'operation': operation_name,
        'context': context,
        'status': 'started'
    })

    try:
        yield
        duration = time.perf_counter() - start_time
        logger.debug(f"Completed {operation_name} in {duration * 1000:.2f}ms", extra={
            'operation': operation_name,
            'context': context,
            'status': 'completed',
            'duration_seconds': duration
        })
    except Exception as e:
        duration = time.perf_counter() - start_time
        logger.error(f"Failed {operation_name} after {duration * 1000:.2f}ms: {str(e)}", extra={
            'operation': operation_name,
            'context': context,
            'status': 'failed',
            'duration_seconds': duration,
            'error_type': type(e).__name__,
            'error_message': str(e)
        })
        raise


def log_with_context(level: str, message: str, context: Dict[str, Any], logger: Optional[logging.Logger] = None):
    """
    Log a message with structured context.

    Args:
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        context: Additional context data
        logger: Logger instance (uses module logger if None)
    """
    logger = logger or logging.getLogger(__name__)
    log_func = getattr(logger, level.lower(), logger.info)

    log_func(message, extra={'context': context})
