"""
Custom Error Types for the Heat Pump Sizing Engine

Form input never raises: unknown keys and malformed numbers degrade to
documented defaults. The errors below cover what the form cannot fix:
broken deployment data and unreadable state files.
"""

import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class SizingError(Exception):
    """Base exception for all sizing engine errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class CriticalError(SizingError):
    """Errors that should stop processing."""
    pass


class ConfigurationError(CriticalError):
    """
    Configuration errors that prevent proper operation.

    Examples:
    - Base temperature table file missing
    - Table incomplete or with non-numeric temperatures
    """
    pass


class StateFileError(CriticalError):
    """
    A saved wizard state cannot be loaded.

    Examples:
    - File not found
    - Invalid JSON
    - Schema validation failed
    """
    pass


def log_error_with_context(error: SizingError, context: Dict[str, Any]):
    """
    Log error with additional context information.

    Args:
        error: Error to log
        context: Additional context (state file, stage, etc.)
    """
    logger.error(f"{type(error).__name__}: {error.message}", extra={
        'error_type': type(error).__name__,
        'error_message': error.message,
        'details': error.details,
        'context': context,
    })
