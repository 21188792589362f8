"""
Exception types and error handling helpers.

This module provides the error handling used throughout the package:
configuration validation failures, analyzer failures raised while cleaning
a cassette, and a small logging helper that reports errors consistently.

Malformed recorded data (missing headers, bodies that are not JSON) is never
an error here; analyzers resolve it as a non-match or by abandoning.
"""

import logging
import uuid
from enum import Enum
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when configuration validation fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class AnalysisError(Exception):
    """
    Exception raised when an analyzer fails while processing an interaction.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, interaction_id: Optional[uuid.UUID] = None,
                 analyzer: Any = None):
        super().__init__(message)
        self.interaction_id = interaction_id
        self.analyzer = analyzer


class CleaningError(Exception):
    """
    Exception raised when one or more cassettes could not be cleaned.

    Attributes:
        errors: Mapping of cassette name to the exception raised for it.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Exception]] = None):
        super().__init__(message)
        self.errors = errors or {}


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)
