"""
Validation and error handling for the vcrtidy package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

from .exceptions import (
    AnalysisError,
    CleaningError,
    ErrorSeverity,
    ValidationError,
    handle_config_error,
    handle_error,
)
from .validators import (
    validate_optional_bool,
    validate_positive_integer,
)

__all__ = [
    # Core functionality
    "AnalysisError",
    "CleaningError",
    "ErrorSeverity",
    "ValidationError",
    "handle_config_error",
    "handle_error",
    # Validators
    "validate_optional_bool",
    "validate_positive_integer",
]
