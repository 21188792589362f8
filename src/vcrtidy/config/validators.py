"""
Configuration validation utilities.

Turns the raw ``[cleaning]`` table into a validated CleaningOptions.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    AzureCleaningOptions,
    CleaningOptions,
    ExecutionConfig,
    TrimConfig,
)
from ..validation import (
    ValidationError,
    validate_optional_bool,
    validate_positive_integer,
)
from .loader import require_table

logger = logging.getLogger(__name__)

MAX_WORKERS_LIMIT = 64


def _section(data: Dict[str, Any], key: str, field_name: str) -> Dict[str, Any]:
    return require_table(data.get(key, {}), field_name)


def validate_cleaning_config(cleaning_data: Dict[str, Any]) -> CleaningOptions:
    """
    Validate and create CleaningOptions from raw configuration data.

    Args:
        cleaning_data: Raw ``[cleaning]`` table from TOML

    Returns:
        Validated CleaningOptions instance

    Raises:
        ValidationError: If validation fails
    """
    try:
        azure_data = _section(cleaning_data, "azure", "cleaning.azure")
        trim_data = _section(cleaning_data, "trim", "cleaning.trim")
        execution_data = _section(cleaning_data, "execution", "cleaning.execution")

        azure = AzureCleaningOptions(
            all=validate_optional_bool(azure_data.get("all"), "cleaning.azure.all"),
            asynchronous_operations=validate_optional_bool(
                azure_data.get("asynchronous_operations"),
                "cleaning.azure.asynchronous_operations",
            ),
            long_running_operations=validate_optional_bool(
                azure_data.get("long_running_operations"),
                "cleaning.azure.long_running_operations",
            ),
            resource_modifications=validate_optional_bool(
                azure_data.get("resource_modifications"),
                "cleaning.azure.resource_modifications",
            ),
            resource_deletions=validate_optional_bool(
                azure_data.get("resource_deletions"),
                "cleaning.azure.resource_deletions",
            ),
        )

        trim = TrimConfig(
            header_length=validate_positive_integer(
                trim_data.get("header_length", 1),
                min_value=1,
                field_name="cleaning.trim.header_length",
            ),
            footer_length=validate_positive_integer(
                trim_data.get("footer_length", 1),
                min_value=1,
                field_name="cleaning.trim.footer_length",
            ),
        )

        execution = ExecutionConfig(
            max_workers=validate_positive_integer(
                execution_data.get("max_workers", 4),
                min_value=1,
                max_value=MAX_WORKERS_LIMIT,
                field_name="cleaning.execution.max_workers",
            ),
        )

        options = CleaningOptions(
            all=validate_optional_bool(cleaning_data.get("all"), "cleaning.all"),
            deletes=validate_optional_bool(cleaning_data.get("deletes"), "cleaning.deletes"),
            azure=azure,
            trim=trim,
            execution=execution,
        )
    except ValidationError as e:
        logger.error(f"Cleaning configuration validation failed: {e}")
        raise

    enabled = options.detector_names()
    if not enabled:
        logger.warning("No cleaning analyzers are enabled; cassettes will not be modified")
    else:
        logger.info(f"Enabled cleaning analyzers: {', '.join(enabled)}")

    return options
