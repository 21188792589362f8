"""
Reading the cleaning configuration file.

The file is TOML. Only the ``[cleaning]`` table and its sub-tables are used;
other tables are ignored, so the cleaning settings can share a file with
other tools' settings.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ErrorSeverity, ValidationError, handle_config_error

logger = logging.getLogger(__name__)

CLEANING_TABLE = "cleaning"
CLEANING_SUBTABLES = ("azure", "trim", "execution")
CLEANING_FLAGS = ("all", "deletes")


def require_table(value: Any, field_name: str) -> Dict[str, Any]:
    """
    Check that a configuration value is a TOML table.

    Raises:
        ValidationError: If the value is not a table
    """
    if not isinstance(value, dict):
        raise ValidationError(
            f"{field_name} must be a table, got {type(value).__name__}",
            field_name=field_name,
            value=value,
        )
    return value


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Parse a cleaning configuration file.

    Args:
        config_path: Path to the TOML file

    Returns:
        Every table in the file

    Raises:
        FileNotFoundError: If there is no file at the path
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    if not config_path.is_file():
        logger.error(f"Cleaning configuration not found at {config_path}")
        raise FileNotFoundError(f"Cleaning configuration not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"file {config_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger,
        )
        raise

    logger.debug(f"Read {len(data)} top-level key(s) from {config_path}")
    return data


def extract_cleaning_table(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Pick the ``[cleaning]`` table out of a parsed file and check its shape.

    A missing table is not an error: it leaves every analyzer disabled.
    Unknown keys are reported and ignored.

    Raises:
        ValidationError: If ``cleaning`` or one of its sub-tables is not a table
    """
    if CLEANING_TABLE not in data:
        logger.warning(f"No [{CLEANING_TABLE}] table found; cassettes will not be cleaned")
        return {}

    table = require_table(data[CLEANING_TABLE], CLEANING_TABLE)
    for name in CLEANING_SUBTABLES:
        if name in table:
            require_table(table[name], f"{CLEANING_TABLE}.{name}")

    unknown = sorted(set(table) - set(CLEANING_SUBTABLES) - set(CLEANING_FLAGS))
    if unknown:
        logger.warning(f"Ignoring unknown keys in [{CLEANING_TABLE}]: {', '.join(unknown)}")

    return table


def load_cleaning_table(config_path: Path) -> Dict[str, Any]:
    """
    Read the raw ``[cleaning]`` table from a configuration file.

    Args:
        config_path: Path to the TOML file

    Returns:
        The ``[cleaning]`` table, or an empty dict if the file has none
    """
    logger.info(f"Loading cleaning configuration from: {config_path}")
    return extract_cleaning_table(read_config_file(config_path))
