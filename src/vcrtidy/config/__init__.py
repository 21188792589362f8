"""
Configuration management for the vcrtidy package.

This module provides a clean interface for loading, validating, and accessing
cleaning configuration from a TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import (
    extract_cleaning_table,
    load_cleaning_table,
    read_config_file,
    require_table,
)
from .validators import validate_cleaning_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "read_config_file",
    "extract_cleaning_table",
    "load_cleaning_table",
    "require_table",
    "validate_cleaning_config",
]
