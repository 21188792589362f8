"""
vcrtidy: Remove redundant polling from recorded HTTP cassettes.

Recordings of cloud API tests are dominated by polling loops: a resource is
created, deleted or updated and the client GETs its status again and again
until the operation finishes. Replaying all of those polls adds nothing.
This package recognises such episodes and trims each one to its first and
last polls, repairing Location headers so the replay still follows a valid
chain.

The package is organized into specialized modules:
- urls: URL canonicalisation and equivalence
- models: Interaction views, analyzer results and configuration
- analyzers: Detectors, monitors and Location header repair
- cleaner: The orchestrator and the in-memory cassette adapter
- config: TOML configuration loading and validation
- validation: Error types and value validation

Usage:
    from vcrtidy import CassetteCleaner, get_config
    options = get_config().cleaning
    cleaner = CassetteCleaner(options.analyzers())
    modified = cleaner.clean(cassette["interactions"])
"""

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .cleaner import Cleaner, CassetteCleaner, clean_cassettes
from .analyzers import Analyzer, AnalyzerFactory, relink_location_headers

# Model classes for external use
from .models import (
    AppConfig,
    AnalyzerResult,
    AzureCleaningOptions,
    CleaningOptions,
    Interaction,
    Request,
    Response,
    TrimConfig,
    interaction_from_record,
)

# Validation utilities
from .validation import (
    AnalysisError,
    CleaningError,
    ValidationError,
)

from .urls import base_url, canonical_url, same_base_url, same_url
from .log_setup import VERBOSE, configure_logging

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "Cleaner",
    "CassetteCleaner",
    "clean_cassettes",
    "Analyzer",
    "AnalyzerFactory",
    "relink_location_headers",
    # Models
    "AppConfig",
    "AnalyzerResult",
    "AzureCleaningOptions",
    "CleaningOptions",
    "Interaction",
    "Request",
    "Response",
    "TrimConfig",
    "interaction_from_record",
    # Errors
    "AnalysisError",
    "CleaningError",
    "ValidationError",
    # URLs
    "base_url",
    "canonical_url",
    "same_base_url",
    "same_url",
    # Logging
    "VERBOSE",
    "configure_logging",
]
