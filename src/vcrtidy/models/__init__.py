"""
Data models and structures for the cleaning system.

Configuration Models:
- Cleaning flags that select analyzers
- Trim lengths and execution settings

Interaction Models:
- Request/response views over recorded exchanges
- Case-insensitive response header access

Result Models:
- The per-interaction outcome returned by analyzers
"""

from .config import (
    AppConfig,
    AzureCleaningOptions,
    CleaningOptions,
    ExecutionConfig,
    TrimConfig,
)
from .interaction import (
    HeaderMap,
    Interaction,
    Request,
    Response,
    canonical_header_key,
    interaction_from_record,
)
from .results import AnalyzerResult

__all__ = [
    # Configuration
    "AppConfig",
    "AzureCleaningOptions",
    "CleaningOptions",
    "ExecutionConfig",
    "TrimConfig",
    # Interactions
    "HeaderMap",
    "Interaction",
    "Request",
    "Response",
    "canonical_header_key",
    "interaction_from_record",
    # Results
    "AnalyzerResult",
]
