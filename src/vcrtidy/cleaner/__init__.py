"""
Cleaner package: the orchestrator and its cassette adapter.

- Cleaner runs a dynamic set of analyzers over one interaction stream and
  tracks which interactions should be removed
- CassetteCleaner applies a Cleaner to go-vcr shaped records in memory
- clean_cassettes cleans several cassettes in parallel
"""

from .core import Cleaner
from .session import DISCARD_ON_SAVE, CassetteCleaner, clean_cassettes

__all__ = [
    "Cleaner",
    "CassetteCleaner",
    "DISCARD_ON_SAVE",
    "clean_cassettes",
]
