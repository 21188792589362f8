"""
Configuration data models.

This module contains the configuration structures that select which
analyzers run over a cassette and how monitors trim polling episodes.

Cleaning flags are tri-state: ``None`` means "not set here", so that a more
general flag (``azure.all`` and then the top-level ``all``) can decide.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ..analyzers.base import Analyzer


def coalesce(*flags: Optional[bool]) -> bool:
    """Return the first flag that is set, or False if none are."""
    for flag in flags:
        if flag is not None:
            return flag
    return False


@dataclass
class TrimConfig:
    """
    How many accumulated interactions a monitor keeps at each end of an episode.
    """

    # [cleaning.trim]
    header_length: int = 1
    footer_length: int = 1


@dataclass
class ExecutionConfig:
    """
    Settings for cleaning several cassettes at once.
    """

    # [cleaning.execution]
    max_workers: int = 4


@dataclass
class AzureCleaningOptions:
    """
    Flags for the Azure polling protocols, loaded from ``[cleaning.azure]``.
    """

    all: Optional[bool] = None
    asynchronous_operations: Optional[bool] = None
    long_running_operations: Optional[bool] = None
    resource_modifications: Optional[bool] = None
    resource_deletions: Optional[bool] = None

    def should_clean_asynchronous_operations(self, all: Optional[bool] = None) -> bool:
        return coalesce(self.asynchronous_operations, self.all, all)

    def should_clean_long_running_operations(self, all: Optional[bool] = None) -> bool:
        return coalesce(self.long_running_operations, self.all, all)

    def should_clean_resource_modifications(self, all: Optional[bool] = None) -> bool:
        return coalesce(self.resource_modifications, self.all, all)

    def should_clean_resource_deletions(self, all: Optional[bool] = None) -> bool:
        return coalesce(self.resource_deletions, self.all, all)

    def detector_names(self, all: Optional[bool] = None) -> List[str]:
        """
        Names of the Azure detectors enabled by these flags.

        Args:
            all: The top-level ``all`` flag from the parent options
        """
        names = []
        if self.should_clean_long_running_operations(all):
            names.append("azure_long_running_operation")
        if self.should_clean_resource_modifications(all):
            names.append("azure_resource_modification")
        if self.should_clean_resource_deletions(all):
            names.append("azure_resource_deletion")
        if self.should_clean_asynchronous_operations(all):
            names.append("azure_asynchronous_operation")
        return names


@dataclass
class CleaningOptions:
    """
    The root cleaning configuration, loaded from ``[cleaning]``.
    """

    all: Optional[bool] = None
    deletes: Optional[bool] = None
    azure: AzureCleaningOptions = field(default_factory=AzureCleaningOptions)
    trim: TrimConfig = field(default_factory=TrimConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)

    def should_clean_deletes(self) -> bool:
        return coalesce(self.deletes, self.all)

    def detector_names(self) -> List[str]:
        """Names of every detector enabled by these options, in a stable order."""
        names = []
        if self.should_clean_deletes():
            names.append("generic_deletion")
        names.extend(self.azure.detector_names(self.all))
        return names

    def analyzers(self) -> List["Analyzer"]:
        """Build fresh detector instances for one cleaning pass."""
        from ..analyzers.factory import AnalyzerFactory

        return AnalyzerFactory(self.detector_names(), trim=self.trim).create_detectors()


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    cleaning: CleaningOptions
