"""
Analyzer factory.

This module provides the AnalyzerFactory class, which turns a list of enabled
detector names into fresh detector instances for one cleaning pass.
"""

import logging
from typing import List, Optional, Sequence

from ..models.config import TrimConfig
from .base import Analyzer

logger = logging.getLogger(__name__)


class AnalyzerFactory:
    """
    Creates the detectors for one cleaning pass.

    Detectors are created fresh for every pass; a Cleaner owns the analyzers
    it is given and they must not be shared between cassettes.
    """

    def __init__(self, detector_names: Sequence[str], trim: Optional[TrimConfig] = None):
        """
        Initializes the factory.

        Args:
            detector_names: Names of the rules in DETECTOR_RULES to enable
            trim: Trim lengths handed to every spawned monitor
        """
        self.detector_names = list(detector_names)
        self.trim = trim if trim is not None else TrimConfig()

        logger.debug(
            f"AnalyzerFactory initialized: detectors={self.detector_names}, "
            f"trim={self.trim.header_length}/{self.trim.footer_length}"
        )

    def create_detectors(self) -> List[Analyzer]:
        """
        Create one detector per enabled name.

        Returns:
            New detector instances, in the order the names were given

        Raises:
            ValueError: If a detector name is unknown
        """
        from .detectors import create_detector

        return [create_detector(name, self.trim) for name in self.detector_names]
