"""
Defines the abstract analyzer contract.

Analyzers fall into two families, both implementing this one contract:
- Detectors watch every interaction for the start of a polling episode and
  spawn Monitors. They live for the whole pass and never finish.
- Monitors track one detected episode, accumulating the interactions that
  belong to it, and finish once the episode ends or turns out to be
  unreducible.
"""

import logging
from abc import ABC, abstractmethod

from ..models.interaction import Interaction
from ..models.results import AnalyzerResult

logger = logging.getLogger(__name__)


class Analyzer(ABC):
    """
    Abstract base class for stream analyzers.

    The Cleaner calls ``analyze`` at most once per interaction, in the order
    the interactions were recorded, and never concurrently for the same
    analyzer instance.
    """

    @abstractmethod
    def analyze(self, interaction: Interaction) -> AnalyzerResult:
        """
        Process the next interaction in the stream.

        Malformed recorded data must be resolved as a normal result. Raising
        is reserved for programming errors and aborts the cleaning pass.

        Args:
            interaction: The next interaction, in recorded order

        Returns:
            The result of processing this interaction
        """
        pass
