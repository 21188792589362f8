"""
The cleaning orchestrator.

A Cleaner runs a dynamic set of analyzers over one stream of interactions.
Each interaction is fanned out to every active analyzer; the results are
then applied as a single batch: finished analyzers are dropped, spawned
analyzers join the set, and excluded interactions are recorded for removal.

Analyzers spawned by an interaction only see the interactions that follow it.
"""

import logging
import threading
import uuid
from typing import Dict, List

from ..analyzers.base import Analyzer
from ..models.interaction import Interaction
from ..validation import AnalysisError

logger = logging.getLogger(__name__)


class Cleaner:
    """
    Runs analyzers over a stream of interactions and tracks which to remove.

    Safe for concurrent callers. Calls to ``analyze`` are serialized, so an
    analyzer is never entered by two threads at once and never runs after
    it has finished. A separate lock guards the active analyzer set and the
    exclusion set, so lookups do not wait for a dispatch in progress.
    """

    def __init__(self, *analyzers: Analyzer):
        # Active analyzers, keyed by an identifier assigned when they join
        self._analyzers: Dict[uuid.UUID, Analyzer] = {}
        # Interactions selected for removal; entries are never taken back
        self._interactions_to_remove: Dict[uuid.UUID, bool] = {}
        self._lock = threading.Lock()
        # Held for a whole snapshot, dispatch and apply cycle
        self._dispatch_lock = threading.Lock()

        self.add_analyzers(*analyzers)

    def add_analyzers(self, *analyzers: Analyzer) -> None:
        """Add one or more analyzers to the active set."""
        with self._lock:
            self._add(analyzers)

    def analyze(self, interaction: Interaction) -> None:
        """
        Process one interaction through every active analyzer.

        Args:
            interaction: The next interaction, in recorded order

        Raises:
            AnalysisError: If an analyzer raised. Results already collected
                           from other analyzers for this interaction are
                           still applied before the error propagates.
        """
        with self._dispatch_lock:
            self._dispatch(interaction)

    def _dispatch(self, interaction: Interaction) -> None:
        with self._lock:
            analyzers = dict(self._analyzers)

        to_remove: List[uuid.UUID] = []
        to_add: List[Analyzer] = []
        to_exclude: List[Interaction] = []

        try:
            for analyzer_id, analyzer in analyzers.items():
                try:
                    result = analyzer.analyze(interaction)
                except Exception as e:
                    logger.error(f"Analyzer {analyzer!r} failed on interaction {interaction.id}: {e}")
                    raise AnalysisError(
                        f"analyzing interaction ID {interaction.id}",
                        interaction_id=interaction.id,
                        analyzer=analyzer,
                    ) from e

                if result.finished:
                    to_remove.append(analyzer_id)
                to_add.extend(result.spawn)
                to_exclude.extend(result.excluded)
        finally:
            with self._lock:
                self._remove(to_remove)
                self._add(to_add)
                self._exclude(to_exclude)

        if to_remove or to_add or to_exclude:
            logger.debug(
                f"Interaction {interaction}: {len(to_remove)} finished, "
                f"{len(to_add)} spawned, {len(to_exclude)} excluded"
            )

    def should_remove(self, interaction: Interaction) -> bool:
        """Check whether an interaction has been selected for removal."""
        with self._lock:
            return interaction.id in self._interactions_to_remove

    def interactions_to_remove_count(self) -> int:
        """Return the number of interactions selected for removal."""
        with self._lock:
            return len(self._interactions_to_remove)

    @property
    def active_analyzer_count(self) -> int:
        with self._lock:
            return len(self._analyzers)

    def _add(self, analyzers) -> None:
        for analyzer in analyzers:
            self._analyzers[uuid.uuid4()] = analyzer

    def _remove(self, analyzer_ids) -> None:
        for analyzer_id in analyzer_ids:
            self._analyzers.pop(analyzer_id, None)

    def _exclude(self, interactions) -> None:
        for interaction in interactions:
            self._interactions_to_remove[interaction.id] = True
