"""
Analyzer result data model.

An AnalyzerResult is returned by every call to ``Analyzer.analyze``. It
carries three orthogonal pieces of information:

- whether the analyzer has finished and can be dropped from the active set,
- the interactions it has decided should be removed from the cassette,
- any new analyzers it wants added to the active set.

A result may both finish and spawn. Exclusions are only allowed on a
finished result.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from .interaction import Interaction

if TYPE_CHECKING:  # pragma: no cover
    from ..analyzers.base import Analyzer


@dataclass
class AnalyzerResult:
    """Outcome of one ``analyze`` call."""

    # The analyzer has completed its work and should be removed.
    finished: bool = False
    # Interactions to mark for removal; only meaningful when finished.
    excluded: List[Interaction] = field(default_factory=list)
    # Newly created analyzers to add to the active set.
    spawn: List["Analyzer"] = field(default_factory=list)

    def __post_init__(self):
        if self.excluded and not self.finished:
            raise ValueError("Exclusions are only allowed on a finished result")

    @classmethod
    def continuing(cls) -> "AnalyzerResult":
        return cls()

    @classmethod
    def finished_result(cls) -> "AnalyzerResult":
        return cls(finished=True)

    @classmethod
    def finished_with_exclusions(cls, *interactions: Interaction) -> "AnalyzerResult":
        return cls(finished=True, excluded=list(interactions))

    @classmethod
    def spawned(cls, *analyzers: "Analyzer") -> "AnalyzerResult":
        return cls(spawn=list(analyzers))
