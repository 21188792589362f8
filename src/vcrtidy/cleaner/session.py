"""
Cassette adapter for the cleaning orchestrator.

CassetteCleaner applies a Cleaner to go-vcr shaped interaction records held
in memory. It can be driven a record at a time from recorder hooks
(``inspect`` after capture, ``should_discard`` before save) or over a whole
recorded cassette at once with ``clean``.

Records are plain mappings::

    {"id": 0,
     "request": {"method": "GET", "url": "https://..."},
     "response": {"code": 200, "headers": {"Location": ["..."]}, "body": "..."}}

Excluded records are not deleted; they are marked with
``discard_on_save = True`` for the writer to drop. Header repairs made by
monitors land directly in each record's ``response.headers`` mapping.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence, Tuple

from ..analyzers.base import Analyzer
from ..log_setup import VERBOSE
from ..models.config import CleaningOptions
from ..models.interaction import Interaction, interaction_from_record
from ..validation import AnalysisError, CleaningError, ErrorSeverity, handle_error
from .core import Cleaner

logger = logging.getLogger(__name__)

DISCARD_ON_SAVE = "discard_on_save"

Record = MutableMapping[str, Any]


class CassetteCleaner:
    """
    Cleans the interaction records of a single cassette.
    """

    def __init__(self, analyzers: Iterable[Analyzer] = ()):
        """
        Initializes the cassette cleaner.

        Args:
            analyzers: The detectors to run; typically ``CleaningOptions.analyzers()``
        """
        self.core = Cleaner(*analyzers)
        # Keyed by record identity; the record is held so the key stays valid
        self._mapping: Dict[int, Tuple[Record, Interaction]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_options(cls, options: CleaningOptions) -> "CassetteCleaner":
        return cls(options.analyzers())

    def inspect(self, record: Record) -> None:
        """
        Analyze one newly captured record.

        Raises:
            AnalysisError: If an analyzer fails on this record
        """
        with self._lock:
            self._inspect(record)

    def should_discard(self, record: Record) -> bool:
        """Check whether a previously inspected record was selected for removal."""
        with self._lock:
            return self._should_discard(record)

    def clean(self, records: Sequence[Record]) -> bool:
        """
        Analyze every record in order and mark the excluded ones.

        Args:
            records: The cassette's interaction records, in recorded order

        Returns:
            True if any record was marked for discard

        Raises:
            AnalysisError: If an analyzer fails on any record
        """
        with self._lock:
            for index, record in enumerate(records):
                try:
                    self._inspect(record)
                except AnalysisError as e:
                    raise AnalysisError(
                        f"inspecting interaction {record.get('id', index)}",
                        interaction_id=e.interaction_id,
                        analyzer=e.analyzer,
                    ) from e

            if self.core.interactions_to_remove_count() == 0:
                logger.log(VERBOSE, f"No change to cassette ({len(records)} interactions)")
                return False

            marked = 0
            for record in records:
                if self._should_discard(record):
                    record[DISCARD_ON_SAVE] = True
                    marked += 1

            logger.log(VERBOSE, f"Marked {marked} of {len(records)} interactions for discard")
            return marked > 0

    @staticmethod
    def retained(records: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
        """Return the records not marked for discard, in order."""
        return [record for record in records if not record.get(DISCARD_ON_SAVE)]

    def _inspect(self, record: Record) -> None:
        interaction = interaction_from_record(record)
        self._mapping[id(record)] = (record, interaction)
        self.core.analyze(interaction)

    def _should_discard(self, record: Record) -> bool:
        entry = self._mapping.get(id(record))
        if entry is None or entry[0] is not record:
            # Not a record we have seen
            return False
        return self.core.should_remove(entry[1])


def clean_cassettes(
    cassettes: Mapping[str, Sequence[Record]],
    options: CleaningOptions,
    max_workers: Optional[int] = None,
) -> Dict[str, bool]:
    """
    Clean several cassettes in parallel, one Cleaner per cassette.

    Every cassette is attempted even if some fail.

    Args:
        cassettes: Record lists keyed by cassette name
        options: Selects the detectors and trim lengths
        max_workers: Thread count; defaults to ``options.execution.max_workers``

    Returns:
        Mapping of cassette name to whether it was modified, for every
        cassette that was cleaned successfully

    Raises:
        CleaningError: If any cassette failed; carries each failure by name
    """
    workers = max_workers if max_workers is not None else options.execution.max_workers
    results: Dict[str, bool] = {}
    errors: Dict[str, Exception] = {}

    if not cassettes:
        return results

    logger.info(f"Cleaning {len(cassettes)} cassette(s) with {workers} worker(s)")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="CassetteCleaner") as executor:
        futures: Dict[str, Future] = {
            name: executor.submit(CassetteCleaner.from_options(options).clean, records)
            for name, records in cassettes.items()
        }

        for name, future in futures.items():
            try:
                results[name] = future.result()
            except Exception as e:
                errors[name] = e
                handle_error(
                    error=e,
                    context=f"cleaning cassette {name}",
                    severity=ErrorSeverity.ERROR,
                    reraise=False,
                    logger=logger,
                )

    modified = sum(1 for changed in results.values() if changed)
    logger.info(f"Cleaned {len(results)} cassette(s), {modified} modified, {len(errors)} failed")

    if errors:
        raise CleaningError(
            f"Failed to clean {len(errors)} cassette(s): {', '.join(sorted(errors))}",
            errors=errors,
        )

    return results
