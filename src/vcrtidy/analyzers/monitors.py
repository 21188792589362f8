"""
Monitors for polling episodes.

Every monitor shares one algorithm:

- Interactions for other URLs are ignored for the monitor's whole life.
- Interactions the policy classifies as still polling are accumulated.
- When the policy reports completion, the accumulated interactions are
  trimmed to their bookends: the first ``header_length`` and last
  ``footer_length`` are kept (and their Location headers relinked), the
  interior is excluded.
- When the policy reports something unexpected, the episode is abandoned
  with no exclusions.

Monitors differ only in their target URL and their MonitorPolicy.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..models.config import TrimConfig
from ..models.interaction import Interaction
from ..models.results import AnalyzerResult
from ..urls import base_url, same_base_url
from .base import Analyzer
from .predicates import (
    STATUS_ACCEPTED,
    STATUS_NOT_FOUND,
    has_method,
    has_status,
    operation_status,
    provisioning_state,
    response_header,
    was_successful,
)
from .relink import LOCATION_HEADER, relink_location_headers

logger = logging.getLogger(__name__)

IN_PROGRESS_STATUS = "InProgress"


class Verdict(Enum):
    """How a policy classifies an interaction for the monitored URL."""
    POLLING = "polling"
    COMPLETE = "complete"
    ABANDON = "abandon"


@dataclass(frozen=True)
class MonitorPolicy:
    """
    The protocol-specific part of a monitor.

    Attributes:
        name: Human-readable description used in log messages
        classify: Decides the verdict for an interaction already known to
                  be for the monitored URL
    """

    name: str
    classify: Callable[[Interaction], Verdict]


def _classify_asynchronous_operation(interaction: Interaction) -> Verdict:
    if not has_method(interaction, "GET"):
        return Verdict.ABANDON
    if has_status(interaction, STATUS_ACCEPTED) and response_header(interaction, LOCATION_HEADER):
        return Verdict.POLLING
    if was_successful(interaction):
        return Verdict.COMPLETE
    return Verdict.ABANDON


def _classify_long_running_operation(interaction: Interaction) -> Verdict:
    if not has_method(interaction, "GET") or not was_successful(interaction):
        return Verdict.ABANDON
    status = operation_status(interaction)
    if status is None:
        return Verdict.ABANDON
    if status.casefold() == IN_PROGRESS_STATUS.casefold():
        return Verdict.POLLING
    return Verdict.COMPLETE


def _classify_deletion(interaction: Interaction) -> Verdict:
    if has_method(interaction, "GET"):
        if has_status(interaction, STATUS_NOT_FOUND):
            return Verdict.COMPLETE
        if was_successful(interaction):
            return Verdict.POLLING
    # Any other method, redirects and other errors all mean the episode changed shape
    return Verdict.ABANDON


ASYNCHRONOUS_OPERATION_POLICY = MonitorPolicy(
    name="asynchronous operation",
    classify=_classify_asynchronous_operation,
)

LONG_RUNNING_OPERATION_POLICY = MonitorPolicy(
    name="long running operation",
    classify=_classify_long_running_operation,
)

DELETION_POLICY = MonitorPolicy(
    name="deletion",
    classify=_classify_deletion,
)


def provisioning_state_policy(*states: str) -> MonitorPolicy:
    """
    Build a policy that polls while ``properties.provisioningState`` is one of ``states``.

    State names are compared case-insensitively.

    Args:
        *states: One or more transient provisioning states, e.g. "Creating"

    Returns:
        A MonitorPolicy for those states
    """
    if not states:
        raise ValueError("At least one provisioning state is required")
    targets = frozenset(state.casefold() for state in states)

    def classify(interaction: Interaction) -> Verdict:
        if not has_method(interaction, "GET") or not was_successful(interaction):
            return Verdict.ABANDON
        state = provisioning_state(interaction)
        if state is None:
            return Verdict.ABANDON
        if state.casefold() in targets:
            return Verdict.POLLING
        return Verdict.COMPLETE

    return MonitorPolicy(name=f"provisioning state {'/'.join(states)}", classify=classify)


class PollingMonitor(Analyzer):
    """
    Tracks one polling episode at one URL until it completes or is abandoned.
    """

    def __init__(
        self,
        target_url: str,
        policy: MonitorPolicy,
        header_length: int = 1,
        footer_length: int = 1,
    ):
        """
        Initializes the monitor.

        Args:
            target_url: URL of the endpoint being polled. Only its base URL
                        is kept, so query-parameter churn is ignored.
            policy: The protocol-specific classification
            header_length: Accumulated interactions to keep at the start
            footer_length: Accumulated interactions to keep at the end

        Raises:
            ValueError: If a trim length is negative or the URL is unparsable
        """
        if header_length < 0 or footer_length < 0:
            raise ValueError(
                f"Trim lengths must not be negative, got {header_length}/{footer_length}"
            )
        self.target_url = base_url(target_url)
        self.policy = policy
        self.header_length = header_length
        self.footer_length = footer_length
        self.interactions: List[Interaction] = []

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.policy.name!r}, {self.target_url!r}, "
            f"accumulated={len(self.interactions)})"
        )

    def analyze(self, interaction: Interaction) -> AnalyzerResult:
        if not same_base_url(self.target_url, interaction.full_url):
            return AnalyzerResult.continuing()

        verdict = self.policy.classify(interaction)
        if verdict is Verdict.POLLING:
            self.interactions.append(interaction)
            return AnalyzerResult.continuing()

        if verdict is Verdict.ABANDON:
            logger.info(
                f"Abandoning {self.policy.name} monitor for {self.target_url}: "
                f"unexpected {interaction.method} returning {interaction.status_code}"
            )
            return AnalyzerResult.finished_result()

        return self._finalize()

    def _finalize(self) -> AnalyzerResult:
        """Trim the accumulated episode to its bookends."""
        count = len(self.interactions)
        if count <= self.header_length + self.footer_length:
            logger.debug(
                f"Short {self.policy.name} sequence at {self.target_url} "
                f"({count} polls), nothing to exclude"
            )
            return AnalyzerResult.finished_result()

        footer_start = count - self.footer_length
        excluded = self.interactions[self.header_length:footer_start]
        retained = self.interactions[:self.header_length] + self.interactions[footer_start:]

        relink_location_headers(retained)

        logger.debug(
            f"{self.policy.name.capitalize()} finished at {self.target_url}, "
            f"excluding {len(excluded)} of {count} polls"
        )
        return AnalyzerResult.finished_with_exclusions(*excluded)


def _trim(trim: Optional[TrimConfig] = None) -> TrimConfig:
    return trim if trim is not None else TrimConfig()


def asynchronous_operation_monitor(operation_url: str, trim: Optional[TrimConfig] = None) -> PollingMonitor:
    """Monitor GETs to an operation URL while it answers 202 with a Location header."""
    trim = _trim(trim)
    return PollingMonitor(
        operation_url, ASYNCHRONOUS_OPERATION_POLICY, trim.header_length, trim.footer_length
    )


def long_running_operation_monitor(operation_url: str, trim: Optional[TrimConfig] = None) -> PollingMonitor:
    """Monitor GETs to an operation status URL while its status is InProgress."""
    trim = _trim(trim)
    return PollingMonitor(
        operation_url, LONG_RUNNING_OPERATION_POLICY, trim.header_length, trim.footer_length
    )


def provisioning_state_monitor(
    resource_url: str, *states: str, trim: Optional[TrimConfig] = None
) -> PollingMonitor:
    """Monitor GETs to a resource while its provisioning state is one of ``states``."""
    trim = _trim(trim)
    return PollingMonitor(
        resource_url, provisioning_state_policy(*states), trim.header_length, trim.footer_length
    )


def deletion_monitor(resource_url: str, trim: Optional[TrimConfig] = None) -> PollingMonitor:
    """Monitor GETs to a deleted resource until it answers 404."""
    trim = _trim(trim)
    return PollingMonitor(
        resource_url, DELETION_POLICY, trim.header_length, trim.footer_length
    )
