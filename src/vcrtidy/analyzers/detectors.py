"""
Detectors for the start of polling episodes.

A detector watches every interaction for a triggering pattern (method,
status code, and a response header or body field) and, on a match, spawns
one or more monitors scoped to the URL being polled. Detectors never finish
and never fail on data they cannot interpret; a missing or malformed header
or body is simply not a match.

Each polling protocol is one row in DETECTOR_RULES. Adding a protocol means
adding a DetectorRule, not new control flow.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional
from urllib.parse import urljoin

from ..models.config import TrimConfig
from ..models.interaction import Interaction
from ..models.results import AnalyzerResult
from ..urls import base_url
from .base import Analyzer
from .monitors import (
    asynchronous_operation_monitor,
    deletion_monitor,
    long_running_operation_monitor,
    provisioning_state_monitor,
)
from .predicates import STATUS_ACCEPTED, has_any_method, provisioning_state, response_header
from .relink import LOCATION_HEADER

logger = logging.getLogger(__name__)

ASYNC_OPERATION_HEADER = "Azure-AsyncOperation"

# Extracts the URL to monitor from a triggering interaction, or None for no match.
TargetExtractor = Callable[[Interaction], Optional[str]]
# Builds the monitors for a matched target URL.
MonitorBuilder = Callable[[str, TrimConfig], List[Analyzer]]


@dataclass(frozen=True)
class DetectorRule:
    """
    Declarative description of one polling protocol's starting interaction.

    Attributes:
        name: Unique rule name, used in configuration
        description: Human-readable description used in log messages
        methods: Request methods that can start an episode
        status_matches: Predicate over the response status code
        target: Extracts the URL to monitor, or None if the interaction
                does not carry what this protocol needs
        spawn: Builds the monitors for the extracted URL
    """

    name: str
    description: str
    methods: FrozenSet[str]
    status_matches: Callable[[int], bool]
    target: TargetExtractor
    spawn: MonitorBuilder


def _is_successful(status_code: int) -> bool:
    return 200 <= status_code < 300


def _is_accepted(status_code: int) -> bool:
    return status_code == STATUS_ACCEPTED


def _monitorable(url: str, source: str) -> Optional[str]:
    """Return the URL if a monitor can be scoped to it, None if it cannot be parsed."""
    try:
        base_url(url)
    except ValueError:
        logger.debug(f"Ignoring unparsable {source}: {url!r}")
        return None
    return url


def _header_url(header_name: str) -> TargetExtractor:
    """Target the URL carried in a response header, resolved against the request URL."""

    def extract(interaction: Interaction) -> Optional[str]:
        value = response_header(interaction, header_name)
        if value is None:
            return None
        try:
            resolved = urljoin(interaction.full_url, value)
        except ValueError:
            logger.debug(f"Ignoring unparsable {header_name} header: {value!r}")
            return None
        return _monitorable(resolved, f"{header_name} header")

    return extract


def _request_url_with_provisioning_state(interaction: Interaction) -> Optional[str]:
    """Target the request's own URL, if the body reports a provisioning state."""
    if provisioning_state(interaction) is None:
        return None
    return _monitorable(interaction.full_url, "request URL")


def _request_url(interaction: Interaction) -> Optional[str]:
    return _monitorable(interaction.full_url, "request URL")


DETECTOR_RULES: Dict[str, DetectorRule] = {
    rule.name: rule
    for rule in (
        DetectorRule(
            name="azure_asynchronous_operation",
            description="asynchronous operation",
            methods=frozenset({"PUT", "POST", "DELETE"}),
            status_matches=_is_accepted,
            target=_header_url(LOCATION_HEADER),
            spawn=lambda url, trim: [asynchronous_operation_monitor(url, trim)],
        ),
        DetectorRule(
            name="azure_long_running_operation",
            description="long running operation",
            methods=frozenset({"PUT", "POST", "DELETE"}),
            status_matches=_is_successful,
            target=_header_url(ASYNC_OPERATION_HEADER),
            spawn=lambda url, trim: [long_running_operation_monitor(url, trim)],
        ),
        DetectorRule(
            name="azure_resource_deletion",
            description="resource deletion",
            methods=frozenset({"DELETE"}),
            status_matches=_is_successful,
            target=_request_url_with_provisioning_state,
            spawn=lambda url, trim: [provisioning_state_monitor(url, "Deleting", trim=trim)],
        ),
        DetectorRule(
            name="azure_resource_modification",
            description="resource modification",
            methods=frozenset({"PUT", "PATCH"}),
            status_matches=_is_successful,
            target=_request_url_with_provisioning_state,
            spawn=lambda url, trim: [
                provisioning_state_monitor(url, "Creating", trim=trim),
                provisioning_state_monitor(url, "Updating", trim=trim),
            ],
        ),
        DetectorRule(
            name="generic_deletion",
            description="deletion",
            methods=frozenset({"DELETE"}),
            status_matches=_is_successful,
            target=_request_url,
            spawn=lambda url, trim: [deletion_monitor(url, trim)],
        ),
    )
}


class TriggerDetector(Analyzer):
    """
    Runs one DetectorRule over the whole interaction stream.
    """

    def __init__(self, rule: DetectorRule, trim: Optional[TrimConfig] = None):
        self.rule = rule
        self.trim = trim if trim is not None else TrimConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rule.name!r})"

    def analyze(self, interaction: Interaction) -> AnalyzerResult:
        if not has_any_method(interaction, *self.rule.methods):
            return AnalyzerResult.continuing()
        if not self.rule.status_matches(interaction.status_code):
            return AnalyzerResult.continuing()

        target = self.rule.target(interaction)
        if target is None:
            return AnalyzerResult.continuing()

        monitors = self.rule.spawn(target, self.trim)
        logger.debug(
            f"Found {self.rule.description} via {interaction.method} {interaction.full_url}, "
            f"monitoring {base_url(target)} with {len(monitors)} monitor(s)"
        )
        return AnalyzerResult.spawned(*monitors)


def create_detector(name: str, trim: Optional[TrimConfig] = None) -> TriggerDetector:
    """
    Create a detector for a named rule.

    Args:
        name: Key into DETECTOR_RULES
        trim: Trim lengths handed to every spawned monitor

    Returns:
        A new TriggerDetector

    Raises:
        ValueError: If the rule name is unknown
    """
    rule = DETECTOR_RULES.get(name)
    if rule is None:
        raise ValueError(
            f"Unknown detector '{name}'. Available: {', '.join(sorted(DETECTOR_RULES))}"
        )
    return TriggerDetector(rule, trim)
