"""
Analyzers package for polling-episode recognition.

This package holds the pattern-recognition half of the cleaner:

- The abstract Analyzer contract shared by detectors and monitors
- Detectors, driven by a declarative rule table, that spot the start of a
  polling episode and spawn monitors for it
- Monitors that accumulate an episode's polls and trim it to its bookends
- Header Continuity Repair for the Location headers of retained polls
- A factory that builds the enabled detectors for one cleaning pass
"""

from .base import Analyzer
from .detectors import DETECTOR_RULES, DetectorRule, TriggerDetector, create_detector
from .factory import AnalyzerFactory
from .monitors import (
    ASYNCHRONOUS_OPERATION_POLICY,
    DELETION_POLICY,
    LONG_RUNNING_OPERATION_POLICY,
    MonitorPolicy,
    PollingMonitor,
    Verdict,
    asynchronous_operation_monitor,
    deletion_monitor,
    long_running_operation_monitor,
    provisioning_state_monitor,
    provisioning_state_policy,
)
from .relink import LOCATION_HEADER, relink_location_header, relink_location_headers

__all__ = [
    "Analyzer",
    "DETECTOR_RULES",
    "DetectorRule",
    "TriggerDetector",
    "create_detector",
    "AnalyzerFactory",
    "ASYNCHRONOUS_OPERATION_POLICY",
    "DELETION_POLICY",
    "LONG_RUNNING_OPERATION_POLICY",
    "MonitorPolicy",
    "PollingMonitor",
    "Verdict",
    "asynchronous_operation_monitor",
    "deletion_monitor",
    "long_running_operation_monitor",
    "provisioning_state_monitor",
    "provisioning_state_policy",
    "LOCATION_HEADER",
    "relink_location_header",
    "relink_location_headers",
]
