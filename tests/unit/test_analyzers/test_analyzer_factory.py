"""
Unit tests for AnalyzerFactory.
"""

import pytest

from vcrtidy.analyzers import AnalyzerFactory, TriggerDetector
from vcrtidy.models import TrimConfig


@pytest.mark.unit
class TestAnalyzerFactory:
    """Test cases for AnalyzerFactory."""

    def test_creates_detectors_in_order(self):
        factory = AnalyzerFactory(["generic_deletion", "azure_asynchronous_operation"])

        detectors = factory.create_detectors()

        assert [d.rule.name for d in detectors] == ["generic_deletion", "azure_asynchronous_operation"]
        assert all(isinstance(d, TriggerDetector) for d in detectors)

    def test_default_trim(self):
        factory = AnalyzerFactory(["generic_deletion"])

        assert factory.trim == TrimConfig(header_length=1, footer_length=1)

    def test_empty(self):
        assert AnalyzerFactory([]).create_detectors() == []

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            AnalyzerFactory(["generic_deletion", "nope"]).create_detectors()
