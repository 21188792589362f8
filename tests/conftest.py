"""
Pytest configuration and shared fixtures for the vcrtidy test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the vcrtidy project.
"""

import json
import sys
import tempfile
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_cleaning_config():
    """Sample [cleaning] configuration data for testing."""
    return {
        "all": True,
        "azure": {
            "long_running_operations": False,
        },
        "trim": {
            "header_length": 1,
            "footer_length": 1,
        },
        "execution": {
            "max_workers": 2,
        },
    }


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def config_files(temp_dir, sample_cleaning_config):
    """Create a temporary configuration file for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump({"cleaning": sample_cleaning_config}, f)

    return {
        "config": config_file,
        "dir": temp_dir,
    }


# ============================================================================
# Test Utilities
# ============================================================================


class TestUtils:
    """Utility functions for testing."""

    BASE = "https://management.example.com/subscriptions/sub/resourceGroups/rg"

    @staticmethod
    def create_interaction(
        method: str,
        url: str,
        status_code: int = 200,
        headers: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ):
        """Create an Interaction; dict and list bodies are encoded as JSON."""
        from vcrtidy.models import HeaderMap, Interaction, Request, Response

        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")

        return Interaction(
            request=Request(method=method, url=url),
            response=Response(
                status_code=status_code,
                body=body or b"",
                headers=HeaderMap(dict(headers or {})),
            ),
        )

    @staticmethod
    def create_record(
        method: str,
        url: str,
        code: int = 200,
        headers: Optional[Dict[str, List[str]]] = None,
        body: Any = None,
        record_id: int = 0,
    ) -> Dict[str, Any]:
        """Create a go-vcr shaped interaction record."""
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        return {
            "id": record_id,
            "request": {"method": method, "url": url},
            "response": {
                "code": code,
                "headers": dict(headers or {}),
                "body": body or "",
            },
        }

    @staticmethod
    def number_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Assign sequential ids to records in place."""
        for index, record in enumerate(records):
            record["id"] = index
        return records

    @staticmethod
    def provisioning_body(state: str) -> Dict[str, Any]:
        return {"properties": {"provisioningState": state}}

    @staticmethod
    def run(cleaner, interactions) -> List:
        """Feed interactions through a Cleaner and return the removed ones."""
        for interaction in interactions:
            cleaner.analyze(interaction)
        return [i for i in interactions if cleaner.should_remove(i)]


@pytest.fixture
def test_utils():
    """Provide test utility functions."""
    return TestUtils


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    # Store original config path (default path)
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    from vcrtidy.config import clear_config_cache, set_config_path

    clear_config_cache()

    # Always reset to original config path
    set_config_path(original_config_path)
