"""
Unit tests for Location header repair.
"""

import pytest

from vcrtidy.analyzers.relink import relink_location_header, relink_location_headers

OP = "https://example.com/operations/1"


@pytest.mark.unit
class TestRelinkLocationHeaders:
    """Test cases for relink_location_headers."""

    def test_points_prior_at_next(self, test_utils):
        """Test that Location is set to the next retained request URL."""
        first = test_utils.create_interaction("GET", OP + "?t=1", 202, headers={"Location": [OP + "?t=2"]})
        last = test_utils.create_interaction("GET", OP + "?t=9", 200)

        relink_location_headers([first, last])

        assert first.response.header("Location") == OP + "?t=9"
        assert "Location" not in last.response.headers

    def test_identical_urls_remove_header(self, test_utils):
        """Test that Location is stripped when the next request is identical."""
        first = test_utils.create_interaction("GET", OP, 202, headers={"Location": [OP]})
        last = test_utils.create_interaction("GET", OP, 200)

        relink_location_headers([first, last])

        assert "Location" not in first.response.headers

    def test_last_is_untouched(self, test_utils):
        """Test that the final interaction keeps its headers."""
        only = test_utils.create_interaction("GET", OP, 202, headers={"Location": ["https://elsewhere/"]})

        relink_location_headers([only])

        assert only.response.header("Location") == "https://elsewhere/"

    def test_sets_header_where_none_existed(self, test_utils):
        first = test_utils.create_interaction("GET", OP + "?a=1", 200)
        second = test_utils.create_interaction("GET", OP + "?a=2", 200)

        relink_location_header(first, second)

        assert first.response.header("Location") == OP + "?a=2"

    def test_idempotent(self, test_utils):
        """Test that repairing twice gives the same headers as once."""
        interactions = [
            test_utils.create_interaction("GET", OP + "?t=1", 202, headers={"Location": ["x"]}),
            test_utils.create_interaction("GET", OP + "?t=1", 202, headers={"Location": ["y"]}),
            test_utils.create_interaction("GET", OP + "?t=3", 202, headers={"Location": ["z"]}),
            test_utils.create_interaction("GET", OP + "?t=4", 200),
        ]

        relink_location_headers(interactions)
        once = [i.response.headers.as_dict() for i in interactions]
        relink_location_headers(interactions)
        twice = [i.response.headers.as_dict() for i in interactions]

        assert once == twice
        assert "Location" not in interactions[0].response.headers
        assert interactions[1].response.header("Location") == OP + "?t=3"
