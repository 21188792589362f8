"""
Integration tests for complete cleaning passes.

Each test runs a realistic recorded stream through a Cleaner (or a
CassetteCleaner) with every detector enabled, and checks which interactions
are removed and how the retained Location headers look afterwards.
"""

import pytest

from vcrtidy.cleaner import DISCARD_ON_SAVE, CassetteCleaner, Cleaner
from vcrtidy.models import CleaningOptions

RESOURCE = "https://management.example.com/subscriptions/sub/resourceGroups/rg/providers/x/y/name"
OPERATION = "https://management.example.com/subscriptions/sub/providers/x/operations/op-1"
UNRELATED = "https://management.example.com/subscriptions/sub/resourceGroups/rg"


@pytest.fixture
def cleaner():
    return Cleaner(*CleaningOptions(all=True).analyzers())


@pytest.mark.integration
class TestCleaningScenarios:
    """End-to-end polling episodes."""

    def test_resource_creation_trims_creating_polls(self, cleaner, test_utils):
        """Three Creating polls then Succeeded removes only the middle poll."""
        put = test_utils.create_interaction("PUT", RESOURCE, 201, body=test_utils.provisioning_body("Creating"))
        creating = [
            test_utils.create_interaction("GET", RESOURCE, 200, body=test_utils.provisioning_body("Creating"))
            for _ in range(3)
        ]
        succeeded = test_utils.create_interaction("GET", RESOURCE, 200, body=test_utils.provisioning_body("Succeeded"))

        removed = test_utils.run(cleaner, [put] + creating + [succeeded])

        assert removed == [creating[1]]
        assert cleaner.active_analyzer_count == 5

    def test_asynchronous_operation_keeps_first_and_last_polls(self, cleaner, test_utils):
        """Nine accepted polls then success removes polls two through eight."""
        put = test_utils.create_interaction("PUT", RESOURCE, 202, headers={"Location": [OPERATION]})
        accepted = [
            test_utils.create_interaction("GET", OPERATION, 202, headers={"Location": [OPERATION]})
            for _ in range(9)
        ]
        done = test_utils.create_interaction("GET", OPERATION, 200)

        removed = test_utils.run(cleaner, [put] + accepted + [done])

        assert removed == accepted[1:8]
        assert len(removed) == 7
        # Identical URLs: the replay simply repeats the request
        assert "Location" not in accepted[0].response.headers
        assert accepted[8].response.header("Location") == OPERATION

    def test_asynchronous_operation_relinks_to_retained_poll(self, cleaner, test_utils):
        """With distinct poll URLs the first retained poll points at the last retained one."""
        put = test_utils.create_interaction("PUT", RESOURCE, 202, headers={"Location": [f"{OPERATION}?t=0"]})
        accepted = [
            test_utils.create_interaction(
                "GET", f"{OPERATION}?t={n}", 202, headers={"Location": [f"{OPERATION}?t={n + 1}"]}
            )
            for n in range(9)
        ]
        done = test_utils.create_interaction("GET", f"{OPERATION}?t=9", 200)

        removed = test_utils.run(cleaner, [put] + accepted + [done])

        assert len(removed) == 7
        assert accepted[0].response.header("Location") == f"{OPERATION}?t=8"
        assert accepted[8].response.header("Location") == f"{OPERATION}?t=9"

    def test_immediate_not_found_after_delete(self, cleaner, test_utils):
        """A DELETE followed directly by a 404 has nothing to remove."""
        delete = test_utils.create_interaction("DELETE", RESOURCE, 200)
        gone = test_utils.create_interaction("GET", RESOURCE, 404)

        removed = test_utils.run(cleaner, [delete, gone])

        assert removed == []
        assert cleaner.interactions_to_remove_count() == 0
        assert cleaner.active_analyzer_count == 5

    def test_unexpected_method_abandons_creation(self, cleaner, test_utils):
        """A POST at the watched resource abandons the Creating episode."""
        put = test_utils.create_interaction("PUT", RESOURCE, 201, body=test_utils.provisioning_body("Creating"))
        creating = [
            test_utils.create_interaction("GET", RESOURCE, 200, body=test_utils.provisioning_body("Creating"))
            for _ in range(5)
        ]
        post = test_utils.create_interaction("POST", RESOURCE, 200)
        succeeded = test_utils.create_interaction("GET", RESOURCE, 200, body=test_utils.provisioning_body("Succeeded"))

        removed = test_utils.run(cleaner, [put] + creating + [post, succeeded])

        assert removed == []
        assert cleaner.active_analyzer_count == 5

    def test_resource_deletion_with_deleting_state(self, cleaner, test_utils):
        """Deleting polls are trimmed by the deletion monitor; the provisioning monitor abandons on the 404."""
        delete = test_utils.create_interaction("DELETE", RESOURCE, 202, body=test_utils.provisioning_body("Deleting"))
        deleting = [
            test_utils.create_interaction("GET", RESOURCE, 200, body=test_utils.provisioning_body("Deleting"))
            for _ in range(4)
        ]
        gone = test_utils.create_interaction("GET", RESOURCE, 404)

        removed = test_utils.run(cleaner, [delete] + deleting + [gone])

        assert removed == deleting[1:3]


@pytest.mark.integration
class TestCassetteCleaning:
    """Whole-cassette cleaning over go-vcr shaped records."""

    def test_interleaved_long_running_operation(self, test_utils):
        """Polls for an operation are trimmed while unrelated traffic is kept."""
        records = [
            test_utils.create_record("PUT", RESOURCE, 201, headers={"Azure-AsyncOperation": [OPERATION]}),
        ]
        for _ in range(4):
            records.append(test_utils.create_record("GET", OPERATION, 200, body={"status": "InProgress"}))
            records.append(test_utils.create_record("GET", UNRELATED, 200, body={"name": "rg"}))
        records.append(test_utils.create_record("GET", OPERATION, 200, body={"status": "Succeeded"}))
        test_utils.number_records(records)

        modified = CassetteCleaner.from_options(CleaningOptions(all=True)).clean(records)

        assert modified
        assert [r["id"] for r in records if r.get(DISCARD_ON_SAVE)] == [3, 5]
        kept = [r["id"] for r in CassetteCleaner.retained(records)]
        assert kept == [0, 1, 2, 4, 6, 7, 8, 9]

    def test_two_resources_cleaned_independently(self, test_utils):
        other = RESOURCE + "-2"
        records = [
            test_utils.create_record("DELETE", RESOURCE, 202),
            test_utils.create_record("DELETE", other, 202),
        ]
        for _ in range(3):
            records.append(test_utils.create_record("GET", RESOURCE, 200))
            records.append(test_utils.create_record("GET", other, 200))
        records.append(test_utils.create_record("GET", RESOURCE, 404))
        records.append(test_utils.create_record("GET", other, 404))
        test_utils.number_records(records)

        CassetteCleaner.from_options(CleaningOptions(deletes=True)).clean(records)

        assert [r["id"] for r in records if r.get(DISCARD_ON_SAVE)] == [4, 5]
