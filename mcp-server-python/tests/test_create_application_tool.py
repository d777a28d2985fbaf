"""
Tests for the create_application tool handler.
"""

import pytest

from db.application_store import ApplicationStore
from tools.create_application import create_application
from tools.get_application import get_application


@pytest.fixture
def store():
    return ApplicationStore()


class TestCreateApplicationSuccess:
    """Tests for successful registration."""

    def test_minimal_request(self, store):
        """Test company and position are enough."""
        result = create_application({"company": "TechCorp", "position": "Engineer"}, store=store)

        assert "error" not in result
        assert result["status_item_count"] == 0
        assert result["application_event_count"] == 0
        assert store.count() == 1

    def test_full_request(self, store):
        """Test children and recruiter are created with fresh ids."""
        result = create_application(
            {
                "company": "TechCorp",
                "position": "Engineer",
                "salary": "120k",
                "top_job": True,
                "recruiter": {"name": "Jane Doe", "email": "jane@techcorp.example"},
                "status_items": [
                    {"occurred": "2026-01-05T09:00:00Z", "status": "Applied"},
                    {"occurred": "2026-01-09T09:00:00Z", "status": "Screen"},
                ],
                "application_events": [
                    {"occurred": "2026-01-09T10:00:00Z", "description": "Intro call"},
                ],
            },
            store=store,
        )

        assert result["status_item_count"] == 2
        assert result["application_event_count"] == 1

        detail = get_application({"id": result["id"]}, store=store)
        assert detail["top_job"] is True
        assert detail["salary"] == "120k"
        assert detail["recruiter"]["name"] == "Jane Doe"
        assert detail["recruiter"]["phone"] is None
        assert [i["status"] for i in detail["status_items"]] == ["Applied", "Screen"]
        assert detail["application_events"][0]["description"] == "Intro call"

    def test_supplied_child_ids_are_ignored(self, store):
        """Test that create always assigns new child identities."""
        supplied = "00000000-0000-0000-0000-000000000001"
        result = create_application(
            {
                "company": "TechCorp",
                "position": "Engineer",
                "status_items": [
                    {"id": supplied, "occurred": "2026-01-05T09:00:00Z", "status": "Applied"}
                ],
            },
            store=store,
        )

        detail = get_application({"id": result["id"]}, store=store)
        assert detail["status_items"][0]["id"] != supplied

    def test_naive_timestamps_are_accepted(self, store):
        """Test timestamps without offset are stored as UTC."""
        result = create_application(
            {
                "company": "TechCorp",
                "position": "Engineer",
                "status_items": [{"occurred": "2026-01-05T09:00:00", "status": "Applied"}],
            },
            store=store,
        )
        assert "error" not in result

    def test_unknown_fields_are_ignored(self, store):
        """Test extra keys do not fail validation."""
        result = create_application(
            {"company": "TechCorp", "position": "Engineer", "favourite": True}, store=store
        )
        assert "error" not in result

    def test_each_call_creates_new_application(self, store):
        """Test creation is not deduplicated."""
        first = create_application({"company": "TechCorp", "position": "Engineer"}, store=store)
        second = create_application({"company": "TechCorp", "position": "Engineer"}, store=store)
        assert first["id"] != second["id"]
        assert store.count() == 2


class TestCreateApplicationValidation:
    """Tests for rejected requests."""

    @pytest.mark.parametrize(
        "args,message",
        [
            ({"position": "Engineer"}, "Company is required."),
            ({"company": "   ", "position": "Engineer"}, "Company is required."),
            ({"company": "TechCorp"}, "Position is required."),
            ({"company": "TechCorp", "position": ""}, "Position is required."),
        ],
    )
    def test_required_fields(self, store, args, message):
        """Test blank or missing company/position."""
        result = create_application(args, store=store)

        assert result["error"]["code"] == "VALIDATION_ERROR"
        assert result["error"]["message"] == message
        assert result["error"]["retryable"] is False
        assert store.count() == 0

    def test_unknown_status(self, store):
        """Test a status outside the vocabulary is rejected."""
        result = create_application(
            {
                "company": "TechCorp",
                "position": "Engineer",
                "status_items": [{"occurred": "2026-01-05T09:00:00Z", "status": "Ghosted"}],
            },
            store=store,
        )

        assert result["error"]["code"] == "VALIDATION_ERROR"
        assert result["error"]["message"].startswith("Invalid status_items[0].status")

    def test_blank_event_description(self, store):
        """Test notes need a description."""
        result = create_application(
            {
                "company": "TechCorp",
                "position": "Engineer",
                "application_events": [{"occurred": "2026-01-05T09:00:00Z", "description": " "}],
            },
            store=store,
        )

        assert result["error"]["message"] == "Description is required."

    def test_recruiter_requires_name(self, store):
        """Test a recruiter without a name is rejected."""
        result = create_application(
            {"company": "TechCorp", "position": "Engineer", "recruiter": {"name": ""}},
            store=store,
        )

        assert result["error"]["message"] == "Recruiter name is required."
