"""
Integration tests for MCP server entry point.

Tests that server.py registers every HireTrack tool with proper metadata and
that the wrappers work end to end against the global application store.
"""

import inspect
import os
import subprocess
import sys
from pathlib import Path

import pytest

from db.application_store import reset_store
from server import (
    available_statuses_tool,
    create_application_tool,
    delete_application_tool,
    funnel_report_tool,
    get_application_tool,
    list_applications_tool,
    mcp,
    update_application_tool,
)

TOOL_NAMES = [
    "available_statuses",
    "funnel_report",
    "create_application",
    "update_application",
    "get_application",
    "list_applications",
    "delete_application",
]


@pytest.fixture(autouse=True)
def fresh_store():
    store = reset_store()
    yield store
    reset_store()


class TestServerRegistration:
    """Tests for server metadata and tool registration."""

    def test_server_has_correct_name(self):
        """Test that the MCP server has the correct name."""
        assert mcp.name == "hiretrack-mcp-server"

    def test_server_name_can_be_overridden_by_env(self):
        """Test that HIRETRACK_SERVER_NAME is applied in a fresh process."""
        server_dir = Path(__file__).resolve().parents[1]
        env = os.environ.copy()
        env["HIRETRACK_SERVER_NAME"] = "custom-server-name"
        env["PYTHONPATH"] = str(server_dir)

        proc = subprocess.run(
            [sys.executable, "-c", "import server; print(server.mcp.name)"],
            cwd=server_dir,
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )

        assert proc.stdout.strip() == "custom-server-name"

    def test_server_has_instructions(self):
        """Test that the instructions mention the main tools."""
        assert mcp.instructions is not None
        for name in ("create_application", "update_application", "available_statuses", "funnel_report"):
            assert name in mcp.instructions

    @pytest.mark.parametrize("name", TOOL_NAMES)
    def test_tool_is_registered(self, name):
        """Test each tool is registered with a description."""
        tool = mcp._tool_manager._tools[name]
        assert tool.name == name
        assert tool.description

    def test_no_unexpected_tools(self):
        """Test the registry holds exactly the HireTrack tools."""
        assert set(mcp._tool_manager._tools) == set(TOOL_NAMES)

    def test_update_signature_requires_identity_and_names(self):
        """Test id, company and position are required parameters."""
        params = inspect.signature(update_application_tool).parameters
        for name in ("id", "company", "position"):
            assert params[name].default is inspect.Parameter.empty
        assert params["status_items"].default is None


class TestServerWrappers:
    """End-to-end tests through the server wrappers."""

    def test_application_lifecycle(self):
        """Test create, update, query and delete through the wrappers."""
        created = create_application_tool(
            company="TechCorp",
            position="Engineer",
            status_items=[{"occurred": "2026-01-05T09:00:00Z", "status": "Applied"}],
        )
        app_id = created["id"]

        assert available_statuses_tool(application_id=app_id)["available_statuses"] == [
            "Rejected",
            "Screen",
        ]

        detail = get_application_tool(id=app_id)
        applied = detail["status_items"][0]

        updated = update_application_tool(
            id=app_id,
            company="TechCorp",
            position="Engineer",
            top_job=True,
            status_items=[
                {"id": applied["id"], "occurred": applied["occurred"], "status": "Applied"},
                {"occurred": "2026-01-09T09:00:00Z", "status": "Screen"},
            ],
        )
        assert updated["status_items"]["added"] == 1

        listing = list_applications_tool(top_jobs_only=True)
        assert listing["count"] == 1
        assert listing["applications"][0]["current_status"] == "Screen"

        edges = {(e["from"], e["to"]): e["count"] for e in funnel_report_tool()["edges"]}
        assert edges[("Applied", "Responded")] == 1

        assert delete_application_tool(id=app_id) == {"id": app_id, "deleted": True}
        assert list_applications_tool()["count"] == 0

    def test_wrapper_forwards_validation_errors(self):
        """Test blank company through the wrapper."""
        result = create_application_tool(company=" ", position="Engineer")
        assert result["error"]["code"] == "VALIDATION_ERROR"

    def test_available_statuses_with_explicit_history(self):
        """Test the wrapper with an empty explicit history."""
        assert available_statuses_tool(statuses=[])["available_statuses"] == ["Applied"]

    def test_get_unknown_id(self):
        """Test NOT_FOUND through the wrapper."""
        result = get_application_tool(id="00000000-0000-0000-0000-000000000000")
        assert result["error"]["code"] == "NOT_FOUND"
