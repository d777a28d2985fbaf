"""
Unit tests for funnel aggregation.

Tests edge classification, aggregate counts and the deterministic ordering
of the funnel report.
"""

from datetime import datetime, timedelta, timezone

import pytest

from models.application import JobApplication, StatusItem
from models.status import ApplicationStatus
from utils.funnel_report import (
    FUNNEL_EDGES,
    FunnelEdge,
    classify_application,
    generate_funnel,
    initialize_edges,
)

S = ApplicationStatus
BASE = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


def make_application(*statuses, company="TechCorp"):
    """Build an application whose history holds one item per status, a day apart."""
    return JobApplication(
        company=company,
        position="Engineer",
        status_items=[
            StatusItem(occurred=BASE + timedelta(days=offset), status=status)
            for offset, status in enumerate(statuses)
        ],
    )


def counts(edges):
    return {edge.key: edge.count for edge in edges}


class TestFunnelEdge:
    """Tests for FunnelEdge."""

    def test_key_and_dict(self):
        """Test the edge key and wire dictionary."""
        edge = FunnelEdge("Applied", "Responded", count=2)
        assert edge.key == "Applied->Responded"
        assert edge.to_dict() == {"from": "Applied", "to": "Responded", "count": 2}

    def test_increment(self):
        """Test counting up."""
        edge = FunnelEdge("Interview", "Offer")
        edge.increment()
        edge.increment()
        assert edge.count == 2

    def test_equality(self):
        """Test value equality."""
        assert FunnelEdge("A", "B", 1) == FunnelEdge("A", "B", 1)
        assert FunnelEdge("A", "B", 1) != FunnelEdge("A", "B", 2)

    def test_initialize_edges_order(self):
        """Test the six edges in canonical order."""
        edges = initialize_edges()
        assert [(e.from_stage, e.to_stage) for e in edges] == list(FUNNEL_EDGES)
        assert [e.key for e in edges] == [
            "Applied->No Response",
            "Applied->Responded",
            "Responded->Rejected",
            "Responded->Interview",
            "Interview->Offer",
            "Interview->No Offer",
        ]


class TestClassifyApplication:
    """Tests for per-application classification."""

    def test_empty_history(self):
        """Test that an empty history contributes nothing."""
        assert classify_application([]) == []

    def test_single_event_is_no_response(self):
        """Test a single event counts as no response."""
        assert classify_application([S.APPLIED]) == ["Applied->No Response"]

    def test_single_event_ignores_its_status(self):
        """Test that a lone Offer is still no response."""
        assert classify_application([S.OFFER]) == ["Applied->No Response"]

    def test_rejection_stops_processing(self):
        """Test rejected histories only count response and rejection."""
        assert classify_application([S.APPLIED, S.REJECTED]) == [
            "Applied->Responded",
            "Responded->Rejected",
        ]

    def test_rejection_after_interview(self):
        """Test a rejection wins even after reaching Interview."""
        assert classify_application([S.APPLIED, S.SCREEN, S.INTERVIEW, S.REJECTED]) == [
            "Applied->Responded",
            "Responded->Rejected",
        ]

    def test_full_path_with_offer(self):
        """Test a complete successful history."""
        assert classify_application([S.APPLIED, S.SCREEN, S.INTERVIEW, S.OFFER]) == [
            "Applied->Responded",
            "Responded->Interview",
            "Interview->Offer",
        ]

    def test_interview_without_offer(self):
        """Test histories that reached interview without an offer."""
        assert classify_application([S.APPLIED, S.INTERVIEW, S.NO_OFFER]) == [
            "Applied->Responded",
            "Responded->Interview",
            "Interview->No Offer",
        ]

    def test_withdrawn_without_response_falls_through_to_no_offer(self):
        """Test the preserved fall-through for non-responded histories."""
        assert classify_application([S.APPLIED, S.WITHDRAWN]) == ["Interview->No Offer"]

    def test_duplicate_applied_counts_as_multi_event(self):
        """Test that event count, not distinct statuses, decides no-response."""
        assert classify_application([S.APPLIED, S.APPLIED]) == ["Interview->No Offer"]

    def test_accepts_status_items(self):
        """Test classification of StatusItem objects."""
        history = make_application(S.APPLIED, S.SCREEN).status_items
        assert classify_application(history) == [
            "Applied->Responded",
            "Responded->Interview",
            "Interview->No Offer",
        ]


class TestGenerateFunnel:
    """Tests for generate_funnel."""

    def test_empty_input_returns_six_zero_edges(self):
        """Test that the report always has six edges."""
        edges = generate_funnel([])
        assert len(edges) == 6
        assert all(edge.count == 0 for edge in edges)

    def test_none_input(self):
        """Test None is treated as an empty batch."""
        assert generate_funnel(None) == initialize_edges()

    def test_empty_input_keeps_canonical_order(self):
        """Test tie-break order when every count is zero."""
        assert [e.key for e in generate_funnel([])] == [e.key for e in initialize_edges()]

    def test_application_without_history_is_skipped(self):
        """Test that empty histories add nothing."""
        edges = generate_funnel([make_application()])
        assert all(edge.count == 0 for edge in edges)

    def test_single_applied(self):
        """Test one unanswered application."""
        result = counts(generate_funnel([make_application(S.APPLIED)]))
        assert result["Applied->No Response"] == 1
        assert sum(result.values()) == 1

    def test_applied_then_rejected(self):
        """Test one rejected application."""
        result = counts(generate_funnel([make_application(S.APPLIED, S.REJECTED)]))
        assert result["Applied->Responded"] == 1
        assert result["Responded->Rejected"] == 1
        assert sum(result.values()) == 2

    def test_full_offer_path(self):
        """Test one successful application."""
        result = counts(
            generate_funnel([make_application(S.APPLIED, S.SCREEN, S.INTERVIEW, S.OFFER)])
        )
        assert result["Applied->Responded"] == 1
        assert result["Responded->Interview"] == 1
        assert result["Interview->Offer"] == 1
        assert result["Interview->No Offer"] == 0
        assert result["Responded->Rejected"] == 0

    def test_sorted_descending(self):
        """Test three unanswered and two rejected applications."""
        applications = [make_application(S.APPLIED) for _ in range(3)] + [
            make_application(S.APPLIED, S.REJECTED) for _ in range(2)
        ]
        edges = generate_funnel(applications)

        assert edges[0].key == "Applied->No Response"
        assert edges[0].count == 3
        assert [e.count for e in edges] == [3, 2, 2, 0, 0, 0]

    def test_ties_keep_canonical_order(self):
        """Test that equal counts keep initialization order."""
        edges = generate_funnel([make_application(S.APPLIED, S.REJECTED)])
        assert [e.key for e in edges] == [
            "Applied->Responded",
            "Responded->Rejected",
            "Applied->No Response",
            "Responded->Interview",
            "Interview->Offer",
            "Interview->No Offer",
        ]

    def test_unsorted_storage_order(self):
        """Test that storage order of the history does not matter."""
        application = make_application(S.OFFER, S.INTERVIEW, S.APPLIED)
        result = counts(generate_funnel([application]))
        assert result["Interview->Offer"] == 1
        assert result["Responded->Interview"] == 1

    def test_bare_histories(self):
        """Test that plain status lists are accepted as applications."""
        result = counts(generate_funnel([[S.APPLIED], [S.APPLIED, S.REJECTED]]))
        assert result["Applied->No Response"] == 1
        assert result["Responded->Rejected"] == 1

    @pytest.mark.parametrize(
        "history,expected_key",
        [
            ([S.APPLIED, S.SCREEN, S.INTERVIEW, S.OFFER], "Interview->Offer"),
            ([S.APPLIED, S.SCREEN, S.INTERVIEW, S.NO_OFFER], "Interview->No Offer"),
            ([S.APPLIED, S.SCREEN, S.INTERVIEW, S.WITHDRAWN], "Interview->No Offer"),
        ],
    )
    def test_interview_outcomes(self, history, expected_key):
        """Test each interview outcome lands on the expected edge."""
        assert counts(generate_funnel([make_application(*history)]))[expected_key] == 1

    def test_fresh_edges_per_call(self):
        """Test counts do not leak between calls."""
        generate_funnel([make_application(S.APPLIED)])
        edges = generate_funnel([])
        assert all(edge.count == 0 for edge in edges)
