"""
Unit Tests for Rigor Enforcement

Score capping, critical-issue action coverage and rigor warnings.
"""

import pytest

from axiom.config import RigorSettings
from axiom.core.enums import Priority, Severity
from axiom.core.schemas import ActionItem, AnalysisResponse, CriticalIssue, FeedbackItem
from axiom.validation.rigor import (
    apply_rigor,
    cap_readiness_score,
    collect_rigor_warnings,
    enforce_rigor,
    quoting_rate,
    score_cap_for,
)


def critical(title: str, section: str = "Methods") -> CriticalIssue:
    return CriticalIssue(title=title, severity=Severity.CRITICAL, uma_reference=section)


def make_response(**kwargs) -> AnalysisResponse:
    kwargs.setdefault("executive_summary", "Summary")
    return AnalysisResponse(**kwargs)


class TestScoreCaps:
    """Tests for readiness score capping."""

    @pytest.mark.parametrize(
        "count,cap",
        [(0, None), (1, 80), (2, 80), (3, 65), (4, 65), (5, 55), (12, 55)],
    )
    def test_cap_table(self, count: int, cap) -> None:
        assert score_cap_for(count) == cap

    def test_cap_only_lowers(self) -> None:
        assert cap_readiness_score(95, 1) == 80
        assert cap_readiness_score(40, 5) == 40
        assert cap_readiness_score(100, 0) == 100

    def test_five_critical_issues(self) -> None:
        response = make_response(
            readiness_score=90, critical_issues=[critical(f"Issue {i}") for i in range(5)]
        )
        assert enforce_rigor(response).readiness_score == 55

    def test_three_critical_issues(self) -> None:
        response = make_response(
            readiness_score=85, critical_issues=[critical(f"Issue {i}") for i in range(3)]
        )
        assert enforce_rigor(response).readiness_score == 65

    def test_non_critical_issues_do_not_cap(self) -> None:
        issues = [
            CriticalIssue(title="Minor", severity=Severity.MINOR),
            CriticalIssue(title="Important", severity=Severity.IMPORTANT),
        ]
        response = make_response(readiness_score=92, critical_issues=issues)
        assert enforce_rigor(response).readiness_score == 92


class TestActionCoverage:
    """Tests for high-priority action synthesis."""

    def test_synthesizes_missing_actions(self) -> None:
        response = make_response(
            critical_issues=[critical("No ethics approval", "Ethics"), critical("No sample size")]
        )
        enforced, report = apply_rigor(response)

        tasks = [(a.task, a.priority, a.section) for a in enforced.action_items]
        assert tasks == [
            ("Address critical issue: No ethics approval", Priority.HIGH, "Ethics"),
            ("Address critical issue: No sample size", Priority.HIGH, "Methods"),
        ]
        assert all(a.completed is False for a in enforced.action_items)
        assert len(report.synthesized_actions) == 2

    def test_existing_high_priority_items_suffice(self) -> None:
        response = make_response(
            critical_issues=[critical("A")],
            action_items=[ActionItem(task="Fix A", priority=Priority.HIGH)],
        )
        enforced = enforce_rigor(response)
        assert [a.task for a in enforced.action_items] == ["Fix A"]

    def test_matching_task_promoted_not_duplicated(self) -> None:
        response = make_response(
            critical_issues=[critical("Missing CONSORT diagram")],
            action_items=[
                ActionItem(task="address critical issue: missing consort diagram", priority=Priority.LOW)
            ],
        )
        enforced, report = apply_rigor(response)
        assert len(enforced.action_items) == 1
        assert enforced.action_items[0].priority == Priority.HIGH
        assert report.synthesized_actions == []
        assert len(report.promoted_actions) == 1

    def test_duplicate_titles_each_get_a_task(self) -> None:
        response = make_response(critical_issues=[critical("Same"), critical("Same")])
        enforced = enforce_rigor(response)
        assert enforced.high_priority_count == 2

    def test_non_critical_severity_issues_also_covered(self) -> None:
        response = make_response(
            critical_issues=[
                critical("A"),
                CriticalIssue(title="B", severity=Severity.IMPORTANT, uma_reference="Results"),
            ]
        )
        enforced, report = apply_rigor(response)

        assert [a.task for a in enforced.action_items] == [
            "Address critical issue: A",
            "Address critical issue: B",
        ]
        assert enforced.critical_count == 1
        assert enforced.high_priority_count == 2
        assert enforced.action_items[1].section == "Results"
        assert len(report.synthesized_actions) == 2

    def test_high_count_reaches_critical_count(self) -> None:
        response = make_response(
            readiness_score=99,
            critical_issues=[critical(f"Issue {i}") for i in range(4)],
            action_items=[ActionItem(task="Existing", priority=Priority.HIGH)],
        )
        enforced = enforce_rigor(response)
        assert enforced.high_priority_count >= enforced.critical_count
        assert enforced.readiness_score == 65

    def test_input_not_mutated(self) -> None:
        response = make_response(readiness_score=90, critical_issues=[critical("A")])
        enforce_rigor(response)
        assert response.readiness_score == 90
        assert response.action_items == []

    def test_idempotent(self) -> None:
        response = make_response(
            readiness_score=97,
            critical_issues=[critical(f"Issue {i}") for i in range(3)],
            action_items=[ActionItem(task="Other", priority=Priority.LOW)],
        )
        once = enforce_rigor(response)
        assert enforce_rigor(once) == once


class TestRigorWarnings:
    """Tests for advisory quality warnings."""

    def test_empty_response_warns_about_counts_only(self) -> None:
        warnings = collect_rigor_warnings(make_response())
        assert warnings == [
            "Low feedback count: 0 items (target: ≥20)",
            "Low action item count: 0 items (target: ≥15)",
        ]

    def test_quoting_rate_warning(self) -> None:
        feedback = [FeedbackItem(finding="No quotes here") for _ in range(3)]
        feedback.append(FeedbackItem(finding='Quotes "this"'))
        response = make_response(detailed_feedback=feedback)
        assert quoting_rate(response) == 0.25
        warnings = collect_rigor_warnings(response)
        assert "Low quoting rate: 25% of feedback items quote manuscript text (target: ≥50%)" in warnings

    @pytest.mark.parametrize("quote", ['"', "'", "“", "”", "‘", "’"])
    def test_any_quote_character_counts(self, quote: str) -> None:
        response = make_response(detailed_feedback=[FeedbackItem(finding=f"The {quote}text")])
        assert quoting_rate(response) == 1.0

    def test_no_feedback_means_no_quoting_warning(self) -> None:
        assert quoting_rate(make_response()) is None

    def test_thresholds_from_settings(self) -> None:
        settings = RigorSettings(min_feedback_items=0, min_action_items=0, min_quoting_rate=0.0)
        response = make_response(detailed_feedback=[FeedbackItem(finding="plain")])
        assert collect_rigor_warnings(response, settings) == []

    def test_warnings_do_not_change_response(self) -> None:
        response = make_response(readiness_score=40)
        collect_rigor_warnings(response)
        assert response == make_response(readiness_score=40)
