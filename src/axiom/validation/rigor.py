"""
Rigor Enforcer

Business rules applied to an already-normalized AnalysisResponse:

1. Score-consistency capping: a report listing critical issues cannot claim
   a high readiness score.
2. Action-item coverage: every critical issue gets at least one high-priority
   remediation task.
3. Rigor warnings: advisory signals about the audit output itself (too few
   feedback or action items, findings that do not quote the manuscript).
   Warnings never change the returned data.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from axiom.config import RigorSettings
from axiom.core.enums import Priority
from axiom.core.schemas import ActionItem, AnalysisResponse
from axiom.validation.normalizer import DEFAULT_SECTION, round_half_up


# (minimum critical issues, maximum readiness score); first matching row wins
CRITICAL_SCORE_CAPS: tuple[tuple[int, int], ...] = (
    (5, 55),
    (3, 65),
    (1, 80),
)

QUOTE_CHARACTERS = ('"', "'", "“", "”", "‘", "’")

COVERAGE_TASK_TEMPLATE = "Address critical issue: {title}"


@dataclass
class RigorReport:
    """What the enforcement pass changed."""

    original_score: int
    capped_score: int
    synthesized_actions: list[str] = field(default_factory=list)
    promoted_actions: list[str] = field(default_factory=list)

    @property
    def was_capped(self) -> bool:
        return self.capped_score != self.original_score


def score_cap_for(critical_count: int) -> int | None:
    """Cap applying to ``critical_count`` critical issues, or None."""
    for minimum, cap in CRITICAL_SCORE_CAPS:
        if critical_count >= minimum:
            return cap
    return None


def cap_readiness_score(score: int, critical_count: int) -> int:
    cap = score_cap_for(critical_count)
    if cap is not None and score > cap:
        return cap
    return score


def _cover_critical_issues(
    response: AnalysisResponse, report: RigorReport
) -> list[ActionItem]:
    """
    Action items with a high-priority task covering each listed issue.

    Runs when high-priority tasks are fewer than critical issues, then covers
    every listed issue whatever its severity. Each issue claims at most one
    existing task whose text matches its coverage task (case-insensitive),
    promoting it to high priority; otherwise a new task is appended.
    """
    items = list(response.action_items)
    if response.high_priority_count >= response.critical_count:
        return items

    claimed: set[int] = set()
    for issue in response.critical_issues:
        task = COVERAGE_TASK_TEMPLATE.format(title=issue.title)
        match = next(
            (
                index
                for index, item in enumerate(items)
                if index not in claimed and item.task.lower() == task.lower()
            ),
            None,
        )
        if match is None:
            items.append(
                ActionItem(
                    task=task,
                    priority=Priority.HIGH,
                    section=issue.uma_reference or DEFAULT_SECTION,
                    completed=False,
                )
            )
            claimed.add(len(items) - 1)
            report.synthesized_actions.append(task)
            continue

        claimed.add(match)
        if items[match].priority != Priority.HIGH:
            items[match] = items[match].model_copy(update={"priority": Priority.HIGH})
            report.promoted_actions.append(items[match].task)
    return items


def apply_rigor(response: AnalysisResponse) -> tuple[AnalysisResponse, RigorReport]:
    """Apply score capping and action coverage, reporting what changed."""
    critical_count = response.critical_count
    report = RigorReport(
        original_score=response.readiness_score,
        capped_score=cap_readiness_score(response.readiness_score, critical_count),
    )
    action_items = _cover_critical_issues(response, report)
    enforced = response.model_copy(
        update={"readiness_score": report.capped_score, "action_items": action_items}
    )
    return enforced, report


def enforce_rigor(response: AnalysisResponse) -> AnalysisResponse:
    """
    Enforce score consistency and critical-issue coverage.

    Pure: returns a new AnalysisResponse, the input is left untouched.
    """
    enforced, _ = apply_rigor(response)
    return enforced


def quoting_rate(response: AnalysisResponse) -> float | None:
    """Share of feedback findings quoting the manuscript; None without feedback."""
    if not response.detailed_feedback:
        return None
    quoting = sum(
        1
        for item in response.detailed_feedback
        if any(quote in item.finding for quote in QUOTE_CHARACTERS)
    )
    return quoting / len(response.detailed_feedback)


def collect_rigor_warnings(
    response: AnalysisResponse, settings: RigorSettings | None = None
) -> list[str]:
    """
    Quality-shortfall diagnostics for an audit response.

    Args:
        response: Normalized (and usually enforced) analysis.
        settings: Thresholds; defaults to RigorSettings().

    Returns:
        Human-readable warnings, empty when the output meets every threshold.
    """
    settings = settings or RigorSettings()
    warnings: list[str] = []

    feedback_count = len(response.detailed_feedback)
    if feedback_count < settings.min_feedback_items:
        warnings.append(
            f"Low feedback count: {feedback_count} items "
            f"(target: ≥{settings.target_feedback_items})"
        )

    action_count = len(response.action_items)
    if action_count < settings.min_action_items:
        warnings.append(
            f"Low action item count: {action_count} items "
            f"(target: ≥{settings.target_action_items})"
        )

    rate = quoting_rate(response)
    if rate is not None and rate < settings.min_quoting_rate:
        warnings.append(
            f"Low quoting rate: {round_half_up(rate * 100)}% of feedback items quote manuscript text "
            f"(target: ≥{round_half_up(settings.target_quoting_rate * 100)}%)"
        )

    return warnings
