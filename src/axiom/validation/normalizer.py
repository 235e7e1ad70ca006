"""
Analysis Normalizer

Turns an untrusted, loosely-typed LLM response into a guaranteed-shape
AnalysisResponse.

Policy: coerce toward validity, drop what cannot be salvaged, and never let
an invalid nested value take down the whole object. This stage applies no
business rules (see rigor.py for score capping and action coverage).
"""

from __future__ import annotations

import math
from typing import Any

from axiom.core.enums import SCORE_CATEGORY_WEIGHTS, Priority, ScoreCategory, Severity
from axiom.core.schemas import (
    NOT_EVALUATED,
    AbstractAnalysis,
    ActionItem,
    AnalysisResponse,
    CategoryScore,
    CriticalIssue,
    DocumentClassification,
    FeedbackItem,
    LearnLink,
    ScoreBreakdown,
    ZeroIPerspective,
)


INVALID_RESPONSE_MESSAGE = "AI returned invalid response format"
DEFAULT_EXECUTIVE_SUMMARY = "Analysis completed. See detailed feedback below."
DEFAULT_SECTION = "General"
DEFAULT_RESOURCE_TOPIC = "writing_quality"

# The model sometimes answers with priority vocabulary for severities
_SEVERITY_ALIASES: dict[str, Severity] = {
    "critical": Severity.CRITICAL,
    "high": Severity.CRITICAL,
    "important": Severity.IMPORTANT,
    "medium": Severity.IMPORTANT,
    "minor": Severity.MINOR,
}


# =============================================================================
# SCALAR COERCION
# =============================================================================


def _number(value: Any) -> float | None:
    """Real int/float (bool excluded, NaN treated as absent)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def round_half_up(value: float) -> int:
    if isinstance(value, int):
        return value
    return int(math.floor(value + 0.5))


def clamp_score(value: Any, default: int = 0) -> int:
    """Round to the nearest int (halves up) and clamp to [0, 100]."""
    number = _number(value)
    if number is None:
        return default
    return round_half_up(max(0, min(100, number)))


def _text(value: Any) -> str | None:
    """Content text: a non-blank string, or a number rendered as text."""
    if isinstance(value, str):
        return value if value.strip() else None
    if _number(value) is not None:
        return str(value)
    return None


def _first_text(mapping: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        text = _text(mapping.get(key))
        if text is not None:
            return text
    return None


def normalize_severity(value: Any) -> Severity:
    if not isinstance(value, str):
        return Severity.MINOR
    return _SEVERITY_ALIASES.get(value.strip().lower(), Severity.MINOR)


def normalize_priority(value: Any) -> Priority:
    if not isinstance(value, str):
        return Priority.MEDIUM
    try:
        return Priority(value.strip().lower())
    except ValueError:
        return Priority.MEDIUM


def _objects(value: Any) -> list[dict[str, Any]]:
    """Dict elements of an array; any non-list input becomes empty."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


# =============================================================================
# FIELD NORMALIZERS
# =============================================================================


def _executive_summary(raw: dict[str, Any]) -> str:
    return _first_text(raw, "executiveSummary", "summary") or DEFAULT_EXECUTIVE_SUMMARY


def _document_classification(value: Any) -> DocumentClassification:
    if not isinstance(value, dict):
        return DocumentClassification()
    defaults = DocumentClassification()
    return DocumentClassification(
        manuscript_type=_text(value.get("manuscriptType")) or defaults.manuscript_type,
        discipline=_text(value.get("discipline")) or defaults.discipline,
        study_design=_text(value.get("studyDesign")) or defaults.study_design,
        reporting_guideline=_text(value.get("reportingGuideline")) or defaults.reporting_guideline,
    )


def _category_score(value: Any, category: ScoreCategory) -> CategoryScore:
    default_weight = SCORE_CATEGORY_WEIGHTS[category]
    if not isinstance(value, dict):
        return CategoryScore(max_weight=default_weight)

    weight = _number(value.get("maxWeight"))
    if weight is None or math.isinf(weight):
        max_weight = default_weight
    else:
        max_weight = max(0, round_half_up(weight))

    notes = value.get("notes")
    return CategoryScore(
        score=clamp_score(value.get("score")),
        max_weight=max_weight,
        notes=notes if isinstance(notes, str) and notes.strip() else NOT_EVALUATED,
    )


def _score_breakdown(value: Any) -> ScoreBreakdown:
    if not isinstance(value, dict):
        return ScoreBreakdown()
    scores = {
        category: _category_score(value.get(category.value), category)
        for category in ScoreCategory
    }
    return ScoreBreakdown.model_validate(
        {category.value: score for category, score in scores.items()}
    )


def _critical_issues(value: Any) -> list[CriticalIssue]:
    issues = []
    for item in _objects(value):
        title = _text(item.get("title"))
        if title is None:
            continue
        issues.append(
            CriticalIssue(
                title=title,
                description=_text(item.get("description")) or "",
                severity=normalize_severity(item.get("severity")),
                uma_reference=_text(item.get("umaReference")) or DEFAULT_SECTION,
            )
        )
    return issues


def _detailed_feedback(value: Any) -> list[FeedbackItem]:
    feedback = []
    for item in _objects(value):
        finding = _text(item.get("finding"))
        suggestion = _text(item.get("suggestion"))
        if finding is None and suggestion is None:
            continue
        feedback.append(
            FeedbackItem(
                section=_text(item.get("section")) or DEFAULT_SECTION,
                finding=finding or "",
                suggestion=suggestion or "",
                why_it_matters=_first_text(item, "whyItMatters", "why_it_matters") or "",
                severity=normalize_severity(item.get("severity")),
                resource_topic=_first_text(item, "resourceTopic", "resource_topic")
                or DEFAULT_RESOURCE_TOPIC,
                resource_url=_text(item.get("resourceUrl")),
                resource_source=_text(item.get("resourceSource")),
            )
        )
    return feedback


def _action_items(value: Any) -> list[ActionItem]:
    items = []
    for item in _objects(value):
        task = _text(item.get("task"))
        if task is None:
            continue
        items.append(
            ActionItem(
                task=task,
                priority=normalize_priority(item.get("priority")),
                section=_text(item.get("section")),
                completed=False,
            )
        )
    return items


def _truthy(value: Any) -> bool:
    """Loose truthiness: empty lists and objects count as true, NaN as false."""
    if isinstance(value, (list, dict)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _abstract_analysis(value: Any) -> AbstractAnalysis | None:
    if not isinstance(value, dict):
        return None
    return AbstractAnalysis(
        has_hook=_truthy(value.get("hasHook")),
        has_gap=_truthy(value.get("hasGap")),
        has_approach=_truthy(value.get("hasApproach")),
        has_findings=_truthy(value.get("hasFindings")),
        has_impact=_truthy(value.get("hasImpact")),
        feedback=_text(value.get("feedback")) or "",
    )


def _zero_i_perspective(value: Any) -> ZeroIPerspective | None:
    if not isinstance(value, dict):
        return None
    violations = value.get("violations")
    return ZeroIPerspective(
        compliant=_truthy(value.get("compliant")),
        violations=[
            text
            for text in (_text(v) for v in (violations if isinstance(violations, list) else []))
            if text is not None
        ],
        feedback=_text(value.get("feedback")) or "",
    )


def _strengths(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [s for s in value if isinstance(s, str) and s.strip()]


def _learn_links(value: Any) -> list[LearnLink]:
    links = []
    for item in _objects(value):
        title = _text(item.get("title"))
        if title is None:
            continue
        url = item.get("url")
        links.append(
            LearnLink(
                title=title,
                description=_text(item.get("description")) or "",
                topic=_text(item.get("topic")) or DEFAULT_RESOURCE_TOPIC,
                url=url if isinstance(url, str) else "",
                source=_text(item.get("source")),
            )
        )
    return links


# =============================================================================
# ENTRY POINTS
# =============================================================================


def create_empty_response(message: str = INVALID_RESPONSE_MESSAGE) -> AnalysisResponse:
    """
    Complete, well-formed response used when the raw output is unusable.

    Every nested object carries ``message`` as its feedback / notes so the UI
    can render a clear "analysis failed" state.
    """
    return AnalysisResponse(
        readiness_score=0,
        executive_summary=message,
        document_classification=DocumentClassification(),
        score_breakdown=ScoreBreakdown.with_notes(message),
        abstract_analysis=AbstractAnalysis(feedback=message),
        zero_i_perspective=ZeroIPerspective(feedback=message),
    )


def normalize_analysis(raw: Any) -> AnalysisResponse:
    """
    Normalize a raw LLM analysis into an AnalysisResponse.

    Total: never raises. Non-object input (None, strings, lists, numbers)
    yields the empty response. Unknown top-level keys are discarded.

    Args:
        raw: JSON-deserialized LLM output.

    Returns:
        AnalysisResponse with every field present and in range.
    """
    if not isinstance(raw, dict):
        return create_empty_response(INVALID_RESPONSE_MESSAGE)

    return AnalysisResponse(
        readiness_score=clamp_score(raw.get("readinessScore")),
        executive_summary=_executive_summary(raw),
        document_classification=_document_classification(raw.get("documentClassification")),
        score_breakdown=_score_breakdown(raw.get("scoreBreakdown")),
        critical_issues=_critical_issues(raw.get("criticalIssues")),
        detailed_feedback=_detailed_feedback(raw.get("detailedFeedback")),
        action_items=_action_items(raw.get("actionItems")),
        abstract_analysis=_abstract_analysis(raw.get("abstractAnalysis")),
        zero_i_perspective=_zero_i_perspective(raw.get("zeroIPerspective")),
        strengths_to_maintain=_strengths(raw.get("strengthsToMaintain")),
        learn_links=_learn_links(raw.get("learnLinks")),
    )
