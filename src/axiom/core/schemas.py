"""
Axiom Core Schemas

This module defines all Pydantic models (schemas) used throughout the Axiom system.
These schemas represent the validated domain model handed to persistence and
rendering layers.

Key Design Principles:
1. All schemas are immutable (frozen=True); re-audits produce new objects
2. Python attributes are snake_case, the persisted JSON is camelCase (by_alias)
3. Validated analyses have a guaranteed shape: every score is an int in [0, 100]
   and the score breakdown always carries exactly the nine fixed categories
4. Rigor warnings travel beside the analysis, never inside it
"""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from axiom.core.enums import (
    SCORE_CATEGORY_WEIGHTS,
    Confidence,
    ManuscriptStage,
    PaperType,
    Priority,
    ScoreCategory,
    Severity,
)


class AxiomModel(BaseModel):
    """Base for wire-facing models: frozen, camelCase aliases, name population allowed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON document stored by persistence."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# ANALYSIS RESPONSE - Validated LLM audit output
# =============================================================================


NOT_EVALUATED = "Not evaluated"


class DocumentClassification(AxiomModel):
    """How the LLM classified the manuscript."""

    manuscript_type: str = "Unknown"
    discipline: str = "Unknown"
    study_design: str = "Unknown"
    reporting_guideline: str = "N/A"


class CategoryScore(AxiomModel):
    """Score for one breakdown category."""

    score: int = Field(default=0, ge=0, le=100)
    max_weight: int = Field(default=0, ge=0)
    notes: str = NOT_EVALUATED


def _category_default(category: ScoreCategory) -> Any:
    return lambda: CategoryScore(max_weight=SCORE_CATEGORY_WEIGHTS[category])


class ScoreBreakdown(AxiomModel):
    """
    Per-category scores.

    Invariants:
    - Exactly the nine ScoreCategory keys, no more, no fewer
    - Missing categories carry score 0, their default weight and "Not evaluated"
    """

    title_and_keywords: CategoryScore = Field(
        default_factory=_category_default(ScoreCategory.TITLE_AND_KEYWORDS)
    )
    abstract: CategoryScore = Field(default_factory=_category_default(ScoreCategory.ABSTRACT))
    introduction: CategoryScore = Field(
        default_factory=_category_default(ScoreCategory.INTRODUCTION)
    )
    methods: CategoryScore = Field(default_factory=_category_default(ScoreCategory.METHODS))
    results: CategoryScore = Field(default_factory=_category_default(ScoreCategory.RESULTS))
    discussion: CategoryScore = Field(default_factory=_category_default(ScoreCategory.DISCUSSION))
    ethics_and_transparency: CategoryScore = Field(
        default_factory=_category_default(ScoreCategory.ETHICS_AND_TRANSPARENCY)
    )
    writing_quality: CategoryScore = Field(
        default_factory=_category_default(ScoreCategory.WRITING_QUALITY)
    )
    zero_i_perspective: CategoryScore = Field(
        default_factory=_category_default(ScoreCategory.ZERO_I_PERSPECTIVE)
    )

    @classmethod
    def with_notes(cls, notes: str) -> ScoreBreakdown:
        """Breakdown where every category is unscored and annotated with ``notes``."""
        return cls(
            **{
                _ATTRIBUTE_BY_CATEGORY[category]: CategoryScore(max_weight=weight, notes=notes)
                for category, weight in SCORE_CATEGORY_WEIGHTS.items()
            }
        )

    def get(self, category: ScoreCategory) -> CategoryScore:
        return getattr(self, _ATTRIBUTE_BY_CATEGORY[category])

    def items(self) -> Iterator[tuple[ScoreCategory, CategoryScore]]:
        for category in ScoreCategory:
            yield category, self.get(category)


_ATTRIBUTE_BY_CATEGORY: dict[ScoreCategory, str] = {
    ScoreCategory.TITLE_AND_KEYWORDS: "title_and_keywords",
    ScoreCategory.ABSTRACT: "abstract",
    ScoreCategory.INTRODUCTION: "introduction",
    ScoreCategory.METHODS: "methods",
    ScoreCategory.RESULTS: "results",
    ScoreCategory.DISCUSSION: "discussion",
    ScoreCategory.ETHICS_AND_TRANSPARENCY: "ethics_and_transparency",
    ScoreCategory.WRITING_QUALITY: "writing_quality",
    ScoreCategory.ZERO_I_PERSPECTIVE: "zero_i_perspective",
}


class CriticalIssue(AxiomModel):
    """A flagged problem severe enough to risk rejection."""

    title: str
    description: str = ""
    severity: Severity = Severity.MINOR
    uma_reference: str = "General"


class FeedbackItem(AxiomModel):
    """A single finding with its remediation."""

    section: str = "General"
    finding: str = ""
    suggestion: str = ""
    why_it_matters: str = ""
    severity: Severity = Severity.MINOR
    resource_topic: str = "writing_quality"
    resource_url: str | None = None
    resource_source: str | None = None


class ActionItem(AxiomModel):
    """
    A discrete remediation task.

    ``completed`` is always False right after validation: completion state is
    owned by the application, not by the model output.
    """

    task: str
    priority: Priority = Priority.MEDIUM
    section: str | None = None
    completed: bool = False


class AbstractAnalysis(AxiomModel):
    """Five rhetorical moves of the abstract."""

    has_hook: bool = False
    has_gap: bool = False
    has_approach: bool = False
    has_findings: bool = False
    has_impact: bool = False
    feedback: str = ""


class ZeroIPerspective(AxiomModel):
    """First-person-pronoun compliance."""

    compliant: bool = False
    violations: list[str] = Field(default_factory=list)
    feedback: str = ""


class LearnLink(AxiomModel):
    """Learning resource recommended alongside the audit."""

    title: str
    description: str = ""
    topic: str = "writing_quality"
    url: str = ""
    source: str | None = None


class AnalysisResponse(AxiomModel):
    """
    Validated audit analysis.

    Invariants:
    - readiness_score is an int in [0, 100]
    - score_breakdown has exactly the nine fixed categories
    - abstract_analysis / zero_i_perspective are None when not evaluated,
      which is distinct from "evaluated and compliant"
    """

    readiness_score: int = Field(default=0, ge=0, le=100)
    executive_summary: str
    document_classification: DocumentClassification = Field(
        default_factory=DocumentClassification
    )
    score_breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    critical_issues: list[CriticalIssue] = Field(default_factory=list)
    detailed_feedback: list[FeedbackItem] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)
    abstract_analysis: AbstractAnalysis | None = None
    zero_i_perspective: ZeroIPerspective | None = None
    strengths_to_maintain: list[str] = Field(default_factory=list)
    learn_links: list[LearnLink] = Field(default_factory=list)

    @property
    def critical_count(self) -> int:
        """Number of issues with critical severity."""
        return sum(1 for issue in self.critical_issues if issue.severity == Severity.CRITICAL)

    @property
    def high_priority_count(self) -> int:
        """Number of high-priority action items."""
        return sum(1 for item in self.action_items if item.priority == Priority.HIGH)


class ValidationOutcome(AxiomModel):
    """Validated analysis plus the diagnostics collected while validating it."""

    response: AnalysisResponse
    rigor_warnings: list[str] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """Persisted form: the analysis alone, warnings stay diagnostic."""
        return self.response.to_document()


# =============================================================================
# PAPER TYPE DETECTION
# =============================================================================


class DetectionResult(AxiomModel):
    """Best-guess paper type for a manuscript."""

    detected_type: PaperType
    confidence: Confidence
    explanation: str
    keywords_found: dict[str, list[str]] = Field(default_factory=dict)
    top_match_count: int = Field(default=0, ge=0)


class LoadedModules(AxiomModel):
    """Knowledge-base module files selected for a paper type."""

    files: list[str]
    content: str


# =============================================================================
# GAMIFICATION
# =============================================================================


class StreakResult(AxiomModel):
    """New streak value and the activity date it was computed for (YYYY-MM-DD)."""

    streak: int
    date_str: str


class UserProgress(AxiomModel):
    """Persisted gamification fields of a user."""

    xp: int = 0
    level: int = 1
    streak: int = 0
    last_active_date: str | None = None


# =============================================================================
# CITATIONS
# =============================================================================


class ReferenceEntry(AxiomModel):
    """A single parsed reference-list entry."""

    text: str
    year: int | None = None
    has_doi_or_url: bool = False


class CitationStats(AxiomModel):
    with_doi: int = 0
    recent_five_years: int = 0
    oldest_year: int | None = None
    newest_year: int | None = None


class CitationReport(AxiomModel):
    """Heuristic citation audit of manuscript text."""

    in_text_citation_count: int = 0
    reference_count: int = 0
    citation_style: str = "author-year"
    has_reference_section: bool = False
    references: list[ReferenceEntry] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    stats: CitationStats = Field(default_factory=CitationStats)


# =============================================================================
# AUDIT
# =============================================================================


class AuditRequest(AxiomModel):
    """Everything needed to run one manuscript audit."""

    manuscript_text: str
    system_prompt: str
    paper_type: PaperType = PaperType.GENERIC
    help_types: list[str] = Field(default_factory=list)
    stage: ManuscriptStage = ManuscriptStage.DRAFT


class AuditHistoryEntry(AxiomModel):
    """Snapshot appended to a manuscript's audit history for trend display."""

    readiness_score: int
    paper_type: PaperType
    help_types: list[str] = Field(default_factory=list)
    summary: str = ""
    critical_issue_count: int = 0
    feedback_count: int = 0
    action_item_count: int = 0
    score_breakdown: ScoreBreakdown | None = None


class AuditReport(AxiomModel):
    """Result of a completed audit."""

    analysis: AnalysisResponse
    rigor_warnings: list[str] = Field(default_factory=list)
    paper_type: PaperType
    paper_type_label: str
    modules_used: list[str] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """Analysis document with the audit metadata the UI displays."""
        document = self.analysis.to_document()
        document["paperType"] = self.paper_type.value
        document["paperTypeLabel"] = self.paper_type_label
        document["modulesUsed"] = list(self.modules_used)
        return document

    def to_history_entry(self, help_types: list[str] | None = None) -> AuditHistoryEntry:
        return AuditHistoryEntry(
            readiness_score=self.analysis.readiness_score,
            paper_type=self.paper_type,
            help_types=list(help_types or []),
            summary=self.analysis.executive_summary,
            critical_issue_count=len(self.analysis.critical_issues),
            feedback_count=len(self.analysis.detailed_feedback),
            action_item_count=len(self.analysis.action_items),
            score_breakdown=self.analysis.score_breakdown,
        )
