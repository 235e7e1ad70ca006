"""
Unit Tests for Core Schemas

Tests validation rules and invariants defined in schemas.py.
"""

import pytest
from pydantic import ValidationError

from axiom.core.enums import SCORE_CATEGORY_WEIGHTS, PaperType, Priority, ScoreCategory
from axiom.core.schemas import (
    NOT_EVALUATED,
    ActionItem,
    AnalysisResponse,
    AuditReport,
    CategoryScore,
    ScoreBreakdown,
    UserProgress,
    ValidationOutcome,
)


class TestScoreBreakdown:
    """Tests for ScoreBreakdown schema."""

    def test_defaults_cover_every_category(self) -> None:
        breakdown = ScoreBreakdown()
        for category, score in breakdown.items():
            assert score.max_weight == SCORE_CATEGORY_WEIGHTS[category]
            assert score.notes == NOT_EVALUATED
            assert score.score == 0

    def test_weights_sum_to_100(self) -> None:
        assert sum(SCORE_CATEGORY_WEIGHTS.values()) == 100

    def test_serializes_wire_names(self) -> None:
        document = ScoreBreakdown().to_document()
        assert list(document) == [c.value for c in ScoreCategory]

    def test_with_notes(self) -> None:
        breakdown = ScoreBreakdown.with_notes("failed")
        assert all(score.notes == "failed" for _, score in breakdown.items())

    def test_get_by_category(self) -> None:
        assert ScoreBreakdown().get(ScoreCategory.METHODS).max_weight == 15


class TestCategoryScore:
    def test_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            CategoryScore(score=101)
        with pytest.raises(ValidationError):
            CategoryScore(score=-1)

    def test_immutable(self) -> None:
        score = CategoryScore(score=50)
        with pytest.raises(ValidationError):
            score.score = 60


class TestAnalysisResponse:
    """Tests for AnalysisResponse schema."""

    def test_populate_by_alias_or_name(self) -> None:
        by_alias = AnalysisResponse.model_validate({"readinessScore": 60, "executiveSummary": "S"})
        by_name = AnalysisResponse(readiness_score=60, executive_summary="S")
        assert by_alias == by_name

    def test_readiness_bounds(self) -> None:
        with pytest.raises(ValidationError):
            AnalysisResponse(readiness_score=120, executive_summary="S")

    def test_optional_objects_omitted_from_document(self) -> None:
        document = AnalysisResponse(executive_summary="S").to_document()
        assert "abstractAnalysis" not in document
        assert "zeroIPerspective" not in document
        assert document["documentClassification"]["reportingGuideline"] == "N/A"

    def test_action_item_section_optional(self) -> None:
        document = ActionItem(task="T").to_document()
        assert document == {"task": "T", "priority": "medium", "completed": False}

    def test_high_priority_count(self) -> None:
        response = AnalysisResponse(
            executive_summary="S",
            action_items=[ActionItem(task="A", priority=Priority.HIGH), ActionItem(task="B")],
        )
        assert response.high_priority_count == 1


class TestValidationOutcome:
    def test_document_excludes_warnings(self) -> None:
        outcome = ValidationOutcome(
            response=AnalysisResponse(executive_summary="S"), rigor_warnings=["Low feedback count"]
        )
        document = outcome.to_document()
        assert "rigorWarnings" not in document
        assert document["executiveSummary"] == "S"


class TestAuditReport:
    def test_document_and_history(self) -> None:
        report = AuditReport(
            analysis=AnalysisResponse(readiness_score=70, executive_summary="S"),
            rigor_warnings=["w"],
            paper_type=PaperType.QUALITATIVE,
            paper_type_label="Qualitative",
            modules_used=["00_SAGE_CORE_INSTRUCTIONS.md", "03_MODULE_QUALITATIVE.md"],
        )
        document = report.to_document()
        assert document["paperType"] == "qualitative"
        assert document["modulesUsed"][1] == "03_MODULE_QUALITATIVE.md"
        assert "rigorWarnings" not in document

        entry = report.to_history_entry(["Methods"])
        assert entry.readiness_score == 70
        assert entry.help_types == ["Methods"]
        assert entry.critical_issue_count == 0


class TestUserProgress:
    def test_defaults(self) -> None:
        assert UserProgress().to_document() == {"xp": 0, "level": 1, "streak": 0}

    def test_camel_case_input(self) -> None:
        progress = UserProgress.model_validate({"xp": 10, "lastActiveDate": "2024-01-01"})
        assert progress.last_active_date == "2024-01-01"
