"""
Axiom Core Enumerations

This module defines all enumerations used throughout the Axiom system.
These are critical for maintaining type safety and consistent vocabulary.
"""

from enum import Enum


class PaperType(str, Enum):
    """Research-design categories used to select audit criteria.

    Declaration order is significant: the paper-type detector breaks score
    ties in favour of the type declared first.
    """

    QUANTITATIVE_EXPERIMENTAL = "quantitative_experimental"
    OBSERVATIONAL = "observational"
    QUALITATIVE = "qualitative"
    SYSTEMATIC_REVIEW = "systematic_review"
    MIXED_METHODS = "mixed_methods"
    CASE_REPORT = "case_report"
    GENERIC = "generic"


class Severity(str, Enum):
    """Severity of a critical issue or feedback item."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    MINOR = "minor"


class Priority(str, Enum):
    """Priority of an action item."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Confidence(str, Enum):
    """Detector's self-assessed certainty in its paper-type guess."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ManuscriptStage(str, Enum):
    """Writing stage of a manuscript at audit time."""

    DRAFT = "draft"
    REVISION = "revision"
    FINAL = "final"
    SUBMITTED = "submitted"


class ScoreCategory(str, Enum):
    """The nine fixed score-breakdown categories (wire names)."""

    TITLE_AND_KEYWORDS = "titleAndKeywords"
    ABSTRACT = "abstract"
    INTRODUCTION = "introduction"
    METHODS = "methods"
    RESULTS = "results"
    DISCUSSION = "discussion"
    ETHICS_AND_TRANSPARENCY = "ethicsAndTransparency"
    WRITING_QUALITY = "writingQuality"
    ZERO_I_PERSPECTIVE = "zeroIPerspective"


# Default maximum weight for each score category
SCORE_CATEGORY_WEIGHTS: dict[ScoreCategory, int] = {
    ScoreCategory.TITLE_AND_KEYWORDS: 8,
    ScoreCategory.ABSTRACT: 12,
    ScoreCategory.INTRODUCTION: 10,
    ScoreCategory.METHODS: 15,
    ScoreCategory.RESULTS: 13,
    ScoreCategory.DISCUSSION: 12,
    ScoreCategory.ETHICS_AND_TRANSPARENCY: 10,
    ScoreCategory.WRITING_QUALITY: 10,
    ScoreCategory.ZERO_I_PERSPECTIVE: 10,
}
