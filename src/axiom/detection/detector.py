"""
Paper Type Detector

Rule-based classifier that scores manuscript text against the methodology
keyword table and proposes a paper type with a confidence level.

Matching is a case-insensitive substring test with no word boundaries; the
multi-word methodological phrases are the intended signal.
"""

from __future__ import annotations

import logging

from axiom.core.enums import Confidence, PaperType
from axiom.core.schemas import DetectionResult
from axiom.detection.keywords import (
    KEYWORD_TABLE,
    PAPER_TYPE_LABELS,
    PRIMARY_WEIGHT,
    SECONDARY_WEIGHT,
)
from axiom.observability.metrics import get_axiom_metrics

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE_SCORE = 8
MEDIUM_CONFIDENCE_SCORE = 4

NO_MATCH_EXPLANATION = (
    "No strong indicators found for any specific paper type. "
    "A generic review will provide broad coverage."
)

_CONFIDENCE_SUFFIX = {
    Confidence.HIGH: " Strong match with high confidence.",
    Confidence.MEDIUM: " Moderate match. Please confirm this is correct.",
    Confidence.LOW: " Weak match. Consider selecting the type manually.",
}


def get_paper_type_label(paper_type: PaperType | str) -> str:
    """Human-readable label; unknown values get the generic label."""
    try:
        return PAPER_TYPE_LABELS[PaperType(paper_type)]
    except ValueError:
        return PAPER_TYPE_LABELS[PaperType.GENERIC]


def _confidence_for(score: int) -> Confidence:
    if score >= HIGH_CONFIDENCE_SCORE:
        return Confidence.HIGH
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return Confidence.MEDIUM
    return Confidence.LOW


def score_categories(text: str) -> list[tuple[PaperType, int, list[str]]]:
    """
    Score every scored paper type against ``text``.

    Returns:
        ``(paper_type, score, matched_keywords)`` per category in table order.
    """
    lower_text = text.lower()
    scores = []
    for paper_type, keywords in KEYWORD_TABLE:
        score = 0
        found: list[str] = []
        for keyword in keywords.primary:
            if keyword in lower_text:
                score += PRIMARY_WEIGHT
                found.append(keyword)
        for keyword in keywords.secondary:
            if keyword in lower_text:
                score += SECONDARY_WEIGHT
                found.append(keyword)
        scores.append((paper_type, score, found))
    return scores


def detect_paper_type(text: str) -> DetectionResult:
    """
    Propose a paper type for manuscript text.

    Categories are ranked by score; ``sorted`` is stable, so on a tie the
    category declared first in the keyword table wins. A zero top score
    falls back to the generic type with low confidence.

    Args:
        text: Plain manuscript text.

    Returns:
        DetectionResult (never raises for string input).
    """
    scores = score_categories(text)
    ranked = sorted(scores, key=lambda entry: entry[1], reverse=True)
    top_type, top_score, top_found = ranked[0]

    metrics = get_axiom_metrics()

    if top_score == 0:
        logger.debug("No paper-type keywords matched; falling back to generic")
        metrics.detections.inc(
            labels={"type": PaperType.GENERIC.value, "confidence": Confidence.LOW.value}
        )
        return DetectionResult(
            detected_type=PaperType.GENERIC,
            confidence=Confidence.LOW,
            explanation=NO_MATCH_EXPLANATION,
            keywords_found={},
            top_match_count=0,
        )

    confidence = _confidence_for(top_score)
    keywords_found = {paper_type.value: found for paper_type, _, found in scores if found}

    explanation = (
        f"Detected as {get_paper_type_label(top_type)} based on "
        f"{len(top_found)} matching keywords."
    ) + _CONFIDENCE_SUFFIX[confidence]

    logger.debug(
        "Detected paper type %s (score=%d, confidence=%s)",
        top_type.value,
        top_score,
        confidence.value,
    )
    metrics.detections.inc(labels={"type": top_type.value, "confidence": confidence.value})

    return DetectionResult(
        detected_type=top_type,
        confidence=confidence,
        explanation=explanation,
        keywords_found=keywords_found,
        top_match_count=top_score,
    )
