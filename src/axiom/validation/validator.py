"""
Analysis Response Validator

Contract enforcement between an unpredictable LLM and a UI that assumes a
fixed schema. Composes two pure stages:

    normalize_analysis(raw)  ->  enforce rigor  ->  ValidationOutcome

The validator is total: every input, however malformed, yields a valid
AnalysisResponse. Rigor warnings are returned beside the response and logged
through an injectable logger; they never alter the returned analysis.
"""

from __future__ import annotations

import logging
from typing import Any

from axiom.config import RigorSettings
from axiom.core.schemas import ValidationOutcome
from axiom.llm.parsing import parse_llm_json
from axiom.observability.metrics import AxiomMetrics, get_axiom_metrics
from axiom.validation.normalizer import normalize_analysis
from axiom.validation.rigor import apply_rigor, collect_rigor_warnings


def validate_analysis_response(
    raw: Any,
    *,
    rigor_settings: RigorSettings | None = None,
    logger: logging.Logger | None = None,
    metrics: AxiomMetrics | None = None,
) -> ValidationOutcome:
    """
    Validate and normalize a raw AI analysis.

    Args:
        raw: JSON-deserialized LLM output (any shape, including None).
        rigor_settings: Thresholds for rigor warnings.
        logger: Logger receiving rigor warnings (defaults to this module's logger).
        metrics: Metrics sink (defaults to the global registry).

    Returns:
        ValidationOutcome with the guaranteed-shape response and rigor warnings.
    """
    log = logger or logging.getLogger(__name__)
    metrics = metrics or get_axiom_metrics()

    normalized = normalize_analysis(raw)
    response, report = apply_rigor(normalized)
    warnings = collect_rigor_warnings(response, rigor_settings)

    metrics.validations.inc(labels={"outcome": "ok" if isinstance(raw, dict) else "empty"})
    if report.was_capped:
        log.info(
            "Readiness score capped from %d to %d (%d critical issues)",
            report.original_score,
            report.capped_score,
            response.critical_count,
        )
        metrics.scores_capped.inc()
    if report.synthesized_actions:
        metrics.actions_synthesized.inc(len(report.synthesized_actions))
    if warnings:
        log.warning("Audit rigor warnings: %s", "; ".join(warnings))
        metrics.rigor_warnings.inc(len(warnings))

    return ValidationOutcome(response=response, rigor_warnings=warnings)


def validate_llm_content(
    content: str | None,
    *,
    rigor_settings: RigorSettings | None = None,
    logger: logging.Logger | None = None,
    metrics: AxiomMetrics | None = None,
) -> ValidationOutcome:
    """Parse raw model text and validate it; undecodable text yields the empty response."""
    return validate_analysis_response(
        parse_llm_json(content), rigor_settings=rigor_settings, logger=logger, metrics=metrics
    )
