"""
Axiom Validation Layer

Normalization and rigor enforcement for untrusted LLM analysis output.
"""

from axiom.validation.normalizer import (
    INVALID_RESPONSE_MESSAGE,
    create_empty_response,
    normalize_analysis,
)
from axiom.validation.resources import enrich_resources, resolve_resource
from axiom.validation.rigor import (
    CRITICAL_SCORE_CAPS,
    apply_rigor,
    collect_rigor_warnings,
    enforce_rigor,
)
from axiom.validation.validator import validate_analysis_response, validate_llm_content

__all__ = [
    "INVALID_RESPONSE_MESSAGE",
    "CRITICAL_SCORE_CAPS",
    "normalize_analysis",
    "create_empty_response",
    "enforce_rigor",
    "apply_rigor",
    "collect_rigor_warnings",
    "validate_analysis_response",
    "validate_llm_content",
    "enrich_resources",
    "resolve_resource",
]
