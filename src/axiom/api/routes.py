"""
Axiom API Routes

FastAPI routes exposing detection, validation, citation and gamification
calculators plus the knowledge-base guides. Responses use the camelCase wire
names.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import Field

from axiom import __version__
from axiom.api.rate_limit import (
    ANALYSIS_LIMITER,
    API_LIMITER,
    build_rate_limiters,
    rate_limit,
    rate_limit_headers,
)
from axiom.config import get_settings
from axiom.core.exceptions import RateLimitExceededError
from axiom.core.schemas import AxiomModel, UserProgress
from axiom.detection.detector import detect_paper_type
from axiom.detection.modules import load_paper_types_explained, load_writing_workflow
from axiom.gamification.accumulator import compute_audit_xp
from axiom.gamification.progress import apply_audit_progress
from axiom.manuscript.citations import extract_citations
from axiom.observability.metrics import get_registry
from axiom.validation.resources import enrich_resources
from axiom.validation.validator import validate_analysis_response

logger = logging.getLogger(__name__)

# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================


class TextRequest(AxiomModel):
    """Manuscript text submitted for a text-only calculation."""

    text: str = Field(..., description="Plain manuscript text")


class AwardRequest(AxiomModel):
    """Inputs for awarding XP after a completed audit."""

    text_length: int = Field(..., ge=0, description="Length of the audited manuscript text")
    help_types: list[str] = Field(default_factory=list)
    readiness_score: int | None = Field(default=None, ge=0, le=100)
    progress: UserProgress = Field(default_factory=UserProgress)


class AwardResponse(AxiomModel):
    xp_earned: int
    leveled_up: bool
    progress: UserProgress


# =============================================================================
# ROUTES
# =============================================================================

router = APIRouter(prefix="/api", tags=["axiom"], dependencies=[Depends(rate_limit(API_LIMITER))])


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe."""
    return {"status": "healthy", "version": __version__}


@router.get("/metrics")
async def get_metrics() -> dict[str, Any]:
    """Snapshot of in-process metrics."""
    return get_registry().get_all()


@router.post("/paper-type/detect")
async def detect(request: TextRequest) -> dict[str, Any]:
    """Propose a paper type for manuscript text."""
    return detect_paper_type(request.text).to_document()


@router.post("/analysis/validate", dependencies=[Depends(rate_limit(ANALYSIS_LIMITER))])
async def validate_analysis(raw: Any = Body(default=None)) -> dict[str, Any]:
    """
    Validate a raw LLM analysis.

    Any JSON body is accepted; malformed analyses come back as the labelled
    empty response rather than an error.
    """
    settings = get_settings()
    outcome = validate_analysis_response(raw, rigor_settings=settings.rigor)
    analysis = outcome.response
    if settings.features.enrich_resources:
        analysis = enrich_resources(analysis)
    return {"analysis": analysis.to_document(), "rigorWarnings": outcome.rigor_warnings}


@router.post("/citations/extract")
async def citations(request: TextRequest) -> dict[str, Any]:
    """Heuristic citation and reference-list audit."""
    return extract_citations(request.text).to_document()


@router.get("/knowledge-base/writing-workflow")
async def writing_workflow() -> dict[str, str]:
    """Writing-workflow guide from the knowledge base ("" when missing)."""
    return {"content": load_writing_workflow()}


@router.get("/knowledge-base/paper-types")
async def paper_types_explained() -> dict[str, str]:
    """Paper-type explainer from the knowledge base ("" when missing)."""
    return {"content": load_paper_types_explained()}


@router.post("/gamification/award")
async def award(request: AwardRequest) -> dict[str, Any]:
    """Compute XP for an audit and fold it into the user's progress."""
    xp_earned = compute_audit_xp(request.text_length, request.help_types, request.readiness_score)
    progress = apply_audit_progress(request.progress, xp_earned)
    return AwardResponse(
        xp_earned=xp_earned,
        leveled_up=progress.level > request.progress.level,
        progress=progress,
    ).to_document()


# =============================================================================
# APP FACTORY
# =============================================================================


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"message": exc.message},
        headers=rate_limit_headers(exc.limit, 0, exc.reset_at),
    )


def create_app():
    """Create FastAPI application.

    Returns:
        Configured FastAPI app
    """
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware

    settings = get_settings()
    logging.basicConfig(level=settings.logging.log_level)

    app = FastAPI(
        title="Axiom Manuscript Audit API",
        description="Pre-submission manuscript auditing with enforced rigor",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.features.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.rate_limiters = build_rate_limiters(settings.rate_limit)
    app.add_exception_handler(RateLimitExceededError, rate_limit_exceeded_handler)
    app.include_router(router)

    return app
