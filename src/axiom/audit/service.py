"""
Manuscript Audit Service

Runs one audit end to end:

    truncate text -> load knowledge-base modules -> JSON-mode LLM call
    (with retries) -> validate + enforce rigor -> enrich resources -> AuditReport

An LLM answer that is not decodable JSON is not an error here: it flows into
the validator, which returns the labelled empty response.
"""

from __future__ import annotations

import logging
from datetime import date

from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
)

from axiom.config import Settings, get_settings
from axiom.core.enums import ManuscriptStage
from axiom.core.exceptions import (
    AuditFailedError,
    EmptyLLMResponseError,
    LLMError,
    ManuscriptTextMissingError,
)
from axiom.core.schemas import AuditReport, AuditRequest, LoadedModules, UserProgress
from axiom.detection.detector import get_paper_type_label
from axiom.detection.modules import load_modules_for_type
from axiom.gamification.accumulator import compute_audit_xp
from axiom.gamification.progress import apply_audit_progress
from axiom.llm.base import BaseLLMProvider, Message, build_messages
from axiom.manuscript.truncation import smart_truncate
from axiom.observability.metrics import get_axiom_metrics
from axiom.validation.resources import enrich_resources
from axiom.validation.validator import validate_llm_content

logger = logging.getLogger(__name__)

COMPREHENSIVE_SCOPE = (
    "AUDIT SCOPE: Comprehensive review — audit ALL sections with equal depth. "
    "Provide maximum feedback items across every area."
)

FOCUS_AREAS: dict[str, str] = {
    "Title": "Title evaluation (length, keywords, SEO, filler phrases, field norms)",
    "Abstract": "Abstract evaluation (Hyland Five-Move Model, word limits, structure, critical errors)",
    "Introduction": "Introduction structure (CARS Model, gap statement, literature review depth)",
    "Methods": (
        "Methods reproducibility audit (study design, sample size, statistical plan, ethics, "
        "reporting guideline compliance)"
    ),
    "Results": (
        "Results audit (statistical reporting, effect sizes, CIs, figure/table quality, "
        "negative results)"
    ),
    "Discussion": (
        "Discussion evaluation (inverted pyramid, causal language, literature comparison, "
        "implications)"
    ),
    "Limitations": (
        "Limitations audit (3-part structure, coverage of methodological/scope/"
        "generalizability issues)"
    ),
    "Conclusions & Recommendations": "Conclusions completeness and strength of evidence",
    "Keywords": "Keywords optimization (MeSH alignment, synonym mapping, controlled vocabularies)",
    "Structural Analysis": (
        "Overall structural analysis (IMRAD compliance, section ordering, word count proportions)"
    ),
    "Language & Clarity": (
        "Writing quality audit (voice/tense by section, precision, grammar, nominalization, jargon)"
    ),
    "Statistics": (
        "Statistical reporting audit (APA 7th compliance, effect sizes, CIs, test selection, "
        "assumptions)"
    ),
    "Reference Management": (
        "Reference audit (citation density, recency, self-citation, format, DOIs)"
    ),
    "Ethics": (
        "Ethics and transparency audit (IRB, informed consent, COI, CRediT, data/code "
        "availability, AI disclosure)"
    ),
    "Cover Letter": "Cover letter evaluation (journal fit, key findings summary, suggested reviewers)",
    "Reviewer Response": (
        "Reviewer response strategy (point-by-point structure, diplomatic tone, "
        "evidence-based rebuttals)"
    ),
    "Journal Selection": (
        "Journal selection guidance (scope fit, impact factor, turnaround time, open access options)"
    ),
}

FOCUS_SCOPE_TEMPLATE = """AUDIT SCOPE: The user has specifically requested DEEP analysis of the following areas. Provide EXTRA detailed feedback for these:
{areas}

For the selected focus areas, provide at minimum 3 feedback items per area with specific quotes from the manuscript. You should still briefly cover other sections, but allocate 70% of your analysis to the focus areas above."""

MODULE_CONTEXT_TEMPLATE = """

--- LOADED MODULES: {files} ---
--- PAPER TYPE: {label} ---

{content}"""

AUDIT_USER_TEMPLATE = """LOADED MODULE: {files}
PAPER TYPE: {label}
STAGE: {stage}
MANUSCRIPT LENGTH: {length} characters

{focus}

CRITICAL INSTRUCTIONS FOR THIS AUDIT:
1. ALL feedback MUST quote specific text from the manuscript using quotation marks in the "finding" field
2. The loaded module is MANDATORY — enforce EVERY applicable checklist item from that module
3. {stage_instruction}
4. Minimum output: 20 detailed feedback items, 15 action items
5. Every critical issue MUST have a corresponding high-priority action item
6. For OBSERVATIONAL studies: Apply the causal language detection matrix. Flag ANY causal verbs (causes, increases, leads to, prevents) in non-RCT manuscripts
7. Check cross-references: Results must mirror Methods order. Discussion must address all Results. Abstract must reflect actual findings.

--- MANUSCRIPT TEXT ---
{text}"""

FINAL_STAGE_INSTRUCTION = (
    "This is a FINAL/SUBMITTED manuscript — flag ANYTHING not publication-ready as critical"
)
DRAFT_STAGE_INSTRUCTION = (
    "This is a draft — distinguish between critical (desk-rejection risk) and minor (polish) issues"
)


def is_retryable_llm_error(error: BaseException) -> bool:
    """LLM errors are retried unless the provider marked them non-retryable."""
    return isinstance(error, LLMError) and getattr(error, "retryable", True)


def build_focus_instructions(help_types: list[str]) -> str:
    """Audit-scope paragraph steering the model towards the requested areas."""
    if not help_types or "Comprehensive Review" in help_types:
        return COMPREHENSIVE_SCOPE

    areas = [FOCUS_AREAS[t] for t in help_types if t in FOCUS_AREAS]
    if not areas:
        return ""
    return FOCUS_SCOPE_TEMPLATE.format(
        areas="\n".join(f"{i}. {area}" for i, area in enumerate(areas, start=1))
    )


def build_audit_messages(
    request: AuditRequest, modules: LoadedModules, truncated_text: str
) -> list[Message]:
    """System prompt with module context, then the audit brief and manuscript."""
    label = get_paper_type_label(request.paper_type)
    files = ", ".join(modules.files)
    is_final = request.stage in (ManuscriptStage.FINAL, ManuscriptStage.SUBMITTED)

    system = request.system_prompt + MODULE_CONTEXT_TEMPLATE.format(
        files=files, label=label, content=modules.content
    )
    user = AUDIT_USER_TEMPLATE.format(
        files=files,
        label=label,
        stage=request.stage.value,
        length=len(request.manuscript_text),
        focus=build_focus_instructions(request.help_types),
        stage_instruction=FINAL_STAGE_INSTRUCTION if is_final else DRAFT_STAGE_INSTRUCTION,
        text=truncated_text,
    )
    return build_messages(system=system, user=user)


class AuditService:
    """
    Orchestrates manuscript audits against an LLM provider.

    The provider is injected; tests pass a mock, production code builds an
    OpenAIProvider from settings.
    """

    def __init__(self, provider: BaseLLMProvider, settings: Settings | None = None):
        self.provider = provider
        self.settings = settings or get_settings()

    def _request_analysis(self, messages: list[Message]) -> str:
        """JSON-mode completion; empty content counts as a failed attempt."""
        llm = self.settings.llm
        with get_axiom_metrics().llm_latency.time(labels={"provider": self.provider.name}):
            response = self.provider.complete_json(
                messages,
                temperature=llm.openai_temperature,
                max_tokens=llm.openai_max_tokens,
            )
        if not response.content:
            raise EmptyLLMResponseError(self.provider.name)
        return response.content

    def _request_with_retries(self, messages: list[Message]) -> str:
        llm = self.settings.llm
        retrying = Retrying(
            stop=stop_after_attempt(llm.max_attempts),
            wait=wait_incrementing(
                start=llm.retry_backoff_seconds, increment=llm.retry_backoff_seconds
            ),
            retry=retry_if_exception(is_retryable_llm_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        try:
            return retrying(self._request_analysis, messages)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.error("LLM failed after %d attempts: %s", llm.max_attempts, last_error)
            raise AuditFailedError(llm.max_attempts, str(last_error)) from last_error
        except LLMError as e:
            attempts = retrying.statistics.get("attempt_number", 1)
            logger.error("LLM failed with non-retryable error after %d attempt(s): %s", attempts, e)
            raise AuditFailedError(attempts, str(e)) from e

    def run_audit(self, request: AuditRequest) -> AuditReport:
        """
        Audit a manuscript.

        Args:
            request: Manuscript text, system prompt and audit options.

        Returns:
            AuditReport with the validated analysis and rigor warnings.

        Raises:
            ManuscriptTextMissingError: If the manuscript text is blank.
            AuditFailedError: If every LLM attempt failed or the provider
                returned a non-retryable error.
        """
        if not request.manuscript_text.strip():
            raise ManuscriptTextMissingError()

        metrics = get_axiom_metrics()
        truncated = smart_truncate(request.manuscript_text, self.settings.audit.max_manuscript_chars)
        modules = load_modules_for_type(request.paper_type, self.settings.audit.knowledge_base_path)
        logger.info(
            "Auditing %d chars (%d sent) as %s with modules %s",
            len(request.manuscript_text),
            len(truncated),
            request.paper_type.value,
            ", ".join(modules.files),
        )

        try:
            content = self._request_with_retries(build_audit_messages(request, modules, truncated))
        except AuditFailedError:
            metrics.audits.inc(labels={"status": "failed"})
            raise

        outcome = validate_llm_content(content, rigor_settings=self.settings.rigor)
        analysis = outcome.response
        if self.settings.features.enrich_resources:
            analysis = enrich_resources(analysis)

        metrics.audits.inc(labels={"status": "completed"})
        return AuditReport(
            analysis=analysis,
            rigor_warnings=outcome.rigor_warnings,
            paper_type=request.paper_type,
            paper_type_label=get_paper_type_label(request.paper_type),
            modules_used=modules.files,
        )


def award_audit_progress(
    progress: UserProgress,
    request: AuditRequest,
    report: AuditReport,
    today: date | None = None,
) -> tuple[int, UserProgress]:
    """XP earned for a completed audit and the user's updated progress."""
    xp_earned = compute_audit_xp(
        len(request.manuscript_text), request.help_types, report.analysis.readiness_score
    )
    return xp_earned, apply_audit_progress(progress, xp_earned, today)
