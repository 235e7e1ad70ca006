#!/usr/bin/env python3
"""
Axiom command line: detect, validate or audit a local manuscript.

Usage:
    python scripts/run_audit.py detect manuscript.txt
    python scripts/run_audit.py citations manuscript.txt
    python scripts/run_audit.py validate raw_analysis.json
    python scripts/run_audit.py audit manuscript.txt --paper-type auto --stage final \\
        --help-type Methods --help-type Statistics --output report.json

Environment:
    OPENAI_API_KEY and the AXIOM_* settings are read from .env / the environment
    (only the audit command calls the LLM).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from dotenv import load_dotenv

load_dotenv(ROOT / ".env")

from axiom.audit.service import AuditService
from axiom.config import get_settings
from axiom.core.enums import ManuscriptStage, PaperType
from axiom.core.exceptions import AxiomError
from axiom.core.schemas import AuditRequest
from axiom.detection.detector import detect_paper_type
from axiom.detection.modules import parse_paper_type
from axiom.llm.openai_provider import OpenAIProvider
from axiom.manuscript.citations import extract_citations
from axiom.validation.validator import validate_llm_content

DEFAULT_SYSTEM_PROMPT = (
    "You are Axiom, a rigorous pre-submission manuscript auditor. Audit the manuscript "
    "against the loaded modules and return a single JSON object with readinessScore, "
    "executiveSummary, documentClassification, scoreBreakdown, criticalIssues, "
    "detailedFeedback, actionItems, abstractAnalysis, zeroIPerspective, "
    "strengthsToMaintain and learnLinks."
)


def _emit(document: dict, output: str | None) -> None:
    text = json.dumps(document, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"✅ Written to {output}")
    else:
        print(text)


def cmd_detect(args: argparse.Namespace) -> int:
    text = Path(args.file).read_text(encoding="utf-8")
    _emit(detect_paper_type(text).to_document(), args.output)
    return 0


def cmd_citations(args: argparse.Namespace) -> int:
    text = Path(args.file).read_text(encoding="utf-8")
    _emit(extract_citations(text).to_document(), args.output)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    content = Path(args.file).read_text(encoding="utf-8")
    outcome = validate_llm_content(content, rigor_settings=get_settings().rigor)
    _emit(
        {"analysis": outcome.response.to_document(), "rigorWarnings": outcome.rigor_warnings},
        args.output,
    )
    return 0


def cmd_audit(args: argparse.Namespace) -> int:
    text = Path(args.file).read_text(encoding="utf-8")

    if args.paper_type == "auto":
        detection = detect_paper_type(text)
        paper_type = detection.detected_type
        print(f"🔎 {detection.explanation}", file=sys.stderr)
    else:
        paper_type = parse_paper_type(args.paper_type)

    system_prompt = DEFAULT_SYSTEM_PROMPT
    if args.system_prompt_file:
        system_prompt = Path(args.system_prompt_file).read_text(encoding="utf-8")

    request = AuditRequest(
        manuscript_text=text,
        system_prompt=system_prompt,
        paper_type=paper_type,
        help_types=args.help_type or [],
        stage=ManuscriptStage(args.stage),
    )
    service = AuditService(OpenAIProvider.from_settings())
    report = service.run_audit(request)

    for warning in report.rigor_warnings:
        print(f"⚠️  {warning}", file=sys.stderr)
    _emit(report.to_document(), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Axiom manuscript audit tools")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect = subparsers.add_parser("detect", help="Detect the paper type of a manuscript")
    detect.add_argument("file", help="Plain-text manuscript")
    detect.set_defaults(handler=cmd_detect)

    citations = subparsers.add_parser("citations", help="Audit citations and references")
    citations.add_argument("file", help="Plain-text manuscript")
    citations.set_defaults(handler=cmd_citations)

    validate = subparsers.add_parser("validate", help="Validate a raw LLM analysis (JSON)")
    validate.add_argument("file", help="Raw model output")
    validate.set_defaults(handler=cmd_validate)

    audit = subparsers.add_parser("audit", help="Run a full LLM audit")
    audit.add_argument("file", help="Plain-text manuscript")
    audit.add_argument(
        "--paper-type",
        default="auto",
        choices=["auto"] + [p.value for p in PaperType],
        help="Paper type (default: auto-detect)",
    )
    audit.add_argument(
        "--stage",
        default=ManuscriptStage.DRAFT.value,
        choices=[s.value for s in ManuscriptStage],
    )
    audit.add_argument(
        "--help-type", action="append", help="Focus area (repeatable), e.g. 'Methods'"
    )
    audit.add_argument("--system-prompt-file", help="Custom system prompt")
    audit.set_defaults(handler=cmd_audit)

    for sub in (detect, citations, validate, audit):
        sub.add_argument("--output", "-o", help="Write JSON to this file instead of stdout")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else get_settings().logging.log_level
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        return args.handler(args)
    except AxiomError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
