"""
Axiom Test Configuration

Shared fixtures and test utilities.
"""

import os
from pathlib import Path
from typing import Generator

import pytest


# Set test environment before any imports
os.environ.setdefault("AXIOM_DEBUG", "true")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("AXIOM_LLM_RETRY_BACKOFF", "0")


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Reset settings before each test."""
    from axiom.config import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None, None, None]:
    """Start every test with an empty metrics registry."""
    from axiom.observability.metrics import reset_metrics

    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def knowledge_base(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Knowledge-base directory with the core instructions and two modules."""
    kb = tmp_path / "knowledge-base"
    kb.mkdir()
    (kb / "00_SAGE_CORE_INSTRUCTIONS.md").write_text("CORE INSTRUCTIONS", encoding="utf-8")
    (kb / "01_MODULE_QUANTITATIVE_EXPERIMENTAL.md").write_text("RCT MODULE", encoding="utf-8")
    (kb / "06_MODULE_GENERIC.md").write_text("GENERIC MODULE", encoding="utf-8")
    (kb / "SAGE_WRITING_WORKFLOW.md").write_text("WORKFLOW", encoding="utf-8")
    monkeypatch.setenv("AXIOM_KNOWLEDGE_BASE_PATH", str(kb))
    return kb


@pytest.fixture
def raw_analysis() -> dict:
    """Well-formed raw LLM analysis."""
    return {
        "readinessScore": 72,
        "executiveSummary": "Solid draft with reporting gaps in the methods.",
        "documentClassification": {
            "manuscriptType": "Research article",
            "discipline": "Biomedical",
            "studyDesign": "RCT",
            "reportingGuideline": "CONSORT 2025",
        },
        "scoreBreakdown": {
            "titleAndKeywords": {"score": 80, "maxWeight": 8, "notes": "Clear title"},
            "abstract": {"score": 70, "maxWeight": 12, "notes": "Missing impact move"},
            "introduction": {"score": 75, "maxWeight": 10, "notes": "Gap stated"},
            "methods": {"score": 60, "maxWeight": 15, "notes": "No sample size calculation"},
            "results": {"score": 72, "maxWeight": 13, "notes": "CIs missing"},
            "discussion": {"score": 70, "maxWeight": 12, "notes": "Causal language"},
            "ethicsAndTransparency": {"score": 65, "maxWeight": 10, "notes": "No COI"},
            "writingQuality": {"score": 78, "maxWeight": 10, "notes": "Readable"},
            "zeroIPerspective": {"score": 50, "maxWeight": 10, "notes": "Uses 'we'"},
        },
        "criticalIssues": [
            {
                "title": "Missing trial registration",
                "description": "No registry number is reported.",
                "severity": "important",
                "umaReference": "Methods",
            }
        ],
        "detailedFeedback": [
            {
                "section": "Methods",
                "finding": 'The text states "participants were randomized" without a method.',
                "suggestion": "Describe the allocation sequence generation.",
                "whyItMatters": "CONSORT item 8a.",
                "severity": "important",
                "resourceTopic": "methods",
            }
        ],
        "actionItems": [
            {"task": "Report the randomization method", "priority": "high", "section": "Methods"}
        ],
        "abstractAnalysis": {
            "hasHook": True,
            "hasGap": True,
            "hasApproach": True,
            "hasFindings": True,
            "hasImpact": False,
            "feedback": "Add an impact sentence.",
        },
        "zeroIPerspective": {
            "compliant": False,
            "violations": ['"we recruited"'],
            "feedback": "Rewrite in third person.",
        },
        "strengthsToMaintain": ["Clear research question"],
        "learnLinks": [
            {
                "title": "CONSORT checklist",
                "description": "Reporting items for RCTs",
                "topic": "reporting_guidelines",
                "url": "",
            }
        ],
    }


@pytest.fixture
def rct_text() -> str:
    """Manuscript excerpt with strong randomized-trial vocabulary."""
    return (
        "Effect of Drug A on blood pressure\n"
        "We conducted a randomized controlled trial in which adults were randomly "
        "assigned to a treatment group or a placebo control group. The trial was "
        "double-blind and reported according to CONSORT.\n"
    )
