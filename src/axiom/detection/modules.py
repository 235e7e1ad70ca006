"""
Knowledge-Base Module Selection

Maps each paper type to the knowledge-base files spliced into the audit
system prompt and loads them from disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from axiom.config import get_settings
from axiom.core.enums import PaperType
from axiom.core.exceptions import InvalidPaperTypeError
from axiom.core.schemas import LoadedModules

logger = logging.getLogger(__name__)

CORE_INSTRUCTIONS_FILE = "00_SAGE_CORE_INSTRUCTIONS.md"
WRITING_WORKFLOW_FILE = "SAGE_WRITING_WORKFLOW.md"
PAPER_TYPES_EXPLAINED_FILE = "SAGE_PAPER_TYPES_EXPLAINED.md"
MODULE_SEPARATOR = "\n\n---\n\n"

MODULE_FILES: dict[PaperType, tuple[str, ...]] = {
    PaperType.QUANTITATIVE_EXPERIMENTAL: (
        CORE_INSTRUCTIONS_FILE,
        "01_MODULE_QUANTITATIVE_EXPERIMENTAL.md",
    ),
    PaperType.OBSERVATIONAL: (CORE_INSTRUCTIONS_FILE, "02_MODULE_OBSERVATIONAL.md"),
    PaperType.QUALITATIVE: (CORE_INSTRUCTIONS_FILE, "03_MODULE_QUALITATIVE.md"),
    PaperType.SYSTEMATIC_REVIEW: (CORE_INSTRUCTIONS_FILE, "04_MODULE_SYSTEMATIC_REVIEW.md"),
    PaperType.MIXED_METHODS: (CORE_INSTRUCTIONS_FILE, "05_MODULE_MIXED_METHODS.md"),
    PaperType.CASE_REPORT: (CORE_INSTRUCTIONS_FILE, "07_MODULE_CASE_REPORT.md"),
    PaperType.GENERIC: (CORE_INSTRUCTIONS_FILE, "06_MODULE_GENERIC.md"),
}


def parse_paper_type(value: Any) -> PaperType:
    """
    Validate a caller-selected paper type.

    Raises:
        InvalidPaperTypeError: If ``value`` is not a supported paper type.
    """
    if isinstance(value, PaperType):
        return value
    try:
        return PaperType(str(value).strip().lower())
    except ValueError as e:
        raise InvalidPaperTypeError(value) from e


def _knowledge_base(knowledge_base_path: Path | None) -> Path:
    if knowledge_base_path is not None:
        return knowledge_base_path
    return get_settings().audit.knowledge_base_path


def load_modules_for_type(
    paper_type: PaperType, knowledge_base_path: Path | None = None
) -> LoadedModules:
    """
    Load the knowledge-base modules for a paper type.

    Unreadable files are logged and skipped; ``files`` still lists every
    selected module so the caller can report what was requested.

    Args:
        paper_type: Selected paper type.
        knowledge_base_path: Directory holding the module files
            (defaults to the configured knowledge base).

    Returns:
        LoadedModules with the file names and their joined contents.
    """
    base = _knowledge_base(knowledge_base_path)
    file_names = MODULE_FILES.get(paper_type, MODULE_FILES[PaperType.GENERIC])

    parts: list[str] = []
    for file_name in file_names:
        try:
            parts.append((base / file_name).read_text(encoding="utf-8"))
        except OSError as e:
            logger.error("Failed to load module file %s: %s", file_name, e)

    return LoadedModules(files=list(file_names), content=MODULE_SEPARATOR.join(parts))


def load_knowledge_document(name: str, knowledge_base_path: Path | None = None) -> str:
    """Read a single knowledge-base document, returning "" when unavailable."""
    path = _knowledge_base(knowledge_base_path) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to load knowledge document %s: %s", name, e)
        return ""


def load_writing_workflow(knowledge_base_path: Path | None = None) -> str:
    return load_knowledge_document(WRITING_WORKFLOW_FILE, knowledge_base_path)


def load_paper_types_explained(knowledge_base_path: Path | None = None) -> str:
    return load_knowledge_document(PAPER_TYPES_EXPLAINED_FILE, knowledge_base_path)
