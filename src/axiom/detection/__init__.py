"""
Axiom Paper Type Detection

Keyword-based study-design classification and knowledge-base module loading.
"""

from axiom.detection.detector import detect_paper_type, get_paper_type_label, score_categories
from axiom.detection.keywords import KEYWORD_TABLE, PAPER_TYPE_LABELS
from axiom.detection.modules import (
    MODULE_FILES,
    load_knowledge_document,
    load_modules_for_type,
    load_paper_types_explained,
    load_writing_workflow,
    parse_paper_type,
)

__all__ = [
    "detect_paper_type",
    "get_paper_type_label",
    "score_categories",
    "KEYWORD_TABLE",
    "PAPER_TYPE_LABELS",
    "MODULE_FILES",
    "load_modules_for_type",
    "load_knowledge_document",
    "load_writing_workflow",
    "load_paper_types_explained",
    "parse_paper_type",
]
