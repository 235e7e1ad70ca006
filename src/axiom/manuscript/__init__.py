"""
Axiom Manuscript Utilities

Text preparation and citation heuristics applied before an audit.
"""

from axiom.manuscript.citations import extract_citations
from axiom.manuscript.truncation import smart_truncate

__all__ = ["extract_citations", "smart_truncate"]
