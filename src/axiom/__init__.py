"""
Axiom Manuscript Audit

Pre-submission auditing of academic manuscripts with enforced rigor.
"""

__version__ = "0.1.0"
__author__ = "Axiom Team"

from axiom.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
