"""
Axiom Audit Orchestration
"""

from axiom.audit.service import (
    AuditService,
    award_audit_progress,
    build_audit_messages,
    build_focus_instructions,
)

__all__ = [
    "AuditService",
    "award_audit_progress",
    "build_audit_messages",
    "build_focus_instructions",
]
