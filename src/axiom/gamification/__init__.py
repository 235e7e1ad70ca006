"""
Axiom Gamification

XP, streak and level calculators.
"""

from axiom.gamification.accumulator import (
    compute_audit_xp,
    compute_level,
    compute_streak,
    level_threshold,
)
from axiom.gamification.progress import apply_audit_progress

__all__ = [
    "compute_audit_xp",
    "compute_streak",
    "compute_level",
    "level_threshold",
    "apply_audit_progress",
]
