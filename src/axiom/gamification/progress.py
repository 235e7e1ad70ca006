"""
User Progress Update

Folds one completed audit into a user's persisted gamification fields.
"""

from __future__ import annotations

import logging
from datetime import date

from axiom.core.schemas import UserProgress
from axiom.gamification.accumulator import compute_level, compute_streak

logger = logging.getLogger(__name__)


def apply_audit_progress(
    progress: UserProgress, xp_earned: int, today: date | None = None
) -> UserProgress:
    """
    Return the user's progress after an audit awarding ``xp_earned``.

    The input is left untouched; the level is recomputed from the new total.
    """
    total_xp = progress.xp + xp_earned
    level = compute_level(total_xp)
    streak = compute_streak(progress.last_active_date, progress.streak, today)

    if level > progress.level:
        logger.info("Level up: %d -> %d (xp=%d)", progress.level, level, total_xp)

    return progress.model_copy(
        update={
            "xp": total_xp,
            "level": level,
            "streak": streak.streak,
            "last_active_date": streak.date_str,
        }
    )
