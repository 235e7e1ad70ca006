"""
Gamification Accumulators

Pure calculators for audit XP, daily streaks and levels. Persistence of the
user's xp / level / streak fields belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone

from axiom.core.schemas import StreakResult

BASE_AUDIT_XP = 100
LONG_MANUSCRIPT_CHARS = 20000
LONG_MANUSCRIPT_BONUS = 100
MEDIUM_MANUSCRIPT_CHARS = 5000
MEDIUM_MANUSCRIPT_BONUS = 50
COMPREHENSIVE_REVIEW = "Comprehensive Review"
BROAD_REVIEW_HELP_TYPES = 5
BROAD_REVIEW_BONUS = 50
HIGH_READINESS_SCORE = 80
HIGH_READINESS_BONUS = 25

XP_PER_LEVEL = 1000


def compute_audit_xp(
    text_length: int, help_types: Sequence[str], readiness_score: int | None
) -> int:
    """
    XP awarded for one completed audit.

    Length bonuses are exclusive (only the larger applies). The broad-review
    bonus is granted once for either "Comprehensive Review" or five or more
    help types.
    """
    xp = BASE_AUDIT_XP

    if text_length > LONG_MANUSCRIPT_CHARS:
        xp += LONG_MANUSCRIPT_BONUS
    elif text_length > MEDIUM_MANUSCRIPT_CHARS:
        xp += MEDIUM_MANUSCRIPT_BONUS

    if COMPREHENSIVE_REVIEW in help_types or len(help_types) >= BROAD_REVIEW_HELP_TYPES:
        xp += BROAD_REVIEW_BONUS

    if readiness_score is not None and readiness_score >= HIGH_READINESS_SCORE:
        xp += HIGH_READINESS_BONUS

    return xp


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def compute_streak(
    last_active_date: str | None, current_streak: int, today: date | None = None
) -> StreakResult:
    """
    Advance a daily activity streak.

    Dates compare as calendar-day strings (YYYY-MM-DD): same day keeps the
    streak, the previous calendar day extends it, anything else (no history,
    a gap, a future or malformed date) restarts it at 1.

    Args:
        last_active_date: Last recorded activity day, or None.
        current_streak: Streak stored for the user.
        today: Reference day (defaults to the current UTC date).
    """
    today = today or utc_today()
    date_str = today.isoformat()

    if not last_active_date:
        return StreakResult(streak=1, date_str=date_str)
    if last_active_date == date_str:
        return StreakResult(streak=current_streak, date_str=date_str)
    if last_active_date == (today - timedelta(days=1)).isoformat():
        return StreakResult(streak=current_streak + 1, date_str=date_str)
    return StreakResult(streak=1, date_str=date_str)


def level_threshold(level: int) -> int:
    """Cumulative XP needed to advance from ``level`` to ``level + 1``."""
    return level * XP_PER_LEVEL


def compute_level(total_xp: int) -> int:
    """
    Level reached with ``total_xp``.

    The threshold is re-evaluated after every level-up, so exactly 3000 XP
    passes 1000, 2000 and 3000 in turn and lands on level 4.
    """
    level = 1
    threshold = level_threshold(level)
    while total_xp >= threshold:
        level += 1
        threshold = level_threshold(level)
    return level
