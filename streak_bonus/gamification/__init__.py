"""
Streak and bonus scoring for the activity log

This module implements the pure, synchronous scoring core:
- Activity field parsing and occurrence extraction
- Consecutive-day streak tracking (individual, household or global scope)
- Streak bonus tiers (flat bonuses and the points multiplier)
- Weekly occurrence bonus

Everything here works on already-fetched data; see streak_bonus.services
for the store-backed facade.
"""

from streak_bonus.gamification.activity_parser import (
    parse_activity_field,
    extract_occurrences,
    format_activity_entry,
    format_activity_field,
)
from streak_bonus.gamification.streak_system import (
    classify_streak,
    calculate_streaks,
    track_activity_streaks,
)
from streak_bonus.gamification.bonus_engine import (
    calculate_streak_bonus,
    score_activity,
    process_activity_with_points,
)
from streak_bonus.gamification.weekly_bonus import check_weekly_occurrence_bonus

__all__ = [
    "parse_activity_field",
    "extract_occurrences",
    "format_activity_entry",
    "format_activity_field",
    "classify_streak",
    "calculate_streaks",
    "track_activity_streaks",
    "calculate_streak_bonus",
    "score_activity",
    "process_activity_with_points",
    "check_weekly_occurrence_bonus",
]
