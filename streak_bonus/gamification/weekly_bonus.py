"""
Weekly Occurrence Bonus

Counts how often one activity was logged within a game week (not a
consecutive-day streak) and awards a flat bonus once a count is reached.
"""

from typing import Iterable
from datetime import date
import logging

from streak_bonus.gamification.activity_parser import count_activity_mentions
from streak_bonus.models.activity import ActivityReference, LogRow, Points
from streak_bonus.models.scope import Scope
from streak_bonus.models.streak import WeeklyBonusResult

logger = logging.getLogger(__name__)


def check_weekly_occurrence_bonus(
    rows: Iterable[LogRow],
    reference: ActivityReference,
    target_activity: str,
    required_count: int,
    bonus_points: Points,
    scope: Scope,
    week_start: date,
    week_end: date
) -> WeeklyBonusResult:
    """
    Check whether an activity was logged often enough this week

    Args:
        rows: Log rows; rows outside the window or scope are ignored
        reference: Points reference; the target must be listed in it
        target_activity: Exact activity name to count
        required_count: Entries needed to qualify
        bonus_points: Flat bonus awarded when qualified
        scope: Identities whose rows count
        week_start: First day of the window (inclusive)
        week_end: Last day of the window (inclusive)

    Returns:
        WeeklyBonusResult; bonus_points is 0 unless qualified
    """
    if target_activity not in reference:
        logger.info(
            f"Weekly bonus check skipped: '{target_activity}' not found in points reference"
        )
        return WeeklyBonusResult(qualifies=False, count=0, bonus_points=0)

    count = 0
    for row in rows:
        if not (week_start <= row.logged_on <= week_end):
            continue
        if not scope.includes(row.identity):
            continue
        count += count_activity_mentions(row.activities, target_activity)

    qualifies = count >= required_count

    logger.info(
        f"Weekly bonus check for '{target_activity}' ({week_start} to {week_end}, "
        f"{scope.describe()}): count={count}, qualifies={qualifies}"
    )
    return WeeklyBonusResult(
        qualifies=qualifies,
        count=count,
        bonus_points=bonus_points if qualifies else 0,
    )
