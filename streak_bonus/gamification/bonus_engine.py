"""
Streak Bonus Scoring

Turns an activity's current streak length into extra points.

Tiers (checked highest first, first match wins):
- streak >= MULTIPLIER: base points doubled, no flat bonus
- streak >= BONUS_2: flat BONUS_2 points
- streak >= BONUS_1: flat BONUS_1 points
- otherwise: base points only

Defaults: BONUS_1=3 days (+1), BONUS_2=7 days (+2), MULTIPLIER=14 days (x2)
"""

from typing import Optional
import logging

from streak_bonus.models.activity import ActivityReference, Points
from streak_bonus.models.streak import (
    BonusResult,
    ScoredActivity,
    StreakSettings,
    StreakSnapshot,
)

logger = logging.getLogger(__name__)

STREAK_MULTIPLIER = 2


def calculate_streak_bonus(
    activity_name: str,
    base_points: Points,
    streak_length: int,
    settings: StreakSettings
) -> BonusResult:
    """
    Apply the streak tiers to one activity

    Returns:
        BonusResult with original, bonus and total points
    """
    thresholds = settings.thresholds
    bonus_points: Points = 0
    multiplier = 1

    if streak_length >= thresholds.multiplier:
        multiplier = STREAK_MULTIPLIER
    elif streak_length >= thresholds.bonus_2:
        bonus_points = settings.bonus_points.bonus_2
    elif streak_length >= thresholds.bonus_1:
        bonus_points = settings.bonus_points.bonus_1

    total_points = base_points * multiplier + bonus_points

    if streak_length >= thresholds.bonus_1:
        logger.info(
            f"Streak applied for '{activity_name}': length={streak_length}, "
            f"base={base_points}, multiplier={multiplier}, bonus={bonus_points}, total={total_points}"
        )

    return BonusResult(
        original_points=base_points,
        bonus_points=bonus_points,
        total_points=total_points,
        streak_length=streak_length,
        multiplier=multiplier,
    )


def score_activity(
    activity_name: str,
    base_points: Points,
    snapshot: StreakSnapshot,
    settings: StreakSettings
) -> BonusResult:
    """Score an activity using its streak from a snapshot"""
    return calculate_streak_bonus(
        activity_name,
        base_points,
        snapshot.streak_length(activity_name),
        settings,
    )


def process_activity_with_points(
    activity_name: Optional[str],
    reference: ActivityReference,
    snapshot: StreakSnapshot,
    settings: StreakSettings
) -> ScoredActivity:
    """
    Score one submitted activity by name

    Unknown activities score 0 and are filed as "Uncategorized"; streak
    tiers only apply to positive base points.
    """
    name = str(activity_name or "").strip()
    if not name:
        return ScoredActivity(
            name=None,
            points=0,
            category="Unknown",
            streak_info=BonusResult(original_points=0, total_points=0),
        )

    base_points = reference.base_points(name)
    if base_points is None:
        logger.warning(f"Activity '{name}' not found in points reference. Using 0 points.")
        base_points = 0
        category = "Uncategorized"
    else:
        category = reference.categories.get(name) or "Unknown"

    if base_points > 0:
        streak_info = score_activity(name, base_points, snapshot, settings)
    else:
        streak_info = BonusResult(original_points=base_points, total_points=base_points)

    return ScoredActivity(
        name=name,
        points=streak_info.total_points,
        category=category,
        streak_info=streak_info,
    )
