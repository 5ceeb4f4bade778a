"""
Consecutive-Day Streak Tracking

Streaks are rebuilt from the activity log on every call; nothing is stored.

For each activity in a scope:
- Distinct logged calendar days are collected (a day logged twice counts once)
- The most recent day must be today or yesterday, otherwise the run has lapsed
- The run is walked backwards one day at a time until the first gap

Classification:
- full: 3+ consecutive days ending today or yesterday
- building: exactly 2 consecutive days ending yesterday
- none: anything else, including 2 days ending today
"""

from typing import Dict, Iterable, List, Set, Tuple
from datetime import date, timedelta
import logging

from streak_bonus.gamification.activity_parser import extract_occurrences
from streak_bonus.models.activity import ActivityOccurrence, ActivityReference, LogRow
from streak_bonus.models.scope import Scope
from streak_bonus.models.streak import StreakClass, StreakSnapshot
from streak_bonus.utils.datetime_helpers import days_between

logger = logging.getLogger(__name__)


def count_consecutive_days(dates_desc: List[date]) -> int:
    """
    Length of the run that starts at the first (most recent) date

    Args:
        dates_desc: Distinct dates, most recent first

    Returns:
        Number of consecutive days, 0 for an empty list
    """
    if not dates_desc:
        return 0

    current_streak = 1
    for newer, older in zip(dates_desc, dates_desc[1:]):
        if days_between(newer, older) == 1:
            current_streak += 1
        else:
            break
    return current_streak


def classify_streak(dates: Iterable[date], today: date) -> Tuple[StreakClass, int]:
    """
    Classify the current run of one activity

    Args:
        dates: Calendar days the activity was logged (duplicates allowed)
        today: Current calendar day in the streak timezone

    Returns:
        (classification, streak length); length is 0 whenever the class is none
    """
    distinct = sorted(set(dates), reverse=True)
    if len(distinct) < 2:
        return StreakClass.NONE, 0

    yesterday = today - timedelta(days=1)
    most_recent = distinct[0]
    if most_recent not in (today, yesterday):
        return StreakClass.NONE, 0

    current_streak = count_consecutive_days(distinct)

    if current_streak >= 3:
        return StreakClass.FULL, current_streak
    if current_streak == 2 and most_recent == yesterday:
        return StreakClass.BUILDING, 2
    return StreakClass.NONE, 0


def calculate_streaks(occurrences: Iterable[ActivityOccurrence], today: date) -> StreakSnapshot:
    """
    Build the streak snapshot for a set of occurrences

    Occurrences are expected to be pre-filtered to one scope.
    """
    activity_dates: Dict[str, Set[date]] = {}
    for occurrence in occurrences:
        activity_dates.setdefault(occurrence.activity_name, set()).add(occurrence.logged_on)

    building_streaks: Dict[str, int] = {}
    full_streaks: Dict[str, int] = {}

    for activity_name, dates in activity_dates.items():
        streak_class, length = classify_streak(dates, today)
        if streak_class is StreakClass.FULL:
            full_streaks[activity_name] = length
        elif streak_class is StreakClass.BUILDING:
            building_streaks[activity_name] = length

    return StreakSnapshot(building_streaks=building_streaks, streaks=full_streaks)


def track_activity_streaks(
    rows: Iterable[LogRow],
    reference: ActivityReference,
    scope: Scope,
    today: date
) -> StreakSnapshot:
    """
    Compute streaks for a scope straight from log rows

    Args:
        rows: Log rows (any order); rows outside the scope are ignored
        reference: Points reference used to keep positive activities only
        scope: Individual, household or global scope
        today: Current calendar day in the streak timezone

    Returns:
        StreakSnapshot with building (2-day) and full (3+ day) streaks
    """
    occurrences: List[ActivityOccurrence] = []
    row_count = 0
    for row in rows:
        if not scope.includes(row.identity):
            continue
        row_count += 1
        occurrences.extend(extract_occurrences(row, reference))

    snapshot = calculate_streaks(occurrences, today)

    logger.info(
        f"Tracked streaks for {scope.describe()} from {row_count} rows: "
        f"building={len(snapshot.building_streaks)}, full={len(snapshot.streaks)}"
    )
    return snapshot
