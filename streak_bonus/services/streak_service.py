"""
StreakService - Streak and Bonus Orchestration

Fetches log rows, the points reference and the streak settings, resolves
the aggregation scope and hands everything to the pure scoring core in
streak_bonus.gamification.
"""

import logging
from datetime import date
from typing import Callable, Optional

from streak_bonus.config import (
    WEEKLY_BONUS_ACTIVITY,
    WEEKLY_BONUS_POINTS,
    WEEKLY_BONUS_REQUIRED_COUNT,
)
from streak_bonus.gamification import (
    calculate_streak_bonus,
    check_weekly_occurrence_bonus,
    process_activity_with_points,
    track_activity_streaks,
)
from streak_bonus.models.activity import Points
from streak_bonus.models.scope import Scope
from streak_bonus.models.streak import (
    BonusResult,
    ScoredActivity,
    StreakSnapshot,
    WeeklyBonusResult,
)
from streak_bonus.utils.datetime_helpers import (
    format_date_ymd,
    get_iso_week_number,
    get_week_end_date,
    get_week_start_date,
    today_local,
)

logger = logging.getLogger(__name__)


class StreakService:
    """
    Service for streak-aware scoring.

    Responsibilities:
    - Streak snapshots per identity, household or the whole log
    - Streak bonus for a single activity
    - Scoring submitted activities by name
    - Weekly occurrence bonus
    """

    def __init__(
        self,
        log_reader,
        reference_provider,
        settings_provider,
        scope_resolver,
        today_provider: Callable[[], date] = today_local
    ):
        """
        Args:
            log_reader: ActivityLogReader
            reference_provider: ReferenceTableProvider
            settings_provider: StreakSettingsProvider
            scope_resolver: ScopeResolver strategy
            today_provider: Returns the current calendar day
        """
        self.log_reader = log_reader
        self.reference_provider = reference_provider
        self.settings_provider = settings_provider
        self.scope_resolver = scope_resolver
        self.today_provider = today_provider
        logger.debug("StreakService initialized")

    async def get_streaks(self, identity: Optional[str] = None) -> StreakSnapshot:
        """Streak snapshot for an identity's scope (whole log when identity is empty)"""
        scope = await self.scope_resolver.resolve(identity)
        return await self.get_streaks_for_scope(scope)

    async def get_streaks_for_scope(self, scope: Scope) -> StreakSnapshot:
        rows = await self.log_reader.read_recent(scope)
        reference = await self.reference_provider.get_reference()
        return track_activity_streaks(rows, reference, scope, self.today_provider())

    async def calculate_streak_multiplier(
        self,
        identity: Optional[str],
        activity_name: str,
        base_points: Points
    ) -> BonusResult:
        """
        Streak bonus for one activity about to be logged

        Any failure while working out the streak scores the activity as if
        it had no streak.
        """
        settings = await self.settings_provider.get_settings()

        try:
            snapshot = await self.get_streaks(identity)
            streak_length = snapshot.streak_length(activity_name)
        except Exception as e:
            logger.error(
                f"Streak lookup failed for '{activity_name}' ({identity}): {e}. Scoring without streak.",
                exc_info=True
            )
            streak_length = 0

        return calculate_streak_bonus(activity_name, base_points, streak_length, settings)

    async def process_activity(self, identity: Optional[str], activity_name: Optional[str]) -> ScoredActivity:
        """Look up an activity's base points and apply its current streak"""
        reference = await self.reference_provider.get_reference()
        settings = await self.settings_provider.get_settings()

        try:
            snapshot = await self.get_streaks(identity)
        except Exception as e:
            logger.error(f"Streak lookup failed for {identity}: {e}. Scoring without streak.", exc_info=True)
            snapshot = StreakSnapshot()

        return process_activity_with_points(activity_name, reference, snapshot, settings)

    async def check_weekly_bonus(
        self,
        identity: Optional[str],
        target: str = WEEKLY_BONUS_ACTIVITY,
        required_count: int = WEEKLY_BONUS_REQUIRED_COUNT,
        bonus_points: Points = WEEKLY_BONUS_POINTS,
        week_of: Optional[date] = None
    ) -> WeeklyBonusResult:
        """
        Weekly occurrence bonus for the Sunday-Saturday week containing week_of

        Args:
            week_of: Any day of the week to check (defaults to today)
        """
        day = week_of or self.today_provider()
        week_start = get_week_start_date(day)
        week_end = get_week_end_date(day)

        scope = await self.scope_resolver.resolve(identity)
        logger.debug(
            f"Weekly bonus window for {scope.describe()}: ISO week {get_iso_week_number(day)}, "
            f"{format_date_ymd(week_start)} to {format_date_ymd(week_end)}"
        )
        reference = await self.reference_provider.get_reference()
        rows = await self.log_reader.read_between(scope, week_start, week_end)

        return check_weekly_occurrence_bonus(
            rows,
            reference,
            target,
            required_count,
            bonus_points,
            scope,
            week_start,
            week_end,
        )

    def reset_caches(self) -> None:
        """Force the next calls to read fresh reference data and settings"""
        self.reference_provider.reset_cache()
        self.settings_provider.invalidate()
        logger.info("Streak service caches reset")
