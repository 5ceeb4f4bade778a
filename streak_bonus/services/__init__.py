"""
Service Layer Package

Store-backed providers and the streak facade built on top of the pure
scoring core in streak_bonus.gamification.

- ActivityLogReader: bounded, scope-filtered reads of the activity log
- ReferenceTableProvider: cached points reference table
- StreakSettingsProvider: cached streak thresholds and bonus points
- HouseholdDirectory: cached household membership
- StreakService: streak snapshots, streak bonuses and the weekly bonus
"""

from streak_bonus.services.container import ServiceContainer, get_container, init_container
from streak_bonus.services.activity_log_reader import ActivityLogReader
from streak_bonus.services.reference_service import ReferenceTableProvider, build_activity_reference
from streak_bonus.services.settings_service import (
    StreakSettingsProvider,
    default_streak_settings,
    normalize_streak_settings,
)
from streak_bonus.services.household_service import HouseholdDirectory
from streak_bonus.services.streak_service import StreakService

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "ActivityLogReader",
    "ReferenceTableProvider",
    "build_activity_reference",
    "StreakSettingsProvider",
    "default_streak_settings",
    "normalize_streak_settings",
    "HouseholdDirectory",
    "StreakService",
]
