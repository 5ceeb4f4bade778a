"""
Streak Settings Provider

Persisted settings may use the canonical upper-case keys or the lower-case
aliases written by older admin clients:

    {"thresholds": {"BONUS_1": 3, "bonus2": 7, "MULTIPLIER": 14},
     "bonusPoints": {"BONUS_1": 1, "BONUS_2": 2}}

normalize_streak_settings() is the only place that knows about both
spellings; everything past it works on StreakSettings.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from streak_bonus.config import (
    DEFAULT_STREAK_BONUS_POINTS,
    DEFAULT_STREAK_THRESHOLDS,
    SETTINGS_CACHE_TTL,
    STREAK_SETTINGS_KEY,
)
from streak_bonus.db import queries
from streak_bonus.exceptions import SettingsCorruptError, StreakBonusError, ValidationError
from streak_bonus.models.streak import StreakBonusPoints, StreakSettings, StreakThresholds
from streak_bonus.utils.cache import TTLCache

logger = logging.getLogger(__name__)

# canonical key -> lower-case alias
THRESHOLD_KEYS = {"BONUS_1": "bonus1", "BONUS_2": "bonus2", "MULTIPLIER": "multiplier"}
BONUS_POINT_KEYS = {"BONUS_1": "bonus1", "BONUS_2": "bonus2"}

_CACHE_KEY = "streak_settings"


def default_streak_settings() -> StreakSettings:
    """Fixed fallback settings (3/7/14 days, +1/+2 points)"""
    return StreakSettings(
        thresholds=StreakThresholds(
            bonus_1=DEFAULT_STREAK_THRESHOLDS["BONUS_1"],
            bonus_2=DEFAULT_STREAK_THRESHOLDS["BONUS_2"],
            multiplier=DEFAULT_STREAK_THRESHOLDS["MULTIPLIER"],
        ),
        bonus_points=StreakBonusPoints(
            bonus_1=DEFAULT_STREAK_BONUS_POINTS["BONUS_1"],
            bonus_2=DEFAULT_STREAK_BONUS_POINTS["BONUS_2"],
        ),
    )


def _lookup(group: Mapping[str, Any], canonical: str, alias: str) -> Any:
    """Upper-case key wins over its lower-case alias"""
    if canonical in group:
        return group[canonical]
    return group.get(alias)


def _is_positive_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float):
        return value.is_integer() and value > 0
    return False


def _read_group(raw: Any, keys: Mapping[str, str], group_name: str) -> dict[str, int]:
    if not isinstance(raw, Mapping):
        raise SettingsCorruptError(f"Streak settings '{group_name}' is not an object", setting_key=group_name)

    values = {}
    for canonical, alias in keys.items():
        value = _lookup(raw, canonical, alias)
        if not _is_positive_int(value):
            raise SettingsCorruptError(
                f"Streak setting {group_name}.{canonical} is not a positive integer: {value!r}",
                setting_key=f"{group_name}.{canonical}",
            )
        values[canonical] = int(value)
    return values


def normalize_streak_settings(raw: Any) -> StreakSettings:
    """
    Convert a persisted settings blob into StreakSettings

    Args:
        raw: JSON string, mapping, or None

    Returns:
        Parsed settings, or the defaults when raw is absent, unparseable or
        structurally invalid. Never raises.
    """
    if raw is None or raw == "":
        return default_streak_settings()

    try:
        data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
        if not isinstance(data, Mapping):
            raise SettingsCorruptError("Streak settings is not an object", setting_key=STREAK_SETTINGS_KEY)

        thresholds = _read_group(data.get("thresholds"), THRESHOLD_KEYS, "thresholds")
        bonus_points = _read_group(
            _lookup(data, "bonusPoints", "bonus_points"), BONUS_POINT_KEYS, "bonusPoints"
        )
    except (SettingsCorruptError, ValueError, TypeError) as e:
        logger.warning(f"Invalid streak settings, falling back to defaults: {e}")
        return default_streak_settings()

    if not thresholds["BONUS_1"] < thresholds["BONUS_2"] < thresholds["MULTIPLIER"]:
        logger.warning(f"Streak thresholds are not increasing: {thresholds}")

    return StreakSettings(
        thresholds=StreakThresholds(
            bonus_1=thresholds["BONUS_1"],
            bonus_2=thresholds["BONUS_2"],
            multiplier=thresholds["MULTIPLIER"],
        ),
        bonus_points=StreakBonusPoints(
            bonus_1=bonus_points["BONUS_1"],
            bonus_2=bonus_points["BONUS_2"],
        ),
    )


def serialize_streak_settings(settings: StreakSettings) -> str:
    """Persisted form: upper-case keys only"""
    return json.dumps({
        "thresholds": {
            "BONUS_1": settings.thresholds.bonus_1,
            "BONUS_2": settings.thresholds.bonus_2,
            "MULTIPLIER": settings.thresholds.multiplier,
        },
        "bonusPoints": {
            "BONUS_1": settings.bonus_points.bonus_1,
            "BONUS_2": settings.bonus_points.bonus_2,
        },
    })


def _coerce_submitted_int(group: Mapping[str, Any], canonical: str, alias: str, field: str) -> int:
    value = _lookup(group, canonical, alias)
    if isinstance(value, bool):
        raise ValidationError("Must be a positive integer", field=field, value=value)
    try:
        number = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ValidationError("Must be a positive integer", field=field, value=value)
    if number <= 0:
        raise ValidationError("Must be a positive integer", field=field, value=value)
    return number


def validate_submitted_settings(raw: Any) -> StreakSettings:
    """
    Validate settings submitted from an admin form

    Numeric strings are accepted; either key spelling is accepted.

    Raises:
        ValidationError: missing groups or non-positive / non-numeric values
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("Invalid settings data format received", field="settings", value=raw)

    thresholds = raw.get("thresholds")
    bonus_points = _lookup(raw, "bonusPoints", "bonus_points")
    if not isinstance(thresholds, Mapping) or not isinstance(bonus_points, Mapping):
        raise ValidationError("Invalid settings data format received", field="settings", value=raw)

    return StreakSettings(
        thresholds=StreakThresholds(**{
            canonical.lower(): _coerce_submitted_int(thresholds, canonical, alias, f"thresholds.{canonical}")
            for canonical, alias in THRESHOLD_KEYS.items()
        }),
        bonus_points=StreakBonusPoints(**{
            canonical.lower(): _coerce_submitted_int(bonus_points, canonical, alias, f"bonusPoints.{canonical}")
            for canonical, alias in BONUS_POINT_KEYS.items()
        }),
    )


class StreakSettingsProvider:
    """
    Reads and writes the persisted streak settings

    Args:
        fetch_setting: async key -> raw value (defaults to the database)
        store_setting: async (key, value) -> None (defaults to the database)
        cache: TTLCache owned by this provider
    """

    def __init__(
        self,
        fetch_setting: Optional[Callable[[str], Awaitable[Optional[str]]]] = None,
        store_setting: Optional[Callable[[str, str], Awaitable[None]]] = None,
        cache: Optional[TTLCache] = None,
        key: str = STREAK_SETTINGS_KEY
    ):
        self._fetch_setting = fetch_setting or queries.get_setting
        self._store_setting = store_setting or queries.set_setting
        self.cache = cache or TTLCache(name="settings", default_ttl=SETTINGS_CACHE_TTL)
        self.key = key

    async def get_settings(self) -> StreakSettings:
        """Current settings; defaults on any failure"""
        cached = self.cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        try:
            raw = await self._fetch_setting(self.key)
        except StreakBonusError as e:
            logger.warning(f"Could not load streak settings ({e.message}), using defaults")
            return default_streak_settings()

        settings = normalize_streak_settings(raw)
        self.cache.set(_CACHE_KEY, settings)
        return settings

    async def save_settings(self, raw: Any) -> StreakSettings:
        """
        Validate and persist submitted settings

        Raises:
            ValidationError: submitted values are invalid
            StreakBonusError: the settings store rejected the write
        """
        settings = validate_submitted_settings(raw)
        await self._store_setting(self.key, serialize_streak_settings(settings))
        self.invalidate()
        logger.info(f"Saved streak settings: {serialize_streak_settings(settings)}")
        return settings

    def invalidate(self) -> None:
        self.cache.delete(_CACHE_KEY)
