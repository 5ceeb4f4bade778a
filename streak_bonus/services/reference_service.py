"""
Points Reference Provider

Loads the activity -> base points table, validates it and keeps it in a
TTL cache. Only this provider and the admin tooling that edits the table
should invalidate it.
"""

import logging
import math
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional

from streak_bonus.config import REFERENCE_CACHE_TTL
from streak_bonus.db import queries
from streak_bonus.exceptions import StreakBonusError
from streak_bonus.models.activity import ActivityReference, Points
from streak_bonus.utils.cache import TTLCache

logger = logging.getLogger(__name__)

_CACHE_KEY = "activity_reference"


def _parse_points(value: Any) -> Optional[Points]:
    """Numbers, numeric strings and Decimals; None for anything else"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number) if number.is_integer() else number


def build_activity_reference(rows: Iterable[Mapping[str, Any]]) -> ActivityReference:
    """
    Validate raw reference rows

    A row needs a name, numeric points and a category. The first row for a
    name wins; later duplicates are logged and ignored.
    """
    point_values = {}
    categories = {}

    for index, row in enumerate(rows):
        activity = str(row.get("activity") or "").strip()
        points = _parse_points(row.get("points"))
        category = str(row.get("category") or "").strip()

        if not activity or points is None or not category:
            if row.get("activity") or row.get("points") not in (None, "") or row.get("category"):
                logger.warning(f"Skipping invalid points reference row {index + 1}: {dict(row)}")
            continue

        if activity in point_values:
            logger.warning(
                f"Duplicate activity '{activity}' in points reference at row {index + 1}. "
                f"Using the first value."
            )
            continue

        point_values[activity] = points
        categories[activity] = category

    return ActivityReference(point_values=point_values, categories=categories)


class ReferenceTableProvider:
    """
    Cached access to the points reference table

    Args:
        fetch_rows: async () -> raw rows (defaults to the database)
        cache: TTLCache owned by this provider
    """

    def __init__(
        self,
        fetch_rows: Optional[Callable[[], Awaitable[list[dict]]]] = None,
        cache: Optional[TTLCache] = None
    ):
        self._fetch_rows = fetch_rows or queries.get_points_reference_rows
        self.cache = cache or TTLCache(name="reference", default_ttl=REFERENCE_CACHE_TTL)

    async def get_reference(self) -> ActivityReference:
        """Current reference table; empty when the store is unavailable"""
        cached = self.cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        logger.info("Cache miss. Reading fresh points reference.")
        try:
            rows = await self._fetch_rows()
        except StreakBonusError as e:
            logger.warning(f"Could not read points reference ({e.message}), using an empty table")
            return ActivityReference()

        reference = build_activity_reference(rows or [])

        # An empty table is more likely a read problem than real data
        if len(reference) > 0:
            self.cache.set(_CACHE_KEY, reference)
        else:
            logger.warning("Points reference is empty, not caching it")

        return reference

    def reset_cache(self) -> None:
        """Drop the cached table so the next read is fresh"""
        self.cache.delete(_CACHE_KEY)
        logger.info("Points reference cache reset")
