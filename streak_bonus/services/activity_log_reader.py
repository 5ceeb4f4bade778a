"""
Activity Log Reader

Fetches a bounded window of log rows and turns them into LogRow values
for one scope. The log is only ever read; a missing or unreachable store
reads as "no history".
"""

import logging
from datetime import date
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, Optional

from streak_bonus.config import STREAK_HISTORY_ROWS, STREAK_TIMEZONE
from streak_bonus.db import queries
from streak_bonus.exceptions import InvalidRowError, StreakBonusError
from streak_bonus.models.activity import LogRow
from streak_bonus.models.scope import Scope
from streak_bonus.utils.datetime_helpers import coerce_log_date

logger = logging.getLogger(__name__)


class ActivityLogReader:
    """
    Args:
        fetch_recent_rows: async limit -> raw rows, oldest first
        fetch_rows_between: async (start, end) -> raw rows, oldest first
        limit: Maximum rows scanned, counted from the end of the log
        tz_name: Timezone in which row timestamps become calendar days
    """

    def __init__(
        self,
        fetch_recent_rows: Optional[Callable[[int], Awaitable[Optional[list]]]] = None,
        fetch_rows_between: Optional[Callable[[date, date], Awaitable[Optional[list]]]] = None,
        limit: int = STREAK_HISTORY_ROWS,
        tz_name: str = STREAK_TIMEZONE
    ):
        self._fetch_recent_rows = fetch_recent_rows or queries.get_recent_log_rows
        self._fetch_rows_between = fetch_rows_between or queries.get_log_rows_between
        self.limit = limit
        self.tz_name = tz_name

    async def read_recent(self, scope: Scope, newest_first: bool = False) -> List[LogRow]:
        """
        Most recent rows of the log that belong to the scope

        The row cap is applied to the whole log before scope filtering.
        """
        try:
            raw_rows = await self._fetch_recent_rows(self.limit)
        except StreakBonusError as e:
            logger.warning(f"Activity log unavailable ({e.message}), treating as no history")
            return []

        if raw_rows is None:
            logger.warning("Activity log source missing, treating as no history")
            return []

        rows = self.filter_rows(raw_rows, scope)
        logger.debug(f"Read {len(rows)} of {len(raw_rows)} recent log rows for {scope.describe()}")
        return list(reversed(rows)) if newest_first else rows

    async def read_between(self, scope: Scope, start: date, end: date) -> List[LogRow]:
        """Rows of the scope whose calendar day falls in [start, end]"""
        try:
            raw_rows = await self._fetch_rows_between(start, end)
        except StreakBonusError as e:
            logger.warning(f"Activity log unavailable ({e.message}), treating as no history")
            return []

        if raw_rows is None:
            logger.warning("Activity log source missing, treating as no history")
            return []

        return [row for row in self.filter_rows(raw_rows, scope) if start <= row.logged_on <= end]

    def filter_rows(self, raw_rows: Iterable[Mapping[str, Any]], scope: Scope) -> List[LogRow]:
        """Coerce raw rows, dropping invalid dates and rows outside the scope"""
        rows = []
        for index, raw in enumerate(raw_rows):
            row = self.to_log_row(raw, index)
            if row is None or not scope.includes(row.identity):
                continue
            rows.append(row)
        return rows

    def to_log_row(self, raw: Mapping[str, Any], index: int = 0) -> Optional[LogRow]:
        """Build a LogRow, or None when the row's date is unusable"""
        try:
            logged_on = coerce_log_date(raw.get("logged_on"), self.tz_name)
        except InvalidRowError:
            logger.debug(f"Skipping log row {index} with invalid date {raw.get('logged_on')!r}")
            return None

        return LogRow(
            logged_on=logged_on,
            activities=raw.get("activities"),
            identity=raw.get("email"),
        )
