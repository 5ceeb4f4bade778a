"""
Database queries - re-exported for `from streak_bonus.db import queries`.

Module organization:
- activity_log.py: recent and windowed activity log rows
- reference.py: points reference table
- households.py: household membership lookups (read-only)
- settings.py: persisted application settings
"""

from streak_bonus.db.queries.activity_log import (
    get_recent_log_rows,
    get_log_rows_between,
)
from streak_bonus.db.queries.reference import get_points_reference_rows
from streak_bonus.db.queries.households import (
    get_user_household_id,
    get_household_members,
)
from streak_bonus.db.queries.settings import get_setting, set_setting

__all__ = [
    "get_recent_log_rows",
    "get_log_rows_between",
    "get_points_reference_rows",
    "get_user_household_id",
    "get_household_members",
    "get_setting",
    "set_setting",
]
