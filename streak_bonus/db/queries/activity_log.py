"""Activity log queries

Table: activity_log(id, logged_on timestamptz, points, activities text, email text)
One row per identity per day; activities holds the ", "-joined display entries.
"""
import logging
from datetime import date, timedelta
import psycopg
from streak_bonus.db.connection import db
from streak_bonus.exceptions import wrap_database_exception

logger = logging.getLogger(__name__)


async def get_recent_log_rows(limit: int) -> list[dict]:
    """
    Get the most recent log rows, oldest first

    Args:
        limit: Maximum number of rows (counted from the end of the log)

    Returns:
        [{'logged_on': datetime, 'activities': str, 'email': str}, ...]
    """
    try:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT logged_on, activities, email
                    FROM (
                        SELECT id, logged_on, activities, email
                        FROM activity_log
                        ORDER BY id DESC
                        LIMIT %s
                    ) recent
                    ORDER BY id ASC
                    """,
                    (limit,)
                )
                rows = await cur.fetchall()
    except psycopg.Error as e:
        raise wrap_database_exception(e, operation="get_recent_log_rows", context={"limit": limit})

    logger.debug(f"Fetched {len(rows)} recent activity log rows (limit {limit})")
    return rows


async def get_log_rows_between(start: date, end: date) -> list[dict]:
    """
    Get log rows around an inclusive calendar window, oldest first

    The window is widened by one day on each side so rows stored near
    midnight in another timezone are not lost; callers narrow it again
    once dates are converted to local calendar days.
    """
    try:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT logged_on, activities, email
                    FROM activity_log
                    WHERE logged_on >= %s AND logged_on < %s
                    ORDER BY id ASC
                    """,
                    (start - timedelta(days=1), end + timedelta(days=2))
                )
                rows = await cur.fetchall()
    except psycopg.Error as e:
        raise wrap_database_exception(
            e, operation="get_log_rows_between", context={"start": str(start), "end": str(end)}
        )

    logger.debug(f"Fetched {len(rows)} activity log rows between {start} and {end}")
    return rows
