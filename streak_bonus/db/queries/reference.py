"""Points reference queries

Table: points_reference(id, activity text, points numeric, category text)
"""
import logging
import psycopg
from streak_bonus.db.connection import db
from streak_bonus.exceptions import wrap_database_exception

logger = logging.getLogger(__name__)


async def get_points_reference_rows() -> list[dict]:
    """
    Get raw points reference rows in sheet order

    Returns:
        [{'activity': str, 'points': number, 'category': str}, ...]
    """
    try:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT activity, points, category
                    FROM points_reference
                    ORDER BY id ASC
                    """
                )
                return await cur.fetchall()
    except psycopg.Error as e:
        raise wrap_database_exception(e, operation="get_points_reference_rows")
