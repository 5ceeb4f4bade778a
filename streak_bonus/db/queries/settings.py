"""Application settings queries

Table: app_settings(key text primary key, value text, updated_at timestamptz)
"""
import logging
from typing import Optional
import psycopg
from streak_bonus.db.connection import db
from streak_bonus.exceptions import wrap_database_exception

logger = logging.getLogger(__name__)


async def get_setting(key: str) -> Optional[str]:
    """Get a raw persisted setting value"""
    try:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT value FROM app_settings WHERE key = %s",
                    (key,)
                )
                row = await cur.fetchone()
    except psycopg.Error as e:
        raise wrap_database_exception(e, operation="get_setting", context={"key": key})

    return row["value"] if row else None


async def set_setting(key: str, value: str) -> None:
    """Create or replace a persisted setting value"""
    try:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO app_settings (key, value, updated_at)
                    VALUES (%s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (key) DO UPDATE
                    SET value = EXCLUDED.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (key, value)
                )
                await conn.commit()
    except psycopg.Error as e:
        raise wrap_database_exception(e, operation="set_setting", context={"key": key})

    logger.info(f"Saved setting {key}")
