"""Household membership queries

Table: households(household_id text, name text, email text, created_at timestamptz)
One row per member.
"""
import logging
from typing import Optional
import psycopg
from streak_bonus.db.connection import db
from streak_bonus.exceptions import wrap_database_exception

logger = logging.getLogger(__name__)


async def get_user_household_id(identity: str) -> Optional[str]:
    """Get the household an identity belongs to (case-insensitive)"""
    try:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT household_id
                    FROM households
                    WHERE lower(trim(email)) = %s
                      AND household_id IS NOT NULL
                    LIMIT 1
                    """,
                    (identity.strip().lower(),)
                )
                row = await cur.fetchone()
    except psycopg.Error as e:
        raise wrap_database_exception(e, operation="get_user_household_id", identity=identity)

    return row["household_id"] if row else None


async def get_household_members(household_id: str) -> list[str]:
    """Get member identities of a household"""
    try:
        async with db.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT email
                    FROM households
                    WHERE household_id = %s
                      AND email IS NOT NULL
                    ORDER BY created_at ASC
                    """,
                    (household_id,)
                )
                rows = await cur.fetchall()
    except psycopg.Error as e:
        raise wrap_database_exception(
            e, operation="get_household_members", context={"household_id": household_id}
        )

    return [row["email"].strip() for row in rows if row["email"] and row["email"].strip()]
