"""
Household Directory

Read-only, cached view of household membership used for scope resolution.
Membership administration (create/join/leave) lives elsewhere and must call
clear_household_caches() after every change.
"""

import logging
from typing import Awaitable, Callable, Iterable, Optional

from streak_bonus.config import HOUSEHOLD_CACHE_TTL, HOUSEHOLDS_ENABLED
from streak_bonus.db import queries
from streak_bonus.exceptions import ScopeResolutionError, StreakBonusError
from streak_bonus.models.scope import normalize_identity
from streak_bonus.utils.cache import MISSING, TTLCache

logger = logging.getLogger(__name__)


def _household_key(identity: str) -> str:
    return f"household_{normalize_identity(identity)}"


def _members_key(household_id: str) -> str:
    return f"household_members_{household_id}"


class HouseholdDirectory:
    """
    Args:
        fetch_household_id: async identity -> household id or None
        fetch_members: async household id -> member identities
        cache: TTLCache owned by this directory
        enabled: when False every identity is treated as household-less
    """

    def __init__(
        self,
        fetch_household_id: Optional[Callable[[str], Awaitable[Optional[str]]]] = None,
        fetch_members: Optional[Callable[[str], Awaitable[list[str]]]] = None,
        cache: Optional[TTLCache] = None,
        enabled: bool = HOUSEHOLDS_ENABLED
    ):
        self._fetch_household_id = fetch_household_id or queries.get_user_household_id
        self._fetch_members = fetch_members or queries.get_household_members
        self.cache = cache or TTLCache(name="household", default_ttl=HOUSEHOLD_CACHE_TTL)
        self.enabled = enabled

    async def resolve_scope(self, identity: str) -> Optional[str]:
        """
        Household id for an identity

        Returns:
            Household id, or None when households are disabled or the
            identity has none (the None is cached too)

        Raises:
            ScopeResolutionError: the lookup itself failed
        """
        if not identity or not self.enabled:
            return None

        cache_key = _household_key(identity)
        cached = self.cache.get(cache_key, MISSING)
        if cached is not MISSING:
            return cached

        try:
            household_id = await self._fetch_household_id(normalize_identity(identity))
        except StreakBonusError as e:
            raise ScopeResolutionError(
                f"Household lookup failed for {identity}",
                identity=identity,
                operation="resolve_scope",
                cause=e
            )

        self.cache.set(cache_key, household_id or None)
        if not household_id:
            logger.debug(f"No household found for {identity}")
        return household_id or None

    async def members_of(self, household_id: str) -> list[str]:
        """
        Member identities of a household

        Raises:
            ScopeResolutionError: the lookup itself failed
        """
        if not household_id or not self.enabled:
            return []

        cache_key = _members_key(household_id)
        cached = self.cache.get(cache_key, MISSING)
        if cached is not MISSING:
            return list(cached)

        try:
            members = await self._fetch_members(household_id)
        except StreakBonusError as e:
            raise ScopeResolutionError(
                f"Member lookup failed for household {household_id}",
                household_id=household_id,
                operation="members_of",
                cause=e
            )

        members = [m.strip() for m in members or [] if m and m.strip()]
        if members:
            self.cache.set(cache_key, tuple(members))
        return members

    def clear_household_caches(self, household_id: Optional[str] = None, affected_identities: Iterable[str] = ()) -> int:
        """
        Forget cached membership for a household and the given identities

        With neither a household nor identities, every entry is dropped.
        """
        if household_id is None and not affected_identities:
            count = self.cache.clear()
            logger.info(f"Cleared all {count} household cache entries")
            return count

        count = 0
        if household_id:
            count += int(self.cache.delete(_members_key(household_id)))
        for identity in affected_identities:
            count += int(self.cache.delete(_household_key(identity)))
        logger.info(f"Cleared {count} household cache entries (household={household_id})")
        return count
