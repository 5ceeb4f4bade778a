"""
Scope Resolution Strategies

Decides whose log rows count toward an identity's streaks. One strategy is
chosen at wiring time from configuration:

- IndividualScopeResolver: the identity alone
- HouseholdScopeResolver: every member of the identity's household, falling
  back to the identity alone when no usable household is found
"""

import logging
from typing import Optional

from streak_bonus.exceptions import StreakBonusError
from streak_bonus.models.scope import Scope

logger = logging.getLogger(__name__)


class ScopeResolver:
    """Strategy interface: identity -> Scope"""

    async def resolve(self, identity: Optional[str]) -> Scope:
        raise NotImplementedError


class IndividualScopeResolver(ScopeResolver):
    """Every identity aggregates only its own rows"""

    async def resolve(self, identity: Optional[str]) -> Scope:
        if not identity:
            return Scope.global_scope()
        return Scope.individual(identity)


class HouseholdScopeResolver(ScopeResolver):
    """
    Household members aggregate together

    Args:
        directory: Object exposing async resolve_scope(identity) and
            async members_of(household_id), e.g. HouseholdDirectory
    """

    def __init__(self, directory):
        self.directory = directory

    async def resolve(self, identity: Optional[str]) -> Scope:
        if not identity:
            return Scope.global_scope()

        try:
            household_id = await self.directory.resolve_scope(identity)
            if not household_id:
                logger.debug(f"No household for {identity}, using individual scope")
                return Scope.individual(identity)

            members = await self.directory.members_of(household_id)
        except StreakBonusError as e:
            logger.warning(f"Household lookup failed for {identity}: {e.message}. Using individual scope.")
            return Scope.individual(identity)
        except Exception as e:
            logger.warning(
                f"Unexpected household lookup error for {identity}: {e}. Using individual scope.",
                exc_info=True
            )
            return Scope.individual(identity)

        if not members:
            logger.warning(f"Household {household_id} has no members, using individual scope for {identity}")
            return Scope.individual(identity)

        return Scope.household(household_id, members, identity=identity)


def build_scope_resolver(households_enabled: bool, directory=None) -> ScopeResolver:
    """Pick the scope strategy once, from configuration"""
    if households_enabled and directory is not None:
        logger.info("Using household streak scope")
        return HouseholdScopeResolver(directory)
    logger.info("Using individual streak scope")
    return IndividualScopeResolver()
