"""
Service Container - Dependency Injection Container

Builds the store-backed providers and the StreakService on first access.
The scope strategy is picked once, when the container is created.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from streak_bonus.config import HOUSEHOLDS_ENABLED

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    """

    households_enabled: bool = HOUSEHOLDS_ENABLED

    # Services (lazy-loaded via properties)
    _log_reader: Optional[object] = field(default=None, init=False, repr=False)
    _reference_provider: Optional[object] = field(default=None, init=False, repr=False)
    _settings_provider: Optional[object] = field(default=None, init=False, repr=False)
    _household_directory: Optional[object] = field(default=None, init=False, repr=False)
    _scope_resolver: Optional[object] = field(default=None, init=False, repr=False)
    _streak_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def log_reader(self):
        """Get ActivityLogReader instance (lazy-loaded)"""
        if self._log_reader is None:
            from streak_bonus.services.activity_log_reader import ActivityLogReader
            self._log_reader = ActivityLogReader()
            logger.debug("ActivityLogReader instantiated")
        return self._log_reader

    @property
    def reference_provider(self):
        """Get ReferenceTableProvider instance (lazy-loaded)"""
        if self._reference_provider is None:
            from streak_bonus.services.reference_service import ReferenceTableProvider
            self._reference_provider = ReferenceTableProvider()
            logger.debug("ReferenceTableProvider instantiated")
        return self._reference_provider

    @property
    def settings_provider(self):
        """Get StreakSettingsProvider instance (lazy-loaded)"""
        if self._settings_provider is None:
            from streak_bonus.services.settings_service import StreakSettingsProvider
            self._settings_provider = StreakSettingsProvider()
            logger.debug("StreakSettingsProvider instantiated")
        return self._settings_provider

    @property
    def household_directory(self):
        """Get HouseholdDirectory instance (lazy-loaded)"""
        if self._household_directory is None:
            from streak_bonus.services.household_service import HouseholdDirectory
            self._household_directory = HouseholdDirectory(enabled=self.households_enabled)
            logger.debug("HouseholdDirectory instantiated")
        return self._household_directory

    @property
    def scope_resolver(self):
        if self._scope_resolver is None:
            from streak_bonus.gamification.scope import build_scope_resolver
            directory = self.household_directory if self.households_enabled else None
            self._scope_resolver = build_scope_resolver(self.households_enabled, directory)
        return self._scope_resolver

    @property
    def streak_service(self):
        """Get StreakService instance (lazy-loaded)"""
        if self._streak_service is None:
            from streak_bonus.services.streak_service import StreakService
            self._streak_service = StreakService(
                self.log_reader,
                self.reference_provider,
                self.settings_provider,
                self.scope_resolver
            )
            logger.debug("StreakService instantiated")
        return self._streak_service


# Global container instance (initialized in main.py)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() before using services."
        )
    return _container


def init_container(households_enabled: bool = HOUSEHOLDS_ENABLED) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        households_enabled: Aggregate streaks per household instead of per identity

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(households_enabled=households_enabled)

    logger.info(f"Service container initialized (households_enabled={households_enabled})")
    return _container
