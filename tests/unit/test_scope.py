"""Unit tests for scope models and resolution strategies"""
import pytest
from unittest.mock import AsyncMock, Mock

from streak_bonus.exceptions import ScopeResolutionError
from streak_bonus.gamification.scope import (
    HouseholdScopeResolver,
    IndividualScopeResolver,
    build_scope_resolver,
)
from streak_bonus.models.scope import Scope, normalize_identity


# ============================================================================
# Scope Model Tests
# ============================================================================

def test_normalize_identity():
    assert normalize_identity("  Alex@Example.COM ") == "alex@example.com"
    assert normalize_identity(None) == ""


def test_individual_scope_matches_case_insensitively():
    scope = Scope.individual("Alex@Example.com")

    assert scope.includes("alex@example.com")
    assert scope.includes(" ALEX@EXAMPLE.COM")
    assert not scope.includes("sam@example.com")
    assert not scope.includes(None)
    assert not scope.is_household
    assert not scope.is_global


def test_household_scope_members():
    scope = Scope.household("hh-1", ["Alex@example.com", "sam@example.com", "", None])

    assert scope.is_household
    assert scope.members == frozenset({"alex@example.com", "sam@example.com"})
    assert scope.includes("SAM@example.com")
    assert not scope.includes("outsider@example.com")


def test_global_scope_includes_everything():
    scope = Scope.global_scope()

    assert scope.is_global
    assert scope.includes("anyone@example.com")
    assert scope.includes("")
    assert scope.describe() == "global"


# ============================================================================
# Resolver Tests
# ============================================================================

@pytest.mark.asyncio
async def test_individual_resolver():
    resolver = IndividualScopeResolver()

    scope = await resolver.resolve("alex@example.com")

    assert scope.members == frozenset({"alex@example.com"})


@pytest.mark.asyncio
async def test_resolver_without_identity_is_global():
    assert (await IndividualScopeResolver().resolve(None)).is_global
    assert (await HouseholdScopeResolver(Mock()).resolve("")).is_global


@pytest.mark.asyncio
async def test_household_resolver_uses_members():
    directory = Mock()
    directory.resolve_scope = AsyncMock(return_value="hh-1")
    directory.members_of = AsyncMock(return_value=["alex@example.com", "sam@example.com"])

    scope = await HouseholdScopeResolver(directory).resolve("alex@example.com")

    assert scope.household_id == "hh-1"
    assert scope.identity == "alex@example.com"
    assert scope.members == frozenset({"alex@example.com", "sam@example.com"})
    directory.members_of.assert_awaited_once_with("hh-1")


@pytest.mark.asyncio
async def test_household_resolver_without_household_falls_back():
    directory = Mock()
    directory.resolve_scope = AsyncMock(return_value=None)
    directory.members_of = AsyncMock()

    scope = await HouseholdScopeResolver(directory).resolve("alex@example.com")

    assert not scope.is_household
    assert scope.members == frozenset({"alex@example.com"})
    directory.members_of.assert_not_awaited()


@pytest.mark.asyncio
async def test_household_resolver_with_no_members_falls_back():
    directory = Mock()
    directory.resolve_scope = AsyncMock(return_value="hh-empty")
    directory.members_of = AsyncMock(return_value=[])

    scope = await HouseholdScopeResolver(directory).resolve("alex@example.com")

    assert not scope.is_household
    assert scope.includes("alex@example.com")


@pytest.mark.asyncio
async def test_household_resolver_lookup_failure_falls_back():
    directory = Mock()
    directory.resolve_scope = AsyncMock(side_effect=ScopeResolutionError("lookup failed"))

    scope = await HouseholdScopeResolver(directory).resolve("alex@example.com")

    assert scope.members == frozenset({"alex@example.com"})


def test_build_scope_resolver_selects_strategy():
    directory = Mock()

    assert isinstance(build_scope_resolver(True, directory), HouseholdScopeResolver)
    assert isinstance(build_scope_resolver(False, directory), IndividualScopeResolver)
    assert isinstance(build_scope_resolver(True, None), IndividualScopeResolver)


@pytest.mark.asyncio
async def test_household_resolver_unexpected_error_falls_back():
    directory = Mock()
    directory.resolve_scope = AsyncMock(return_value="hh-1")
    directory.members_of = AsyncMock(side_effect=AttributeError("'NoneType' object has no attribute 'strip'"))

    scope = await HouseholdScopeResolver(directory).resolve("alex@example.com")

    assert not scope.is_household
    assert scope.members == frozenset({"alex@example.com"})
