"""Unit tests for the exception hierarchy (streak_bonus/exceptions.py)"""
import logging
import pytest
import psycopg

from streak_bonus.exceptions import (
    DatabaseError,
    InvalidRowError,
    LogSourceUnavailableError,
    MalformedEntryError,
    QueryError,
    ScopeResolutionError,
    SettingsCorruptError,
    StreakBonusError,
    ValidationError,
    wrap_database_exception,
)


# ============================================================================
# Base Exception Tests
# ============================================================================

def test_base_error_fields():
    error = StreakBonusError(
        "Failed to read activity log",
        identity="alex@example.com",
        operation="read_recent",
        context={"limit": 90}
    )

    assert str(error) == "Failed to read activity log"
    assert error.identity == "alex@example.com"
    assert error.request_id
    assert error.timestamp is not None

    data = error.to_dict()
    assert data["error"] == "StreakBonusError"
    assert data["operation"] == "read_recent"
    assert data["context"] == {"limit": 90}


def test_errors_are_logged_on_creation(caplog):
    with caplog.at_level(logging.DEBUG, logger="streak_bonus.exceptions"):
        SettingsCorruptError("bad settings", setting_key="STREAK_SETTINGS")
        InvalidRowError("bad date", raw_date="nope")

    levels = {record.levelno for record in caplog.records}
    assert logging.WARNING in levels
    assert logging.DEBUG in levels


def test_request_id_is_kept_when_given():
    assert StreakBonusError("x", request_id="req-1").request_id == "req-1"


# ============================================================================
# Subclass Tests
# ============================================================================

def test_subclass_context():
    assert ValidationError("bad", field="thresholds.BONUS_1", value=0).context == {
        "field": "thresholds.BONUS_1",
        "value": 0,
    }
    assert MalformedEntryError("bad", entry="garbage").entry == "garbage"
    assert ScopeResolutionError("bad", household_id="hh-1").household_id == "hh-1"
    assert QueryError("bad", query="SELECT 1").query == "SELECT 1"


def test_hierarchy():
    for error_class in (
        ValidationError,
        LogSourceUnavailableError,
        InvalidRowError,
        MalformedEntryError,
        SettingsCorruptError,
        ScopeResolutionError,
        DatabaseError,
    ):
        assert issubclass(error_class, StreakBonusError)
    assert issubclass(QueryError, DatabaseError)


def test_log_source_unavailable_default_message():
    assert LogSourceUnavailableError().message == "Activity log source unavailable"


# ============================================================================
# Database Exception Wrapping Tests
# ============================================================================

def test_wrap_operational_error_as_unavailable():
    wrapped = wrap_database_exception(psycopg.OperationalError("connection refused"), operation="get_recent_log_rows")

    assert isinstance(wrapped, LogSourceUnavailableError)
    assert wrapped.operation == "get_recent_log_rows"
    assert isinstance(wrapped.cause, psycopg.OperationalError)


def test_wrap_other_errors_as_query_error():
    wrapped = wrap_database_exception(psycopg.ProgrammingError("syntax error"), operation="get_setting")

    assert isinstance(wrapped, QueryError)


def test_wrap_passes_through_own_errors():
    original = LogSourceUnavailableError()

    assert wrap_database_exception(original, operation="anything") is original
