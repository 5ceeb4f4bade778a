"""Global test fixtures and utilities for streak-bonus tests"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from datetime import date, timedelta

from streak_bonus.models.activity import ActivityReference, LogRow
from streak_bonus.models.scope import Scope
from streak_bonus.services.settings_service import default_streak_settings


# ============================================================================
# Dates
# ============================================================================

@pytest.fixture
def today():
    """A fixed Sunday, start of a game week"""
    return date(2024, 3, 10)


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


# ============================================================================
# Reference & Settings Fixtures
# ============================================================================

@pytest.fixture
def points_reference():
    """Points reference with positive, negative and zero-point activities"""
    return ActivityReference(
        point_values={
            "Morning Workout": 3,
            "Read 30 minutes": 2,
            "Meditate": 1,
            "Dedicated study/work block (e.g., Grad School)": 4,
            "Takeout dinner": -2,
            "Doomscrolling": -1,
            "Made bed": 0,
        },
        categories={
            "Morning Workout": "Health",
            "Read 30 minutes": "Learning",
            "Meditate": "Health",
            "Dedicated study/work block (e.g., Grad School)": "Learning",
            "Takeout dinner": "Food",
            "Doomscrolling": "Habits",
            "Made bed": "Home",
        },
    )


@pytest.fixture
def streak_settings():
    """Default thresholds 3/7/14 with +1/+2 bonus points"""
    return default_streak_settings()


# ============================================================================
# Log Row Fixtures
# ============================================================================

@pytest.fixture
def make_row():
    """Factory for LogRow values"""
    def _make_row(logged_on, activities, identity="alex@example.com"):
        return LogRow(logged_on=logged_on, activities=activities, identity=identity)
    return _make_row


@pytest.fixture
def workout_rows(make_row, today):
    """Morning Workout logged on each of the last five days, ending yesterday"""
    return [
        make_row(today - timedelta(days=offset), "➕ Morning Workout (+3)")
        for offset in range(5, 0, -1)
    ]


@pytest.fixture
def alex_scope():
    return Scope.individual("alex@example.com")


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def mock_db_cursor():
    """Mock database cursor with standard query results"""
    cursor = AsyncMock()
    cursor.fetchone = AsyncMock(return_value=None)
    cursor.fetchall = AsyncMock(return_value=[])
    cursor.execute = AsyncMock()
    return cursor


@pytest.fixture
def mock_db_connection(mock_db_cursor):
    """Mock connection whose cursor() works as an async context manager"""
    conn = MagicMock()
    conn.cursor.return_value.__aenter__.return_value = mock_db_cursor
    conn.commit = AsyncMock()
    return conn
