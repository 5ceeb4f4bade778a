"""Unit tests for activity field parsing (streak_bonus/gamification/activity_parser.py)"""
import pytest
from datetime import date

from streak_bonus.exceptions import MalformedEntryError
from streak_bonus.gamification.activity_parser import (
    count_activity_mentions,
    extract_occurrences,
    format_activity_entry,
    format_activity_field,
    parse_activity_entry,
    parse_activity_field,
    split_activity_field,
    streak_emoji,
)
from streak_bonus.models.activity import LogRow, Polarity
from streak_bonus.models.streak import BonusResult, ScoredActivity


# ============================================================================
# Entry Parsing Tests
# ============================================================================

def test_parse_entry_plain():
    entry = parse_activity_entry("➕ Morning Workout (+3)")

    assert entry.polarity == Polarity.POSITIVE
    assert entry.name == "Morning Workout"
    assert entry.streak_length is None
    assert entry.points == 3


def test_parse_entry_with_streak_annotation():
    entry = parse_activity_entry("➕ Morning Workout (🔥5) (+4)")

    assert entry.name == "Morning Workout"
    assert entry.streak_length == 5
    assert entry.points == 4


def test_parse_entry_with_multiple_flames():
    """Higher tiers are written with more flames"""
    entry = parse_activity_entry("➕ Read 30 minutes (🔥🔥🔥15) (+4)")

    assert entry.name == "Read 30 minutes"
    assert entry.streak_length == 15


def test_parse_negative_entry():
    entry = parse_activity_entry("➖ Takeout dinner (-2)")

    assert entry.polarity == Polarity.NEGATIVE
    assert entry.name == "Takeout dinner"
    assert entry.points == -2


def test_parse_entry_name_stops_at_first_parenthesis():
    """Names containing parentheses are truncated at the first one"""
    entry = parse_activity_entry("➕ Dedicated study/work block (e.g., Grad School) (+4)")

    assert entry.name == "Dedicated study/work block"


def test_parse_entry_fractional_points():
    entry = parse_activity_entry("➕ Stretch (+0.5)")

    assert entry.points == 0.5


@pytest.mark.parametrize("raw", [
    "Morning Workout (+3)",   # no marker
    "➕ Morning Workout",       # no parenthesis
    "➕  (+3)",                 # empty name
    "",
])
def test_parse_entry_malformed_raises(raw):
    with pytest.raises(MalformedEntryError):
        parse_activity_entry(raw)


# ============================================================================
# Field Parsing Tests
# ============================================================================

def test_split_activity_field_drops_blanks():
    assert split_activity_field("➕ A (+1), , ➖ B (-1)") == ["➕ A (+1)", "➖ B (-1)"]
    assert split_activity_field(None) == []
    assert split_activity_field("") == []


def test_parse_field_skips_malformed_entries():
    """A malformed entry does not lose the rest of the row"""
    entries = parse_activity_field("➕ Morning Workout (+3), garbage, ➖ Takeout dinner (-2)")

    assert [e.name for e in entries] == ["Morning Workout", "Takeout dinner"]


def test_parse_field_empty():
    assert parse_activity_field("") == []
    assert parse_activity_field(None) == []


# ============================================================================
# Occurrence Extraction Tests
# ============================================================================

def test_extract_occurrences_keeps_only_positive_reference_activities(points_reference):
    row = LogRow(
        logged_on=date(2024, 3, 9),
        activities=(
            "➕ Morning Workout (+3), ➖ Takeout dinner (-2), "
            "➕ Made bed (+0), ➕ Unknown thing (+5)"
        ),
        identity="alex@example.com",
    )

    occurrences = extract_occurrences(row, points_reference)

    assert [o.activity_name for o in occurrences] == ["Morning Workout"]
    assert occurrences[0].logged_on == date(2024, 3, 9)
    assert occurrences[0].identity == "alex@example.com"


def test_extract_occurrences_ignores_marker_for_positive_activity(points_reference):
    """Eligibility follows the reference table, not the marker in the log"""
    row = LogRow(logged_on=date(2024, 3, 9), activities="➖ Meditate (-1)")

    occurrences = extract_occurrences(row, points_reference)

    assert len(occurrences) == 1
    assert occurrences[0].polarity == Polarity.NEGATIVE


# ============================================================================
# Mention Counting Tests
# ============================================================================

def test_count_mentions_name_with_comma_and_parentheses():
    name = "Dedicated study/work block (e.g., Grad School)"
    text = f"➕ {name} (+4), ➕ Meditate (+1), ➕ {name} (🔥3) (+5)"

    assert count_activity_mentions(text, name) == 2


def test_count_mentions_does_not_match_prefix_names():
    text = "➕ Morning Workout Extended (+4)"

    assert count_activity_mentions(text, "Morning Workout") == 0


def test_count_mentions_empty():
    assert count_activity_mentions("", "Meditate") == 0
    assert count_activity_mentions("➕ Meditate (+1)", "") == 0


# ============================================================================
# Formatting Tests
# ============================================================================

def _scored(name, points, streak_length=0):
    return ScoredActivity(
        name=name,
        points=points,
        category="Health",
        streak_info=BonusResult(original_points=points, total_points=points, streak_length=streak_length),
    )


@pytest.mark.parametrize("length,expected", [
    (2, "🔥"),
    (6, "🔥"),
    (7, "🔥🔥"),
    (14, "🔥🔥🔥"),
])
def test_streak_emoji_tiers(streak_settings, length, expected):
    assert streak_emoji(length, streak_settings) == expected


def test_format_entry_without_streak(streak_settings):
    assert format_activity_entry(_scored("Meditate", 1, 1), streak_settings) == "➕ Meditate (+1)"


def test_format_entry_with_streak(streak_settings):
    entry = format_activity_entry(_scored("Morning Workout", 5, 7), streak_settings)

    assert entry == "➕ Morning Workout (🔥🔥7) (+5)"


def test_format_negative_entry(streak_settings):
    assert format_activity_entry(_scored("Takeout dinner", -2), streak_settings) == "➖ Takeout dinner (-2)"


def test_formatted_entry_parses_back(streak_settings):
    entry = parse_activity_entry(format_activity_entry(_scored("Morning Workout", 6, 14), streak_settings))

    assert entry.name == "Morning Workout"
    assert entry.streak_length == 14
    assert entry.points == 6


def test_format_field_skips_unnamed(streak_settings):
    field = format_activity_field(
        [_scored("Meditate", 1), ScoredActivity(streak_info=BonusResult(original_points=0, total_points=0))],
        streak_settings,
    )

    assert field == "➕ Meditate (+1)"
