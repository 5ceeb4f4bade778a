"""
Activity Field Parsing

A log row's activity field is a ", "-joined list of display entries:

    ➕ Morning Workout (🔥5) (+3), ➖ Takeout dinner (-2)

Each entry is a polarity marker, a space, the activity name, an optional
streak annotation and a trailing signed point value. Parsing is tolerant:
the annotation may be absent (or carry several flames), the name capture
stops at the first following parenthesis, and a malformed entry is skipped
without losing the rest of the row.
"""

import logging
import re
from typing import Iterable, List, Optional

from streak_bonus.exceptions import MalformedEntryError
from streak_bonus.models.activity import (
    ActivityEntry,
    ActivityOccurrence,
    ActivityReference,
    LogRow,
    Polarity,
    Points,
)
from streak_bonus.models.streak import ScoredActivity, StreakSettings

logger = logging.getLogger(__name__)

ENTRY_SEPARATOR = ", "
STREAK_EMOJI = "🔥"

# Marker, name (lazy, up to the first parenthesis), optional "(🔥5)", then "("
_NAME_PATTERN = re.compile(r"([➕➖])\s(.*?)\s*(?:\(🔥+\d+\))?\s*\(")
_STREAK_PATTERN = re.compile(r"\(🔥+(\d+)\)")
_POINTS_PATTERN = re.compile(r"\(([+-]?\d+(?:\.\d+)?)\)\s*$")


def split_activity_field(text: Optional[str]) -> List[str]:
    """Split an activity field into raw entries, dropping blanks"""
    if not text:
        return []
    return [entry for entry in str(text).split(ENTRY_SEPARATOR) if entry.strip()]


def _parse_points(raw: str) -> Points:
    value = float(raw)
    return int(value) if value.is_integer() else value


def parse_activity_entry(entry: str) -> ActivityEntry:
    """
    Parse one display entry

    Args:
        entry: e.g. "➕ Morning Workout (🔥5) (+3)"

    Returns:
        ActivityEntry with polarity, trimmed name, streak annotation and points

    Raises:
        MalformedEntryError: entry has no marker, no name or no parenthesis
    """
    match = _NAME_PATTERN.search(entry)
    if not match or not match.group(2).strip():
        raise MalformedEntryError(f"Unrecognized activity entry '{entry}'", entry=entry)

    tail = entry[match.end(2):]
    streak_match = _STREAK_PATTERN.search(tail)
    points_match = _POINTS_PATTERN.search(tail)

    return ActivityEntry(
        polarity=Polarity.from_marker(match.group(1)),
        name=match.group(2).strip(),
        streak_length=int(streak_match.group(1)) if streak_match else None,
        points=_parse_points(points_match.group(1)) if points_match else None,
    )


def parse_activity_field(text: Optional[str]) -> List[ActivityEntry]:
    """Parse every well-formed entry of an activity field"""
    entries = []
    for raw_entry in split_activity_field(text):
        try:
            entries.append(parse_activity_entry(raw_entry))
        except MalformedEntryError:
            logger.debug(f"Skipping malformed activity entry: '{raw_entry}'")
    return entries


def extract_occurrences(row: LogRow, reference: ActivityReference) -> List[ActivityOccurrence]:
    """
    Turn a log row into the occurrences that can take part in streaks

    Only activities known to the reference table with strictly positive
    base points are kept; negative-base and unknown activities never
    accrue streaks, whatever their marker in the log.
    """
    occurrences = []
    for entry in parse_activity_field(row.activities):
        if not reference.is_streak_eligible(entry.name):
            continue
        occurrences.append(
            ActivityOccurrence(
                activity_name=entry.name,
                polarity=entry.polarity,
                logged_on=row.logged_on,
                identity=row.identity,
            )
        )
    return occurrences


def count_activity_mentions(text: Optional[str], activity_name: str) -> int:
    """
    Count entries for one activity in a whole activity field

    Matches against the unsplit field, so names that themselves contain
    ", " or parentheses are still counted.
    """
    if not text or not activity_name:
        return 0
    pattern = re.compile(
        rf"[➕➖]\s{re.escape(activity_name)}\s*(?:\(🔥+\d+\))?\s*\([+-]"
    )
    return len(pattern.findall(str(text)))


# ============================================
# Formatting (log writer side)
# ============================================

def _format_points(points: Points) -> str:
    return f"+{points}" if points >= 0 else f"{points}"


def streak_emoji(streak_length: int, settings: StreakSettings) -> str:
    """🔥 per tier reached: base, BONUS_2, MULTIPLIER"""
    if streak_length >= settings.thresholds.multiplier:
        return STREAK_EMOJI * 3
    if streak_length >= settings.thresholds.bonus_2:
        return STREAK_EMOJI * 2
    return STREAK_EMOJI


def format_activity_entry(activity: ScoredActivity, settings: StreakSettings) -> str:
    """
    Render a scored activity the way it is written to the log

    The marker follows the final points (bonus included); the streak
    annotation is only shown once a run of 2+ days exists.
    """
    polarity = Polarity.POSITIVE if activity.points >= 0 else Polarity.NEGATIVE
    streak_text = ""
    streak_length = activity.streak_info.streak_length
    if streak_length >= 2:
        streak_text = f" ({streak_emoji(streak_length, settings)}{streak_length})"
    return f"{polarity.marker} {activity.name}{streak_text} ({_format_points(activity.points)})"


def format_activity_field(activities: Iterable[ScoredActivity], settings: StreakSettings) -> str:
    """Join formatted entries into one activity field"""
    return ENTRY_SEPARATOR.join(
        format_activity_entry(activity, settings)
        for activity in activities
        if activity.name
    )
