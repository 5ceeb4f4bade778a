"""Activity log models"""
from enum import Enum
from typing import Optional, Union
from datetime import date
from pydantic import BaseModel, ConfigDict, Field, field_validator

Points = Union[int, float]

POSITIVE_MARKER = "➕"
NEGATIVE_MARKER = "➖"


class Polarity(str, Enum):
    """Sign marker that opens every activity entry"""
    POSITIVE = "positive"
    NEGATIVE = "negative"

    @classmethod
    def from_marker(cls, marker: str) -> "Polarity":
        return cls.POSITIVE if marker == POSITIVE_MARKER else cls.NEGATIVE

    @property
    def marker(self) -> str:
        return POSITIVE_MARKER if self is Polarity.POSITIVE else NEGATIVE_MARKER


class LogRow(BaseModel):
    """One day's log line for one identity"""
    model_config = ConfigDict(frozen=True)

    logged_on: date
    activities: str = ""
    identity: str = ""

    @field_validator("activities", "identity", mode="before")
    @classmethod
    def none_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else str(v)


class ActivityEntry(BaseModel):
    """A single parsed entry of an activity field, before reference filtering"""
    model_config = ConfigDict(frozen=True)

    polarity: Polarity
    name: str
    streak_length: Optional[int] = None  # from the "(🔥5)" annotation
    points: Optional[Points] = None      # from the trailing "(+3)"


class ActivityOccurrence(BaseModel):
    """One activity logged on one calendar day"""
    model_config = ConfigDict(frozen=True)

    activity_name: str
    polarity: Polarity
    logged_on: date
    identity: str = ""


class ActivityReference(BaseModel):
    """Points reference table: activity name -> signed base points"""
    point_values: dict[str, Points] = Field(default_factory=dict)
    categories: dict[str, str] = Field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.point_values

    def __len__(self) -> int:
        return len(self.point_values)

    def base_points(self, name: str) -> Optional[Points]:
        return self.point_values.get(name)

    def is_streak_eligible(self, name: str) -> bool:
        """Only activities with strictly positive base points accrue streaks"""
        points = self.point_values.get(name)
        return points is not None and points > 0
