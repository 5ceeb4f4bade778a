"""Streak and bonus models"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from streak_bonus.models.activity import Points


class StreakClass(str, Enum):
    """Classification of an activity's current run"""
    NONE = "none"
    BUILDING = "building"  # exactly 2 days ending yesterday
    FULL = "full"          # 3+ days ending today or yesterday


class StreakSnapshot(BaseModel):
    """Current streaks within one scope"""
    building_streaks: dict[str, int] = Field(default_factory=dict)
    streaks: dict[str, int] = Field(default_factory=dict)

    def streak_length(self, activity_name: str) -> int:
        """Full streak first, then building streak, else 0"""
        return self.streaks.get(activity_name) or self.building_streaks.get(activity_name) or 0


class StreakThresholds(BaseModel):
    """Streak lengths (days) at which each tier starts"""
    model_config = ConfigDict(frozen=True)

    bonus_1: PositiveInt
    bonus_2: PositiveInt
    multiplier: PositiveInt


class StreakBonusPoints(BaseModel):
    """Flat points awarded at the bonus tiers"""
    model_config = ConfigDict(frozen=True)

    bonus_1: PositiveInt
    bonus_2: PositiveInt


class StreakSettings(BaseModel):
    """Canonical in-memory streak settings"""
    model_config = ConfigDict(frozen=True)

    thresholds: StreakThresholds
    bonus_points: StreakBonusPoints


class BonusResult(BaseModel):
    """Score contribution of one activity for the current scoring event"""
    original_points: Points
    bonus_points: Points = 0
    total_points: Points
    streak_length: int = 0
    multiplier: int = 1


class WeeklyBonusResult(BaseModel):
    """Outcome of a weekly occurrence count check"""
    qualifies: bool = False
    count: int = 0
    bonus_points: Points = 0


class ScoredActivity(BaseModel):
    """One submitted activity after reference lookup and streak scoring"""
    name: Optional[str] = None
    points: Points = 0
    category: str = "Unknown"
    streak_info: BonusResult
