"""Unit tests for configuration (streak_bonus/config.py)"""
import pytest

from streak_bonus import config


def test_default_streak_settings_are_increasing():
    thresholds = config.DEFAULT_STREAK_THRESHOLDS

    assert thresholds["BONUS_1"] < thresholds["BONUS_2"] < thresholds["MULTIPLIER"]
    assert config.DEFAULT_STREAK_BONUS_POINTS == {"BONUS_1": 1, "BONUS_2": 2}


def test_validate_config_accepts_defaults(monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", "postgresql://localhost/streak_bonus")
    monkeypatch.setattr(config, "STREAK_TIMEZONE", "UTC")

    config.validate_config()


@pytest.mark.parametrize("name,value", [
    ("DATABASE_URL", ""),
    ("STREAK_HISTORY_ROWS", 0),
    ("WEEKLY_BONUS_REQUIRED_COUNT", -1),
    ("STREAK_TIMEZONE", "Mars/Olympus_Mons"),
])
def test_validate_config_rejects_bad_values(monkeypatch, name, value):
    monkeypatch.setattr(config, "DATABASE_URL", "postgresql://localhost/streak_bonus")
    monkeypatch.setattr(config, "STREAK_TIMEZONE", "UTC")
    monkeypatch.setattr(config, name, value)

    with pytest.raises(ValueError):
        config.validate_config()
