"""Streak detection and bonus scoring for a household activity log"""

__version__ = "1.0.0"
