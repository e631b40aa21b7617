"""Shared enums and types for habit-coach."""

from enum import StrEnum


class HabitFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"


class HabitPeriod(StrEnum):
    DAY = "day"
    WEEK = "week"


class UpstreamFailure(StrEnum):
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    MALFORMED = "malformed"
