"""Habit data model — pydantic schemas for the per-user state blob.

Field names go over the wire and into storage in camelCase
(``targetPerPeriod``, ``createdAt``, ``habitId``); attributes stay snake_case.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared_types import HabitFrequency, HabitPeriod

SCHEMA_VERSION = 1


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so window comparisons never mix kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class Habit(_WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    frequency: HabitFrequency
    target_per_period: int | float = Field(alias="targetPerPeriod")
    period: HabitPeriod
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class HabitLog(_WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=new_id)
    habit_id: str = Field(alias="habitId")
    timestamp: datetime = Field(default_factory=utcnow)

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class UserState(_WireModel):
    """Everything stored for one user key. Only ever appended to."""

    version: int = SCHEMA_VERSION
    habits: list[Habit] = Field(default_factory=list)
    logs: list[HabitLog] = Field(default_factory=list)

    def find_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def with_habit(self, habit: Habit) -> "UserState":
        """Staged copy with ``habit`` appended; self is left untouched."""
        return self.model_copy(update={"habits": [*self.habits, habit]})

    def with_log(self, log: HabitLog) -> "UserState":
        """Staged copy with ``log`` appended; self is left untouched."""
        return self.model_copy(update={"logs": [*self.logs, log]})

    def to_blob(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_blob(cls, raw: str) -> "UserState":
        """Parse a stored blob. Blobs written before versioning count as v1.

        Raises:
            ValueError: malformed blob or a schema version newer than this code.
        """
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("State blob must be a JSON object")
        version = data.setdefault("version", 1)
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise ValueError(f"Unsupported state schema version: {version!r}")
        return cls.model_validate(data)


class HabitStat(_WireModel):
    """Derived 7-day adherence for one habit. Never persisted."""

    habit_id: str = Field(alias="habitId")
    name: str
    completed_last_7_days: int = Field(alias="completedLast7Days")
    target_per_week: int | float = Field(alias="targetPerWeek")
    completion_rate: float = Field(alias="completionRate")
