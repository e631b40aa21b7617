"""Tests for habit models and blob (de)serialization."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from habits.models import SCHEMA_VERSION, Habit, HabitLog, UserState


def test_wire_format_is_camel_case(sample_habits):
    data = sample_habits[0].to_wire()
    assert set(data) == {"id", "name", "frequency", "targetPerPeriod", "period", "createdAt"}
    assert data["frequency"] == "daily"
    assert data["targetPerPeriod"] == 1


def test_integer_target_stays_integer():
    habit = Habit(name="Read", frequency="daily", target_per_period=2, period="day")
    assert isinstance(habit.target_per_period, int)


def test_habit_is_frozen(sample_habits):
    with pytest.raises(ValidationError):
        sample_habits[0].name = "Changed"


def test_ids_generated_and_unique():
    a = HabitLog(habit_id="h")
    b = HabitLog(habit_id="h")
    assert a.id and b.id and a.id != b.id


def test_naive_timestamp_becomes_utc():
    log = HabitLog(habit_id="h", timestamp=datetime(2026, 1, 1, 9, 0))
    assert log.timestamp.tzinfo == timezone.utc


def test_with_habit_does_not_mutate(sample_habits):
    state = UserState()
    staged = state.with_habit(sample_habits[0])
    assert state.habits == []
    assert [h.id for h in staged.habits] == ["read"]


def test_with_log_does_not_mutate(make_log):
    state = UserState()
    staged = state.with_log(make_log("read"))
    assert state.logs == []
    assert len(staged.logs) == 1


def test_find_habit(sample_habits):
    state = UserState(habits=sample_habits)
    assert state.find_habit("gym").name == "Gym"
    assert state.find_habit("nope") is None


class TestBlob:
    def test_roundtrip_keeps_version(self, sample_habits, make_log):
        state = UserState(habits=sample_habits, logs=[make_log("read")])
        raw = state.to_blob()
        assert json.loads(raw)["version"] == SCHEMA_VERSION
        assert UserState.from_blob(raw) == state

    def test_unversioned_blob_loads_as_v1(self):
        raw = json.dumps(
            {
                "habits": [
                    {
                        "id": "h1",
                        "name": "Read",
                        "frequency": "daily",
                        "targetPerPeriod": 1,
                        "period": "day",
                        "createdAt": "2026-10-01T08:00:00.000Z",
                    }
                ],
                "logs": [{"id": "l1", "habitId": "h1", "timestamp": "2026-10-02T08:00:00.000Z"}],
            }
        )
        state = UserState.from_blob(raw)
        assert state.version == 1
        assert state.habits[0].target_per_period == 1
        assert state.logs[0].habit_id == "h1"

    def test_newer_version_rejected(self):
        with pytest.raises(ValueError, match="Unsupported state schema version"):
            UserState.from_blob(json.dumps({"version": SCHEMA_VERSION + 1, "habits": [], "logs": []}))

    def test_non_object_rejected(self):
        with pytest.raises(ValueError):
            UserState.from_blob("[]")

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            UserState.from_blob("not json")
