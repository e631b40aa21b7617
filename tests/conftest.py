"""Shared test fixtures for Habit Coach."""

import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from habits.models import Habit, HabitLog  # noqa: E402
from habits.store import MemoryStateStore  # noqa: E402
from observability import metrics  # noqa: E402

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging calls so handlers never point at a closed capture stream."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def now():
    """Fixed 'now' for window arithmetic."""
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def memory_store():
    return MemoryStateStore()


@pytest.fixture
def mock_llm():
    """LLM provider double returning a canned reply."""
    llm = MagicMock()
    llm.provider_name = "mock"
    llm.generate.return_value = "Nice work. Try stacking reading onto your morning coffee."
    return llm


@pytest.fixture
def sample_habits(now):
    return [
        Habit(
            id="read",
            name="Read",
            frequency="daily",
            target_per_period=1,
            period="day",
            created_at=now - timedelta(days=30),
        ),
        Habit(
            id="gym",
            name="Gym",
            frequency="weekly",
            target_per_period=3,
            period="week",
            created_at=now - timedelta(days=30),
        ),
    ]


@pytest.fixture
def make_log(now):
    """Build a HabitLog some days/hours before now."""

    def _make(habit_id: str, days_ago: float = 0, **kwargs) -> HabitLog:
        return HabitLog(habit_id=habit_id, timestamp=now - timedelta(days=days_ago), **kwargs)

    return _make
