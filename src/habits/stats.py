"""Rolling 7-day adherence stats per habit."""

from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from shared_types import HabitPeriod

from .models import Habit, HabitLog, HabitStat, as_utc, utcnow

WINDOW = timedelta(days=7)
DAYS_PER_WEEK = 7


def target_per_week(habit: Habit) -> int | float:
    """Normalize a habit's target to a weekly cadence."""
    if habit.period == HabitPeriod.WEEK:
        return habit.target_per_period
    return habit.target_per_period * DAYS_PER_WEEK


def completion_rate(completed: int, weekly_target: int | float) -> float:
    """Completed/target clamped to [0, 1]; a zero target yields 0."""
    if weekly_target <= 0:
        return 0.0
    return min(1.0, completed / weekly_target)


def compute_stats(
    habits: Sequence[Habit],
    logs: Iterable[HabitLog],
    now: Optional[datetime] = None,
) -> list[HabitStat]:
    """Compute 7-day stats for each habit, in stored habit order.

    Args:
        habits: Habits to report on.
        logs: Completion logs; logs for unknown habit ids are ignored.
        now: End of the window (inclusive). Defaults to current UTC time.

    Returns:
        One HabitStat per habit.
    """
    now = as_utc(now) if now else utcnow()
    window_start = now - WINDOW

    counts = Counter(
        log.habit_id for log in logs if window_start <= log.timestamp <= now
    )

    stats = []
    for habit in habits:
        weekly = target_per_week(habit)
        completed = counts.get(habit.id, 0)
        stats.append(
            HabitStat(
                habit_id=habit.id,
                name=habit.name,
                completed_last_7_days=completed,
                target_per_week=weekly,
                completion_rate=completion_rate(completed, weekly),
            )
        )
    return stats
