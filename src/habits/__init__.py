from .actor import CoachReply, HabitCreated, LogCreated, StateSnapshot, UserActor
from .errors import (
    HabitError,
    InternalError,
    NotFoundError,
    PersistenceError,
    UpstreamServiceError,
    ValidationError,
)
from .models import Habit, HabitLog, HabitStat, UserState
from .registry import ActorRegistry
from .stats import compute_stats
from .store import MemoryStateStore, SQLiteStateStore, StateStore

__all__ = [
    "ActorRegistry",
    "UserActor",
    "StateSnapshot",
    "HabitCreated",
    "LogCreated",
    "CoachReply",
    "Habit",
    "HabitLog",
    "HabitStat",
    "UserState",
    "compute_stats",
    "StateStore",
    "SQLiteStateStore",
    "MemoryStateStore",
    "HabitError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "UpstreamServiceError",
    "InternalError",
]
