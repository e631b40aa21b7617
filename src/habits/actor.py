"""Per-user state actor: the single writer for one user's habits and logs.

Every operation runs under the actor's asyncio lock, so operations on one
user key never overlap and run in arrival order (asyncio.Lock wakes waiters
FIFO). Store calls and the coach call are the only suspension points.

Mutations are staged on a copy of the loaded state and only reported as
done once the store has acknowledged the save; a failed save leaves the
durable state untouched.
"""

import asyncio
import math
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from observability import metrics
from shared_types import HabitFrequency, HabitPeriod

from .errors import HabitError, InternalError, NotFoundError, UpstreamServiceError, ValidationError
from .models import Habit, HabitLog, HabitStat, UserState, utcnow
from .stats import compute_stats
from .store import StateStore

if TYPE_CHECKING:
    from coach.adapter import CoachAdapter

logger = structlog.get_logger()

MAX_MESSAGE_CHARS = 5000


# --- Results ---


@dataclass
class StateSnapshot:
    state: UserState
    stats: list[HabitStat] = field(default_factory=list)

    def to_wire(self) -> dict:
        return {
            "state": self.state.to_wire(),
            "stats": [s.to_wire() for s in self.stats],
        }


@dataclass
class HabitCreated(StateSnapshot):
    habit: Optional[Habit] = None

    def to_wire(self) -> dict:
        return {"habit": self.habit.to_wire(), **super().to_wire()}


@dataclass
class LogCreated(StateSnapshot):
    log: Optional[HabitLog] = None

    def to_wire(self) -> dict:
        return {"log": self.log.to_wire(), **super().to_wire()}


@dataclass
class CoachReply:
    reply: str
    stats: list[HabitStat]

    def to_wire(self) -> dict:
        return {"reply": self.reply, "stats": [s.to_wire() for s in self.stats]}


# --- Validation ---


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_habit_fields(
    name: Any, frequency: Any, target_per_period: Any, period: Any
) -> tuple[str, HabitFrequency, int | float, HabitPeriod]:
    """Check all four habit fields; return them normalized.

    Raises:
        ValidationError: naming the first bad field.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Invalid habit payload: name is required")
    if not isinstance(frequency, str) or frequency not in {f.value for f in HabitFrequency}:
        raise ValidationError("Invalid habit payload: frequency must be 'daily' or 'weekly'")
    if not _is_number(target_per_period) or target_per_period <= 0:
        raise ValidationError("Invalid habit payload: targetPerPeriod must be a positive number")
    if not isinstance(period, str) or period not in {p.value for p in HabitPeriod}:
        raise ValidationError("Invalid habit payload: period must be 'day' or 'week'")
    return name.strip(), HabitFrequency(frequency), target_per_period, HabitPeriod(period)


# --- Actor ---


class UserActor:
    """Owns one user key. Obtain instances through ActorRegistry."""

    def __init__(
        self,
        user_key: str,
        store: StateStore,
        coach: Optional["CoachAdapter"] = None,
        save_retry: Optional[Callable] = None,
        clock: Callable = utcnow,
    ):
        self.user_key = user_key
        self.store = store
        self.coach_adapter = coach
        self._save = save_retry(store.save) if save_retry else store.save
        self._clock = clock
        self._lock = asyncio.Lock()
        self._pending = 0
        self.last_used = time.monotonic()

    @property
    def busy(self) -> bool:
        """True while an operation is running or queued."""
        return self._pending > 0

    @asynccontextmanager
    async def _operation(self, name: str):
        self._pending += 1
        try:
            async with self._lock:
                metrics.counter(f"actor.{name}")
                with metrics.timer(f"actor.{name}"):
                    try:
                        yield
                    except HabitError as e:
                        logger.info(
                            "actor.rejected",
                            op=name,
                            user_key=self.user_key,
                            error=type(e).__name__,
                            detail=e.message,
                        )
                        raise
                    except Exception as e:
                        logger.exception("actor.unexpected_error", op=name, user_key=self.user_key)
                        raise InternalError() from e
        finally:
            self._pending -= 1
            self.last_used = time.monotonic()

    async def _load(self) -> UserState:
        return await asyncio.to_thread(self.store.load, self.user_key)

    async def _commit(self, staged: UserState) -> None:
        with metrics.timer("store.save"):
            await asyncio.to_thread(self._save, self.user_key, staged)

    def _stats(self, state: UserState) -> list[HabitStat]:
        return compute_stats(state.habits, state.logs, now=self._clock())

    async def get_state(self) -> StateSnapshot:
        async with self._operation("get_state"):
            state = await self._load()
            return StateSnapshot(state=state, stats=self._stats(state))

    async def create_habit(
        self, name: Any, frequency: Any, target_per_period: Any, period: Any
    ) -> HabitCreated:
        name, frequency, target, period = validate_habit_fields(
            name, frequency, target_per_period, period
        )
        async with self._operation("create_habit"):
            state = await self._load()
            habit = Habit(
                name=name,
                frequency=frequency,
                target_per_period=target,
                period=period,
                created_at=self._clock(),
            )
            staged = state.with_habit(habit)
            await self._commit(staged)
            logger.info("actor.habit_created", user_key=self.user_key, habit_id=habit.id)
            return HabitCreated(state=staged, stats=self._stats(staged), habit=habit)

    async def log_completion(self, habit_id: Any) -> LogCreated:
        if not isinstance(habit_id, str) or not habit_id.strip():
            raise ValidationError("Missing habitId")
        habit_id = habit_id.strip()

        async with self._operation("log_completion"):
            state = await self._load()
            if state.find_habit(habit_id) is None:
                raise NotFoundError("Habit not found")
            log = HabitLog(habit_id=habit_id, timestamp=self._clock())
            staged = state.with_log(log)
            await self._commit(staged)
            logger.info("actor.completion_logged", user_key=self.user_key, habit_id=habit_id)
            return LogCreated(state=staged, stats=self._stats(staged), log=log)

    async def coach(self, message: Any) -> CoachReply:
        text = message.strip() if isinstance(message, str) else ""
        if not text:
            raise ValidationError("Missing message")
        if len(text) > MAX_MESSAGE_CHARS:
            raise ValidationError(f"Message too long (max {MAX_MESSAGE_CHARS} characters)")
        if self.coach_adapter is None:
            raise UpstreamServiceError("Coach service is not configured")

        async with self._operation("coach"):
            state = await self._load()
            stats = self._stats(state)
            reply = await self.coach_adapter.reply(state, stats, text)
            return CoachReply(reply=reply, stats=stats)
