"""Observability: operation counters and latency timers for the habit actors."""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


@dataclass
class _TimerStats:
    count: int = 0
    total: float = 0.0
    max: float = 0.0

    def add(self, seconds: float) -> None:
        self.count += 1
        self.total += seconds
        self.max = max(self.max, seconds)

    def as_dict(self) -> dict[str, float]:
        return {
            "count": self.count,
            "total": round(self.total, 6),
            "avg": round(self.total / self.count, 6) if self.count else 0.0,
            "max": round(self.max, 6),
        }


class Metrics:
    """Counters and running latency aggregates, kept for the process lifetime.

    Timers store aggregates rather than every sample so a long-running
    server does not grow without bound.
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._timers: dict[str, _TimerStats] = {}

    def counter(self, name: str, value: int = 1):
        self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Time the block, ``await`` suspensions included."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._timers.setdefault(name, _TimerStats()).add(time.monotonic() - start)

    def summary(self) -> dict[str, Any]:
        return {
            "counters": dict(self._counters),
            "timers": {name: t.as_dict() for name, t in self._timers.items()},
        }

    def reset(self):
        self._counters.clear()
        self._timers.clear()


metrics = Metrics()


def log_run_summary():
    """Log counters and timers collected since startup."""
    logger.info("metrics.summary", **metrics.summary())
