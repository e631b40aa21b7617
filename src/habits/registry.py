"""Routes user keys to their UserActor, one actor per key."""

import threading
import time
from typing import TYPE_CHECKING, Callable, Optional

import structlog

from .actor import UserActor
from .store import StateStore

if TYPE_CHECKING:
    from coach.adapter import CoachAdapter

logger = structlog.get_logger()

DEFAULT_USER_KEY = "anonymous"


class ActorRegistry:
    """Maps a user key to exactly one live UserActor, created on demand.

    Idle actors can be dropped with ``evict_idle``; the store stays the
    source of truth, so a later request just gets a fresh actor.
    """

    def __init__(
        self,
        store: StateStore,
        coach: Optional["CoachAdapter"] = None,
        save_retry: Optional[Callable] = None,
        default_key: str = DEFAULT_USER_KEY,
    ):
        self.store = store
        self.coach = coach
        self.save_retry = save_retry
        self.default_key = default_key
        self._actors: dict[str, UserActor] = {}
        self._lock = threading.Lock()

    def resolve_key(self, user_key: Optional[str]) -> str:
        """Caller-supplied identifier, or the default sentinel when blank."""
        if user_key is None:
            return self.default_key
        return user_key.strip() or self.default_key

    def get(self, user_key: Optional[str]) -> UserActor:
        key = self.resolve_key(user_key)
        with self._lock:
            actor = self._actors.get(key)
            if actor is None:
                actor = UserActor(key, self.store, coach=self.coach, save_retry=self.save_retry)
                self._actors[key] = actor
                logger.debug("registry.actor_created", user_key=key)
            # Handing out an actor counts as use; the caller has not queued yet
            actor.last_used = time.monotonic()
            return actor

    def evict_idle(self, max_idle_seconds: float) -> int:
        """Drop actors with nothing queued that have been idle too long.

        Returns:
            Number of actors evicted.
        """
        cutoff = time.monotonic() - max_idle_seconds
        with self._lock:
            stale = [
                key
                for key, actor in self._actors.items()
                if not actor.busy and actor.last_used <= cutoff
            ]
            for key in stale:
                del self._actors[key]
        if stale:
            logger.info("registry.evicted", count=len(stale), remaining=len(self._actors))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._actors.clear()

    def __len__(self) -> int:
        return len(self._actors)

    def __contains__(self, user_key: str) -> bool:
        return user_key in self._actors
