"""Error taxonomy for habit operations.

Every error carries the HTTP status the web layer answers with, so routes
never need their own mapping table.
"""

from shared_types import UpstreamFailure


class HabitError(Exception):
    """Base error for actor operations."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HabitError):
    """Bad or missing input. Never retried."""

    status_code = 400


class NotFoundError(HabitError):
    """Referenced habit does not exist."""

    status_code = 404


class PersistenceError(HabitError):
    """State store unreachable or write failed. Safe to retry."""

    status_code = 503


class UpstreamServiceError(HabitError):
    """Text generation failed, timed out or returned garbage."""

    def __init__(self, message: str, kind: UpstreamFailure = UpstreamFailure.UNAVAILABLE):
        super().__init__(message)
        self.kind = UpstreamFailure(kind)

    @property
    def status_code(self) -> int:
        return 504 if self.kind == UpstreamFailure.TIMEOUT else 502


class InternalError(HabitError):
    """Unexpected failure; message never includes internal detail."""

    status_code = 500

    def __init__(self, message: str = "Internal error"):
        super().__init__(message)
