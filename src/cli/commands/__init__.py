"""CLI command modules."""

from .habits import add, coach, log, state
from .serve import serve

__all__ = ["state", "add", "log", "coach", "serve"]
