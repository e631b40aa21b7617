"""Dependency injection for FastAPI routes."""

from functools import lru_cache
from typing import Optional

import structlog
from fastapi import Query, Request

from cli.config import load_config_model
from cli.config_models import HabitCoachConfig
from habits import ActorRegistry, UserActor

logger = structlog.get_logger()


@lru_cache
def get_config() -> HabitCoachConfig:
    """Load shared config from config.yaml (or defaults)."""
    return load_config_model()


def get_registry(request: Request) -> ActorRegistry:
    return request.app.state.registry


def get_actor(
    request: Request,
    user_id: Optional[str] = Query(None, alias="userId", max_length=256),
) -> UserActor:
    """Resolve the ``userId`` query parameter to that user's actor.

    A missing or blank id maps to the registry's default user.
    """
    return get_registry(request).get(user_id)
