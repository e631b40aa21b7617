"""Shared CLI utilities: wiring store, coach and registry from config."""

from typing import Optional

import structlog

from cli.config_models import HabitCoachConfig

logger = structlog.get_logger()


def build_registry(config: HabitCoachConfig, store=None):
    """Build an ActorRegistry from config.

    Args:
        config: Loaded configuration.
        store: Optional StateStore override (tests, ephemeral runs).
    """
    from cli.retry import store_retry
    from coach import CoachAdapter
    from habits import ActorRegistry, SQLiteStateStore
    from llm import create_from_config

    if store is None:
        store = SQLiteStateStore(config.paths.state_db)

    coach = CoachAdapter(
        provider_factory=lambda: create_from_config(config.llm),
        timeout=config.coach.timeout_seconds,
        max_tokens=config.llm.max_tokens,
    )

    logger.debug("registry.built", store=type(store).__name__, provider=config.llm.provider)
    return ActorRegistry(
        store,
        coach=coach,
        save_retry=store_retry(
            max_attempts=config.retry.max_attempts,
            min_wait=config.retry.min_wait,
            max_wait=config.retry.max_wait,
        ),
        default_key=config.web.default_user,
    )


def get_components(config: Optional[HabitCoachConfig] = None) -> dict:
    """Initialize all components from config."""
    from cli.config import load_config_model

    config = config or load_config_model()
    registry = build_registry(config)
    return {
        "config": config,
        "store": registry.store,
        "registry": registry,
    }
