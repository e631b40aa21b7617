"""FastAPI application entry point."""

import asyncio
import contextlib
import os
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cli.config_models import HabitCoachConfig
from habits import ActorRegistry, HabitError
from observability import log_run_summary
from web.deps import get_config
from web.routes import habits

logger = structlog.get_logger()


async def _sweep_idle_actors(registry: ActorRegistry, interval: float, max_idle: float):
    """Periodically drop actors that have been idle longer than ``max_idle``."""
    while True:
        await asyncio.sleep(interval)
        registry.evict_idle(max_idle)


def create_app(
    config: Optional[HabitCoachConfig] = None,
    registry: Optional[ActorRegistry] = None,
) -> FastAPI:
    """Build the API.

    Args:
        config: Loaded config; defaults to config.yaml / built-in defaults.
        registry: Pre-built registry (tests); otherwise built at startup.
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if registry is None:
            from cli.utils import build_registry

            app.state.registry = build_registry(config)
        else:
            app.state.registry = registry

        sweeper = asyncio.create_task(
            _sweep_idle_actors(
                app.state.registry,
                config.actors.sweep_interval_seconds,
                config.actors.idle_seconds,
            )
        )
        logger.info("web.startup", default_user=config.web.default_user)
        yield
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        log_run_summary()
        logger.info("web.shutdown")

    app = FastAPI(
        title="Habit Coach",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS — allow frontend origin
    frontend_origin = os.getenv("FRONTEND_ORIGIN", config.web.frontend_origin)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[frontend_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HabitError)
    async def habit_error_handler(request: Request, exc: HabitError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Unparseable bodies are client errors like any other bad input
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    app.include_router(habits.router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
