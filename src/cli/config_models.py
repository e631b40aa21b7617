"""Pydantic configuration models for Habit Coach."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LLM_PROVIDERS = {"auto", "claude", "openai", "gemini"}


def home_dir() -> Path:
    """Data root; HABITCOACH_HOME overrides ~/habitcoach."""
    return Path(os.environ.get("HABITCOACH_HOME", Path.home() / "habitcoach")).expanduser()


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "auto"
    model: Optional[str] = None  # None = use provider default
    api_key: Optional[str] = None
    max_tokens: int = 1024

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v


class PathsConfig(BaseModel):
    """File paths configuration."""

    state_db: Path = Field(default_factory=lambda: home_dir() / "state.db")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.state_db = self.state_db.expanduser()
        if self.log_file:
            self.log_file = self.log_file.expanduser()
        return self


class CoachSettings(BaseModel):
    """Coach call configuration."""

    timeout_seconds: float = 30.0

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {v}")
        return v


class RetryConfig(BaseModel):
    """Retry/backoff configuration for state saves."""

    max_attempts: int = 3
    min_wait: float = 0.5
    max_wait: float = 5.0

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_attempts must be at least 1, got {v}")
        return v


class ActorsConfig(BaseModel):
    """In-memory actor lifecycle."""

    idle_seconds: float = 900.0
    sweep_interval_seconds: float = 60.0


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = Field(False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class WebConfig(BaseModel):
    """HTTP API configuration."""

    default_user: str = "anonymous"
    frontend_origin: str = "http://localhost:3000"
    host: str = "127.0.0.1"
    port: int = 8787


class HabitCoachConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    coach: CoachSettings = Field(default_factory=CoachSettings)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    actors: ActorsConfig = Field(default_factory=ActorsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} patterns in the API key."""
        key = self.llm.api_key
        if key and key.startswith("${") and key.endswith("}"):
            self.llm.api_key = os.getenv(key[2:-1], "")
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "HabitCoachConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
