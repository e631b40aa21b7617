"""Configuration loading and management."""

from pathlib import Path
from typing import Optional

import yaml

from .config_models import HabitCoachConfig, home_dir

CONFIG_FILENAME = "config.yaml"


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / ".habitcoach" / CONFIG_FILENAME,
        home_dir() / CONFIG_FILENAME,
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> HabitCoachConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: unreadable YAML or values failing validation.
    """
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return HabitCoachConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")

