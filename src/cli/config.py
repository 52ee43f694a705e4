"""Configuration loading."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import MoodsyncConfig


def find_config() -> Optional[Path]:
    """Find config file: $MOODSYNC_CONFIG, then the standard locations."""
    override = os.getenv("MOODSYNC_CONFIG")
    if override:
        return Path(override).expanduser()

    locations = [
        Path.cwd() / "moodsync.yaml",
        Path.home() / ".moodsync" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> MoodsyncConfig:
    """Load configuration as a validated model (defaults when no file exists)."""
    data = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return MoodsyncConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration as a plain dict."""
    return load_config_model(config_path).to_dict()
