"""Configuration loader for the qthlocator tools."""

import yaml
from pathlib import Path
from typing import Any


DEFAULT_CONFIG = {
    "home_locator": "JN88ee",  # Default QTH (Vienna)
    "precision": 6,            # Locator length when encoding coordinates
    "units": "km",             # km, mi or nm
    "path_steps": 100,         # Points per great-circle path
    "grid_level": 4,           # Map overlay level (2, 4 or 6)
    "max_grid_cells": 2500,    # Overlay cell budget before dropping a level
}


def default_search_paths(config_path: Path | None = None) -> list[Path]:
    """Config locations in the order they are tried."""
    search_paths = []

    if config_path:
        search_paths.append(config_path)

    # Local config (gitignored, stays with repo)
    repo_root = Path(__file__).parent.parent
    search_paths.append(repo_root / "local" / "config" / "config.yaml")

    # XDG config
    search_paths.append(Path.home() / ".config" / "qthlocator" / "config.yaml")

    return search_paths


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with defaults.

    Searches for config in:
    1. Provided path
    2. local/config/config.yaml (user config, gitignored)
    3. ~/.config/qthlocator/config.yaml (XDG standard)
    4. Falls back to defaults

    Args:
        config_path: Optional path to config file

    Returns:
        Dict with configuration values
    """
    config = DEFAULT_CONFIG.copy()

    # Load first found config
    for path in default_search_paths(config_path):
        if path.exists():
            try:
                with open(path) as f:
                    user_config = yaml.safe_load(f)
                if user_config:
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                    config.update(user_config)
                return config
            except (OSError, yaml.YAMLError, ValueError) as e:
                print(f"Warning: Could not load config from {path}: {e}")

    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration dict to save
        config_path: Optional path to save to (defaults to local/config/config.yaml)
    """
    if config_path is None:
        repo_root = Path(__file__).parent.parent
        config_path = repo_root / "local" / "config" / "config.yaml"

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
