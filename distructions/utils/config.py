from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from .structured_data import load_structured_file

DEFAULT_CONFIG_PATH = Path("distructions.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "catalog": {
        "path": ".project-commands.json",
        "confirm_generation": False,
        "require_vcs": True,
    },
    "exec": {
        "shell": None,
    },
    "ui": {
        "show_descriptions": True,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    if config_path is not None:
        return config_path
    env_path = os.getenv("DISTRUCTIONS_CONFIG", "").strip()
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    path = resolve_config_path(config_path)
    config = dict(DEFAULT_CONFIG)
    if path.exists():
        user_config = load_structured_file(path)
        if user_config is None:
            return config
        if not isinstance(user_config, dict):
            raise RuntimeError(f"Config file {path} must contain a mapping/object.")
        config = _deep_merge(config, user_config)
    return config
