from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_structured_file(path: Path) -> Any:
    raw = path.read_text(encoding="utf-8")

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Unable to parse structured file {path}: {exc}") from exc


def dump_structured_data(data: Any, as_yaml: bool = True) -> str:
    if as_yaml:
        return yaml.safe_dump(data, sort_keys=False)
    return json.dumps(data, indent=4)
