from __future__ import annotations

import json
from pathlib import Path
from typing import List

from distructions.detectors.base import first_existing
from distructions.utils.types import CommandEntry


DETECTOR_ID = "npm"
DESCRIPTION = "Scripts declared in package.json."

MANIFEST = "package.json"

# Lockfile -> runner, checked in order.
LOCKFILE_RUNNERS = (
    ("pnpm-lock.yaml", "pnpm"),
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("yarn.lock", "yarn"),
)
DEFAULT_RUNNER = "npm"


def detect_runner(root: Path) -> str:
    for lockfile, runner in LOCKFILE_RUNNERS:
        if first_existing(root, [lockfile]) is not None:
            return runner
    return DEFAULT_RUNNER


def detect(root: Path) -> List[CommandEntry]:
    manifest = root / MANIFEST
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return []

    scripts = data.get("scripts") if isinstance(data, dict) else None
    if not isinstance(scripts, dict):
        return []

    runner = detect_runner(root)
    return [
        CommandEntry(
            name=f"{runner}: {name}",
            command=f"{runner} run {name}",
            description=f"Run {runner} script: {script}",
        )
        for name, script in scripts.items()
    ]
