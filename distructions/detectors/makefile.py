from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple

from distructions.detectors.base import first_existing
from distructions.utils.types import CommandEntry


DETECTOR_ID = "make"
DESCRIPTION = "Explicit targets in a Makefile."

MAKEFILES = ("GNUmakefile", "makefile", "Makefile")

# "target: deps  ## help text" and "target:: deps"; ":=" and "::=" are assignments.
_TARGET_RE = re.compile(r"^(?P<target>[A-Za-z0-9_][A-Za-z0-9_.\-/]*)\s*::?(?![:=])(?P<rest>.*)$")
_HELP_RE = re.compile(r"##\s*(?P<help>.+?)\s*$")


def parse_targets(text: str) -> List[Tuple[str, str]]:
    targets: List[Tuple[str, str]] = []
    seen = set()
    for line in text.splitlines():
        if line.startswith("\t"):
            continue
        match = _TARGET_RE.match(line)
        if not match:
            continue
        target = match.group("target")
        if target in seen:
            continue
        seen.add(target)
        help_match = _HELP_RE.search(match.group("rest"))
        targets.append((target, help_match.group("help") if help_match else ""))
    return targets


def detect(root: Path) -> List[CommandEntry]:
    makefile = first_existing(root, MAKEFILES)
    if makefile is None:
        return []

    try:
        text = makefile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []

    return [
        CommandEntry(
            name=f"Make: {target}",
            command=f"make {target}",
            description=help_text or f"Run make target: {target}",
        )
        for target, help_text in parse_targets(text)
    ]
