from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from distructions.utils.types import CommandEntry


DetectFn = Callable[[Path], Sequence[CommandEntry]]


@dataclass(frozen=True)
class Detector:
    detector_id: str
    description: str
    detect: DetectFn


def first_existing(root: Path, candidates: Sequence[str]) -> Optional[Path]:
    for name in candidates:
        path = root / name
        if path.is_file():
            return path
    return None
