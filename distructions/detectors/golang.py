from __future__ import annotations

from pathlib import Path
from typing import List

from distructions.utils.types import CommandEntry


DETECTOR_ID = "go"
DESCRIPTION = "Go module (go.mod)."

GO_COMMANDS = (
    CommandEntry(name="Go: Run", command="go run .", description="Run the Go application"),
    CommandEntry(name="Go: Test", command="go test ./...", description="Run all tests"),
    CommandEntry(name="Go: Build", command="go build", description="Build the Go application"),
)


def detect(root: Path) -> List[CommandEntry]:
    if not (root / "go.mod").is_file():
        return []
    return list(GO_COMMANDS)
