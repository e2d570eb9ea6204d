from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class CommandEntry:
    name: str
    command: str
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "command": self.command,
            "description": self.description,
        }


@dataclass(frozen=True)
class Catalog:
    """Ordered command list for one project.

    Field names on disk are ``projectName`` and ``commands`` so catalogs written
    by earlier releases stay readable.
    """

    project_label: str
    entries: Tuple[CommandEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def find(self, name: str) -> List[CommandEntry]:
        return [entry for entry in self.entries if entry.name == name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectName": self.project_label,
            "commands": [entry.to_dict() for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Catalog":
        if not isinstance(data, dict):
            raise ValueError("catalog must be a JSON object")

        commands = data.get("commands") or []
        if not isinstance(commands, list):
            raise ValueError("'commands' must be a list")

        entries: List[CommandEntry] = []
        for index, item in enumerate(commands):
            if not isinstance(item, dict):
                raise ValueError(f"command #{index} must be an object")
            entries.append(
                CommandEntry(
                    name=str(item.get("name", "")),
                    command=str(item.get("command", "")),
                    description=str(item.get("description", "")),
                )
            )
        return cls(project_label=str(data.get("projectName", "")), entries=tuple(entries))
