from __future__ import annotations

from pathlib import Path
from typing import List

import yaml

from distructions.detectors.base import first_existing
from distructions.utils.types import CommandEntry


DETECTOR_ID = "docker-compose"
DESCRIPTION = "docker-compose stack and its services."

COMPOSE_FILES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)

GENERIC_COMMANDS = (
    CommandEntry(
        name="Docker: Start All",
        command="docker-compose up",
        description="Start all Docker containers",
    ),
    CommandEntry(
        name="Docker: Start All (Detached)",
        command="docker-compose up -d",
        description="Start all Docker containers in detached mode",
    ),
    CommandEntry(
        name="Docker: Stop All",
        command="docker-compose down",
        description="Stop all Docker containers",
    ),
)


def detect(root: Path) -> List[CommandEntry]:
    compose_file = first_existing(root, COMPOSE_FILES)
    if compose_file is None:
        return []

    try:
        compose = yaml.safe_load(compose_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return []

    services = compose.get("services") if isinstance(compose, dict) else None
    if not isinstance(services, dict):
        return []

    entries = list(GENERIC_COMMANDS)
    for service in services:
        entries.append(
            CommandEntry(
                name=f"Docker: Start {service}",
                command=f"docker-compose up {service}",
                description=f"Start the {service} service",
            )
        )
    return entries
