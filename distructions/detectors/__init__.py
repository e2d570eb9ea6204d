from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from . import docker, golang, makefile, node
from .base import Detector
from distructions.utils.types import CommandEntry

logger = logging.getLogger(__name__)


def get_detector_registry() -> List[Detector]:
    """Detectors in the order their entries are appended to a new catalog."""
    return [
        Detector(detector_id=node.DETECTOR_ID, description=node.DESCRIPTION, detect=node.detect),
        Detector(detector_id=docker.DETECTOR_ID, description=docker.DESCRIPTION, detect=docker.detect),
        Detector(detector_id=golang.DETECTOR_ID, description=golang.DESCRIPTION, detect=golang.detect),
        Detector(detector_id=makefile.DETECTOR_ID, description=makefile.DESCRIPTION, detect=makefile.detect),
    ]


def list_detector_descriptors() -> List[Dict[str, str]]:
    return [
        {"detector_id": detector.detector_id, "description": detector.description}
        for detector in get_detector_registry()
    ]


def run_detectors(root: Path, detectors: Optional[Iterable[Detector]] = None) -> List[CommandEntry]:
    if detectors is None:
        detectors = get_detector_registry()

    entries: List[CommandEntry] = []
    for detector in detectors:
        try:
            found = list(detector.detect(root))
        except Exception as exc:
            logger.debug("Detector %s failed in %s: %s", detector.detector_id, root, exc)
            continue
        logger.debug("Detector %s found %d command(s)", detector.detector_id, len(found))
        entries.extend(found)
    return entries


__all__ = [
    "Detector",
    "get_detector_registry",
    "list_detector_descriptors",
    "run_detectors",
]
