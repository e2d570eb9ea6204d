from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional

from distructions.detectors import Detector, run_detectors
from distructions.errors import CatalogLoadError, GenerationDeclined, NotAProjectError
from distructions.utils.types import Catalog

logger = logging.getLogger(__name__)

CATALOG_FILENAME = ".project-commands.json"
UNKNOWN_PROJECT = "Unknown Project"

ConfirmFn = Callable[[Catalog], bool]


def label_from_remote_url(url: str) -> str:
    url = url.strip()
    if url.endswith(".git"):
        url = url[: -len(".git")]
    url = url.rstrip("/")
    # scp-style remotes: git@host:owner/repo
    tail = url.split("/")[-1]
    return tail.split(":")[-1]


def git_remote_url(root: Path) -> Optional[str]:
    try:
        completed = subprocess.run(  # noqa: S603, S607
            ["git", "config", "--get", "remote.origin.url"],
            cwd=str(root),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("git is unavailable: %s", exc)
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


def derive_project_label(root: Path) -> str:
    remote = git_remote_url(root)
    if remote:
        label = label_from_remote_url(remote)
        if label:
            return label
        logger.debug("Remote URL %r has no usable last segment", remote)

    try:
        name = root.resolve().name
    except OSError:
        name = ""
    return name or UNKNOWN_PROJECT


def find_vcs_root(root: Path) -> Optional[Path]:
    current = root.resolve()
    for candidate in [current, *current.parents]:
        if (candidate / ".git").exists():
            return candidate
    return None


class CatalogStore:
    """Load a persisted catalog, generating and persisting it on first use."""

    def __init__(
        self,
        root: Path = Path("."),
        catalog_path: Optional[Path] = None,
        detectors: Optional[Iterable[Detector]] = None,
        require_vcs: bool = False,
        confirm: Optional[ConfirmFn] = None,
    ) -> None:
        self.root = root
        if catalog_path is None:
            catalog_path = Path(CATALOG_FILENAME)
        self.path = catalog_path if catalog_path.is_absolute() else root / catalog_path
        self.detectors = list(detectors) if detectors is not None else None
        self.require_vcs = require_vcs
        self.confirm = confirm

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Catalog:
        label = derive_project_label(self.root)
        if not self.exists():
            catalog = self.generate(label=label)
            if catalog.is_empty():
                return catalog
        catalog = self.read()
        if not catalog.project_label:
            catalog = Catalog(project_label=label, entries=catalog.entries)
        return catalog

    def generate(self, label: Optional[str] = None, force: bool = False) -> Catalog:
        if self.exists() and not force:
            return self.read()

        if self.require_vcs and find_vcs_root(self.root) is None:
            raise NotAProjectError(
                f"{self.root.resolve()} is not inside a git repository; nothing to set up."
            )

        if label is None:
            label = derive_project_label(self.root)
        catalog = Catalog(project_label=label, entries=tuple(run_detectors(self.root, self.detectors)))
        if catalog.is_empty():
            logger.info("No commands detected in %s; catalog not written", self.root)
            return catalog

        if self.confirm is not None and not self.confirm(catalog):
            raise GenerationDeclined(f"Skipped creating {self.path.name}.")

        self.save(catalog)
        return catalog

    def save(self, catalog: Catalog) -> None:
        payload = json.dumps(catalog.to_dict(), indent=4) + "\n"
        self.path.write_text(payload, encoding="utf-8")
        logger.info("Wrote %d command(s) to %s", len(catalog), self.path)

    def read(self) -> Catalog:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CatalogLoadError(f"Cannot read {self.path}: {exc}") from exc

        try:
            return Catalog.from_dict(json.loads(raw))
        except ValueError as exc:
            raise CatalogLoadError(f"Invalid command catalog {self.path}: {exc}") from exc
