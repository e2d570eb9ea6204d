from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from distructions import __version__
from distructions.detectors import list_detector_descriptors
from distructions.errors import CatalogLoadError, DistructionsExit
from distructions.store import CatalogStore
from distructions.ui.controller import SelectionController
from distructions.ui.driver import execute_command, run_menu
from distructions.ui.input import read_keypress
from distructions.utils.config import load_config
from distructions.utils.structured_data import dump_structured_data
from distructions.utils.types import Catalog

app = typer.Typer(help="Pick a project command from a menu and run it.")

logger = logging.getLogger("distructions")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    level_name = os.getenv("DISTRUCTIONS_LOG_LEVEL", "DEBUG" if verbose else "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    for existing in logger.handlers[:]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)


def _settings(ctx: typer.Context) -> Dict[str, Any]:
    return ctx.obj or {}


def _build_store(ctx: typer.Context) -> CatalogStore:
    settings = _settings(ctx)
    config = settings.get("config", {})
    catalog_cfg = config.get("catalog", {})

    catalog_path = Path(str(catalog_cfg.get("path", ".project-commands.json")))

    def _confirm(catalog: Catalog) -> bool:
        return typer.confirm(
            f"Detected {len(catalog)} command(s). Write them to {catalog_path}?",
            default=True,
        )

    ask = catalog_cfg.get("confirm_generation", False) and not settings.get("assume_yes", False)
    return CatalogStore(
        root=Path("."),
        catalog_path=catalog_path,
        require_vcs=bool(catalog_cfg.get("require_vcs", True)),
        confirm=_confirm if ask else None,
    )


def _shell(ctx: typer.Context) -> Optional[str]:
    shell = _settings(ctx).get("config", {}).get("exec", {}).get("shell")
    return str(shell) if shell else None


def _load_catalog(ctx: typer.Context) -> Catalog:
    try:
        return _build_store(ctx).load()
    except DistructionsExit as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=0)
    except CatalogLoadError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show distructions version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log detection and execution details."),
    assume_yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask before writing a catalog."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file (JSON or YAML)."),
) -> None:
    del version
    _configure_logging(verbose)
    try:
        config = load_config(config_path)
    except RuntimeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    ctx.obj = {"config": config, "assume_yes": assume_yes}
    if ctx.invoked_subcommand is None:
        menu(ctx)


@app.command()
def menu(ctx: typer.Context) -> None:
    """Open the interactive command menu (default)."""
    settings = _settings(ctx)
    show_descriptions = bool(settings.get("config", {}).get("ui", {}).get("show_descriptions", True))

    try:
        controller = SelectionController(_build_store(ctx).load())
    except DistructionsExit as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=0)
    except CatalogLoadError as exc:
        controller = SelectionController.from_error(exc)

    shell = _shell(ctx)
    exit_code = run_menu(
        controller,
        read_key=read_keypress,
        run_command=lambda command: execute_command(command, shell=shell),
        console=Console(),
        show_descriptions=show_descriptions,
    )
    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command("list")
def list_commands(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--as-json", help="Print the catalog as JSON."),
    as_yaml: bool = typer.Option(False, "--as-yaml", help="Print the catalog as YAML."),
) -> None:
    """Print the project's commands without opening the menu."""
    catalog = _load_catalog(ctx)
    if as_json:
        typer.echo(json.dumps(catalog.to_dict(), indent=4))
        return
    if as_yaml:
        typer.echo(dump_structured_data(catalog.to_dict(), as_yaml=True))
        return

    if catalog.is_empty():
        typer.echo("No commands detected in this project.")
        return

    table = Table(title=catalog.project_label)
    table.add_column("Name", justify="left")
    table.add_column("Command", justify="left")
    table.add_column("Description", justify="left")
    for entry in catalog.entries:
        table.add_row(entry.name, entry.command, entry.description)
    Console().print(table)


@app.command()
def generate(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing catalog."),
) -> None:
    """Detect project commands and write the catalog file."""
    store = _build_store(ctx)
    if store.exists() and not force:
        typer.echo(f"{store.path} already exists. Use --force to regenerate it.")
        return

    try:
        catalog = store.generate(force=force)
    except DistructionsExit as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=0)

    if catalog.is_empty():
        typer.echo("No commands detected; nothing written.")
        return
    typer.echo(f"Wrote {len(catalog)} command(s) to {store.path}")


@app.command()
def detectors() -> None:
    """List the project detectors in the order they run."""
    for item in list_detector_descriptors():
        typer.echo(f"{item['detector_id']}: {item['description']}")


@app.command()
def run(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Command name as shown in the menu."),
) -> None:
    """Run one catalog command by name and exit with its status."""
    catalog = _load_catalog(ctx)
    matches = catalog.find(name)
    if not matches:
        typer.echo(f"Unknown command: {name}", err=True)
        raise typer.Exit(code=2)

    return_code = execute_command(matches[0].command, shell=_shell(ctx))
    if return_code:
        raise typer.Exit(code=return_code)


if __name__ == "__main__":
    app()
