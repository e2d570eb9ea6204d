from __future__ import annotations

import logging
import subprocess
from typing import Callable, Optional

from rich.console import Console

from distructions.ui.controller import Phase, Quit, RunCommand, SelectionController
from distructions.ui.render import render

logger = logging.getLogger(__name__)

KeyReader = Callable[[], Optional[str]]
CommandRunner = Callable[[str], int]


def execute_command(command: str, shell: Optional[str] = None) -> int:
    """Run ``command`` through the shell with this process's stdin/stdout/stderr.

    Ctrl+C in the terminal reaches the child and this process alike; only the
    child reacts to it. We keep waiting until the child has exited.
    """
    logger.debug("Running %r", command)
    process = subprocess.Popen(command, shell=True, executable=shell)  # noqa: S602
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            logger.debug("Interrupt delivered while %r was running", command)


def run_menu(
    controller: SelectionController,
    read_key: KeyReader,
    run_command: CommandRunner,
    console: Optional[Console] = None,
    show_descriptions: bool = True,
) -> int:
    """Drive ``controller`` until it quits; returns the process exit code.

    Blocks inside ``run_command`` while a child runs; rendering resumes once it
    returns. End of input is treated as a quit key.
    """
    if console is None:
        console = Console()

    while True:
        if controller.phase is Phase.ERRED:
            console.print(render(controller.render_model()))
            return controller.exit_code

        console.clear()
        console.print(render(controller.render_model(show_descriptions=show_descriptions)))

        key = read_key()
        effect = controller.handle_key("q" if key is None else key)
        if isinstance(effect, Quit):
            console.clear()
            console.print(render(controller.render_model(show_descriptions=show_descriptions)))
            return effect.exit_code
        if isinstance(effect, RunCommand):
            console.clear()
            console.print(f"$ {effect.entry.command}", style="dim", markup=False, highlight=False)
            return_code = run_command(effect.entry.command)
            logger.debug("%r exited with %s", effect.entry.command, return_code)
