from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from distructions.utils.types import Catalog, CommandEntry


class Phase(str, Enum):
    BROWSING = "browsing"
    QUITTING = "quitting"
    ERRED = "erred"


class Action(str, Enum):
    QUIT = "quit"
    UP = "up"
    DOWN = "down"
    FIRST = "first"
    LAST = "last"
    CONFIRM = "confirm"


KEY_BINDINGS: Dict[str, Action] = {
    "q": Action.QUIT,
    "ctrl+c": Action.QUIT,
    "esc": Action.QUIT,
    "up": Action.UP,
    "k": Action.UP,
    "down": Action.DOWN,
    "j": Action.DOWN,
    "home": Action.FIRST,
    "g": Action.FIRST,
    "end": Action.LAST,
    "G": Action.LAST,
    "enter": Action.CONFIRM,
}

FAREWELL = "Bye!"
FOOTER = "↑/↓ or j/k to move · enter to run · q to quit"
EMPTY_HINT = "No commands detected in this project."


@dataclass
class SelectionState:
    cursor: int = 0
    quitting: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class RunCommand:
    """Suspend rendering, run ``entry.command`` with the terminal attached, then resume."""

    entry: CommandEntry


@dataclass(frozen=True)
class Quit:
    exit_code: int = 0


Effect = Union[RunCommand, Quit]


@dataclass(frozen=True)
class RenderRow:
    is_selected: bool
    name: str
    description: str


@dataclass(frozen=True)
class RenderModel:
    header: str = ""
    rows: Tuple[RenderRow, ...] = field(default_factory=tuple)
    footer: str = ""
    status: str = ""
    is_error: bool = False


class SelectionController:
    """Cursor state machine over a read-only catalog.

    Keys are processed one at a time. Process control is left to the caller:
    ``handle_key`` returns a ``RunCommand`` or ``Quit`` effect descriptor and the
    driver decides how to carry it out.
    """

    def __init__(self, catalog: Optional[Catalog], error: Optional[str] = None) -> None:
        if catalog is None and error is None:
            raise ValueError("SelectionController needs a catalog or an error")
        self.catalog = catalog if catalog is not None else Catalog(project_label="")
        self.state = SelectionState(error=error)

    @classmethod
    def from_error(cls, error: Union[str, BaseException]) -> "SelectionController":
        return cls(catalog=None, error=str(error))

    @property
    def phase(self) -> Phase:
        if self.state.error is not None:
            return Phase.ERRED
        if self.state.quitting:
            return Phase.QUITTING
        return Phase.BROWSING

    @property
    def exit_code(self) -> int:
        return 1 if self.phase is Phase.ERRED else 0

    def selected_entry(self) -> Optional[CommandEntry]:
        entries = self.catalog.entries
        if 0 <= self.state.cursor < len(entries):
            return entries[self.state.cursor]
        return None

    def handle_key(self, key: str) -> Optional[Effect]:
        if self.phase is not Phase.BROWSING:
            return Quit(exit_code=self.exit_code)

        action = KEY_BINDINGS.get(key)
        if action is None:
            return None
        return self.dispatch(action)

    def dispatch(self, action: Action) -> Optional[Effect]:
        if self.phase is not Phase.BROWSING:
            return Quit(exit_code=self.exit_code)

        last = len(self.catalog.entries) - 1
        if action is Action.QUIT:
            self.state.quitting = True
            return Quit(exit_code=0)
        if action is Action.UP:
            if self.state.cursor > 0:
                self.state.cursor -= 1
        elif action is Action.DOWN:
            if self.state.cursor < last:
                self.state.cursor += 1
        elif action is Action.FIRST:
            self.state.cursor = 0
        elif action is Action.LAST:
            self.state.cursor = max(last, 0)
        elif action is Action.CONFIRM:
            entry = self.selected_entry()
            if entry is not None:
                return RunCommand(entry=entry)
        return None

    def render_model(self, show_descriptions: bool = True) -> RenderModel:
        phase = self.phase
        if phase is Phase.ERRED:
            return RenderModel(status=f"Error: {self.state.error}", is_error=True)
        if phase is Phase.QUITTING:
            return RenderModel(status=FAREWELL)

        rows = tuple(
            RenderRow(
                is_selected=index == self.state.cursor,
                name=entry.name,
                description=entry.description if show_descriptions else "",
            )
            for index, entry in enumerate(self.catalog.entries)
        )
        status = "" if rows else EMPTY_HINT
        return RenderModel(
            header=self.catalog.project_label,
            rows=rows,
            footer=FOOTER,
            status=status,
        )
