from .controller import (
    Phase,
    Quit,
    RenderModel,
    RenderRow,
    RunCommand,
    SelectionController,
    SelectionState,
)
from .render import render

__all__ = [
    "Phase",
    "Quit",
    "RenderModel",
    "RenderRow",
    "RunCommand",
    "SelectionController",
    "SelectionState",
    "render",
]
