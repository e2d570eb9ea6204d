from __future__ import annotations

from typing import List

from rich.console import Group, RenderableType
from rich.text import Text

from distructions.ui.controller import RenderModel

POINTER = "→ "


def render(model: RenderModel) -> RenderableType:
    if model.is_error:
        return Text(model.status, style="bold red")
    if not model.header and not model.rows:
        return Text(model.status)

    parts: List[RenderableType] = [Text(model.header, style="bold #FF75B7"), Text("")]
    for row in model.rows:
        line = Text()
        if row.is_selected:
            line.append("  " + POINTER, style="#FF75B7")
            line.append(row.name, style="bold #FF75B7")
        else:
            line.append("    " + row.name)
        parts.append(line)
        if row.description:
            parts.append(Text("      " + row.description, style="#666666"))
        parts.append(Text(""))

    if model.status:
        parts.append(Text(model.status, style="yellow"))
    if model.footer:
        parts.append(Text(model.footer, style="dim"))
    return Group(*parts)
