from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from rollsheet.engine.history import RollHistory
from rollsheet.engine.types import HistoryEntry, RollKind, kind_icon

from .console import render_text

HISTORY_WIDTH = 27
MIN_WIDTH = 20


def entry_summary(entry: HistoryEntry) -> str:
    """One-line plain summary, e.g. ``Longsword Attack: 1d20+7 → 26 (ADV) NATURAL 20!``."""
    out = f"{entry.label or entry.expression}: {entry.expression} → {entry.total}"
    if entry.advantage:
        out += " (ADV)"
    elif entry.disadvantage:
        out += " (DIS)"
    if entry.nat_crit:
        out += " NATURAL 20!"
    elif entry.nat_fail:
        out += " NATURAL 1!"
    return out


def entry_lines(entry: HistoryEntry, inner_width: int) -> List[Text]:
    luck = entry.kind is RollKind.LUCK
    label = f"{kind_icon(entry.kind)} {entry.label}"[:inner_width]
    head = Text(label, style="magenta" if luck else "bold blue")

    detail_style = "grey50"
    if entry.nat_crit:
        detail_style = "bold green"
    elif entry.nat_fail:
        detail_style = "bold red"
    elif luck:
        detail_style = "magenta"
    detail = Text(f"  {entry.expression} → {entry.total}", style=detail_style)
    if entry.advantage:
        detail.append(" (ADV)", style="yellow")
    elif entry.disadvantage:
        detail.append(" (DIS)", style="yellow")
    return [head, detail, Text("")]


def history_renderable(history: RollHistory, width: int, height: int) -> Optional[RenderableType]:
    if not history.visible or width < MIN_WIDTH:
        return None
    lines: List[Text] = []
    for entry in history.entries:
        lines.extend(entry_lines(entry, width - 4))
    # border top/bottom + title
    lines = lines[: max(0, height - 3)]
    body = Text("\n").join([Text("Roll History", style="bold blue"), *lines])
    return Panel(body, box=box.ROUNDED, border_style="grey50", width=width, padding=(0, 1))


def render_history(history: RollHistory, width: int, height: int) -> str:
    """History column as plain text; empty when hidden or too narrow."""
    return render_text(history_renderable(history, width, height), width)
