"""Interactive roller: a menu of rolls on the left, history on the right, modal on top."""
from __future__ import annotations

from typing import Callable, List, Optional

from rich.console import Console, RenderableType
from rich.live import Live
from rich.table import Table
from rich.text import Text

from rollsheet.engine.requests import MenuItem
from rollsheet.engine.types import kind_icon
from rollsheet.logging import get_logger
from rollsheet.sheet import format_mod

from .host import RollHost
from .keys import read_key

log = get_logger(__name__)

HELP_LINE = "↑/↓ select • Enter roll • / custom • h history • x clear • q quit"
QUIT_KEYS = {"q", "ctrl+c", "ctrl+d"}


class RollMenu:
    def __init__(self, title: str, items: List[MenuItem]) -> None:
        self.title = title
        self.items = items
        self.cursor = 0

    def move(self, step: int) -> None:
        if self.items:
            self.cursor = max(0, min(len(self.items) - 1, self.cursor + step))

    def renderable(self, height: int) -> RenderableType:
        t = Table(box=None, show_header=False, expand=False, title=self.title, title_style="bold magenta")
        t.add_column("Section", style="grey50")
        t.add_column("Roll")
        t.add_column("Dice", justify="right")
        # keep the cursor on screen
        rows = max(1, height - 4)
        start = max(0, min(self.cursor - rows // 2, len(self.items) - rows))
        for i, (section, req) in enumerate(self.items[start : start + rows], start=start):
            dice = req.expression + (f" {format_mod(req.modifier)}" if req.modifier else "")
            style = "reverse" if i == self.cursor else ""
            t.add_row(section, Text(f"{kind_icon(req.kind)} {req.label}", style=style), dice)
        t.caption = HELP_LINE
        return t


def run_interactive(
    host: RollHost,
    menu: RollMenu,
    console: Optional[Console] = None,
    read: Callable[[], str] = read_key,
) -> None:
    """Drive the roller until the user quits.

    Ticks and key presses are handled on this one thread: while a tick is
    pending the loop waits for it, otherwise it blocks on the keyboard.
    """
    console = console or Console()

    def frame() -> RenderableType:
        width, height = console.size
        return host.renderable(width, height, menu.renderable(height)) or Text("")

    with Live(frame(), console=console, auto_refresh=False, screen=True) as live:
        while True:
            live.update(frame(), refresh=True)
            if host.scheduler.step():
                continue
            try:
                key = read()
            except (KeyboardInterrupt, EOFError):
                break
            if host.press(key):
                continue
            if key in QUIT_KEYS:
                break
            if key in ("up", "k"):
                menu.move(-1)
            elif key in ("down", "j"):
                menu.move(1)
            elif key == "enter" and menu.items:
                host.submit(menu.items[menu.cursor][1])
            elif key == "/":
                host.open_custom_roll()
            elif key == "h":
                host.toggle_history()
            elif key == "x":
                host.clear_history()
            else:
                log.debug("unbound key %r", key)
