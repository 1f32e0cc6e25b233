from __future__ import annotations

import io
from typing import Optional

from rich.console import Console, RenderableType

DEFAULT_WIDTH = 80


def render_text(renderable: Optional[RenderableType], width: int, height: int = 0) -> str:
    """Render ``renderable`` to plain text at a fixed terminal size."""
    if renderable is None:
        return ""
    c = Console(
        file=io.StringIO(),
        width=width if width > 0 else DEFAULT_WIDTH,
        height=height if height > 0 else None,
        color_system=None,
        force_terminal=False,
        legacy_windows=False,
    )
    c.print(renderable)
    return c.file.getvalue().rstrip("\n")
