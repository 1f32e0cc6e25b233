"""Rich renderables for the roll modal: mode prompt, custom roller, dice, result."""
from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rollsheet.engine.dice import RollOutcome
from rollsheet.engine.session import DIE_TYPES, EngineSession, RollState
from rollsheet.engine.types import RollKind, kind_icon

from .console import render_text

TITLE_STYLE = "bold magenta"
DIM_STYLE = "grey50"
PROMPT_STYLE = "italic grey50"
CRIT_STYLE = "bold green"
FAIL_STYLE = "bold red"


def format_breakdown(outcome: RollOutcome) -> str:
    """``(14) +7 = 21`` style summary of the kept dice."""
    kept = " + ".join(str(v) for v in outcome.kept)
    out = f"({kept})"
    if outcome.modifier:
        out += f" {outcome.modifier:+d}"
    return out + f" = {outcome.total}"


def _csv(vals) -> str:
    return ", ".join(str(v) for v in vals)


def _title(session: EngineSession) -> Optional[Text]:
    req = session.request
    if req is None or not req.label:
        return None
    return Text(f"{kind_icon(req.kind)} {req.label}", style=TITLE_STYLE)


def _die(session: EngineSession, index: int) -> Panel:
    value = session.display_values[index]
    color = session.display_colors[index] if index < len(session.display_colors) else "white"
    landed = session.is_landed(index)
    if landed and session.outcome is not None and session.outcome.sides == 20:
        if value == 20:
            color = "green"
        elif value == 1:
            color = "red"
    style = f"bold {color}" if landed else color
    return Panel(Text(f"{value:>3}", style=style), box=box.ROUNDED, border_style=style, padding=0, expand=False)


def dice_row(session: EngineSession, max_visible: int) -> Optional[RenderableType]:
    if not session.display_values:
        return None
    visible = min(session.num_dice, max_visible)
    row = Table.grid(padding=(0, 1))
    row.add_row(*(_die(session, i) for i in range(visible)))
    if session.num_dice <= max_visible:
        return row
    extra = Text(f"... and {session.num_dice - max_visible} more", style=DIM_STYLE)
    return Group(row, extra)


def adv_prompt_body(session: EngineSession) -> RenderableType:
    lines: List[RenderableType] = [Text("Roll Mode", style=TITLE_STYLE), Text("")]
    title = _title(session)
    if title is not None:
        lines.insert(1, title)
    for key, rest in (("N", "ormal"), ("A", "dvantage"), ("D", "isadvantage")):
        lines.append(Text.assemble("  ", (f"[{key}]", "bold yellow"), rest))
    lines.append(Text(""))
    lines.append(Text("  Esc: cancel", style=PROMPT_STYLE))
    return Group(*lines)


def custom_roll_body(session: EngineSession) -> RenderableType:
    picker = Table.grid(padding=(0, 1))
    buttons = []
    for i, sides in enumerate(DIE_TYPES):
        selected = i == session.die_index
        style = "bold yellow" if selected else DIM_STYLE
        buttons.append(Panel(Text(f"d{sides}", style=style), box=box.ROUNDED, border_style=style, expand=False))
    picker.add_row(*buttons)
    return Group(
        Text("Custom Roll", style=TITLE_STYLE),
        Text(""),
        picker,
        Text(""),
        Text.assemble(f"  Quantity: {session.quantity}", "        ", ("← / → to change die", PROMPT_STYLE)),
        Text.assemble(" " * 20, ("↑ / ↓ to change quantity", PROMPT_STYLE)),
        Text(""),
        Text("  Enter: roll • Esc: cancel", style=PROMPT_STYLE),
    )


def animating_body(session: EngineSession, max_visible: int) -> RenderableType:
    parts: List[RenderableType] = []
    title = _title(session)
    if title is not None:
        parts.append(title)
    parts.append(Text(""))
    row = dice_row(session, max_visible)
    if row is not None:
        parts.append(row)
    return Group(*parts)


def showing_body(session: EngineSession, max_visible: int) -> RenderableType:
    entry = session.entry
    outcome = session.outcome
    is_luck = session.request is not None and session.request.kind is RollKind.LUCK
    total_style = "bold white"
    if entry is not None and entry.nat_crit:
        total_style = CRIT_STYLE
    elif entry is not None and entry.nat_fail:
        total_style = FAIL_STYLE
    elif is_luck:
        total_style = TITLE_STYLE

    parts: List[RenderableType] = [animating_body(session, max_visible), Text("")]
    if outcome is not None:
        parts.append(Text("  " + format_breakdown(outcome), style=total_style))
        if outcome.dropped and (session.advantage or session.disadvantage):
            which = "Advantage" if session.advantage else "Disadvantage"
            parts.append(
                Text(f"  {which}: kept {_csv(outcome.kept)}, dropped {_csv(outcome.dropped)}", style=DIM_STYLE)
            )
        if entry is not None and entry.nat_crit:
            parts.extend([Text(""), Text("  NATURAL 20!", style=CRIT_STYLE)])
        elif entry is not None and entry.nat_fail:
            parts.extend([Text(""), Text("  NATURAL 1!", style=FAIL_STYLE)])
    parts.append(Text(""))
    if session.follow_up is not None:
        parts.append(Text("  Enter: roll damage • Esc: skip", style=PROMPT_STYLE))
    else:
        parts.append(Text("  Press any key to dismiss", style=PROMPT_STYLE))
    return Group(*parts)


def modal(body: RenderableType, width: int, height: int) -> RenderableType:
    """Wrap ``body`` in a bordered box centred in the available area."""
    panel = Panel(body, box=box.ROUNDED, border_style="magenta", padding=(1, 2), expand=False)
    if width <= 0 or height <= 0:
        return panel
    return Align.center(panel, vertical="middle", width=width, height=height)


def session_renderable(
    session: EngineSession, width: int, height: int, max_visible: int = 10
) -> Optional[RenderableType]:
    if session.state is RollState.ADV_PROMPT:
        body = adv_prompt_body(session)
    elif session.state is RollState.CUSTOM_ROLL:
        body = custom_roll_body(session)
    elif session.state is RollState.ANIMATING:
        body = animating_body(session, max_visible)
    elif session.state is RollState.SHOWING:
        body = showing_body(session, max_visible)
    else:
        return None
    return modal(body, width, height)


def render_session(session: EngineSession, width: int, height: int, max_visible: int = 10) -> str:
    return render_text(session_renderable(session, width, height, max_visible), width, height)
