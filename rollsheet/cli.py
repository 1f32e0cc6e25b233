from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.live import Live

from rollsheet.config_env import load_env
from rollsheet.engine.config import EngineSettings, load_config, load_settings, save_config
from rollsheet.engine.dice import ExpressionError, parse
from rollsheet.engine.requests import character_menu, default_menu
from rollsheet.engine.roller import RollEngine
from rollsheet.engine.types import HistoryEntry, RollKind, RollRequest
from rollsheet.logging import set_debug
from rollsheet.sheet import render_console
from rollsheet.ui.app import RollMenu, run_interactive
from rollsheet.ui.history_view import entry_summary
from rollsheet.ui.host import RollHost
from rollsheet.ui.timers import ManualScheduler, Scheduler
from rollsheet.validation import PrettyError, load_pc

app = typer.Typer(no_args_is_help=True)


def _fail(err: PrettyError) -> None:
    typer.secho(str(err), fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _settings(debug: bool, **overrides) -> EngineSettings:
    load_env()
    set_debug(debug)
    try:
        return load_settings(**overrides)
    except PrettyError as e:
        _fail(e)


@app.callback()
def main() -> None:
    """rollsheet - D&D 5e character sheet roller (local-first)."""


@app.command()
def roll(
    expression: str = typer.Argument(..., help="Dice expression, e.g. 1d20+5"),
    mod: int = typer.Option(0, "--mod", help="Flat modifier added to the roll"),
    adv: bool = typer.Option(False, "--adv", help="Roll 2d20 and keep the highest"),
    dis: bool = typer.Option(False, "--dis", help="Roll 2d20 and keep the lowest"),
    label: str = typer.Option("", help="Label shown with the result"),
    seed: Optional[int] = typer.Option(None, help="Deterministic RNG seed"),
    animate: bool = typer.Option(True, "--animate/--no-animate", help="Tumble the dice before landing"),
    debug: bool = typer.Option(False, help="Verbose engine logs"),
) -> None:
    """Roll one expression through the roll engine."""
    if adv and dis:
        raise typer.BadParameter("Cannot roll with both --adv and --dis")
    try:
        parse(expression)
    except ExpressionError as e:
        raise typer.BadParameter(str(e), param_hint="EXPRESSION")

    settings = _settings(debug, seed=seed)
    scheduler = Scheduler() if animate else ManualScheduler()
    host = RollHost(RollEngine(settings=settings), scheduler=scheduler)
    done: List[HistoryEntry] = []
    host.on_complete(done.append)

    host.submit(
        RollRequest(
            label=label or expression,
            expression=expression,
            modifier=mod,
            kind=RollKind.CUSTOM,
            prompt_mode=adv or dis,
        )
    )
    if adv or dis:
        host.press("a" if adv else "d")

    console = Console()
    if animate:
        with Live(console=console, auto_refresh=False, transient=True) as live:
            while scheduler.step():
                live.update(host.renderable(0, 0), refresh=True)
    else:
        scheduler.drain()
    console.print(host.renderable(0, 0))
    host.press("enter")
    typer.echo(entry_summary(done[0]))


@app.command()
def play(
    pc: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="PC file (json)"),
    seed: Optional[int] = typer.Option(None, help="Deterministic RNG seed"),
    debug: bool = typer.Option(False, help="Verbose engine logs"),
) -> None:
    """Pick rolls from a character sheet and watch them land."""
    settings = _settings(debug, seed=seed)
    if pc is not None:
        try:
            character = load_pc(pc)
        except PrettyError as e:
            _fail(e)
        menu = RollMenu(f"{character.name} — {character.class_} L{character.level}", character_menu(character))
    else:
        menu = RollMenu("Dice", default_menu())
    host = RollHost(RollEngine(settings=settings), scheduler=Scheduler())
    run_interactive(host, menu)
    typer.echo(f"{len(host.history)} roll(s) this session")


@app.command()
def sheet(pc: Path = typer.Argument(..., exists=True, dir_okay=False, help="PC file (json)")) -> None:
    """Print the rollable modifiers of a character file."""
    try:
        character = load_pc(pc)
    except PrettyError as e:
        _fail(e)
    render_console(character)


@app.command()
def config(
    frames: Optional[int] = typer.Option(None, help="Animation frames per roll"),
    base_delay: Optional[int] = typer.Option(None, help="First frame delay (ms)"),
    delay_step: Optional[int] = typer.Option(None, help="Extra delay per frame (ms)"),
    seed: Optional[int] = typer.Option(None, help="Default RNG seed"),
) -> None:
    """Show settings, or persist the given ones to the config file."""
    updates = {
        "total_frames": frames,
        "base_delay_ms": base_delay,
        "delay_step_ms": delay_step,
        "seed": seed,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    settings = _settings(False, **updates)
    if updates:
        cfg = load_config()
        cfg.update(updates)
        save_config(cfg)
        typer.secho("Saved config", fg=typer.colors.GREEN)
    for key, value in settings.model_dump().items():
        typer.echo(f"{key} = {value}")


if __name__ == "__main__":
    app()
