"""Glue between the roll engine, the history log, timers and whoever asked for a roll."""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from functools import partial
from typing import Callable, Iterable, List, Optional

from rich.console import RenderableType
from rich.table import Table

from rollsheet.engine.history import RollHistory
from rollsheet.engine.roller import (
    Effect,
    FollowUp,
    RollCompleted,
    RollEngine,
    ScheduleTick,
    Tick,
)
from rollsheet.engine.types import HistoryEntry, RollRequest
from rollsheet.logging import get_logger

from .console import render_text
from .dice_view import session_renderable
from .history_view import HISTORY_WIDTH, history_renderable
from .timers import ManualScheduler, Scheduler

log = get_logger(__name__)

# narrower terminals drop the history column
HISTORY_MIN_TERMINAL_WIDTH = 80

CompletionListener = Callable[[HistoryEntry], None]


class RollHost:
    def __init__(
        self,
        engine: Optional[RollEngine] = None,
        history: Optional[RollHistory] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.engine = engine or RollEngine()
        self.history = history if history is not None else RollHistory(limit=self.engine.settings.history_limit)
        self.scheduler = scheduler or ManualScheduler()
        self._listeners: List[CompletionListener] = []

    def on_complete(self, listener: CompletionListener) -> CompletionListener:
        self._listeners.append(listener)
        return listener

    # --- Caller API ---

    def submit(self, request: RollRequest) -> None:
        self._run(self.engine.submit(request))

    def is_session_active(self) -> bool:
        return self.engine.is_active

    def press(self, key: str) -> bool:
        """Route a key to the engine; False when no session wants it."""
        if not self.engine.is_active:
            return False
        self._run(self.engine.press(key))
        return True

    def open_custom_roll(self) -> None:
        self._run(self.engine.open_custom_roll())

    def toggle_history(self) -> None:
        self.history.toggle_visibility()

    def clear_history(self) -> None:
        self.history.clear()

    # --- Effects ---

    def _deliver(self, tick: Tick) -> None:
        self._run(self.engine.tick(tick))

    def _run(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, ScheduleTick):
                self.scheduler.call_later(effect.delay_ms, partial(self._deliver, effect.tick))
            elif isinstance(effect, RollCompleted):
                self._complete(effect.entry)
            elif isinstance(effect, FollowUp):
                log.debug("follow-up roll %r", effect.request.label)
                self.submit(effect.request)

    def _complete(self, entry: HistoryEntry) -> None:
        # timestamp marks when the roll is recorded
        entry = replace(entry, timestamp=datetime.now())
        self.history.append(entry)
        for listener in self._listeners:
            listener(entry)

    # --- Rendering ---

    def history_visible(self, width: int) -> bool:
        return self.history.visible and width >= HISTORY_MIN_TERMINAL_WIDTH

    def renderable(
        self, width: int, height: int, view: Optional[RenderableType] = None
    ) -> Optional[RenderableType]:
        """Compose ``view`` with the history column, or the roll modal while a roll is live."""
        if self.engine.is_active:
            return session_renderable(self.engine.session, width, height, self.engine.settings.max_visible_dice)
        column = history_renderable(self.history, HISTORY_WIDTH, height) if self.history_visible(width) else None
        if column is None:
            return view
        if view is None:
            return column
        layout = Table.grid(expand=True)
        layout.add_column(ratio=1)
        layout.add_column(width=HISTORY_WIDTH)
        layout.add_row(view, column)
        return layout

    def render(self, width: int, height: int, view: Optional[RenderableType] = None) -> str:
        return render_text(self.renderable(width, height, view), width, height)
