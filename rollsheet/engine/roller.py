"""Dice-roll state machine.

Views never call the evaluator directly: they hand a :class:`RollRequest` to
:meth:`RollEngine.submit` and learn about the result through the
:class:`RollCompleted` effect. Every stimulus (request, key, tick) is handled
synchronously and answered with a list of effects for the host to carry out;
the engine itself never sleeps, spawns threads or touches a clock.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Union

from rollsheet.logging import get_logger

from .config import EngineSettings
from .dice import DiceEvaluator, ExpressionError, RollOutcome, parse
from .session import (
    ANIM_COLORS,
    CUSTOM_MAX_QTY,
    CUSTOM_MIN_QTY,
    DIE_TYPES,
    LANDED_COLOR,
    EngineSession,
    RollState,
)
from .types import HistoryEntry, RollKind, RollMode, RollRequest

log = get_logger(__name__)


# --- Events & effects ---


@dataclass(frozen=True)
class Tick:
    """Animation tick addressed to the session that scheduled it."""

    session: int


@dataclass(frozen=True)
class OpenCustomRoll:
    pass


@dataclass(frozen=True)
class ScheduleTick:
    delay_ms: int
    tick: Tick


@dataclass(frozen=True)
class RollCompleted:
    entry: HistoryEntry


@dataclass(frozen=True)
class FollowUp:
    request: RollRequest


Effect = Union[ScheduleTick, RollCompleted, FollowUp]
Event = Union[RollRequest, Tick, OpenCustomRoll, str]

MODE_KEYS = {
    "n": RollMode.NORMAL,
    "a": RollMode.ADVANTAGE,
    "d": RollMode.DISADVANTAGE,
}


def build_history_entry(request: RollRequest, outcome: RollOutcome, mode: RollMode) -> HistoryEntry:
    # crits only count when a single d20 decides the roll
    single_d20 = outcome.sides == 20 and len(outcome.kept) == 1
    return HistoryEntry(
        label=request.label,
        kind=request.kind,
        expression=outcome.expression,
        rolls=outcome.rolls,
        kept=outcome.kept,
        dropped=outcome.dropped,
        modifier=outcome.modifier,
        total=outcome.total,
        advantage=mode is RollMode.ADVANTAGE,
        disadvantage=mode is RollMode.DISADVANTAGE,
        nat_crit=single_d20 and outcome.kept[0] == 20,
        nat_fail=single_d20 and outcome.kept[0] == 1,
    )


class RollEngine:
    def __init__(
        self,
        evaluator: Optional[DiceEvaluator] = None,
        *,
        settings: Optional[EngineSettings] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        if seed is None:
            seed = self.settings.seed
        self.evaluator = evaluator or DiceEvaluator(seed)
        # tumbling faces only; kept apart from the evaluator so churn never shifts results
        self._rng = random.Random(seed)
        self._sessions = 0
        self.session = self._blank_session()

    # --- Queries ---

    @property
    def state(self) -> RollState:
        return self.session.state

    @property
    def is_active(self) -> bool:
        return self.session.state is not RollState.IDLE

    def tick_delay(self, frame: int) -> int:
        return self.settings.base_delay_ms + frame * self.settings.delay_step_ms

    # --- Stimuli ---

    def update(self, event: Event) -> List[Effect]:
        if isinstance(event, RollRequest):
            return self.submit(event)
        if isinstance(event, Tick):
            return self.tick(event)
        if isinstance(event, OpenCustomRoll):
            return self.open_custom_roll()
        if isinstance(event, str):
            return self.press(event)
        raise TypeError(f"Unsupported roll engine event: {event!r}")

    def submit(self, request: RollRequest) -> List[Effect]:
        if self.is_active:
            log.debug("roll %r dropped; session %d is %s", request.label, self.session.number, self.state.value)
            return []
        self._start_session()
        self.session.request = request
        self.session.follow_up = request.follow_up
        if request.prompt_mode:
            self._enter(RollState.ADV_PROMPT)
            return []
        return self._execute(RollMode.NORMAL)

    def open_custom_roll(self) -> List[Effect]:
        if self.is_active:
            return []
        self._start_session()
        self.session.die_index = 0
        self.session.quantity = CUSTOM_MIN_QTY
        self._enter(RollState.CUSTOM_ROLL)
        return []

    def press(self, key: str) -> List[Effect]:
        if len(key) == 1:
            key = key.lower()
        handler = {
            RollState.ADV_PROMPT: self._adv_prompt_key,
            RollState.CUSTOM_ROLL: self._custom_roll_key,
            RollState.SHOWING: self._showing_key,
        }.get(self.state)
        if handler is None:
            return []
        return handler(key)

    def tick(self, tick: Tick) -> List[Effect]:
        s = self.session
        if s.state is not RollState.ANIMATING or s.outcome is None:
            return []
        if tick.session != s.number:
            return []

        s.frame += 1
        finals = s.outcome.dice
        s.color_index = (s.color_index + 1) % len(ANIM_COLORS)
        settled = s.frame >= s.total_frames
        for i in range(s.num_dice):
            if settled or s.is_landed(i):
                s.display_values[i] = finals[i]
                s.display_colors[i] = LANDED_COLOR
            else:
                s.display_values[i] = self._rng.randint(1, s.outcome.sides)
                s.display_colors[i] = ANIM_COLORS[s.color_index]

        if settled:
            self._enter(RollState.SHOWING)
            return []
        return [self._schedule_tick()]

    # --- Key handlers ---

    def _adv_prompt_key(self, key: str) -> List[Effect]:
        if key == "esc":
            self._reset()
            return []
        mode = MODE_KEYS.get(key)
        if mode is None:
            return []
        return self._execute(mode)

    def _custom_roll_key(self, key: str) -> List[Effect]:
        s = self.session
        if key in ("left", "h"):
            s.die_index = max(0, s.die_index - 1)
        elif key in ("right", "l"):
            s.die_index = min(len(DIE_TYPES) - 1, s.die_index + 1)
        elif key in ("up", "k"):
            s.quantity = min(CUSTOM_MAX_QTY, s.quantity + 1)
        elif key in ("down", "j"):
            s.quantity = max(CUSTOM_MIN_QTY, s.quantity - 1)
        elif key == "enter":
            expr = s.custom_expression
            s.request = RollRequest(label=f"Custom Roll: {expr}", expression=expr, kind=RollKind.CUSTOM)
            s.follow_up = None
            return self._execute(RollMode.NORMAL)
        elif key == "esc":
            self._reset()
        return []

    def _showing_key(self, key: str) -> List[Effect]:
        s = self.session
        entry = s.entry
        follow_up = s.follow_up
        if follow_up is not None:
            if key == "enter":
                self._reset()
                return [FollowUp(follow_up)]
            if key == "esc":
                self._reset()
                return [RollCompleted(entry)]
            return []
        self._reset()
        return [RollCompleted(entry)]

    # --- Internals ---

    def _execute(self, mode: RollMode) -> List[Effect]:
        s = self.session
        req = s.request
        try:
            if mode is RollMode.NORMAL:
                outcome = self.evaluator.evaluate(req.expression, req.modifier)
            else:
                # the d20 pair replaces the expression's dice but keeps its bonus
                _, _, expr_mod = parse(req.expression)
                if mode is RollMode.ADVANTAGE:
                    outcome = self.evaluator.evaluate_advantage(expr_mod + req.modifier)
                else:
                    outcome = self.evaluator.evaluate_disadvantage(expr_mod + req.modifier)
        except ExpressionError as e:
            log.debug("roll %r aborted: %s", req.label, e)
            self._reset()
            return []

        s.mode = mode
        s.outcome = outcome
        s.frame = 0
        s.color_index = 0
        s.display_values = [self._rng.randint(1, outcome.sides) for _ in outcome.dice]
        s.display_colors = [ANIM_COLORS[0]] * len(s.display_values)
        # values are final now even though the animation has not run
        s.entry = build_history_entry(req, outcome, mode)
        self._enter(RollState.ANIMATING)
        return [self._schedule_tick()]

    def _schedule_tick(self) -> ScheduleTick:
        s = self.session
        return ScheduleTick(self.tick_delay(s.frame), Tick(s.number))

    def _blank_session(self) -> EngineSession:
        return EngineSession(number=self._sessions, total_frames=self.settings.total_frames)

    def _start_session(self) -> None:
        self._sessions += 1
        self.session = self._blank_session()

    def _enter(self, state: RollState) -> None:
        log.debug("session %d: %s -> %s", self.session.number, self.session.state.value, state.value)
        self.session.state = state

    def _reset(self) -> None:
        self._enter(RollState.IDLE)
        self.session = self._blank_session()
