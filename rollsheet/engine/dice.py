"""Deterministic dice evaluator supporting advantage/disadvantage."""
from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

DICE_RE = re.compile(r"^(?P<num>\d*)d(?P<sides>\d+)(?P<mod>[+-]\d+)?$", re.IGNORECASE)

MAX_DICE = 100


class ExpressionError(ValueError):
    """Raised for dice expressions the evaluator cannot parse."""


@dataclass(frozen=True)
class RollOutcome:
    expression: str
    rolls: Tuple[int, ...]
    kept: Tuple[int, ...]
    dropped: Tuple[int, ...] = ()
    modifier: int = 0
    total: int = 0
    sides: int = 20

    @property
    def dice(self) -> Tuple[int, ...]:
        """Final die faces in display order: kept first, then dropped."""
        faces = self.kept + self.dropped
        return faces or self.rolls


def format_modifier(mod: int) -> str:
    if not mod:
        return ""
    return f"+{mod}" if mod > 0 else str(mod)


def parse(expr: str) -> Tuple[int, int, int]:
    """Split ``XdY+Z`` into ``(count, sides, modifier)``.

    ``X`` defaults to 1 and ``Z`` to 0.
    """
    m = DICE_RE.fullmatch(expr.replace(" ", ""))
    if not m:
        raise ExpressionError(f"Invalid dice expression: {expr!r}")
    num = int(m.group("num") or 1)
    sides = int(m.group("sides"))
    mod = int(m.group("mod") or 0)
    if not 1 <= num <= MAX_DICE:
        raise ExpressionError(f"Dice count must be between 1 and {MAX_DICE}: {expr!r}")
    if sides < 2:
        raise ExpressionError(f"Dice need at least two sides: {expr!r}")
    return num, sides, mod


@dataclass
class DiceEvaluator:
    """Seeded evaluator; the same seed replays the same sequence of outcomes."""

    seed: Optional[int] = None
    _r: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._r = random.Random(self.seed)

    def roll_int(self, lo: int, hi: int) -> int:
        return self._r.randint(lo, hi)

    def evaluate(self, expression: str, modifier: int = 0) -> RollOutcome:
        """Roll ``expression`` literally, adding ``modifier`` to any modifier it carries."""
        num, sides, mod = parse(expression)
        rolls = tuple(self.roll_int(1, sides) for _ in range(num))
        mod += modifier
        return RollOutcome(
            expression=f"{num}d{sides}{format_modifier(mod)}",
            rolls=rolls,
            kept=rolls,
            modifier=mod,
            total=sum(rolls) + mod,
            sides=sides,
        )

    def evaluate_advantage(self, modifier: int = 0) -> RollOutcome:
        return self._keep_one(modifier, highest=True)

    def evaluate_disadvantage(self, modifier: int = 0) -> RollOutcome:
        return self._keep_one(modifier, highest=False)

    def _keep_one(self, modifier: int, *, highest: bool) -> RollOutcome:
        first = self.roll_int(1, 20)
        second = self.roll_int(1, 20)
        ordered: List[int] = sorted((first, second), reverse=highest)
        chosen, discarded = ordered
        tag = "kh1" if highest else "kl1"
        return RollOutcome(
            expression=f"2d20{tag}{format_modifier(modifier)}",
            rolls=(first, second),
            kept=(chosen,),
            dropped=(discarded,),
            modifier=modifier,
            total=chosen + modifier,
            sides=20,
        )
