from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .dice import RollOutcome
from .types import HistoryEntry, RollMode, RollRequest

TOTAL_ANIM_FRAMES = 12

# Die sizes offered by the custom roller, in picker order.
DIE_TYPES = (4, 6, 8, 10, 12, 20, 100)
CUSTOM_MIN_QTY = 1
CUSTOM_MAX_QTY = 100

# Cycled while a die tumbles; a landed die switches to LANDED_COLOR.
ANIM_COLORS = ("magenta", "cyan", "yellow", "white")
LANDED_COLOR = "green"


class RollState(str, Enum):
    IDLE = "idle"
    ADV_PROMPT = "adv_prompt"
    CUSTOM_ROLL = "custom_roll"
    ANIMATING = "animating"
    SHOWING = "showing"


def is_landed(index: int, frame: int, num_dice: int, total_frames: int = TOTAL_ANIM_FRAMES) -> bool:
    """Dice land left to right, one per frame over the last ``num_dice`` frames."""
    return frame > total_frames - num_dice + index


@dataclass
class EngineSession:
    """Working state of the one roll in flight."""

    state: RollState = RollState.IDLE
    number: int = 0
    request: Optional[RollRequest] = None
    follow_up: Optional[RollRequest] = None
    mode: RollMode = RollMode.NORMAL
    outcome: Optional[RollOutcome] = None
    entry: Optional[HistoryEntry] = None

    frame: int = 0
    total_frames: int = TOTAL_ANIM_FRAMES
    display_values: List[int] = field(default_factory=list)
    display_colors: List[str] = field(default_factory=list)
    color_index: int = 0

    # custom roller only
    die_index: int = 0
    quantity: int = CUSTOM_MIN_QTY

    @property
    def advantage(self) -> bool:
        return self.mode is RollMode.ADVANTAGE

    @property
    def disadvantage(self) -> bool:
        return self.mode is RollMode.DISADVANTAGE

    @property
    def num_dice(self) -> int:
        return len(self.display_values)

    @property
    def selected_die(self) -> int:
        return DIE_TYPES[self.die_index]

    @property
    def custom_expression(self) -> str:
        return f"{self.quantity}d{self.selected_die}"

    def is_landed(self, index: int) -> bool:
        if self.state is RollState.SHOWING:
            return True
        return is_landed(index, self.frame, self.num_dice, self.total_frames)
