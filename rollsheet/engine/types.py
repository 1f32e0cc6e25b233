from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class RollKind(str, Enum):
    ATTACK = "attack"
    DAMAGE = "damage"
    SKILL_CHECK = "skill_check"
    SAVING_THROW = "saving_throw"
    HIT_DICE = "hit_dice"
    LUCK = "luck"
    CUSTOM = "custom"


class RollMode(str, Enum):
    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


KIND_ICONS = {
    RollKind.ATTACK: "⚔",
    RollKind.DAMAGE: "💥",
    RollKind.SKILL_CHECK: "🎯",
    RollKind.SAVING_THROW: "🛡",
    RollKind.HIT_DICE: "❤",
    RollKind.LUCK: "🎲",
    RollKind.CUSTOM: "🎲",
}


def kind_icon(kind: RollKind) -> str:
    return KIND_ICONS.get(kind, "🎲")


@dataclass(frozen=True)
class RollRequest:
    label: str = ""
    expression: str = "1d20"
    modifier: int = 0
    kind: RollKind = RollKind.CUSTOM
    prompt_mode: bool = False  # ask Normal/Advantage/Disadvantage first
    follow_up: Optional["RollRequest"] = None


@dataclass(frozen=True)
class HistoryEntry:
    label: str
    kind: RollKind
    expression: str
    rolls: Tuple[int, ...] = ()
    kept: Tuple[int, ...] = ()
    dropped: Tuple[int, ...] = ()
    modifier: int = 0
    total: int = 0
    advantage: bool = False
    disadvantage: bool = False
    nat_crit: bool = False  # natural 20 on a single d20
    nat_fail: bool = False  # natural 1 on a single d20
    timestamp: datetime = field(default_factory=datetime.now)
