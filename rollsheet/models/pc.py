from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

ABILITY_ORDER = ("str", "dex", "con", "int", "wis", "cha")

ABILITY_NAMES = {
    "str": "Strength",
    "dex": "Dexterity",
    "con": "Constitution",
    "int": "Intelligence",
    "wis": "Wisdom",
    "cha": "Charisma",
}

SKILL_ABILITY: Dict[str, str] = {
    "acrobatics": "dex",
    "animal_handling": "wis",
    "arcana": "int",
    "athletics": "str",
    "deception": "cha",
    "history": "int",
    "insight": "wis",
    "intimidation": "cha",
    "investigation": "int",
    "medicine": "wis",
    "nature": "int",
    "perception": "wis",
    "performance": "cha",
    "persuasion": "cha",
    "religion": "int",
    "sleight_of_hand": "dex",
    "stealth": "dex",
    "survival": "wis",
}

SKILLS: Tuple[str, ...] = tuple(SKILL_ABILITY)

HIT_DICE = (6, 8, 10, 12)


class Abilities(BaseModel):
    str: PositiveInt
    dex: PositiveInt
    con: PositiveInt
    int: PositiveInt
    wis: PositiveInt
    cha: PositiveInt

    def modifier(self, name: str) -> int:
        v = getattr(self, name)
        return (v - 10) // 2


class Attack(BaseModel):
    name: str = Field(min_length=1)
    ability: str = "str"
    proficient: bool = True
    damage: str  # e.g. "1d8", ability mod is added on top
    damage_type: str = ""


class Spell(BaseModel):
    name: str = Field(min_length=1)
    level: int = Field(0, ge=0, le=9)
    damage: str = ""
    damage_type: str = ""
    saving_throw: str = ""  # ability name when the spell calls for a save


class PlayerCharacter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    class_: str = Field(alias="class", min_length=1)
    level: PositiveInt = 1
    proficiency_bonus: Optional[PositiveInt] = None
    abilities: Abilities
    hit_die: int = 8
    spellcasting_ability: Optional[str] = None

    save_proficiencies: Set[str] = set()
    skill_proficiencies: Set[str] = set()
    attacks: List[Attack] = []
    spells: List[Spell] = []

    @field_validator("hit_die")
    @classmethod
    def _known_hit_die(cls, v: int) -> int:
        if v not in HIT_DICE:
            raise ValueError(f"hit die must be one of {HIT_DICE}")
        return v

    # --- Derived ---
    @property
    def prof(self) -> int:
        if self.proficiency_bonus:
            return self.proficiency_bonus
        # 5e scaling: 1–4:+2, 5–8:+3, 9–12:+4, 13–16:+5, 17–20:+6
        return 2 + ((self.level - 1) // 4)

    def ability_mod(self, name: str) -> int:
        return self.abilities.modifier(name.lower())

    def skill_mod(self, skill: str) -> int:
        mod = self.ability_mod(SKILL_ABILITY[skill])
        if skill in self.skill_proficiencies:
            mod += self.prof
        return mod

    def save_mod(self, ability: str) -> int:
        mod = self.ability_mod(ability)
        if ability in self.save_proficiencies:
            mod += self.prof
        return mod

    @property
    def initiative(self) -> int:
        return self.ability_mod("dex")

    def attack_bonus(self, attack: Attack) -> int:
        return self.ability_mod(attack.ability) + (self.prof if attack.proficient else 0)

    @property
    def spell_save_dc(self) -> int | None:
        if not self.spellcasting_ability:
            return None
        return 8 + self.prof + self.ability_mod(self.spellcasting_ability)

    @property
    def spell_attack_bonus(self) -> int | None:
        if not self.spellcasting_ability:
            return None
        return self.prof + self.ability_mod(self.spellcasting_ability)


__all__ = [
    "PlayerCharacter",
    "Abilities",
    "Attack",
    "Spell",
    "ABILITY_ORDER",
    "ABILITY_NAMES",
    "SKILLS",
    "SKILL_ABILITY",
]
