"""Build roll requests for the things a character sheet lets you roll."""
from __future__ import annotations

from typing import List, Optional, Tuple

from rollsheet.models.pc import ABILITY_NAMES, ABILITY_ORDER, SKILLS, Attack, PlayerCharacter, Spell

from .types import RollKind, RollRequest

MenuItem = Tuple[str, RollRequest]


def _title(key: str) -> str:
    return key.replace("_", " ").title()


def skill_check(name: str, modifier: int) -> RollRequest:
    return RollRequest(
        label=f"{_title(name)} Check",
        expression="1d20",
        modifier=modifier,
        kind=RollKind.SKILL_CHECK,
        prompt_mode=True,
    )


def ability_check(ability: str, modifier: int) -> RollRequest:
    return RollRequest(
        label=f"{ABILITY_NAMES[ability]} Check",
        expression="1d20",
        modifier=modifier,
        kind=RollKind.SKILL_CHECK,
        prompt_mode=True,
    )


def saving_throw(ability: str, modifier: int) -> RollRequest:
    return RollRequest(
        label=f"{ABILITY_NAMES[ability]} Save",
        expression="1d20",
        modifier=modifier,
        kind=RollKind.SAVING_THROW,
        prompt_mode=True,
    )


def initiative(modifier: int) -> RollRequest:
    return RollRequest(
        label="Initiative",
        expression="1d20",
        modifier=modifier,
        kind=RollKind.SKILL_CHECK,
        prompt_mode=True,
    )


def weapon_attack(name: str, attack_bonus: int, damage: str, damage_mod: int = 0, damage_type: str = "") -> RollRequest:
    """Attack roll that offers the weapon's damage as a follow-up."""
    dtype = f" ({damage_type})" if damage_type else ""
    return RollRequest(
        label=f"{name} Attack",
        expression="1d20",
        modifier=attack_bonus,
        kind=RollKind.ATTACK,
        prompt_mode=True,
        follow_up=RollRequest(
            label=f"{name} Damage{dtype}",
            expression=damage,
            modifier=damage_mod,
            kind=RollKind.DAMAGE,
        ),
    )


def spell_roll(
    spell_name: str,
    damage: str,
    damage_type: str,
    saving_throw: str,
    attack_bonus: int,
    save_dc: int,
) -> Optional[RollRequest]:
    """
    Spell attacks (no saving throw) roll to hit with damage as the follow-up.
    Save-based spells roll damage only and show the DC in the label.
    Spells without damage have nothing to roll.
    """
    if not damage:
        return None
    if not saving_throw:
        return RollRequest(
            label=f"{spell_name} Attack",
            expression="1d20",
            modifier=attack_bonus,
            kind=RollKind.ATTACK,
            prompt_mode=True,
            follow_up=RollRequest(
                label=f"{spell_name} Damage ({damage_type})",
                expression=damage,
                kind=RollKind.DAMAGE,
            ),
        )
    return RollRequest(
        label=f"{spell_name} Damage (DC {save_dc} {saving_throw})",
        expression=damage,
        kind=RollKind.DAMAGE,
    )


def hit_die(die: int, con_mod: int) -> RollRequest:
    return RollRequest(
        label=f"Hit Die (d{die})",
        expression=f"1d{die}",
        modifier=con_mod,
        kind=RollKind.HIT_DICE,
    )


def luck() -> RollRequest:
    return RollRequest(label="Luck", expression="1d20", kind=RollKind.LUCK)


# --- Character menu ---


def attack_request(pc: PlayerCharacter, attack: Attack) -> RollRequest:
    return weapon_attack(
        attack.name,
        pc.attack_bonus(attack),
        attack.damage,
        damage_mod=pc.ability_mod(attack.ability),
        damage_type=attack.damage_type,
    )


def spell_request(pc: PlayerCharacter, spell: Spell) -> Optional[RollRequest]:
    return spell_roll(
        spell.name,
        spell.damage,
        spell.damage_type,
        spell.saving_throw,
        pc.spell_attack_bonus or 0,
        pc.spell_save_dc or 0,
    )


def character_menu(pc: PlayerCharacter) -> List[MenuItem]:
    """Every roll the sheet offers, grouped by section, in display order."""
    items: List[MenuItem] = [("Combat", initiative(pc.initiative))]
    items += [("Combat", attack_request(pc, a)) for a in pc.attacks]
    for spell in pc.spells:
        req = spell_request(pc, spell)
        if req is not None:
            items.append(("Spells", req))
    items += [("Abilities", ability_check(a, pc.ability_mod(a))) for a in ABILITY_ORDER]
    items += [("Saves", saving_throw(a, pc.save_mod(a))) for a in ABILITY_ORDER]
    items += [("Skills", skill_check(s, pc.skill_mod(s))) for s in SKILLS]
    items.append(("Other", hit_die(pc.hit_die, pc.ability_mod("con"))))
    items.append(("Other", luck()))
    return items


def default_menu() -> List[MenuItem]:
    return [
        ("Dice", RollRequest(label="d20", expression="1d20", kind=RollKind.CUSTOM, prompt_mode=True)),
        ("Dice", RollRequest(label="Percentile", expression="1d100", kind=RollKind.CUSTOM)),
        ("Other", luck()),
    ]
