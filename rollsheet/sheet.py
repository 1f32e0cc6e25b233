from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rollsheet.models.pc import ABILITY_ORDER, SKILL_ABILITY, SKILLS, PlayerCharacter

ABIL_NAMES = {
    "str": "STR",
    "dex": "DEX",
    "con": "CON",
    "int": "INT",
    "wis": "WIS",
    "cha": "CHA",
}


def format_mod(n: int) -> str:
    return f"+{n}" if n >= 0 else str(n)


def ability_block(pc: PlayerCharacter) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    for a in ABILITY_ORDER:
        score = getattr(pc.abilities, a)
        t.add_row(f"[bold]{ABIL_NAMES[a]}[/]", f"{score:>2} ({format_mod(pc.ability_mod(a))})")
    return t


def saves_block(pc: PlayerCharacter) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    for a in ABILITY_ORDER:
        mark = "●" if a in pc.save_proficiencies else "○"
        t.add_row(mark, ABIL_NAMES[a], format_mod(pc.save_mod(a)))
    return t


def skills_block(pc: PlayerCharacter) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    for s in SKILLS:
        mark = "●" if s in pc.skill_proficiencies else "○"
        name = s.replace("_", " ").title()
        t.add_row(mark, f"{name} [dim]({ABIL_NAMES[SKILL_ABILITY[s]]})[/]", format_mod(pc.skill_mod(s)))
    return t


def combat_block(pc: PlayerCharacter) -> Table:
    t = Table(box=None, show_header=False, expand=False)
    t.add_row("Prof.", format_mod(pc.prof))
    t.add_row("Init.", format_mod(pc.initiative))
    t.add_row("Hit Die", f"d{pc.hit_die}")
    dc = pc.spell_save_dc
    atk = pc.spell_attack_bonus
    if dc is not None and atk is not None:
        t.add_row("Spell Save DC", str(dc))
        t.add_row("Spell Attack", format_mod(atk))
    return t


def attacks_block(pc: PlayerCharacter) -> Table:
    t = Table(box=None, show_header=True, expand=False)
    t.add_column("Name")
    t.add_column("Atk")
    t.add_column("Damage")
    if not pc.attacks and not pc.spells:
        t.add_row("—", "—", "—")
        return t
    for a in pc.attacks:
        dmg = f"{a.damage}{format_mod(pc.ability_mod(a.ability))}"
        if a.damage_type:
            dmg += f" {a.damage_type}"
        t.add_row(a.name, format_mod(pc.attack_bonus(a)), dmg)
    for sp in pc.spells:
        if not sp.damage:
            continue
        if sp.saving_throw:
            atk = f"DC {pc.spell_save_dc or 0} {sp.saving_throw.upper()}"
        else:
            atk = format_mod(pc.spell_attack_bonus or 0)
        t.add_row(sp.name, atk, f"{sp.damage} {sp.damage_type}".strip())
    return t


def render_console(pc: PlayerCharacter, console: Console | None = None) -> None:
    c = console or Console()
    c.rule(f"[bold]{pc.name}[/] — {pc.class_}  L{pc.level}")
    c.print(Panel(ability_block(pc), title="Abilities", border_style="cyan"))
    c.print(Panel(combat_block(pc), title="Combat", border_style="green"))
    c.print(Panel(saves_block(pc), title="Saving Throws", border_style="magenta"))
    c.print(Panel(skills_block(pc), title="Skills", border_style="yellow"))
    c.print(Panel(attacks_block(pc), title="Attacks & Spellcasting", border_style="red"))
