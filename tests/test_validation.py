from pathlib import Path
import json
import textwrap

import pytest

from rollsheet.validation import load_pc, PrettyError


def _write(tmp_path: Path, data, name="pc.json") -> Path:
    p = tmp_path / name
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


def test_load_pc_ok(tmp_path: Path, pc_data) -> None:
    obj = load_pc(_write(tmp_path, pc_data))
    assert obj.name == "Mira" and obj.level == 5
    assert obj.class_ == "Wizard"
    assert obj.save_proficiencies == {"int", "wis"}
    assert [s.name for s in obj.spells] == ["Fire Bolt", "Fireball", "Mage Armor"]


def test_load_pc_yaml(tmp_path: Path) -> None:
    p = tmp_path / "pc.yaml"
    p.write_text(
        textwrap.dedent(
            """
            name: Bram
            class: Fighter
            level: 3
            hit_die: 10
            abilities: {str: 16, dex: 12, con: 14, int: 8, wis: 10, cha: 10}
            attacks:
              - name: Longsword
                damage: 1d8
                damage_type: slashing
            """
        ),
        encoding="utf-8",
    )
    pc = load_pc(p)
    assert pc.name == "Bram"
    assert pc.attack_bonus(pc.attacks[0]) == 5


def test_legacy_klass_key(tmp_path: Path, pc_data) -> None:
    pc_data["klass"] = pc_data.pop("class")
    assert load_pc(_write(tmp_path, pc_data)).class_ == "Wizard"


def test_load_pc_schema_error(tmp_path: Path) -> None:
    bad = {"name": "NoAbilities", "class": "Wizard", "level": 1}
    with pytest.raises(PrettyError) as exc:
        load_pc(_write(tmp_path, bad))
    assert "JSON Schema validation failed" in str(exc.value)
    assert "abilities" in str(exc.value)


def test_bad_damage_dice_rejected(tmp_path: Path, pc_data) -> None:
    pc_data["attacks"][0]["damage"] = "lots"
    with pytest.raises(PrettyError) as exc:
        load_pc(_write(tmp_path, pc_data))
    assert "/attacks/0/damage" in str(exc.value)


def test_unknown_hit_die_rejected(tmp_path: Path, pc_data) -> None:
    pc_data["hit_die"] = 20
    with pytest.raises(PrettyError):
        load_pc(_write(tmp_path, pc_data))


def test_invalid_json(tmp_path: Path) -> None:
    p = tmp_path / "pc.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(PrettyError) as exc:
        load_pc(p)
    assert "invalid JSON" in str(exc.value)


def test_invalid_yaml(tmp_path: Path) -> None:
    p = tmp_path / "pc.yml"
    p.write_text("name: [unclosed", encoding="utf-8")
    with pytest.raises(PrettyError) as exc:
        load_pc(p)
    assert "invalid YAML" in str(exc.value)
