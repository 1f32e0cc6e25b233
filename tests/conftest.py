# tests/conftest.py
import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config lookups away from the real ~/.rollsheet."""
    home = tmp_path / "home"
    monkeypatch.setenv("ROLLSHEET_HOME", str(home))
    for key in ("ROLLSHEET_FRAMES", "ROLLSHEET_BASE_DELAY_MS", "ROLLSHEET_DELAY_STEP_MS", "ROLLSHEET_SEED"):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def pc_data():
    return {
        "name": "Mira",
        "class": "Wizard",
        "level": 5,
        "abilities": {"str": 8, "dex": 14, "con": 13, "int": 18, "wis": 12, "cha": 10},
        "hit_die": 6,
        "spellcasting_ability": "int",
        "save_proficiencies": ["int", "wis"],
        "skill_proficiencies": ["arcana", "history"],
        "attacks": [
            {"name": "Dagger", "ability": "dex", "damage": "1d4", "damage_type": "piercing"}
        ],
        "spells": [
            {"name": "Fire Bolt", "damage": "2d10", "damage_type": "fire"},
            {"name": "Fireball", "level": 3, "damage": "8d6", "damage_type": "fire", "saving_throw": "DEX"},
            {"name": "Mage Armor", "level": 1},
        ],
    }
