import pytest
from pydantic import ValidationError

from rollsheet.models.pc import PlayerCharacter


@pytest.fixture
def mira(pc_data):
    return PlayerCharacter.model_validate(pc_data)


def test_ability_modifiers(mira):
    assert [mira.ability_mod(a) for a in ("str", "dex", "con", "int", "wis", "cha")] == [-1, 2, 1, 4, 1, 0]
    assert mira.ability_mod("INT") == 4


@pytest.mark.parametrize("level,prof", [(1, 2), (4, 2), (5, 3), (9, 4), (13, 5), (17, 6), (20, 6)])
def test_proficiency_scales_with_level(pc_data, level, prof):
    pc_data["level"] = level
    assert PlayerCharacter.model_validate(pc_data).prof == prof


def test_proficiency_override(pc_data):
    pc_data["proficiency_bonus"] = 4
    assert PlayerCharacter.model_validate(pc_data).prof == 4


def test_skills_and_saves(mira):
    assert mira.skill_mod("arcana") == 7
    assert mira.skill_mod("perception") == 1
    assert mira.save_mod("wis") == 4
    assert mira.save_mod("dex") == 2
    assert mira.initiative == 2


def test_spellcasting(mira, pc_data):
    assert mira.spell_save_dc == 15
    assert mira.spell_attack_bonus == 7
    pc_data["spellcasting_ability"] = None
    plain = PlayerCharacter.model_validate(pc_data)
    assert plain.spell_save_dc is None
    assert plain.spell_attack_bonus is None


def test_non_proficient_attack(mira):
    dagger = mira.attacks[0].model_copy(update={"proficient": False})
    assert mira.attack_bonus(dagger) == 2


def test_hit_die_must_be_known(pc_data):
    pc_data["hit_die"] = 7
    with pytest.raises(ValidationError):
        PlayerCharacter.model_validate(pc_data)


def test_class_by_field_name(pc_data):
    pc_data["class_"] = pc_data.pop("class")
    assert PlayerCharacter.model_validate(pc_data).class_ == "Wizard"
