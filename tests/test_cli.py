import json

from typer.testing import CliRunner

from rollsheet.cli import app
from rollsheet.engine.config import load_config
from rollsheet.engine.dice import DiceEvaluator

runner = CliRunner()


def test_roll_no_animate_is_seeded():
    result = runner.invoke(app, ["roll", "1d20+5", "--seed", "3", "--no-animate"])
    assert result.exit_code == 0, result.output
    total = DiceEvaluator(3).evaluate("1d20+5").total
    assert f"1d20+5: 1d20+5 → {total}" in result.output
    assert "Press any key to dismiss" in result.output


def test_roll_with_mod_and_label():
    result = runner.invoke(app, ["roll", "2d6", "--mod", "2", "--label", "Greatsword", "--seed", "1", "--no-animate"])
    assert result.exit_code == 0, result.output
    total = DiceEvaluator(1).evaluate("2d6", 2).total
    assert f"Greatsword: 2d6+2 → {total}" in result.output


def test_roll_advantage():
    result = runner.invoke(app, ["roll", "1d20+5", "--adv", "--seed", "3", "--no-animate"])
    assert result.exit_code == 0, result.output
    out = DiceEvaluator(3).evaluate_advantage(5)
    assert f"2d20kh1+5 → {out.total} (ADV)" in result.output
    assert "Advantage: kept" in result.output


def test_roll_disadvantage():
    result = runner.invoke(app, ["roll", "1d20", "--dis", "--seed", "3", "--no-animate"])
    assert result.exit_code == 0, result.output
    assert "(DIS)" in result.output


def test_roll_rejects_adv_and_dis():
    result = runner.invoke(app, ["roll", "1d20", "--adv", "--dis"])
    assert result.exit_code == 2


def test_roll_rejects_bad_expression():
    result = runner.invoke(app, ["roll", "2x6"])
    assert result.exit_code == 2


def test_seed_from_config():
    assert runner.invoke(app, ["config", "--seed", "11"]).exit_code == 0
    result = runner.invoke(app, ["roll", "1d100", "--no-animate"])
    total = DiceEvaluator(11).evaluate("1d100").total
    assert f"1d100: 1d100 → {total}" in result.output


def test_config_shows_and_saves():
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "total_frames = 12" in result.output
    assert "Saved config" not in result.output
    assert load_config() == {}

    result = runner.invoke(app, ["config", "--frames", "6", "--base-delay", "40"])
    assert result.exit_code == 0, result.output
    assert "Saved config" in result.output
    assert "total_frames = 6" in result.output
    assert load_config() == {"total_frames": 6, "base_delay_ms": 40}


def test_config_rejects_bad_value():
    result = runner.invoke(app, ["config", "--frames", "0"])
    assert result.exit_code == 1
    assert load_config() == {}


def test_sheet(tmp_path, pc_data):
    p = tmp_path / "mira.json"
    p.write_text(json.dumps(pc_data), encoding="utf-8")
    result = runner.invoke(app, ["sheet", str(p)])
    assert result.exit_code == 0, result.output
    assert "Mira" in result.output
    assert "Fire Bolt" in result.output
    assert "DC 15 DEX" in result.output


def test_sheet_reports_bad_file(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps({"name": "X"}), encoding="utf-8")
    result = runner.invoke(app, ["sheet", str(p)])
    assert result.exit_code == 1
    assert "JSON Schema validation failed" in result.output


def test_debug_flag_raises_log_level():
    import logging

    result = runner.invoke(app, ["roll", "1d6", "--no-animate", "--debug"])
    assert result.exit_code == 0, result.output
    assert logging.getLogger("rollsheet").level == logging.DEBUG
    logging.getLogger("rollsheet").setLevel(logging.INFO)
