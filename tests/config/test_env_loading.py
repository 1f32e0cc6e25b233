import os
from pathlib import Path

from rollsheet.config_env import load_env


def test_env_loads_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("ROLLSHEET_TEST_FOO=bar\nROLLSHEET_SEED=from_env_file\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ROLLSHEET_SEED", "7")
    monkeypatch.delenv("ROLLSHEET_TEST_FOO", raising=False)

    load_env()

    assert os.getenv("ROLLSHEET_TEST_FOO") == "bar"
    assert os.getenv("ROLLSHEET_SEED") == "7"
    monkeypatch.delenv("ROLLSHEET_TEST_FOO")


def test_local_file_fills_gaps(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ROLLSHEET_FRAMES", raising=False)
    (tmp_path / ".env.local").write_text("ROLLSHEET_FRAMES=6\n", encoding="utf-8")

    load_env()

    assert os.getenv("ROLLSHEET_FRAMES") == "6"
    monkeypatch.delenv("ROLLSHEET_FRAMES")


def test_home_dir_normalized(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ROLLSHEET_HOME", "./.rollsheet_home")

    load_env()

    home = os.getenv("ROLLSHEET_HOME")
    assert Path(home) == (tmp_path / ".rollsheet_home").resolve()
