import os, json
from pathlib import Path
from typing import Dict, Any, Optional

from pydantic import BaseModel, Field, ValidationError

from rollsheet.validation import PrettyError

ENV_OVERRIDES = {
    "ROLLSHEET_FRAMES": "total_frames",
    "ROLLSHEET_BASE_DELAY_MS": "base_delay_ms",
    "ROLLSHEET_DELAY_STEP_MS": "delay_step_ms",
    "ROLLSHEET_SEED": "seed",
}


class EngineSettings(BaseModel):
    total_frames: int = Field(12, ge=1)
    base_delay_ms: int = Field(80, ge=0)
    delay_step_ms: int = Field(15, ge=0)
    max_visible_dice: int = Field(10, ge=1)
    history_limit: int = Field(50, ge=1)
    seed: Optional[int] = None


def config_dir() -> Path:
    home = os.getenv("ROLLSHEET_HOME")
    return Path(home) if home else Path.home() / ".rollsheet"


def config_path() -> Path:
    return config_dir() / "config.json"


def load_config() -> Dict[str, Any]:
    try:
        return json.loads(config_path().read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        raise PrettyError(f"{config_path()}: invalid JSON ({e.msg})")


def save_config(cfg: Dict[str, Any]) -> None:
    config_dir().mkdir(parents=True, exist_ok=True)
    config_path().write_text(json.dumps(cfg, indent=2), encoding="utf-8")


def load_settings(**overrides: Any) -> EngineSettings:
    """
    Precedence: explicit overrides > env > config file > defaults.
    ``None`` overrides are ignored so CLI options can be passed straight through.
    """
    data: Dict[str, Any] = {k: v for k, v in load_config().items() if k in EngineSettings.model_fields}
    for env_key, field in ENV_OVERRIDES.items():
        val = os.getenv(env_key)
        if val is not None and val.strip():
            data[field] = val.strip()
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return EngineSettings.model_validate(data)
    except ValidationError as e:
        raise PrettyError(e.errors(include_url=False))
