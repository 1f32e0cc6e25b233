from __future__ import annotations

from pathlib import Path
from typing import Any
import json
import yaml
from jsonschema import Draft202012Validator
from pydantic import ValidationError

from rollsheet.models.pc import PlayerCharacter


SCHEMA_DIR = Path(__file__).resolve().parent / "schema"


class PrettyError(Exception):
    pass


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PrettyError(f"{path}: invalid JSON at line {e.lineno} ({e.msg})")


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise PrettyError(f"{path}: invalid YAML ({e})")


def _read_any(path: Path) -> Any:
    if path.suffix.lower() in (".yaml", ".yml"):
        return _read_yaml(path)
    return _read_json(path)


_def_schemas = {
    "pc": SCHEMA_DIR / "pc.schema.json",
}


def _validate_jsonschema(obj: Any, schema_path: Path) -> None:
    schema = _read_json(schema_path)
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(obj), key=lambda e: list(e.path))
    if errors:
        lines = []
        for e in errors[:5]:
            ptr = "/" + "/".join([str(p) for p in e.path])
            lines.append(f"- {ptr}: {e.message}")
        more = "" if len(errors) <= 5 else f" (+{len(errors)-5} more)"
        raise PrettyError("JSON Schema validation failed:\n" + "\n".join(lines) + more)


def _migrate_class_key(data: dict) -> dict:
    # older sheets stored the class under "klass"
    if "klass" in data and "class" not in data:
        data["class"] = data.pop("klass")
    return data


# Public API


def load_pc(path: Path) -> PlayerCharacter:
    data = _read_any(path)
    if isinstance(data, dict):
        data = _migrate_class_key(data)
    _validate_jsonschema(data, _def_schemas["pc"])
    try:
        return PlayerCharacter.model_validate(data)
    except ValidationError as e:
        raise PrettyError(e.errors(include_url=False))


__all__ = ["load_pc", "PrettyError"]
