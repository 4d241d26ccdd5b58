from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from imigrate.models.config_models import ConvertConfig, TransformStep

"""Run configuration loader.

Responsibilities:
- Load the YAML run configuration (default config/imigrate.yml)
- Validate it against the packaged JSON schema (config_schema.json)
- Apply defaults and build the frozen ConvertConfig
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/imigrate.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates
            the schema (missing required keys, unknown keys, wrong types)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path)
        suffix = f" (at {where})" if where else ""
        raise ConfigError(f"config validation failed: {e.message}{suffix}") from e


def _transform_steps(raw: list[dict[str, Any]]) -> list[TransformStep]:
    steps: list[TransformStep] = []
    for item in raw:
        params = {k: v for k, v in item.items() if k not in ("op", "column")}
        steps.append(TransformStep(op=item["op"], column=item["column"], params=params))
    return steps


def load_config(path: Path) -> ConvertConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    return ConvertConfig(
        dispatch_system=data["dispatch_system"],
        entity_type=data["entity_type"],
        input_files=list(data["input_files"]),
        output_directory=data.get("output_directory", "./output"),
        customer_name=data.get("customer_name") or "",
        keep_na_strings=data.get("keep_na_strings"),
        transforms=_transform_steps(data.get("transforms", [])),
    )
