from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ImportOptions, MatrixMode, UnmatchedStatePolicy

"""Config loader.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against config_schema.json (shipped next to this module)
- Apply defaults for optional keys
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportConfig:
    source_directory: str
    output_directory: str = "./out"
    mode: MatrixMode | None = None  # None = auto
    unmatched_state_policy: UnmatchedStatePolicy = UnmatchedStatePolicy.LENIENT
    allow_symbol_truncation: bool = False
    delimiter: str | None = None  # None = suffix based (tab for .tsv/.tab)
    encoding: str = "utf-8"

    def to_options(self) -> ImportOptions:
        return ImportOptions(
            unmatched_state_policy=self.unmatched_state_policy,
            allow_symbol_truncation=self.allow_symbol_truncation,
        )


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (missing required keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    mode_raw = data.get("mode", "auto")
    return ImportConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", "./out"),
        mode=None if mode_raw == "auto" else MatrixMode(mode_raw),
        unmatched_state_policy=UnmatchedStatePolicy(data.get("unmatched_state_policy", "lenient")),
        allow_symbol_truncation=bool(data.get("allow_symbol_truncation", False)),
        delimiter=data.get("delimiter"),
        encoding=data.get("encoding", "utf-8"),
    )
