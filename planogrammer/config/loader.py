from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_LOG_DIRECTORY, AppConfig, DiagnosticsConfig

"""Config loader.

Responsibilities:
- Load YAML config (default: config/planogram.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults (timezone=UTC, encoding=utf-8, diagnostics off)
- Apply environment overrides (PLANOGRAMMER_OUTPUT_DIR)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "apply_env_overrides",
    "load_config",
    "load_config_or_default",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/planogram.yml")

ENV_CONFIG_PATH = "PLANOGRAMMER_CONFIG"
ENV_OUTPUT_DIR = "PLANOGRAMMER_OUTPUT_DIR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing or unparsable, or the data violates it
            (missing keys, wrong types, unknown keys).
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


def _validate_timezone(name: str) -> None:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {name}") from e


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    tz = data.get("timezone", "UTC")
    _validate_timezone(tz)
    diag_raw = data.get("diagnostics", {})
    diagnostics = DiagnosticsConfig(
        rejection_log=diag_raw.get("rejection_log", False),
        log_directory=diag_raw.get("log_directory", DEFAULT_LOG_DIRECTORY),
    )
    return AppConfig(
        output_directory=data["output_directory"],
        timezone=tz,
        encoding=data.get("encoding", "utf-8"),
        diagnostics=diagnostics,
    )


def load_config_or_default(path: Path | None = None) -> AppConfig:
    """Load the config file if there is one, else fall back to built-in defaults.

    Resolution order for the path: explicit argument, $PLANOGRAMMER_CONFIG,
    config/planogram.yml. An explicitly named file that does not exist is an error.
    """
    if path is not None:
        return load_config(path)
    env_path = os.getenv(ENV_CONFIG_PATH)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return AppConfig()


def apply_env_overrides(cfg: AppConfig) -> AppConfig:
    output_dir = os.getenv(ENV_OUTPUT_DIR)
    if output_dir:
        return replace(cfg, output_directory=output_dir)
    return cfg
