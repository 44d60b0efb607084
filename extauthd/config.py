from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import jsonschema
from dotenv import load_dotenv

ENV_PREFIX = "EXTAUTH_"
SCHEMA_PATH = Path(__file__).parent / "schemas" / "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "INFO",
    "log_file": "",
    "backend": "extauthd.backends.static:StaticBackend",
    "static_answer": False,
    "respond_to_empty_frame": False,
}

SERVER_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


@lru_cache(maxsize=1)
def load_schema() -> dict:
    with SCHEMA_PATH.open("r", encoding="utf-8") as fp:
        return json.load(fp)


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load configuration from an env file and EXTAUTH_* environment variables."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in DEFAULT_CONFIG.items():
        value = os.getenv(f"{ENV_PREFIX}{key.upper()}", default_value)
        SERVER_CONFIG[key] = _coerce_type(value, type(default_value))
    SERVER_CONFIG["log_level"] = str(SERVER_CONFIG["log_level"]).upper()

    validate_config(SERVER_CONFIG)
    return SERVER_CONFIG


def validate_config(config: Dict[str, Any]) -> None:
    try:
        jsonschema.validate(instance=config, schema=load_schema())
    except jsonschema.ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc.message}") from exc


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


__all__ = ["SERVER_CONFIG", "DEFAULT_CONFIG", "ConfigError", "load_config", "validate_config"]
