"""XDG config loading/saving."""

from __future__ import annotations

import json
import os
import tomllib
from contextlib import suppress
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repopicker.logging import LOG_LEVELS
from repopicker.registry import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT_SECONDS

DEFAULT_CONFIG_PATH = Path("~/.config/repopicker/config.toml").expanduser()
DEFAULT_LOG_LEVEL = "INFO"
MAX_TIMEOUT_SECONDS = 120.0
REGISTRY_URL_ENV = "REPOPICKER_REGISTRY_URL"


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    registry_url: str = DEFAULT_REGISTRY_URL
    request_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, le=MAX_TIMEOUT_SECONDS)
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str = ""
    trace_selection: bool = False
    preferences: dict[str, object] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return normalized

    @field_validator("registry_url")
    @classmethod
    def _validate_registry_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Registry URL must not be empty")
        return value.strip()


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _normalize_preferences(value: object) -> dict[str, object]:
    decoded: object = value
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError:
            return {}
    if not isinstance(decoded, dict):
        return {}
    return {key: item for key, item in decoded.items() if isinstance(key, str) and key.strip()}


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    registry_url = raw.get("registry_url", cfg.registry_url)
    if isinstance(registry_url, str) and registry_url.strip():
        cfg.registry_url = registry_url

    timeout = raw.get("request_timeout_seconds", cfg.request_timeout_seconds)
    if (
        isinstance(timeout, (int, float))
        and not isinstance(timeout, bool)
        and 0 < timeout <= MAX_TIMEOUT_SECONDS
    ):
        cfg.request_timeout_seconds = float(timeout)

    log_level = raw.get("log_level", cfg.log_level)
    if isinstance(log_level, str) and log_level.upper() in LOG_LEVELS:
        cfg.log_level = log_level

    log_file = raw.get("log_file", cfg.log_file)
    if isinstance(log_file, str):
        cfg.log_file = log_file.strip()

    trace_selection = raw.get("trace_selection", cfg.trace_selection)
    if isinstance(trace_selection, bool):
        cfg.trace_selection = trace_selection

    cfg.preferences = _normalize_preferences(raw.get("preferences", {}))
    return cfg


def registry_url_for(config: AppConfig, override: str | None = None) -> str:
    """Registry URL to fetch: CLI override, then environment, then config file."""
    if override and override.strip():
        return override.strip()
    env_url = os.getenv(REGISTRY_URL_ENV, "").strip()
    if env_url:
        return env_url
    return config.registry_url


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return AppConfig()
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return AppConfig()
    return _sanitize(cast(dict[str, object], raw))


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    preferences = _normalize_preferences(config.preferences)

    lines = [
        f"registry_url = {_toml_scalar(config.registry_url)}",
        f"request_timeout_seconds = {_toml_scalar(float(config.request_timeout_seconds))}",
        f"log_level = {_toml_scalar(config.log_level)}",
        f"log_file = {_toml_scalar(config.log_file)}",
        f"trace_selection = {_toml_scalar(config.trace_selection)}",
        f"preferences = {_toml_scalar(json.dumps(preferences, ensure_ascii=True, separators=(',', ':'), sort_keys=True))}",
    ]

    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
