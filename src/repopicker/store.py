"""Key-value preference stores."""

from __future__ import annotations

import json
import logging as py_logging
from pathlib import Path
from typing import Any, Protocol

from repopicker.config import load_config, save_config
from repopicker.errors import ValidationError

logger = py_logging.getLogger(__name__)

REPO_KEY = "selectedRepository"


class PreferenceStore(Protocol):
    def get(self, key: str, default: Any) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


def _to_json(key: str, value: object) -> str:
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Preference {key!r} is not JSON serializable.",
            hint="Store plain dicts, lists, strings, numbers or booleans.",
        ) from exc


class MemoryPreferenceStore:
    """In-process store that keeps values as JSON text."""

    def __init__(self, initial: dict[str, object] | None = None) -> None:
        self._values: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any) -> Any:
        raw = self._values.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = _to_json(key, value)


class ConfigPreferenceStore:
    """Store backed by the ``preferences`` table of the config file."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = path

    def get(self, key: str, default: Any) -> Any:
        return load_config(self.path).preferences.get(key, default)

    def set(self, key: str, value: Any) -> None:
        _to_json(key, value)
        config = load_config(self.path)
        preferences = dict(config.preferences)
        preferences[key] = value
        config.preferences = preferences
        saved = save_config(config, self.path)
        logger.debug("Persisted preference key=%s path=%s", key, saved)
