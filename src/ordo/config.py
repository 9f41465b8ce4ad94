"""Prompt settings: a JSON file in the config dir, overridden by ORDO_* env vars."""

import json
import os
from pathlib import Path
from typing import Any

_config_cache: "Config | None" = None

HELP_MODES = ("auto", "always", "never")
OUTPUT_FORMATS = ("lines", "json")


class ConfigError(ValueError):
    """Raised when a setting is unknown or its value is out of range."""


def clear_config_cache() -> None:
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    """ORDO_CONFIG_DIR if set, else ~/.config/ordo."""
    config_dir = os.environ.get("ORDO_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "ordo"


class ConfigMeta:
    """Setting descriptions shown by ``ordo config``."""

    SETTINGS: dict[str, str] = {
        "page_size": "Choices visible at once (default: 7)",
        "loop": "Wrap cursor around the ends of the list",
        "help_mode": "Key help display (auto|always|never)",
        "output_format": "CLI output format (lines|json)",
    }


class Config:
    """Effective prompt settings.

    Precedence, lowest first: ``DEFAULTS``, ``config.json``, ``ORDO_*`` env vars.
    Only values set through :meth:`set` are written back to the file.
    """

    DEFAULTS: dict[str, Any] = {
        "page_size": 7,
        "loop": True,
        "help_mode": "auto",
        "output_format": "lines",
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_file = (config_dir or get_default_config_dir()) / "config.json"
        self._saved: dict[str, Any] = {}
        self._env: dict[str, Any] = {}

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Load settings. The default location is cached until cleared."""
        global _config_cache

        if config_dir is None and _config_cache is not None:
            return _config_cache

        config = cls(config_dir)
        config._saved = config._read_file()
        config._env = config._read_env()

        if config_dir is None:
            _config_cache = config
        return config

    def __getattr__(self, name: str) -> Any:
        if name not in self.DEFAULTS:
            raise AttributeError(f"Config has no attribute '{name}'")
        for layer in (self._env, self._saved):
            if name in layer:
                return layer[name]
        return self.DEFAULTS[name]

    def get(self, key: str) -> Any:
        """Effective value of ``key``; ConfigError if it isn't a setting."""
        if key not in self.DEFAULTS:
            raise ConfigError(f"Unknown setting '{key}'. Valid: {', '.join(self.DEFAULTS)}")
        return getattr(self, key)

    def items(self) -> list[tuple[str, Any, str]]:
        """Return (key, effective value, description) for every setting."""
        return [(key, getattr(self, key), desc) for key, desc in ConfigMeta.SETTINGS.items()]

    def set(self, key: str, value: Any) -> None:
        """Validate, coerce and persist a value."""
        self.get(key)
        if isinstance(value, str):
            value = _coerce(value, type(self.DEFAULTS[key]))
        check_value(key, value)
        self._saved[key] = value
        self._env.pop(key, None)
        self._config_file.parent.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self._saved, indent=2))

    def _read_file(self) -> dict[str, Any]:
        if not self._config_file.exists():
            return {}
        content = self._config_file.read_text()
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            # Rewritten on the next set()
            return {}
        return {key: data[key] for key in self.DEFAULTS if key in data}

    def _read_env(self) -> dict[str, Any]:
        return {
            key: _coerce(os.environ[f"ORDO_{key.upper()}"], type(default))
            for key, default in self.DEFAULTS.items()
            if f"ORDO_{key.upper()}" in os.environ
        }


def _coerce(value: str, target_type: type) -> Any:
    """Convert a string from the CLI or environment to ``target_type``."""
    if target_type is bool:
        return value.lower() in ("true", "1", "yes", "on")
    if target_type is int:
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"Expected an integer, got {value!r}")
    return value


def check_value(key: str, value: Any) -> None:
    """Raise ConfigError if ``value`` is not valid for ``key``."""
    if key == "page_size" and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
        raise ConfigError(f"page_size must be a positive integer, got {value!r}")
    if key == "help_mode" and value not in HELP_MODES:
        raise ConfigError(f"Invalid help_mode {value!r}. Valid: {', '.join(HELP_MODES)}")
    if key == "output_format" and value not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output_format {value!r}. Valid: {', '.join(OUTPUT_FORMATS)}"
        )
