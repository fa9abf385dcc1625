"""Settings for a single prompt render, optionally loaded from YAML."""

from __future__ import annotations

import dataclasses
import os
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from gitprompt.core.formatter import DEFAULT_DIRTY_MARKER, DEFAULT_TEMPLATE

CONFIG_ENV = "GITPROMPT_CONFIG"
DEFAULT_TIMEOUT_MS = 100
DEFAULT_HASH_LENGTH = 12

# YAML key -> Settings attribute
_KEYS = {
    "dir": "repo_dir",
    "timeout": "timeout_ms",
    "format": "template",
    "git": "git_binary",
    "hash_length": "hash_length",
    "dirty_marker": "dirty_marker",
}


class ConfigError(ValueError):
    """Raised for a settings file that cannot be used."""


@dataclass(frozen=True)
class Settings:
    repo_dir: pathlib.Path = dataclasses.field(default_factory=pathlib.Path.cwd)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    template: str = DEFAULT_TEMPLATE
    git_binary: str = "git"
    hash_length: int = DEFAULT_HASH_LENGTH
    dirty_marker: str = DEFAULT_DIRTY_MARKER

    @property
    def timeout_seconds(self) -> Optional[float]:
        if self.timeout_ms <= 0:
            return None
        return self.timeout_ms / 1000.0

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-``None`` override applied."""

        values = {key: value for key, value in overrides.items() if value is not None}
        if "repo_dir" in values:
            values["repo_dir"] = pathlib.Path(values["repo_dir"])
        return _validated(dataclasses.replace(self, **values))


def default_config_path() -> Optional[pathlib.Path]:
    value = os.environ.get(CONFIG_ENV)
    return pathlib.Path(value).expanduser() if value else None


def load_settings(path: Optional[pathlib.Path] = None) -> Settings:
    if path is None or not path.exists():
        return Settings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    values: Dict[str, Any] = {}
    for key, attr in _KEYS.items():
        if data.get(key) is not None:
            values[attr] = data[key]
    for attr in ("timeout_ms", "hash_length"):
        if attr in values:
            values[attr] = _as_int(path, attr, values[attr])
    for attr in ("template", "git_binary", "dirty_marker"):
        if attr in values:
            values[attr] = str(values[attr])
    if "repo_dir" in values:
        repo_dir = pathlib.Path(str(values["repo_dir"])).expanduser()
        values["repo_dir"] = repo_dir if repo_dir.is_absolute() else path.parent / repo_dir
    return _validated(Settings(**values))


def _as_int(path: pathlib.Path, attr: str, value: object) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{path}: {attr} must be an integer")
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{path}: {attr} must be an integer") from exc


def _validated(settings: Settings) -> Settings:
    if settings.timeout_ms < 0:
        raise ConfigError("timeout must not be negative")
    if settings.hash_length < 4:
        raise ConfigError("hash_length must be at least 4")
    return settings
