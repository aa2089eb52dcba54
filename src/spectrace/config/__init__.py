"""
spectrace.config - Configuration loading and defaults.

Configuration lives in ``.spectrace.toml`` (found by walking up from the
working directory to the git root). A sibling ``.spectrace.local.toml`` is
deep-merged on top, then ``SPECTRACE_<SECTION>_<KEY>`` environment
variables are applied.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from spectrace.config.defaults import DEFAULT_CONFIG

CONFIG_FILENAME = ".spectrace.toml"
LOCAL_CONFIG_FILENAME = ".spectrace.local.toml"
ENV_PREFIX = "SPECTRACE_"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""


class ConfigLoader:
    """Read-only view over a configuration dict with dotted-key access."""

    def __init__(self, data: dict[str, Any], path: Path | None = None):
        self._data = data
        self.path = path

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> "ConfigLoader":
        return cls(data, path=path)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``traceability.directories.tasks``."""
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Look up a boolean; any other type raises ConfigError."""
        value = self.get(key, default)
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false, got {value!r}")
        return value

    def section(self, name: str) -> dict[str, Any]:
        value = self.get(name, {})
        return value if isinstance(value, dict) else {}

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python containers."""
    try:
        return tomlkit.parse(content).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested tables merge key by key; any other value in ``override``
    replaces the base value outright (lists are not concatenated).
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _read_toml_file(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        return parse_toml(content)
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e


def _try_parse_env_value(value: str) -> Any:
    """Convert an environment string to a typed value.

    JSON arrays/objects and true/false are parsed; malformed JSON and
    everything else is returned unchanged.
    """
    stripped = value.strip()
    if stripped.lower() == "true":
        return True
    if stripped.lower() == "false":
        return False
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply ``SPECTRACE_<SECTION>_<KEY>`` variables to ``config`` in place.

    The first underscore-separated part names the section; the remainder,
    lowercased, is the key (``SPECTRACE_TRACEABILITY_SPECS_PATH`` sets
    ``traceability.specs_path``).
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX):].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = _try_parse_env_value(raw)
    return config


def find_git_root(start: Path | None = None) -> Path | None:
    """Find the enclosing git root; a ``.git`` file (worktree) also counts."""
    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents]:
        if (candidate / ".git").exists():
            return candidate
    return None


def find_config_file(start: Path | None = None) -> Path | None:
    """Search upward for ``.spectrace.toml``, stopping at the git root."""
    current = (start or Path.cwd()).resolve()
    git_root = find_git_root(current)
    for candidate in [current, *current.parents]:
        config_path = candidate / CONFIG_FILENAME
        if config_path.is_file():
            return config_path
        if git_root is not None and candidate == git_root:
            break
    return None


def load_config(path: Path) -> ConfigLoader:
    """Load a config file over the defaults, plus its local override."""
    data = merge_configs(DEFAULT_CONFIG, _read_toml_file(path))
    local_path = path.parent / LOCAL_CONFIG_FILENAME
    if local_path.is_file():
        data = merge_configs(data, _read_toml_file(local_path))
    _apply_env_overrides(data)
    return ConfigLoader.from_dict(data, path=path)


def get_config(config_path: Path | None = None, start_path: Path | None = None) -> dict[str, Any]:
    """Return the effective configuration as a dict.

    An explicit ``config_path`` must exist; otherwise the file is
    discovered from ``start_path`` and defaults apply when none is found.
    """
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        return load_config(config_path).to_dict()

    found = find_config_file(start_path)
    if found is not None:
        return load_config(found).to_dict()

    data = copy.deepcopy(DEFAULT_CONFIG)
    _apply_env_overrides(data)
    return data


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigLoader",
    "DEFAULT_CONFIG",
    "LOCAL_CONFIG_FILENAME",
    "find_config_file",
    "find_git_root",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
]
