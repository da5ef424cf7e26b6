"""
Layered settings for zakatkit.

Sources, lowest to highest precedence:
    1. Built-in defaults (rate, reminder offsets, revaluation period, ...)
    2. A YAML or JSON settings file
    3. Environment variables: ZAKATKIT_PRICES__GOLD_PER_GRAM=92.5

Environment values are parsed as YAML scalars, so numbers, booleans and
``null`` arrive typed; anything else stays a string.

Usage:
    config = Config(config_file="zakatkit.yaml")
    config.get("zakat.rate_percent")        # 2.5
    config.section("reminders")             # {"hawl_days_before": 7, ...}
"""

import copy
import json
import os
from typing import Any

import yaml

from .exceptions import ConfigurationError
from .types import ConfigDict, PathLike

ENV_PREFIX = "ZAKATKIT_"
ENV_NESTING = "__"

DEFAULTS: ConfigDict = {
    "zakat": {
        "rate_percent": 2.5,
    },
    "reminders": {
        "hawl_days_before": 7,
        "pre_ramadan_days_before": 14,
        "recurring_count": 4,
    },
    "assets": {
        "property_revaluation_days": 365,
    },
    "prices": {
        "gold_per_gram": None,
        "silver_per_gram": None,
    },
    "user": {
        "currency": "USD",
        "nisab_method": "GOLD",
    },
    "logging": {
        "level": "WARNING",
        "file": None,
        "rotation": "10 MB",
        "retention": "7 days",
    },
}

_LOADERS = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


class Config:
    """Merged view over defaults, a settings file and the environment.

    Missing keys read as the caller's default; a settings file that is
    missing, unreadable or not a mapping raises ``ConfigurationError``.
    """

    def __init__(
        self,
        config_file: PathLike | None = None,
        env_prefix: str = ENV_PREFIX,
        defaults: ConfigDict | None = None,
    ):
        """
        Args:
            config_file: YAML (.yaml/.yml) or JSON settings file.
            env_prefix: Prefix of environment overrides; empty disables them.
            defaults: Extra defaults layered over the built-in ones.
        """
        self.config_file = config_file
        self.env_prefix = env_prefix or ""

        self.config_data: ConfigDict = copy.deepcopy(DEFAULTS)
        if defaults:
            _merge(self.config_data, defaults)
        if config_file:
            _merge(self.config_data, read_settings_file(config_file))
        if self.env_prefix:
            _merge(self.config_data, self._env_overrides())

    def _env_overrides(self) -> ConfigDict:
        overrides: ConfigDict = {}
        for name, raw in os.environ.items():
            if not name.startswith(self.env_prefix):
                continue
            path = name[len(self.env_prefix) :].lower().split(ENV_NESTING)
            _walk(overrides, path[:-1], create=True)[path[-1]] = _parse_env_value(raw)
        return overrides

    def get(self, key_path: str, default: Any = None) -> Any:
        """Value at a dot path such as ``"prices.gold_per_gram"``, or ``default``."""
        *parents, leaf = key_path.split(".")
        node = _walk(self.config_data, parents)
        if node is None or leaf not in node:
            return default
        return node[leaf]

    def set(self, key_path: str, value: Any) -> None:
        """Set a dot-path value, creating missing sections."""
        *parents, leaf = key_path.split(".")
        _walk(self.config_data, parents, create=True)[leaf] = value

    def section(self, name: str) -> ConfigDict:
        """Copy of one top-level section; empty when absent."""
        value = self.config_data.get(name)
        return dict(value) if isinstance(value, dict) else {}

    def to_dict(self) -> ConfigDict:
        return copy.deepcopy(self.config_data)


def read_settings_file(path: PathLike) -> ConfigDict:
    """Load a YAML or JSON settings file that holds a mapping."""
    if not os.path.exists(path):
        raise ConfigurationError(f"Config file not found: {path}")
    ext = os.path.splitext(str(path))[1].lower()
    loader = _LOADERS.get(ext)
    if loader is None:
        raise ConfigurationError(f"Unsupported config file type: {ext or path}")
    try:
        with open(path) as f:
            data = loader(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    return data


def _parse_env_value(raw: str) -> Any:
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    # Only scalars; "[1, 2]" or "a: b" stay literal strings
    if isinstance(value, (dict, list)):
        return raw
    return value


def _walk(node: ConfigDict, path: list[str], create: bool = False) -> ConfigDict | None:
    for part in path:
        child = node.get(part)
        if not isinstance(child, dict):
            if not create:
                return None
            child = node[part] = {}
        node = child
    return node


def _merge(target: ConfigDict, source: ConfigDict) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = value


_config_instance: Config | None = None


def get_config(config_file: PathLike | None = None, env_prefix: str = ENV_PREFIX) -> Config:
    """Process-wide Config, created on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(config_file=config_file, env_prefix=env_prefix)
    return _config_instance


def reset_config() -> None:
    """Drop the process-wide Config (tests call this between cases)."""
    global _config_instance
    _config_instance = None
