"""
Engine configuration.

A YAML mapping whose keys mirror the fields of EngineConfig; anything
omitted keeps its default. Hot reload can be forced from the environment
with DTPL_RELOAD (1/true/yes/on or 0/false/no/off).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML

from .errors import DtplUserError

_yaml = YAML(typ="safe")

RELOAD_ENV = "DTPL_RELOAD"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(DtplUserError):
    """Invalid engine configuration file."""
    pass


@dataclass(frozen=True)
class EngineConfig:
    root_directory: str = ""
    charset: str = "utf-8"
    escape: bool = True
    cache_size: int = 1024
    reload_templates: bool = False
    preprocessor: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], source: str = "<config>") -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in raw if k not in known)
        if unknown:
            raise ConfigError(f"{source}: unknown option(s): {', '.join(unknown)}")

        cfg = cls()
        values: Dict[str, Any] = {}
        for key, value in raw.items():
            default = getattr(cfg, key)
            values[key] = _coerce(key, value, default, source)
        return replace(cfg, **values)


def _coerce(key: str, value: Any, default: Any, source: str) -> Any:
    if value is None:
        return default
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError(f"{source}: '{key}' must be a boolean")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"{source}: '{key}' must be a positive integer")
        return value
    return str(value)


def _env_flag(name: str) -> Optional[bool]:
    env = os.environ.get(name, None)
    if env is None or not env.strip():
        return None
    return env.strip().lower() in _TRUE_VALUES


def load_engine_config(path: Optional[Path] = None) -> EngineConfig:
    """
    Loads engine configuration.

    Args:
        path: YAML file; defaults are used when None or the file does not exist

    Returns:
        Configuration with the environment override applied

    Raises:
        ConfigError: If the document is not a mapping or has unknown options
    """
    raw: Dict[str, Any] = {}
    source = "<defaults>"
    if path is not None and path.is_file():
        source = str(path)
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{source}: configuration must be a YAML mapping")

    cfg = EngineConfig.from_dict(raw, source)

    reload_override = _env_flag(RELOAD_ENV)
    if reload_override is not None:
        cfg = replace(cfg, reload_templates=reload_override)
    return cfg


__all__ = ["EngineConfig", "ConfigError", "load_engine_config", "RELOAD_ENV"]
