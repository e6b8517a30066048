"""Load and merge configuration from .jjview.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from jjview.config.schema import JjConfig, JjViewConfig, KeymapConfig, SummaryConfig

CONFIG_FILENAME = ".jjview.toml"

_TRUE_VALUES = ("1", "true", "yes")
_FALSE_VALUES = ("0", "false", "no")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def find_config_root(start: Path) -> Optional[Path]:
    """Return the nearest directory at or above *start* holding a config file."""
    for directory in (start, *start.parents):
        if (directory / CONFIG_FILENAME).is_file():
            return directory
    return None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: JjViewConfig) -> None:
    """Apply JJVIEW_* environment variable overrides."""
    if val := os.environ.get("JJVIEW_JJ_BINARY"):
        cfg.jj.binary = val
    if val := os.environ.get("JJVIEW_TIMEOUT"):
        try:
            cfg.jj.timeout = int(val)
        except ValueError:
            pass
    if val := os.environ.get("JJVIEW_PRUNE_STALE"):
        if val.lower() in _TRUE_VALUES:
            cfg.summary.prune_stale = True
        elif val.lower() in _FALSE_VALUES:
            cfg.summary.prune_stale = False


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> JjViewConfig:
    """Load and return a JjViewConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = JjViewConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = JjViewConfig(
            version=raw.get("version", "1.0"),
            jj=_build_section(raw, JjConfig, "jj"),
            summary=_build_section(raw, SummaryConfig, "summary"),
            keymaps=_build_section(raw, KeymapConfig, "keymaps"),
        )

    _merge_env_overrides(cfg)
    return cfg
