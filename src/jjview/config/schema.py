"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class JjConfig:
    binary: str = "jj"
    timeout: int = 30  # seconds per jj invocation
    status_args: List[str] = field(default_factory=lambda: ["status", "--color", "never"])
    diff_args: List[str] = field(default_factory=lambda: ["diff", "--git", "--color", "never"])


@dataclass
class SummaryConfig:
    help_key: str = "g?"
    prune_stale: bool = True  # drop entries whose path left the status output
    expand: List[str] = field(default_factory=list)  # paths expanded on open


@dataclass
class KeymapConfig:
    toggle: str = "t"
    refresh: str = "r"
    quit: str = "q"
    up: str = "k"
    down: str = "j"


@dataclass
class JjViewConfig:
    version: str = "1.0"
    jj: JjConfig = field(default_factory=JjConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    keymaps: KeymapConfig = field(default_factory=KeymapConfig)
