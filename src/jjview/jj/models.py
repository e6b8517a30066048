"""Data models for parsed jj output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DiffCategory(Enum):
    """File status categories, in rendering order."""

    MODIFIED = ("M", "Modified")
    ADDED = ("A", "Added")
    DELETED = ("D", "Deleted")
    RENAMED = ("R", "Renamed")
    COPIED = ("C", "Copied")

    def __init__(self, sigil: str, label: str) -> None:
        self.sigil = sigil
        self.label = label


@dataclass
class ChangeIdentity:
    """A change id plus the first line of its description."""

    id: str
    description: Optional[str] = None


@dataclass
class StatusSummary:
    """Structured form of one `jj status` run."""

    change_id: ChangeIdentity = field(default_factory=lambda: ChangeIdentity("@"))
    parent_change_id: ChangeIdentity = field(default_factory=lambda: ChangeIdentity("@-"))
    modified: List[str] = field(default_factory=list)
    added: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    renamed: List[str] = field(default_factory=list)
    copied: List[str] = field(default_factory=list)

    def paths_for(self, category: DiffCategory) -> List[str]:
        return getattr(self, category.name.lower())

    @property
    def is_empty(self) -> bool:
        return not any(self.paths_for(c) for c in DiffCategory)


@dataclass(frozen=True)
class StatusFile:
    """A single `<sigil> <path>` entry from status output."""

    status: str
    path: str


@dataclass(frozen=True)
class FileInfo:
    """Paths referenced by one status line."""

    old_path: str
    new_path: str
    is_rename: bool = False
