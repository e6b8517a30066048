"""State owned by the summary view: per-category diff files and expansion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from jjview.jj.models import DiffCategory, StatusSummary


@dataclass
class DiffFile:
    """One file in a category, with its cached diff.

    ``start_line``/``end_line`` are 1-based and inclusive, and only describe
    the most recent render.
    """

    path: str
    diff_lines: List[str] = field(default_factory=list)
    expanded: bool = False
    start_line: Optional[int] = None
    end_line: Optional[int] = None

    def contains(self, line: int) -> bool:
        if self.start_line is None or self.end_line is None:
            return False
        return self.start_line <= line <= self.end_line


@dataclass
class DiffCategoryState:
    """Files of one category plus which of them are expanded.

    ``expanded_paths`` is the source of truth; ``DiffFile.expanded`` mirrors it.
    """

    category: DiffCategory
    files: Dict[str, DiffFile] = field(default_factory=dict)
    expanded_paths: Set[str] = field(default_factory=set)
    start_line: Optional[int] = None
    end_line: Optional[int] = None

    def ordered_files(self) -> List[DiffFile]:
        return [self.files[path] for path in sorted(self.files)]

    def set_expanded(self, path: str, expanded: bool) -> None:
        if expanded:
            self.expanded_paths.add(path)
        else:
            self.expanded_paths.discard(path)
        if path in self.files:
            self.files[path].expanded = expanded

    def prune(self, keep: Set[str]) -> List[str]:
        """Drop files not in *keep*. Returns the dropped paths."""
        dropped = [path for path in self.files if path not in keep]
        for path in dropped:
            del self.files[path]
        self.expanded_paths &= keep
        return dropped

    def clear(self) -> None:
        self.files.clear()
        self.expanded_paths.clear()
        self.start_line = None
        self.end_line = None


@dataclass
class RenderedDocument:
    """Lines produced by one render pass."""

    lines: List[str] = field(default_factory=list)

    def append(self, line: str) -> int:
        """Append *line* and return its 1-based line number."""
        self.lines.append(line)
        return len(self.lines)

    def extend(self, lines: List[str]) -> int:
        self.lines.extend(lines)
        return len(self.lines)

    @property
    def last_line(self) -> int:
        return len(self.lines)


@dataclass
class SummaryModel:
    """The latest status snapshot plus the five persistent category states."""

    status: Optional[StatusSummary] = None
    categories: Dict[DiffCategory, DiffCategoryState] = field(default_factory=dict)

    def __iter__(self) -> Iterator[DiffCategoryState]:
        for category in DiffCategory:
            if category in self.categories:
                yield self.categories[category]

    def find_file_at(self, line: int) -> Optional[Tuple[DiffCategoryState, DiffFile]]:
        for state in self:
            for diff_file in state.files.values():
                if diff_file.contains(line):
                    return state, diff_file
        return None

    def find_file(self, path: str) -> Optional[Tuple[DiffCategoryState, DiffFile]]:
        for state in self:
            if path in state.files:
                return state, state.files[path]
        return None
