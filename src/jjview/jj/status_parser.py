"""Best-effort parsers for `jj` text output.

jj's human-readable output is not a versioned format, so nothing here is a
strict grammar. Each recognised line shape is a named rule below; lines that
match no rule are skipped rather than reported. Parsers return ``None`` (or
an empty list) when there is nothing to parse.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from jjview.jj.models import (
    ChangeIdentity,
    DiffCategory,
    FileInfo,
    StatusFile,
    StatusSummary,
)

# --- Status output rules ---

# Working copy  (@) : wprqlrtr 08b82958 [bookmarks |] description
_WORKING_COPY_RE = re.compile(
    r"Working copy\s+\(@\)\s*:\s*([A-Za-z0-9]+)\s+[A-Za-z0-9]+\s*(.*)"
)
# Parent commit (@-): xkwnsnzq 61b51c09 [bookmarks |] description
_PARENT_COMMIT_RE = re.compile(
    r"Parent commit\s+\(@-\)\s*:\s*([A-Za-z0-9]+)\s+[A-Za-z0-9]+\s*(.*)"
)
_FILE_STATUS_RE = re.compile(r"^([MADRC])\s+(.+)$")
_CATEGORY_BY_SIGIL = {c.sigil: c for c in DiffCategory}
_LINE_SPLIT_RE = re.compile(r"[\r\n]+")

# --- Rename / copy rules ---

# R src/{old.py => new.py}  or  R {a => b}/file.txt
_RENAME_BRACES_RE = re.compile(r"^([RC]) (.*)\{(.*) => ([^}]+)\}(.*)$")
# R old.py => new.py
_RENAME_SIMPLE_RE = re.compile(r"^([RC]) (.*) => (.+)$")
_PLAIN_STATUS_RE = re.compile(r"^[MADC?!] (.+)$")

# --- Config value rules ---

_TOML_ARRAY_RE = re.compile(r"\[(.*)\]", re.DOTALL)
_TOML_STRING_RE = re.compile(r'"([^"]+)"')

# --- Log graph rules ---

_GRAPH_PREFIX = (
    "│┃┆┇┊┋╭╮╰╯├┤┬┴┼─└┘┌┐"  # box drawing
    "◆○×"  # jj node symbols
    r"\s@*/\\\-+|"
)
_LOG_REV_RE = re.compile(rf"^[{_GRAPH_PREFIX}]+([A-Za-z0-9]+)(?:\s|$)")


def _split_lines(text: str) -> List[str]:
    return [line for line in _LINE_SPLIT_RE.split(text) if line]


def _description_from(rest: str) -> Optional[str]:
    """Return the description part of a header's trailing segment.

    Bookmarks, when present, are separated from the description by ``|``.
    """
    rest = rest.strip()
    if "|" in rest:
        rest = rest.rsplit("|", 1)[1].strip()
    return rest or None


def parse_status(status_output: Optional[str]) -> Optional[StatusSummary]:
    """Parse `jj status` output into a StatusSummary.

    Returns ``None`` for empty or missing input.
    """
    if not status_output:
        return None

    result = StatusSummary()

    for line in _split_lines(status_output):
        if (m := _WORKING_COPY_RE.search(line)):
            result.change_id = ChangeIdentity(m.group(1), _description_from(m.group(2)))

        if (m := _PARENT_COMMIT_RE.search(line)):
            result.parent_change_id = ChangeIdentity(m.group(1), _description_from(m.group(2)))

        if (m := _FILE_STATUS_RE.match(line)):
            result.paths_for(_CATEGORY_BY_SIGIL[m.group(1)]).append(m.group(2))

    return result


def get_status_files(status_output: Optional[str]) -> List[StatusFile]:
    """Return every ``<sigil> <path>`` entry in *status_output*, in order."""
    if not status_output:
        return []
    files: List[StatusFile] = []
    for line in _split_lines(status_output):
        m = _FILE_STATUS_RE.match(line)
        if m:
            files.append(StatusFile(status=m.group(1), path=m.group(2)))
    return files


def _expand_braces(prefix: str, old: str, new: str, suffix: str) -> Tuple[str, str]:
    old_path = f"{prefix}{old}{suffix}".replace("//", "/")
    new_path = f"{prefix}{new}{suffix}".replace("//", "/")
    return old_path, new_path


def parse_file_info(line: str) -> Optional[FileInfo]:
    """Resolve a status line to the path(s) it refers to.

    Handles ``R dir/{old => new}``, ``R old => new`` and plain
    ``M path`` style lines. Copies use the same shapes as renames but are
    not flagged as renames.
    """
    m = _RENAME_BRACES_RE.match(line)
    if m:
        old_path, new_path = _expand_braces(m.group(2), m.group(3), m.group(4), m.group(5))
        return FileInfo(old_path=old_path, new_path=new_path, is_rename=m.group(1) == "R")

    m = _RENAME_SIMPLE_RE.match(line)
    if m:
        return FileInfo(old_path=m.group(2), new_path=m.group(3), is_rename=m.group(1) == "R")

    m = _PLAIN_STATUS_RE.match(line)
    if m:
        return FileInfo(old_path=m.group(1), new_path=m.group(1))

    return None


def parse_default_command(cmd_output: Optional[str]) -> Optional[List[str]]:
    """Parse the value printed by ``jj config get ui.default-command``.

    The value is either a single (optionally quoted) string or a TOML array
    of strings.
    """
    if not cmd_output:
        return None

    trimmed = cmd_output.strip()
    if not trimmed:
        return None

    array = _TOML_ARRAY_RE.search(trimmed)
    if array:
        args = _TOML_STRING_RE.findall(array.group(1))
        return args or None

    if trimmed.startswith('"'):
        trimmed = trimmed[1:]
    if trimmed.endswith('"'):
        trimmed = trimmed[:-1]
    return [trimmed] if trimmed else None


def get_rev_from_log_line(line: str) -> Optional[str]:
    """Extract the revision id from one line of graph-style `jj log` output.

    The id is the first alphanumeric token after the graph prefix, and only
    counts when it ends at whitespace or end of line.
    """
    m = _LOG_REV_RE.match(line)
    return m.group(1) if m else None
