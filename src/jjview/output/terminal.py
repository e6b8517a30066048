"""Rich terminal painter for summary buffers and parsed status."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from jjview.jj.models import DiffCategory, StatusSummary

_CATEGORY_HEADER_RE = re.compile(
    r"^(%s) \(\d+\)$" % "|".join(c.label for c in DiffCategory)
)
_FILE_LINE_RE = re.compile(r"^[MADRC] ")

_SIGIL_STYLE = {
    "M": "yellow",
    "A": "green",
    "D": "red",
    "R": "cyan",
    "C": "cyan",
}


def style_line(line: str, *, in_diff: bool = False) -> Text:
    """Return *line* as styled Text.

    Diff body lines are only recognised when *in_diff* is set, so a file
    named ``+x`` is never mistaken for an added line.
    """
    if in_diff:
        if line.startswith("+++") or line.startswith("---"):
            return Text(line, style="bold")
        if line.startswith("@@"):
            return Text(line, style="magenta")
        if line.startswith("+"):
            return Text(line, style="green")
        if line.startswith("-"):
            return Text(line, style="red")
        if line.startswith("diff --git"):
            return Text(line, style="bold")
        return Text(line)
    if _CATEGORY_HEADER_RE.match(line):
        return Text(line, style="bold underline")
    if _FILE_LINE_RE.match(line):
        return Text(line, style=_SIGIL_STYLE.get(line[0], ""))
    if line.startswith("Help:"):
        return Text(line, style="dim")
    return Text(line)


def render_lines(
    console: Console,
    lines: Sequence[str],
    *,
    cursor: Optional[int] = None,
    number: bool = False,
) -> None:
    """Paint buffer *lines*; the 1-based *cursor* row gets a marker."""
    in_diff = False
    width = len(str(len(lines)))
    for idx, line in enumerate(lines, start=1):
        if not line:
            in_diff = False
        elif _FILE_LINE_RE.match(line) and not in_diff:
            text = style_line(line)
            in_diff = True
            _print_row(console, text, idx, cursor, number, width)
            continue

        text = style_line(line, in_diff=in_diff)
        _print_row(console, text, idx, cursor, number, width)


def _print_row(
    console: Console, text: Text, idx: int, cursor: Optional[int], number: bool, width: int
) -> None:
    row = Text()
    if number:
        row.append(f"{idx:>{width}} ", style="dim")
    if cursor is not None:
        row.append("> " if idx == cursor else "  ", style="bold")
    row.append_text(text)
    console.print(row, soft_wrap=True, highlight=False)


def render_status(console: Console, status: StatusSummary) -> None:
    """Print a parsed status as a table."""
    for label, change in (("Change ID", status.change_id), ("Parent Change", status.parent_change_id)):
        console.print(f"[bold]{label}:[/bold] {escape(change.id)} {escape(change.description or '')}")

    if status.is_empty:
        console.print("[dim]The working copy has no changes.[/dim]")
        return

    table = Table(show_lines=False, title_style="bold", border_style="dim")
    table.add_column("Status", justify="center", width=8)
    table.add_column("Path", style="magenta")
    for category in DiffCategory:
        for path in status.paths_for(category):
            table.add_row(Text(category.label, style=_SIGIL_STYLE[category.sigil]), Text(path))
    console.print(table)
