"""Summary view — status header plus expandable per-file diffs.

The rendered document is rebuilt from scratch on every refresh. The only
state that survives between refreshes is each category's files (with their
cached diffs) and which paths are expanded; line ranges are recomputed on
every pass and used for hit-testing the cursor on the next toggle.
"""

from __future__ import annotations

import threading
from typing import List, Optional, Sequence

from jjview.config.schema import JjViewConfig
from jjview.jj.adapter import Runner, get_status_text
from jjview.jj.models import ChangeIdentity, DiffCategory, StatusSummary
from jjview.jj.status_parser import parse_file_info, parse_status
from jjview.logging import get_logger
from jjview.output.surface import BufferHandle, BufferSpec, Surface, Window
from jjview.summary.model import DiffCategoryState, DiffFile, RenderedDocument, SummaryModel

logger = get_logger(__name__)

BUFFER_NAME = "jujutsu:///SUMMARY"


def format_change_id(label: str, change: ChangeIdentity) -> str:
    if change.description:
        return f"{label}: {change.id} {change.description}"
    return change.id


def _fileset(path: str) -> str:
    """Quote *path* as an exact-file jj fileset."""
    escaped = path.replace("\\", "\\\\").replace('"', '\\"')
    return f'file:"{escaped}"'


class SummaryView:
    """One summary buffer and the diff state behind it.

    Usage::

        view = SummaryView(runner, surface, config)
        view.open()
        view.toggle_at(window)
    """

    def __init__(self, runner: Runner, surface: Surface, config: Optional[JjViewConfig] = None) -> None:
        self.runner = runner
        self.surface = surface
        self.config = config or JjViewConfig()
        self.model = SummaryModel()
        self.buffer: Optional[BufferHandle] = None
        self.document = RenderedDocument()
        self._lock = threading.RLock()

    # ---- lifecycle ----

    @property
    def initialized(self) -> bool:
        return bool(self.model.categories)

    def initialize(self) -> None:
        """Create empty category states. No-op if already initialised."""
        if self.initialized:
            return
        self.model.categories = {c: DiffCategoryState(category=c) for c in DiffCategory}

    def open(self, window: Optional[Window] = None) -> Optional[BufferHandle]:
        """Ensure the buffer exists and render it once.

        Returns the buffer handle, or None if jj status was unavailable.
        """
        with self._lock:
            self.initialize()
            self._ensure_buffer()
            if not self.refresh(window):
                return None
            return self.buffer

    def teardown(self) -> None:
        """Forget all file and expansion state, and the buffer."""
        with self._lock:
            for state in self.model:
                state.clear()
            self.model = SummaryModel()
            self.buffer = None
            self.document = RenderedDocument()

    def _ensure_buffer(self) -> BufferHandle:
        if self.buffer is None:
            keymaps = {
                self.config.summary.help_key: "help",
                self.config.keymaps.toggle: "toggle",
                self.config.keymaps.refresh: "refresh",
                self.config.keymaps.quit: "quit",
            }
            self.buffer = self.surface.create(BufferSpec(name=BUFFER_NAME, keymaps=keymaps))
            self.surface.on_destroy(self.buffer, self.teardown)
        return self.buffer

    # ---- refresh ----

    def refresh(self, window: Optional[Window] = None, cursor: Optional[int] = None) -> bool:
        """Re-read jj status and redraw the buffer.

        Returns False, leaving all state untouched, when status is unavailable.
        """
        with self._lock:
            status = parse_status(get_status_text(self.runner, self.config.jj.status_args))
            if status is None:
                logger.debug("refresh_skipped", reason="no status output")
                return False

            self.initialize()
            buffer = self._ensure_buffer()
            self.model.status = status

            doc = RenderedDocument()
            doc.append(format_change_id("Change ID", status.change_id))
            doc.append(format_change_id("Parent Change", status.parent_change_id))
            doc.append(f"Help: {self.config.summary.help_key}")
            doc.append("")

            for state in self.model:
                self._sync_category(state, status)
                self._render_category(doc, state)

            self.document = doc
            self.surface.set_lines(buffer, doc.lines)
            if window is not None and cursor is not None:
                self.surface.set_cursor(window, cursor)

            logger.debug("summary_refreshed", lines=doc.last_line, cursor=cursor)
            return True

    def _sync_category(self, state: DiffCategoryState, status: StatusSummary) -> None:
        paths = status.paths_for(state.category)
        if self.config.summary.prune_stale:
            dropped = state.prune(set(paths))
            if dropped:
                logger.debug("pruned_stale_files", category=state.category.label, paths=dropped)

        for path in paths:
            expanded = path in state.expanded_paths
            existing = state.files.get(path)
            if existing is None:
                state.files[path] = DiffFile(
                    path=path,
                    diff_lines=self._fetch_diff(state.category, path),
                    expanded=expanded,
                )
            else:
                existing.expanded = expanded

    def _fetch_diff(self, category: DiffCategory, path: str) -> List[str]:
        """Fetch the diff for *path*; an empty list when unavailable."""
        target = path
        if category in (DiffCategory.RENAMED, DiffCategory.COPIED):
            info = parse_file_info(f"{category.sigil} {path}")
            if info is not None:
                target = info.new_path

        command = [*self.config.jj.diff_args, _fileset(target)]
        out, ok = self.runner(command, f"Failed to get diff for {target}")
        if not ok or out is None:
            logger.debug("diff_unavailable", path=path)
            return []
        return out.splitlines()

    @staticmethod
    def _render_category(doc: RenderedDocument, state: DiffCategoryState) -> None:
        state.start_line = None
        state.end_line = None
        files = state.ordered_files()
        if not files:
            return

        state.start_line = doc.append(f"{state.category.label} ({len(files)})")
        for diff_file in files:
            diff_file.start_line = doc.append(f"{state.category.sigil} {diff_file.path}")
            if diff_file.expanded:
                doc.extend(diff_file.diff_lines)
            diff_file.end_line = doc.last_line
            doc.append("")
        state.end_line = doc.last_line
        doc.append("")

    # ---- interaction ----

    def toggle_at(self, window: Window) -> bool:
        """Expand or collapse the file under the cursor.

        Returns False if the cursor is not on a file block, or if status
        could not be read (the expansion state is then left as it was).
        """
        with self._lock:
            line = self.surface.get_cursor(window)
            hit = self.model.find_file_at(line)
            if hit is None:
                return False

            state, diff_file = hit
            collapsing = diff_file.path in state.expanded_paths
            target = diff_file.start_line if collapsing else None
            state.set_expanded(diff_file.path, not collapsing)
            if not self.refresh(window, target):
                state.set_expanded(diff_file.path, collapsing)
                return False
            return True

    toggle_at_cursor = toggle_at

    def set_expanded(self, paths: Sequence[str], expanded: bool = True) -> List[str]:
        """Mark known *paths* expanded (or collapsed) without redrawing.

        Returns the paths that were found.
        """
        found: List[str] = []
        with self._lock:
            for path in paths:
                hit = self.model.find_file(path)
                if hit is None:
                    continue
                state, _ = hit
                state.set_expanded(path, expanded)
                found.append(path)
        return found

    def lines(self) -> List[str]:
        return list(self.document.lines)
