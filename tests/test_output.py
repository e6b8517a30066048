"""Tests for the surfaces and the rich terminal painter."""

import io

import pytest
from rich.console import Console

from jjview.jj.status_parser import parse_status
from jjview.output.surface import BufferSpec, MemorySurface, Window
from jjview.output.terminal import render_lines, render_status, style_line


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestMemorySurface:
    def test_set_and_read_lines(self):
        surface = MemorySurface()
        handle = surface.create(BufferSpec(name="test"))
        surface.set_lines(handle, ["a", "b"])
        assert surface.lines(handle) == ["a", "b"]

    def test_set_lines_unknown_buffer(self):
        with pytest.raises(KeyError):
            MemorySurface().set_lines(99, ["x"])

    def test_cursor_clamped(self):
        surface = MemorySurface()
        handle = surface.create(BufferSpec(name="test"))
        surface.set_lines(handle, ["a", "b", "c"])
        window = Window(buffer=handle)
        surface.set_cursor(window, 10)
        assert surface.get_cursor(window) == 3
        surface.set_cursor(window, 0)
        assert surface.get_cursor(window) == 1

    def test_destroy_fires_callbacks(self):
        surface = MemorySurface()
        handle = surface.create(BufferSpec(name="test"))
        fired = []
        surface.on_destroy(handle, lambda: fired.append(handle))
        surface.destroy(handle)
        assert fired == [handle]
        assert not surface.exists(handle)


class TestStyleLine:
    def test_diff_lines(self):
        assert style_line("+added", in_diff=True).style == "green"
        assert style_line("-removed", in_diff=True).style == "red"
        assert style_line("@@ -1 +1 @@", in_diff=True).style == "magenta"

    def test_file_line_not_treated_as_diff(self):
        assert style_line("A +weird", in_diff=False).style == "green"
        assert style_line("D gone.txt").style == "red"

    def test_category_header(self):
        assert style_line("Modified (2)").style == "bold underline"


class TestRenderLines:
    def test_prints_every_line(self):
        console = _console()
        render_lines(console, ["Modified (1)", "M a.txt", "+x", ""])
        output = console.file.getvalue()
        assert "Modified (1)" in output
        assert "M a.txt" in output
        assert "+x" in output

    def test_cursor_marker(self):
        console = _console()
        render_lines(console, ["one", "two"], cursor=2)
        rows = console.file.getvalue().splitlines()
        assert rows[0].startswith("  one")
        assert rows[1].startswith("> two")

    def test_line_numbers(self):
        console = _console()
        render_lines(console, ["one", "two"], number=True)
        rows = console.file.getvalue().splitlines()
        assert rows[0].startswith("1 one")


class TestRenderStatus:
    def test_table(self, sample_status):
        console = _console()
        render_status(console, parse_status(sample_status))
        output = console.file.getvalue()
        assert "wprqlrtr" in output
        assert "src/main.py" in output
        assert "Renamed" in output

    def test_clean(self, sample_status_clean):
        console = _console()
        render_status(console, parse_status(sample_status_clean))
        assert "no changes" in console.file.getvalue()
