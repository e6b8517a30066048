"""Shared test fixtures — sample jj output and a call-counting fake runner."""

from __future__ import annotations

import shlex
import textwrap
from typing import Dict, List, Optional, Sequence, Set, Union

import pytest

from jjview.config.schema import JjViewConfig
from jjview.output.surface import MemorySurface
from jjview.summary.view import SummaryView


class FakeRunner:
    """Stands in for JjRunner; answers from canned output and records calls."""

    def __init__(
        self,
        status: Optional[str] = None,
        diffs: Optional[Dict[str, str]] = None,
        failing: Optional[Set[str]] = None,
        log: Optional[str] = None,
        default_command: Optional[str] = None,
    ) -> None:
        self.status = status
        self.diffs = diffs or {}
        self.failing = failing or set()
        self.log = log
        self.default_command = default_command
        self.calls: List[List[str]] = []

    def __call__(
        self,
        command: Union[str, Sequence[str]],
        error_message: Optional[str] = None,
        capture: bool = True,
    ):
        args = shlex.split(command) if isinstance(command, str) else list(command)
        self.calls.append(args)
        sub = args[0]
        if sub == "status":
            return self.status, self.status is not None
        if sub == "diff":
            path = _unquote_fileset(args[-1])
            if path in self.failing:
                return None, False
            return self.diffs.get(path, ""), True
        if sub == "log":
            return self.log, self.log is not None
        if sub == "config":
            return self.default_command, self.default_command is not None
        return None, False

    def diff_calls(self, path: Optional[str] = None) -> List[List[str]]:
        calls = [c for c in self.calls if c[0] == "diff"]
        if path is not None:
            calls = [c for c in calls if _unquote_fileset(c[-1]) == path]
        return calls

    def status_calls(self) -> List[List[str]]:
        return [c for c in self.calls if c[0] == "status"]


def _unquote_fileset(arg: str) -> str:
    assert arg.startswith('file:"') and arg.endswith('"'), arg
    return arg[len('file:"'):-1].replace('\\"', '"').replace("\\\\", "\\")


@pytest.fixture
def sample_status() -> str:
    """A `jj status` run with one file in every category."""
    return textwrap.dedent("""\
        Working copy changes:
        M src/main.py
        A new_file.txt
        D old.txt
        R docs/{guide.md => manual.md}
        C copy.txt
        Working copy  (@) : wprqlrtr 08b82958 gobbledee gook
        Parent commit (@-): xkwnsnzq 61b51c09 master | Fix race conditions generating sequencer sections
    """)


@pytest.fixture
def sample_status_clean() -> str:
    """A `jj status` run with no changes and no descriptions."""
    return textwrap.dedent("""\
        The working copy has no changes.
        Working copy  (@) : kkmpptxz 3f2a9c1e (empty) (no description set)
        Parent commit (@-): zzzzzzzz 00000000 (empty) (no description set)
    """)


@pytest.fixture
def main_py_diff() -> str:
    return textwrap.dedent("""\
        diff --git a/src/main.py b/src/main.py
        index 1111111..2222222 100644
        --- a/src/main.py
        +++ b/src/main.py
        @@ -1 +1 @@
        -print("old")
        +print("new")
    """)


@pytest.fixture
def sample_diffs(main_py_diff: str) -> Dict[str, str]:
    return {
        "src/main.py": main_py_diff,
        "new_file.txt": "diff --git a/new_file.txt b/new_file.txt\n+hello\n",
        "old.txt": "diff --git a/old.txt b/old.txt\n-bye\n",
        "docs/manual.md": "diff --git a/docs/guide.md b/docs/manual.md\n",
        "copy.txt": "diff --git a/copy.txt b/copy.txt\n",
    }


@pytest.fixture
def sample_log() -> str:
    return textwrap.dedent("""\
        @  wprqlrtr dev@example.com 2024-05-01 12:00:00 08b82958
        │  gobbledee gook
        ○  xkwnsnzq dev@example.com 2024-04-30 09:15:00 master 61b51c09
        │  Fix race conditions generating sequencer sections
        ◆  zzzzzzzz root() 00000000
    """)


@pytest.fixture
def fake_runner(sample_status: str, sample_diffs: Dict[str, str]) -> FakeRunner:
    return FakeRunner(status=sample_status, diffs=sample_diffs)


@pytest.fixture
def surface() -> MemorySurface:
    return MemorySurface()


@pytest.fixture
def view(fake_runner: FakeRunner, surface: MemorySurface) -> SummaryView:
    return SummaryView(fake_runner, surface, JjViewConfig())
