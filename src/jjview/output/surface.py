"""Presentation surface — where rendered summary lines are displayed.

``Surface`` is the interface the summary view talks to. ``MemorySurface``
keeps buffers in memory; the CLI paints them with :mod:`jjview.output.terminal`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Protocol, Sequence

BufferHandle = int
DestroyCallback = Callable[[], None]


@dataclass
class BufferSpec:
    """What to create: a named buffer with key bindings."""

    name: str
    keymaps: Dict[str, str] = field(default_factory=dict)  # key -> action


@dataclass
class Window:
    """A view onto one buffer with a 1-based cursor line."""

    buffer: BufferHandle
    cursor: int = 1


class Surface(Protocol):
    def create(self, spec: BufferSpec) -> BufferHandle: ...

    def set_lines(self, handle: BufferHandle, lines: Sequence[str]) -> None: ...

    def get_cursor(self, window: Window) -> int: ...

    def set_cursor(self, window: Window, line: int) -> None: ...

    def on_destroy(self, handle: BufferHandle, callback: DestroyCallback) -> None: ...


class MemorySurface:
    """In-memory buffers, one list of lines per handle."""

    def __init__(self) -> None:
        self._next_handle: BufferHandle = 1
        self.specs: Dict[BufferHandle, BufferSpec] = {}
        self.buffers: Dict[BufferHandle, List[str]] = {}
        self._destroy_callbacks: Dict[BufferHandle, List[DestroyCallback]] = {}

    def create(self, spec: BufferSpec) -> BufferHandle:
        handle = self._next_handle
        self._next_handle += 1
        self.specs[handle] = spec
        self.buffers[handle] = []
        self._destroy_callbacks[handle] = []
        return handle

    def exists(self, handle: BufferHandle) -> bool:
        return handle in self.buffers

    def lines(self, handle: BufferHandle) -> List[str]:
        return list(self.buffers[handle])

    def set_lines(self, handle: BufferHandle, lines: Sequence[str]) -> None:
        if handle not in self.buffers:
            raise KeyError(f"no such buffer: {handle}")
        self.buffers[handle] = list(lines)

    def get_cursor(self, window: Window) -> int:
        return window.cursor

    def set_cursor(self, window: Window, line: int) -> None:
        total = len(self.buffers.get(window.buffer, []))
        window.cursor = max(1, min(line, total)) if total else 1

    def on_destroy(self, handle: BufferHandle, callback: DestroyCallback) -> None:
        self._destroy_callbacks.setdefault(handle, []).append(callback)

    def destroy(self, handle: BufferHandle) -> None:
        """Drop a buffer and fire its destroy callbacks."""
        callbacks = self._destroy_callbacks.pop(handle, [])
        self.buffers.pop(handle, None)
        self.specs.pop(handle, None)
        for callback in callbacks:
            callback()
