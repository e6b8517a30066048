"""Presentation — buffer surfaces and the rich terminal painter."""

from jjview.output.surface import BufferSpec, MemorySurface, Surface, Window

__all__ = ["BufferSpec", "MemorySurface", "Surface", "Window"]
