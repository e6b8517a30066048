"""jjview — a terminal browser for Jujutsu working-copy changes."""

__version__ = "0.1.0"
