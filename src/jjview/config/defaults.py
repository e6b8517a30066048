"""Starter .jjview.toml template."""

DEFAULT_TOML = """\
# jjview configuration
version = "1.0"

[jj]
binary = "jj"
timeout = 30              # seconds per jj invocation
# status_args = ["status", "--color", "never"]
# diff_args = ["diff", "--git", "--color", "never"]

[summary]
help_key = "g?"
prune_stale = true        # drop files that no longer appear in `jj status`
# expand = ["src/main.py"]

[keymaps]
toggle = "t"
refresh = "r"
quit = "q"
up = "k"
down = "j"
"""
