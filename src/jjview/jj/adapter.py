"""jj subprocess wrapper.

Everything here degrades to ``(None, False)`` instead of raising, so callers
can treat a missing binary, a timeout and a failing command the same way:
no data available. ``get_repo_root`` is the one exception, used at CLI
startup where failing loudly is wanted.
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, Union

from jjview.logging import get_logger

logger = get_logger(__name__)

Command = Union[str, Sequence[str]]
CommandResult = Tuple[Optional[str], bool]


class JjError(Exception):
    """Raised when jj is unavailable or the directory is not a jj repo."""


class Runner(Protocol):
    """Callable shape the summary view uses to run jj."""

    def __call__(
        self,
        command: Command,
        error_message: Optional[str] = None,
        capture: bool = True,
    ) -> CommandResult: ...


def _to_args(command: Command) -> List[str]:
    if isinstance(command, str):
        return shlex.split(command)
    return list(command)


def execute_command(
    command: Command,
    error_message: Optional[str] = None,
    capture: bool = True,
    *,
    cwd: Optional[Path] = None,
    timeout: int = 30,
) -> CommandResult:
    """Run *command* and return ``(stdout, ok)``.

    With ``capture=False`` output goes straight to the terminal and the
    returned output is ``None``.
    """
    args = _to_args(command)
    context = error_message or "jj command failed"
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=capture,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        logger.warning("command_not_found", command=args, context=context)
        return None, False
    except subprocess.TimeoutExpired:
        logger.warning("command_timed_out", command=args, timeout=timeout, context=context)
        return None, False
    except OSError as exc:
        logger.warning("command_failed_to_start", command=args, error=str(exc), context=context)
        return None, False

    if result.returncode != 0:
        stderr = (result.stderr or "").strip() if capture else ""
        logger.warning(
            "command_failed",
            command=args,
            returncode=result.returncode,
            stderr=stderr,
            context=context,
        )
        return None, False

    return (result.stdout if capture else None), True


class JjRunner:
    """A Runner bound to one repository, binary and timeout."""

    def __init__(
        self,
        cwd: Optional[Path] = None,
        *,
        binary: str = "jj",
        timeout: int = 30,
    ) -> None:
        self.cwd = cwd
        self.binary = binary
        self.timeout = timeout

    def __call__(
        self,
        command: Command,
        error_message: Optional[str] = None,
        capture: bool = True,
    ) -> CommandResult:
        args = _to_args(command)
        # Bare subcommands get the configured binary in front.
        if not args or args[0] not in (self.binary, "jj"):
            args.insert(0, self.binary)
        elif args[0] == "jj":
            args[0] = self.binary
        return execute_command(
            args, error_message, capture, cwd=self.cwd, timeout=self.timeout
        )


def ensure_jj(binary: str = "jj") -> bool:
    """Return True if *binary* resolves on PATH."""
    return shutil.which(binary) is not None


def get_repo_root(cwd: Optional[Path] = None, binary: str = "jj") -> Path:
    """Return the root of the jj repository containing *cwd*."""
    if not ensure_jj(binary):
        raise JjError(f"{binary} is not installed or not on PATH")
    out, ok = execute_command(
        [binary, "root"], "Not inside a jj repository", cwd=cwd or Path.cwd()
    )
    if not ok or not out or not out.strip():
        raise JjError("not inside a jj repository")
    return Path(out.strip())


def get_status_text(runner: Runner, status_args: Sequence[str]) -> Optional[str]:
    """Return raw `jj status` output, or None when unavailable."""
    out, ok = runner(list(status_args), "Failed to get status")
    return out if ok else None


def get_default_command(runner: Runner) -> Optional[str]:
    """Return the raw ``ui.default-command`` config value."""
    out, ok = runner(
        ["config", "get", "ui.default-command"], "Failed to read ui.default-command"
    )
    return out if ok else None


def get_log_text(runner: Runner, revset: Optional[str] = None) -> Optional[str]:
    """Return graph-style `jj log` output, optionally for *revset*."""
    args = ["log", "--color", "never"]
    if revset:
        args.extend(["-r", revset])
    out, ok = runner(args, "Failed to get log")
    return out if ok else None
