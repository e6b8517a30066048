"""jjview CLI — Typer application with summary, status, revs, default-command and init."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console

from jjview import __version__
from jjview.config.schema import JjViewConfig
from jjview.jj.adapter import JjRunner, Runner

app = typer.Typer(
    name="jjview",
    help="Browse Jujutsu working-copy changes from the terminal.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
out = Console(highlight=False)


def _resolve_repo_root(config: Optional[str] = None) -> Path:
    """Find the jj repo root, exit 2 on failure.

    The binary comes from the nearest .jjview.toml above the working
    directory (or *config*), with JJVIEW_JJ_BINARY taking precedence.
    """
    from jjview.config.loader import ConfigError, find_config_root, load_config
    from jjview.jj.adapter import JjError, get_repo_root

    cwd = Path.cwd()
    try:
        binary = load_config(find_config_root(cwd) or cwd, config).jj.binary
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    try:
        return get_repo_root(binary=binary)
    except JjError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _load(config: Optional[str]) -> Tuple[Path, JjViewConfig]:
    from jjview.config.loader import ConfigError, load_config

    repo_root = _resolve_repo_root(config)
    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return repo_root, cfg


def _make_runner(repo_root: Path, cfg: JjViewConfig) -> Runner:
    return JjRunner(repo_root, binary=cfg.jj.binary, timeout=cfg.jj.timeout)


# ── summary ───────────────────────────────────────────────────────────────────


@app.command()
def summary(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .jjview.toml"),
    expand: Optional[List[str]] = typer.Option(None, "--expand", "-e", help="Show the diff of PATH (repeatable)"),
    expand_all: bool = typer.Option(False, "--all", "-a", help="Show every diff"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Toggle diffs from a prompt"),
    number: bool = typer.Option(False, "--number", "-n", help="Show line numbers"),
) -> None:
    """Show the working-copy summary with expandable diffs."""
    from jjview.output.surface import MemorySurface, Window
    from jjview.output.terminal import render_lines
    from jjview.summary.view import SummaryView

    repo_root, cfg = _load(config)
    surface = MemorySurface()
    view = SummaryView(_make_runner(repo_root, cfg), surface, cfg)

    buffer = view.open()
    if buffer is None:
        console.print("[bold red]Error:[/bold red] could not read `jj status`")
        raise typer.Exit(code=1)

    wanted = list(cfg.summary.expand) + list(expand or [])
    if expand_all:
        wanted.extend(f.path for state in view.model for f in state.files.values())
    if wanted:
        missing = set(wanted) - set(view.set_expanded(wanted))
        for path in sorted(missing):
            console.print(f"[yellow]⚠[/yellow]  {path} is not in the working-copy changes")
        view.refresh()

    window = Window(buffer=buffer)
    if not interactive:
        render_lines(out, surface.lines(buffer), number=number)
        raise typer.Exit(code=0)

    _interactive_loop(view, surface, window, number=number)


def _interactive_loop(view, surface, window, *, number: bool) -> None:
    from jjview.output.terminal import render_lines

    keys = view.config.keymaps
    help_key = view.config.summary.help_key

    while surface.exists(window.buffer):
        render_lines(out, surface.lines(window.buffer), cursor=window.cursor, number=number)
        key = typer.prompt(
            f"[{keys.toggle}]oggle [{keys.refresh}]efresh [{keys.quit}]uit, or a line number",
            default="",
            show_default=False,
        ).strip()

        if key == keys.quit:
            surface.destroy(window.buffer)
        elif key == keys.toggle:
            view.toggle_at(window)
        elif key == keys.refresh:
            view.refresh(window, window.cursor)
        elif key == keys.up:
            surface.set_cursor(window, window.cursor - 1)
        elif key == keys.down:
            surface.set_cursor(window, window.cursor + 1)
        elif key.isdigit():
            surface.set_cursor(window, int(key))
        elif key == help_key:
            console.print(
                f"[dim]{keys.toggle}: toggle diff  {keys.refresh}: refresh  "
                f"{keys.up}/{keys.down}: move  {keys.quit}: quit[/dim]"
            )
        elif key:
            console.print(f"[yellow]Unknown key:[/yellow] {key}")


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .jjview.toml"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed status as JSON"),
) -> None:
    """Print the parsed `jj status`."""
    from jjview.jj.adapter import get_status_text
    from jjview.jj.status_parser import parse_status
    from jjview.output.terminal import render_status

    repo_root, cfg = _load(config)
    runner = _make_runner(repo_root, cfg)
    result = parse_status(get_status_text(runner, cfg.jj.status_args))
    if result is None:
        console.print("[bold red]Error:[/bold red] could not read `jj status`")
        raise typer.Exit(code=1)

    if as_json:
        print(json.dumps(asdict(result), indent=2))
    else:
        render_status(out, result)


# ── revs ──────────────────────────────────────────────────────────────────────


@app.command()
def revs(
    revset: Optional[str] = typer.Argument(None, help="Revset to log (default: jj's own)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .jjview.toml"),
) -> None:
    """List the revision ids shown by `jj log`, one per line."""
    from jjview.jj.adapter import get_log_text
    from jjview.jj.status_parser import get_rev_from_log_line

    repo_root, cfg = _load(config)
    text = get_log_text(_make_runner(repo_root, cfg), revset)
    if text is None:
        console.print("[bold red]Error:[/bold red] could not read `jj log`")
        raise typer.Exit(code=1)

    for line in text.splitlines():
        rev = get_rev_from_log_line(line)
        if rev:
            print(rev)


# ── default-command ───────────────────────────────────────────────────────────


@app.command("default-command")
def default_command(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .jjview.toml"),
) -> None:
    """Print jj's ui.default-command as arguments, one per line."""
    from jjview.jj.adapter import get_default_command
    from jjview.jj.status_parser import parse_default_command

    repo_root, cfg = _load(config)
    args = parse_default_command(get_default_command(_make_runner(repo_root, cfg)))
    if not args:
        console.print("[dim]ui.default-command is not set.[/dim]")
        raise typer.Exit(code=1)
    for arg in args:
        print(arg)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .jjview.toml in the repo root."""
    from jjview.config.defaults import DEFAULT_TOML
    from jjview.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"jjview {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """jjview — a Jujutsu working-copy browser."""
    import logging

    from jjview.logging import configure_logging

    configure_logging(level=logging.DEBUG if verbose else None)
