"""CLI for filewatcher."""

import logging
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import StoreConfig
from .core import NoChanges
from .errors import WatcherError
from .ops import clear_snapshot, init_store, run_cycle


app = typer.Typer(
    help="""\
Detect which files in a directory changed since the last run, by content
hash. Changed paths are written to watcher/changed_files.txt.""",
    add_completion=False,
)

console = Console()

USAGE = """\
Welcome to the file watcher help menu!

Usage: watcher <directory_path>

Valid commands:
  help  - Shows this menu.
  init  - Generate the necessary directory structure for the tool.
  clear - Clears 'prev.json' in case it gets corrupted.
          Running the tool again will repopulate it.

Options for a scan:
  --recursive   Also scan subdirectories (default: top level only)
  -v, --verbose Show debug logging"""

COMMANDS = {"scan", "init", "clear", "help"}
ROOT_OPTIONS = {"-v", "--verbose", "--help"}


def _display(text: str) -> str:
    """Printable form of text that may carry undecodable filename bytes."""
    return text.encode("utf-8", "surrogatepass").decode("utf-8", "replace")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


@app.callback()
def _root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    _configure_logging(verbose)


@app.command()
def scan(
    directory: str = typer.Argument(..., help="Directory to check for changes"),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="Scan subdirectories too (also settable in config.yaml)"
    ),
):
    """Hash the directory's files and report what changed since the last run.

    Examples:
        watcher src              # same as `watcher scan src`
        watcher scan src --recursive
    """
    config = StoreConfig()
    try:
        # Without the flag, config.yaml decides
        result = run_cycle(directory, config=config, recursive=True if recursive else None)
    except WatcherError as e:
        console.print(f"[red]✗[/red] {escape(_display(str(e)))}", highlight=False)
        raise typer.Exit(1)

    for entry in result.report.skipped:
        console.print(f"[yellow]⚠[/yellow] Skipped {escape(_display(entry.path))}: {escape(entry.error)}", highlight=False)

    outcome = result.outcome
    if isinstance(outcome, NoChanges):
        console.print(f"No changes detected. '{config.changed_files_name}' cleared.")
        return

    console.print("[bold]Changed files:[/bold]")
    for path in outcome.paths:
        console.print(_display(path), markup=False, highlight=False, soft_wrap=True)
    console.print(f"\nFiles written to '{config.changed_files_path.as_posix()}'.", highlight=False)


@app.command()
def init():
    """Generate the necessary directory structure for the tool."""
    try:
        init_store()
    except WatcherError as e:
        console.print(f"[red]✗[/red] Error initializing watcher structure: {escape(_display(str(e)))}", highlight=False)
        raise typer.Exit(1)
    console.print("[green]✓[/green] Watcher initialized successfully!")


@app.command()
def clear():
    """Clear 'prev.json' in case it gets corrupted."""
    config = StoreConfig()
    try:
        clear_snapshot(config)
    except WatcherError as e:
        console.print(f"[red]✗[/red] Error cleaning '{config.snapshot_name}': {escape(_display(str(e)))}", highlight=False)
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] '{config.snapshot_name}' cleared successfully!")


@app.command("help")
def show_help():
    """Show the usage menu."""
    console.print(USAGE, markup=False, highlight=False)


def normalize_args(args: List[str]) -> List[str]:
    """Treat a leading bare path as `scan <path>`.

    Root options (`-v`, `--help`) before the path stay in front; any other
    leading option belongs to `scan` and is moved after it, so
    `watcher -v --recursive src` becomes `watcher -v scan --recursive src`.
    """
    root, scan_opts = [], []
    for i, arg in enumerate(args):
        if arg.startswith("-"):
            (root if arg in ROOT_OPTIONS else scan_opts).append(arg)
            continue
        if arg in COMMANDS:
            return args
        return root + ["scan"] + scan_opts + args[i:]
    return args


def main(argv: Optional[List[str]] = None):
    """Entry point for CLI."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        console.print(USAGE, markup=False, highlight=False)
        raise SystemExit(1)
    app(args=normalize_args(args), prog_name="watcher")


if __name__ == "__main__":
    main()
