"""
mkv-edit CLI - Main entry point using Typer.

Usage: `mkv-edit FILE [FILE ...]`. Each file's title and file-level tags are
opened in $EDITOR; saving and closing the editor writes them back with
mkvpropedit. Options only control logging.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.traceback import install

from .core.errors import MkvEditError
from .core.logging_util import setup_logging
from .core.sync import run

# Install a rich traceback handler for beautiful, readable exceptions
install(show_locals=False)

console = Console()

app = typer.Typer(
    name="mkv-edit",
    add_completion=False,
    pretty_exceptions_enable=False,  # Disable Typer's default handler to use Rich's
)


def _version_callback(value: bool):
    if value:
        from . import __version__

        console.print(f"mkv-edit v{__version__}")
        raise typer.Exit()


# A single command runs directly, so its help text lives on the command
@app.command(
    help="🎬 Edit the title and tags of Matroska files in your $EDITOR.",
    epilog="Requires mkvtoolnix (mkvinfo, mkvextract, mkvpropedit) on PATH.",
)
def main(
    files: Optional[List[Path]] = typer.Argument(
        None, help="Matroska files to edit, processed in order.", show_default=False
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the application version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(None, "--verbose", help="Enable DEBUG-level logging."),
    quiet: bool = typer.Option(
        None, "--quiet", help="Reduce logging to warnings and errors."
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Emit logs as JSON lines to stdout."
    ),
):
    setup_logging(json_logs=json_logs, verbose=bool(verbose), quiet=bool(quiet))
    try:
        results = run(files or [])
    except MkvEditError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]👋 Operation cancelled by user.[/yellow]")
        raise typer.Exit(130)
    for r in results:
        console.print(f"[green]✔[/green] {escape(str(r.path))}")


def cli():
    """Main entry point for the console script defined in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli()
