#!/usr/bin/env python3
"""
Main CLI entry point for dired
"""

from pathlib import Path
from typing import Optional

import typer

from dired import __version__
from dired.commands.browse import app as browse_app
from dired.error_handling import setup_logging


def version():
    """Show dired version"""
    typer.echo(f"dired version {__version__}")


def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", envvar="DIRED_LOG_FILE", help="Write detailed logs here"
    ),
):
    """
    dired - browse directories as text

    A directory is rendered as one line per entry. Point at a line to enter
    it, or rename, copy and create entries relative to it.

    [bold]Examples:[/bold]

    List with line numbers:
        [cyan]dired ls --numbers[/cyan]

    Rename the entry on line 4:
        [cyan]dired rename 4 notes.txt[/cyan]

    Browse interactively:
        [cyan]dired browse ~/projects[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(rich_markup_mode="rich", no_args_is_help=True)
    app.callback()(main)
    for command in browse_app.registered_commands:
        app.registered_commands.append(command)
    app.command()(version)
    return app


app = create_app()


def run():
    """Console script entry point"""
    app()


if __name__ == "__main__":
    run()
