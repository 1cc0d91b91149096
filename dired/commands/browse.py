"""
Listing and file operation commands for dired
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.text import Text

from dired import exceptions as errors
from dired.config.settings import DiredSettings, SortOrder, load_settings
from dired.error_handling import handle_error, warn_user
from dired.models.listing import Listing
from dired.services.navigator import Navigator
from dired.utils.output import console
from dired.utils.paths import directory_for

app = typer.Typer()


def _settings(
    long_format: Optional[bool] = None,
    sort: Optional[str] = None,
    show_hidden: Optional[bool] = None,
    fixed_window: Optional[bool] = None,
) -> DiredSettings:
    """Stored settings with command-line flags applied on top."""
    settings = load_settings()
    changes = {}
    if long_format is not None:
        changes["long_format"] = long_format
    if sort is not None:
        try:
            changes["sort_order"] = SortOrder(sort)
        except ValueError as e:
            valid = ", ".join(o.value for o in SortOrder)
            raise errors.ConfigurationError(
                f"Unknown sort order '{sort}'. Valid values: {valid}", setting="sort_order"
            ) from e
    if show_hidden is not None:
        changes["show_hidden"] = show_hidden
    if fixed_window is not None:
        changes["fixed_window"] = fixed_window
    return replace(settings, **changes) if changes else settings


def _open(path: Optional[Path], settings: DiredSettings) -> Navigator:
    navigator = Navigator(settings)
    navigator.open(directory_for(path))
    return navigator


def format_listing(listing: Listing, numbers: bool = False) -> Text:
    """Rich text for a listing: bold header, blue directories."""
    width = len(str(listing.line_count - 1))
    text = Text()
    lines = listing.render().split("\n")
    for line_number, line in enumerate(lines):
        if numbers:
            text.append(f"{line_number:>{width}} ", style="dim")
        entry = listing.entry_at_line(line_number)
        if entry is None:
            text.append(line, style="bold")
        elif entry.is_directory:
            text.append(line, style="blue")
        else:
            text.append(line)
        if line_number < len(lines) - 1:
            text.append("\n")
    return text


@app.command()
def ls(
    path: Optional[Path] = typer.Argument(None, help="Directory to list (a file lists its directory)"),
    long_format: Optional[bool] = typer.Option(
        None, "--long/--short", "-l", help="Show mode, size and modification time"
    ),
    numbers: bool = typer.Option(False, "--numbers", "-n", help="Prefix line numbers"),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="dirs-first, name or native"),
    show_hidden: Optional[bool] = typer.Option(
        None, "--all/--no-hidden", "-a", help="Show or hide dot-files"
    ),
):
    """List a directory the way the browser renders it"""
    try:
        if path is not None and path.is_file():
            warn_user(f"{path} is a file; listing its directory")
        navigator = _open(path, _settings(long_format, sort, show_hidden))
        console.print(format_listing(navigator.current_listing, numbers), highlight=False, soft_wrap=True)
    except errors.DiredError as e:
        handle_error(e, "list directory")


@app.command()
def mkdir(
    name: str = typer.Argument(..., help="Name of the new directory"),
    directory: Optional[Path] = typer.Option(None, "--dir", "-d", help="Parent directory"),
):
    """Create a directory"""
    try:
        navigator = _open(directory, _settings())
        created = navigator.create_directory(name)
        console.print(f"[green]Created[/green] {escape(str(created))}")
    except errors.DiredError as e:
        handle_error(e, "create directory")


@app.command()
def rename(
    line: int = typer.Argument(..., help="Line number as shown by 'ls --numbers'"),
    new_name: str = typer.Argument(..., help="New name, relative to the directory"),
    directory: Optional[Path] = typer.Option(None, "--dir", "-d", help="Directory to work in"),
):
    """Rename the entry on a listing line"""
    try:
        navigator = _open(directory, _settings())
        entry = navigator.current_listing.entry_at_line(line)
        destination = navigator.rename(line, new_name)
        if destination is None:
            console.print(f"[yellow]No entry on line {line}[/yellow]")
            raise typer.Exit(1)
        console.print(
            f"[green]Renamed[/green] {escape(entry.name)} → {escape(str(destination))}"
        )
    except errors.DiredError as e:
        handle_error(e, "rename")


@app.command()
def copy(
    line: int = typer.Argument(..., help="Line number as shown by 'ls --numbers'"),
    new_name: str = typer.Argument(..., help="Name of the copy, relative to the directory"),
    directory: Optional[Path] = typer.Option(None, "--dir", "-d", help="Directory to work in"),
):
    """Copy the entry on a listing line"""
    try:
        navigator = _open(directory, _settings())
        entry = navigator.current_listing.entry_at_line(line)
        destination = navigator.copy(line, new_name)
        if destination is None:
            console.print(f"[yellow]No entry on line {line}[/yellow]")
            raise typer.Exit(1)
        console.print(
            f"[green]Copied[/green] {escape(entry.name)} → {escape(str(destination))}"
        )
    except errors.DiredError as e:
        handle_error(e, "copy")


@app.command()
def browse(
    path: Optional[Path] = typer.Argument(None, help="Directory to browse (a file opens its directory)"),
    new_view: bool = typer.Option(
        False, "--new-view", help="Open each directory in a new view instead of reusing one"
    ),
):
    """Browse a directory interactively"""
    from dired.ui.dired_app import run_browser

    try:
        settings = _settings(fixed_window=False if new_view else None)
        run_browser(directory_for(path), settings)
    except errors.DiredError as e:
        handle_error(e, "browse")
    except KeyboardInterrupt:
        pass
