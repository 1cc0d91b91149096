"""Textual host for the directory browser.

The rendered listing lives in a read-only TextArea; the cursor row is the
line number handed to the navigator. Everything the navigator reports comes
back through ``BrowserListener`` and is reflected in the widgets.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static, TextArea

from ..config.settings import DiredSettings
from ..exceptions import DiredError
from ..models.entry import Location
from ..models.listing import Listing
from ..services.navigator import Navigator, NavigatorListener
from .file_view import FileViewScreen
from .modals import NameInputScreen

logger = logging.getLogger(__name__)


class ListingView(TextArea):
    """The listing as a read-only text buffer.

    Bindings live here so they win over TextArea's editing keys.
    """

    BINDINGS = [
        Binding("enter", "app.enter_entry", "Open"),
        Binding("^,backspace", "app.go_up", "Up"),
        Binding("g", "app.reload", "Reload"),
        Binding("+", "app.create_directory", "Mkdir"),
        Binding("R", "app.rename", "Rename"),
        Binding("C", "app.copy", "Copy"),
        Binding(".", "app.toggle_hidden", "Hidden"),
        Binding("s", "app.cycle_sort", "Sort"),
        Binding("b", "app.back", "Back", show=False),
        Binding("q", "app.close", "Quit"),
    ]

    def __init__(self, **kwargs):
        super().__init__("", read_only=True, soft_wrap=False, **kwargs)

    @property
    def line_number(self) -> int:
        return self.cursor_location[0]


class BrowserListener(NavigatorListener):
    """Forwards navigator notifications to the app."""

    def __init__(self, app: "DiredApp"):
        self.app = app

    def on_listing_changed(self, listing: Listing) -> None:
        self.app.show_listing(listing)

    def on_open_file(self, location: Location) -> None:
        self.app.push_screen(FileViewScreen(location.path))

    def on_directory_created(self, path: Path) -> None:
        self.app.set_status(f"Created {path}")
        self.app.focus_entry(path.name)

    def on_entry_renamed(self, source: Path, destination: Path) -> None:
        self.app.set_status(f"Renamed {source.name} to {destination}")
        self.app.focus_entry(destination.name)

    def on_entry_copied(self, source: Path, destination: Path) -> None:
        self.app.set_status(f"Copied {source.name} to {destination}")
        self.app.focus_entry(destination.name)

    def on_closed(self) -> None:
        self.app.exit()

    def on_error(self, error: DiredError) -> None:
        self.app.set_status(error.message, error=True)


class DiredApp(App):
    """Directory browser driven by a Navigator."""

    TITLE = "dired"

    CSS = """
    #listing {
        height: 1fr;
        border: none;
    }
    #status-bar {
        height: 1;
        background: $panel;
        color: $text-muted;
        padding: 0 1;
        dock: bottom;
    }
    #status-bar.error {
        color: $error;
    }
    """

    def __init__(self, directory: Path, settings: Optional[DiredSettings] = None, **kwargs):
        super().__init__(**kwargs)
        self.start_directory = directory
        self.navigator = Navigator(settings)
        self.navigator.subscribe(BrowserListener(self))
        # Directories left behind when views are not reused
        self.view_history: list[Path] = []
        self._previous_directory: Optional[Path] = None

    def compose(self) -> ComposeResult:
        yield ListingView(id="listing")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        listing_view = self.query_one("#listing", ListingView)
        listing_view.focus()
        try:
            self.navigator.open(self.start_directory)
        except DiredError:
            self.bell()

    # ------------------------------------------------------------------
    # Widget updates
    # ------------------------------------------------------------------

    def show_listing(self, listing: Listing) -> None:
        """Render ``listing`` into the buffer, keeping the cursor meaningful."""
        listing_view = self.query_one("#listing", ListingView)
        previous = self._previous_directory
        row = listing_view.line_number

        if previous == listing.directory:
            row = min(row, listing.line_count - 1)
        elif previous is not None and previous.parent == listing.directory:
            # Came up from a child: land on it
            row = listing.line_of(previous.name) or 1
        else:
            row = 1

        listing_view.load_text(listing.render())
        listing_view.move_cursor((row, 0))
        self._previous_directory = listing.directory
        self.sub_title = str(listing.directory)

    def focus_entry(self, name: str) -> None:
        listing = self.navigator.current_listing
        if listing is None:
            return
        row = listing.line_of(name)
        if row is not None:
            self.query_one("#listing", ListingView).move_cursor((row, 0))

    def set_status(self, message: str, error: bool = False) -> None:
        status = self.query_one("#status-bar", Static)
        status.update(escape(message))
        status.set_class(error, "error")

    @property
    def cursor_line(self) -> int:
        return self.query_one("#listing", ListingView).line_number

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _run(self, operation, *args):
        """Call a navigator operation; failures are already on the status bar."""
        try:
            return operation(*args)
        except DiredError as e:
            logger.debug("Operation failed: %s", e)
            self.bell()
            return None

    def action_enter_entry(self) -> None:
        current = self.navigator.current_directory
        location = self._run(self.navigator.enter, self.cursor_line)
        if location is not None and location.is_listing and not location.reuse_view:
            if current is not None and current != self.navigator.current_directory:
                self.view_history.append(current)

    def action_back(self) -> None:
        if self.view_history:
            self._run(self.navigator.open, self.view_history.pop())

    def action_go_up(self) -> None:
        self._run(self.navigator.go_up)

    def action_reload(self) -> None:
        if self._run(self.navigator.reload) is not None:
            self.set_status("Reloaded")

    def action_toggle_hidden(self) -> None:
        self._run(self.navigator.toggle_hidden)

    def action_cycle_sort(self) -> None:
        order = self.navigator.settings.sort_order.next()
        if self._run(self.navigator.set_sort_order, order) is not None:
            self.set_status(f"Sorted by {order.value}")

    def action_close(self) -> None:
        self._run(self.navigator.close)

    def action_create_directory(self) -> None:
        def create(name: Optional[str]) -> None:
            if name is not None:
                self._run(self.navigator.create_directory, name)

        self.push_screen(NameInputScreen("Create directory:"), create)

    def action_rename(self) -> None:
        self._prompt_for_entry("Rename {} to:", self.navigator.rename)

    def action_copy(self) -> None:
        self._prompt_for_entry("Copy {} to:", self.navigator.copy)

    def _prompt_for_entry(self, prompt: str, operation) -> None:
        listing = self.navigator.current_listing
        line = self.cursor_line
        entry = listing.entry_at_line(line) if listing else None
        if entry is None or entry.is_synthetic:
            self.bell()
            return

        def apply(name: Optional[str]) -> None:
            if name is not None:
                self._run(operation, line, name)

        self.push_screen(NameInputScreen(prompt.format(entry.name), initial=entry.name), apply)


def run_browser(directory: Path, settings: Optional[DiredSettings] = None) -> None:
    """Run the browser until the user quits."""
    DiredApp(directory, settings).run()
