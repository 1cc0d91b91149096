"""Modal dialogs for the directory browser."""

from typing import Optional

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class NameInputScreen(ModalScreen[Optional[str]]):
    """Prompt for a file or directory name.

    Dismisses with the typed name, or None when cancelled. Cancelling must
    not reach the navigator at all.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    NameInputScreen {
        align: center middle;
    }
    #name-dialog {
        width: 60%;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1;
        grid-size: 2 3;
        grid-rows: auto auto auto;
    }
    #name-label {
        column-span: 2;
    }
    #name-input {
        column-span: 2;
        width: 100%;
        margin: 1 0;
    }
    """

    def __init__(self, prompt: str, initial: str = "", **kwargs):
        super().__init__(**kwargs)
        self.prompt = prompt
        self.initial = initial

    def compose(self) -> ComposeResult:
        with Grid(id="name-dialog"):
            yield Label(escape(self.prompt), id="name-label")
            yield Input(value=self.initial, placeholder="name", id="name-input")
            yield Button("OK", variant="primary", id="ok-btn")
            yield Button("Cancel", variant="default", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ok-btn":
            self._submit()
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _submit(self) -> None:
        value = self.query_one("#name-input", Input).value
        if value.strip():
            self.dismiss(value)
        else:
            label = self.query_one("#name-label", Label)
            label.update("[red]Name cannot be empty[/red]")
