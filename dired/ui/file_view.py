"""Plain-file view pushed when a non-directory entry is entered."""

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.syntax import Syntax
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, RichLog, Static

from ..config.constants import MAX_FILE_VIEW_SIZE_BYTES
from ..utils.file_size import format_file_size

logger = logging.getLogger(__name__)

# Leading bytes inspected for NULs
_BINARY_SNIFF_BYTES = 8192


def is_probably_text(path: Path) -> bool:
    """Sniff the start of a file for NUL bytes."""
    mime_type, _ = mimetypes.guess_type(str(path))
    if mime_type and mime_type.startswith("text/"):
        return True
    with open(path, "rb") as f:
        chunk = f.read(_BINARY_SNIFF_BYTES)
    return b"\0" not in chunk


def read_text_preview(path: Path, limit: int = MAX_FILE_VIEW_SIZE_BYTES) -> tuple[str, bool]:
    """Decode at most ``limit`` bytes of ``path``.

    Returns:
        The decoded text and whether the file was longer than ``limit``.
    """
    with open(path, "rb") as f:
        raw = f.read(limit + 1)
    truncated = len(raw) > limit
    return raw[:limit].decode("utf-8", errors="replace"), truncated


class FileViewScreen(Screen):
    """Read-only view of one file with syntax highlighting."""

    BINDINGS = [
        Binding("escape", "close", "Back"),
        Binding("q", "close", "Back"),
    ]

    DEFAULT_CSS = """
    FileViewScreen #file-title {
        height: 1;
        background: $primary;
        color: $text;
        padding: 0 1;
        dock: top;
    }
    """

    def __init__(self, path: Path, **kwargs):
        super().__init__(**kwargs)
        self.path = path

    def compose(self) -> ComposeResult:
        yield Static(escape(str(self.path)), id="file-title")
        yield RichLog(id="file-content", wrap=True, highlight=False, markup=False)
        yield Footer()

    def on_mount(self) -> None:
        log = self.query_one("#file-content", RichLog)
        error = self._write_content(log)
        if error:
            log.write(Text(error, style="red"))

    def _write_content(self, log: RichLog) -> Optional[str]:
        """Write the file into the log, returning an error message on failure."""
        try:
            size = self.path.stat().st_size
            if not is_probably_text(self.path):
                log.write(Text(f"Binary file, {format_file_size(size)}", style="dim italic"))
                return None

            content, truncated = read_text_preview(self.path)
        except OSError as e:
            logger.warning("Cannot view %s: %s", self.path, e)
            return f"Cannot read {self.path}: {e.strerror or e}"

        log.write(Text(format_file_size(size), style="dim"))
        lexer = Syntax.guess_lexer(str(self.path), code=content)
        log.write(Syntax(content, lexer, theme="monokai", line_numbers=True, word_wrap=True))
        if truncated:
            log.write(Text(f"... (truncated at {format_file_size(MAX_FILE_VIEW_SIZE_BYTES)})", style="dim"))
        return None

    def action_close(self) -> None:
        self.app.pop_screen()
