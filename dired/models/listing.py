"""Directory listings: immutable snapshots rendered as text.

Line 0 of a rendered listing is the ``<directory>:`` header; line ``i`` for
``i >= 1`` is ``entries[i - 1]``. The first two entries are always ``.`` and
``..``; the rest follow the configured sort order.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from ..config.constants import HEADER_SEPARATOR, PARENT_ENTRY_NAME, SELF_ENTRY_NAME
from ..config.settings import SortOrder
from ..exceptions import DirectoryReadError, NotADirectoryError
from .entry import Entry, EntryKind, escape_name

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _sort_key_for(order: SortOrder):
    if order is SortOrder.DIRS_FIRST:
        return lambda e: (e.kind is not EntryKind.DIRECTORY, e.name.casefold(), e.name)
    return lambda e: (e.name.casefold(), e.name)


def sort_entries(entries: Iterable[Entry], order: SortOrder) -> list[Entry]:
    """Order non-synthetic entries. NATIVE keeps enumeration order."""
    entries = list(entries)
    if order is SortOrder.NATIVE:
        return entries
    return sorted(entries, key=_sort_key_for(order))


@dataclass(frozen=True)
class Listing:
    """One directory snapshot."""

    directory: Path
    entries: tuple[Entry, ...]
    long_format: bool = False

    def __post_init__(self) -> None:
        names = [e.name for e in self.entries[:2]]
        if names != [SELF_ENTRY_NAME, PARENT_ENTRY_NAME]:
            raise ValueError(
                f"Listing must start with '.' and '..' entries, got {names!r}"
            )

    @property
    def header(self) -> str:
        return f"{escape_name(str(self.directory))}{HEADER_SEPARATOR}"

    @property
    def line_count(self) -> int:
        return len(self.entries) + 1

    def render(self) -> str:
        """Header followed by one display line per entry."""
        lines = [self.header]
        lines.extend(e.display_line(long_format=self.long_format) for e in self.entries)
        return "\n".join(lines)

    def entry_at_line(self, line_number: int) -> Optional[Entry]:
        """Entry shown on ``line_number``, or None for the header and out of range."""
        if line_number < 1 or line_number > len(self.entries):
            return None
        return self.entries[line_number - 1]

    def line_of(self, name: str) -> Optional[int]:
        """Line number of the entry called ``name``."""
        for index, entry in enumerate(self.entries):
            if entry.name == name:
                return index + 1
        return None


def load(
    directory: PathLike,
    *,
    sort_order: SortOrder = SortOrder.DIRS_FIRST,
    show_hidden: bool = True,
    long_format: bool = False,
) -> Listing:
    """Read ``directory`` into a Listing.

    Either the whole directory is enumerated or an error is raised; a child
    that cannot be stat-ed becomes an OTHER entry instead of failing the load.

    Raises:
        NotADirectoryError: If the path exists but is not a directory.
        DirectoryReadError: If the path is missing or cannot be read.
    """
    path = Path(os.path.abspath(os.fspath(directory)))

    try:
        st = os.stat(path)
    except OSError as e:
        raise DirectoryReadError(
            f"Cannot access {path}: {e.strerror or e}", path=str(path)
        ) from e
    if not stat.S_ISDIR(st.st_mode):
        raise NotADirectoryError(f"{path} is not a directory", path=str(path))

    try:
        names = os.listdir(path)
    except OSError as e:
        raise DirectoryReadError(
            f"Cannot read {path}: {e.strerror or e}", path=str(path)
        ) from e

    if not show_hidden:
        names = [n for n in names if not n.startswith(".")]

    children = sort_entries((Entry.from_stat(path, n) for n in names), sort_order)
    entries = (
        Entry.from_stat(path, SELF_ENTRY_NAME),
        Entry.from_stat(path, PARENT_ENTRY_NAME),
        *children,
    )
    logger.debug("Loaded %s: %d entries", path, len(entries))
    return Listing(directory=path, entries=entries, long_format=long_format)
