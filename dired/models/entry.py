"""Directory entries and the locations entering them leads to."""

from __future__ import annotations

import logging
import os
import re
import stat
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from ..config.constants import (
    DIRECTORY_SUFFIX,
    DIRED_SCHEME,
    FILE_SCHEME,
    FIXED_WINDOW_VIEW_ID,
    LINE_INDENT,
    SIZE_COLUMN_WIDTH,
    SYNTHETIC_ENTRY_NAMES,
    TIMESTAMP_FORMAT,
)

logger = logging.getLogger(__name__)

# "  <mode> <size> <YYYY-MM-DD HH:MM> <name>"; mode and size never contain spaces
_LONG_LINE_RE = re.compile(
    r"^  (?P<mode>\S{10}) +(?P<size>\S+) "
    r"(?P<mtime>\d{4}-\d{2}-\d{2} \d{2}:\d{2}|\?{4}-\?{2}-\?{2} \?{2}:\?{2}) "
    r"(?P<name>.+)$"
)


_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPE_RE = re.compile(r"\\(.)")
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


def escape_name(name: str) -> str:
    """Keep a name on one line: backslash, newline and CR become escapes."""
    return "".join(_ESCAPES.get(ch, ch) for ch in name)


def unescape_name(text: str) -> str:
    """Inverse of ``escape_name``."""
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(0)), text)


class EntryKind(Enum):
    """What a directory entry is, as far as stat can tell."""

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


def classify(stat_result: Optional[os.stat_result]) -> EntryKind:
    """Map stat metadata to an entry kind. Never raises."""
    if stat_result is None:
        return EntryKind.OTHER
    try:
        mode = stat_result.st_mode
    except AttributeError:
        return EntryKind.OTHER
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


@dataclass(frozen=True)
class Location:
    """Where entering an entry navigates to.

    A location is either a directory-listing view or a plain-file view.
    ``reuse_view`` asks the host to replace the current listing view rather
    than open another one.
    """

    path: Path
    is_listing: bool
    reuse_view: bool = True

    @property
    def view_id(self) -> str:
        """Synthetic identifier of the view showing this location."""
        if not self.is_listing:
            return f"{FILE_SCHEME}://{self.path}"
        if self.reuse_view:
            return FIXED_WINDOW_VIEW_ID
        return f"{DIRED_SCHEME}://{self.path}"


def encode_location(location: Location) -> str:
    """Encode a location as a ``dired://`` or ``file://`` identifier.

    Unlike ``view_id`` the encoded form always carries the path, so it can be
    decoded back.
    """
    if not location.is_listing:
        return f"{FILE_SCHEME}://{location.path}"
    query = "" if location.reuse_view else "?new-view"
    return f"{DIRED_SCHEME}://{location.path}{query}"


def decode_location(identifier: str) -> Location:
    """Inverse of ``encode_location``.

    Raises:
        ValueError: If the identifier uses an unknown scheme.
    """
    scheme, sep, rest = identifier.partition("://")
    if not sep:
        raise ValueError(f"Not a location identifier: {identifier!r}")
    if scheme == FILE_SCHEME:
        return Location(path=Path(rest), is_listing=False)
    if scheme == DIRED_SCHEME:
        reuse_view = True
        if rest.endswith("?new-view"):
            rest = rest[: -len("?new-view")]
            reuse_view = False
        return Location(path=Path(rest), is_listing=True, reuse_view=reuse_view)
    raise ValueError(f"Unknown location scheme: {scheme!r}")


@dataclass(frozen=True)
class Entry:
    """One line of a listing: a file, a directory, or the synthetic ``.``/``..``."""

    directory: Path
    name: str
    kind: EntryKind
    size: Optional[int] = None
    mtime: Optional[float] = None
    mode: Optional[int] = None

    @classmethod
    def from_stat(cls, directory: Path, name: str) -> "Entry":
        """Stat ``directory/name`` and build the entry.

        A failed stat (vanished file, dangling symlink, permission) yields an
        OTHER entry without metadata instead of an error.
        """
        try:
            st = os.stat(os.path.join(directory, name))
        except OSError as e:
            logger.debug("stat failed for %s in %s: %s", name, directory, e)
            return cls(directory=directory, name=name, kind=EntryKind.OTHER)
        return cls(
            directory=directory,
            name=name,
            kind=classify(st),
            size=st.st_size,
            mtime=st.st_mtime,
            mode=st.st_mode,
        )

    @property
    def path(self) -> Path:
        return Path(os.path.normpath(os.path.join(self.directory, self.name)))

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_synthetic(self) -> bool:
        return self.name in SYNTHETIC_ENTRY_NAMES

    def display_line(self, long_format: bool = False) -> str:
        """Format this entry as one listing line.

        Directories get a trailing ``/``. The long form prefixes the mode,
        size and modification time columns. Either form parses back with
        ``parse_display_line``.
        """
        name = escape_name(self.name) + (DIRECTORY_SUFFIX if self.is_directory else "")
        if not long_format:
            return f"{LINE_INDENT}{name}"

        mode = stat.filemode(self.mode) if self.mode is not None else "?" * 10
        size = str(self.size) if self.size is not None else "?"
        if self.mtime is not None:
            mtime = datetime.fromtimestamp(self.mtime).strftime(TIMESTAMP_FORMAT)
        else:
            mtime = "????-??-?? ??:??"
        return f"{LINE_INDENT}{mode} {size:>{SIZE_COLUMN_WIDTH}} {mtime} {name}"

    def target_location(self, prefer_same_view: bool) -> Location:
        """Location entering this entry should navigate to."""
        if self.is_directory:
            return Location(path=self.path, is_listing=True, reuse_view=prefer_same_view)
        return Location(path=self.path, is_listing=False, reuse_view=prefer_same_view)


def parse_display_line(line: str, long_format: bool = False) -> tuple[str, bool]:
    """Recover ``(name, is_directory)`` from a line made by ``display_line``.

    Raises:
        ValueError: If the text is not a display line of the given form.
    """
    if long_format:
        match = _LONG_LINE_RE.match(line)
        if not match:
            raise ValueError(f"Not a long-format listing line: {line!r}")
        text = match.group("name")
    else:
        if not line.startswith(LINE_INDENT) or len(line) == len(LINE_INDENT):
            raise ValueError(f"Not a listing line: {line!r}")
        text = line[len(LINE_INDENT):]

    # Filenames cannot contain the separator, so a trailing one marks a directory
    if text.endswith(DIRECTORY_SUFFIX) and len(text) > len(DIRECTORY_SUFFIX):
        return unescape_name(text[: -len(DIRECTORY_SUFFIX)]), True
    return unescape_name(text), False
