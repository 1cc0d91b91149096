"""Filesystem mutations used by the navigator.

Each function performs one blocking call and translates OSError into the
dired error taxonomy. None of them reload anything; that is the navigator's
job.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path

from .. import exceptions as errors
from ..config.constants import SYNTHETIC_ENTRY_NAMES
from ..models.entry import Entry, EntryKind

logger = logging.getLogger(__name__)


def validate_name(name: str) -> str:
    """Check a user-typed name and return it unchanged.

    Raises:
        InvalidNameError: For blank names, ``.``/``..`` and NUL bytes.
    """
    if name is None or not name.strip():
        raise errors.InvalidNameError("Name cannot be empty", name=name)
    if name in SYNTHETIC_ENTRY_NAMES:
        raise errors.InvalidNameError(f"'{name}' is reserved", name=name)
    if "\0" in name:
        raise errors.InvalidNameError("Name cannot contain NUL bytes", name=name)
    return name


def _translate(error: OSError, path: Path, operation: str) -> errors.DiredError:
    if isinstance(error, FileExistsError) or error.errno == errno.ENOTEMPTY:
        return errors.AlreadyExistsError(f"{path} already exists", path=str(path))
    if isinstance(error, PermissionError):
        return errors.PermissionError(
            f"Permission denied: cannot {operation} {path}",
            path=str(path),
            operation=operation,
        )
    if isinstance(error, FileNotFoundError):
        return errors.NoSuchEntryError(f"{path} does not exist", path=str(path))
    return errors.FileOperationError(
        f"Cannot {operation} {path}: {error.strerror or error}",
        path=str(path),
        operation=operation,
    )


def _check_source(entry: Entry) -> None:
    if entry.is_synthetic:
        raise errors.InvalidNameError(
            f"Cannot use '{entry.name}' as a source", name=entry.name
        )
    if not os.path.lexists(entry.path):
        raise errors.NoSuchEntryError(
            f"{entry.name} no longer exists in {entry.directory}", path=str(entry.path)
        )


def _check_destination(destination: Path) -> None:
    if os.path.lexists(destination):
        raise errors.AlreadyExistsError(f"{destination} already exists", path=str(destination))


def make_directory(path: Path) -> Path:
    """Create one directory; the parent must exist."""
    try:
        os.mkdir(path)
    except OSError as e:
        raise _translate(e, path, "create") from e
    logger.info("Created directory %s", path)
    return path


def rename_entry(entry: Entry, destination: Path) -> Path:
    """Move ``entry`` to ``destination`` without overwriting anything."""
    _check_source(entry)
    _check_destination(destination)
    try:
        os.rename(entry.path, destination)
    except OSError as e:
        raise _translate(e, destination, "rename to") from e
    logger.info("Renamed %s to %s", entry.path, destination)
    return destination


def copy_entry(entry: Entry, destination: Path) -> Path:
    """Copy ``entry`` to ``destination`` preserving content and metadata.

    Directories are copied recursively. OTHER entries (special files,
    dangling links) are copied without following symlinks.
    """
    _check_source(entry)
    _check_destination(destination)
    try:
        if entry.kind is EntryKind.DIRECTORY:
            shutil.copytree(entry.path, destination, symlinks=True)
        elif entry.kind is EntryKind.FILE:
            shutil.copy2(entry.path, destination)
        else:
            shutil.copy2(entry.path, destination, follow_symlinks=False)
    except shutil.Error as e:
        raise errors.FileOperationError(
            f"Copy of {entry.path} was incomplete", path=str(destination), failures=len(e.args[0])
        ) from e
    except OSError as e:
        raise _translate(e, destination, "copy to") from e
    logger.info("Copied %s to %s", entry.path, destination)
    return destination
