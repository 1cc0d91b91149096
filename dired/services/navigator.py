"""Browsing session: current directory state plus navigation and mutations.

A Navigator is either idle (NO_DIRECTORY) or BROWSING one directory. Every
operation takes the target line explicitly; hosts own the cursor. Results are
returned to the caller and also announced to subscribed listeners, which is
how hosts learn that a view must be re-rendered or a file opened.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import replace
from enum import Enum
from functools import wraps
from pathlib import Path
from typing import Callable, Iterable, Optional, TypeVar

from .. import exceptions as errors
from ..config.constants import PARENT_ENTRY_NAME
from ..config.settings import DiredSettings, SortOrder
from ..models import listing as listing_model
from ..models.entry import Entry, Location
from ..models.listing import Listing
from . import file_ops

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NavigatorState(Enum):
    NO_DIRECTORY = "no_directory"
    BROWSING = "browsing"


class NavigatorListener:
    """Receives navigator notifications. Override only what you need."""

    def on_listing_changed(self, listing: Listing) -> None:
        pass

    def on_open_file(self, location: Location) -> None:
        pass

    def on_directory_created(self, path: Path) -> None:
        pass

    def on_entry_renamed(self, source: Path, destination: Path) -> None:
        pass

    def on_entry_copied(self, source: Path, destination: Path) -> None:
        pass

    def on_closed(self) -> None:
        pass

    def on_error(self, error: errors.DiredError) -> None:
        pass


def _operation(name: str, *, requires_browsing: bool = True):
    """Serialize an operation on the navigator lock and report its failures."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(self: "Navigator", *args, **kwargs) -> T:
            with self._lock:
                try:
                    if requires_browsing and self.state is not NavigatorState.BROWSING:
                        raise errors.NotBrowsingError(operation=name)
                    return func(self, *args, **kwargs)
                except errors.DiredError as e:
                    logger.warning("%s failed: %s", name, e)
                    self._emit("on_error", e)
                    raise

        return wrapper

    return decorator


class Navigator:
    """One logical browsing session.

    Args:
        settings: Listing options and the fixed-window view policy.
        listeners: Initial notification subscribers.
    """

    def __init__(
        self,
        settings: Optional[DiredSettings] = None,
        listeners: Iterable[NavigatorListener] = (),
    ):
        self.settings = settings or DiredSettings()
        self.state = NavigatorState.NO_DIRECTORY
        self.current_directory: Optional[Path] = None
        self.current_listing: Optional[Listing] = None
        self._listeners: list[NavigatorListener] = list(listeners)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: NavigatorListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: NavigatorListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: str, *args) -> None:
        for listener in list(self._listeners):
            getattr(listener, event)(*args)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(
        self, directory: os.PathLike | str, settings: Optional[DiredSettings] = None
    ) -> Listing:
        settings = settings or self.settings
        return listing_model.load(
            directory,
            sort_order=settings.sort_order,
            show_hidden=settings.show_hidden,
            long_format=settings.long_format,
        )

    def _switch_to(self, listing: Listing) -> Listing:
        previous = self.current_directory
        self.current_listing = listing
        self.current_directory = listing.directory
        self.state = NavigatorState.BROWSING
        if previous != listing.directory:
            logger.info("Browsing %s", listing.directory)
        self._emit("on_listing_changed", listing)
        return listing

    def _reload(self) -> Listing:
        assert self.current_directory is not None
        return self._switch_to(self._load(self.current_directory))

    def _reconfigure(self, settings: DiredSettings) -> Listing:
        assert self.current_directory is not None
        listing = self._load(self.current_directory, settings)
        self.settings = settings
        return self._switch_to(listing)

    def _resolve(self, line_number: int) -> Optional[Entry]:
        assert self.current_listing is not None
        return self.current_listing.entry_at_line(line_number)

    def _destination(self, new_name: str) -> Path:
        assert self.current_directory is not None
        file_ops.validate_name(new_name)
        return Path(os.path.normpath(os.path.join(self.current_directory, new_name)))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def is_browsing(self) -> bool:
        return self.state is NavigatorState.BROWSING

    @_operation("open", requires_browsing=False)
    def open(self, directory: os.PathLike | str) -> Listing:
        """Start browsing ``directory``. A failed load keeps the prior state."""
        return self._switch_to(self._load(directory))

    @_operation("enter")
    def enter(self, line_number: int) -> Optional[Location]:
        """Follow the entry on ``line_number``.

        Directories become the current directory; anything else is announced
        through ``on_open_file`` and leaves the state untouched. The header
        line and out-of-range lines do nothing and return None.

        Raises:
            NoSuchEntryError: If the entry vanished since the listing was loaded.
        """
        entry = self._resolve(line_number)
        if entry is None:
            return None
        if not entry.is_synthetic and not os.path.lexists(entry.path):
            raise errors.NoSuchEntryError(
                f"{entry.name} no longer exists in {entry.directory}", path=str(entry.path)
            )

        location = entry.target_location(self.settings.fixed_window)
        if location.is_listing:
            self._switch_to(self._load(location.path))
        else:
            logger.debug("Opening file %s", location.path)
            self._emit("on_open_file", location)
        return location

    @_operation("go up")
    def go_up(self) -> Listing:
        """Move to the parent directory; at a filesystem root this reloads."""
        assert self.current_directory is not None
        # Built from the parent's own stat, not the '..' line of the current listing
        parent = Entry.from_stat(self.current_directory, PARENT_ENTRY_NAME)
        return self._switch_to(self._load(parent.path))

    @_operation("reload")
    def reload(self) -> Listing:
        """Re-read the current directory."""
        return self._reload()

    @_operation("close")
    def close(self) -> None:
        """Stop browsing."""
        logger.info("Closed %s", self.current_directory)
        self.state = NavigatorState.NO_DIRECTORY
        self.current_directory = None
        self.current_listing = None
        self._emit("on_closed")

    @_operation("change sort order")
    def set_sort_order(self, order: SortOrder) -> Listing:
        return self._reconfigure(replace(self.settings, sort_order=order))

    @_operation("toggle hidden files")
    def toggle_hidden(self) -> Listing:
        return self._reconfigure(replace(self.settings, show_hidden=not self.settings.show_hidden))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @_operation("create directory")
    def create_directory(self, name: str) -> Path:
        """Create ``name`` in the current directory and reload."""
        path = file_ops.make_directory(self._destination(name))
        self._reload()
        self._emit("on_directory_created", path)
        return path

    @_operation("rename")
    def rename(self, line_number: int, new_name: str) -> Optional[Path]:
        """Move the entry on ``line_number`` to ``new_name`` and reload.

        Returns the new path, or None when the line holds no entry.
        """
        entry = self._resolve(line_number)
        if entry is None:
            return None
        destination = file_ops.rename_entry(entry, self._destination(new_name))
        self._reload()
        self._emit("on_entry_renamed", entry.path, destination)
        return destination

    @_operation("copy")
    def copy(self, line_number: int, new_name: str) -> Optional[Path]:
        """Copy the entry on ``line_number`` to ``new_name`` and reload.

        Returns the new path, or None when the line holds no entry.
        """
        entry = self._resolve(line_number)
        if entry is None:
            return None
        destination = file_ops.copy_entry(entry, self._destination(new_name))
        self._reload()
        self._emit("on_entry_copied", entry.path, destination)
        return destination
