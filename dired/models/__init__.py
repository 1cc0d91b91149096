"""Data models for dired.

- entry: one directory entry, its kind, display line and target location
- listing: immutable directory snapshot, rendering and line lookup
"""

from .entry import Entry, EntryKind, Location, classify, decode_location, encode_location
from .listing import Listing, load

__all__ = [
    "Entry",
    "EntryKind",
    "Listing",
    "Location",
    "classify",
    "decode_location",
    "encode_location",
    "load",
]
