"""
Centralized constants for dired.

Values shared by the listing model, the navigator and the hosts live here so
the text format and view identifiers stay in one place.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

DIRED_CONFIG_DIR = Path(
    os.environ.get("DIRED_CONFIG_DIR", Path.home() / ".config" / "dired")
)
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "dired.log"

# =============================================================================
# VIEW IDENTIFIERS
# =============================================================================

DIRED_SCHEME = "dired"  # dired://<directory>
FILE_SCHEME = "file"
FIXED_WINDOW_VIEW_ID = f"{DIRED_SCHEME}://fixed_window"

# =============================================================================
# RENDERING
# =============================================================================

SELF_ENTRY_NAME = "."
PARENT_ENTRY_NAME = ".."
SYNTHETIC_ENTRY_NAMES = (SELF_ENTRY_NAME, PARENT_ENTRY_NAME)

HEADER_SEPARATOR = ":"  # header line is "<directory>:"
LINE_INDENT = "  "
DIRECTORY_SUFFIX = "/"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
SIZE_COLUMN_WIDTH = 10

# =============================================================================
# FILE VIEWER LIMITS
# =============================================================================

MAX_FILE_VIEW_SIZE_BYTES = 1024 * 1024  # 1MB - larger files are truncated

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "DIRED_FIXED_WINDOW": {
        "description": "Reuse one listing view for every directory",
        "valid_values": ["true", "false", "1", "0", "yes", "no"],
        "setting": "fixed_window",
    },
    "DIRED_SORT": {
        "description": "Listing order: dirs-first, name or native",
        "valid_values": ["dirs-first", "name", "native"],
        "setting": "sort_order",
    },
    "DIRED_SHOW_HIDDEN": {
        "description": "Show dot-files in listings",
        "valid_values": ["true", "false", "1", "0", "yes", "no"],
        "setting": "show_hidden",
    },
    "DIRED_LONG_FORMAT": {
        "description": "Render mode, size and modification time columns",
        "valid_values": ["true", "false", "1", "0", "yes", "no"],
        "setting": "long_format",
    },
}
