"""
dired settings.

Settings are read from ~/.config/dired/config.json and can be overridden per
process with DIRED_* environment variables.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from ..exceptions import ConfigurationError
from .constants import CONFIG_FILE_NAME, DIRED_CONFIG_DIR, ENV_VAR_DEFINITIONS

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


class SortOrder(Enum):
    """Order of the non-synthetic entries of a listing."""

    DIRS_FIRST = "dirs-first"
    NAME = "name"
    NATIVE = "native"

    def next(self) -> "SortOrder":
        """Return the following order, wrapping around."""
        members = list(SortOrder)
        return members[(members.index(self) + 1) % len(members)]


@dataclass(frozen=True)
class DiredSettings:
    """Options a browsing session is constructed with."""

    fixed_window: bool = True
    sort_order: SortOrder = SortOrder.DIRS_FIRST
    show_hidden: bool = True
    long_format: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["sort_order"] = self.sort_order.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiredSettings":
        """Build settings from a JSON mapping, ignoring unknown keys."""
        defaults = cls()
        try:
            sort_order = SortOrder(data.get("sort_order", defaults.sort_order.value))
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown sort order: {data.get('sort_order')!r}", setting="sort_order"
            ) from e
        return cls(
            fixed_window=_parse_bool(data.get("fixed_window", defaults.fixed_window), "fixed_window"),
            sort_order=sort_order,
            show_hidden=_parse_bool(data.get("show_hidden", defaults.show_hidden), "show_hidden"),
            long_format=_parse_bool(data.get("long_format", defaults.long_format), "long_format"),
        )


def _parse_bool(value: Any, setting: str) -> bool:
    """Accept JSON booleans or the same strings the environment overrides take."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in _TRUE_VALUES | _FALSE_VALUES:
        return value.lower() in _TRUE_VALUES
    raise ConfigurationError(f"Expected true or false for {setting}, got {value!r}", setting=setting)


def get_config_path() -> Path:
    """
    Get path to the settings file.

    Returns:
        Path to ~/.config/dired/config.json
    """
    return DIRED_CONFIG_DIR / CONFIG_FILE_NAME


def validate_env_var(name: str, value: Optional[str]) -> tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS or value is None:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name]["valid_values"]
    if value.lower() not in valid_values:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"
    return True, None


def _apply_env_overrides(settings: DiredSettings) -> DiredSettings:
    overrides: dict[str, Any] = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        if value is None:
            continue
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error, setting=definition["setting"])

        field_name = definition["setting"]
        if field_name == "sort_order":
            overrides[field_name] = SortOrder(value.lower())
        else:
            overrides[field_name] = value.lower() in _TRUE_VALUES
    return replace(settings, **overrides) if overrides else settings


def load_settings(path: Optional[Path] = None) -> DiredSettings:
    """
    Load settings from file and environment.

    Args:
        path: Settings file, defaults to ~/.config/dired/config.json

    Returns:
        Settings merged over the defaults. A missing or unreadable file
        yields the defaults.

    Raises:
        ConfigurationError: If an environment override or a stored
            sort order is invalid.
    """
    path = path or get_config_path()
    settings = DiredSettings()
    if path.exists():
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        else:
            if isinstance(data, dict):
                settings = DiredSettings.from_dict(data)
            else:
                logger.warning("Ignoring settings file %s: expected a JSON object", path)
    return _apply_env_overrides(settings)


def save_settings(settings: DiredSettings, path: Optional[Path] = None) -> None:
    """
    Save settings to file.

    Args:
        settings: Settings to persist
        path: Destination, defaults to ~/.config/dired/config.json
    """
    path = path or get_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n")
    except OSError as e:
        # Settings are non-critical
        logger.warning("Could not save settings to %s: %s", path, e)
