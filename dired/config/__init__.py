"""Configuration for dired: constants and persisted settings."""

from .settings import DiredSettings, SortOrder, load_settings, save_settings

__all__ = ["DiredSettings", "SortOrder", "load_settings", "save_settings"]
