"""Textual user interface for dired."""
