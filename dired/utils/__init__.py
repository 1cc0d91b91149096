"""Utility modules for dired.

- file_size: Human-readable file size formatting
- output: Shared Rich console for CLI output
- paths: Resolving user-supplied paths to directories
"""
