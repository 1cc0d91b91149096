"""
dired - text-buffer directory browser
"""

__version__ = "0.1.0"
