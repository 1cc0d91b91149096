"""Service modules for dired."""

from .navigator import Navigator, NavigatorListener, NavigatorState

__all__ = ["Navigator", "NavigatorListener", "NavigatorState"]
