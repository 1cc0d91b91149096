"""
Centralized error handling for dired

This module provides:
- Rich Console panels for user-facing error messages
- Logging setup for developer diagnostics
- Consistent exit codes for CLI commands
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from dired import exceptions as errors
from dired.config.constants import DIRED_CONFIG_DIR, LOG_FILE_NAME

# Global console instance for error display
console = Console(stderr=True)

# Package logger; every module logger is a child of it
logger = logging.getLogger("dired")


class ErrorSeverity(Enum):
    """Error severity levels for categorization"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ErrorCategory(Enum):
    """Error categories for display"""
    FILE_SYSTEM = "file_system"
    PERMISSION = "permission"
    VALIDATION = "validation"
    SESSION = "session"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


def categorize(error: Exception) -> ErrorCategory:
    """Map an exception to the category shown in its panel title."""
    if isinstance(error, errors.PermissionError):
        return ErrorCategory.PERMISSION
    if isinstance(error, (errors.DirectoryReadError, errors.FileOperationError)):
        return ErrorCategory.FILE_SYSTEM
    if isinstance(error, errors.ValidationError):
        return ErrorCategory.VALIDATION
    if isinstance(error, errors.NotBrowsingError):
        return ErrorCategory.SESSION
    if isinstance(error, errors.ConfigurationError):
        return ErrorCategory.CONFIGURATION
    return ErrorCategory.INTERNAL


def suggestion_for(error: Exception) -> Optional[str]:
    """Short hint shown under the error message."""
    if isinstance(error, errors.NotADirectoryError):
        return "Open the file's parent directory instead."
    if isinstance(error, errors.DirectoryReadError):
        return "Check that the directory exists and is readable."
    if isinstance(error, errors.AlreadyExistsError):
        return "Pick a different name."
    if isinstance(error, errors.PermissionError):
        return "Check permissions and try again."
    if isinstance(error, errors.NoSuchEntryError):
        return "The directory changed; reload the listing."
    if isinstance(error, errors.ConfigurationError):
        return "Fix the DIRED_* environment variables or the settings file."
    return None


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """
    Set up logging for dired

    Args:
        verbose: Enable verbose (DEBUG) logging on stderr
        quiet: Only show errors on stderr
        log_file: Optional log file path (defaults to ~/.config/dired/dired.log)
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    detailed_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s'
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    # Clear any existing handlers
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    if log_file is None:
        log_file = DIRED_CONFIG_DIR / LOG_FILE_NAME

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        # If we can't create log file, continue without it
        if verbose:
            console.print(f"[yellow]Warning: Could not create log file {log_file}: {e}[/yellow]")


def handle_error(
    error: Exception,
    operation: str = "unknown",
    show_details: bool = False
) -> None:
    """
    Log an error, show it as a panel and exit the CLI

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        show_details: Whether to show the error context to the user

    Raises:
        typer.Exit: Always, with exit code 1
    """
    if isinstance(error, errors.DiredError):
        logger.error("%s failed: %s", operation, error)
        display_error(error, show_details)
    else:
        logger.error("Unexpected error during %s: %s", operation, error, exc_info=True)
        wrapped = errors.DiredError(
            f"An unexpected error occurred during {operation}",
            original_error=str(error),
            error_type=type(error).__name__,
        )
        display_error(wrapped, show_details=True)
    raise typer.Exit(1)


def display_error(
    error: errors.DiredError,
    show_details: bool = False,
    severity: ErrorSeverity = ErrorSeverity.ERROR
) -> None:
    """Display an error to the user with Rich formatting"""
    color = {
        ErrorSeverity.INFO: "blue",
        ErrorSeverity.WARNING: "yellow",
        ErrorSeverity.ERROR: "red",
    }[severity]

    message = Text()
    message.append(error.message, style=f"bold {color}")

    if show_details and error.context:
        details_text = "\n".join(f"• {k}: {v}" for k, v in error.context.items())
        message.append(f"\n\nDetails:\n{details_text}", style=f"dim {color}")

    suggestion = suggestion_for(error)
    if suggestion:
        message.append(f"\n\nSuggestion: {suggestion}", style="cyan")

    if severity is ErrorSeverity.ERROR:
        title = f"{categorize(error).value.replace('_', ' ').title()} Error"
    else:
        title = severity.value.title()
    panel = Panel(
        message,
        title=f"[bold]{title}[/bold]",
        title_align="left",
        border_style=color,
        padding=(0, 1)
    )

    console.print(panel)


def warn_user(message: str) -> None:
    """Display a warning message to the user"""
    display_error(errors.DiredError(message), severity=ErrorSeverity.WARNING)
