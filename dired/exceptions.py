"""Custom exception hierarchy for dired.

Every failure a browsing session can surface is one of these types, so hosts
can catch exactly what they know how to present and let the rest propagate.

Exception Hierarchy:
    DiredError (base)
    ├── DirectoryReadError - a directory could not be listed
    │   └── NotADirectoryError (shadows builtin intentionally)
    ├── NotBrowsingError - operation needs an open directory
    ├── FileOperationError - mkdir/rename/copy failures
    │   ├── AlreadyExistsError
    │   ├── PermissionError (shadows builtin intentionally, retryable)
    │   └── NoSuchEntryError
    ├── ValidationError - bad user input
    │   └── InvalidNameError
    └── ConfigurationError - settings/environment issues

Usage:
    from dired import exceptions as errors

    try:
        os.mkdir(path)
    except FileExistsError as e:
        raise errors.AlreadyExistsError(path=str(path)) from e
"""

from typing import Any, Optional


class DiredError(Exception):
    """Base exception for all dired errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., paths, names)
        retryable: Whether reissuing the same call might succeed
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Directory Read Errors
# =============================================================================


class DirectoryReadError(DiredError):
    """A directory could not be read as a whole."""

    def __init__(
        self,
        message: str = "Cannot read directory",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


class NotADirectoryError(DirectoryReadError):  # noqa: A001 - intentionally shadows builtin
    """The target exists but is not a directory.

    Callers usually redirect to a plain-file view instead of listing.
    Import explicitly if you need both:
        from dired.exceptions import NotADirectoryError as DiredNotADirectoryError
    """

    def __init__(
        self,
        message: str = "Not a directory",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, path=path, **context)


# =============================================================================
# Session Errors
# =============================================================================


class NotBrowsingError(DiredError):
    """The navigator has no current directory."""

    def __init__(
        self,
        message: str = "No directory is open",
        *,
        operation: Optional[str] = None,
        **context: Any,
    ) -> None:
        if operation:
            context["operation"] = operation
        super().__init__(message, **context)


# =============================================================================
# File Operation Errors
# =============================================================================


class FileOperationError(DiredError):
    """A filesystem mutation failed."""

    def __init__(
        self,
        message: str = "File operation failed",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


class AlreadyExistsError(FileOperationError):
    """The destination of a create/rename/copy already exists."""

    def __init__(
        self,
        message: str = "Destination already exists",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, path=path, **context)


class PermissionError(FileOperationError):  # noqa: A001 - intentionally shadows builtin
    """The filesystem refused the operation.

    Retryable: a permission race may clear up, so callers may reissue the call.
    """

    def __init__(
        self,
        message: str = "Permission denied",
        *,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        **context: Any,
    ) -> None:
        if operation:
            context["operation"] = operation
        super().__init__(message, path=path, retryable=True, **context)


class NoSuchEntryError(FileOperationError):
    """A line resolved to an entry that no longer exists on disk."""

    def __init__(
        self,
        message: str = "Entry no longer exists",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, path=path, **context)


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(DiredError):
    """Base exception for invalid user input."""

    pass


class InvalidNameError(ValidationError):
    """A name typed by the user cannot be used as a directory entry."""

    def __init__(
        self,
        message: str = "Invalid name",
        *,
        name: Optional[str] = None,
        **context: Any,
    ) -> None:
        if name is not None:
            context["name"] = name
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(DiredError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
