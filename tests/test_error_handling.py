"""Tests for error display and logging setup."""

import logging
from unittest.mock import patch

import pytest
import typer

from dired import exceptions as errors
from dired.error_handling import (
    ErrorCategory,
    categorize,
    handle_error,
    logger,
    setup_logging,
    suggestion_for,
)


@pytest.fixture
def restore_logger():
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestExceptions:
    """Test the exception hierarchy."""

    def test_context_in_message(self):
        error = errors.AlreadyExistsError(path="/tmp/x")
        assert error.message == "Destination already exists"
        assert str(error) == "Destination already exists (path='/tmp/x')"

    def test_not_a_directory_is_a_read_error(self):
        assert issubclass(errors.NotADirectoryError, errors.DirectoryReadError)

    def test_only_permission_errors_are_retryable(self):
        assert errors.PermissionError(path="/x").retryable
        assert not errors.NoSuchEntryError(path="/x").retryable
        assert not errors.InvalidNameError(name="").retryable

    def test_empty_name_kept_in_context(self):
        assert errors.InvalidNameError(name="").context == {"name": ""}


class TestCategorize:
    @pytest.mark.parametrize(
        "error,category",
        [
            (errors.PermissionError(), ErrorCategory.PERMISSION),
            (errors.AlreadyExistsError(), ErrorCategory.FILE_SYSTEM),
            (errors.NotADirectoryError(), ErrorCategory.FILE_SYSTEM),
            (errors.InvalidNameError(), ErrorCategory.VALIDATION),
            (errors.NotBrowsingError(), ErrorCategory.SESSION),
            (errors.ConfigurationError(), ErrorCategory.CONFIGURATION),
            (ValueError("x"), ErrorCategory.INTERNAL),
        ],
    )
    def test_categories(self, error, category):
        assert categorize(error) is category

    def test_suggestions(self):
        assert "reload" in suggestion_for(errors.NoSuchEntryError())
        assert "parent directory" in suggestion_for(errors.NotADirectoryError())
        assert suggestion_for(ValueError("x")) is None


class TestHandleError:
    """Test CLI error exits."""

    def test_dired_error_exits_with_panel(self):
        with patch("dired.error_handling.console") as mock_console:
            with pytest.raises(typer.Exit) as exc_info:
                handle_error(errors.AlreadyExistsError(path="/tmp/c"), "create directory")
        assert exc_info.value.exit_code == 1
        mock_console.print.assert_called_once()

    def test_unexpected_error_is_wrapped(self):
        with patch("dired.error_handling.display_error") as mock_display:
            with pytest.raises(typer.Exit):
                handle_error(RuntimeError("boom"), "list directory")
        wrapped = mock_display.call_args[0][0]
        assert isinstance(wrapped, errors.DiredError)
        assert wrapped.context["error_type"] == "RuntimeError"


class TestSetupLogging:
    """Test logger configuration."""

    def test_console_levels(self, tmp_path, restore_logger):
        setup_logging(verbose=True, log_file=tmp_path / "dired.log")
        assert logger.handlers[0].level == logging.DEBUG

        setup_logging(quiet=True, log_file=tmp_path / "dired.log")
        assert logger.handlers[0].level == logging.ERROR

        setup_logging(log_file=tmp_path / "dired.log")
        assert logger.handlers[0].level == logging.WARNING

    def test_file_handler_records_debug(self, tmp_path, restore_logger):
        log_file = tmp_path / "logs" / "dired.log"
        setup_logging(log_file=log_file)
        logging.getLogger("dired.services.navigator").debug("hello from the navigator")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from the navigator" in log_file.read_text()

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path, restore_logger):
        setup_logging(log_file=tmp_path / "dired.log")
        setup_logging(log_file=tmp_path / "dired.log")
        assert len(logger.handlers) == 2

    def test_unwritable_log_file_is_not_fatal(self, tmp_path, restore_logger):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        setup_logging(log_file=blocker / "dired.log")
        assert len(logger.handlers) == 1
