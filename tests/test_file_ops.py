"""Tests for filesystem mutation primitives."""

import os
from unittest.mock import patch

import pytest

from dired import exceptions as errors
from dired.models.entry import Entry
from dired.services import file_ops


class TestValidateName:
    """Test validation of user-typed names."""

    @pytest.mark.parametrize("name", ["", "   ", ".", "..", "bad\0name"])
    def test_rejected(self, name):
        with pytest.raises(errors.InvalidNameError):
            file_ops.validate_name(name)

    @pytest.mark.parametrize("name", ["new", "with space", ".hidden", "sub/child"])
    def test_accepted(self, name):
        assert file_ops.validate_name(name) == name


class TestMakeDirectory:
    """Test directory creation and error translation."""

    def test_creates(self, tmp_path):
        target = tmp_path / "c"
        assert file_ops.make_directory(target) == target
        assert target.is_dir()

    def test_existing(self, tmp_path):
        (tmp_path / "c").mkdir()
        with pytest.raises(errors.AlreadyExistsError):
            file_ops.make_directory(tmp_path / "c")

    def test_missing_parent(self, tmp_path):
        with pytest.raises(errors.NoSuchEntryError):
            file_ops.make_directory(tmp_path / "nope" / "c")

    def test_permission_denied_is_retryable(self, tmp_path):
        with patch("dired.services.file_ops.os.mkdir", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(errors.PermissionError) as exc_info:
                file_ops.make_directory(tmp_path / "c")
        assert exc_info.value.retryable
        assert exc_info.value.context["operation"] == "create"

    def test_other_os_errors(self, tmp_path):
        with patch("dired.services.file_ops.os.mkdir", side_effect=OSError(28, "No space left on device")):
            with pytest.raises(errors.FileOperationError) as exc_info:
                file_ops.make_directory(tmp_path / "c")
        assert "No space left" in exc_info.value.message


class TestRenameEntry:
    """Test moving entries."""

    def test_moves_file(self, sample_tree):
        entry = Entry.from_stat(sample_tree, "f.txt")
        file_ops.rename_entry(entry, sample_tree / "g.txt")
        assert not (sample_tree / "f.txt").exists()
        assert (sample_tree / "g.txt").read_text() == "hello\n"

    def test_never_overwrites(self, sample_tree):
        (sample_tree / "g.txt").write_text("keep me")
        entry = Entry.from_stat(sample_tree, "f.txt")
        with pytest.raises(errors.AlreadyExistsError):
            file_ops.rename_entry(entry, sample_tree / "g.txt")
        assert (sample_tree / "g.txt").read_text() == "keep me"
        assert (sample_tree / "f.txt").exists()

    def test_vanished_source(self, sample_tree):
        entry = Entry.from_stat(sample_tree, "f.txt")
        os.remove(sample_tree / "f.txt")
        with pytest.raises(errors.NoSuchEntryError):
            file_ops.rename_entry(entry, sample_tree / "g.txt")

    def test_synthetic_source(self, sample_tree):
        with pytest.raises(errors.InvalidNameError):
            file_ops.rename_entry(Entry.from_stat(sample_tree, ".."), sample_tree / "x")


class TestCopyEntry:
    """Test copying entries."""

    def test_copies_file_content(self, sample_tree):
        entry = Entry.from_stat(sample_tree, "f.txt")
        file_ops.copy_entry(entry, sample_tree / "copy.txt")
        assert (sample_tree / "copy.txt").read_text() == "hello\n"
        assert (sample_tree / "f.txt").read_text() == "hello\n"

    def test_preserves_modification_time(self, sample_tree):
        os.utime(sample_tree / "f.txt", (1_000_000_000, 1_000_000_000))
        entry = Entry.from_stat(sample_tree, "f.txt")
        file_ops.copy_entry(entry, sample_tree / "copy.txt")
        assert int(os.stat(sample_tree / "copy.txt").st_mtime) == 1_000_000_000

    def test_copies_directory_recursively(self, sample_tree):
        (sample_tree / "b" / "inner.txt").write_text("inner")
        entry = Entry.from_stat(sample_tree, "b")
        file_ops.copy_entry(entry, sample_tree / "b2")
        assert (sample_tree / "b2" / "inner.txt").read_text() == "inner"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_copies_dangling_symlink_as_link(self, sample_tree):
        os.symlink(sample_tree / "nowhere", sample_tree / "link")
        entry = Entry.from_stat(sample_tree, "link")
        file_ops.copy_entry(entry, sample_tree / "link2")
        assert os.readlink(sample_tree / "link2") == str(sample_tree / "nowhere")

    def test_existing_destination(self, sample_tree):
        entry = Entry.from_stat(sample_tree, "f.txt")
        with pytest.raises(errors.AlreadyExistsError):
            file_ops.copy_entry(entry, sample_tree / "b")
