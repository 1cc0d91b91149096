"""Shared pytest fixtures for dired tests."""

import pytest

from dired.services.navigator import Navigator, NavigatorListener


class RecordingListener(NavigatorListener):
    """Collects navigator notifications as (event, payload) tuples."""

    def __init__(self):
        self.events = []

    def on_listing_changed(self, listing):
        self.events.append(("listing_changed", listing))

    def on_open_file(self, location):
        self.events.append(("open_file", location))

    def on_directory_created(self, path):
        self.events.append(("directory_created", path))

    def on_entry_renamed(self, source, destination):
        self.events.append(("entry_renamed", (source, destination)))

    def on_entry_copied(self, source, destination):
        self.events.append(("entry_copied", (source, destination)))

    def on_closed(self):
        self.events.append(("closed", None))

    def on_error(self, error):
        self.events.append(("error", error))

    def names(self):
        return [name for name, _ in self.events]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the user's settings file and DIRED_* variables."""
    for name in ("DIRED_FIXED_WINDOW", "DIRED_SORT", "DIRED_SHOW_HIDDEN", "DIRED_LONG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    config_path = tmp_path / "config" / "config.json"
    monkeypatch.setattr("dired.config.settings.get_config_path", lambda: config_path)
    return config_path


@pytest.fixture
def sample_tree(tmp_path):
    """Directory ``a`` holding file ``f.txt`` and subdirectory ``b``."""
    root = tmp_path / "a"
    root.mkdir()
    (root / "f.txt").write_text("hello\n")
    (root / "b").mkdir()
    return root


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def navigator(sample_tree, listener):
    nav = Navigator(listeners=[listener])
    nav.open(sample_tree)
    listener.events.clear()
    return nav
