"""Tests for settings persistence and environment overrides."""

import json

import pytest

from dired.config.settings import (
    DiredSettings,
    SortOrder,
    load_settings,
    save_settings,
    validate_env_var,
)
from dired.exceptions import ConfigurationError


class TestSortOrder:
    def test_next_cycles_through_all(self):
        seen = [SortOrder.DIRS_FIRST]
        for _ in range(len(SortOrder)):
            seen.append(seen[-1].next())
        assert seen[-1] is SortOrder.DIRS_FIRST
        assert set(seen) == set(SortOrder)


class TestDiredSettings:
    """Test the settings dataclass."""

    def test_defaults(self):
        settings = DiredSettings()
        assert settings.fixed_window
        assert settings.sort_order is SortOrder.DIRS_FIRST
        assert settings.show_hidden
        assert not settings.long_format

    def test_dict_round_trip(self):
        settings = DiredSettings(fixed_window=False, sort_order=SortOrder.NATIVE, long_format=True)
        assert DiredSettings.from_dict(settings.to_dict()) == settings

    def test_from_dict_ignores_unknown_keys(self):
        assert DiredSettings.from_dict({"theme": "dark"}) == DiredSettings()

    def test_from_dict_parses_boolean_strings(self):
        settings = DiredSettings.from_dict({"show_hidden": "false", "long_format": "Yes"})
        assert not settings.show_hidden
        assert settings.long_format

    @pytest.mark.parametrize("value", ["maybe", 1, None, [True]])
    def test_from_dict_rejects_non_boolean(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            DiredSettings.from_dict({"fixed_window": value})
        assert exc_info.value.context["setting"] == "fixed_window"

    def test_from_dict_rejects_unknown_sort(self):
        with pytest.raises(ConfigurationError) as exc_info:
            DiredSettings.from_dict({"sort_order": "size"})
        assert exc_info.value.context["setting"] == "sort_order"


class TestLoadSettings:
    """Test reading settings from file and environment."""

    def test_missing_file_gives_defaults(self, isolated_settings):
        assert not isolated_settings.exists()
        assert load_settings() == DiredSettings()

    def test_save_then_load(self, isolated_settings):
        save_settings(DiredSettings(show_hidden=False))
        assert isolated_settings.exists()
        assert load_settings() == DiredSettings(show_hidden=False)

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"long_format": True}))
        assert load_settings(path).long_format

    def test_corrupt_file_falls_back_to_defaults(self, isolated_settings, caplog):
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text("{not json")
        assert load_settings() == DiredSettings()
        assert "Ignoring unreadable settings file" in caplog.text

    def test_non_object_file_is_ignored(self, isolated_settings):
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text("[1, 2]")
        assert load_settings() == DiredSettings()

    @pytest.mark.parametrize(
        "name,value,expected",
        [
            ("DIRED_FIXED_WINDOW", "false", DiredSettings(fixed_window=False)),
            ("DIRED_SORT", "name", DiredSettings(sort_order=SortOrder.NAME)),
            ("DIRED_SHOW_HIDDEN", "0", DiredSettings(show_hidden=False)),
            ("DIRED_LONG_FORMAT", "YES", DiredSettings(long_format=True)),
        ],
    )
    def test_environment_overrides(self, monkeypatch, name, value, expected):
        monkeypatch.setenv(name, value)
        assert load_settings() == expected

    def test_environment_beats_file(self, isolated_settings, monkeypatch):
        save_settings(DiredSettings(sort_order=SortOrder.NATIVE))
        monkeypatch.setenv("DIRED_SORT", "dirs-first")
        assert load_settings().sort_order is SortOrder.DIRS_FIRST

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("DIRED_SORT", "size")
        with pytest.raises(ConfigurationError):
            load_settings()


class TestValidateEnvVar:
    def test_unknown_variable_is_valid(self):
        assert validate_env_var("DIRED_UNKNOWN", "anything") == (True, None)

    def test_unset_is_valid(self):
        assert validate_env_var("DIRED_SORT", None) == (True, None)

    def test_invalid_value_message(self):
        is_valid, error = validate_env_var("DIRED_SHOW_HIDDEN", "maybe")
        assert not is_valid
        assert "DIRED_SHOW_HIDDEN" in error


class TestSaveSettings:
    def test_unwritable_location_is_not_fatal(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        save_settings(DiredSettings(), blocker / "config.json")
        assert "Could not save settings" in caplog.text
