"""Tests for dev_notes.paths and dev_notes.settings."""

from pathlib import Path

import pytest

from dev_notes.paths import DEFAULT_NOTES_DIR, Paths
from dev_notes.settings import DEFAULTS, Settings


class TestPaths:
    def test_default_notes_dir(self):
        assert DEFAULT_NOTES_DIR == Path.home() / "dev-notes"
        assert Paths().notes_dir == Path.home() / "dev-notes"

    def test_custom_dirs(self, tmp_path):
        p = Paths(notes_dir=tmp_path / "n", config_dir=tmp_path / "c")
        assert p.notes_dir == tmp_path / "n"
        assert p.settings_file == tmp_path / "c" / "settings.json"
        assert p.socket_path == tmp_path / "c" / "dev-notes.sock"

    def test_expands_user(self):
        assert Paths(notes_dir="~/x").notes_dir == Path.home() / "x"


class TestSettings:
    def test_defaults_when_missing(self, paths):
        assert Settings(paths).load() == DEFAULTS

    def test_set_and_get(self, paths):
        s = Settings(paths)
        s.set("date_format", "%d/%m/%Y")
        assert s.get("date_format") == "%d/%m/%Y"
        assert paths.settings_file.exists()

    def test_corrupt_file_falls_back(self, paths):
        paths.settings_file.parent.mkdir(parents=True)
        paths.settings_file.write_text("{not json", encoding="utf-8")
        assert Settings(paths).get("ws_port") == 8765

    def test_unknown_key_rejected(self, paths):
        with pytest.raises(KeyError):
            Settings(paths).set("colour", "blue")

    def test_is_valid_key(self):
        assert Settings.is_valid_key("ws_host")
        assert not Settings.is_valid_key("model")

    def test_non_object_json_falls_back(self, paths):
        paths.settings_file.parent.mkdir(parents=True)
        paths.settings_file.write_text('"x"', encoding="utf-8")
        assert Settings(paths).load() == DEFAULTS
