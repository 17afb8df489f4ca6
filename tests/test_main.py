"""Tests for dev_notes.main."""

from __future__ import annotations

import pytest

from dev_notes import main as main_mod
from dev_notes.main import NotesServer, build_parser
from dev_notes.settings import Settings


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.notes_dir.endswith("dev-notes")
        assert not args.verbose

    def test_options(self, tmp_path):
        args = build_parser().parse_args([
            "--notes-dir", str(tmp_path), "--transport", "ws", "--ws-port", "9001", "-v",
        ])
        assert args.notes_dir == str(tmp_path)
        assert args.transport == "ws"
        assert args.ws_port == 9001
        assert args.verbose

    def test_rejects_unknown_transport(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--transport", "http"])


class TestNotesServer:
    def test_uses_configured_notes_dir(self, paths):
        app = NotesServer(paths=paths)
        assert app.store.notes_dir == paths.notes_dir

    def test_date_format_from_settings(self, paths):
        Settings(paths).set("date_format", "%Y")
        app = NotesServer(paths=paths)
        assert app.dispatcher.date_format == "%Y"


class TestStartupFailure:
    def test_bind_failure_exits(self, tmp_path, monkeypatch):
        async def _fail(self):
            raise OSError("address in use")

        monkeypatch.setattr(NotesServer, "run_unix", _fail)
        with pytest.raises(SystemExit) as excinfo:
            main_mod.main([
                "--notes-dir", str(tmp_path / "n"),
                "--config-dir", str(tmp_path / "c"),
                "--transport", "unix",
            ])
        assert excinfo.value.code == 1

    def test_stdio_runs_mcp_server(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(NotesServer, "run_stdio", lambda self: calls.append(self.paths))
        main_mod.main(["--notes-dir", str(tmp_path / "n"), "--config-dir", str(tmp_path / "c")])
        assert len(calls) == 1
        assert calls[0].notes_dir == tmp_path / "n"


class TestLocale:
    def test_main_adopts_host_time_locale(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(main_mod.locale, "setlocale", lambda cat, loc=None: calls.append((cat, loc)))
        monkeypatch.setattr(NotesServer, "run_stdio", lambda self: None)
        main_mod.main(["--notes-dir", str(tmp_path / "n"), "--config-dir", str(tmp_path / "c")])
        assert calls == [(main_mod.locale.LC_TIME, "")]

    def test_unsupported_locale_is_not_fatal(self, tmp_path, monkeypatch):
        def _fail(cat, loc=None):
            raise main_mod.locale.Error("unsupported locale setting")

        monkeypatch.setattr(main_mod.locale, "setlocale", _fail)
        monkeypatch.setattr(NotesServer, "run_stdio", lambda self: None)
        main_mod.main(["--notes-dir", str(tmp_path / "n"), "--config-dir", str(tmp_path / "c")])
