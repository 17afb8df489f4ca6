"""Shared fixtures for dev-notes tests."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from dev_notes.commands import Dispatcher
from dev_notes.notes import NoteStore
from dev_notes.paths import Paths


@pytest.fixture
def paths(tmp_path):
    return Paths(notes_dir=tmp_path / "dev-notes", config_dir=tmp_path / "config")


@pytest.fixture
def store(paths):
    return NoteStore(paths.notes_dir)


@pytest.fixture
def dispatcher(store):
    return Dispatcher(store, date_format="%Y-%m-%d")


@pytest.fixture
def sock_path():
    """Return a temporary socket path short enough for macOS (max 104 chars)."""
    with tempfile.TemporaryDirectory(dir="/tmp") as td:
        yield Path(td) / "notes.sock"

