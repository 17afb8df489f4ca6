"""Centralised path constants, parameterized by notes and config directories.

Usage:
    paths = Paths()                                           # production
    paths = Paths(notes_dir=tmp_path / "notes",
                  config_dir=tmp_path / "config")             # tests
"""

from pathlib import Path

DEFAULT_NOTES_DIR = Path.home() / "dev-notes"
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "dev-notes"


class Paths:
    """All dev-notes paths derived from the notes and config directories."""

    def __init__(
        self,
        notes_dir: Path | str = DEFAULT_NOTES_DIR,
        config_dir: Path | str = DEFAULT_CONFIG_DIR,
    ) -> None:
        self.notes_dir = Path(notes_dir).expanduser()
        self.config_dir = Path(config_dir).expanduser()

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.json"

    @property
    def socket_path(self) -> Path:
        return self.config_dir / "dev-notes.sock"
