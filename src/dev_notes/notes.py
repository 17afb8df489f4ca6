"""Markdown note storage: one ``.md`` file per note, keyed by slugified title."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

log = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"
TAG_PREFIX = "Tags: "
DEFAULT_DATE_FORMAT = "%x"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


# ── Errors ──────────────────────────────────────────────────────────


class NoteError(Exception):
    """Base class for note storage errors."""


class NoteNotFoundError(NoteError):
    """Raised when a note file cannot be read or removed."""

    def __init__(self, title: str, filename: str, notes_dir: Path) -> None:
        self.title = title
        self.filename = filename
        self.notes_dir = notes_dir
        super().__init__(
            f'Note "{title}" not found (looked for {filename} in {notes_dir})'
        )


class StorageError(NoteError):
    """Raised for any other filesystem failure. The OSError is chained."""

    def __init__(self, message: str, cause: OSError | None = None) -> None:
        self.cause = cause
        super().__init__(message)


# ── Filenames ───────────────────────────────────────────────────────


def slugify(title: str) -> str:
    """Turn a title like "Project Ideas" into "project-ideas.md"."""
    slug = _NON_ALNUM.sub("-", title.lower().strip()).strip("-")
    return slug + NOTE_SUFFIX


def display_title(filename: str) -> str:
    """Turn "project-ideas.md" back into "Project Ideas"."""
    stem = filename[: -len(NOTE_SUFFIX)] if filename.endswith(NOTE_SUFFIX) else filename
    words = stem.replace("-", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


def apply_tags(content: str, tags: list[str]) -> str:
    """Return *content* with its first line set to the tag line for *tags*.

    An existing ``Tags: `` line is replaced, otherwise one is prepended.
    """
    tag_line = TAG_PREFIX + ", ".join(tags)
    lines = content.split("\n")
    if lines[0].startswith(TAG_PREFIX):
        lines = [tag_line, *lines[1:]]
    else:
        lines = [tag_line, *lines]
    return "\n".join(lines)


@dataclass
class NoteInfo:
    filename: str
    title: str
    modified: datetime

    def format_line(self, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        return f"- {self.title} ({self.filename}) — modified {self.modified.strftime(date_format)}"


# ── Store ───────────────────────────────────────────────────────────


class NoteStore:
    """File-based note storage rooted at a single notes directory.

    The directory is passed in explicitly so tests can point it at tmp_path.
    Every call goes straight to disk; nothing is cached.
    """

    def __init__(self, notes_dir: Path | str) -> None:
        self.notes_dir = Path(notes_dir)

    def path_for(self, title: str) -> Path:
        return self.notes_dir / slugify(title)

    def ensure_dir(self) -> None:
        """Create the notes directory (and parents) if missing."""
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"could not create notes directory {self.notes_dir}: {exc}", exc,
            ) from exc

    def save_note(self, title: str, content: str) -> Path:
        """Write *content* to the note for *title*, replacing any existing file."""
        self.ensure_dir()
        path = self.path_for(title)
        self._write(path, content)
        log.debug("saved %s (%d chars)", path.name, len(content))
        return path

    def list_notes(self) -> list[NoteInfo]:
        """Return every ``.md`` entry in the notes directory, sorted by filename."""
        self.ensure_dir()
        notes = []
        try:
            for entry in sorted(self.notes_dir.iterdir(), key=lambda p: p.name):
                if not entry.name.endswith(NOTE_SUFFIX):
                    continue
                mtime = entry.stat().st_mtime
                notes.append(NoteInfo(
                    filename=entry.name,
                    title=display_title(entry.name),
                    modified=datetime.fromtimestamp(mtime),
                ))
        except OSError as exc:
            raise StorageError(
                f"could not list notes directory {self.notes_dir}: {exc}", exc,
            ) from exc
        return notes

    def read_note(self, title: str) -> str:
        """Return the raw content of the note for *title*."""
        path = self.path_for(title)
        try:
            with path.open(encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise self._not_found(title) from exc

    def delete_note(self, title: str) -> str:
        """Remove the note for *title*. Returns the filename that was removed."""
        path = self.path_for(title)
        try:
            path.unlink()
        except OSError as exc:
            raise self._not_found(title) from exc
        log.debug("deleted %s", path.name)
        return path.name

    def tag_note(self, title: str, tags: list[str]) -> str:
        """Set the tag line of an existing note. Returns the new content."""
        existing = self.read_note(title)
        updated = apply_tags(existing, tags)
        path = self.path_for(title)
        self._write(path, updated)
        log.debug("tagged %s with %s", path.name, tags)
        return updated

    @staticmethod
    def _write(path: Path, content: str) -> None:
        # newline="" keeps \r and \r\n exactly as given
        try:
            path.write_text(content, encoding="utf-8", newline="")
        except OSError as exc:
            raise StorageError(f"could not write {path}: {exc}", exc) from exc

    def _not_found(self, title: str) -> NoteNotFoundError:
        return NoteNotFoundError(title, slugify(title), self.notes_dir)
