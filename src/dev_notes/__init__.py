"""dev-notes: markdown note tools for AI agents."""

from .commands import Dispatcher, ToolResult
from .notes import NoteError, NoteNotFoundError, NoteStore, StorageError, slugify
from .paths import Paths

__all__ = [
    "Dispatcher",
    "NoteError",
    "NoteNotFoundError",
    "NoteStore",
    "Paths",
    "StorageError",
    "ToolResult",
    "slugify",
]
