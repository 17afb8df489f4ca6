"""Tool dispatch: route a tool name + arguments to a note handler."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .notes import NoteNotFoundError, NoteStore, StorageError
from .protocol import RESP_ERROR, RESP_TEXT

log = logging.getLogger(__name__)

ERR_NOT_FOUND = "not_found"
ERR_STORAGE = "storage_failure"
ERR_UNKNOWN_TOOL = "unknown_tool"
ERR_INVALID_ARGS = "invalid_args"

TOOL_NAMES = ("save_note", "list_notes", "read_note", "delete_note", "tag_note")


@dataclass(frozen=True)
class ToolResult:
    """Uniform success/error envelope returned by every tool."""

    text: str
    is_error: bool = False
    code: str = ""

    @classmethod
    def ok(cls, text: str) -> ToolResult:
        return cls(text=text)

    @classmethod
    def error(cls, message: str, code: str = "") -> ToolResult:
        return cls(text=message, is_error=True, code=code)

    def to_payload(self) -> dict[str, Any]:
        if self.is_error:
            return {"type": RESP_ERROR, "content": {"message": self.text, "code": self.code}}
        return {"type": RESP_TEXT, "content": {"text": self.text}}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ToolResult:
        content = payload.get("content", {})
        if payload.get("type") == RESP_ERROR:
            return cls.error(content.get("message", ""), content.get("code", ""))
        return cls.ok(content.get("text", ""))


class InvalidArguments(ValueError):
    """Raised when a tool call is missing or mistypes an argument."""


def _require_str(args: dict[str, Any], name: str) -> str:
    value = args.get(name)
    if not isinstance(value, str):
        raise InvalidArguments(f"{name} must be a string")
    return value


def _require_tags(args: dict[str, Any]) -> list[str]:
    value = args.get("tags")
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise InvalidArguments("tags must be a list of strings")
    return value


class Dispatcher:
    """Runs the five note tools against a `NoteStore`."""

    def __init__(self, store: NoteStore, date_format: str = "%x") -> None:
        self.store = store
        self.date_format = date_format

    def dispatch(self, tool: str, args: dict[str, Any] | None = None) -> ToolResult:
        """Route *tool* to its handler and wrap the outcome in a `ToolResult`."""
        args = args or {}
        log.debug("tool call %s %s", tool, sorted(args))
        try:
            match tool:
                case "save_note":
                    return self.save_note(_require_str(args, "title"), _require_str(args, "content"))
                case "list_notes":
                    return self.list_notes()
                case "read_note":
                    return self.read_note(_require_str(args, "title"))
                case "delete_note":
                    return self.delete_note(_require_str(args, "title"))
                case "tag_note":
                    return self.tag_note(_require_str(args, "title"), _require_tags(args))
                case _:
                    return ToolResult.error(f"Unknown tool: {tool}", ERR_UNKNOWN_TOOL)
        except InvalidArguments as exc:
            return ToolResult.error(f"Invalid arguments for {tool}: {exc}", ERR_INVALID_ARGS)
        except NoteNotFoundError as exc:
            log.info("%s: %s", tool, exc)
            return ToolResult.error(str(exc), ERR_NOT_FOUND)
        except StorageError as exc:
            log.warning("%s failed: %s", tool, exc)
            return ToolResult.error(f"Storage failure: {exc}", ERR_STORAGE)

    # ── Handlers ─────────────────────────────────────────────────────

    def save_note(self, title: str, content: str) -> ToolResult:
        path = self.store.save_note(title, content)
        return ToolResult.ok(f'Saved note "{title}" to {path}')

    def list_notes(self) -> ToolResult:
        notes = self.store.list_notes()
        if not notes:
            return ToolResult.ok(f"No notes found in {self.store.notes_dir}")
        lines = "\n".join(n.format_line(self.date_format) for n in notes)
        return ToolResult.ok(f"Notes in {self.store.notes_dir}:\n\n{lines}")

    def read_note(self, title: str) -> ToolResult:
        return ToolResult.ok(self.store.read_note(title))

    def delete_note(self, title: str) -> ToolResult:
        filename = self.store.delete_note(title)
        return ToolResult.ok(f'Deleted note "{title}" ({filename})')

    def tag_note(self, title: str, tags: list[str]) -> ToolResult:
        self.store.tag_note(title, tags)
        return ToolResult.ok(f'Tagged "{title}" with: {", ".join(tags)}')
