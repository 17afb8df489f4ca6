"""ManifestBuilder and the dev-notes server manifest."""

from __future__ import annotations

from typing import Any

SERVER_NAME = "dev-notes"
SERVER_VERSION = "1.0.0"


class ManifestBuilder:
    """Fluent builder for server manifests.

    Usage:
        manifest = (ManifestBuilder("dev-notes")
            .version("1.0.0")
            .description("Markdown notes in ~/dev-notes/")
            .tool("read_note", "Read a note by title", args={"title": "str"})
            .build())
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._version = ""
        self._description = ""
        self._tools: list[dict[str, Any]] = []

    def version(self, version: str) -> ManifestBuilder:
        self._version = version
        return self

    def description(self, desc: str) -> ManifestBuilder:
        self._description = desc
        return self

    def tool(
        self,
        name: str,
        desc: str = "",
        args: dict[str, Any] | None = None,
    ) -> ManifestBuilder:
        entry: dict[str, Any] = {"name": name, "description": desc}
        if args:
            entry["args"] = args
        self._tools.append(entry)
        return self

    def build(self) -> dict[str, Any]:
        return {
            "name": self._name,
            "version": self._version,
            "description": self._description,
            "tools": self._tools,
        }


MANIFEST = (
    ManifestBuilder(SERVER_NAME)
    .version(SERVER_VERSION)
    .description("Save, list, read, delete, and tag markdown notes")
    .tool("save_note", "Save a markdown note to the notes directory",
          args={"title": "str", "content": "str"})
    .tool("list_notes", "List all saved notes in the notes directory")
    .tool("read_note", "Read a note from the notes directory by title",
          args={"title": "str"})
    .tool("delete_note", "Delete a note from the notes directory by title",
          args={"title": "str"})
    .tool("tag_note", "Add or update tags on a note in the notes directory",
          args={"title": "str", "tags": "list[str]"})
    .build()
)


def tool_description(name: str) -> str:
    """Return the manifest description for tool *name*."""
    for entry in MANIFEST["tools"]:
        if entry["name"] == name:
            return entry["description"]
    raise KeyError(name)
