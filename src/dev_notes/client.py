"""NotesClient — call dev-notes tools over the Unix socket."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .commands import ToolResult
from .protocol import (
    Message,
    MSG_ERROR,
    MSG_TOOL_CALL,
    MSG_TOOL_CATALOG,
    MSG_TOOL_LIST,
)
from .transport import Client


class NotesClient:
    """Thin request/response wrapper around `Client`.

    Usage:
        async with NotesClient(paths.socket_path) as notes:
            result = await notes.call_tool("read_note", title="Project Ideas")
    """

    def __init__(self, socket_path: Path | str, name: str = "notes-client") -> None:
        self._client = Client(socket_path)
        self._name = name

    async def __aenter__(self) -> NotesClient:
        await self._client.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self._client.close()
        await self._client.wait_closed()

    async def list_tools(self, timeout: float = 5.0) -> list[dict[str, Any]]:
        """Return the tool entries from the server manifest."""
        msg = Message.create(MSG_TOOL_LIST, sender=self._name, to="dev-notes")
        reply = await self._client.request(msg, timeout=timeout)
        if reply.type != MSG_TOOL_CATALOG:
            raise RuntimeError(f"expected {MSG_TOOL_CATALOG}, got {reply.type}")
        return reply.payload["server"]["tools"]

    async def call_tool(self, tool: str, timeout: float = 5.0, **args: Any) -> ToolResult:
        """Invoke *tool* with keyword *args* and return its result envelope."""
        msg = Message.create(
            MSG_TOOL_CALL, sender=self._name, to="dev-notes",
            payload={"tool": tool, "args": args},
        )
        reply = await self._client.request(msg, timeout=timeout)
        if reply.type == MSG_ERROR:
            return ToolResult.error(reply.payload.get("error", ""))
        return ToolResult.from_payload(reply.payload)
