"""Message router: turn protocol messages into tool calls."""

from __future__ import annotations

import logging
from typing import Any

from .commands import ERR_INVALID_ARGS, Dispatcher, ToolResult
from .manifest import MANIFEST, SERVER_NAME
from .protocol import (
    Message,
    MSG_ERROR,
    MSG_TOOL_CATALOG,
    MSG_TOOL_RESULT,
)

log = logging.getLogger(__name__)


class MessageRouter:
    """Answer incoming messages by type.

    Handlers are synchronous filesystem calls, so requests are served one
    at a time on the event loop.
    """

    def __init__(self, dispatcher: Dispatcher, manifest: dict[str, Any] = MANIFEST) -> None:
        self._dispatcher = dispatcher
        self._manifest = manifest

    async def handle(self, msg: Message) -> Message:
        """Main dispatch — route by msg.type and return the reply."""
        match msg.type:
            case "tool.list":
                return Message.reply(msg, SERVER_NAME, MSG_TOOL_CATALOG, {"server": self._manifest})
            case "tool.call":
                result = self._call(msg.payload)
                return Message.reply(msg, SERVER_NAME, MSG_TOOL_RESULT, result.to_payload())
            case _:
                return Message.reply(
                    msg, SERVER_NAME, MSG_ERROR, {"error": f"unknown message type: {msg.type}"},
                )

    def _call(self, payload: dict[str, Any]) -> ToolResult:
        tool = payload.get("tool", "")
        args = payload.get("args") or {}
        if not isinstance(args, dict):
            return ToolResult.error("args must be an object", ERR_INVALID_ARGS)
        try:
            return self._dispatcher.dispatch(tool, args)
        except Exception:
            log.exception("error handling %s", tool)
            return ToolResult.error("internal error")
