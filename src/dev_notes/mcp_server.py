"""MCP server exposing the note tools over stdio.

MCP servers talk JSON-RPC over stdin/stdout; the agent launches this
process and calls the tools by name.
"""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from .commands import Dispatcher, ToolResult
from .manifest import SERVER_NAME, SERVER_VERSION, tool_description

log = logging.getLogger(__name__)


def _unwrap(result: ToolResult) -> str:
    """Return the text of a successful result; raise ToolError otherwise.

    FastMCP turns a raised ToolError into a result with ``isError`` set.
    """
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def _register_tools(server: FastMCP, dispatcher: Dispatcher) -> None:
    @server.tool(name="save_note", description=tool_description("save_note"))
    def save_note(title: str, content: str) -> str:
        """Save a note.

        Args:
            title: Title of the note (used as filename)
            content: Markdown content of the note
        """
        return _unwrap(dispatcher.dispatch("save_note", {"title": title, "content": content}))

    @server.tool(name="list_notes", description=tool_description("list_notes"))
    def list_notes() -> str:
        return _unwrap(dispatcher.dispatch("list_notes"))

    @server.tool(name="read_note", description=tool_description("read_note"))
    def read_note(title: str) -> str:
        """Read a note.

        Args:
            title: Title of the note to read
        """
        return _unwrap(dispatcher.dispatch("read_note", {"title": title}))

    @server.tool(name="delete_note", description=tool_description("delete_note"))
    def delete_note(title: str) -> str:
        """Delete a note.

        Args:
            title: Title of the note to delete
        """
        return _unwrap(dispatcher.dispatch("delete_note", {"title": title}))

    @server.tool(name="tag_note", description=tool_description("tag_note"))
    def tag_note(title: str, tags: list[str]) -> str:
        """Tag a note.

        Args:
            title: Title of the note to tag
            tags: List of tags to apply
        """
        return _unwrap(dispatcher.dispatch("tag_note", {"title": title, "tags": tags}))


def build_server(dispatcher: Dispatcher) -> FastMCP:
    """Create a FastMCP server with the five note tools registered."""
    server = FastMCP(SERVER_NAME)
    # FastMCP takes no version argument; serverInfo reads it from the low-level server.
    server._mcp_server.version = SERVER_VERSION
    _register_tools(server, dispatcher)
    log.debug("registered note tools on %s", SERVER_NAME)
    return server
