"""Integration tests: full server with a real client over the Unix socket."""

from __future__ import annotations

import asyncio

import pytest

from dev_notes.client import NotesClient
from dev_notes.commands import ERR_NOT_FOUND, ERR_UNKNOWN_TOOL, ToolResult
from dev_notes.main import NotesServer
from dev_notes.paths import Paths
from dev_notes.transport import Server


@pytest.fixture
async def running_server(tmp_path, sock_path):
    """Start a real server on a temp socket and yield (app, socket_path)."""
    paths = Paths(notes_dir=tmp_path / "dev-notes", config_dir=tmp_path / "config")
    app = NotesServer(paths=paths)
    server = Server(app.router.handle, path=sock_path)
    await server.start()
    task = asyncio.create_task(server.serve_forever())
    yield app, sock_path
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    await server.stop()


async def test_tool_discovery(running_server):
    _, sock = running_server
    async with NotesClient(sock) as notes:
        tools = await notes.list_tools()
    names = sorted(t["name"] for t in tools)
    assert names == ["delete_note", "list_notes", "read_note", "save_note", "tag_note"]


async def test_full_note_lifecycle(running_server):
    app, sock = running_server
    notes_dir = app.paths.notes_dir
    async with NotesClient(sock) as notes:
        result = await notes.call_tool("save_note", title="Test Note", content="# Test\nHello world")
        assert result == ToolResult.ok(f'Saved note "Test Note" to {notes_dir / "test-note.md"}')
        await notes.call_tool("save_note", title="Another One", content="second")

        listing = await notes.call_tool("list_notes")
        assert "test-note.md" in listing.text
        assert "another-one.md" in listing.text

        read = await notes.call_tool("read_note", title="Test Note")
        assert read.text == "# Test\nHello world"

        tagged = await notes.call_tool("tag_note", title="Test Note", tags=["test", "demo"])
        assert tagged.text == 'Tagged "Test Note" with: test, demo'
        read = await notes.call_tool("read_note", title="Test Note")
        assert read.text == "Tags: test, demo\n# Test\nHello world"

        await notes.call_tool("tag_note", title="Test Note", tags=["updated"])
        read = await notes.call_tool("read_note", title="Test Note")
        assert read.text.startswith("Tags: updated\n")
        assert "Tags: test" not in read.text

        deleted = await notes.call_tool("delete_note", title="Test Note")
        assert deleted.text == 'Deleted note "Test Note" (test-note.md)'

        gone = await notes.call_tool("read_note", title="Test Note")
        assert gone.is_error
        assert gone.code == ERR_NOT_FOUND

        listing = await notes.call_tool("list_notes")
        assert "test-note.md" not in listing.text
        assert "another-one.md" in listing.text


async def test_unknown_tool(running_server):
    _, sock = running_server
    async with NotesClient(sock) as notes:
        result = await notes.call_tool("rename_note", title="x")
    assert result.is_error
    assert result.code == ERR_UNKNOWN_TOOL
