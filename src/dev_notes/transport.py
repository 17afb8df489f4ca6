"""Request/reply transports: newline-delimited JSON over a Unix socket, or
one message per frame over a WebSocket.

Every request line gets exactly one reply line, in order.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

import websockets
from websockets.asyncio.server import Server as WsServer, ServerConnection

from .protocol import (
    Message,
    ProtocolError,
    decode_message,
    encode_message,
    MSG_ERROR,
)

log = logging.getLogger(__name__)

Handler = Callable[[Message], Awaitable[Message]]


async def answer(handler: Handler, raw: str) -> Message:
    """Decode one request and return the reply to send back."""
    try:
        msg = decode_message(raw)
    except ProtocolError as exc:
        log.warning("malformed request: %s", exc)
        return Message.create(MSG_ERROR, sender="server", to="unknown", payload={"error": str(exc)})
    try:
        return await handler(msg)
    except Exception:
        log.exception("handler error for %s", msg.type)
        return Message.reply(msg, "server", MSG_ERROR, {"error": "internal error"})


async def _read_line(reader: asyncio.StreamReader) -> str | None:
    try:
        raw = await reader.readuntil(b"\n")
    except (asyncio.IncompleteReadError, ConnectionResetError):
        return None
    return raw.decode().rstrip("\n")


def _frame(msg: Message) -> bytes:
    return (encode_message(msg) + "\n").encode()


# ── Unix socket ─────────────────────────────────────────────────────


class Server:
    """Unix-socket server answering each request line with *handler*'s reply."""

    def __init__(self, handler: Handler, path: Path | str) -> None:
        self._handler = handler
        self._path = Path(path)
        self._server: asyncio.AbstractServer | None = None

    async def start(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if self._path.exists():
            self._path.unlink()
        self._server = await asyncio.start_unix_server(self._serve_client, path=str(self._path))
        log.info("Unix socket listening on %s", self._path)

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None
        if self._path.exists():
            self._path.unlink()

    async def serve_forever(self) -> None:
        if self._server is None:
            raise RuntimeError("call start() first")
        await self._server.serve_forever()

    async def _serve_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
    ) -> None:
        try:
            while (line := await _read_line(reader)) is not None:
                reply = await answer(self._handler, line)
                writer.write(_frame(reply))
                await writer.drain()
        except (ConnectionResetError, BrokenPipeError) as exc:
            log.debug("client went away: %s", exc)
        finally:
            writer.close()


class Client:
    """Unix-socket client: one request, one reply."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

    async def connect(self) -> None:
        self._reader, self._writer = await asyncio.open_unix_connection(str(self._path))

    async def request(self, msg: Message, timeout: float = 5.0) -> Message:
        """Send *msg* and return the server's reply to it."""
        if self._reader is None or self._writer is None:
            raise RuntimeError("call connect() first")
        self._writer.write(_frame(msg))
        await self._writer.drain()
        line = await asyncio.wait_for(_read_line(self._reader), timeout=timeout)
        if line is None:
            raise ConnectionError("server closed connection")
        reply = decode_message(line)
        if reply.reply_to != msg.id:
            raise ProtocolError(f"reply to {reply.reply_to}, expected {msg.id}")
        return reply

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()

    async def wait_closed(self) -> None:
        if self._writer is not None:
            await self._writer.wait_closed()


# ── WebSocket ───────────────────────────────────────────────────────


class WebSocketServer:
    """WebSocket server: each text frame is a request, answered by one frame."""

    def __init__(self, handler: Handler, host: str = "127.0.0.1", port: int = 8765) -> None:
        self._handler = handler
        self._host = host
        self._port = port
        self._server: WsServer | None = None

    @property
    def port(self) -> int:
        """The bound port (useful when started with port 0)."""
        if self._server is None:
            return self._port
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        self._server = await websockets.serve(self._serve_client, self._host, self._port)
        log.info("WebSocket listening on ws://%s:%d", self._host, self.port)

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    async def serve_forever(self) -> None:
        if self._server is None:
            raise RuntimeError("call start() first")
        await self._server.serve_forever()

    async def _serve_client(self, ws: ServerConnection) -> None:
        try:
            async for raw in ws:
                if isinstance(raw, bytes):
                    raw = raw.decode()
                reply = await answer(self._handler, raw)
                await ws.send(encode_message(reply))
        except websockets.exceptions.ConnectionClosed:
            pass
