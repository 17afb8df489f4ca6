"""Entry point for the dev-notes server process."""

from __future__ import annotations

import argparse
import asyncio
import locale
import logging
import sys

from .commands import Dispatcher
from .mcp_server import build_server
from .notes import NoteStore
from .paths import DEFAULT_CONFIG_DIR, DEFAULT_NOTES_DIR, Paths
from .router import MessageRouter
from .settings import Settings
from .transport import Server, WebSocketServer

log = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "unix", "ws")


class NotesServer:
    """Owns the note store, dispatcher, and the socket transports."""

    def __init__(
        self,
        paths: Paths | None = None,
        ws_host: str | None = None,
        ws_port: int | None = None,
    ) -> None:
        self.paths = paths or Paths()
        self.settings = Settings(self.paths)
        self.store = NoteStore(self.paths.notes_dir)
        self.dispatcher = Dispatcher(
            self.store, date_format=self.settings.get("date_format"),
        )
        self.router = MessageRouter(self.dispatcher)
        self._ws_host = ws_host or self.settings.get("ws_host")
        self._ws_port = ws_port if ws_port is not None else self.settings.get("ws_port")

    def run_stdio(self) -> None:
        """Serve the MCP tools on stdin/stdout until the parent closes them."""
        server = build_server(self.dispatcher)
        log.info("MCP stdio server started (notes in %s)", self.paths.notes_dir)
        server.run(transport="stdio")

    async def run_unix(self) -> None:
        server = Server(self.router.handle, path=self.paths.socket_path)
        await self._serve(server)

    async def run_ws(self) -> None:
        server = WebSocketServer(
            self.router.handle, host=self._ws_host, port=self._ws_port,
        )
        await self._serve(server)

    async def _serve(self, server: Server | WebSocketServer) -> None:
        await server.start()
        log.info("dev-notes started (notes in %s)", self.paths.notes_dir)
        try:
            await server.serve_forever()
        except asyncio.CancelledError:
            log.info("dev-notes shutting down")
        finally:
            await server.stop()
            log.info("dev-notes stopped")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dev-notes",
        description="Markdown notes server for AI agents",
    )
    parser.add_argument(
        "--notes-dir", default=str(DEFAULT_NOTES_DIR),
        help="Notes directory (default: ~/dev-notes)",
    )
    parser.add_argument(
        "--config-dir", default=str(DEFAULT_CONFIG_DIR),
        help="Config directory (default: ~/.config/dev-notes)",
    )
    parser.add_argument(
        "--transport", choices=TRANSPORTS, default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("--ws-host", default=None, help="WebSocket host")
    parser.add_argument("--ws-port", type=int, default=None, help="WebSocket port")
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # stdout carries the MCP protocol, so logs always go to stderr.
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # "%x" in list_notes renders in the host locale only after this.
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as exc:
        log.warning("could not set LC_TIME from environment: %s", exc)

    paths = Paths(notes_dir=args.notes_dir, config_dir=args.config_dir)
    app = NotesServer(paths=paths, ws_host=args.ws_host, ws_port=args.ws_port)
    try:
        if args.transport == "stdio":
            app.run_stdio()
        elif args.transport == "unix":
            asyncio.run(app.run_unix())
        else:
            asyncio.run(app.run_ws())
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        log.error("Server failed to start: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
