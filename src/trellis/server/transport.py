"""Run a ``Handler`` over stdio, TCP or WebSocket with pygls's JSON-RPC server."""

from __future__ import annotations

from typing import BinaryIO
import asyncio
import logging
import sys

from pygls.protocol import default_converter
from pygls.server import JsonRPCServer

from trellis.config import ServerConfig
from trellis.handler import Handler
from trellis.server.protocol import LSPProtocol

logger = logging.getLogger(__name__)


class LSPServer(JsonRPCServer):
    """A pygls server with a single ``LSPProtocol`` bound to ``handler``.

    The protocol is shared by every connection the server accepts, so it
    serves one client at a time; ``exit`` ends the session and, for TCP and
    WebSocket, stops listening.
    """

    protocol: LSPProtocol

    def __init__(self, handler: Handler, config: ServerConfig | None = None) -> None:
        # Read by LSPProtocol.__init__, which the base constructor calls.
        self.lsp_handler = handler
        self.settings = config or ServerConfig()
        super().__init__(LSPProtocol, default_converter)

    @property
    def exit_code(self) -> int:
        code = self.protocol.exit_code
        return code if code is not None else 1


def serve_streams(
    handler: Handler,
    reader: BinaryIO,
    writer: BinaryIO,
    config: ServerConfig | None = None,
) -> int:
    """Serve one session on a pair of byte streams; return the exit code."""
    server = LSPServer(handler, config)
    try:
        server.start_io(reader, writer)
    finally:
        server.protocol.close()
    return server.exit_code


def serve_stdio(handler: Handler, config: ServerConfig | None = None) -> int:
    """Serve one session on stdin/stdout; return the exit code for the process."""
    logger.info("serving on stdio")
    return serve_streams(handler, sys.stdin.buffer, sys.stdout.buffer, config)


def serve_tcp(
    handler: Handler,
    host: str,
    port: int,
    config: ServerConfig | None = None,
) -> int:
    server = LSPServer(handler, config)
    logger.info("listening for TCP connections on %s:%s", host, port)
    try:
        server.start_tcp(host, port)
    except asyncio.CancelledError:
        logger.info("TCP server stopped")
    finally:
        server.protocol.close()
    return server.exit_code


def serve_ws(
    handler: Handler,
    host: str,
    port: int,
    config: ServerConfig | None = None,
) -> int:
    server = LSPServer(handler, config)
    logger.info("listening for WebSocket connections on %s:%s", host, port)
    try:
        server.start_ws(host, port)
    except asyncio.CancelledError:
        logger.info("WebSocket server stopped")
    finally:
        server.protocol.close()
    return server.exit_code
