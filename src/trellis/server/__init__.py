from __future__ import annotations

from trellis.server.protocol import LSPProtocol, error_for
from trellis.server.transport import (
    LSPServer,
    serve_stdio,
    serve_streams,
    serve_tcp,
    serve_ws,
)

__all__ = [
    "LSPProtocol",
    "LSPServer",
    "error_for",
    "serve_stdio",
    "serve_streams",
    "serve_tcp",
    "serve_ws",
]
