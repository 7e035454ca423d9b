from __future__ import annotations

import io
import json
import socket
import threading
import time

from websockets.sync.client import connect as ws_connect

from trellis.config import ServerConfig
from trellis.handler import Handler
from trellis.protocol import methods
from trellis.protocol.language_features import Hover
from trellis.protocol.lifecycle import InitializeResult
from trellis.server.transport import serve_streams, serve_tcp, serve_ws
from tests.lsp_helpers import (
    KeptBytesIO,
    frame,
    free_port,
    initialize_params,
    read_framed,
    unframe_all,
)

HOVER_PARAMS = {"textDocument": {"uri": "file:///a.py"}, "position": {"line": 1, "character": 0}}


def _counter_handler() -> Handler:
    """Answers hover with the next line number, like a counter."""
    handler = Handler(
        hover=lambda ctx, params: Hover(contents=str(params.position.line + 1)),
        shutdown=lambda ctx: None,
    )
    handler.set_initialize_handler(
        lambda ctx, params: InitializeResult(capabilities=handler.create_server_capabilities())
    )
    return handler


def _session() -> list[dict[str, object]]:
    return [
        {"jsonrpc": "2.0", "id": 1, "method": methods.INITIALIZE, "params": initialize_params()},
        {"jsonrpc": "2.0", "id": 2, "method": methods.TEXT_DOCUMENT_HOVER, "params": HOVER_PARAMS},
        {"jsonrpc": "2.0", "id": 3, "method": methods.SHUTDOWN},
    ]


def _serve_in_thread(target, *args) -> tuple[threading.Thread, list[int]]:
    codes: list[int] = []
    thread = threading.Thread(target=lambda: codes.append(target(*args)), daemon=True)
    thread.start()
    return thread, codes


def _retry(connect, attempts: int = 50):
    for _ in range(attempts - 1):
        try:
            return connect()
        except OSError:
            time.sleep(0.1)
    return connect()


def test_serve_streams_returns_exit_code() -> None:
    reader = io.BytesIO(
        b"".join(frame(message) for message in _session())
        + frame({"jsonrpc": "2.0", "method": methods.EXIT})
    )
    writer = KeptBytesIO()
    assert serve_streams(_counter_handler(), reader, writer, ServerConfig(workers=1)) == 0
    replies = unframe_all(writer.getvalue())
    assert [reply["id"] for reply in replies] == [1, 2, 3]
    assert replies[1]["result"] == {"contents": "2"}


def test_tcp_transport() -> None:
    port = free_port()
    thread, codes = _serve_in_thread(
        serve_tcp, _counter_handler(), "127.0.0.1", port, ServerConfig(workers=1)
    )
    sock = _retry(lambda: socket.create_connection(("127.0.0.1", port), timeout=5))
    with sock:
        reader = sock.makefile("rb")
        writer = sock.makefile("wb")
        replies = []
        for message in _session():
            writer.write(frame(message))
            writer.flush()
            replies.append(read_framed(reader))
        writer.write(frame({"jsonrpc": "2.0", "method": methods.EXIT}))
        writer.flush()
        thread.join(timeout=5)
        reader.close()
        writer.close()
    assert [reply["id"] for reply in replies] == [1, 2, 3]
    assert replies[1]["result"] == {"contents": "2"}
    assert codes == [0]


def test_websocket_transport() -> None:
    port = free_port()
    thread, codes = _serve_in_thread(
        serve_ws, _counter_handler(), "127.0.0.1", port, ServerConfig(workers=1)
    )
    websocket = _retry(lambda: ws_connect(f"ws://127.0.0.1:{port}", open_timeout=5))
    with websocket:
        replies = []
        for message in _session():
            # One JSON-RPC message per text frame, no Content-Length header.
            websocket.send(json.dumps(message))
            replies.append(json.loads(websocket.recv(timeout=5)))
        websocket.send(json.dumps({"jsonrpc": "2.0", "method": methods.EXIT}))
        thread.join(timeout=5)
    assert [reply["id"] for reply in replies] == [1, 2, 3]
    assert replies[1]["result"] == {"contents": "2"}
    assert codes == [0]
