from __future__ import annotations

import io
import socket
import threading

import pytest

from trellis.config import ServerConfig
from trellis.exceptions import LSPError, RequestCancelledError, ResponseError
from trellis.handler import Handler, HandleResult
from trellis.protocol import methods
from trellis.protocol.language_features import Hover
from trellis.protocol.lifecycle import InitializeResult
from trellis.server.protocol import error_for
from trellis.server.transport import serve_streams
from tests.lsp_helpers import (
    KeptBytesIO,
    frame,
    initialize_params,
    read_framed,
    unframe_all,
)

SERIAL = ServerConfig(workers=1)
HOVER_PARAMS = {"textDocument": {"uri": "file:///a.py"}, "position": {"line": 0, "character": 0}}


def _request(request_id, method, params=None):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def _notification(method, params=None):
    message = {"jsonrpc": "2.0", "method": method}
    if params is not None:
        message["params"] = params
    return message


SHUTDOWN_AND_EXIT = (_request("bye", methods.SHUTDOWN), _notification(methods.EXIT))


def _handler(**handlers) -> Handler:
    handler = Handler(**handlers)
    handler.set_initialize_handler(
        lambda ctx, params: InitializeResult(
            capabilities=handler.create_server_capabilities()
        )
    )
    if not handler.has_handler(methods.SHUTDOWN):
        handler.set_shutdown_handler(lambda ctx: None)
    return handler


def _run(handler: Handler, *messages, config: ServerConfig = SERIAL):
    reader = io.BytesIO(b"".join(frame(message) for message in messages))
    writer = KeptBytesIO()
    code = serve_streams(handler, reader, writer, config)
    replies = unframe_all(writer.getvalue())
    return code, {reply.get("id"): reply for reply in replies}, replies


def test_full_session() -> None:
    opened = []
    handler = _handler(
        hover=lambda ctx, params: Hover(contents=f"line {params.position.line}"),
        text_document_did_open=lambda ctx, params: opened.append(params.text_document.uri),
    )
    code, by_id, _ = _run(
        handler,
        _request(1, methods.INITIALIZE, initialize_params()),
        _notification(methods.INITIALIZED, {}),
        _notification(
            methods.TEXT_DOCUMENT_DID_OPEN,
            {
                "textDocument": {
                    "uri": "file:///a.py",
                    "languageId": "python",
                    "version": 1,
                    "text": "x = 1\n",
                }
            },
        ),
        _request("h", methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS),
        _request(2, methods.SHUTDOWN),
        _notification(methods.EXIT),
    )
    assert code == 0
    assert by_id[1]["result"]["capabilities"]["hoverProvider"] is True
    assert "textDocumentSync" not in by_id[1]["result"]["capabilities"]
    assert by_id["h"] == {"jsonrpc": "2.0", "id": "h", "result": {"contents": "line 0"}}
    assert by_id[2] == {"jsonrpc": "2.0", "id": 2, "result": None}
    assert opened == ["file:///a.py"]


def test_exit_without_shutdown_exits_with_one() -> None:
    code, _, _ = _run(
        _handler(),
        _request(1, methods.INITIALIZE, initialize_params()),
        _notification(methods.EXIT),
    )
    assert code == 1


def test_shutdown_without_callback_is_unknown_but_still_counts() -> None:
    handler = Handler(
        initialize=lambda ctx, params: InitializeResult(
            capabilities=handler.create_server_capabilities()
        )
    )
    code, by_id, _ = _run(
        handler,
        _request(1, methods.INITIALIZE, initialize_params()),
        _request(2, methods.SHUTDOWN),
        _notification(methods.EXIT),
    )
    assert by_id[2]["error"] == {"code": -32601, "message": "method not supported: shutdown"}
    assert code == 0


def test_end_of_stream_without_exit() -> None:
    code, by_id, _ = _run(_handler(), _request(1, methods.INITIALIZE, initialize_params()))
    assert code == 1
    assert "result" in by_id[1]


def test_nothing_after_exit_is_read() -> None:
    _, by_id, replies = _run(
        _handler(),
        _request(1, methods.INITIALIZE, initialize_params()),
        *SHUTDOWN_AND_EXIT,
        _request(9, methods.SHUTDOWN),
    )
    assert 9 not in by_id
    assert [reply["id"] for reply in replies] == [1, "bye"]


def test_request_before_initialize_is_rejected() -> None:
    _, by_id, _ = _run(
        _handler(hover=lambda ctx, params: None),
        _request(7, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS),
        _notification(methods.EXIT),
    )
    assert by_id[7]["error"]["code"] == -32002


def test_unknown_method_and_bad_params() -> None:
    _, by_id, _ = _run(
        _handler(hover=lambda ctx, params: None),
        _request(1, methods.INITIALIZE, initialize_params()),
        _request(2, "custom/unknown", {}),
        _request(3, methods.TEXT_DOCUMENT_HOVER, {"position": "nowhere"}),
        *SHUTDOWN_AND_EXIT,
    )
    assert by_id[2]["error"] == {"code": -32601, "message": "method not supported: custom/unknown"}
    assert by_id[3]["error"]["code"] == -32602
    assert "textDocument/hover" in by_id[3]["error"]["message"]


def test_lsp_errors_keep_code_and_data() -> None:
    def _hover(ctx, params):
        raise LSPError(-32803, "request failed", {"retry": True})

    _, by_id, _ = _run(
        _handler(hover=_hover),
        _request(1, methods.INITIALIZE, initialize_params()),
        _request(2, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS),
        *SHUTDOWN_AND_EXIT,
    )
    assert by_id[2]["error"] == {"code": -32803, "message": "request failed", "data": {"retry": True}}


def test_plain_exceptions_become_invalid_request() -> None:
    def _hover(ctx, params):
        raise RuntimeError("index not ready")

    _, by_id, _ = _run(
        _handler(hover=_hover),
        _request(1, methods.INITIALIZE, initialize_params()),
        _request(2, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS),
        *SHUTDOWN_AND_EXIT,
    )
    assert by_id[2]["error"] == {"code": -32600, "message": "index not ready"}


def test_malformed_messages_are_invalid_requests() -> None:
    reader = io.BytesIO(
        frame([1, 2])  # type: ignore[arg-type]
        + frame({"jsonrpc": "2.0", "id": True, "method": "x"})
        + frame({"jsonrpc": "2.0", "id": 4})
        + frame(_notification(methods.EXIT))
    )
    writer = KeptBytesIO()
    serve_streams(_handler(), reader, writer, SERIAL)
    replies = unframe_all(writer.getvalue())
    assert [reply["error"]["code"] for reply in replies] == [-32600, -32600, -32600]
    assert [reply["id"] for reply in replies] == [None, None, 4]


def test_body_that_is_not_json_is_skipped() -> None:
    reader = io.BytesIO(
        b"Content-Length: 5\r\n\r\n{oops"
        + frame(_request(1, methods.INITIALIZE, initialize_params()))
        + frame(_notification(methods.EXIT))
    )
    writer = KeptBytesIO()
    serve_streams(_handler(), reader, writer, SERIAL)
    replies = unframe_all(writer.getvalue())
    assert [reply["id"] for reply in replies if "id" in reply] == [1]


def test_cancel_request_cancels_token() -> None:
    def _hover(ctx, params):
        ctx.token.wait(5)
        ctx.token.raise_if_cancelled()
        return None

    _, by_id, _ = _run(
        _handler(hover=_hover),
        _request(1, methods.INITIALIZE, initialize_params()),
        _request(2, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS),
        _notification(methods.CANCEL_REQUEST, {"id": 2}),
        *SHUTDOWN_AND_EXIT,
        config=ServerConfig(workers=2),
    )
    assert by_id[2]["error"]["code"] == -32800


def test_request_deadline_cancels() -> None:
    def _hover(ctx, params):
        ctx.token.wait(0.2)
        ctx.token.raise_if_cancelled()

    handler = _handler(hover=_hover)
    handler.set_initialized(True)
    _, by_id, _ = _run(
        handler,
        _request(2, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS),
        _notification(methods.EXIT),
        config=ServerConfig(workers=1, request_timeout_ms=1),
    )
    assert by_id[2]["error"]["code"] == -32800


def test_notifications_finish_before_later_requests() -> None:
    seen = []

    def _did_change(ctx, params):
        threading.Event().wait(0.05)
        seen.append("change")

    def _hover(ctx, params):
        seen.append("hover")
        return None

    _run(
        _handler(hover=_hover, text_document_did_change=_did_change),
        _request(1, methods.INITIALIZE, initialize_params()),
        _notification(
            methods.TEXT_DOCUMENT_DID_CHANGE,
            {
                "textDocument": {"uri": "file:///a.py", "version": 2},
                "contentChanges": [{"text": "y = 2\n"}],
            },
        ),
        _request(2, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS),
        *SHUTDOWN_AND_EXIT,
        config=ServerConfig(workers=4),
    )
    assert seen == ["change", "hover"]


def test_error_for_maps_outcomes() -> None:
    assert error_for(HandleResult(result=1, method_valid=True, params_valid=True), "m") is None
    cancelled = HandleResult(method_valid=True, params_valid=True, error=RequestCancelledError())
    assert error_for(cancelled, "m")["code"] == -32800
    assert error_for(HandleResult(), "m")["code"] == -32601


class _Client:
    """Drives a session over a socket pair, one message at a time."""

    def __init__(self, handler: Handler, config: ServerConfig) -> None:
        self._server_sock, self._client_sock = socket.socketpair()
        self.reader = self._client_sock.makefile("rb")
        self.writer = self._client_sock.makefile("wb")
        self._server_files = (
            self._server_sock.makefile("rb"),
            self._server_sock.makefile("wb"),
        )
        self.exit_code: list[int] = []
        self._thread = threading.Thread(
            target=lambda: self.exit_code.append(
                serve_streams(handler, *self._server_files, config)
            ),
            daemon=True,
        )
        self._thread.start()

    def send(self, message) -> None:
        self.writer.write(frame(message))
        self.writer.flush()

    def receive(self):
        return read_framed(self.reader)

    def close(self) -> None:
        self._thread.join(timeout=5)
        for item in (self.reader, self.writer, *self._server_files):
            item.close()
        self._client_sock.close()
        self._server_sock.close()


@pytest.fixture
def client_factory():
    clients: list[_Client] = []

    def _make(handler: Handler, config: ServerConfig = ServerConfig()) -> _Client:
        client = _Client(handler, config)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


def test_outbound_call_is_correlated(client_factory) -> None:
    def _hover(ctx, params):
        (setting,) = ctx.call(methods.WORKSPACE_CONFIGURATION, {"items": [{"section": "x"}]})
        ctx.notify(methods.WINDOW_LOG_MESSAGE, {"type": 4, "message": "hovered"})
        return Hover(contents=str(setting))

    client = client_factory(_handler(hover=_hover))
    client.send(_request(1, methods.INITIALIZE, initialize_params()))
    assert client.receive()["id"] == 1
    client.send(_request(2, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS))
    outbound = client.receive()
    assert outbound["method"] == methods.WORKSPACE_CONFIGURATION
    assert outbound["params"] == {"items": [{"section": "x"}]}
    client.send({"jsonrpc": "2.0", "id": outbound["id"], "result": ["tabs"]})
    log_message = client.receive()
    assert log_message["method"] == methods.WINDOW_LOG_MESSAGE
    assert log_message["params"] == {"type": 4, "message": "hovered"}
    assert "id" not in log_message
    assert client.receive()["result"] == {"contents": "tabs"}
    client.send(_request(3, methods.SHUTDOWN))
    assert client.receive()["id"] == 3
    client.send(_notification(methods.EXIT))
    client.close()
    assert client.exit_code == [0]


def test_outbound_error_reply_raises(client_factory) -> None:
    seen = []

    def _hover(ctx, params):
        try:
            ctx.call(methods.WORKSPACE_CONFIGURATION, {"items": []})
        except ResponseError as exc:
            seen.append((exc.code, exc.message))
        return None

    client = client_factory(_handler(hover=_hover))
    client.send(_request(1, methods.INITIALIZE, initialize_params()))
    client.receive()
    client.send(_request(2, methods.TEXT_DOCUMENT_HOVER, HOVER_PARAMS))
    outbound = client.receive()
    client.send(
        {"jsonrpc": "2.0", "id": outbound["id"], "error": {"code": -32601, "message": "no"}}
    )
    assert client.receive()["result"] is None
    assert seen == [(-32601, "no")]
    client.send(_notification(methods.EXIT))
    client.close()
    assert client.exit_code == [1]
