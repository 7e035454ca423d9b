from __future__ import annotations

from contextlib import contextmanager
from typing import BinaryIO, Iterator
import io
import json
import os
import socket

from trellis.context import CancellationToken, LSPContext


class Recorder:
    """Stands in for a transport: records notifications, answers calls from a table."""

    def __init__(self, replies: dict[str, object] | None = None) -> None:
        self.notifications: list[tuple[str, object]] = []
        self.calls: list[tuple[str, object]] = []
        self.replies = dict(replies or {})

    def notify(self, method: str, params: object) -> None:
        self.notifications.append((method, params))

    def call(self, method: str, params: object) -> object:
        self.calls.append((method, params))
        return self.replies.get(method)


def make_ctx(
    method: str,
    params: object = None,
    *,
    recorder: Recorder | None = None,
    token: CancellationToken | None = None,
    request_id: int | str | None = 1,
) -> LSPContext:
    kwargs: dict[str, object] = {"method": method, "params": params, "request_id": request_id}
    if recorder is not None:
        kwargs["notify"] = recorder.notify
        kwargs["call"] = recorder.call
    if token is not None:
        kwargs["token"] = token
    return LSPContext(**kwargs)


def initialize_params(**extra: object) -> dict[str, object]:
    params: dict[str, object] = {"processId": None, "rootUri": None, "capabilities": {}}
    params.update(extra)
    return params


def frame(message: dict[str, object]) -> bytes:
    body = json.dumps(message).encode("utf-8")
    return f"Content-Length: {len(body)}\r\n\r\n".encode("ascii") + body


def unframe_all(data: bytes) -> list[dict[str, object]]:
    messages: list[dict[str, object]] = []
    while data:
        head, _, rest = data.partition(b"\r\n\r\n")
        length = 0
        for line in head.split(b"\r\n"):
            if line.lower().startswith(b"content-length:"):
                length = int(line.split(b":", 1)[1].strip())
        messages.append(json.loads(rest[:length].decode("utf-8")))
        data = rest[length:]
    return messages


class KeptBytesIO(io.BytesIO):
    """Output stream that survives the server closing its writer on exit."""

    def close(self) -> None:
        pass


def read_framed(stream: BinaryIO) -> dict[str, object] | None:
    """Read one ``Content-Length`` framed message; None at end of stream."""
    length = None
    while True:
        line = stream.readline()
        if not line:
            return None
        if line in (b"\r\n", b"\n"):
            if length is not None:
                break
            continue
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    return json.loads(stream.read(length).decode("utf-8"))


def free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@contextmanager
def trellis_env(**values: str | None) -> Iterator[None]:
    """Run with every ``TRELLIS_*`` variable cleared except ``values``."""
    keys = {key for key in os.environ if key.startswith("TRELLIS_")}
    keys.update(f"TRELLIS_{name.upper()}" for name in values)
    previous = {key: os.environ.get(key) for key in keys}
    for key in keys:
        os.environ.pop(key, None)
    for name, value in values.items():
        if value is not None:
            os.environ[f"TRELLIS_{name.upper()}"] = value
    try:
        yield
    finally:
        for key, value in previous.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
