"""Per-message state handed to handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable
import threading
import time

from trellis.exceptions import RequestCancelledError, TransportError
from trellis.invariants import require
from trellis.json_types import LSPAny, RawParams

NotifyFunc = Callable[[str, LSPAny], None]
CallFunc = Callable[[str, LSPAny], LSPAny]


class CancellationToken:
    """Cancel signal plus an optional deadline on the monotonic clock.

    The transport cancels the token when the client sends ``$/cancelRequest``
    for the request; handlers poll ``cancelled`` or call
    ``raise_if_cancelled``.
    """

    def __init__(self, deadline_ns: int | None = None) -> None:
        self._event = threading.Event()
        self.deadline_ns = deadline_ns

    @classmethod
    def from_timeout_ms(cls, milliseconds: int) -> "CancellationToken":
        millis = int(milliseconds)
        require(millis >= 0, "invalid timeout ms", ms=milliseconds)
        return cls(deadline_ns=time.monotonic_ns() + millis * 1_000_000)

    def cancel(self) -> None:
        self._event.set()

    def expired(self) -> bool:
        if self.deadline_ns is None:
            return False
        return time.monotonic_ns() >= self.deadline_ns

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.expired()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelledError()
        if self.expired():
            raise RequestCancelledError("request deadline exceeded")


def _unconnected_notify(method: str, params: LSPAny) -> None:
    raise TransportError(f"no transport to send {method}")


def _unconnected_call(method: str, params: LSPAny) -> LSPAny:
    raise TransportError(f"no transport to call {method}")


@dataclass(frozen=True)
class LSPContext:
    """Method name, raw params and the outbound channel for one inbound message.

    ``params`` is left undecoded: a parsed JSON value or the JSON text of the
    params member. ``notify`` and ``call`` take pre-encoded JSON values and
    raise ``TransportError`` on transport failures; ``call`` returns the raw
    result of the peer's reply.
    """

    method: str
    params: RawParams = None
    notify: NotifyFunc = _unconnected_notify
    call: CallFunc = _unconnected_call
    token: CancellationToken = field(default_factory=CancellationToken)
    request_id: int | str | None = None

    @property
    def is_notification(self) -> bool:
        return self.request_id is None
