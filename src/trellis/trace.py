"""Trace level shared with the client and the gate it applies to log output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
import logging
import threading

from trellis.context import LSPContext
from trellis.invariants import never
from trellis.protocol.enums import MessageType, TraceValue
from trellis.protocol.lifecycle import LogTraceParams, SetTraceParams
from trellis.protocol.window import LogMessageParams

if TYPE_CHECKING:
    from trellis.dispatcher import Dispatcher

_MESSAGE_TYPES = frozenset({MessageType.ERROR, MessageType.WARNING, MessageType.INFO})
_VERBOSE_TYPES = frozenset({MessageType.LOG, MessageType.DEBUG})


class ServerLogger(Protocol):
    def log_message(self, params: LogMessageParams) -> None: ...


class TraceService:
    """Holds the ``$/setTrace`` level and filters ``window/logMessage`` by it.

    ``logger`` receives the service's own diagnostics; it never sees the
    messages that are sent to the client.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._value = TraceValue.OFF

    def set_trace(self, value: TraceValue | str) -> None:
        value = TraceValue(value)
        with self._lock:
            self._value = value
        self._logger.debug("trace level set to %s", value.value)

    def get_trace_value(self) -> TraceValue:
        with self._lock:
            return self._value

    def create_set_trace_handler(self):
        """Callback suitable for ``Handler.set_set_trace_handler``."""

        def _set_trace(ctx: LSPContext, params: SetTraceParams) -> None:
            self.set_trace(params.value)

        return _set_trace

    def admits(self, message_type: MessageType | int) -> bool:
        try:
            kind = MessageType(message_type)
        except ValueError:
            self._logger.error("unsupported message type: %s", message_type)
            never("unsupported message type", message_type=message_type)
        current = self.get_trace_value()
        if current is TraceValue.OFF:
            return False
        if kind in _MESSAGE_TYPES:
            return True
        if kind in _VERBOSE_TYPES:
            return current is TraceValue.VERBOSE
        never("unsupported message type", message_type=message_type)

    def trace(
        self,
        server_logger: ServerLogger,
        message_type: MessageType | int,
        message: str,
    ) -> None:
        if self.admits(message_type):
            server_logger.log_message(
                LogMessageParams(type=MessageType(message_type), message=message)
            )

    def log_trace(
        self,
        dispatcher: Dispatcher,
        message: str,
        verbose: str | None = None,
    ) -> None:
        """Send ``$/logTrace`` unless tracing is off.

        ``verbose`` is only attached when the level is ``verbose``.
        """
        current = self.get_trace_value()
        if current is TraceValue.OFF:
            return
        if current is not TraceValue.VERBOSE:
            verbose = None
        dispatcher.log_trace(LogTraceParams(message=message, verbose=verbose))
