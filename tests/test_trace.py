from __future__ import annotations

import pytest

from trellis.dispatcher import Dispatcher
from trellis.exceptions import NeverThrown
from trellis.handler import Handler
from trellis.protocol import methods
from trellis.protocol.enums import MessageType, TraceValue
from trellis.trace import TraceService
from tests.lsp_helpers import make_ctx


class _ServerLogger:
    def __init__(self) -> None:
        self.sent = []

    def log_message(self, params) -> None:
        self.sent.append(params)


@pytest.mark.parametrize(
    ("level", "admitted"),
    [
        (TraceValue.OFF, set()),
        (
            TraceValue.MESSAGES,
            {MessageType.ERROR, MessageType.WARNING, MessageType.INFO},
        ),
        (TraceValue.VERBOSE, set(MessageType)),
    ],
)
def test_admits_by_level(level: TraceValue, admitted: set[MessageType]) -> None:
    trace = TraceService()
    trace.set_trace(level)
    assert {kind for kind in MessageType if trace.admits(kind)} == admitted


def test_default_level_is_off() -> None:
    trace = TraceService()
    assert trace.get_trace_value() is TraceValue.OFF
    sink = _ServerLogger()
    trace.trace(sink, MessageType.ERROR, "dropped")
    assert sink.sent == []


def test_trace_sends_log_message() -> None:
    trace = TraceService()
    trace.set_trace("messages")
    sink = _ServerLogger()
    trace.trace(sink, MessageType.WARNING, "careful")
    trace.trace(sink, MessageType.LOG, "too chatty")
    assert [(p.type, p.message) for p in sink.sent] == [(MessageType.WARNING, "careful")]


def test_unknown_message_type_is_rejected(caplog: pytest.LogCaptureFixture) -> None:
    trace = TraceService()
    trace.set_trace(TraceValue.VERBOSE)
    with pytest.raises(NeverThrown):
        trace.admits(42)
    assert "unsupported message type" in caplog.text


def test_invalid_trace_value_is_rejected() -> None:
    with pytest.raises(ValueError):
        TraceService().set_trace("loud")


def test_set_trace_handler_updates_level(initialized_handler: Handler) -> None:
    trace = TraceService()
    initialized_handler.set_set_trace_handler(trace.create_set_trace_handler())
    outcome = initialized_handler.handle(
        make_ctx(methods.SET_TRACE, {"value": "verbose"}, request_id=None)
    )
    assert outcome.ok
    assert trace.get_trace_value() is TraceValue.VERBOSE


def test_log_trace_respects_level(recorder) -> None:
    trace = TraceService()
    dispatcher = Dispatcher(make_ctx(methods.TEXT_DOCUMENT_HOVER, recorder=recorder))
    trace.log_trace(dispatcher, "off")
    trace.set_trace(TraceValue.MESSAGES)
    trace.log_trace(dispatcher, "short", verbose="details")
    trace.set_trace(TraceValue.VERBOSE)
    trace.log_trace(dispatcher, "long", verbose="details")
    assert recorder.notifications == [
        (methods.LOG_TRACE, {"message": "short"}),
        (methods.LOG_TRACE, {"message": "long", "verbose": "details"}),
    ]
