from __future__ import annotations

import pytest

from trellis.context import LSPContext
from trellis.dispatcher import Dispatcher
from trellis.exceptions import ResponseError, TransportError
from trellis.protocol import methods
from trellis.protocol.base import IntOrString
from trellis.protocol.enums import DiagnosticSeverity, MessageType
from trellis.protocol.language_features import PublishDiagnosticsParams
from trellis.protocol.lifecycle import Registration, RegistrationParams
from trellis.protocol.structures import Diagnostic, Position, ProgressParams, Range, WorkDoneProgressBegin
from trellis.protocol.window import (
    LogMessageParams,
    MessageActionItem,
    ShowDocumentParams,
    ShowMessageRequestParams,
    WorkDoneProgressCreateParams,
)
from trellis.protocol.workspace import (
    ApplyWorkspaceEditParams,
    ConfigurationItem,
    ConfigurationParams,
    WorkspaceEdit,
)
from tests.lsp_helpers import Recorder, make_ctx


def _dispatcher(recorder: Recorder) -> Dispatcher:
    return Dispatcher(make_ctx(methods.TEXT_DOCUMENT_DID_OPEN, recorder=recorder))


def test_publish_diagnostics_is_encoded(recorder: Recorder) -> None:
    diagnostic = Diagnostic(
        range=Range(start=Position(line=0, character=0), end=Position(line=0, character=1)),
        severity=DiagnosticSeverity.ERROR,
        message="syntax error",
    )
    _dispatcher(recorder).publish_diagnostics(
        PublishDiagnosticsParams(uri="file:///a.py", diagnostics=[diagnostic])
    )
    ((method, params),) = recorder.notifications
    assert method == methods.TEXT_DOCUMENT_PUBLISH_DIAGNOSTICS
    assert params["uri"] == "file:///a.py"
    assert params["diagnostics"][0]["severity"] == 1
    assert "version" not in params


def test_notifications_use_their_methods(recorder: Recorder) -> None:
    dispatcher = _dispatcher(recorder)
    dispatcher.log_message(LogMessageParams(type=MessageType.INFO, message="hi"))
    dispatcher.telemetry({"event": "opened"})
    dispatcher.progress(
        ProgressParams(token=IntOrString.of_str("t1"), value=WorkDoneProgressBegin(title="Index"))
    )
    assert recorder.notifications == [
        (methods.WINDOW_LOG_MESSAGE, {"type": 3, "message": "hi"}),
        (methods.TELEMETRY_EVENT, {"event": "opened"}),
        (methods.PROGRESS, {"token": "t1", "value": {"kind": "begin", "title": "Index"}}),
    ]


def test_show_message_request_decodes_choice() -> None:
    recorder = Recorder({methods.WINDOW_SHOW_MESSAGE_REQUEST: {"title": "Yes", "extra": 1}})
    choice = _dispatcher(recorder).show_message_request(
        ShowMessageRequestParams(
            type=MessageType.INFO,
            message="Reload?",
            actions=[MessageActionItem(title="Yes"), MessageActionItem(title="No")],
        )
    )
    assert isinstance(choice, MessageActionItem)
    assert choice.title == "Yes"
    assert recorder.calls[0][1]["actions"] == [{"title": "Yes"}, {"title": "No"}]


def test_show_message_request_dismissed(recorder: Recorder) -> None:
    params = ShowMessageRequestParams(type=MessageType.WARNING, message="Proceed?")
    assert _dispatcher(recorder).show_message_request(params) is None


def test_typed_results() -> None:
    recorder = Recorder(
        {
            methods.WINDOW_SHOW_DOCUMENT: {"success": True},
            methods.WORKSPACE_WORKSPACE_FOLDERS: [{"uri": "file:///ws", "name": "ws"}],
            methods.WORKSPACE_CONFIGURATION: [{"lineLength": 88}, None],
            methods.WORKSPACE_APPLY_EDIT: {"applied": False, "failureReason": "stale"},
        }
    )
    dispatcher = _dispatcher(recorder)
    assert dispatcher.show_document(ShowDocumentParams(uri="file:///a.py")).success
    (folder,) = dispatcher.workspace_folders()
    assert folder.name == "ws"
    assert dispatcher.workspace_configuration(
        ConfigurationParams(items=[ConfigurationItem(section="fmt"), ConfigurationItem()])
    ) == [{"lineLength": 88}, None]
    result = dispatcher.apply_workspace_edit(ApplyWorkspaceEditParams(edit=WorkspaceEdit()))
    assert not result.applied
    assert result.failure_reason == "stale"
    assert recorder.calls[1] == (methods.WORKSPACE_WORKSPACE_FOLDERS, None)
    assert recorder.calls[3] == (methods.WORKSPACE_APPLY_EDIT, {"edit": {}})


def test_string_result_is_not_parsed_as_json() -> None:
    recorder = Recorder({methods.WORKSPACE_CONFIGURATION: ["[1]"]})
    result = _dispatcher(recorder).workspace_configuration(
        ConfigurationParams(items=[ConfigurationItem()])
    )
    assert result == ["[1]"]


def test_malformed_result_is_a_transport_error() -> None:
    recorder = Recorder({methods.WINDOW_SHOW_DOCUMENT: {"success": "maybe"}})
    with pytest.raises(TransportError):
        _dispatcher(recorder).show_document(ShowDocumentParams(uri="file:///a.py"))


def test_requests_without_results(recorder: Recorder) -> None:
    dispatcher = _dispatcher(recorder)
    dispatcher.register_capability(
        RegistrationParams(
            registrations=[Registration(id="r1", method=methods.WORKSPACE_DID_CHANGE_WATCHED_FILES)]
        )
    )
    dispatcher.create_work_done_progress(WorkDoneProgressCreateParams(token=IntOrString.of_int(7)))
    dispatcher.code_lens_refresh()
    dispatcher.diagnostics_refresh()
    assert recorder.calls == [
        (
            methods.CLIENT_REGISTER_CAPABILITY,
            {"registrations": [{"id": "r1", "method": "workspace/didChangeWatchedFiles"}]},
        ),
        (methods.WINDOW_WORK_DONE_PROGRESS_CREATE, {"token": 7}),
        (methods.WORKSPACE_CODE_LENS_REFRESH, None),
        (methods.WORKSPACE_DIAGNOSTIC_REFRESH, None),
    ]


def test_error_replies_propagate() -> None:
    def _call(method, params):
        raise ResponseError(-32601, "unhandled", None)

    dispatcher = Dispatcher(LSPContext(method=methods.INITIALIZED, call=_call))
    with pytest.raises(ResponseError) as excinfo:
        dispatcher.inlay_hint_refresh()
    assert excinfo.value.code == -32601


def test_unconnected_context_raises_transport_error() -> None:
    dispatcher = Dispatcher(LSPContext(method=methods.INITIALIZED))
    with pytest.raises(TransportError):
        dispatcher.show_message_request(
            ShowMessageRequestParams(type=MessageType.ERROR, message="x")
        )
    with pytest.raises(TransportError):
        dispatcher.log_message(LogMessageParams(type=MessageType.LOG, message="x"))
