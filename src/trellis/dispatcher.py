"""Typed server-to-client messages on top of a context's ``notify``/``call``."""

from __future__ import annotations

from typing import TypeVar

from pydantic import ValidationError

from trellis.context import LSPContext
from trellis.exceptions import TransportError
from trellis.json_types import LSPAny
from trellis.protocol import methods
from trellis.protocol.base import LSPAny, from_value, to_wire
from trellis.protocol.language_features import PublishDiagnosticsParams
from trellis.protocol.lifecycle import (
    CancelParams,
    LogTraceParams,
    RegistrationParams,
    UnregistrationParams,
)
from trellis.protocol.structures import ProgressParams
from trellis.protocol.window import (
    LogMessageParams,
    MessageActionItem,
    ShowDocumentParams,
    ShowDocumentResult,
    ShowMessageParams,
    ShowMessageRequestParams,
    WorkDoneProgressCreateParams,
)
from trellis.protocol.workspace import (
    ApplyWorkspaceEditParams,
    ApplyWorkspaceEditResult,
    ConfigurationParams,
    WorkspaceFolder,
)

T = TypeVar("T")


class Dispatcher:
    """One method per outbound LSP operation.

    Notifications return ``None`` once handed to the transport. Requests block
    until the client answers and return the decoded result. ``TransportError``
    (and its ``ResponseError`` subclass for JSON-RPC error replies) propagate
    to the caller.
    """

    def __init__(self, ctx: LSPContext) -> None:
        self._ctx = ctx

    def _notify(self, method: str, params: object) -> None:
        self._ctx.notify(method, to_wire(params))

    def _call(self, method: str, params: object) -> LSPAny:
        return self._ctx.call(method, to_wire(params))

    def _call_typed(self, method: str, params: object, result_type: type[T] | object) -> T:
        raw = self._call(method, params)
        try:
            return from_value(result_type, raw)
        except ValidationError as exc:
            raise TransportError(f"invalid result for {method}: {exc}") from exc

    # -- base protocol ------------------------------------------------------

    def cancel_request(self, params: CancelParams) -> None:
        self._notify(methods.CANCEL_REQUEST, params)

    def progress(self, params: ProgressParams) -> None:
        self._notify(methods.PROGRESS, params)

    def log_trace(self, params: LogTraceParams) -> None:
        self._notify(methods.LOG_TRACE, params)

    def register_capability(self, params: RegistrationParams) -> None:
        self._call(methods.CLIENT_REGISTER_CAPABILITY, params)

    def unregister_capability(self, params: UnregistrationParams) -> None:
        self._call(methods.CLIENT_UNREGISTER_CAPABILITY, params)

    # -- window -------------------------------------------------------------

    def show_message(self, params: ShowMessageParams) -> None:
        self._notify(methods.WINDOW_SHOW_MESSAGE, params)

    def show_message_request(
        self, params: ShowMessageRequestParams
    ) -> MessageActionItem | None:
        return self._call_typed(
            methods.WINDOW_SHOW_MESSAGE_REQUEST, params, MessageActionItem | None
        )

    def show_document(self, params: ShowDocumentParams) -> ShowDocumentResult:
        return self._call_typed(
            methods.WINDOW_SHOW_DOCUMENT, params, ShowDocumentResult
        )

    def log_message(self, params: LogMessageParams) -> None:
        self._notify(methods.WINDOW_LOG_MESSAGE, params)

    def create_work_done_progress(self, params: WorkDoneProgressCreateParams) -> None:
        self._call(methods.WINDOW_WORK_DONE_PROGRESS_CREATE, params)

    def telemetry(self, params: LSPAny) -> None:
        self._notify(methods.TELEMETRY_EVENT, params)

    # -- documents and workspace --------------------------------------------

    def publish_diagnostics(self, params: PublishDiagnosticsParams) -> None:
        self._notify(methods.TEXT_DOCUMENT_PUBLISH_DIAGNOSTICS, params)

    def workspace_folders(self) -> list[WorkspaceFolder] | None:
        return self._call_typed(
            methods.WORKSPACE_WORKSPACE_FOLDERS, None, list[WorkspaceFolder] | None
        )

    def workspace_configuration(self, params: ConfigurationParams) -> list[LSPAny]:
        return self._call_typed(methods.WORKSPACE_CONFIGURATION, params, list[LSPAny])

    def apply_workspace_edit(
        self, params: ApplyWorkspaceEditParams
    ) -> ApplyWorkspaceEditResult:
        return self._call_typed(
            methods.WORKSPACE_APPLY_EDIT, params, ApplyWorkspaceEditResult
        )

    def code_lens_refresh(self) -> None:
        self._call(methods.WORKSPACE_CODE_LENS_REFRESH, None)

    def semantic_tokens_refresh(self) -> None:
        self._call(methods.WORKSPACE_SEMANTIC_TOKENS_REFRESH, None)

    def inlay_hint_refresh(self) -> None:
        self._call(methods.WORKSPACE_INLAY_HINT_REFRESH, None)

    def inline_value_refresh(self) -> None:
        self._call(methods.WORKSPACE_INLINE_VALUE_REFRESH, None)

    def diagnostics_refresh(self) -> None:
        self._call(methods.WORKSPACE_DIAGNOSTIC_REFRESH, None)
