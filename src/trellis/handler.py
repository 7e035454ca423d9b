"""Inbound dispatch: callback registry, params decoding and lifecycle gating.

A ``Handler`` owns one callback per LSP method. Each registration wraps the
callback in a shim that decodes the raw params into the method's params model,
invokes the callback and encodes its return value. ``Handler.handle`` applies
the lifecycle gate and cancellation before reaching the shim.

Callbacks may be registered at any time, including after the server has been
initialized; a callback added late is simply not reflected in capabilities
already sent to the client.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, TypeVar
import logging
import threading

from pydantic import ValidationError

from trellis.context import LSPContext
from trellis.exceptions import (
    InvalidDiagnosticReportKindError,
    InvalidParamsError,
    RequestCancelledError,
    ServerNotInitializedError,
)
from trellis.json_types import LSPAny
from trellis.protocol import methods
from trellis.protocol.analysis_features import (
    CallHierarchyIncomingCallsParams,
    CallHierarchyOutgoingCallsParams,
    CallHierarchyPrepareParams,
    DocumentDiagnosticParams,
    InlayHint,
    InlayHintParams,
    InlineValueParams,
    MonikerParams,
    SemanticTokensDeltaParams,
    SemanticTokensParams,
    SemanticTokensRangeParams,
    TypeHierarchyPrepareParams,
    TypeHierarchySubtypesParams,
    TypeHierarchySupertypesParams,
    WorkspaceDiagnosticParams,
)
from trellis.protocol.base import LspModel, from_wire, to_wire
from trellis.protocol.language_features import (
    CodeAction,
    CodeActionParams,
    CodeLens,
    CodeLensParams,
    ColorPresentationParams,
    CompletionItem,
    CompletionParams,
    DeclarationParams,
    DefinitionParams,
    DocumentColorParams,
    DocumentFormattingParams,
    DocumentHighlightParams,
    DocumentLink,
    DocumentLinkParams,
    DocumentOnTypeFormattingParams,
    DocumentRangeFormattingParams,
    DocumentSymbolParams,
    FoldingRangeParams,
    HoverParams,
    ImplementationParams,
    LinkedEditingRangeParams,
    PrepareRenameParams,
    ReferenceParams,
    RenameParams,
    SelectionRangeParams,
    SignatureHelpParams,
    TypeDefinitionParams,
)
from trellis.protocol.lifecycle import (
    CancelParams,
    InitializedParams,
    InitializeParams,
    SetTraceParams,
)
from trellis.protocol.notebook_sync import (
    DidChangeNotebookDocumentParams,
    DidCloseNotebookDocumentParams,
    DidOpenNotebookDocumentParams,
    DidSaveNotebookDocumentParams,
)
from trellis.protocol.structures import ProgressParams
from trellis.protocol.text_sync import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    WillSaveTextDocumentParams,
)
from trellis.protocol.window import WorkDoneProgressCancelParams
from trellis.protocol.workspace import (
    CreateFilesParams,
    DeleteFilesParams,
    DidChangeConfigurationParams,
    DidChangeWatchedFilesParams,
    DidChangeWorkspaceFoldersParams,
    ExecuteCommandParams,
    RenameFilesParams,
    WorkspaceSymbol,
    WorkspaceSymbolParams,
)

if TYPE_CHECKING:
    from trellis.protocol.analysis_features import (
        CallHierarchyIncomingCall,
        CallHierarchyItem,
        CallHierarchyOutgoingCall,
        DocumentDiagnosticReport,
        InlineValue,
        Moniker,
        SemanticTokens,
        SemanticTokensDelta,
        TypeHierarchyItem,
        WorkspaceDiagnosticReport,
    )
    from trellis.protocol.language_features import (
        ColorInformation,
        ColorPresentation,
        CompletionList,
        DocumentHighlight,
        DocumentSymbol,
        FoldingRange,
        Hover,
        LinkedEditingRanges,
        PrepareRenameResult,
        SelectionRange,
        SignatureHelp,
        SymbolInformation,
    )
    from trellis.protocol.lifecycle import InitializeResult
    from trellis.protocol.server_capabilities import ServerCapabilities
    from trellis.protocol.structures import (
        Command,
        Location,
        LocationLink,
        TextEdit,
        WorkspaceEdit,
    )

logger = logging.getLogger(__name__)

P = TypeVar("P")
R = TypeVar("R")

HandlerFunc = Callable[[LSPContext, P], R]
NotificationFunc = Callable[[LSPContext, P], None]
BareFunc = Callable[[LSPContext], None]
Shim = Callable[[LSPContext], "HandleResult"]


class LifecycleState(Enum):
    PRE_INIT = "pre-init"
    INITIALIZED = "initialized"
    SHUTDOWN_PENDING = "shutdown-pending"
    EXITED = "exited"


@dataclass(frozen=True)
class HandleResult:
    """Outcome of dispatching one inbound message.

    ``method_valid`` is false only when no callback is registered for the
    method. ``params_valid`` is false when the method is known but its params
    failed to decode. ``error`` carries the exception to report; ``result`` is
    the already encoded return value.
    """

    result: LSPAny = None
    method_valid: bool = False
    params_valid: bool = False
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.method_valid and self.params_valid and self.error is None


@dataclass(frozen=True)
class MethodSpec:
    name: str
    method: str
    params: type[LspModel] | None


_METHOD_SPECS: tuple[MethodSpec, ...] = (
    # Lifecycle and base protocol
    MethodSpec("initialize", methods.INITIALIZE, InitializeParams),
    MethodSpec("initialized", methods.INITIALIZED, InitializedParams),
    MethodSpec("shutdown", methods.SHUTDOWN, None),
    MethodSpec("exit", methods.EXIT, None),
    MethodSpec("set_trace", methods.SET_TRACE, SetTraceParams),
    MethodSpec("cancel_request", methods.CANCEL_REQUEST, CancelParams),
    MethodSpec("progress", methods.PROGRESS, ProgressParams),
    MethodSpec(
        "work_done_progress_cancel",
        methods.WINDOW_WORK_DONE_PROGRESS_CANCEL,
        WorkDoneProgressCancelParams,
    ),
    # Workspace
    MethodSpec(
        "workspace_did_change_workspace_folders",
        methods.WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS,
        DidChangeWorkspaceFoldersParams,
    ),
    MethodSpec(
        "workspace_did_change_configuration",
        methods.WORKSPACE_DID_CHANGE_CONFIGURATION,
        DidChangeConfigurationParams,
    ),
    MethodSpec(
        "workspace_did_change_watched_files",
        methods.WORKSPACE_DID_CHANGE_WATCHED_FILES,
        DidChangeWatchedFilesParams,
    ),
    MethodSpec("workspace_symbol", methods.WORKSPACE_SYMBOL, WorkspaceSymbolParams),
    MethodSpec(
        "workspace_symbol_resolve", methods.WORKSPACE_SYMBOL_RESOLVE, WorkspaceSymbol
    ),
    MethodSpec(
        "workspace_execute_command",
        methods.WORKSPACE_EXECUTE_COMMAND,
        ExecuteCommandParams,
    ),
    MethodSpec(
        "workspace_will_create_files",
        methods.WORKSPACE_WILL_CREATE_FILES,
        CreateFilesParams,
    ),
    MethodSpec(
        "workspace_did_create_files",
        methods.WORKSPACE_DID_CREATE_FILES,
        CreateFilesParams,
    ),
    MethodSpec(
        "workspace_will_rename_files",
        methods.WORKSPACE_WILL_RENAME_FILES,
        RenameFilesParams,
    ),
    MethodSpec(
        "workspace_did_rename_files",
        methods.WORKSPACE_DID_RENAME_FILES,
        RenameFilesParams,
    ),
    MethodSpec(
        "workspace_will_delete_files",
        methods.WORKSPACE_WILL_DELETE_FILES,
        DeleteFilesParams,
    ),
    MethodSpec(
        "workspace_did_delete_files",
        methods.WORKSPACE_DID_DELETE_FILES,
        DeleteFilesParams,
    ),
    MethodSpec(
        "workspace_diagnostic", methods.WORKSPACE_DIAGNOSTIC, WorkspaceDiagnosticParams
    ),
    # Text document synchronization
    MethodSpec(
        "text_document_did_open",
        methods.TEXT_DOCUMENT_DID_OPEN,
        DidOpenTextDocumentParams,
    ),
    MethodSpec(
        "text_document_did_change",
        methods.TEXT_DOCUMENT_DID_CHANGE,
        DidChangeTextDocumentParams,
    ),
    MethodSpec(
        "text_document_will_save",
        methods.TEXT_DOCUMENT_WILL_SAVE,
        WillSaveTextDocumentParams,
    ),
    MethodSpec(
        "text_document_will_save_wait_until",
        methods.TEXT_DOCUMENT_WILL_SAVE_WAIT_UNTIL,
        WillSaveTextDocumentParams,
    ),
    MethodSpec(
        "text_document_did_save",
        methods.TEXT_DOCUMENT_DID_SAVE,
        DidSaveTextDocumentParams,
    ),
    MethodSpec(
        "text_document_did_close",
        methods.TEXT_DOCUMENT_DID_CLOSE,
        DidCloseTextDocumentParams,
    ),
    # Notebook document synchronization
    MethodSpec(
        "notebook_document_did_open",
        methods.NOTEBOOK_DOCUMENT_DID_OPEN,
        DidOpenNotebookDocumentParams,
    ),
    MethodSpec(
        "notebook_document_did_change",
        methods.NOTEBOOK_DOCUMENT_DID_CHANGE,
        DidChangeNotebookDocumentParams,
    ),
    MethodSpec(
        "notebook_document_did_save",
        methods.NOTEBOOK_DOCUMENT_DID_SAVE,
        DidSaveNotebookDocumentParams,
    ),
    MethodSpec(
        "notebook_document_did_close",
        methods.NOTEBOOK_DOCUMENT_DID_CLOSE,
        DidCloseNotebookDocumentParams,
    ),
    # Language features
    MethodSpec("declaration", methods.TEXT_DOCUMENT_DECLARATION, DeclarationParams),
    MethodSpec("definition", methods.TEXT_DOCUMENT_DEFINITION, DefinitionParams),
    MethodSpec(
        "type_definition", methods.TEXT_DOCUMENT_TYPE_DEFINITION, TypeDefinitionParams
    ),
    MethodSpec(
        "implementation", methods.TEXT_DOCUMENT_IMPLEMENTATION, ImplementationParams
    ),
    MethodSpec("references", methods.TEXT_DOCUMENT_REFERENCES, ReferenceParams),
    MethodSpec(
        "prepare_call_hierarchy",
        methods.TEXT_DOCUMENT_PREPARE_CALL_HIERARCHY,
        CallHierarchyPrepareParams,
    ),
    MethodSpec(
        "call_hierarchy_incoming_calls",
        methods.CALL_HIERARCHY_INCOMING_CALLS,
        CallHierarchyIncomingCallsParams,
    ),
    MethodSpec(
        "call_hierarchy_outgoing_calls",
        methods.CALL_HIERARCHY_OUTGOING_CALLS,
        CallHierarchyOutgoingCallsParams,
    ),
    MethodSpec(
        "prepare_type_hierarchy",
        methods.TEXT_DOCUMENT_PREPARE_TYPE_HIERARCHY,
        TypeHierarchyPrepareParams,
    ),
    MethodSpec(
        "type_hierarchy_supertypes",
        methods.TYPE_HIERARCHY_SUPERTYPES,
        TypeHierarchySupertypesParams,
    ),
    MethodSpec(
        "type_hierarchy_subtypes",
        methods.TYPE_HIERARCHY_SUBTYPES,
        TypeHierarchySubtypesParams,
    ),
    MethodSpec(
        "document_highlight",
        methods.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT,
        DocumentHighlightParams,
    ),
    MethodSpec(
        "document_link", methods.TEXT_DOCUMENT_DOCUMENT_LINK, DocumentLinkParams
    ),
    MethodSpec("document_link_resolve", methods.DOCUMENT_LINK_RESOLVE, DocumentLink),
    MethodSpec("hover", methods.TEXT_DOCUMENT_HOVER, HoverParams),
    MethodSpec("code_lens", methods.TEXT_DOCUMENT_CODE_LENS, CodeLensParams),
    MethodSpec("code_lens_resolve", methods.CODE_LENS_RESOLVE, CodeLens),
    MethodSpec(
        "folding_range", methods.TEXT_DOCUMENT_FOLDING_RANGE, FoldingRangeParams
    ),
    MethodSpec(
        "selection_range", methods.TEXT_DOCUMENT_SELECTION_RANGE, SelectionRangeParams
    ),
    MethodSpec(
        "document_symbol", methods.TEXT_DOCUMENT_DOCUMENT_SYMBOL, DocumentSymbolParams
    ),
    MethodSpec(
        "semantic_tokens_full",
        methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
        SemanticTokensParams,
    ),
    MethodSpec(
        "semantic_tokens_full_delta",
        methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL_DELTA,
        SemanticTokensDeltaParams,
    ),
    MethodSpec(
        "semantic_tokens_range",
        methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_RANGE,
        SemanticTokensRangeParams,
    ),
    MethodSpec("inlay_hint", methods.TEXT_DOCUMENT_INLAY_HINT, InlayHintParams),
    MethodSpec("inlay_hint_resolve", methods.INLAY_HINT_RESOLVE, InlayHint),
    MethodSpec("inline_value", methods.TEXT_DOCUMENT_INLINE_VALUE, InlineValueParams),
    MethodSpec("moniker", methods.TEXT_DOCUMENT_MONIKER, MonikerParams),
    MethodSpec("completion", methods.TEXT_DOCUMENT_COMPLETION, CompletionParams),
    MethodSpec(
        "completion_item_resolve", methods.COMPLETION_ITEM_RESOLVE, CompletionItem
    ),
    MethodSpec(
        "document_diagnostic", methods.TEXT_DOCUMENT_DIAGNOSTIC, DocumentDiagnosticParams
    ),
    MethodSpec(
        "signature_help", methods.TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpParams
    ),
    MethodSpec("code_action", methods.TEXT_DOCUMENT_CODE_ACTION, CodeActionParams),
    MethodSpec("code_action_resolve", methods.CODE_ACTION_RESOLVE, CodeAction),
    MethodSpec(
        "document_color", methods.TEXT_DOCUMENT_DOCUMENT_COLOR, DocumentColorParams
    ),
    MethodSpec(
        "color_presentation",
        methods.TEXT_DOCUMENT_COLOR_PRESENTATION,
        ColorPresentationParams,
    ),
    MethodSpec(
        "document_formatting", methods.TEXT_DOCUMENT_FORMATTING, DocumentFormattingParams
    ),
    MethodSpec(
        "document_range_formatting",
        methods.TEXT_DOCUMENT_RANGE_FORMATTING,
        DocumentRangeFormattingParams,
    ),
    MethodSpec(
        "document_on_type_formatting",
        methods.TEXT_DOCUMENT_ON_TYPE_FORMATTING,
        DocumentOnTypeFormattingParams,
    ),
    MethodSpec("rename", methods.TEXT_DOCUMENT_RENAME, RenameParams),
    MethodSpec(
        "prepare_rename", methods.TEXT_DOCUMENT_PREPARE_RENAME, PrepareRenameParams
    ),
    MethodSpec(
        "linked_editing_range",
        methods.TEXT_DOCUMENT_LINKED_EDITING_RANGE,
        LinkedEditingRangeParams,
    ),
)

METHOD_SPECS: dict[str, MethodSpec] = {spec.method: spec for spec in _METHOD_SPECS}
_SPECS_BY_NAME: dict[str, MethodSpec] = {spec.name: spec for spec in _METHOD_SPECS}


def _decode_params(spec: MethodSpec, raw: object) -> LspModel:
    if raw is None:
        raw = {}
    return from_wire(spec.params, raw)


def make_shim(spec: MethodSpec, func: Callable[..., object]) -> Shim:
    """Wrap ``func`` so it takes a context and returns a ``HandleResult``."""

    def shim(ctx: LSPContext) -> HandleResult:
        args: tuple[object, ...] = ()
        if spec.params is not None:
            try:
                params = _decode_params(spec, ctx.params)
            except (ValidationError, InvalidDiagnosticReportKindError) as exc:
                error = InvalidParamsError(spec.method, str(exc))
                error.__cause__ = exc
                return HandleResult(method_valid=True, params_valid=False, error=error)
            args = (params,)
        try:
            result = to_wire(func(ctx, *args))
        except Exception as exc:
            return HandleResult(method_valid=True, params_valid=True, error=exc)
        return HandleResult(result=result, method_valid=True, params_valid=True)

    return shim


class Handler:
    """Registry of LSP callbacks plus the lifecycle state they run under.

    ``Handler(hover=fn, completion=fn2)`` is the same as constructing an
    empty handler and calling ``set_hover_handler(fn)`` and
    ``set_completion_handler(fn2)``. Passing ``None`` removes a callback.
    """

    def __init__(self, **handlers: Callable[..., object] | None) -> None:
        self._lock = threading.Lock()
        self._callbacks: dict[str, Callable[..., object]] = {}
        self._shims: dict[str, Shim] = {}
        self._state = LifecycleState.PRE_INIT
        for name, func in handlers.items():
            spec = _SPECS_BY_NAME.get(name)
            if spec is None:
                raise TypeError(f"unknown handler {name!r}")
            self._set(spec.method, func)

    # -- registry -----------------------------------------------------------

    def _set(self, method: str, func: Callable[..., object] | None) -> None:
        spec = METHOD_SPECS[method]
        with self._lock:
            if func is None:
                self._callbacks.pop(method, None)
                self._shims.pop(method, None)
                return
            self._callbacks[method] = func
            self._shims[method] = make_shim(spec, func)

    def has_handler(self, method: str) -> bool:
        with self._lock:
            return method in self._callbacks

    def registered_methods(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._callbacks)

    # -- lifecycle ----------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        with self._lock:
            return self._state

    def is_initialized(self) -> bool:
        with self._lock:
            return self._state is LifecycleState.INITIALIZED

    def set_initialized(self, initialized: bool) -> None:
        with self._lock:
            self._state = (
                LifecycleState.INITIALIZED if initialized else LifecycleState.PRE_INIT
            )

    def create_server_capabilities(self) -> ServerCapabilities:
        from trellis.capabilities import derive_server_capabilities

        return derive_server_capabilities(self)

    # -- dispatch -----------------------------------------------------------

    def handle(self, ctx: LSPContext) -> HandleResult:
        with self._lock:
            state = self._state
            shim = self._shims.get(ctx.method)
        if ctx.method not in methods.LIFECYCLE_EXEMPT and (
            state is not LifecycleState.INITIALIZED
        ):
            return HandleResult(
                method_valid=True, params_valid=True, error=ServerNotInitializedError()
            )
        if ctx.token.cancelled:
            return HandleResult(
                method_valid=True, params_valid=True, error=RequestCancelledError()
            )
        if ctx.method == methods.SHUTDOWN:
            return self._finish(ctx, shim, LifecycleState.SHUTDOWN_PENDING)
        if ctx.method == methods.EXIT:
            outcome = self._finish(ctx, shim, None)
            with self._lock:
                self._state = LifecycleState.EXITED
            return outcome
        if shim is None:
            logger.debug("no handler for %s", ctx.method)
            return HandleResult()
        outcome = shim(ctx)
        if ctx.method == methods.INITIALIZE and outcome.ok:
            with self._lock:
                self._state = LifecycleState.INITIALIZED
        return outcome

    def _finish(
        self,
        ctx: LSPContext,
        shim: Shim | None,
        next_state: LifecycleState | None,
    ) -> HandleResult:
        # The transition happens with or without a callback; a missing one is
        # still reported as an unknown method.
        if shim is None:
            logger.debug("no handler for %s", ctx.method)
            outcome = HandleResult()
        else:
            outcome = shim(ctx)
        if next_state is not None and (shim is None or outcome.ok):
            with self._lock:
                self._state = next_state
        return outcome

    # -- typed registration: lifecycle --------------------------------------

    def set_initialize_handler(
        self, func: HandlerFunc[InitializeParams, InitializeResult] | None
    ) -> None:
        self._set(methods.INITIALIZE, func)

    def set_initialized_handler(
        self, func: NotificationFunc[InitializedParams] | None
    ) -> None:
        self._set(methods.INITIALIZED, func)

    def set_shutdown_handler(self, func: BareFunc | None) -> None:
        self._set(methods.SHUTDOWN, func)

    def set_exit_handler(self, func: BareFunc | None) -> None:
        self._set(methods.EXIT, func)

    def set_set_trace_handler(self, func: NotificationFunc[SetTraceParams] | None) -> None:
        self._set(methods.SET_TRACE, func)

    def set_cancel_request_handler(
        self, func: NotificationFunc[CancelParams] | None
    ) -> None:
        self._set(methods.CANCEL_REQUEST, func)

    def set_progress_handler(self, func: NotificationFunc[ProgressParams] | None) -> None:
        self._set(methods.PROGRESS, func)

    def set_work_done_progress_cancel_handler(
        self, func: NotificationFunc[WorkDoneProgressCancelParams] | None
    ) -> None:
        self._set(methods.WINDOW_WORK_DONE_PROGRESS_CANCEL, func)

    # -- typed registration: workspace --------------------------------------

    def set_workspace_did_change_workspace_folders_handler(
        self, func: NotificationFunc[DidChangeWorkspaceFoldersParams] | None
    ) -> None:
        self._set(methods.WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS, func)

    def set_workspace_did_change_configuration_handler(
        self, func: NotificationFunc[DidChangeConfigurationParams] | None
    ) -> None:
        self._set(methods.WORKSPACE_DID_CHANGE_CONFIGURATION, func)

    def set_workspace_did_change_watched_files_handler(
        self, func: NotificationFunc[DidChangeWatchedFilesParams] | None
    ) -> None:
        self._set(methods.WORKSPACE_DID_CHANGE_WATCHED_FILES, func)

    def set_workspace_symbol_handler(
        self,
        func: HandlerFunc[
            WorkspaceSymbolParams, list[SymbolInformation] | list[WorkspaceSymbol] | None
        ]
        | None,
    ) -> None:
        self._set(methods.WORKSPACE_SYMBOL, func)

    def set_workspace_symbol_resolve_handler(
        self, func: HandlerFunc[WorkspaceSymbol, WorkspaceSymbol] | None
    ) -> None:
        self._set(methods.WORKSPACE_SYMBOL_RESOLVE, func)

    def set_workspace_execute_command_handler(
        self, func: HandlerFunc[ExecuteCommandParams, LSPAny] | None
    ) -> None:
        self._set(methods.WORKSPACE_EXECUTE_COMMAND, func)

    def set_workspace_will_create_files_handler(
        self, func: HandlerFunc[CreateFilesParams, WorkspaceEdit | None] | None
    ) -> None:
        self._set(methods.WORKSPACE_WILL_CREATE_FILES, func)

    def set_workspace_did_create_files_handler(
        self, func: NotificationFunc[CreateFilesParams] | None
    ) -> None:
        self._set(methods.WORKSPACE_DID_CREATE_FILES, func)

    def set_workspace_will_rename_files_handler(
        self, func: HandlerFunc[RenameFilesParams, WorkspaceEdit | None] | None
    ) -> None:
        self._set(methods.WORKSPACE_WILL_RENAME_FILES, func)

    def set_workspace_did_rename_files_handler(
        self, func: NotificationFunc[RenameFilesParams] | None
    ) -> None:
        self._set(methods.WORKSPACE_DID_RENAME_FILES, func)

    def set_workspace_will_delete_files_handler(
        self, func: HandlerFunc[DeleteFilesParams, WorkspaceEdit | None] | None
    ) -> None:
        self._set(methods.WORKSPACE_WILL_DELETE_FILES, func)

    def set_workspace_did_delete_files_handler(
        self, func: NotificationFunc[DeleteFilesParams] | None
    ) -> None:
        self._set(methods.WORKSPACE_DID_DELETE_FILES, func)

    def set_workspace_diagnostic_handler(
        self, func: HandlerFunc[WorkspaceDiagnosticParams, WorkspaceDiagnosticReport] | None
    ) -> None:
        self._set(methods.WORKSPACE_DIAGNOSTIC, func)

    # -- typed registration: document synchronization -----------------------

    def set_text_document_did_open_handler(
        self, func: NotificationFunc[DidOpenTextDocumentParams] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DID_OPEN, func)

    def set_text_document_did_change_handler(
        self, func: NotificationFunc[DidChangeTextDocumentParams] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DID_CHANGE, func)

    def set_text_document_will_save_handler(
        self, func: NotificationFunc[WillSaveTextDocumentParams] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_WILL_SAVE, func)

    def set_text_document_will_save_wait_until_handler(
        self, func: HandlerFunc[WillSaveTextDocumentParams, list[TextEdit] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_WILL_SAVE_WAIT_UNTIL, func)

    def set_text_document_did_save_handler(
        self, func: NotificationFunc[DidSaveTextDocumentParams] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DID_SAVE, func)

    def set_text_document_did_close_handler(
        self, func: NotificationFunc[DidCloseTextDocumentParams] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DID_CLOSE, func)

    def set_notebook_document_did_open_handler(
        self, func: NotificationFunc[DidOpenNotebookDocumentParams] | None
    ) -> None:
        self._set(methods.NOTEBOOK_DOCUMENT_DID_OPEN, func)

    def set_notebook_document_did_change_handler(
        self, func: NotificationFunc[DidChangeNotebookDocumentParams] | None
    ) -> None:
        self._set(methods.NOTEBOOK_DOCUMENT_DID_CHANGE, func)

    def set_notebook_document_did_save_handler(
        self, func: NotificationFunc[DidSaveNotebookDocumentParams] | None
    ) -> None:
        self._set(methods.NOTEBOOK_DOCUMENT_DID_SAVE, func)

    def set_notebook_document_did_close_handler(
        self, func: NotificationFunc[DidCloseNotebookDocumentParams] | None
    ) -> None:
        self._set(methods.NOTEBOOK_DOCUMENT_DID_CLOSE, func)

    # -- typed registration: language features ------------------------------

    def set_declaration_handler(
        self,
        func: HandlerFunc[
            DeclarationParams, Location | list[Location] | list[LocationLink] | None
        ]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DECLARATION, func)

    def set_definition_handler(
        self,
        func: HandlerFunc[
            DefinitionParams, Location | list[Location] | list[LocationLink] | None
        ]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DEFINITION, func)

    def set_type_definition_handler(
        self,
        func: HandlerFunc[
            TypeDefinitionParams, Location | list[Location] | list[LocationLink] | None
        ]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_TYPE_DEFINITION, func)

    def set_implementation_handler(
        self,
        func: HandlerFunc[
            ImplementationParams, Location | list[Location] | list[LocationLink] | None
        ]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_IMPLEMENTATION, func)

    def set_references_handler(
        self, func: HandlerFunc[ReferenceParams, list[Location] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_REFERENCES, func)

    def set_prepare_call_hierarchy_handler(
        self,
        func: HandlerFunc[CallHierarchyPrepareParams, list[CallHierarchyItem] | None]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_PREPARE_CALL_HIERARCHY, func)

    def set_call_hierarchy_incoming_calls_handler(
        self,
        func: HandlerFunc[
            CallHierarchyIncomingCallsParams, list[CallHierarchyIncomingCall] | None
        ]
        | None,
    ) -> None:
        self._set(methods.CALL_HIERARCHY_INCOMING_CALLS, func)

    def set_call_hierarchy_outgoing_calls_handler(
        self,
        func: HandlerFunc[
            CallHierarchyOutgoingCallsParams, list[CallHierarchyOutgoingCall] | None
        ]
        | None,
    ) -> None:
        self._set(methods.CALL_HIERARCHY_OUTGOING_CALLS, func)

    def set_prepare_type_hierarchy_handler(
        self,
        func: HandlerFunc[TypeHierarchyPrepareParams, list[TypeHierarchyItem] | None]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_PREPARE_TYPE_HIERARCHY, func)

    def set_type_hierarchy_supertypes_handler(
        self,
        func: HandlerFunc[TypeHierarchySupertypesParams, list[TypeHierarchyItem] | None]
        | None,
    ) -> None:
        self._set(methods.TYPE_HIERARCHY_SUPERTYPES, func)

    def set_type_hierarchy_subtypes_handler(
        self,
        func: HandlerFunc[TypeHierarchySubtypesParams, list[TypeHierarchyItem] | None]
        | None,
    ) -> None:
        self._set(methods.TYPE_HIERARCHY_SUBTYPES, func)

    def set_document_highlight_handler(
        self,
        func: HandlerFunc[DocumentHighlightParams, list[DocumentHighlight] | None] | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT, func)

    def set_document_link_handler(
        self, func: HandlerFunc[DocumentLinkParams, list[DocumentLink] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DOCUMENT_LINK, func)

    def set_document_link_resolve_handler(
        self, func: HandlerFunc[DocumentLink, DocumentLink] | None
    ) -> None:
        self._set(methods.DOCUMENT_LINK_RESOLVE, func)

    def set_hover_handler(self, func: HandlerFunc[HoverParams, Hover | None] | None) -> None:
        self._set(methods.TEXT_DOCUMENT_HOVER, func)

    def set_code_lens_handler(
        self, func: HandlerFunc[CodeLensParams, list[CodeLens] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_CODE_LENS, func)

    def set_code_lens_resolve_handler(
        self, func: HandlerFunc[CodeLens, CodeLens] | None
    ) -> None:
        self._set(methods.CODE_LENS_RESOLVE, func)

    def set_folding_range_handler(
        self, func: HandlerFunc[FoldingRangeParams, list[FoldingRange] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_FOLDING_RANGE, func)

    def set_selection_range_handler(
        self, func: HandlerFunc[SelectionRangeParams, list[SelectionRange] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_SELECTION_RANGE, func)

    def set_document_symbol_handler(
        self,
        func: HandlerFunc[
            DocumentSymbolParams,
            list[DocumentSymbol] | list[SymbolInformation] | None,
        ]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DOCUMENT_SYMBOL, func)

    def set_semantic_tokens_full_handler(
        self, func: HandlerFunc[SemanticTokensParams, SemanticTokens | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, func)

    def set_semantic_tokens_full_delta_handler(
        self,
        func: HandlerFunc[
            SemanticTokensDeltaParams, SemanticTokens | SemanticTokensDelta | None
        ]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL_DELTA, func)

    def set_semantic_tokens_range_handler(
        self, func: HandlerFunc[SemanticTokensRangeParams, SemanticTokens | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_RANGE, func)

    def set_inlay_hint_handler(
        self, func: HandlerFunc[InlayHintParams, list[InlayHint] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_INLAY_HINT, func)

    def set_inlay_hint_resolve_handler(
        self, func: HandlerFunc[InlayHint, InlayHint] | None
    ) -> None:
        self._set(methods.INLAY_HINT_RESOLVE, func)

    def set_inline_value_handler(
        self, func: HandlerFunc[InlineValueParams, list[InlineValue] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_INLINE_VALUE, func)

    def set_moniker_handler(
        self, func: HandlerFunc[MonikerParams, list[Moniker] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_MONIKER, func)

    def set_completion_handler(
        self,
        func: HandlerFunc[
            CompletionParams, list[CompletionItem] | CompletionList | None
        ]
        | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_COMPLETION, func)

    def set_completion_item_resolve_handler(
        self, func: HandlerFunc[CompletionItem, CompletionItem] | None
    ) -> None:
        self._set(methods.COMPLETION_ITEM_RESOLVE, func)

    def set_document_diagnostic_handler(
        self, func: HandlerFunc[DocumentDiagnosticParams, DocumentDiagnosticReport] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DIAGNOSTIC, func)

    def set_signature_help_handler(
        self, func: HandlerFunc[SignatureHelpParams, SignatureHelp | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_SIGNATURE_HELP, func)

    def set_code_action_handler(
        self,
        func: HandlerFunc[CodeActionParams, list[Command | CodeAction] | None] | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_CODE_ACTION, func)

    def set_code_action_resolve_handler(
        self, func: HandlerFunc[CodeAction, CodeAction] | None
    ) -> None:
        self._set(methods.CODE_ACTION_RESOLVE, func)

    def set_document_color_handler(
        self, func: HandlerFunc[DocumentColorParams, list[ColorInformation]] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_DOCUMENT_COLOR, func)

    def set_color_presentation_handler(
        self, func: HandlerFunc[ColorPresentationParams, list[ColorPresentation]] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_COLOR_PRESENTATION, func)

    def set_document_formatting_handler(
        self, func: HandlerFunc[DocumentFormattingParams, list[TextEdit] | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_FORMATTING, func)

    def set_document_range_formatting_handler(
        self,
        func: HandlerFunc[DocumentRangeFormattingParams, list[TextEdit] | None] | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_RANGE_FORMATTING, func)

    def set_document_on_type_formatting_handler(
        self,
        func: HandlerFunc[DocumentOnTypeFormattingParams, list[TextEdit] | None] | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_ON_TYPE_FORMATTING, func)

    def set_rename_handler(
        self, func: HandlerFunc[RenameParams, WorkspaceEdit | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_RENAME, func)

    def set_prepare_rename_handler(
        self, func: HandlerFunc[PrepareRenameParams, PrepareRenameResult | None] | None
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_PREPARE_RENAME, func)

    def set_linked_editing_range_handler(
        self,
        func: HandlerFunc[LinkedEditingRangeParams, LinkedEditingRanges | None] | None,
    ) -> None:
        self._set(methods.TEXT_DOCUMENT_LINKED_EDITING_RANGE, func)
