"""Derive a ``ServerCapabilities`` advertisement from registered callbacks.

Derivation reads one snapshot of the registry and cannot fail. Values it sets
are defaults: hosts adjust the returned model (trigger characters, notebook
selectors, file-operation filters, semantic token legend) before answering
``initialize``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from trellis.protocol import methods
from trellis.protocol.analysis_features import (
    DiagnosticOptions,
    SemanticTokensFullOptions,
    SemanticTokensOptions,
)
from trellis.protocol.enums import (
    DEFAULT_POSITION_ENCODING,
    PositionEncodingKind,
    TextDocumentSyncKind,
)
from trellis.protocol.language_features import (
    CodeLensOptions,
    CompletionOptions,
    DocumentLinkOptions,
    DocumentOnTypeFormattingOptions,
    SignatureHelpOptions,
)
from trellis.protocol.lifecycle import InitializeParams
from trellis.protocol.notebook_sync import NotebookDocumentSyncOptions
from trellis.protocol.server_capabilities import ServerCapabilities
from trellis.protocol.text_sync import TextDocumentSyncOptions
from trellis.protocol.workspace import (
    ExecuteCommandOptions,
    FileOperationOptions,
    FileOperationRegistrationOptions,
    WorkspaceServerCapabilities,
)

if TYPE_CHECKING:
    from trellis.handler import Handler

# Providers whose presence is announced as a bare ``true``.
BOOLEAN_PROVIDERS: tuple[tuple[str, str], ...] = (
    (methods.TEXT_DOCUMENT_HOVER, "hover_provider"),
    (methods.TEXT_DOCUMENT_DECLARATION, "declaration_provider"),
    (methods.TEXT_DOCUMENT_DEFINITION, "definition_provider"),
    (methods.TEXT_DOCUMENT_TYPE_DEFINITION, "type_definition_provider"),
    (methods.TEXT_DOCUMENT_IMPLEMENTATION, "implementation_provider"),
    (methods.TEXT_DOCUMENT_REFERENCES, "references_provider"),
    (methods.TEXT_DOCUMENT_PREPARE_CALL_HIERARCHY, "call_hierarchy_provider"),
    (methods.TEXT_DOCUMENT_PREPARE_TYPE_HIERARCHY, "type_hierarchy_provider"),
    (methods.TEXT_DOCUMENT_DOCUMENT_HIGHLIGHT, "document_highlight_provider"),
    (methods.TEXT_DOCUMENT_FOLDING_RANGE, "folding_range_provider"),
    (methods.TEXT_DOCUMENT_SELECTION_RANGE, "selection_range_provider"),
    (methods.TEXT_DOCUMENT_DOCUMENT_SYMBOL, "document_symbol_provider"),
    (methods.TEXT_DOCUMENT_INLINE_VALUE, "inline_value_provider"),
    (methods.TEXT_DOCUMENT_INLAY_HINT, "inlay_hint_provider"),
    (methods.TEXT_DOCUMENT_MONIKER, "moniker_provider"),
    (methods.TEXT_DOCUMENT_CODE_ACTION, "code_action_provider"),
    (methods.TEXT_DOCUMENT_DOCUMENT_COLOR, "color_provider"),
    (methods.TEXT_DOCUMENT_FORMATTING, "document_formatting_provider"),
    (methods.TEXT_DOCUMENT_RANGE_FORMATTING, "document_range_formatting_provider"),
    (methods.TEXT_DOCUMENT_RENAME, "rename_provider"),
    (methods.TEXT_DOCUMENT_LINKED_EDITING_RANGE, "linked_editing_range_provider"),
    (methods.WORKSPACE_SYMBOL, "workspace_symbol_provider"),
)

FILE_OPERATIONS: tuple[tuple[str, str], ...] = (
    (methods.WORKSPACE_DID_CREATE_FILES, "did_create"),
    (methods.WORKSPACE_WILL_CREATE_FILES, "will_create"),
    (methods.WORKSPACE_DID_RENAME_FILES, "did_rename"),
    (methods.WORKSPACE_WILL_RENAME_FILES, "will_rename"),
    (methods.WORKSPACE_DID_DELETE_FILES, "did_delete"),
    (methods.WORKSPACE_WILL_DELETE_FILES, "will_delete"),
)


def derive_server_capabilities(handler: Handler) -> ServerCapabilities:
    return capabilities_for_methods(handler.registered_methods())


def capabilities_for_methods(registered: Iterable[str]) -> ServerCapabilities:
    present = frozenset(registered)
    capabilities = ServerCapabilities()
    _apply_text_document_sync(capabilities, present)
    _apply_notebook_document_sync(capabilities, present)
    _apply_language_features(capabilities, present)
    _apply_semantic_tokens(capabilities, present)
    _apply_workspace_features(capabilities, present)
    return capabilities


def _text_sync_options(capabilities: ServerCapabilities) -> TextDocumentSyncOptions:
    if not isinstance(capabilities.text_document_sync, TextDocumentSyncOptions):
        capabilities.text_document_sync = TextDocumentSyncOptions()
    return capabilities.text_document_sync


def _apply_text_document_sync(
    capabilities: ServerCapabilities, present: frozenset[str]
) -> None:
    if (
        methods.TEXT_DOCUMENT_DID_OPEN in present
        and methods.TEXT_DOCUMENT_DID_CLOSE in present
    ):
        _text_sync_options(capabilities).open_close = True
    if methods.TEXT_DOCUMENT_DID_CHANGE in present:
        _text_sync_options(capabilities).change = TextDocumentSyncKind.INCREMENTAL
    if methods.TEXT_DOCUMENT_WILL_SAVE in present:
        _text_sync_options(capabilities).will_save = True
    if methods.TEXT_DOCUMENT_WILL_SAVE_WAIT_UNTIL in present:
        _text_sync_options(capabilities).will_save_wait_until = True
    if methods.TEXT_DOCUMENT_DID_SAVE in present:
        _text_sync_options(capabilities).save = True


def _apply_notebook_document_sync(
    capabilities: ServerCapabilities, present: frozenset[str]
) -> None:
    # Notebook selectors are the host's to fill in.
    if methods.NOTEBOOK_DOCUMENT_DID_SAVE in present:
        capabilities.notebook_document_sync = NotebookDocumentSyncOptions(save=True)


def _resolve_flag(present: frozenset[str], method: str) -> bool | None:
    return True if method in present else None


def _apply_language_features(
    capabilities: ServerCapabilities, present: frozenset[str]
) -> None:
    for method, attribute in BOOLEAN_PROVIDERS:
        if method in present:
            setattr(capabilities, attribute, True)
    if methods.TEXT_DOCUMENT_COMPLETION in present:
        capabilities.completion_provider = CompletionOptions(
            resolve_provider=_resolve_flag(present, methods.COMPLETION_ITEM_RESOLVE)
        )
    if methods.TEXT_DOCUMENT_SIGNATURE_HELP in present:
        capabilities.signature_help_provider = SignatureHelpOptions()
    if methods.TEXT_DOCUMENT_DOCUMENT_LINK in present:
        capabilities.document_link_provider = DocumentLinkOptions(
            resolve_provider=_resolve_flag(present, methods.DOCUMENT_LINK_RESOLVE)
        )
    if methods.TEXT_DOCUMENT_CODE_LENS in present:
        capabilities.code_lens_provider = CodeLensOptions(
            resolve_provider=_resolve_flag(present, methods.CODE_LENS_RESOLVE)
        )
    if methods.TEXT_DOCUMENT_ON_TYPE_FORMATTING in present:
        capabilities.document_on_type_formatting_provider = (
            DocumentOnTypeFormattingOptions(first_trigger_character="")
        )
    if methods.TEXT_DOCUMENT_DIAGNOSTIC in present:
        capabilities.diagnostic_provider = DiagnosticOptions(
            inter_file_dependencies=False,
            workspace_diagnostics=methods.WORKSPACE_DIAGNOSTIC in present,
        )
    if methods.WORKSPACE_EXECUTE_COMMAND in present:
        capabilities.execute_command_provider = ExecuteCommandOptions()


def _semantic_tokens_options(capabilities: ServerCapabilities) -> SemanticTokensOptions:
    if not isinstance(capabilities.semantic_tokens_provider, SemanticTokensOptions):
        capabilities.semantic_tokens_provider = SemanticTokensOptions()
    return capabilities.semantic_tokens_provider


def _apply_semantic_tokens(
    capabilities: ServerCapabilities, present: frozenset[str]
) -> None:
    if methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL in present:
        _semantic_tokens_options(capabilities).full = True
    if methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL_DELTA in present:
        _semantic_tokens_options(capabilities).full = SemanticTokensFullOptions(
            delta=True
        )
    if methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_RANGE in present:
        _semantic_tokens_options(capabilities).range = True


def _apply_workspace_features(
    capabilities: ServerCapabilities, present: frozenset[str]
) -> None:
    for method, attribute in FILE_OPERATIONS:
        if method not in present:
            continue
        if capabilities.workspace is None:
            capabilities.workspace = WorkspaceServerCapabilities()
        if capabilities.workspace.file_operations is None:
            capabilities.workspace.file_operations = FileOperationOptions()
        setattr(
            capabilities.workspace.file_operations,
            attribute,
            FileOperationRegistrationOptions(filters=[]),
        )


def select_position_encoding(params: InitializeParams) -> PositionEncodingKind:
    """First client-preferred encoding this library can count in.

    Falls back to UTF-16, which every client must support.
    """
    general = params.capabilities.general
    offered = general.position_encodings if general is not None else None
    for name in offered or ():
        try:
            return PositionEncodingKind(name)
        except ValueError:
            continue
    return DEFAULT_POSITION_ENCODING
