"""The ``ServerCapabilities`` tree announced in the ``initialize`` result.

Provider members follow a handful of union shapes. Each is read with a reader
built from the variants it admits:

* ``bool | Options``: a JSON boolean stays a bool, an object becomes Options.
* ``bool | Options | RegistrationOptions``: an object with a
  ``documentSelector`` or ``id`` member becomes RegistrationOptions, any other
  object becomes Options.
"""

from __future__ import annotations

from typing import Annotated, Callable, TypeVar

from trellis.protocol.analysis_features import (
    CallHierarchyOptions,
    CallHierarchyRegistrationOptions,
    DiagnosticOptions,
    DiagnosticRegistrationOptions,
    InlayHintOptions,
    InlayHintRegistrationOptions,
    InlineValueOptions,
    InlineValueRegistrationOptions,
    MonikerOptions,
    MonikerRegistrationOptions,
    SemanticTokensOptions,
    SemanticTokensRegistrationOptions,
    TypeHierarchyOptions,
    TypeHierarchyRegistrationOptions,
    read_diagnostic_provider,
    read_semantic_tokens_provider,
)
from trellis.protocol.base import LSPAny, LspModel, WireUnion, read_as
from trellis.protocol.enums import TextDocumentSyncKind
from trellis.protocol.language_features import (
    CodeActionOptions,
    CodeLensOptions,
    CompletionOptions,
    DeclarationOptions,
    DeclarationRegistrationOptions,
    DefinitionOptions,
    DocumentColorOptions,
    DocumentColorRegistrationOptions,
    DocumentFormattingOptions,
    DocumentHighlightOptions,
    DocumentLinkOptions,
    DocumentOnTypeFormattingOptions,
    DocumentRangeFormattingOptions,
    DocumentSymbolOptions,
    FoldingRangeOptions,
    FoldingRangeRegistrationOptions,
    HoverOptions,
    ImplementationOptions,
    ImplementationRegistrationOptions,
    LinkedEditingRangeOptions,
    LinkedEditingRangeRegistrationOptions,
    ReferenceOptions,
    RenameOptions,
    SelectionRangeOptions,
    SelectionRangeRegistrationOptions,
    SignatureHelpOptions,
    TypeDefinitionOptions,
    TypeDefinitionRegistrationOptions,
)
from trellis.protocol.notebook_sync import (
    NotebookDocumentSyncOptions,
    NotebookDocumentSyncRegistrationOptions,
    read_notebook_sync,
)
from trellis.protocol.text_sync import TextDocumentSyncOptions, read_text_document_sync
from trellis.protocol.workspace import (
    ExecuteCommandOptions,
    WorkspaceServerCapabilities,
    WorkspaceSymbolOptions,
)

O = TypeVar("O", bound=LspModel)
R = TypeVar("R", bound=LspModel)


def options_or_bool(options: type[O]) -> Callable[[object], bool | O | None]:
    def _read(value: object) -> bool | O | None:
        if value is None or isinstance(value, (bool, options)):
            return value
        return read_as(options, value)

    return _read


def registration_options_or_bool(
    options: type[O], registration: type[R]
) -> Callable[[object], bool | O | R | None]:
    def _read(value: object) -> bool | O | R | None:
        if value is None or isinstance(value, (bool, options, registration)):
            return value
        if isinstance(value, dict) and ("documentSelector" in value or "id" in value):
            return registration.model_validate(value)
        return read_as(options, value)

    return _read


class ServerCapabilities(LspModel):
    position_encoding: str | None = None
    text_document_sync: Annotated[
        TextDocumentSyncOptions | TextDocumentSyncKind | None,
        WireUnion(read_text_document_sync),
    ] = None
    notebook_document_sync: Annotated[
        NotebookDocumentSyncOptions | NotebookDocumentSyncRegistrationOptions | None,
        WireUnion(read_notebook_sync),
    ] = None
    completion_provider: CompletionOptions | None = None
    hover_provider: Annotated[
        bool | HoverOptions | None, WireUnion(options_or_bool(HoverOptions))
    ] = None
    signature_help_provider: SignatureHelpOptions | None = None
    declaration_provider: Annotated[
        bool | DeclarationOptions | DeclarationRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(DeclarationOptions, DeclarationRegistrationOptions)
        ),
    ] = None
    definition_provider: Annotated[
        bool | DefinitionOptions | None, WireUnion(options_or_bool(DefinitionOptions))
    ] = None
    type_definition_provider: Annotated[
        bool | TypeDefinitionOptions | TypeDefinitionRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                TypeDefinitionOptions, TypeDefinitionRegistrationOptions
            )
        ),
    ] = None
    implementation_provider: Annotated[
        bool | ImplementationOptions | ImplementationRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                ImplementationOptions, ImplementationRegistrationOptions
            )
        ),
    ] = None
    references_provider: Annotated[
        bool | ReferenceOptions | None, WireUnion(options_or_bool(ReferenceOptions))
    ] = None
    document_highlight_provider: Annotated[
        bool | DocumentHighlightOptions | None,
        WireUnion(options_or_bool(DocumentHighlightOptions)),
    ] = None
    document_symbol_provider: Annotated[
        bool | DocumentSymbolOptions | None,
        WireUnion(options_or_bool(DocumentSymbolOptions)),
    ] = None
    code_action_provider: Annotated[
        bool | CodeActionOptions | None, WireUnion(options_or_bool(CodeActionOptions))
    ] = None
    code_lens_provider: CodeLensOptions | None = None
    document_link_provider: DocumentLinkOptions | None = None
    color_provider: Annotated[
        bool | DocumentColorOptions | DocumentColorRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                DocumentColorOptions, DocumentColorRegistrationOptions
            )
        ),
    ] = None
    document_formatting_provider: Annotated[
        bool | DocumentFormattingOptions | None,
        WireUnion(options_or_bool(DocumentFormattingOptions)),
    ] = None
    document_range_formatting_provider: Annotated[
        bool | DocumentRangeFormattingOptions | None,
        WireUnion(options_or_bool(DocumentRangeFormattingOptions)),
    ] = None
    document_on_type_formatting_provider: DocumentOnTypeFormattingOptions | None = None
    rename_provider: Annotated[
        bool | RenameOptions | None, WireUnion(options_or_bool(RenameOptions))
    ] = None
    folding_range_provider: Annotated[
        bool | FoldingRangeOptions | FoldingRangeRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                FoldingRangeOptions, FoldingRangeRegistrationOptions
            )
        ),
    ] = None
    execute_command_provider: ExecuteCommandOptions | None = None
    selection_range_provider: Annotated[
        bool | SelectionRangeOptions | SelectionRangeRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                SelectionRangeOptions, SelectionRangeRegistrationOptions
            )
        ),
    ] = None
    linked_editing_range_provider: Annotated[
        bool | LinkedEditingRangeOptions | LinkedEditingRangeRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                LinkedEditingRangeOptions, LinkedEditingRangeRegistrationOptions
            )
        ),
    ] = None
    call_hierarchy_provider: Annotated[
        bool | CallHierarchyOptions | CallHierarchyRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                CallHierarchyOptions, CallHierarchyRegistrationOptions
            )
        ),
    ] = None
    semantic_tokens_provider: Annotated[
        SemanticTokensOptions | SemanticTokensRegistrationOptions | None,
        WireUnion(read_semantic_tokens_provider),
    ] = None
    moniker_provider: Annotated[
        bool | MonikerOptions | MonikerRegistrationOptions | None,
        WireUnion(registration_options_or_bool(MonikerOptions, MonikerRegistrationOptions)),
    ] = None
    type_hierarchy_provider: Annotated[
        bool | TypeHierarchyOptions | TypeHierarchyRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(
                TypeHierarchyOptions, TypeHierarchyRegistrationOptions
            )
        ),
    ] = None
    inline_value_provider: Annotated[
        bool | InlineValueOptions | InlineValueRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(InlineValueOptions, InlineValueRegistrationOptions)
        ),
    ] = None
    inlay_hint_provider: Annotated[
        bool | InlayHintOptions | InlayHintRegistrationOptions | None,
        WireUnion(
            registration_options_or_bool(InlayHintOptions, InlayHintRegistrationOptions)
        ),
    ] = None
    diagnostic_provider: Annotated[
        DiagnosticOptions | DiagnosticRegistrationOptions | None,
        WireUnion(read_diagnostic_provider),
    ] = None
    workspace_symbol_provider: Annotated[
        bool | WorkspaceSymbolOptions | None,
        WireUnion(options_or_bool(WorkspaceSymbolOptions)),
    ] = None
    workspace: WorkspaceServerCapabilities | None = None
    experimental: LSPAny = None
