"""Capabilities a client announces in ``initialize``.

Every structure here keeps members it does not model, so a server can still
inspect proposed or newer client capabilities through ``model_extra``. Value
sets are plain integers and strings because clients may list values newer
than the enumerations modelled here.
"""

from __future__ import annotations

from trellis.protocol.base import LSPAny, OpenModel
from trellis.protocol.enums import (
    FailureHandlingKind,
    InsertTextMode,
    PrepareSupportDefaultBehavior,
)
from trellis.protocol.structures import (
    MarkdownClientCapabilities,
    RegularExpressionsClientCapabilities,
)


class DynamicRegistrationCapability(OpenModel):
    dynamic_registration: bool | None = None


class ChangeAnnotationSupport(OpenModel):
    groups_on_label: bool | None = None


class WorkspaceEditClientCapabilities(OpenModel):
    document_changes: bool | None = None
    resource_operations: list[str] | None = None
    failure_handling: FailureHandlingKind | None = None
    normalizes_line_endings: bool | None = None
    change_annotation_support: ChangeAnnotationSupport | None = None


class DidChangeWatchedFilesClientCapabilities(DynamicRegistrationCapability):
    relative_pattern_support: bool | None = None


class SymbolKindCapability(OpenModel):
    value_set: list[int] | None = None


class SymbolTagSupport(OpenModel):
    value_set: list[int]


class ResolveSupport(OpenModel):
    properties: list[str]


class WorkspaceSymbolClientCapabilities(DynamicRegistrationCapability):
    symbol_kind: SymbolKindCapability | None = None
    tag_support: SymbolTagSupport | None = None
    resolve_support: ResolveSupport | None = None


class RefreshCapability(OpenModel):
    refresh_support: bool | None = None


class FileOperationClientCapabilities(DynamicRegistrationCapability):
    did_create: bool | None = None
    will_create: bool | None = None
    did_rename: bool | None = None
    will_rename: bool | None = None
    did_delete: bool | None = None
    will_delete: bool | None = None


class WorkspaceClientCapabilities(OpenModel):
    apply_edit: bool | None = None
    workspace_edit: WorkspaceEditClientCapabilities | None = None
    did_change_configuration: DynamicRegistrationCapability | None = None
    did_change_watched_files: DidChangeWatchedFilesClientCapabilities | None = None
    symbol: WorkspaceSymbolClientCapabilities | None = None
    execute_command: DynamicRegistrationCapability | None = None
    workspace_folders: bool | None = None
    configuration: bool | None = None
    semantic_tokens: RefreshCapability | None = None
    code_lens: RefreshCapability | None = None
    file_operations: FileOperationClientCapabilities | None = None
    inline_value: RefreshCapability | None = None
    inlay_hint: RefreshCapability | None = None
    diagnostics: RefreshCapability | None = None


class TextDocumentSyncClientCapabilities(DynamicRegistrationCapability):
    will_save: bool | None = None
    will_save_wait_until: bool | None = None
    did_save: bool | None = None


class CompletionItemTagSupport(OpenModel):
    value_set: list[int]


class InsertTextModeSupport(OpenModel):
    value_set: list[int]


class CompletionItemCapability(OpenModel):
    snippet_support: bool | None = None
    commit_characters_support: bool | None = None
    documentation_format: list[str] | None = None
    deprecated_support: bool | None = None
    preselect_support: bool | None = None
    tag_support: CompletionItemTagSupport | None = None
    insert_replace_support: bool | None = None
    resolve_support: ResolveSupport | None = None
    insert_text_mode_support: InsertTextModeSupport | None = None
    label_details_support: bool | None = None


class CompletionItemKindCapability(OpenModel):
    value_set: list[int] | None = None


class CompletionListCapability(OpenModel):
    item_defaults: list[str] | None = None


class CompletionClientCapabilities(DynamicRegistrationCapability):
    completion_item: CompletionItemCapability | None = None
    completion_item_kind: CompletionItemKindCapability | None = None
    context_support: bool | None = None
    insert_text_mode: InsertTextMode | None = None
    completion_list: CompletionListCapability | None = None


class HoverClientCapabilities(DynamicRegistrationCapability):
    content_format: list[str] | None = None


class ParameterInformationCapability(OpenModel):
    label_offset_support: bool | None = None


class SignatureInformationCapability(OpenModel):
    documentation_format: list[str] | None = None
    parameter_information: ParameterInformationCapability | None = None
    active_parameter_support: bool | None = None


class SignatureHelpClientCapabilities(DynamicRegistrationCapability):
    signature_information: SignatureInformationCapability | None = None
    context_support: bool | None = None


class LinkSupportCapability(DynamicRegistrationCapability):
    link_support: bool | None = None


class DocumentSymbolClientCapabilities(DynamicRegistrationCapability):
    symbol_kind: SymbolKindCapability | None = None
    hierarchical_document_symbol_support: bool | None = None
    tag_support: SymbolTagSupport | None = None
    label_support: bool | None = None


class CodeActionKindCapability(OpenModel):
    value_set: list[str]


class CodeActionLiteralSupport(OpenModel):
    code_action_kind: CodeActionKindCapability


class CodeActionClientCapabilities(DynamicRegistrationCapability):
    code_action_literal_support: CodeActionLiteralSupport | None = None
    is_preferred_support: bool | None = None
    disabled_support: bool | None = None
    data_support: bool | None = None
    resolve_support: ResolveSupport | None = None
    honors_change_annotations: bool | None = None


class DocumentLinkClientCapabilities(DynamicRegistrationCapability):
    tooltip_support: bool | None = None


class RenameClientCapabilities(DynamicRegistrationCapability):
    prepare_support: bool | None = None
    prepare_support_default_behavior: PrepareSupportDefaultBehavior | None = None
    honors_change_annotations: bool | None = None


class DiagnosticTagSupport(OpenModel):
    value_set: list[int]


class PublishDiagnosticsClientCapabilities(OpenModel):
    related_information: bool | None = None
    tag_support: DiagnosticTagSupport | None = None
    version_support: bool | None = None
    code_description_support: bool | None = None
    data_support: bool | None = None


class FoldingRangeKindCapability(OpenModel):
    value_set: list[str] | None = None


class FoldingRangeCapability(OpenModel):
    collapsed_text: bool | None = None


class FoldingRangeClientCapabilities(DynamicRegistrationCapability):
    range_limit: int | None = None
    line_folding_only: bool | None = None
    folding_range_kind: FoldingRangeKindCapability | None = None
    folding_range: FoldingRangeCapability | None = None


class SemanticTokensRequestsCapability(OpenModel):
    range: LSPAny = None
    full: LSPAny = None


class SemanticTokensClientCapabilities(DynamicRegistrationCapability):
    requests: SemanticTokensRequestsCapability
    token_types: list[str]
    token_modifiers: list[str]
    formats: list[str]
    overlapping_token_support: bool | None = None
    multiline_token_support: bool | None = None
    server_cancel_support: bool | None = None
    augments_syntax_tokens: bool | None = None


class InlayHintClientCapabilities(DynamicRegistrationCapability):
    resolve_support: ResolveSupport | None = None


class DiagnosticClientCapabilities(DynamicRegistrationCapability):
    related_document_support: bool | None = None


class TextDocumentClientCapabilities(OpenModel):
    synchronization: TextDocumentSyncClientCapabilities | None = None
    completion: CompletionClientCapabilities | None = None
    hover: HoverClientCapabilities | None = None
    signature_help: SignatureHelpClientCapabilities | None = None
    declaration: LinkSupportCapability | None = None
    definition: LinkSupportCapability | None = None
    type_definition: LinkSupportCapability | None = None
    implementation: LinkSupportCapability | None = None
    references: DynamicRegistrationCapability | None = None
    document_highlight: DynamicRegistrationCapability | None = None
    document_symbol: DocumentSymbolClientCapabilities | None = None
    code_action: CodeActionClientCapabilities | None = None
    code_lens: DynamicRegistrationCapability | None = None
    document_link: DocumentLinkClientCapabilities | None = None
    color_provider: DynamicRegistrationCapability | None = None
    formatting: DynamicRegistrationCapability | None = None
    range_formatting: DynamicRegistrationCapability | None = None
    on_type_formatting: DynamicRegistrationCapability | None = None
    rename: RenameClientCapabilities | None = None
    publish_diagnostics: PublishDiagnosticsClientCapabilities | None = None
    folding_range: FoldingRangeClientCapabilities | None = None
    selection_range: DynamicRegistrationCapability | None = None
    linked_editing_range: DynamicRegistrationCapability | None = None
    call_hierarchy: DynamicRegistrationCapability | None = None
    semantic_tokens: SemanticTokensClientCapabilities | None = None
    moniker: DynamicRegistrationCapability | None = None
    type_hierarchy: DynamicRegistrationCapability | None = None
    inline_value: DynamicRegistrationCapability | None = None
    inlay_hint: InlayHintClientCapabilities | None = None
    diagnostic: DiagnosticClientCapabilities | None = None


class NotebookDocumentSyncClientCapabilities(DynamicRegistrationCapability):
    execution_summary_support: bool | None = None


class NotebookDocumentClientCapabilities(OpenModel):
    synchronization: NotebookDocumentSyncClientCapabilities


class ShowMessageActionItemCapability(OpenModel):
    additional_properties_support: bool | None = None


class ShowMessageRequestClientCapabilities(OpenModel):
    message_action_item: ShowMessageActionItemCapability | None = None


class ShowDocumentClientCapabilities(OpenModel):
    support: bool


class WindowClientCapabilities(OpenModel):
    work_done_progress: bool | None = None
    show_message: ShowMessageRequestClientCapabilities | None = None
    show_document: ShowDocumentClientCapabilities | None = None


class StaleRequestSupport(OpenModel):
    cancel: bool
    retry_on_content_modified: list[str]


class GeneralClientCapabilities(OpenModel):
    stale_request_support: StaleRequestSupport | None = None
    regular_expressions: RegularExpressionsClientCapabilities | None = None
    markdown: MarkdownClientCapabilities | None = None
    position_encodings: list[str] | None = None


class ClientCapabilities(OpenModel):
    workspace: WorkspaceClientCapabilities | None = None
    text_document: TextDocumentClientCapabilities | None = None
    notebook_document: NotebookDocumentClientCapabilities | None = None
    window: WindowClientCapabilities | None = None
    general: GeneralClientCapabilities | None = None
    experimental: LSPAny = None
