"""Language feature requests: navigation, hover, completion, edits and friends."""

from __future__ import annotations

from typing import Annotated, TypeAlias

from pydantic import ConfigDict

from trellis.protocol.base import (
    Decimal,
    DocumentUri,
    Integer,
    LSPAny,
    LspModel,
    UInteger,
    WireUnion,
    read_as,
    read_list,
)
from trellis.protocol.enums import (
    CodeActionTriggerKind,
    CompletionItemKind,
    CompletionItemTag,
    CompletionTriggerKind,
    DocumentHighlightKind,
    InsertTextFormat,
    InsertTextMode,
    SignatureHelpTriggerKind,
    SymbolKind,
    SymbolTag,
)
from trellis.protocol.structures import (
    Command,
    Diagnostic,
    Location,
    LocationLink,
    MarkedLanguageString,
    MarkedString,
    MarkupContent,
    PartialResultParams,
    Position,
    Range,
    StaticRegistrationOptions,
    StrOrMarkup,
    TextDocumentIdentifier,
    TextDocumentPositionParams,
    TextDocumentRegistrationOptions,
    TextEdit,
    WorkDoneProgressOptions,
    WorkDoneProgressParams,
    WorkspaceEdit,
    read_marked_string,
)


class DeclarationOptions(WorkDoneProgressOptions):
    pass


class DeclarationRegistrationOptions(
    DeclarationOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class DeclarationParams(TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams):
    pass


class DefinitionOptions(WorkDoneProgressOptions):
    pass


class DefinitionRegistrationOptions(DefinitionOptions, TextDocumentRegistrationOptions):
    pass


class DefinitionParams(TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams):
    pass


class TypeDefinitionOptions(WorkDoneProgressOptions):
    pass


class TypeDefinitionRegistrationOptions(
    TypeDefinitionOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class TypeDefinitionParams(
    TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams
):
    pass


class ImplementationOptions(WorkDoneProgressOptions):
    pass


class ImplementationRegistrationOptions(
    ImplementationOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class ImplementationParams(
    TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams
):
    pass


class ReferenceOptions(WorkDoneProgressOptions):
    pass


class ReferenceRegistrationOptions(ReferenceOptions, TextDocumentRegistrationOptions):
    pass


class ReferenceContext(LspModel):
    include_declaration: bool


class ReferenceParams(TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams):
    context: ReferenceContext


class HoverOptions(WorkDoneProgressOptions):
    pass


class HoverRegistrationOptions(HoverOptions, TextDocumentRegistrationOptions):
    pass


class HoverParams(TextDocumentPositionParams, WorkDoneProgressParams):
    pass


HoverContents: TypeAlias = MarkupContent | MarkedString | list[MarkedString]


def read_hover_contents(value: object) -> HoverContents:
    """``MarkupContent`` carries ``kind``; a ``MarkedString`` never does."""
    if isinstance(value, (MarkupContent, MarkedLanguageString, str)):
        return value
    if isinstance(value, list):
        return [read_marked_string(item) for item in value]
    if isinstance(value, dict) and "kind" in value:
        return MarkupContent.model_validate(value)
    return read_marked_string(value)


class Hover(LspModel):
    contents: Annotated[HoverContents, WireUnion(read_hover_contents)]
    range: Range | None = None


class DocumentHighlightOptions(WorkDoneProgressOptions):
    pass


class DocumentHighlightRegistrationOptions(
    DocumentHighlightOptions, TextDocumentRegistrationOptions
):
    pass


class DocumentHighlightParams(
    TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams
):
    pass


class DocumentHighlight(LspModel):
    range: Range
    kind: DocumentHighlightKind | None = None


class DocumentLinkOptions(WorkDoneProgressOptions):
    resolve_provider: bool | None = None


class DocumentLinkRegistrationOptions(DocumentLinkOptions, TextDocumentRegistrationOptions):
    pass


class DocumentLinkParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier


class DocumentLink(LspModel):
    range: Range
    target: DocumentUri | None = None
    tooltip: str | None = None
    data: LSPAny = None


class CodeLensOptions(WorkDoneProgressOptions):
    resolve_provider: bool | None = None


class CodeLensRegistrationOptions(CodeLensOptions, TextDocumentRegistrationOptions):
    pass


class CodeLensParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier


class CodeLens(LspModel):
    range: Range
    command: Command | None = None
    data: LSPAny = None


class FoldingRangeOptions(WorkDoneProgressOptions):
    pass


class FoldingRangeRegistrationOptions(
    FoldingRangeOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class FoldingRangeParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier


class FoldingRange(LspModel):
    start_line: UInteger
    start_character: UInteger | None = None
    end_line: UInteger
    end_character: UInteger | None = None
    kind: str | None = None
    collapsed_text: str | None = None


class SelectionRangeOptions(WorkDoneProgressOptions):
    pass


class SelectionRangeRegistrationOptions(
    SelectionRangeOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class SelectionRangeParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier
    positions: list[Position]


class SelectionRange(LspModel):
    range: Range
    parent: SelectionRange | None = None


class DocumentSymbolOptions(WorkDoneProgressOptions):
    label: str | None = None


class DocumentSymbolRegistrationOptions(
    DocumentSymbolOptions, TextDocumentRegistrationOptions
):
    pass


class DocumentSymbolParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier


class DocumentSymbol(LspModel):
    name: str
    detail: str | None = None
    kind: SymbolKind
    tags: list[SymbolTag] | None = None
    deprecated: bool | None = None
    range: Range
    selection_range: Range
    children: list[DocumentSymbol] | None = None


class SymbolInformation(LspModel):
    name: str
    kind: SymbolKind
    tags: list[SymbolTag] | None = None
    deprecated: bool | None = None
    location: Location
    container_name: str | None = None


class CompletionItemOptions(LspModel):
    label_details_support: bool | None = None


class CompletionOptions(WorkDoneProgressOptions):
    trigger_characters: list[str] | None = None
    all_commit_characters: list[str] | None = None
    resolve_provider: bool | None = None
    completion_item: CompletionItemOptions | None = None


class CompletionRegistrationOptions(CompletionOptions, TextDocumentRegistrationOptions):
    pass


class CompletionContext(LspModel):
    trigger_kind: CompletionTriggerKind
    trigger_character: str | None = None


class CompletionParams(TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams):
    context: CompletionContext | None = None


class CompletionItemLabelDetails(LspModel):
    detail: str | None = None
    description: str | None = None


class InsertReplaceEdit(LspModel):
    new_text: str
    insert: Range
    replace: Range


def read_completion_edit(value: object) -> TextEdit | InsertReplaceEdit | None:
    """``insert`` present selects ``InsertReplaceEdit``."""
    if value is None or isinstance(value, (TextEdit, InsertReplaceEdit)):
        return value
    if isinstance(value, dict) and "insert" in value:
        return InsertReplaceEdit.model_validate(value)
    return read_as(TextEdit, value)


class CompletionItem(LspModel):
    label: str
    label_details: CompletionItemLabelDetails | None = None
    kind: CompletionItemKind | None = None
    tags: list[CompletionItemTag] | None = None
    detail: str | None = None
    documentation: StrOrMarkup = None
    deprecated: bool | None = None
    preselect: bool | None = None
    sort_text: str | None = None
    filter_text: str | None = None
    insert_text: str | None = None
    insert_text_format: InsertTextFormat | None = None
    insert_text_mode: InsertTextMode | None = None
    text_edit: Annotated[
        TextEdit | InsertReplaceEdit | None, WireUnion(read_completion_edit)
    ] = None
    text_edit_text: str | None = None
    additional_text_edits: list[TextEdit] | None = None
    commit_characters: list[str] | None = None
    command: Command | None = None
    data: LSPAny = None


class EditRangeWithInsertReplace(LspModel):
    insert: Range
    replace: Range


def read_edit_range(value: object) -> Range | EditRangeWithInsertReplace | None:
    if value is None or isinstance(value, (Range, EditRangeWithInsertReplace)):
        return value
    if isinstance(value, dict) and "insert" in value:
        return EditRangeWithInsertReplace.model_validate(value)
    return read_as(Range, value)


class CompletionItemDefaults(LspModel):
    commit_characters: list[str] | None = None
    edit_range: Annotated[
        Range | EditRangeWithInsertReplace | None, WireUnion(read_edit_range)
    ] = None
    insert_text_format: InsertTextFormat | None = None
    insert_text_mode: InsertTextMode | None = None
    data: LSPAny = None


class CompletionList(LspModel):
    is_incomplete: bool
    item_defaults: CompletionItemDefaults | None = None
    items: list[CompletionItem]


class SignatureHelpOptions(WorkDoneProgressOptions):
    trigger_characters: list[str] | None = None
    retrigger_characters: list[str] | None = None


class SignatureHelpRegistrationOptions(
    SignatureHelpOptions, TextDocumentRegistrationOptions
):
    pass


def read_parameter_label(value: object) -> str | tuple[int, int]:
    """A substring label, or inclusive/exclusive offsets into the signature label."""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and len(value) == 2:
        start, end = value
        if all(isinstance(item, int) and not isinstance(item, bool) for item in (start, end)):
            return (start, end)
    raise ValueError("parameter label must be a string or an offset pair")


class ParameterInformation(LspModel):
    label: Annotated[str | tuple[int, int], WireUnion(read_parameter_label)]
    documentation: StrOrMarkup = None


class SignatureInformation(LspModel):
    label: str
    documentation: StrOrMarkup = None
    parameters: list[ParameterInformation] | None = None
    active_parameter: UInteger | None = None


class SignatureHelp(LspModel):
    signatures: list[SignatureInformation]
    active_signature: UInteger | None = None
    active_parameter: UInteger | None = None


class SignatureHelpContext(LspModel):
    trigger_kind: SignatureHelpTriggerKind
    trigger_character: str | None = None
    is_retrigger: bool
    active_signature_help: SignatureHelp | None = None


class SignatureHelpParams(TextDocumentPositionParams, WorkDoneProgressParams):
    context: SignatureHelpContext | None = None


class CodeActionOptions(WorkDoneProgressOptions):
    code_action_kinds: list[str] | None = None
    resolve_provider: bool | None = None


class CodeActionRegistrationOptions(CodeActionOptions, TextDocumentRegistrationOptions):
    pass


class CodeActionContext(LspModel):
    diagnostics: list[Diagnostic]
    only: list[str] | None = None
    trigger_kind: CodeActionTriggerKind | None = None


class CodeActionParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier
    range: Range
    context: CodeActionContext


class CodeActionDisabled(LspModel):
    reason: str


class CodeAction(LspModel):
    title: str
    kind: str | None = None
    diagnostics: list[Diagnostic] | None = None
    is_preferred: bool | None = None
    disabled: CodeActionDisabled | None = None
    edit: WorkspaceEdit | None = None
    command: Command | None = None
    data: LSPAny = None


def read_command_or_code_action(value: object) -> Command | CodeAction:
    """A ``Command`` has a string ``command``; a ``CodeAction`` may nest one."""
    if isinstance(value, (Command, CodeAction)):
        return value
    if isinstance(value, dict) and isinstance(value.get("command"), str):
        return Command.model_validate(value)
    return read_as(CodeAction, value)


CommandOrCodeActionList: TypeAlias = Annotated[
    list[Command | CodeAction] | None, WireUnion(read_list(read_command_or_code_action))
]


class DocumentColorOptions(WorkDoneProgressOptions):
    pass


class DocumentColorRegistrationOptions(
    DocumentColorOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class DocumentColorParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier


class Color(LspModel):
    red: Decimal
    green: Decimal
    blue: Decimal
    alpha: Decimal


class ColorInformation(LspModel):
    range: Range
    color: Color


class ColorPresentationParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier
    color: Color
    range: Range


class ColorPresentation(LspModel):
    label: str
    text_edit: TextEdit | None = None
    additional_text_edits: list[TextEdit] | None = None


class FormattingOptions(LspModel):
    """Known options plus arbitrary ``[key: string]: boolean | integer | string`` members."""

    model_config = ConfigDict(extra="allow")

    tab_size: UInteger
    insert_spaces: bool
    trim_trailing_whitespace: bool | None = None
    insert_final_newline: bool | None = None
    trim_final_newlines: bool | None = None


class DocumentFormattingOptions(WorkDoneProgressOptions):
    pass


class DocumentFormattingRegistrationOptions(
    DocumentFormattingOptions, TextDocumentRegistrationOptions
):
    pass


class DocumentFormattingParams(WorkDoneProgressParams):
    text_document: TextDocumentIdentifier
    options: FormattingOptions


class DocumentRangeFormattingOptions(WorkDoneProgressOptions):
    pass


class DocumentRangeFormattingRegistrationOptions(
    DocumentRangeFormattingOptions, TextDocumentRegistrationOptions
):
    pass


class DocumentRangeFormattingParams(WorkDoneProgressParams):
    text_document: TextDocumentIdentifier
    range: Range
    options: FormattingOptions


class DocumentOnTypeFormattingOptions(LspModel):
    first_trigger_character: str
    more_trigger_character: list[str] | None = None


class DocumentOnTypeFormattingRegistrationOptions(
    DocumentOnTypeFormattingOptions, TextDocumentRegistrationOptions
):
    pass


class DocumentOnTypeFormattingParams(LspModel):
    text_document: TextDocumentIdentifier
    position: Position
    ch: str
    options: FormattingOptions


class RenameOptions(WorkDoneProgressOptions):
    prepare_provider: bool | None = None


class RenameRegistrationOptions(RenameOptions, TextDocumentRegistrationOptions):
    pass


class RenameParams(TextDocumentPositionParams, WorkDoneProgressParams):
    new_name: str


class PrepareRenameParams(TextDocumentPositionParams, WorkDoneProgressParams):
    pass


class PrepareRenamePlaceholder(LspModel):
    range: Range
    placeholder: str


class PrepareRenameDefaultBehavior(LspModel):
    default_behavior: bool


PrepareRenameResult: TypeAlias = Range | PrepareRenamePlaceholder | PrepareRenameDefaultBehavior


def read_prepare_rename_result(value: object) -> PrepareRenameResult | None:
    if value is None or isinstance(
        value, (Range, PrepareRenamePlaceholder, PrepareRenameDefaultBehavior)
    ):
        return value
    if isinstance(value, dict):
        if "placeholder" in value:
            return PrepareRenamePlaceholder.model_validate(value)
        if "defaultBehavior" in value:
            return PrepareRenameDefaultBehavior.model_validate(value)
    return read_as(Range, value)


class LinkedEditingRangeOptions(WorkDoneProgressOptions):
    pass


class LinkedEditingRangeRegistrationOptions(
    LinkedEditingRangeOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class LinkedEditingRangeParams(TextDocumentPositionParams, WorkDoneProgressParams):
    pass


class LinkedEditingRanges(LspModel):
    ranges: list[Range]
    word_pattern: str | None = None


class PublishDiagnosticsParams(LspModel):
    uri: DocumentUri
    version: Integer | None = None
    diagnostics: list[Diagnostic]


def read_definition_result(
    value: object,
) -> Location | list[Location | LocationLink] | None:
    """``Location | Location[] | LocationLink[] | null``; links carry ``targetUri``."""
    if value is None or isinstance(value, Location):
        return value
    if isinstance(value, dict):
        return Location.model_validate(value)
    if isinstance(value, list):
        return [_read_location_or_link(item) for item in value]
    raise ValueError("expected location, location list or null")


def _read_location_or_link(value: object) -> Location | LocationLink:
    if isinstance(value, (Location, LocationLink)):
        return value
    if isinstance(value, dict) and "targetUri" in value:
        return LocationLink.model_validate(value)
    return read_as(Location, value)
