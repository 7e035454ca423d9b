"""Semantic tokens, hierarchies, inlay hints, inline values, monikers and pull diagnostics."""

from __future__ import annotations

from typing import Annotated, Callable, Literal, TypeAlias

from pydantic import Field

from trellis.exceptions import InvalidDiagnosticReportKindError
from trellis.protocol.base import (
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
    DocumentDiagnosticReportKind,
    InlayHintKind,
    MonikerKind,
    SymbolKind,
    SymbolTag,
    UniquenessLevel,
)
from trellis.protocol.structures import (
    Command,
    Diagnostic,
    Location,
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
)


class SemanticTokensLegend(LspModel):
    token_types: list[str]
    token_modifiers: list[str]


class SemanticTokensRangeOptions(LspModel):
    """The empty-object form of ``range``: supported with default options."""


class SemanticTokensFullOptions(LspModel):
    delta: bool | None = None


def read_tokens_range(value: object) -> bool | SemanticTokensRangeOptions | None:
    if value is None or isinstance(value, (bool, SemanticTokensRangeOptions)):
        return value
    return read_as(SemanticTokensRangeOptions, value)


def read_tokens_full(value: object) -> bool | SemanticTokensFullOptions | None:
    if value is None or isinstance(value, (bool, SemanticTokensFullOptions)):
        return value
    return read_as(SemanticTokensFullOptions, value)


class SemanticTokensOptions(WorkDoneProgressOptions):
    legend: SemanticTokensLegend = Field(
        default_factory=lambda: SemanticTokensLegend(token_types=[], token_modifiers=[])
    )
    range: Annotated[
        bool | SemanticTokensRangeOptions | None, WireUnion(read_tokens_range)
    ] = None
    full: Annotated[
        bool | SemanticTokensFullOptions | None, WireUnion(read_tokens_full)
    ] = None


class SemanticTokensRegistrationOptions(
    SemanticTokensOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


def read_semantic_tokens_provider(
    value: object,
) -> SemanticTokensOptions | SemanticTokensRegistrationOptions | None:
    if value is None or isinstance(value, SemanticTokensOptions):
        return value
    if isinstance(value, dict) and ("documentSelector" in value or "id" in value):
        return SemanticTokensRegistrationOptions.model_validate(value)
    return read_as(SemanticTokensOptions, value)


class SemanticTokensParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier


class SemanticTokensDeltaParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier
    previous_result_id: str


class SemanticTokensRangeParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier
    range: Range


class SemanticTokens(LspModel):
    result_id: str | None = None
    data: list[UInteger]


class SemanticTokensEdit(LspModel):
    start: UInteger
    delete_count: UInteger
    data: list[UInteger] | None = None


class SemanticTokensDelta(LspModel):
    result_id: str | None = None
    edits: list[SemanticTokensEdit]


class CallHierarchyOptions(WorkDoneProgressOptions):
    pass


class CallHierarchyRegistrationOptions(
    CallHierarchyOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class CallHierarchyPrepareParams(TextDocumentPositionParams, WorkDoneProgressParams):
    pass


class CallHierarchyItem(LspModel):
    name: str
    kind: SymbolKind
    tags: list[SymbolTag] | None = None
    detail: str | None = None
    uri: DocumentUri
    range: Range
    selection_range: Range
    data: LSPAny = None


class CallHierarchyIncomingCallsParams(WorkDoneProgressParams, PartialResultParams):
    item: CallHierarchyItem


class CallHierarchyIncomingCall(LspModel):
    from_: CallHierarchyItem = Field(alias="from")
    from_ranges: list[Range]


class CallHierarchyOutgoingCallsParams(WorkDoneProgressParams, PartialResultParams):
    item: CallHierarchyItem


class CallHierarchyOutgoingCall(LspModel):
    to: CallHierarchyItem
    from_ranges: list[Range]


class TypeHierarchyOptions(WorkDoneProgressOptions):
    pass


class TypeHierarchyRegistrationOptions(
    TypeHierarchyOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class TypeHierarchyPrepareParams(TextDocumentPositionParams, WorkDoneProgressParams):
    pass


class TypeHierarchyItem(LspModel):
    name: str
    kind: SymbolKind
    tags: list[SymbolTag] | None = None
    detail: str | None = None
    uri: DocumentUri
    range: Range
    selection_range: Range
    data: LSPAny = None


class TypeHierarchySupertypesParams(WorkDoneProgressParams, PartialResultParams):
    item: TypeHierarchyItem


class TypeHierarchySubtypesParams(WorkDoneProgressParams, PartialResultParams):
    item: TypeHierarchyItem


class InlayHintOptions(WorkDoneProgressOptions):
    resolve_provider: bool | None = None


class InlayHintRegistrationOptions(
    InlayHintOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class InlayHintParams(WorkDoneProgressParams):
    text_document: TextDocumentIdentifier
    range: Range


class InlayHintLabelPart(LspModel):
    value: str
    tooltip: StrOrMarkup = None
    location: Location | None = None
    command: Command | None = None


def read_inlay_hint_label(value: object) -> str | list[InlayHintLabelPart]:
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return [read_as(InlayHintLabelPart, item) for item in value]
    raise ValueError("inlay hint label must be a string or a list of label parts")


class InlayHint(LspModel):
    position: Position
    label: Annotated[str | list[InlayHintLabelPart], WireUnion(read_inlay_hint_label)]
    kind: InlayHintKind | None = None
    text_edits: list[TextEdit] | None = None
    tooltip: StrOrMarkup = None
    padding_left: bool | None = None
    padding_right: bool | None = None
    data: LSPAny = None


class InlineValueOptions(WorkDoneProgressOptions):
    pass


class InlineValueRegistrationOptions(
    InlineValueOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


class InlineValueContext(LspModel):
    frame_id: Integer
    stopped_location: Range


class InlineValueParams(WorkDoneProgressParams):
    text_document: TextDocumentIdentifier
    range: Range
    context: InlineValueContext


class InlineValueText(LspModel):
    range: Range
    text: str


class InlineValueVariableLookup(LspModel):
    range: Range
    variable_name: str | None = None
    case_sensitive_lookup: bool


class InlineValueEvaluatableExpression(LspModel):
    range: Range
    expression: str | None = None


InlineValue: TypeAlias = (
    InlineValueText | InlineValueVariableLookup | InlineValueEvaluatableExpression
)


def read_inline_value(value: object) -> InlineValue:
    """``text`` marks a text value; ``caseSensitiveLookup`` marks a variable lookup."""
    if isinstance(
        value, (InlineValueText, InlineValueVariableLookup, InlineValueEvaluatableExpression)
    ):
        return value
    if isinstance(value, dict):
        if "text" in value:
            return InlineValueText.model_validate(value)
        if "caseSensitiveLookup" in value:
            return InlineValueVariableLookup.model_validate(value)
    return read_as(InlineValueEvaluatableExpression, value)


class MonikerOptions(WorkDoneProgressOptions):
    pass


class MonikerRegistrationOptions(MonikerOptions, TextDocumentRegistrationOptions):
    pass


class MonikerParams(TextDocumentPositionParams, WorkDoneProgressParams, PartialResultParams):
    pass


class Moniker(LspModel):
    scheme: str
    identifier: str
    unique: UniquenessLevel
    kind: MonikerKind | None = None


class DiagnosticOptions(WorkDoneProgressOptions):
    identifier: str | None = None
    inter_file_dependencies: bool
    workspace_diagnostics: bool


class DiagnosticRegistrationOptions(
    DiagnosticOptions, TextDocumentRegistrationOptions, StaticRegistrationOptions
):
    pass


def read_diagnostic_provider(
    value: object,
) -> DiagnosticOptions | DiagnosticRegistrationOptions | None:
    if value is None or isinstance(value, DiagnosticOptions):
        return value
    if isinstance(value, dict) and ("documentSelector" in value or "id" in value):
        return DiagnosticRegistrationOptions.model_validate(value)
    return read_as(DiagnosticOptions, value)


class DocumentDiagnosticParams(WorkDoneProgressParams, PartialResultParams):
    text_document: TextDocumentIdentifier
    identifier: str | None = None
    previous_result_id: str | None = None


class FullDocumentDiagnosticReport(LspModel):
    kind: Literal["full"] = "full"
    result_id: str | None = None
    items: list[Diagnostic]


class UnchangedDocumentDiagnosticReport(LspModel):
    kind: Literal["unchanged"] = "unchanged"
    result_id: str


def report_reader(
    full: type[FullDocumentDiagnosticReport],
    unchanged: type[UnchangedDocumentDiagnosticReport],
) -> Callable[[object], FullDocumentDiagnosticReport | UnchangedDocumentDiagnosticReport]:
    """Build a reader picking ``full`` or ``unchanged`` by the ``kind`` member.

    Any other ``kind`` raises ``InvalidDiagnosticReportKindError``.
    """

    def _read(value: object) -> FullDocumentDiagnosticReport | UnchangedDocumentDiagnosticReport:
        if isinstance(value, (full, unchanged)):
            return value
        if not isinstance(value, dict):
            raise ValueError("expected diagnostic report object")
        kind = value.get("kind")
        if kind == DocumentDiagnosticReportKind.FULL.value:
            return full.model_validate(value)
        if kind == DocumentDiagnosticReportKind.UNCHANGED.value:
            return unchanged.model_validate(value)
        raise InvalidDiagnosticReportKindError(kind)

    return _read


read_document_report = report_reader(
    FullDocumentDiagnosticReport, UnchangedDocumentDiagnosticReport
)


def read_related_documents(
    value: object,
) -> dict[str, FullDocumentDiagnosticReport | UnchangedDocumentDiagnosticReport] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError("relatedDocuments must be an object")
    return {str(uri): read_document_report(report) for uri, report in value.items()}


RelatedDocuments: TypeAlias = Annotated[
    dict[DocumentUri, FullDocumentDiagnosticReport | UnchangedDocumentDiagnosticReport]
    | None,
    WireUnion(read_related_documents),
]


class RelatedFullDocumentDiagnosticReport(FullDocumentDiagnosticReport):
    related_documents: RelatedDocuments = None


class RelatedUnchangedDocumentDiagnosticReport(UnchangedDocumentDiagnosticReport):
    related_documents: RelatedDocuments = None


DocumentDiagnosticReport: TypeAlias = (
    RelatedFullDocumentDiagnosticReport | RelatedUnchangedDocumentDiagnosticReport
)


read_document_diagnostic_report = report_reader(
    RelatedFullDocumentDiagnosticReport, RelatedUnchangedDocumentDiagnosticReport
)


class DocumentDiagnosticReportPartialResult(LspModel):
    related_documents: RelatedDocuments = None


class DiagnosticServerCancellationData(LspModel):
    retrigger_request: bool


class PreviousResultId(LspModel):
    uri: DocumentUri
    value: str


class WorkspaceDiagnosticParams(WorkDoneProgressParams, PartialResultParams):
    identifier: str | None = None
    previous_result_ids: list[PreviousResultId]


class WorkspaceFullDocumentDiagnosticReport(FullDocumentDiagnosticReport):
    keep_null_fields = frozenset({"version"})

    uri: DocumentUri
    version: Integer | None = None


class WorkspaceUnchangedDocumentDiagnosticReport(UnchangedDocumentDiagnosticReport):
    keep_null_fields = frozenset({"version"})

    uri: DocumentUri
    version: Integer | None = None


WorkspaceDocumentDiagnosticReport: TypeAlias = (
    WorkspaceFullDocumentDiagnosticReport | WorkspaceUnchangedDocumentDiagnosticReport
)


read_workspace_document_report = report_reader(
    WorkspaceFullDocumentDiagnosticReport, WorkspaceUnchangedDocumentDiagnosticReport
)


class WorkspaceDiagnosticReport(LspModel):
    items: Annotated[
        list[WorkspaceDocumentDiagnosticReport],
        WireUnion(read_list(read_workspace_document_report)),
    ]


class WorkspaceDiagnosticReportPartialResult(LspModel):
    items: Annotated[
        list[WorkspaceDocumentDiagnosticReport],
        WireUnion(read_list(read_workspace_document_report)),
    ]
