"""Basic structures shared across the method surface."""

from __future__ import annotations

from typing import Annotated, Literal, TypeAlias

from trellis.protocol.base import (
    DocumentUri,
    Integer,
    IntOrString,
    LSPAny,
    LspModel,
    ProgressToken,
    UInteger,
    URI,
    WireUnion,
    read_as,
    read_list,
)
from trellis.protocol.enums import (
    DiagnosticSeverity,
    DiagnosticTag,
    MarkupKind,
    PositionEncodingKind,
    ResourceOperationKind,
)


class Position(LspModel):
    """Zero-based line and character.

    ``character`` counts code units of the negotiated position encoding.
    """

    line: UInteger
    character: UInteger

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.character)

    def __lt__(self, other: "Position") -> bool:
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: "Position") -> bool:
        return self.as_tuple() <= other.as_tuple()

    def index_in(
        self,
        text: str | bytes,
        encoding: PositionEncodingKind | str = PositionEncodingKind.UTF16,
    ) -> int:
        from trellis.position import position_to_byte_offset

        return position_to_byte_offset(text, self, encoding)


class Range(LspModel):
    """A span between two positions; ``end`` is exclusive."""

    start: Position
    end: Position

    def is_empty(self) -> bool:
        return self.start.as_tuple() == self.end.as_tuple()

    def contains(self, position: Position) -> bool:
        return self.start <= position and position < self.end

    def indexes_in(
        self,
        text: str | bytes,
        encoding: PositionEncodingKind | str = PositionEncodingKind.UTF16,
    ) -> tuple[int, int]:
        from trellis.position import range_to_byte_offsets

        return range_to_byte_offsets(text, self, encoding)


class Location(LspModel):
    uri: DocumentUri
    range: Range


class LocationLink(LspModel):
    origin_selection_range: Range | None = None
    target_uri: DocumentUri
    target_range: Range
    target_selection_range: Range


class TextDocumentIdentifier(LspModel):
    uri: DocumentUri


class TextDocumentItem(LspModel):
    uri: DocumentUri
    language_id: str
    version: Integer
    text: str


class VersionedTextDocumentIdentifier(TextDocumentIdentifier):
    version: Integer


class OptionalVersionedTextDocumentIdentifier(TextDocumentIdentifier):
    keep_null_fields = frozenset({"version"})

    version: Integer | None = None


class TextDocumentPositionParams(LspModel):
    text_document: TextDocumentIdentifier
    position: Position


class WorkDoneProgressParams(LspModel):
    work_done_token: ProgressToken | None = None


class PartialResultParams(LspModel):
    partial_result_token: ProgressToken | None = None


class WorkDoneProgressOptions(LspModel):
    work_done_progress: bool | None = None


class TextDocumentFilter(LspModel):
    language: str | None = None
    scheme: str | None = None
    pattern: str | None = None


class NotebookDocumentFilter(LspModel):
    notebook_type: str | None = None
    scheme: str | None = None
    pattern: str | None = None


def read_notebook_filter(value: object) -> NotebookDocumentFilter | str | None:
    """Object shape first, falling back to a bare string such as ``"*"``."""
    if value is None or isinstance(value, (NotebookDocumentFilter, str)):
        return value
    if isinstance(value, dict):
        return NotebookDocumentFilter.model_validate(value)
    raise ValueError("expected notebook document filter or string")


class NotebookCellTextDocumentFilter(LspModel):
    notebook: Annotated[
        NotebookDocumentFilter | str, WireUnion(read_notebook_filter)
    ]
    language: str | None = None


DocumentFilter: TypeAlias = TextDocumentFilter | NotebookCellTextDocumentFilter


def read_document_filter(value: object) -> DocumentFilter:
    if isinstance(value, (TextDocumentFilter, NotebookCellTextDocumentFilter)):
        return value
    if isinstance(value, dict) and "notebook" in value:
        return NotebookCellTextDocumentFilter.model_validate(value)
    return read_as(TextDocumentFilter, value)


DocumentSelector: TypeAlias = Annotated[
    list[DocumentFilter] | None, WireUnion(read_list(read_document_filter))
]


class TextDocumentRegistrationOptions(LspModel):
    """``documentSelector: DocumentSelector | null``; null selects the client's default."""

    keep_null_fields = frozenset({"document_selector"})

    document_selector: DocumentSelector = None


class StaticRegistrationOptions(LspModel):
    id: str | None = None


class TextEdit(LspModel):
    range: Range
    new_text: str


class ChangeAnnotation(LspModel):
    label: str
    needs_confirmation: bool | None = None
    description: str | None = None


class AnnotatedTextEdit(TextEdit):
    annotation_id: str


def read_text_edit(value: object) -> TextEdit | AnnotatedTextEdit:
    """``annotationId`` present selects the annotated variant."""
    if isinstance(value, TextEdit):
        return value
    if isinstance(value, dict) and "annotationId" in value:
        return AnnotatedTextEdit.model_validate(value)
    return read_as(TextEdit, value)


AnyTextEdit: TypeAlias = Annotated[TextEdit | AnnotatedTextEdit, WireUnion(read_text_edit)]


class TextDocumentEdit(LspModel):
    text_document: OptionalVersionedTextDocumentIdentifier
    edits: Annotated[
        list[TextEdit | AnnotatedTextEdit], WireUnion(read_list(read_text_edit))
    ]


class CreateFileOptions(LspModel):
    overwrite: bool | None = None
    ignore_if_exists: bool | None = None


class CreateFile(LspModel):
    kind: Literal["create"] = "create"
    uri: DocumentUri
    options: CreateFileOptions | None = None
    annotation_id: str | None = None


class RenameFileOptions(LspModel):
    overwrite: bool | None = None
    ignore_if_exists: bool | None = None


class RenameFile(LspModel):
    kind: Literal["rename"] = "rename"
    old_uri: DocumentUri
    new_uri: DocumentUri
    options: RenameFileOptions | None = None
    annotation_id: str | None = None


class DeleteFileOptions(LspModel):
    recursive: bool | None = None
    ignore_if_not_exists: bool | None = None


class DeleteFile(LspModel):
    kind: Literal["delete"] = "delete"
    uri: DocumentUri
    options: DeleteFileOptions | None = None
    annotation_id: str | None = None


DocumentChange: TypeAlias = TextDocumentEdit | CreateFile | RenameFile | DeleteFile

_RESOURCE_OPERATIONS: dict[str, type[LspModel]] = {
    ResourceOperationKind.CREATE.value: CreateFile,
    ResourceOperationKind.RENAME.value: RenameFile,
    ResourceOperationKind.DELETE.value: DeleteFile,
}


def read_document_change(value: object) -> DocumentChange:
    if isinstance(value, (TextDocumentEdit, CreateFile, RenameFile, DeleteFile)):
        return value
    if not isinstance(value, dict):
        raise ValueError("expected document change object")
    kind = value.get("kind")
    if kind is None:
        return TextDocumentEdit.model_validate(value)
    model = _RESOURCE_OPERATIONS.get(kind)
    if model is None:
        raise ValueError(f"unknown resource operation kind: {kind!r}")
    return model.model_validate(value)


class WorkspaceEdit(LspModel):
    changes: dict[DocumentUri, list[TextEdit]] | None = None
    document_changes: Annotated[
        list[DocumentChange] | None, WireUnion(read_list(read_document_change))
    ] = None
    change_annotations: dict[str, ChangeAnnotation] | None = None


class CodeDescription(LspModel):
    href: URI


class DiagnosticRelatedInformation(LspModel):
    location: Location
    message: str


class Diagnostic(LspModel):
    range: Range
    severity: DiagnosticSeverity | None = None
    code: IntOrString | None = None
    code_description: CodeDescription | None = None
    source: str | None = None
    message: str
    tags: list[DiagnosticTag] | None = None
    related_information: list[DiagnosticRelatedInformation] | None = None
    data: LSPAny = None


class Command(LspModel):
    title: str
    command: str
    arguments: list[LSPAny] | None = None


class MarkupContent(LspModel):
    kind: MarkupKind
    value: str


def read_str_or_markup(value: object) -> str | MarkupContent | None:
    if value is None or isinstance(value, (str, MarkupContent)):
        return value
    return read_as(MarkupContent, value)


StrOrMarkup: TypeAlias = Annotated[
    str | MarkupContent | None, WireUnion(read_str_or_markup)
]


class MarkedLanguageString(LspModel):
    """The ``{ language, value }`` form of the deprecated ``MarkedString``."""

    language: str
    value: str


MarkedString: TypeAlias = str | MarkedLanguageString


def read_marked_string(value: object) -> MarkedString:
    if isinstance(value, (str, MarkedLanguageString)):
        return value
    return read_as(MarkedLanguageString, value)


class WorkDoneProgressBegin(LspModel):
    kind: Literal["begin"] = "begin"
    title: str
    cancellable: bool | None = None
    message: str | None = None
    percentage: UInteger | None = None


class WorkDoneProgressReport(LspModel):
    kind: Literal["report"] = "report"
    cancellable: bool | None = None
    message: str | None = None
    percentage: UInteger | None = None


class WorkDoneProgressEnd(LspModel):
    kind: Literal["end"] = "end"
    message: str | None = None


WorkDoneProgressValue: TypeAlias = (
    WorkDoneProgressBegin | WorkDoneProgressReport | WorkDoneProgressEnd
)

_PROGRESS_KINDS: dict[str, type[LspModel]] = {
    "begin": WorkDoneProgressBegin,
    "report": WorkDoneProgressReport,
    "end": WorkDoneProgressEnd,
}


def read_progress_value(value: object) -> WorkDoneProgressValue | LSPAny:
    """Work-done payloads are picked by ``kind``; anything else stays raw JSON."""
    if isinstance(value, (WorkDoneProgressBegin, WorkDoneProgressReport, WorkDoneProgressEnd)):
        return value
    if isinstance(value, dict):
        model = _PROGRESS_KINDS.get(value.get("kind"))
        if model is not None:
            return model.model_validate(value)
    return value


class ProgressParams(LspModel):
    token: ProgressToken
    value: Annotated[
        WorkDoneProgressValue | LSPAny, WireUnion(read_progress_value)
    ]

    keep_null_fields = frozenset({"value"})


class RegularExpressionsClientCapabilities(LspModel):
    engine: str
    version: str | None = None


class MarkdownClientCapabilities(LspModel):
    parser: str
    version: str | None = None
    allowed_tags: list[str] | None = None

