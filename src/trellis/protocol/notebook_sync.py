"""Notebook document synchronization."""

from __future__ import annotations

from typing import Annotated

from trellis.protocol.base import (
    DocumentUri,
    Integer,
    LSPAny,
    LspModel,
    UInteger,
    URI,
    WireUnion,
    read_as,
    read_list,
)
from trellis.protocol.enums import NotebookCellKind
from trellis.protocol.structures import (
    NotebookDocumentFilter,
    StaticRegistrationOptions,
    TextDocumentIdentifier,
    TextDocumentItem,
    VersionedTextDocumentIdentifier,
    read_notebook_filter,
)
from trellis.protocol.text_sync import TextDocumentContentChangeEvent, read_content_change


class ExecutionSummary(LspModel):
    execution_order: UInteger
    success: bool | None = None


class NotebookCell(LspModel):
    kind: NotebookCellKind
    document: DocumentUri
    metadata: LSPAny = None
    execution_summary: ExecutionSummary | None = None


class NotebookDocument(LspModel):
    uri: URI
    notebook_type: str
    version: Integer
    metadata: LSPAny = None
    cells: list[NotebookCell]


class NotebookDocumentIdentifier(LspModel):
    uri: URI


class VersionedNotebookDocumentIdentifier(LspModel):
    version: Integer
    uri: URI


class DidOpenNotebookDocumentParams(LspModel):
    notebook_document: NotebookDocument
    cell_text_documents: list[TextDocumentItem]


class NotebookCellArrayChange(LspModel):
    start: UInteger
    delete_count: UInteger
    cells: list[NotebookCell] | None = None


class NotebookCellsStructureChange(LspModel):
    array: NotebookCellArrayChange
    did_open: list[TextDocumentItem] | None = None
    did_close: list[TextDocumentIdentifier] | None = None


class NotebookCellTextChange(LspModel):
    document: VersionedTextDocumentIdentifier
    changes: Annotated[
        list[TextDocumentContentChangeEvent], WireUnion(read_list(read_content_change))
    ]


class NotebookCellsChange(LspModel):
    structure: NotebookCellsStructureChange | None = None
    data: list[NotebookCell] | None = None
    text_content: list[NotebookCellTextChange] | None = None


class NotebookDocumentChangeEvent(LspModel):
    metadata: LSPAny = None
    cells: NotebookCellsChange | None = None


class DidChangeNotebookDocumentParams(LspModel):
    notebook_document: VersionedNotebookDocumentIdentifier
    change: NotebookDocumentChangeEvent


class DidSaveNotebookDocumentParams(LspModel):
    notebook_document: NotebookDocumentIdentifier


class DidCloseNotebookDocumentParams(LspModel):
    notebook_document: NotebookDocumentIdentifier
    cell_text_documents: list[TextDocumentIdentifier]


class NotebookCellLanguage(LspModel):
    language: str


class NotebookSelectorEntry(LspModel):
    """One entry of ``notebookSelector``; at least one member is set."""

    notebook: Annotated[
        NotebookDocumentFilter | str | None, WireUnion(read_notebook_filter)
    ] = None
    cells: list[NotebookCellLanguage] | None = None


class NotebookDocumentSyncOptions(LspModel):
    notebook_selector: list[NotebookSelectorEntry] = []
    save: bool | None = None


class NotebookDocumentSyncRegistrationOptions(
    NotebookDocumentSyncOptions, StaticRegistrationOptions
):
    pass


def read_notebook_sync(
    value: object,
) -> NotebookDocumentSyncOptions | NotebookDocumentSyncRegistrationOptions | None:
    if value is None or isinstance(value, NotebookDocumentSyncOptions):
        return value
    if isinstance(value, dict) and "id" in value:
        return NotebookDocumentSyncRegistrationOptions.model_validate(value)
    return read_as(NotebookDocumentSyncOptions, value)
