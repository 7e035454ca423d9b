"""Text document synchronization."""

from __future__ import annotations

from typing import Annotated, TypeAlias

from trellis.protocol.base import LspModel, UInteger, WireUnion, read_as, read_list
from trellis.protocol.enums import TextDocumentSaveReason, TextDocumentSyncKind
from trellis.protocol.structures import (
    Range,
    TextDocumentIdentifier,
    TextDocumentItem,
    TextDocumentRegistrationOptions,
    VersionedTextDocumentIdentifier,
)


class DidOpenTextDocumentParams(LspModel):
    text_document: TextDocumentItem


class TextDocumentContentChangePartial(LspModel):
    range: Range
    range_length: UInteger | None = None
    text: str


class TextDocumentContentChangeWholeDocument(LspModel):
    text: str


TextDocumentContentChangeEvent: TypeAlias = (
    TextDocumentContentChangePartial | TextDocumentContentChangeWholeDocument
)


def read_content_change(value: object) -> TextDocumentContentChangeEvent:
    if isinstance(
        value, (TextDocumentContentChangePartial, TextDocumentContentChangeWholeDocument)
    ):
        return value
    if isinstance(value, dict) and "range" in value:
        return TextDocumentContentChangePartial.model_validate(value)
    return read_as(TextDocumentContentChangeWholeDocument, value)


class DidChangeTextDocumentParams(LspModel):
    text_document: VersionedTextDocumentIdentifier
    content_changes: Annotated[
        list[TextDocumentContentChangeEvent], WireUnion(read_list(read_content_change))
    ]


class WillSaveTextDocumentParams(LspModel):
    text_document: TextDocumentIdentifier
    reason: TextDocumentSaveReason


class DidSaveTextDocumentParams(LspModel):
    text_document: TextDocumentIdentifier
    text: str | None = None


class DidCloseTextDocumentParams(LspModel):
    text_document: TextDocumentIdentifier


class SaveOptions(LspModel):
    include_text: bool | None = None


def read_save(value: object) -> bool | SaveOptions | None:
    if value is None or isinstance(value, (bool, SaveOptions)):
        return value
    return read_as(SaveOptions, value)


class TextDocumentSyncOptions(LspModel):
    open_close: bool | None = None
    change: TextDocumentSyncKind | None = None
    will_save: bool | None = None
    will_save_wait_until: bool | None = None
    save: Annotated[bool | SaveOptions | None, WireUnion(read_save)] = None


class TextDocumentChangeRegistrationOptions(TextDocumentRegistrationOptions):
    sync_kind: TextDocumentSyncKind


class TextDocumentSaveRegistrationOptions(TextDocumentRegistrationOptions):
    include_text: bool | None = None


def read_text_document_sync(
    value: object,
) -> TextDocumentSyncOptions | TextDocumentSyncKind | None:
    """Options object, or the bare ``TextDocumentSyncKind`` number."""
    if value is None or isinstance(value, (TextDocumentSyncOptions, TextDocumentSyncKind)):
        return value
    if isinstance(value, bool):
        raise ValueError("textDocumentSync cannot be a boolean")
    if isinstance(value, int):
        return TextDocumentSyncKind(value)
    return read_as(TextDocumentSyncOptions, value)
