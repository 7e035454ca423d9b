"""Wire types of the Language Server Protocol 3.17."""

from __future__ import annotations

from trellis.protocol import methods
from trellis.protocol.base import (
    BoolOrString,
    Decimal,
    DocumentUri,
    Integer,
    IntOrString,
    LSPAny,
    LSPArray,
    LSPObject,
    LspModel,
    ProgressToken,
    UInteger,
    URI,
    from_value,
    from_wire,
    to_wire,
)
from trellis.protocol.enums import (
    DEFAULT_POSITION_ENCODING,
    ErrorCodes,
    MessageType,
    PositionEncodingKind,
    TextDocumentSyncKind,
    TraceValue,
)
from trellis.protocol.lifecycle import InitializeParams, InitializeResult
from trellis.protocol.server_capabilities import ServerCapabilities
from trellis.protocol.structures import (
    Position,
    Range,
    TextDocumentIdentifier,
    TextDocumentItem,
    VersionedTextDocumentIdentifier,
)

__all__ = [
    "BoolOrString",
    "DEFAULT_POSITION_ENCODING",
    "Decimal",
    "DocumentUri",
    "ErrorCodes",
    "InitializeParams",
    "InitializeResult",
    "IntOrString",
    "Integer",
    "LSPAny",
    "LSPArray",
    "LSPObject",
    "LspModel",
    "MessageType",
    "Position",
    "PositionEncodingKind",
    "ProgressToken",
    "Range",
    "ServerCapabilities",
    "TextDocumentIdentifier",
    "TextDocumentItem",
    "TextDocumentSyncKind",
    "TraceValue",
    "UInteger",
    "URI",
    "VersionedTextDocumentIdentifier",
    "from_value",
    "from_wire",
    "methods",
    "to_wire",
]
