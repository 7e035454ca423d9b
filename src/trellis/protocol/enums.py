"""Enumerations of the 3.17 protocol.

Closed value sets are ``Enum`` subclasses. Sets the protocol declares open
(clients and servers may add values) are plain classes of string constants, and
the members that carry them are typed ``str``.
"""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag


class PositionEncodingKind(str, Enum):
    UTF8 = "utf-8"
    UTF16 = "utf-16"
    UTF32 = "utf-32"


DEFAULT_POSITION_ENCODING = PositionEncodingKind.UTF16


class TraceValue(str, Enum):
    """Client-controlled verbosity, ordered ``off < messages < verbose``."""

    OFF = "off"
    MESSAGES = "messages"
    VERBOSE = "verbose"

    @property
    def rank(self) -> int:
        return _TRACE_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TraceValue):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, TraceValue):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, TraceValue):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, TraceValue):
            return NotImplemented
        return self.rank >= other.rank


_TRACE_RANK = {
    TraceValue.OFF: 0,
    TraceValue.MESSAGES: 1,
    TraceValue.VERBOSE: 2,
}


class MessageType(IntEnum):
    ERROR = 1
    WARNING = 2
    INFO = 3
    LOG = 4
    DEBUG = 5


class ErrorCodes(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_NOT_INITIALIZED = -32002
    UNKNOWN_ERROR_CODE = -32001
    REQUEST_FAILED = -32803
    SERVER_CANCELLED = -32802
    CONTENT_MODIFIED = -32801
    REQUEST_CANCELLED = -32800


class TextDocumentSyncKind(IntEnum):
    NONE = 0
    FULL = 1
    INCREMENTAL = 2


class TextDocumentSaveReason(IntEnum):
    MANUAL = 1
    AFTER_DELAY = 2
    FOCUS_OUT = 3


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class DiagnosticTag(IntEnum):
    UNNECESSARY = 1
    DEPRECATED = 2


class DocumentDiagnosticReportKind(str, Enum):
    FULL = "full"
    UNCHANGED = "unchanged"


class MarkupKind(str, Enum):
    PLAIN_TEXT = "plaintext"
    MARKDOWN = "markdown"


class CompletionTriggerKind(IntEnum):
    INVOKED = 1
    TRIGGER_CHARACTER = 2
    TRIGGER_FOR_INCOMPLETE_COMPLETIONS = 3


class CompletionItemKind(IntEnum):
    TEXT = 1
    METHOD = 2
    FUNCTION = 3
    CONSTRUCTOR = 4
    FIELD = 5
    VARIABLE = 6
    CLASS = 7
    INTERFACE = 8
    MODULE = 9
    PROPERTY = 10
    UNIT = 11
    VALUE = 12
    ENUM = 13
    KEYWORD = 14
    SNIPPET = 15
    COLOR = 16
    FILE = 17
    REFERENCE = 18
    FOLDER = 19
    ENUM_MEMBER = 20
    CONSTANT = 21
    STRUCT = 22
    EVENT = 23
    OPERATOR = 24
    TYPE_PARAMETER = 25


class CompletionItemTag(IntEnum):
    DEPRECATED = 1


class InsertTextFormat(IntEnum):
    PLAIN_TEXT = 1
    SNIPPET = 2


class InsertTextMode(IntEnum):
    AS_IS = 1
    ADJUST_INDENTATION = 2


class SignatureHelpTriggerKind(IntEnum):
    INVOKED = 1
    TRIGGER_CHARACTER = 2
    CONTENT_CHANGE = 3


class DocumentHighlightKind(IntEnum):
    TEXT = 1
    READ = 2
    WRITE = 3


class SymbolKind(IntEnum):
    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


class SymbolTag(IntEnum):
    DEPRECATED = 1


class CodeActionTriggerKind(IntEnum):
    INVOKED = 1
    AUTOMATIC = 2


class CodeActionKind:
    EMPTY = ""
    QUICK_FIX = "quickfix"
    REFACTOR = "refactor"
    REFACTOR_EXTRACT = "refactor.extract"
    REFACTOR_INLINE = "refactor.inline"
    REFACTOR_REWRITE = "refactor.rewrite"
    SOURCE = "source"
    SOURCE_ORGANIZE_IMPORTS = "source.organizeImports"
    SOURCE_FIX_ALL = "source.fixAll"


class FoldingRangeKind:
    COMMENT = "comment"
    IMPORTS = "imports"
    REGION = "region"


class SemanticTokenTypes:
    NAMESPACE = "namespace"
    TYPE = "type"
    CLASS = "class"
    ENUM = "enum"
    INTERFACE = "interface"
    STRUCT = "struct"
    TYPE_PARAMETER = "typeParameter"
    PARAMETER = "parameter"
    VARIABLE = "variable"
    PROPERTY = "property"
    ENUM_MEMBER = "enumMember"
    EVENT = "event"
    FUNCTION = "function"
    METHOD = "method"
    MACRO = "macro"
    KEYWORD = "keyword"
    MODIFIER = "modifier"
    COMMENT = "comment"
    STRING = "string"
    NUMBER = "number"
    REGEXP = "regexp"
    OPERATOR = "operator"
    DECORATOR = "decorator"


class SemanticTokenModifiers:
    DECLARATION = "declaration"
    DEFINITION = "definition"
    READONLY = "readonly"
    STATIC = "static"
    DEPRECATED = "deprecated"
    ABSTRACT = "abstract"
    ASYNC = "async"
    MODIFICATION = "modification"
    DOCUMENTATION = "documentation"
    DEFAULT_LIBRARY = "defaultLibrary"


class TokenFormat(str, Enum):
    RELATIVE = "relative"


class PrepareSupportDefaultBehavior(IntEnum):
    IDENTIFIER = 1


class InlayHintKind(IntEnum):
    TYPE = 1
    PARAMETER = 2


class UniquenessLevel(str, Enum):
    DOCUMENT = "document"
    PROJECT = "project"
    GROUP = "group"
    SCHEME = "scheme"
    GLOBAL = "global"


class MonikerKind(str, Enum):
    IMPORT = "import"
    EXPORT = "export"
    LOCAL = "local"


class FileChangeType(IntEnum):
    CREATED = 1
    CHANGED = 2
    DELETED = 3


class WatchKind(IntFlag):
    CREATE = 1
    CHANGE = 2
    DELETE = 4


class FileOperationPatternKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"


class ResourceOperationKind(str, Enum):
    CREATE = "create"
    RENAME = "rename"
    DELETE = "delete"


class FailureHandlingKind(str, Enum):
    ABORT = "abort"
    TRANSACTIONAL = "transactional"
    TEXT_ONLY_TRANSACTIONAL = "textOnlyTransactional"
    UNDO = "undo"


class NotebookCellKind(IntEnum):
    MARKUP = 1
    CODE = 2
