"""Workspace features: folders, configuration, watched files, symbols, commands, file operations."""

from __future__ import annotations

from typing import Annotated, TypeAlias

from trellis.protocol.base import (
    BoolOrString,
    DocumentUri,
    LSPAny,
    LspModel,
    UInteger,
    URI,
    WireUnion,
    read_as,
)
from trellis.protocol.enums import (
    FileChangeType,
    FileOperationPatternKind,
    SymbolKind,
    SymbolTag,
)
from trellis.protocol.structures import (
    Location,
    PartialResultParams,
    WorkDoneProgressOptions,
    WorkDoneProgressParams,
    WorkspaceEdit,
)


class WorkspaceFolder(LspModel):
    uri: URI
    name: str


class WorkspaceFoldersChangeEvent(LspModel):
    added: list[WorkspaceFolder]
    removed: list[WorkspaceFolder]


class DidChangeWorkspaceFoldersParams(LspModel):
    event: WorkspaceFoldersChangeEvent


class DidChangeConfigurationParams(LspModel):
    keep_null_fields = frozenset({"settings"})

    settings: LSPAny = None


class ConfigurationItem(LspModel):
    scope_uri: URI | None = None
    section: str | None = None


class ConfigurationParams(LspModel):
    items: list[ConfigurationItem]


class FileEvent(LspModel):
    uri: DocumentUri
    type: FileChangeType


class DidChangeWatchedFilesParams(LspModel):
    changes: list[FileEvent]


def read_base_uri(value: object) -> WorkspaceFolder | str:
    if isinstance(value, (WorkspaceFolder, str)):
        return value
    return read_as(WorkspaceFolder, value)


class RelativePattern(LspModel):
    base_uri: Annotated[WorkspaceFolder | URI, WireUnion(read_base_uri)]
    pattern: str


GlobPattern: TypeAlias = str | RelativePattern


def read_glob_pattern(value: object) -> GlobPattern:
    if isinstance(value, (str, RelativePattern)):
        return value
    return read_as(RelativePattern, value)


class FileSystemWatcher(LspModel):
    glob_pattern: Annotated[GlobPattern, WireUnion(read_glob_pattern)]
    kind: UInteger | None = None


class DidChangeWatchedFilesRegistrationOptions(LspModel):
    watchers: list[FileSystemWatcher]


class WorkspaceSymbolOptions(WorkDoneProgressOptions):
    resolve_provider: bool | None = None


class WorkspaceSymbolRegistrationOptions(WorkspaceSymbolOptions):
    pass


class WorkspaceSymbolParams(WorkDoneProgressParams, PartialResultParams):
    query: str


class WorkspaceSymbolLocation(LspModel):
    """The ``{ uri }`` form a symbol location takes until it is resolved."""

    uri: DocumentUri


def read_symbol_location(value: object) -> Location | WorkspaceSymbolLocation:
    if isinstance(value, (Location, WorkspaceSymbolLocation)):
        return value
    if isinstance(value, dict) and "range" in value:
        return Location.model_validate(value)
    return read_as(WorkspaceSymbolLocation, value)


class WorkspaceSymbol(LspModel):
    name: str
    kind: SymbolKind
    tags: list[SymbolTag] | None = None
    container_name: str | None = None
    location: Annotated[
        Location | WorkspaceSymbolLocation, WireUnion(read_symbol_location)
    ]
    data: LSPAny = None


class ExecuteCommandOptions(WorkDoneProgressOptions):
    commands: list[str] = []


class ExecuteCommandRegistrationOptions(ExecuteCommandOptions):
    pass


class ExecuteCommandParams(WorkDoneProgressParams):
    command: str
    arguments: list[LSPAny] | None = None


class ApplyWorkspaceEditParams(LspModel):
    label: str | None = None
    edit: WorkspaceEdit


class ApplyWorkspaceEditResult(LspModel):
    applied: bool
    failure_reason: str | None = None
    failed_change: UInteger | None = None


class FileOperationPatternOptions(LspModel):
    ignore_case: bool | None = None


class FileOperationPattern(LspModel):
    glob: str
    matches: FileOperationPatternKind | None = None
    options: FileOperationPatternOptions | None = None


class FileOperationFilter(LspModel):
    scheme: str | None = None
    pattern: FileOperationPattern


class FileOperationRegistrationOptions(LspModel):
    filters: list[FileOperationFilter] = []


class FileCreate(LspModel):
    uri: str


class CreateFilesParams(LspModel):
    files: list[FileCreate]


class FileRename(LspModel):
    old_uri: str
    new_uri: str


class RenameFilesParams(LspModel):
    files: list[FileRename]


class FileDelete(LspModel):
    uri: str


class DeleteFilesParams(LspModel):
    files: list[FileDelete]


class FileOperationOptions(LspModel):
    did_create: FileOperationRegistrationOptions | None = None
    will_create: FileOperationRegistrationOptions | None = None
    did_rename: FileOperationRegistrationOptions | None = None
    will_rename: FileOperationRegistrationOptions | None = None
    did_delete: FileOperationRegistrationOptions | None = None
    will_delete: FileOperationRegistrationOptions | None = None


class WorkspaceFoldersServerCapabilities(LspModel):
    supported: bool | None = None
    change_notifications: BoolOrString | None = None


class WorkspaceServerCapabilities(LspModel):
    workspace_folders: WorkspaceFoldersServerCapabilities | None = None
    file_operations: FileOperationOptions | None = None
