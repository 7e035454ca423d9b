"""Lifecycle, tracing, cancellation and registration messages."""

from __future__ import annotations

from pydantic import Field

from trellis.protocol.base import (
    DocumentUri,
    Integer,
    IntOrString,
    LSPAny,
    LspModel,
)
from trellis.protocol.client_capabilities import ClientCapabilities
from trellis.protocol.enums import TraceValue
from trellis.protocol.server_capabilities import ServerCapabilities
from trellis.protocol.structures import WorkDoneProgressParams
from trellis.protocol.workspace import WorkspaceFolder


class ClientInfo(LspModel):
    name: str
    version: str | None = None


class ServerInfo(LspModel):
    name: str
    version: str | None = None


class InitializeParams(WorkDoneProgressParams):
    keep_null_fields = frozenset({"process_id", "root_uri"})

    process_id: Integer | None = None
    client_info: ClientInfo | None = None
    locale: str | None = None
    root_path: str | None = None
    root_uri: DocumentUri | None = None
    initialization_options: LSPAny = None
    capabilities: ClientCapabilities
    trace: TraceValue | None = None
    workspace_folders: list[WorkspaceFolder] | None = None


class InitializeResult(LspModel):
    capabilities: ServerCapabilities
    server_info: ServerInfo | None = None


class InitializeError(LspModel):
    retry: bool


class InitializedParams(LspModel):
    pass


class SetTraceParams(LspModel):
    value: TraceValue


class LogTraceParams(LspModel):
    message: str
    verbose: str | None = None


class CancelParams(LspModel):
    id: IntOrString


class Registration(LspModel):
    id: str
    method: str
    register_options: LSPAny = None


class RegistrationParams(LspModel):
    registrations: list[Registration]


class Unregistration(LspModel):
    id: str
    method: str


class UnregistrationParams(LspModel):
    """Carries the protocol's historical ``unregisterations`` wire key."""

    unregistrations: list[Unregistration] = Field(alias="unregisterations")
