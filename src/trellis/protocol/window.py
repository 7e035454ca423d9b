"""Window features: messages, documents and work-done progress."""

from __future__ import annotations

from pydantic import ConfigDict

from trellis.protocol.base import LspModel, ProgressToken, URI
from trellis.protocol.enums import MessageType
from trellis.protocol.structures import Range


class ShowMessageParams(LspModel):
    type: MessageType
    message: str


class MessageActionItem(LspModel):
    """``title`` plus whatever extra properties the client round-trips."""

    model_config = ConfigDict(extra="allow")

    title: str


class ShowMessageRequestParams(LspModel):
    type: MessageType
    message: str
    actions: list[MessageActionItem] | None = None


class LogMessageParams(LspModel):
    type: MessageType
    message: str


class ShowDocumentParams(LspModel):
    uri: URI
    external: bool | None = None
    take_focus: bool | None = None
    selection: Range | None = None


class ShowDocumentResult(LspModel):
    success: bool


class WorkDoneProgressCreateParams(LspModel):
    token: ProgressToken


class WorkDoneProgressCancelParams(LspModel):
    token: ProgressToken
