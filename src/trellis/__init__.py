"""Building blocks for Language Server Protocol 3.17 servers."""

__version__ = "0.1.0"

from trellis.context import CancellationToken, LSPContext
from trellis.dispatcher import Dispatcher
from trellis.exceptions import (
    ConfigError,
    InvalidParamsError,
    LSPError,
    NeverThrown,
    RequestCancelledError,
    ServerNotInitializedError,
    TransportError,
    TrellisError,
)
from trellis.handler import Handler, HandleResult, LifecycleState
from trellis.invariants import never
from trellis.trace import TraceService

__all__ = [
    "CancellationToken",
    "ConfigError",
    "Dispatcher",
    "HandleResult",
    "Handler",
    "InvalidParamsError",
    "LSPContext",
    "LSPError",
    "LifecycleState",
    "NeverThrown",
    "RequestCancelledError",
    "ServerNotInitializedError",
    "TraceService",
    "TransportError",
    "TrellisError",
    "__version__",
    "never",
]
