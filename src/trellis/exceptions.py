"""Exception types raised by trellis."""

from __future__ import annotations

from trellis.json_types import LSPAny


class TrellisError(RuntimeError):
    """Base class for errors raised by the library."""


class NeverThrown(TrellisError):
    """Raised by `never()` when a path believed unreachable is reached."""

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.env = dict(env or {})


class ServerNotInitializedError(TrellisError):
    """A request other than initialize/exit arrived before initialize."""

    def __init__(self, message: str = "server is not initialized"):
        super().__init__(message)


class InvalidParamsError(TrellisError, ValueError):
    """Params of an inbound message could not be decoded.

    The underlying decode failure is chained as ``__cause__``.
    """

    def __init__(self, method: str, detail: str = ""):
        message = f"invalid params for {method}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.method = method


class RequestCancelledError(TrellisError):
    def __init__(self, message: str = "request cancelled"):
        super().__init__(message)


class LSPError(TrellisError):
    """Structured error a handler may raise to control the JSON-RPC reply.

    ``code`` and ``data`` are copied verbatim into the response error object.
    """

    def __init__(self, code: int, message: str = "", data: LSPAny = None):
        super().__init__(message or f"lsp error {code}")
        self.code = code
        self.message = message or f"lsp error {code}"
        self.data = data


class InvalidDiagnosticReportKindError(TrellisError):
    """A diagnostic report carried a ``kind`` other than ``full`` or ``unchanged``.

    Must not derive from ``ValueError``: pydantic folds those into a
    ``ValidationError``, and this one has to reach the caller as itself.
    """

    def __init__(self, kind: object):
        super().__init__(f"invalid diagnostic report kind: {kind!r}")
        self.kind = kind


class ConfigError(TrellisError, ValueError):
    """A configuration value from ``trellis.toml`` or the environment is invalid."""

    def __init__(self, message: str, *, key: str, value: object):
        super().__init__(f"{message}: {key}={value!r}")
        self.key = key
        self.value = value


class TransportError(TrellisError):
    """I/O or RPC failure on a connection."""


class ResponseError(TransportError):
    """The peer answered an outbound request with a JSON-RPC error."""

    def __init__(self, code: int, message: str, data: LSPAny = None):
        super().__init__(f"{message} (code {code})")
        self.code = code
        self.message = message
        self.data = data
