from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Optional
import logging
import sys

import typer

from trellis import __version__
from trellis.capabilities import select_position_encoding
from trellis.config import ServerConfig, build_server_config, load_server_config
from trellis.context import LSPContext
from trellis.exceptions import ConfigError
from trellis.handler import Handler
from trellis.position import position_to_byte_offset
from trellis.protocol.enums import PositionEncodingKind
from trellis.protocol.lifecycle import InitializeParams, InitializeResult, ServerInfo
from trellis.protocol.structures import Position
from trellis.server.transport import serve_stdio, serve_tcp, serve_ws
from trellis.trace import TraceService

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

_ENCODINGS = {kind.value: kind for kind in PositionEncodingKind}


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the protocol on stdio."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def build_lifecycle_handler(trace: TraceService | None = None) -> Handler:
    """A handler that only speaks the lifecycle and ``$/setTrace``.

    Useful to check that a client and the transport agree before any
    language features are wired in.
    """
    trace = trace or TraceService(logger)
    handler = Handler(set_trace=trace.create_set_trace_handler())

    def _initialize(ctx: LSPContext, params: InitializeParams) -> InitializeResult:
        if params.trace is not None:
            trace.set_trace(params.trace)
        capabilities = handler.create_server_capabilities()
        capabilities.position_encoding = select_position_encoding(params).value
        return InitializeResult(
            capabilities=capabilities,
            server_info=ServerInfo(name="trellis", version=__version__),
        )

    def _initialized(ctx: LSPContext, params: object) -> None:
        logger.info("client initialized")

    def _shutdown(ctx: LSPContext) -> None:
        logger.info("shutdown requested")

    handler.set_initialize_handler(_initialize)
    handler.set_initialized_handler(_initialized)
    handler.set_shutdown_handler(_shutdown)
    return handler


def _parse_address(value: str) -> tuple[str, int]:
    host, sep, port_text = value.rpartition(":")
    if not sep or not host:
        raise typer.BadParameter(f"expected HOST:PORT, got {value!r}")
    try:
        port = int(port_text)
    except ValueError:
        raise typer.BadParameter(f"invalid port in {value!r}") from None
    if not 0 <= port <= 65535:
        raise typer.BadParameter(f"port out of range in {value!r}")
    return host, port


def _resolve_config(
    config_path: Optional[Path],
    stdio: bool,
    tcp: Optional[str],
    ws: Optional[str],
    log_level: Optional[str],
) -> ServerConfig:
    try:
        config = load_server_config(config_path=config_path)
        overrides: dict[str, object] = {}
        for transport, address in (("tcp", tcp), ("ws", ws)):
            if address is not None:
                host, port = _parse_address(address)
                overrides.update(transport=transport, host=host, port=port)
        if stdio:
            overrides["transport"] = "stdio"
        if log_level is not None:
            overrides["log_level"] = log_level
        if not overrides:
            return config
        merged = asdict(config)
        merged.update(overrides)
        return build_server_config(merged)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def serve(
    stdio: bool = typer.Option(False, "--stdio", help="Serve on stdin/stdout."),
    tcp: Optional[str] = typer.Option(None, "--tcp", help="Listen on HOST:PORT."),
    ws: Optional[str] = typer.Option(
        None, "--ws", help="Accept WebSocket clients on HOST:PORT."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    log_level: Optional[str] = typer.Option(None, "--log-level"),
) -> None:
    """Run a lifecycle-only language server."""
    if sum((stdio, tcp is not None, ws is not None)) > 1:
        raise typer.BadParameter("--stdio, --tcp and --ws are mutually exclusive")
    settings = _resolve_config(config, stdio, tcp, ws, log_level)
    configure_logging(settings.log_level)
    handler = build_lifecycle_handler()
    if settings.transport == "tcp":
        code = serve_tcp(handler, settings.host, settings.port, settings)
    elif settings.transport == "ws":
        code = serve_ws(handler, settings.host, settings.port, settings)
    else:
        code = serve_stdio(handler, settings)
    raise typer.Exit(code=code)


@app.command()
def offset(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    line: int = typer.Option(..., "--line", min=0),
    character: int = typer.Option(..., "--character", min=0),
    encoding: str = typer.Option("utf-16", "--encoding"),
) -> None:
    """Print the byte offset of LINE:CHARACTER in PATH."""
    kind = _ENCODINGS.get(encoding.lower())
    if kind is None:
        raise typer.BadParameter(
            f"unknown encoding {encoding!r}; expected one of {', '.join(_ENCODINGS)}"
        )
    data = path.read_bytes()
    position = Position(line=line, character=character)
    typer.echo(str(position_to_byte_offset(data, position, kind)))


@app.command()
def version() -> None:
    typer.echo(__version__)


def main() -> None:
    app()
