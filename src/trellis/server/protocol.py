"""One JSON-RPC 2.0 session between a ``Handler`` and a client.

pygls reads and frames messages on its event loop and hands each parsed message
to ``LSPProtocol.handle_message``. The loop itself only routes: replies to
outbound calls go back to their pygls futures, ``$/cancelRequest`` cancels the
in-flight token, and everything else is queued. Requests run on a worker pool;
notifications run one at a time in arrival order. A request starts only after
every notification received before it has finished, so a
``textDocument/didChange`` is always applied before a later request reads the
document. Nothing received after ``initialize`` runs before it has been
answered, and ``exit`` runs after every request received before it.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass
from typing import TYPE_CHECKING
import asyncio
import inspect
import itertools
import json
import logging
import threading

from pygls.exceptions import JsonRpcException
from pygls.protocol import JsonRPCProtocol

from trellis.context import CancellationToken, LSPContext
from trellis.exceptions import (
    LSPError,
    RequestCancelledError,
    ResponseError,
    ServerNotInitializedError,
    TransportError,
)
from trellis.handler import HandleResult, LifecycleState
from trellis.json_types import LSPAny, LSPObject
from trellis.protocol import methods
from trellis.protocol.enums import ErrorCodes

if TYPE_CHECKING:
    from trellis.server.transport import LSPServer

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


def _id_key(request_id: object) -> tuple[str, object]:
    # 1 and "1" are distinct request ids.
    return (type(request_id).__name__, request_id)


def _valid_id(request_id: object) -> bool:
    return isinstance(request_id, (int, str)) and not isinstance(request_id, bool)


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def error_for(outcome: HandleResult, method: str) -> LSPObject | None:
    """JSON-RPC ``error`` member for a dispatch outcome, or None on success."""
    if not outcome.method_valid:
        return {
            "code": int(ErrorCodes.METHOD_NOT_FOUND),
            "message": f"method not supported: {method}",
        }
    error = outcome.error
    if not outcome.params_valid:
        return {
            "code": int(ErrorCodes.INVALID_PARAMS),
            "message": str(error) if error is not None else "",
        }
    if error is None:
        return None
    if isinstance(error, LSPError):
        body: LSPObject = {"code": error.code, "message": error.message}
        if error.data is not None:
            body["data"] = error.data
        return body
    if isinstance(error, ServerNotInitializedError):
        return {"code": int(ErrorCodes.SERVER_NOT_INITIALIZED), "message": str(error)}
    if isinstance(error, RequestCancelledError):
        return {"code": int(ErrorCodes.REQUEST_CANCELLED), "message": str(error)}
    return {"code": int(ErrorCodes.INVALID_REQUEST), "message": str(error)}


@dataclass(frozen=True)
class _ReplyError:
    """Error member of a client reply, in the shape pygls resolves futures with."""

    code: int
    message: str
    data: LSPAny = None


class LSPProtocol(JsonRPCProtocol):
    """pygls JSON-RPC protocol that hands every inbound method to a ``Handler``."""

    def __init__(self, server: LSPServer, converter) -> None:
        super().__init__(server, converter)
        self.handler = server.lsp_handler
        self.settings = server.settings
        self.exit_code: int | None = None
        self._lock = threading.Lock()
        self._closed = threading.Event()
        self._event_loop: asyncio.AbstractEventLoop | None = None
        self._inflight: dict[tuple[str, object], CancellationToken] = {}
        self._last_notification: Future | None = None
        self._initializing: Future | None = None
        self._outstanding: set[Future] = set()
        self._unsent: dict[int, object] = {}
        self._unsent_ids = itertools.count()
        self._requests = ThreadPoolExecutor(
            max_workers=self.settings.workers, thread_name_prefix="trellis-request"
        )
        self._notifications = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="trellis-notification"
        )

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    # -- reading ------------------------------------------------------------

    def structure_message(self, data):
        # Messages stay plain JSON; params are decoded by the handler's models.
        return data

    def handle_message(self, message) -> None:
        self._event_loop = _running_loop()
        if self.settings.debug_messages:
            logger.debug("<- %s", json.dumps(message))
        if not isinstance(message, dict):
            self._send_error(
                None, int(ErrorCodes.INVALID_REQUEST), "message must be an object"
            )
            return
        method = message.get("method")
        if isinstance(method, str):
            if "id" not in message:
                self._receive_notification(method, message)
            elif _valid_id(message["id"]):
                self._receive_request(method, message)
            else:
                self._send_error(
                    None, int(ErrorCodes.INVALID_REQUEST), "invalid request id"
                )
            return
        if "id" in message and ("result" in message or "error" in message):
            self._receive_response(message)
            return
        self._send_error(
            message.get("id") if _valid_id(message.get("id")) else None,
            int(ErrorCodes.INVALID_REQUEST),
            "invalid JSON-RPC message",
        )

    def _new_token(self) -> CancellationToken:
        if self.settings.request_timeout_ms > 0:
            return CancellationToken.from_timeout_ms(self.settings.request_timeout_ms)
        return CancellationToken()

    def _context(
        self,
        method: str,
        message: LSPObject,
        token: CancellationToken,
        request_id: int | str | None = None,
    ) -> LSPContext:
        return LSPContext(
            method=method,
            params=message.get("params"),
            notify=self.notify,
            call=self.call_client,
            token=token,
            request_id=request_id,
        )

    def _receive_request(self, method: str, message: LSPObject) -> None:
        request_id = message["id"]
        token = self._new_token()
        with self._lock:
            self._inflight[_id_key(request_id)] = token
            barriers = [
                future
                for future in (self._initializing, self._last_notification)
                if future is not None
            ]
        ctx = self._context(method, message, token, request_id)
        future = self._requests.submit(self._run_request, ctx, barriers)
        with self._lock:
            self._outstanding.add(future)
            if method == methods.INITIALIZE:
                self._initializing = future
        future.add_done_callback(self._request_done)

    def _request_done(self, future: Future) -> None:
        with self._lock:
            self._outstanding.discard(future)

    def _receive_notification(self, method: str, message: LSPObject) -> None:
        if method == methods.CANCEL_REQUEST:
            self._cancel_inflight(message.get("params"))
        ctx = self._context(method, message, CancellationToken())
        with self._lock:
            barriers = [self._initializing] if self._initializing is not None else []
            if method == methods.EXIT:
                # exit runs after every request received before it.
                barriers.extend(self._outstanding)
        future = self._notifications.submit(self._run_notification, ctx, barriers)
        with self._lock:
            self._last_notification = future
        if method == methods.EXIT:
            wait_futures([future])
            self._end_session()

    def _cancel_inflight(self, params: LSPAny) -> None:
        if not isinstance(params, dict) or not _valid_id(params.get("id")):
            return
        with self._lock:
            token = self._inflight.get(_id_key(params["id"]))
        if token is not None:
            logger.debug("cancelling request %r", params["id"])
            token.cancel()

    def _receive_response(self, message: LSPObject) -> None:
        error = message.get("error")
        reply_error = None
        if error is not None:
            if isinstance(error, dict):
                reply_error = _ReplyError(
                    code=int(error.get("code", ErrorCodes.UNKNOWN_ERROR_CODE)),
                    message=str(error.get("message", "")),
                    data=error.get("data"),
                )
            else:
                reply_error = _ReplyError(
                    code=int(ErrorCodes.UNKNOWN_ERROR_CODE), message="malformed error reply"
                )
        self._handle_response(message.get("id"), message.get("result"), reply_error)

    # -- running handlers ---------------------------------------------------

    def _run_request(self, ctx: LSPContext, barriers: list[Future]) -> None:
        if barriers:
            wait_futures(barriers)
        try:
            outcome = self.handler.handle(ctx)
        except Exception as exc:
            logger.exception("handler failed for %s", ctx.method)
            self._send_error(ctx.request_id, int(ErrorCodes.INTERNAL_ERROR), str(exc))
            return
        finally:
            with self._lock:
                self._inflight.pop(_id_key(ctx.request_id), None)
        reply: LSPObject = {"jsonrpc": JSONRPC_VERSION, "id": ctx.request_id}
        error = error_for(outcome, ctx.method)
        if error is not None:
            reply["error"] = error
        else:
            reply["result"] = outcome.result
        self._send_data(reply)

    def _run_notification(self, ctx: LSPContext, barriers: list[Future]) -> None:
        if barriers:
            wait_futures(barriers)
        shutdown_seen = self.handler.state is LifecycleState.SHUTDOWN_PENDING
        try:
            outcome = self.handler.handle(ctx)
        except Exception:
            logger.exception("handler failed for %s", ctx.method)
            return
        finally:
            if ctx.method == methods.EXIT:
                self.exit_code = 0 if shutdown_seen else 1
        if not outcome.method_valid:
            logger.debug("ignoring notification %s", ctx.method)
            return
        error = error_for(outcome, ctx.method)
        if error is not None:
            logger.warning("notification %s failed: %s", ctx.method, error["message"])

    # -- writing ------------------------------------------------------------

    def _send_data(self, data) -> None:
        if self.settings.debug_messages:
            logger.debug("-> %s", json.dumps(data, default=self._serialize_message))
        loop = self._event_loop
        if loop is None or _running_loop() is loop:
            super()._send_data(data)
            return
        # Worker threads hand writes to the loop; whatever the loop never got
        # to is written by close().
        with self._lock:
            key = next(self._unsent_ids)
            self._unsent[key] = data
        try:
            loop.call_soon_threadsafe(self._write_queued, key)
        except RuntimeError:
            logger.debug("event loop closed; reply %d left for close()", key)

    def _write_queued(self, key: int) -> None:
        with self._lock:
            data = self._unsent.pop(key, None)
        if data is not None:
            super()._send_data(data)

    def _send_error(self, request_id: int | str | None, code: int, message: str) -> None:
        self._send_data(
            {
                "jsonrpc": JSONRPC_VERSION,
                "id": request_id,
                "error": {"code": code, "message": message},
            }
        )

    def notify(self, method: str, params=None) -> None:
        if self._closed.is_set():
            raise TransportError(f"connection closed; cannot send {method}")
        super().notify(method, params)

    def call_client(self, method: str, params: LSPAny) -> LSPAny:
        """Send a request to the client and block until its reply arrives."""
        if self._closed.is_set():
            raise TransportError(f"connection closed; cannot call {method}")
        future = self.send_request(method, params)
        timeout = self.settings.call_timeout_ms / 1000 or None
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as exc:
            raise TransportError(f"timed out waiting for {method}") from exc
        except JsonRpcException as exc:
            code = exc.code if exc.code is not None else ErrorCodes.UNKNOWN_ERROR_CODE
            raise ResponseError(int(code), str(exc.message or ""), exc.data) from exc

    # -- teardown -----------------------------------------------------------

    def _end_session(self) -> None:
        stop_event = self._server._stop_event
        if stop_event is not None:
            stop_event.set()
        loop = self._event_loop
        if loop is not None:
            # Runs after the replies workers have already queued.
            loop.call_soon(self._close_transport)
        else:
            self._close_transport()

    def _close_transport(self) -> None:
        self._closed.set()
        if self.writer is not None:
            closing = self.writer.close()
            if inspect.isawaitable(closing):
                asyncio.ensure_future(closing)
        listener = getattr(self._server, "_server", None)
        if listener is not None:
            listener.close()

    def close(self) -> None:
        """Stop accepting work, fail outbound calls and drain running handlers.

        Called once the event loop has stopped; replies it never wrote are
        written here, in the order they were produced.
        """
        self._closed.set()
        for future in list(self._request_futures.values()):
            if not future.done():
                future.set_exception(TransportError("connection closed"))
        self._notifications.shutdown(wait=True)
        self._requests.shutdown(wait=True)
        with self._lock:
            leftover = [self._unsent.pop(key) for key in sorted(self._unsent)]
        for data in leftover:
            super()._send_data(data)
