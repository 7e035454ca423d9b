from __future__ import annotations

import pytest

from trellis.capabilities import (
    BOOLEAN_PROVIDERS,
    capabilities_for_methods,
    select_position_encoding,
)
from trellis.handler import METHOD_SPECS, Handler
from trellis.protocol import methods
from trellis.protocol.base import from_wire, to_wire
from trellis.protocol.enums import PositionEncodingKind, TextDocumentSyncKind
from trellis.protocol.lifecycle import InitializeParams
from tests.lsp_helpers import initialize_params


def _noop(ctx, params=None):
    return None


def test_empty_handler_advertises_nothing() -> None:
    assert to_wire(Handler().create_server_capabilities()) == {}


@pytest.mark.parametrize(("method", "attribute"), BOOLEAN_PROVIDERS)
def test_boolean_providers(method: str, attribute: str) -> None:
    capabilities = capabilities_for_methods([method])
    assert getattr(capabilities, attribute) is True


def test_text_document_sync_from_callbacks() -> None:
    handler = Handler(
        text_document_did_open=_noop,
        text_document_did_close=_noop,
        text_document_did_change=_noop,
        text_document_did_save=_noop,
        text_document_will_save=_noop,
    )
    sync = to_wire(handler.create_server_capabilities())["textDocumentSync"]
    assert sync == {
        "openClose": True,
        "change": int(TextDocumentSyncKind.INCREMENTAL),
        "willSave": True,
        "save": True,
    }


def test_open_close_requires_both_callbacks() -> None:
    capabilities = capabilities_for_methods([methods.TEXT_DOCUMENT_DID_OPEN])
    assert capabilities.text_document_sync is None


def test_resolve_provider_follows_resolve_callback() -> None:
    wire = to_wire(
        capabilities_for_methods(
            [
                methods.TEXT_DOCUMENT_COMPLETION,
                methods.COMPLETION_ITEM_RESOLVE,
                methods.TEXT_DOCUMENT_CODE_LENS,
                methods.TEXT_DOCUMENT_DOCUMENT_LINK,
            ]
        )
    )
    assert wire["completionProvider"] == {"resolveProvider": True}
    assert wire["codeLensProvider"] == {}
    assert wire["documentLinkProvider"] == {}


def test_diagnostic_provider_tracks_workspace_pull() -> None:
    wire = to_wire(capabilities_for_methods([methods.TEXT_DOCUMENT_DIAGNOSTIC]))
    assert wire["diagnosticProvider"] == {
        "interFileDependencies": False,
        "workspaceDiagnostics": False,
    }
    wire = to_wire(
        capabilities_for_methods(
            [methods.TEXT_DOCUMENT_DIAGNOSTIC, methods.WORKSPACE_DIAGNOSTIC]
        )
    )
    assert wire["diagnosticProvider"]["workspaceDiagnostics"] is True


def test_semantic_tokens_merge_into_one_options_object() -> None:
    wire = to_wire(
        capabilities_for_methods(
            [
                methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
                methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL_DELTA,
                methods.TEXT_DOCUMENT_SEMANTIC_TOKENS_RANGE,
            ]
        )
    )
    assert wire["semanticTokensProvider"] == {
        "legend": {"tokenTypes": [], "tokenModifiers": []},
        "full": {"delta": True},
        "range": True,
    }


def test_file_operations_and_commands() -> None:
    wire = to_wire(
        capabilities_for_methods(
            [
                methods.WORKSPACE_DID_RENAME_FILES,
                methods.WORKSPACE_WILL_DELETE_FILES,
                methods.WORKSPACE_EXECUTE_COMMAND,
            ]
        )
    )
    assert wire["workspace"] == {
        "fileOperations": {"didRename": {"filters": []}, "willDelete": {"filters": []}}
    }
    assert wire["executeCommandProvider"] == {"commands": []}


def test_notebook_save_and_on_type_formatting() -> None:
    wire = to_wire(
        capabilities_for_methods(
            [methods.NOTEBOOK_DOCUMENT_DID_SAVE, methods.TEXT_DOCUMENT_ON_TYPE_FORMATTING]
        )
    )
    assert wire["notebookDocumentSync"]["save"] is True
    assert wire["documentOnTypeFormattingProvider"] == {"firstTriggerCharacter": ""}


def test_capabilities_survive_a_wire_round_trip() -> None:
    handler = Handler(hover=_noop, definition=_noop, completion=_noop)
    capabilities = handler.create_server_capabilities()
    assert to_wire(from_wire(type(capabilities), to_wire(capabilities))) == to_wire(
        capabilities
    )


@pytest.mark.parametrize(
    ("offered", "expected"),
    [
        (None, PositionEncodingKind.UTF16),
        ([], PositionEncodingKind.UTF16),
        (["utf-8", "utf-16"], PositionEncodingKind.UTF8),
        (["ucs-2", "utf-32"], PositionEncodingKind.UTF32),
    ],
)
def test_select_position_encoding(offered, expected) -> None:
    capabilities = {} if offered is None else {"general": {"positionEncodings": offered}}
    params = from_wire(InitializeParams, initialize_params(capabilities=capabilities))
    assert select_position_encoding(params) is expected


def _assert_kept(before: dict, after: dict, path: str = "") -> None:
    for key, value in before.items():
        where = f"{path}.{key}" if path else key
        assert key in after, where
        if isinstance(value, dict) and isinstance(after[key], dict):
            _assert_kept(value, after[key], where)
        elif value is True:
            assert after[key], where


@pytest.mark.parametrize("order", ["forward", "reverse"])
def test_adding_callbacks_never_removes_capabilities(order: str) -> None:
    specs = list(METHOD_SPECS.values())
    if order == "reverse":
        specs.reverse()
    handler = Handler()
    previous = to_wire(handler.create_server_capabilities())
    for spec in specs:
        getattr(handler, f"set_{spec.name}_handler")(_noop)
        current = to_wire(handler.create_server_capabilities())
        _assert_kept(previous, current, spec.method)
        previous = current
    assert previous["hoverProvider"] is True
    assert previous["textDocumentSync"]["openClose"] is True
