from __future__ import annotations

import pytest
from pydantic import ValidationError

from trellis.protocol.base import BoolOrString, IntOrString, from_wire, to_wire
from trellis.protocol.enums import DiagnosticSeverity, MarkupKind, TraceValue
from trellis.protocol.lifecycle import (
    CancelParams,
    InitializeParams,
    Unregistration,
    UnregistrationParams,
)
from trellis.protocol.structures import (
    Diagnostic,
    OptionalVersionedTextDocumentIdentifier,
    Position,
    Range,
    TextDocumentRegistrationOptions,
)
from trellis.protocol.workspace import WorkspaceFoldersServerCapabilities


def _range() -> Range:
    return Range(
        start=Position(line=1, character=2), end=Position(line=1, character=5)
    )


def test_int_or_string_reads_number_before_string() -> None:
    assert IntOrString.validate(7) == IntOrString.of_int(7)
    assert IntOrString.validate("7") == IntOrString.of_str("7")
    assert IntOrString.of_int(7) != IntOrString.of_str("7")


def test_int_or_string_rejects_booleans_and_out_of_range() -> None:
    with pytest.raises(ValueError):
        IntOrString.validate(True)
    with pytest.raises(ValueError):
        IntOrString.validate(2**31)
    with pytest.raises(TypeError):
        IntOrString.of_int("3")  # type: ignore[arg-type]


def test_empty_int_or_string_cannot_be_encoded() -> None:
    with pytest.raises(ValueError):
        IntOrString().to_json()
    with pytest.raises(ValueError):
        BoolOrString().to_json()


def test_bool_or_string_reads_bool_first() -> None:
    caps = WorkspaceFoldersServerCapabilities.model_validate(
        {"supported": True, "changeNotifications": True}
    )
    assert caps.change_notifications == BoolOrString.of_bool(True)
    caps = WorkspaceFoldersServerCapabilities.model_validate(
        {"changeNotifications": "registration-id"}
    )
    assert caps.change_notifications == BoolOrString.of_str("registration-id")
    assert to_wire(caps) == {"changeNotifications": "registration-id"}
    with pytest.raises(ValidationError):
        WorkspaceFoldersServerCapabilities.model_validate({"changeNotifications": 1})


def test_cancel_params_keep_id_variant() -> None:
    numeric = from_wire(CancelParams, {"id": 4})
    textual = from_wire(CancelParams, {"id": "4"})
    assert numeric.id.is_int and textual.id.is_str
    assert to_wire(numeric) == {"id": 4}
    assert to_wire(textual) == {"id": "4"}


def test_absent_optionals_are_omitted() -> None:
    diagnostic = Diagnostic(range=_range(), message="unused")
    assert to_wire(diagnostic) == {
        "range": {"start": {"line": 1, "character": 2}, "end": {"line": 1, "character": 5}},
        "message": "unused",
    }


def test_diagnostic_code_and_enums_round_trip() -> None:
    wire = {
        "range": to_wire(_range()),
        "severity": 2,
        "code": "E101",
        "message": "bad indent",
        "data": {"fix": [1, 2]},
    }
    diagnostic = from_wire(Diagnostic, wire)
    assert diagnostic.severity is DiagnosticSeverity.WARNING
    assert diagnostic.code == IntOrString.of_str("E101")
    assert to_wire(diagnostic) == wire


def test_required_nullable_members_are_written_as_null() -> None:
    ident = OptionalVersionedTextDocumentIdentifier(uri="file:///a.py")
    assert to_wire(ident) == {"uri": "file:///a.py", "version": None}
    assert to_wire(TextDocumentRegistrationOptions()) == {"documentSelector": None}


def test_initialize_params_decode_from_json_text() -> None:
    raw = (
        b'{"processId": null, "rootUri": "file:///ws", "capabilities": '
        b'{"general": {"positionEncodings": ["utf-8", "utf-16"]}, "futureThing": 1},'
        b' "trace": "verbose"}'
    )
    params = from_wire(InitializeParams, raw)
    assert params.process_id is None
    assert params.root_uri == "file:///ws"
    assert params.trace is TraceValue.VERBOSE
    assert params.capabilities.general.position_encodings == ["utf-8", "utf-16"]
    wire = to_wire(params)
    assert wire["processId"] is None
    assert wire["capabilities"]["futureThing"] == 1


def test_initialize_params_require_capabilities() -> None:
    with pytest.raises(ValidationError):
        from_wire(InitializeParams, {"processId": 1})


def test_integers_are_strict() -> None:
    with pytest.raises(ValidationError):
        from_wire(Position, {"line": "1", "character": 0})
    with pytest.raises(ValidationError):
        from_wire(Position, {"line": -1, "character": 0})


def test_unregistration_params_use_historical_wire_key() -> None:
    params = UnregistrationParams(
        unregistrations=[Unregistration(id="1", method="textDocument/hover")]
    )
    assert to_wire(params) == {
        "unregisterations": [{"id": "1", "method": "textDocument/hover"}]
    }
    decoded = from_wire(
        UnregistrationParams,
        {"unregisterations": [{"id": "2", "method": "workspace/symbol"}]},
    )
    assert decoded.unregistrations[0].id == "2"


def test_to_wire_handles_lists_enums_and_scalars() -> None:
    assert to_wire([MarkupKind.MARKDOWN, 1, "x", None]) == ["markdown", 1, "x", None]
    assert to_wire({"k": TraceValue.OFF}) == {"k": "off"}


def test_to_wire_rejects_unknown_objects() -> None:
    with pytest.raises(TypeError):
        to_wire(object())


def test_trace_values_are_ordered() -> None:
    assert TraceValue.OFF < TraceValue.MESSAGES < TraceValue.VERBOSE
    assert TraceValue.VERBOSE >= TraceValue.MESSAGES
