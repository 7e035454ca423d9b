"""Plain JSON values as they appear on either side of the codec.

``LSPAny``, ``LSPObject`` and ``LSPArray`` carry the protocol's names for the
JSON value space. They type the dict-and-list side: raw params before they are
decoded, encoded results, and JSON-RPC envelopes. Model fields use pydantic's
``JsonValue`` instead (see ``trellis.protocol.base``).
"""

from __future__ import annotations

from typing import TypeAlias

LSPScalar: TypeAlias = str | int | float | bool | None
LSPAny: TypeAlias = LSPScalar | list["LSPAny"] | dict[str, "LSPAny"]
LSPObject: TypeAlias = dict[str, LSPAny]
LSPArray: TypeAlias = list[LSPAny]

# Params as handed to the handler: already-parsed JSON, or the undecoded JSON
# text of the params member.
RawParams: TypeAlias = LSPAny | bytes | str
