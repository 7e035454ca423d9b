"""Codec primitives shared by every protocol structure.

Structures are pydantic models with snake_case attributes and camelCase wire
names. Absent optional members decode to ``None`` and are omitted again on
encode, so ``from_wire(T, to_wire(x)) == x``. Members the protocol declares as
``T | null`` without being optional are listed in ``keep_null_fields`` and
travel as an explicit ``null``.

Union-shaped members carry a ``WireUnion`` marker naming a hand-written reader.
Readers look at the JSON token kind (and, for objects, at discriminating keys)
and pick the variant; they also accept an already-built variant so that values
can be constructed directly in Python.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Callable, ClassVar, TypeAlias, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    JsonValue,
    TypeAdapter,
    model_serializer,
)
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Integer: TypeAlias = Annotated[int, Field(strict=True, ge=INT32_MIN, le=INT32_MAX)]
UInteger: TypeAlias = Annotated[int, Field(strict=True, ge=0, le=INT32_MAX)]
Decimal: TypeAlias = float
DocumentUri: TypeAlias = str
URI: TypeAlias = str

LSPAny: TypeAlias = JsonValue
LSPObject: TypeAlias = dict[str, JsonValue]
LSPArray: TypeAlias = list[JsonValue]

T = TypeVar("T")


class LspModel(BaseModel):
    """Base class for every protocol structure."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    keep_null_fields: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        keep: set[str] = set()
        fields = type(self).model_fields
        for name in self.keep_null_fields:
            keep.add(name)
            field = fields.get(name)
            if field is not None and field.alias:
                keep.add(field.alias)
        return {
            key: value
            for key, value in data.items()
            if value is not None or key in keep
        }

    def to_wire(self) -> dict[str, LSPAny]:
        return self.model_dump(mode="json", by_alias=True)


class OpenModel(LspModel):
    """Structure whose unknown members survive a decode/encode cycle.

    Used for capability trees, where clients routinely send members newer than
    the protocol version modelled here.
    """

    model_config = ConfigDict(extra="allow")


class IntOrString:
    """Either an ``integer`` or a ``string``; exactly one is inhabited.

    On read a number is tried first, then a string. Booleans are rejected even
    though Python treats them as ints.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int | str | None = None) -> None:
        if value is not None:
            value = self._check(value)
        self._value = value

    @classmethod
    def of_int(cls, value: int) -> "IntOrString":
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return cls(value)

    @classmethod
    def of_str(cls, value: str) -> "IntOrString":
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        return cls(value)

    @staticmethod
    def _check(value: object) -> int | str:
        if isinstance(value, bool):
            raise ValueError("boolean is neither integer nor string")
        if isinstance(value, int):
            if not INT32_MIN <= value <= INT32_MAX:
                raise ValueError(f"integer {value} out of range")
            return value
        if isinstance(value, str):
            return value
        raise ValueError(f"expected integer or string, got {type(value).__name__}")

    @property
    def value(self) -> int | str | None:
        return self._value

    @property
    def is_int(self) -> bool:
        return isinstance(self._value, int)

    @property
    def is_str(self) -> bool:
        return isinstance(self._value, str)

    def to_json(self) -> int | str:
        if self._value is None:
            raise ValueError("IntOrString holds no value")
        return self._value

    @classmethod
    def validate(cls, value: object) -> "IntOrString":
        if isinstance(value, cls):
            return value
        return cls(cls._check(value))

    @classmethod
    def __get_pydantic_core_schema__(cls, source: object, handler: object):
        return core_schema.no_info_plain_validator_function(
            cls.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_json(), info_arg=False
            ),
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IntOrString):
            return type(self._value) is type(other._value) and self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self._value), self._value))

    def __repr__(self) -> str:
        return f"IntOrString({self._value!r})"


class BoolOrString:
    """Either a ``boolean`` or a ``string``; on read a bool is tried first."""

    __slots__ = ("_value",)

    def __init__(self, value: bool | str | None = None) -> None:
        if value is not None:
            value = self._check(value)
        self._value = value

    @classmethod
    def of_bool(cls, value: bool) -> "BoolOrString":
        if not isinstance(value, bool):
            raise TypeError(f"expected bool, got {type(value).__name__}")
        return cls(value)

    @classmethod
    def of_str(cls, value: str) -> "BoolOrString":
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        return cls(value)

    @staticmethod
    def _check(value: object) -> bool | str:
        if isinstance(value, (bool, str)):
            return value
        raise ValueError(f"expected boolean or string, got {type(value).__name__}")

    @property
    def value(self) -> bool | str | None:
        return self._value

    @property
    def is_bool(self) -> bool:
        return isinstance(self._value, bool)

    @property
    def is_str(self) -> bool:
        return isinstance(self._value, str)

    def to_json(self) -> bool | str:
        if self._value is None:
            raise ValueError("BoolOrString holds no value")
        return self._value

    @classmethod
    def validate(cls, value: object) -> "BoolOrString":
        if isinstance(value, cls):
            return value
        return cls(cls._check(value))

    @classmethod
    def __get_pydantic_core_schema__(cls, source: object, handler: object):
        return core_schema.no_info_plain_validator_function(
            cls.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_json(), info_arg=False
            ),
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoolOrString):
            return type(self._value) is type(other._value) and self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self._value), self._value))

    def __repr__(self) -> str:
        return f"BoolOrString({self._value!r})"


ProgressToken: TypeAlias = IntOrString


class WireUnion:
    """Annotation marker binding a union-shaped member to its reader.

    The writer is always ``to_wire``: every variant already knows how to
    encode itself, so only reading needs a per-shape rule.
    """

    def __init__(self, reader: Callable[[object], object]) -> None:
        self.reader = reader

    def __get_pydantic_core_schema__(self, source: object, handler: object):
        return core_schema.no_info_plain_validator_function(
            self.reader,
            serialization=core_schema.plain_serializer_function_ser_schema(
                to_wire, info_arg=False
            ),
        )


def to_wire(value: object) -> LSPAny:
    """Encode a protocol value into plain JSON values."""
    if value is None or (
        isinstance(value, (bool, int, float, str)) and not isinstance(value, Enum)
    ):
        return value
    if isinstance(value, LspModel):
        return value.to_wire()
    if isinstance(value, (IntOrString, BoolOrString)):
        return value.to_json()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    if isinstance(value, dict):
        return {str(key): to_wire(item) for key, item in value.items()}
    raise TypeError(f"cannot encode {type(value).__name__} for the wire")


@lru_cache(maxsize=None)
def _adapter(tp: object) -> TypeAdapter:
    return TypeAdapter(tp)


def from_wire(tp: type[T] | object, data: object) -> T:
    """Decode JSON (text, bytes or already-parsed values) into ``tp``.

    Raises ``pydantic.ValidationError`` when the data does not fit.
    """
    if isinstance(data, (bytes, bytearray, str)):
        return _adapter(tp).validate_json(data)
    return from_value(tp, data)


def from_value(tp: type[T] | object, value: object) -> T:
    """Decode an already-parsed JSON value; a ``str`` is a string, not text."""
    return _adapter(tp).validate_python(value)


def read_as(model: type[T], value: object) -> T:
    """Decode one union variant, passing through a ready-made instance."""
    if isinstance(value, model):
        return value
    if not isinstance(value, dict):
        raise ValueError(f"expected object for {model.__name__}")
    return model.model_validate(value)


def read_list(reader: Callable[[object], T]) -> Callable[[object], list[T] | None]:
    def _read(value: object) -> list[T] | None:
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            raise ValueError("expected array")
        return [reader(item) for item in value]

    return _read
