"""Schema-driven bincode and borsh encoding.

A schema is a :class:`Primitive`, a :class:`FixedArray`, a :class:`Sequence`,
or a Python tuple of schemas describing a struct whose fields are written in order.
Sequences and fixed arrays of ``U8`` map to ``bytes``; other arrays map to lists.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .errors import DataFormatError


class Primitive(Enum):
    """Scalar types; integers are little-endian with fixed width."""

    U8 = "B"
    U16 = "H"
    U32 = "I"
    U64 = "Q"
    I8 = "b"
    I16 = "h"
    I32 = "i"
    I64 = "q"
    BOOL = "?"
    STRING = "str"


@dataclass(frozen=True)
class FixedArray:
    """An array of known length, written without a length prefix."""

    element: "Schema"
    length: int

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError("array length must not be negative")


@dataclass(frozen=True)
class Sequence:
    """A variable-length list, written with a length prefix."""

    element: "Schema"


Schema = Union[Primitive, FixedArray, Sequence, tuple]


@dataclass(frozen=True)
class _Flavor:
    kind: str
    length_format: str
    allow_trailing: bool


_BINCODE = _Flavor("bincode", "<Q", True)
_BORSH = _Flavor("borsh", "<I", False)

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _pack(fmt: str, value: Any, flavor: _Flavor) -> bytes:
    try:
        return struct.pack(fmt, value)
    except struct.error as exc:
        raise DataFormatError(str(exc), flavor.kind) from exc


def _encode(value: Any, schema: Schema, flavor: _Flavor, out: bytearray) -> None:
    if isinstance(schema, Primitive):
        if schema is Primitive.BOOL:
            if not isinstance(value, bool):
                raise DataFormatError(
                    f"expected bool, got {type(value).__name__}", flavor.kind
                )
            out.append(1 if value else 0)
        elif schema is Primitive.STRING:
            if not isinstance(value, str):
                raise DataFormatError(
                    f"expected str, got {type(value).__name__}", flavor.kind
                )
            raw = value.encode("utf-8")
            out += _pack(flavor.length_format, len(raw), flavor)
            out += raw
        else:
            if not isinstance(value, int):
                raise DataFormatError(
                    f"expected integer, got {type(value).__name__}", flavor.kind
                )
            out += _pack("<" + schema.value, value, flavor)
    elif isinstance(schema, (FixedArray, Sequence)):
        if schema.element is Primitive.U8 and isinstance(value, _BYTES_LIKE):
            items: Any = bytes(value)
        elif isinstance(value, (list, tuple, *_BYTES_LIKE)):
            items = value
        else:
            raise DataFormatError(
                f"expected a sequence, got {type(value).__name__}", flavor.kind
            )
        if isinstance(schema, FixedArray):
            if len(items) != schema.length:
                raise DataFormatError(
                    f"expected {schema.length} elements, got {len(items)}", flavor.kind
                )
        else:
            out += _pack(flavor.length_format, len(items), flavor)
        if isinstance(items, bytes):
            out += items
        else:
            for item in items:
                _encode(item, schema.element, flavor, out)
    elif isinstance(schema, tuple):
        if not isinstance(value, (tuple, list)) or len(value) != len(schema):
            raise DataFormatError(
                f"expected {len(schema)} fields, got {value!r}", flavor.kind
            )
        for item, field_schema in zip(value, schema):
            _encode(item, field_schema, flavor, out)
    else:
        raise TypeError(f"unsupported schema: {schema!r}")


class _Reader:
    def __init__(self, data: bytes, flavor: _Flavor) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._flavor = flavor

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise DataFormatError("unexpected end of input", self._flavor.kind)
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def unpack(self, fmt: str) -> int:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))[0]

    def length(self) -> int:
        return self.unpack(self._flavor.length_format)

    def read(self, schema: Schema) -> Any:
        kind = self._flavor.kind
        if isinstance(schema, Primitive):
            if schema is Primitive.BOOL:
                byte = self.take(1)[0]
                if byte not in (0, 1):
                    raise DataFormatError(f"invalid bool value: {byte}", kind)
                return byte == 1
            if schema is Primitive.STRING:
                raw = self.take(self.length())
                try:
                    return raw.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise DataFormatError(f"invalid utf-8: {exc}", kind) from exc
            return self.unpack("<" + schema.value)
        if isinstance(schema, (FixedArray, Sequence)):
            count = schema.length if isinstance(schema, FixedArray) else self.length()
            if schema.element is Primitive.U8:
                return self.take(count)
            return [self.read(schema.element) for _ in range(count)]
        if isinstance(schema, tuple):
            return tuple(self.read(field_schema) for field_schema in schema)
        raise TypeError(f"unsupported schema: {schema!r}")


def _decode(data: bytes, schema: Schema, flavor: _Flavor) -> Any:
    reader = _Reader(data, flavor)
    value = reader.read(schema)
    if not flavor.allow_trailing and reader.remaining:
        raise DataFormatError("Not all bytes read", flavor.kind)
    return value


def encode_bincode(value: Any, schema: Schema) -> bytes:
    """Encode ``value`` with bincode's fixed-width little-endian layout."""
    out = bytearray()
    _encode(value, schema, _BINCODE, out)
    return bytes(out)


def decode_bincode(data: bytes, schema: Schema) -> Any:
    """Decode a bincode value; trailing bytes are ignored."""
    return _decode(data, schema, _BINCODE)


def encode_borsh(value: Any, schema: Schema) -> bytes:
    """Encode ``value`` with borsh."""
    out = bytearray()
    _encode(value, schema, _BORSH, out)
    return bytes(out)


def decode_borsh(data: bytes, schema: Schema) -> Any:
    """Decode a borsh value; every byte must be consumed."""
    return _decode(data, schema, _BORSH)