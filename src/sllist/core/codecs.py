"""Fixed-size struct codecs for typed payloads.

A list only knows bytes. A codec pairs a ``struct`` format with the element
size it implies, so callers can store and read back typed values without
hand-packing bytes.

Examples:
    >>> lst = SinglyLinkedList(INT32.element_size)
    >>> lst.insert_end(INT32.encode(42))
    Ok(0)
    >>> INT32.decode(lst.snapshot()[0])
    42

    Point-like records:

    >>> POINT = StructCodec("<ii")
    >>> POINT.decode(POINT.encode(3, 4))
    (3, 4)
"""

from __future__ import annotations

import struct
from typing import Any, Callable

from sllist.core.errors import ErrorContext, InvalidArgumentError


class StructCodec:
    """Encode and decode one fixed-size record with a ``struct`` format."""

    def __init__(self, fmt: str):
        try:
            self._struct = struct.Struct(fmt)
        except struct.error as exc:
            raise InvalidArgumentError(
                f"Invalid struct format: {fmt!r}", field="fmt", value=fmt, cause=exc
            ) from exc

    @property
    def format(self) -> str:
        return self._struct.format

    @property
    def element_size(self) -> int:
        return self._struct.size

    def encode(self, *values: Any) -> bytes:
        try:
            return self._struct.pack(*values)
        except struct.error as exc:
            raise InvalidArgumentError(
                f"Cannot encode {values!r} as {self.format!r}",
                field="values",
                value=values,
                context=ErrorContext(element_size=self.element_size),
                cause=exc,
            ) from exc

    def decode(self, payload: bytes) -> Any:
        """Unpack a payload; single-field formats return the bare value."""
        values = self._struct.unpack(payload)
        return values[0] if len(values) == 1 else values

    def visitor(self, fn: Callable[[Any], Any]) -> Callable[[bytes], Any]:
        """Adapt a value-level callback into a payload-level traversal callback."""

        def visit(payload: bytes) -> Any:
            return fn(self.decode(payload))

        return visit

    def __repr__(self) -> str:
        return f"StructCodec({self.format!r}, element_size={self.element_size})"


INT32 = StructCodec("<i")
UINT32 = StructCodec("<I")
INT64 = StructCodec("<q")
FLOAT64 = StructCodec("<d")


__all__ = [
    "StructCodec",
    "INT32",
    "UINT32",
    "INT64",
    "FLOAT64",
]
