"""Typed little-endian binary messaging over a byte stream."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from typing import Any


def _char_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("latin-1")
    if isinstance(value, int):
        raise TypeError("expected characters as str or bytes, not int")
    return bytes(value)


class ArCOM:
    """Reads and writes little-endian integers, characters and arrays on a stream.

    The stream needs ``read(n)`` and ``write(data)``; ``flush()`` and
    ``in_waiting`` are used when present.
    """

    def __init__(self, stream):
        self._stream = stream

    def available(self) -> int:
        """Return the number of bytes that can be read without waiting."""
        in_waiting = getattr(self._stream, "in_waiting", None)
        if in_waiting is not None:
            return int(in_waiting)
        seekable = getattr(self._stream, "seekable", None)
        if seekable is not None and seekable():
            position = self._stream.tell()
            end = self._stream.seek(0, 2)
            self._stream.seek(position)
            return end - position
        return 0

    def flush(self) -> None:
        """Flush the underlying stream, if it can be flushed."""
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

    # -- low-level helpers -------------------------------------------------

    def _send(self, data: bytes) -> None:
        self._stream.write(data)

    def _write_values(self, code: str, values: Iterable[int]) -> None:
        items = list(values)
        try:
            data = struct.pack(f"<{len(items)}{code}", *items)
        except struct.error as exc:
            raise ValueError(str(exc)) from exc
        self._send(data)

    def _read_exact(self, count: int) -> bytes:
        if count < 0:
            raise ValueError("count must not be negative")
        received = bytearray()
        while len(received) < count:
            chunk = self._stream.read(count - len(received))
            if not chunk:
                raise EOFError(
                    f"stream ended after {len(received)} of {count} bytes"
                )
            received += chunk
        return bytes(received)

    def _read_values(self, code: str, count: int) -> list[int]:
        if count < 0:
            raise ValueError("count must not be negative")
        data = self._read_exact(struct.calcsize(f"<{code}") * count)
        return list(struct.unpack(f"<{count}{code}", data))

    def _read_one(self, code: str) -> int:
        return self._read_values(code, 1)[0]

    # -- writing scalars ---------------------------------------------------

    def write_byte(self, value: int) -> None:
        self._write_values("B", [value])

    def write_uint8(self, value: int) -> None:
        self._write_values("B", [value])

    def write_char(self, value: str | bytes) -> None:
        data = _char_bytes(value)
        if len(data) != 1:
            raise ValueError("write_char expects exactly one character")
        self._send(data)

    def write_uint16(self, value: int) -> None:
        self._write_values("H", [value])

    def write_uint32(self, value: int) -> None:
        self._write_values("I", [value])

    def write_int8(self, value: int) -> None:
        self._write_values("b", [value])

    def write_int16(self, value: int) -> None:
        self._write_values("h", [value])

    def write_int32(self, value: int) -> None:
        self._write_values("i", [value])

    # -- writing arrays ----------------------------------------------------

    def write_byte_array(self, values: Iterable[int] | bytes) -> None:
        if isinstance(values, int):
            raise TypeError("expected a sequence of bytes, not int")
        self._send(bytes(values))

    def write_uint8_array(self, values: Iterable[int] | bytes) -> None:
        self.write_byte_array(values)

    def write_char_array(self, values: str | bytes) -> None:
        self._send(_char_bytes(values))

    def write_uint16_array(self, values: Iterable[int]) -> None:
        self._write_values("H", values)

    def write_uint32_array(self, values: Iterable[int]) -> None:
        self._write_values("I", values)

    def write_int8_array(self, values: Iterable[int]) -> None:
        self._write_values("b", values)

    def write_int16_array(self, values: Iterable[int]) -> None:
        self._write_values("h", values)

    def write_int32_array(self, values: Iterable[int]) -> None:
        self._write_values("i", values)

    # -- reading scalars ---------------------------------------------------

    def read_byte(self) -> int:
        return self._read_one("B")

    def read_uint8(self) -> int:
        return self._read_one("B")

    def read_char(self) -> str:
        return self._read_exact(1).decode("latin-1")

    def read_uint16(self) -> int:
        return self._read_one("H")

    def read_uint32(self) -> int:
        return self._read_one("I")

    def read_int8(self) -> int:
        return self._read_one("b")

    def read_int16(self) -> int:
        return self._read_one("h")

    def read_int32(self) -> int:
        return self._read_one("i")

    # -- reading arrays ----------------------------------------------------

    def read_byte_array(self, count: int) -> bytes:
        return self._read_exact(count)

    def read_uint8_array(self, count: int) -> bytes:
        return self._read_exact(count)

    def read_char_array(self, count: int) -> str:
        return self._read_exact(count).decode("latin-1")

    def read_uint16_array(self, count: int) -> list[int]:
        return self._read_values("H", count)

    def read_uint32_array(self, count: int) -> list[int]:
        return self._read_values("I", count)

    def read_int8_array(self, count: int) -> list[int]:
        return self._read_values("b", count)

    def read_int16_array(self, count: int) -> list[int]:
        return self._read_values("h", count)

    def read_int32_array(self, count: int) -> list[int]:
        return self._read_values("i", count)