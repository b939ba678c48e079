"""Typed messaging whose writes are wrapped in relay frames."""

from __future__ import annotations

import struct

from bpodio.arcom import ArCOM

RELAY_OPCODE = 82


class ArCOMvE(ArCOM):
    """Like :class:`ArCOM`, but every write is sent as a relay frame.

    A frame is the relay op-code byte, the payload length as a little-endian
    32-bit integer, then the payload. Reads are unframed.
    """

    def __init__(self, stream):
        super().__init__(stream)

    def _send(self, data: bytes) -> None:
        prefix = struct.pack("<BI", RELAY_OPCODE, len(data))
        self._stream.write(prefix + data)