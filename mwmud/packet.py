"""Length-prefixed packet framing used between the client and the server.

A packet on the wire is a 4-byte big-endian payload length followed by the
payload. A text payload is itself a 4-byte big-endian byte count followed by
the UTF-8 bytes of the text.
"""

from __future__ import annotations

_HEADER = 4


class PacketError(ValueError):
    """Raised when a received packet does not hold a well-formed string."""


def encode_packet(message: str) -> bytes:
    """Return the wire bytes of a packet carrying a single string."""
    body = message.encode("utf-8")
    payload = len(body).to_bytes(_HEADER, "big") + body
    return len(payload).to_bytes(_HEADER, "big") + payload


def _decode_payload(payload: bytes) -> str:
    if len(payload) < _HEADER:
        raise PacketError("packet payload is too short to hold a string")
    size = int.from_bytes(payload[:_HEADER], "big")
    body = payload[_HEADER:_HEADER + size]
    if len(body) < size:
        raise PacketError("string length exceeds packet payload")
    return body.decode("utf-8", errors="replace")


class PacketReader:
    """Reassembles packets from a byte stream that may arrive in pieces."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[str]:
        """Add received bytes and return the strings of every completed packet."""
        self._buffer.extend(data)
        messages: list[str] = []
        while len(self._buffer) >= _HEADER:
            size = int.from_bytes(self._buffer[:_HEADER], "big")
            end = _HEADER + size
            if len(self._buffer) < end:
                break
            payload = bytes(self._buffer[_HEADER:end])
            del self._buffer[:end]
            messages.append(_decode_payload(payload))
        return messages