"""Message header of the direct camera control protocol.

Two wire formats share the same logical header:

* Header16 (X3, ONE R, ONE RS, sent directly on BLE): uint16 payload length,
  single-byte command code.
* Go2 inner format (GO 2 / GO 3, wrapped in a Go2BlePacket envelope): uint32
  total inner size, uint16 command code.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .messagecode import MessageCode

__all__ = [
    "HEADER_SIZE",
    "CONTENT_TYPE_PROTOBUF",
    "Header",
    "HeaderError",
    "UnexpectedEOFError",
    "decode_header",
    "decode_go2_header",
    "encode_message",
    "encode_go2_message",
    "decode_message",
    "decode_go2_message",
]

HEADER_SIZE = 16
CONTENT_TYPE_PROTOBUF = 0x02

_HEADER_MODE = 0x04
_IS_LAST = 0x80

# payload_length, mode, command(byte), content type, sequence, is_last
_HEADER16 = struct.Struct("<H2xB2xBxBB2xB2x")
# total_inner_size, mode, command(uint16), content type, sequence, is_last
_HEADER_GO2 = struct.Struct("<IB2xHBB2xB2x")


class HeaderError(ValueError):
    """Raised when a message header is malformed."""


class UnexpectedEOFError(HeaderError, EOFError):
    """Raised when a header or message is shorter than it must be."""


def _as_code(value: int) -> int:
    try:
        return MessageCode(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class Header:
    """A decoded message header."""

    payload_length: int = 0
    command_code: int = MessageCode.BEGIN
    sequence: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.payload_length <= 0xFFFF:
            raise HeaderError(f"payload length out of range: {self.payload_length}")
        if not 0 <= int(self.command_code) <= 0xFFFF:
            raise HeaderError(f"command code out of range: {int(self.command_code)}")
        if not 0 <= self.sequence <= 0xFF:
            raise HeaderError(f"sequence out of range: {self.sequence}")

    def encode(self) -> bytes:
        """Serialize in the Header16 format; the command keeps its low byte."""
        return _HEADER16.pack(
            self.payload_length,
            _HEADER_MODE,
            int(self.command_code) & 0xFF,
            CONTENT_TYPE_PROTOBUF,
            self.sequence,
            _IS_LAST,
        )

    def encode_go2(self) -> bytes:
        """Serialize in the Go2 inner format."""
        return _HEADER_GO2.pack(
            HEADER_SIZE + self.payload_length,
            _HEADER_MODE,
            int(self.command_code),
            CONTENT_TYPE_PROTOBUF,
            self.sequence,
            _IS_LAST,
        )


def _check_header_bytes(data: bytes) -> None:
    if len(data) < HEADER_SIZE:
        raise UnexpectedEOFError(
            f"unexpected EOF: need {HEADER_SIZE} bytes for header, got {len(data)}"
        )
    if data[4] != _HEADER_MODE:
        raise HeaderError(
            f"invalid header mode byte: expected 0x{_HEADER_MODE:02X}, got 0x{data[4]:02X}"
        )


def decode_header(data: bytes) -> Header:
    """Parse a Header16 format header (X3, ONE R, ONE RS)."""
    data = bytes(data)
    _check_header_bytes(data)
    payload_length, _mode, command, _content, sequence, _last = _HEADER16.unpack_from(data)
    return Header(payload_length=payload_length, command_code=_as_code(command), sequence=sequence)


def decode_go2_header(data: bytes) -> Header:
    """Parse a Go2 inner format header (GO 2, GO 3)."""
    data = bytes(data)
    _check_header_bytes(data)
    total_size, _mode, command, _content, sequence, _last = _HEADER_GO2.unpack_from(data)
    payload_length = (total_size - HEADER_SIZE) & 0xFFFF if total_size >= HEADER_SIZE else 0
    return Header(payload_length=payload_length, command_code=_as_code(command), sequence=sequence)


def encode_message(cmd: int, seq: int, payload: bytes = b"") -> bytes:
    """Build a Header16 message: header followed by *payload*."""
    payload = bytes(payload)
    header = Header(payload_length=len(payload), command_code=cmd, sequence=seq)
    return header.encode() + payload


def encode_go2_message(cmd: int, seq: int, payload: bytes = b"") -> bytes:
    """Build a Go2 inner message for wrapping in a Go2BlePacket."""
    payload = bytes(payload)
    header = Header(payload_length=len(payload), command_code=cmd, sequence=seq)
    return header.encode_go2() + payload


def _split_payload(header: Header, data: bytes) -> tuple[Header, bytes]:
    total_len = HEADER_SIZE + header.payload_length
    if len(data) < total_len:
        raise UnexpectedEOFError(
            f"unexpected EOF: message declares {header.payload_length} payload bytes, "
            f"but only {len(data) - HEADER_SIZE} available"
        )
    return header, data[HEADER_SIZE:total_len]


def decode_message(data: bytes) -> tuple[Header, bytes]:
    """Split a Header16 message into its header and payload."""
    data = bytes(data)
    return _split_payload(decode_header(data), data)


def decode_go2_message(data: bytes) -> tuple[Header, bytes]:
    """Split a Go2 inner message into its header and payload."""
    data = bytes(data)
    return _split_payload(decode_go2_header(data), data)