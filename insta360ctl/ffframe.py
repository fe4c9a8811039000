"""FF-framed messages used by GO 2, GO 3 and GO 3S cameras.

Layout: 0xFF marker, message type, command code, parameters, 0xAB 0xBA
padding up to a fixed size, then CRC-16/Modbus (little-endian) over all
preceding bytes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .crc import crc16_modbus

__all__ = [
    "FF_FRAME_MARKER",
    "FF_FRAME_MIN_SIZE",
    "FF_FRAME_DEFAULT_BUF_SIZE",
    "FF_FRAME_PADDING_BYTE1",
    "FF_FRAME_PADDING_BYTE2",
    "FFFrame",
    "FFFrameError",
    "encode_ff_frame",
    "decode_ff_frame",
]

FF_FRAME_MARKER = 0xFF
# Marker + type + command + CRC(2).
FF_FRAME_MIN_SIZE = 5
# 15 data bytes + 2 CRC bytes.
FF_FRAME_DEFAULT_BUF_SIZE = 17
FF_FRAME_PADDING_BYTE1 = 0xAB
FF_FRAME_PADDING_BYTE2 = 0xBA

_HEADER_LEN = 3
_CRC_LEN = 2
_PADDING_PAIR = bytes([FF_FRAME_PADDING_BYTE1, FF_FRAME_PADDING_BYTE2])


class FFFrameError(ValueError):
    """Raised when an FF-framed message cannot be decoded."""


@dataclass(frozen=True)
class FFFrame:
    """A decoded FF-framed message."""

    msg_type: int
    command: int
    params: bytes = b""


def encode_ff_frame(msg_type: int, command: int, params: bytes = b"", buf_size: int = 0) -> bytes:
    """Build an FF-framed message with ABBA padding and CRC.

    *buf_size* is the total output size including the CRC.  Zero, or a size
    too small for the content, gives an unpadded frame.
    """
    body = bytes([FF_FRAME_MARKER, msg_type, command]) + bytes(params)
    min_size = len(body) + _CRC_LEN
    if buf_size < min_size:
        buf_size = min_size

    pad_len = buf_size - min_size
    padding = (_PADDING_PAIR * (pad_len // 2 + 1))[:pad_len]
    data = body + padding
    return data + crc16_modbus(data).to_bytes(_CRC_LEN, "little")


def decode_ff_frame(data: bytes) -> FFFrame:
    """Parse an FF-framed message, verifying its CRC and stripping padding."""
    data = bytes(data)
    if len(data) < FF_FRAME_MIN_SIZE:
        raise FFFrameError(
            f"FF-frame too short: {len(data)} bytes (min {FF_FRAME_MIN_SIZE})"
        )
    if data[0] != FF_FRAME_MARKER:
        raise FFFrameError(
            f"FF-frame missing marker: expected 0x{FF_FRAME_MARKER:02X}, got 0x{data[0]:02X}"
        )

    data_len = len(data) - _CRC_LEN
    expected_crc = int.from_bytes(data[data_len:], "little")
    actual_crc = crc16_modbus(data[:data_len])
    if expected_crc != actual_crc:
        raise FFFrameError(
            f"FF-frame CRC mismatch: expected 0x{expected_crc:04X}, got 0x{actual_crc:04X}"
        )

    return FFFrame(
        msg_type=data[1],
        command=data[2],
        params=_strip_abba_padding(data[_HEADER_LEN:data_len]),
    )


def _strip_abba_padding(params: bytes) -> bytes:
    """Remove trailing 0xAB 0xBA pairs and a trailing lone 0xAB."""
    while params.endswith(_PADDING_PAIR):
        params = params[:-2]
    if params.endswith(bytes([FF_FRAME_PADDING_BYTE1])):
        params = params[:-1]
    return params