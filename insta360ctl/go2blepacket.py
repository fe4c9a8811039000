"""BLE transport envelope used by GO 2, GO 3 and GO 3S cameras.

Every packet is laid out as::

    0xFF, type, subtype, uint16 LE data size, data..., CRC-16/Modbus (LE)

The CRC covers the header and the data.  Three variants exist: message
packets (type 0x07, subtype 0x40) wrapping an inner Go2 message, sync
packets (type 0x07, subtype 0x41), and simplified packets with a free
type and command byte (used e.g. for wake-up authorization).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .crc import crc16_modbus

__all__ = [
    "GO2_BLE_HEADER_SIZE",
    "GO2_BLE_CRC_SIZE",
    "GO2_BLE_OVERHEAD",
    "GO2_BLE_MARKER",
    "GO2_BLE_TYPE_MESSAGE",
    "GO2_BLE_TYPE_RESPONSE",
    "GO2_BLE_SUBTYPE_MESSAGE",
    "GO2_BLE_SUBTYPE_SYNC",
    "GO2_BLE_MAX_INNER_SIZE",
    "Go2BlePacket",
    "Go2BlePacketError",
    "encode_go2_ble_message_packet",
    "encode_go2_ble_sync_packet",
    "encode_go2_ble_packet2",
    "decode_go2_ble_packet",
    "go2_ble_probe_packet_size",
]

GO2_BLE_HEADER_SIZE = 5
GO2_BLE_CRC_SIZE = 2
GO2_BLE_OVERHEAD = GO2_BLE_HEADER_SIZE + GO2_BLE_CRC_SIZE
GO2_BLE_MARKER = 0xFF
# Byte 1 of outgoing packets (app -> camera).
GO2_BLE_TYPE_MESSAGE = 0x07
# Byte 1 of incoming packets (camera -> app).
GO2_BLE_TYPE_RESPONSE = 0x06
GO2_BLE_SUBTYPE_MESSAGE = 0x40
GO2_BLE_SUBTYPE_SYNC = 0x41
GO2_BLE_MAX_INNER_SIZE = 0x1EF

_HEADER = struct.Struct("<BBBH")
_MAX_DATA_SIZE = 0xFFFF


class Go2BlePacketError(ValueError):
    """Raised when a Go2BlePacket cannot be built or decoded."""


@dataclass(frozen=True)
class Go2BlePacket:
    """A decoded Go2BlePacket: its data and its type and subtype bytes."""

    data: bytes
    type_byte: int
    subtype_byte: int


def _encode(type_byte: int, subtype_byte: int, data: bytes) -> bytes:
    data = bytes(data)
    if len(data) > _MAX_DATA_SIZE:
        raise Go2BlePacketError(
            f"Go2BlePacket data too large: {len(data)} bytes (max {_MAX_DATA_SIZE})"
        )
    body = _HEADER.pack(GO2_BLE_MARKER, type_byte, subtype_byte, len(data)) + data
    return body + crc16_modbus(body).to_bytes(GO2_BLE_CRC_SIZE, "little")


def encode_go2_ble_message_packet(inner_data: bytes) -> bytes:
    """Wrap a complete inner message (header + payload) in a message envelope."""
    return _encode(GO2_BLE_TYPE_MESSAGE, GO2_BLE_SUBTYPE_MESSAGE, inner_data)


def encode_go2_ble_sync_packet(sync_data: bytes) -> bytes:
    """Wrap sync data in a sync envelope."""
    return _encode(GO2_BLE_TYPE_MESSAGE, GO2_BLE_SUBTYPE_SYNC, sync_data)


def encode_go2_ble_packet2(msg_type: int, cmd: int, params: bytes = b"") -> bytes:
    """Build a simplified packet with a free type and command byte."""
    return _encode(msg_type, cmd, params)


def decode_go2_ble_packet(data: bytes) -> Go2BlePacket:
    """Strip the envelope from *data*, verifying its CRC."""
    data = bytes(data)
    if len(data) < GO2_BLE_OVERHEAD:
        raise Go2BlePacketError(
            f"Go2BlePacket too short: {len(data)} bytes (min {GO2_BLE_OVERHEAD})"
        )
    marker, type_byte, subtype_byte, declared = _HEADER.unpack_from(data)
    if marker != GO2_BLE_MARKER:
        raise Go2BlePacketError(
            f"Go2BlePacket missing marker: expected 0x{GO2_BLE_MARKER:02X}, got 0x{marker:02X}"
        )

    expected_total = GO2_BLE_OVERHEAD + declared
    if len(data) < expected_total:
        raise Go2BlePacketError(
            f"Go2BlePacket declares {declared} inner bytes but packet is only "
            f"{len(data)} bytes (need {expected_total})"
        )

    crc_offset = GO2_BLE_HEADER_SIZE + declared
    expected_crc = int.from_bytes(data[crc_offset:crc_offset + GO2_BLE_CRC_SIZE], "little")
    actual_crc = crc16_modbus(data[:crc_offset])
    if expected_crc != actual_crc:
        raise Go2BlePacketError(
            f"Go2BlePacket CRC mismatch: expected 0x{expected_crc:04X}, got 0x{actual_crc:04X}"
        )

    return Go2BlePacket(
        data=data[GO2_BLE_HEADER_SIZE:crc_offset],
        type_byte=type_byte,
        subtype_byte=subtype_byte,
    )


def go2_ble_probe_packet_size(data: bytes) -> int:
    """Return the inner data size declared in bytes 3-4 of a packet."""
    data = bytes(data)
    if len(data) < GO2_BLE_HEADER_SIZE:
        raise Go2BlePacketError(
            f"Go2BlePacket too short to probe size: {len(data)} bytes "
            f"(need {GO2_BLE_HEADER_SIZE})"
        )
    return int.from_bytes(data[3:5], "little")