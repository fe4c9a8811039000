"""CRC-16/Modbus checksum used by the camera's framed BLE protocols."""

from __future__ import annotations

__all__ = ["crc16_modbus"]

_POLY = 0xA001
_INIT = 0xFFFF


def _build_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ _POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _build_table()


def crc16_modbus(data: bytes) -> int:
    """Return the CRC-16/Modbus of *data*.

    Polynomial 0xA001 (0x8005 reflected), initial value 0xFFFF.
    """
    crc = _INIT
    for byte in bytes(data):
        crc = (crc >> 8) ^ _TABLE[(crc ^ byte) & 0xFF]
    return crc