"""BLE service and characteristic identifiers used by the cameras.

Standard 16-bit short IDs expand to full UUIDs on the Bluetooth base UUID
``0000XXXX-0000-1000-8000-00805F9B34FB``.
"""

from __future__ import annotations

import uuid

__all__ = [
    "UUID_REMOTE_SERVICE",
    "UUID_REMOTE_CHAR_WRITE",
    "UUID_REMOTE_CHAR_NOTIFY",
    "UUID_REMOTE_CHAR_READ",
    "UUID_DIRECT_SERVICE",
    "UUID_DIRECT_CHAR_WRITE",
    "UUID_DIRECT_CHAR_NOTIFY",
    "UUID_DIRECT_SEC_SERVICE",
    "UUID_DIRECT_SEC_CHAR_WRITE",
    "UUID_DIRECT_SEC_CHAR_NOTIFY1",
    "UUID_DIRECT_SEC_CHAR_NOTIFY2",
    "UUID_DIRECT_SEC_CHAR_NOTIFY3",
    "UUID_AE_SERVICE",
    "UUID_AE_CHAR_WRITE",
    "UUID_AE_CHAR_NOTIFY",
    "UUID_GENERIC_ACCESS",
    "UUID_GATT",
    "UUID_DEVICE_INFO",
    "UUID_BATTERY",
    "UUID_BATTERY_LEVEL",
    "UUID_REMOTE_SECONDARY_SERVICE",
    "UUID_REMOTE_CHAR_DEVICE_NAME",
    "UUID_REMOTE_CHAR_FIRMWARE_VERSION",
    "UUID_REMOTE_CHAR_PERIPHERAL_INFO1",
    "UUID_REMOTE_CHAR_PERIPHERAL_INFO2",
    "full_uuid",
]

# GPS Remote emulation.
UUID_REMOTE_SERVICE = 0xCE80
UUID_REMOTE_CHAR_WRITE = 0xCE81  # camera -> remote data
UUID_REMOTE_CHAR_NOTIFY = 0xCE82  # remote -> camera commands
UUID_REMOTE_CHAR_READ = 0xCE83  # static: 0x02 0x01

# Direct camera control.
UUID_DIRECT_SERVICE = 0xBE80
UUID_DIRECT_CHAR_WRITE = 0xBE81  # app -> camera commands
UUID_DIRECT_CHAR_NOTIFY = 0xBE82  # camera -> app responses

# Secondary direct control service (GO 3).
UUID_DIRECT_SEC_SERVICE = 0xB000
UUID_DIRECT_SEC_CHAR_WRITE = 0xB001
UUID_DIRECT_SEC_CHAR_NOTIFY1 = 0xB002
UUID_DIRECT_SEC_CHAR_NOTIFY2 = 0xB003
UUID_DIRECT_SEC_CHAR_NOTIFY3 = 0xB004

# AE00 camera service.
UUID_AE_SERVICE = 0xAE00
UUID_AE_CHAR_WRITE = 0xAE01
UUID_AE_CHAR_NOTIFY = 0xAE02

# Standard BLE services.
UUID_GENERIC_ACCESS = 0x1800
UUID_GATT = 0x1801
UUID_DEVICE_INFO = 0x180A
UUID_BATTERY = 0x180F
UUID_BATTERY_LEVEL = 0x2A19

# D0FF secondary service of the remote uses custom 128-bit UUIDs.
UUID_REMOTE_SECONDARY_SERVICE = "0000d0ff-3c17-d293-8e48-14fe2e4da212"
UUID_REMOTE_CHAR_DEVICE_NAME = "0000ffd1-3c17-d293-8e48-14fe2e4da212"
UUID_REMOTE_CHAR_FIRMWARE_VERSION = "0000ffd2-3c17-d293-8e48-14fe2e4da212"
UUID_REMOTE_CHAR_PERIPHERAL_INFO1 = "0000ffd3-3c17-d293-8e48-14fe2e4da212"
UUID_REMOTE_CHAR_PERIPHERAL_INFO2 = "0000ffd4-3c17-d293-8e48-14fe2e4da212"

_BASE_UUID = uuid.UUID("00000000-0000-1000-8000-00805F9B34FB")


def full_uuid(short_id: int) -> str:
    """Expand a 16-bit short ID to its full 128-bit UUID string (lower case)."""
    value = int(short_id)
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"short UUID out of range: {value}")
    return str(uuid.UUID(int=_BASE_UUID.int | (value << 96)))