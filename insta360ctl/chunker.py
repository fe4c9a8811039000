"""Splitting messages into BLE-sized packets and joining them back."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["BLE_MAX_PACKET_SIZE", "chunk_for_ble", "reassemble"]

# Standard BLE 4.x ATT payload size for GATT writes.
BLE_MAX_PACKET_SIZE = 20


def chunk_for_ble(msg: bytes, max_size: int = BLE_MAX_PACKET_SIZE) -> list[bytes]:
    """Split *msg* into packets of at most *max_size* bytes.

    A non-positive *max_size* means BLE_MAX_PACKET_SIZE.  An empty message
    gives an empty list.
    """
    if max_size <= 0:
        max_size = BLE_MAX_PACKET_SIZE
    data = bytes(msg)
    return [data[offset:offset + max_size] for offset in range(0, len(data), max_size)]


def reassemble(chunks: Iterable[bytes] | None) -> bytes:
    """Concatenate packets, in order, back into one message."""
    if chunks is None:
        return b""
    return b"".join(bytes(chunk) for chunk in chunks)