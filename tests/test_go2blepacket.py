import pytest

from insta360ctl.crc import crc16_modbus
from insta360ctl.go2blepacket import (
    GO2_BLE_MARKER,
    GO2_BLE_SUBTYPE_MESSAGE,
    GO2_BLE_SUBTYPE_SYNC,
    GO2_BLE_TYPE_MESSAGE,
    Go2BlePacket,
    Go2BlePacketError,
    decode_go2_ble_packet,
    encode_go2_ble_message_packet,
    encode_go2_ble_packet2,
    encode_go2_ble_sync_packet,
    go2_ble_probe_packet_size,
)
from insta360ctl.header import decode_go2_message, encode_go2_message
from insta360ctl.messagecode import MessageCode


def test_encode_decode_message_packet():
    inner = encode_go2_message(MessageCode.TAKE_PHOTO, 0, b"")
    packet = encode_go2_ble_message_packet(inner)

    assert packet[0] == GO2_BLE_MARKER == 0xFF
    assert packet[1] == GO2_BLE_TYPE_MESSAGE == 0x07
    assert packet[2] == GO2_BLE_SUBTYPE_MESSAGE == 0x40

    decoded = decode_go2_ble_packet(packet)
    assert decoded.type_byte == GO2_BLE_TYPE_MESSAGE
    assert decoded.subtype_byte == GO2_BLE_SUBTYPE_MESSAGE
    assert decoded.data == inner

    header, _payload = decode_go2_message(decoded.data)
    assert header.command_code == MessageCode.TAKE_PHOTO
    assert header.payload_length == 0


def test_encode_decode_sync_packet():
    sync_data = bytes(7)
    packet = encode_go2_ble_sync_packet(sync_data)

    assert packet[0] == GO2_BLE_MARKER
    assert packet[1] == GO2_BLE_TYPE_MESSAGE
    assert packet[2] == GO2_BLE_SUBTYPE_SYNC == 0x41

    decoded = decode_go2_ble_packet(packet)
    assert decoded == Go2BlePacket(
        data=sync_data, type_byte=GO2_BLE_TYPE_MESSAGE, subtype_byte=GO2_BLE_SUBTYPE_SYNC
    )


def test_encode_decode_packet2():
    auth_id = b"ABCDEF"
    packet = encode_go2_ble_packet2(0x0C, 0x02, auth_id)

    assert packet[0] == GO2_BLE_MARKER
    assert packet[1] == 0x0C
    assert packet[2] == 0x02

    decoded = decode_go2_ble_packet(packet)
    assert decoded.type_byte == 0x0C
    assert decoded.subtype_byte == 0x02
    assert decoded.data == auth_id


def test_wire_layout():
    packet = encode_go2_ble_message_packet(b"\x01\x02\x03")
    assert packet[:5] == bytes([0xFF, 0x07, 0x40, 0x03, 0x00])
    assert packet[5:8] == b"\x01\x02\x03"
    assert len(packet) == 3 + 7
    assert int.from_bytes(packet[-2:], "little") == crc16_modbus(packet[:-2])


def test_crc_validation():
    packet = bytearray(encode_go2_ble_message_packet(b"\x01\x02\x03"))
    packet[-1] ^= 0xFF
    with pytest.raises(Go2BlePacketError, match="CRC mismatch"):
        decode_go2_ble_packet(bytes(packet))


def test_too_short():
    with pytest.raises(Go2BlePacketError, match="too short"):
        decode_go2_ble_packet(b"\xff\x07")


def test_bad_marker():
    packet = bytearray(encode_go2_ble_message_packet(b"\x01"))
    packet[0] = 0xFE
    with pytest.raises(Go2BlePacketError, match="missing marker"):
        decode_go2_ble_packet(bytes(packet))


def test_declared_size_exceeds_packet():
    packet = encode_go2_ble_message_packet(b"\x01\x02\x03\x04")
    with pytest.raises(Go2BlePacketError, match="declares 4 inner bytes"):
        decode_go2_ble_packet(packet[:-3])


def test_probe_packet_size():
    packet = encode_go2_ble_message_packet(bytes(42))
    assert go2_ble_probe_packet_size(packet) == 42


def test_probe_packet_size_too_short():
    with pytest.raises(Go2BlePacketError):
        go2_ble_probe_packet_size(b"\xff\x07\x40")


def test_full_roundtrip():
    payload = b"\x01\x02\x03\x04"
    inner = encode_go2_message(MessageCode.GET_BATTERY_INFO, 1, payload)
    packet = encode_go2_ble_message_packet(inner)

    decoded = decode_go2_ble_packet(packet)
    assert decoded.subtype_byte == GO2_BLE_SUBTYPE_MESSAGE

    header, got_payload = decode_go2_message(decoded.data)
    assert header.command_code == MessageCode.GET_BATTERY_INFO
    assert header.payload_length == 4
    assert got_payload == payload


def test_trailing_bytes_ignored():
    packet = encode_go2_ble_message_packet(b"\x09\x08")
    decoded = decode_go2_ble_packet(packet + b"\x00\x00")
    assert decoded.data == b"\x09\x08"


def test_oversized_data_rejected():
    with pytest.raises(Go2BlePacketError, match="too large"):
        encode_go2_ble_message_packet(bytes(0x10000))