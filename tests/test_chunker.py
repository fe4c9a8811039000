import pytest

from insta360ctl.chunker import BLE_MAX_PACKET_SIZE, chunk_for_ble, reassemble


@pytest.mark.parametrize(
    "msg_len, max_size, want_count",
    [
        (0, 20, 0),
        (15, 20, 1),
        (20, 20, 1),
        (25, 20, 2),
        (40, 20, 2),
        (55, 20, 3),
        (1, 20, 1),
        (50, 10, 5),
    ],
    ids=[
        "empty",
        "fits in one packet",
        "exact one packet",
        "two packets",
        "exact two packets",
        "three packets",
        "single byte",
        "custom max size",
    ],
)
def test_chunk_for_ble(msg_len, max_size, want_count):
    msg = bytes(i % 256 for i in range(msg_len))
    chunks = chunk_for_ble(msg, max_size)
    assert len(chunks) == want_count
    for chunk in chunks:
        assert 0 < len(chunk) <= max_size
    assert reassemble(chunks) == msg


def test_chunk_for_ble_default_max_size():
    chunks = chunk_for_ble(bytes(45), 0)
    assert BLE_MAX_PACKET_SIZE == 20
    assert [len(c) for c in chunks] == [20, 20, 5]


def test_chunk_for_ble_negative_max_size_uses_default():
    chunks = chunk_for_ble(bytes(45), -3)
    assert [len(c) for c in chunks] == [20, 20, 5]


def test_chunk_for_ble_omitted_max_size_uses_default():
    assert [len(c) for c in chunk_for_ble(bytes(41))] == [20, 20, 1]


def test_reassemble_empty():
    assert reassemble(None) == b""
    assert reassemble([]) == b""


def test_reassemble_preserves_data():
    chunks = [b"\x01\x02\x03", b"\x04\x05", b"\x06"]
    assert reassemble(chunks) == b"\x01\x02\x03\x04\x05\x06"


def test_chunk_for_ble_data_integrity():
    msg = bytearray(range(50))
    chunks = chunk_for_ble(msg, 20)
    assert reassemble(chunks) == bytes(range(50))

    # Chunks are independent copies of the source buffer.
    msg[0] = 0xFF
    assert chunks[0][0] == 0