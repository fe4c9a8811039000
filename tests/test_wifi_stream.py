import socket
import threading

import pytest

from insta360ctl.wifi_conn import (
    CMD_START_LIVE_STREAM,
    CMD_STOP_LIVE_STREAM,
    PKT_TYPE_KEEPALIVE,
    PKT_TYPE_MESSAGE,
    PKT_TYPE_STREAM,
    PKT_TYPE_SYNC,
    RESP_OK,
    STREAM_TYPE_GYRO,
    STREAM_TYPE_SYNC,
    STREAM_TYPE_VIDEO,
    Conn,
    build_command_packet,
    dial,
    parse_message_payload,
)
from insta360ctl.wifi_stream import STREAM_HEADER_SIZE, StreamPacket, Streamer


def _write_packet(sock, payload):
    sock.sendall((len(payload) + 4).to_bytes(4, "little") + payload)


def _recv_exact(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise EOFError
        data += chunk
    return data


def _read_packet(sock):
    length = int.from_bytes(_recv_exact(sock, 4), "little")
    return _recv_exact(sock, length - 4)


def _stream_packet(stream_type, timestamp, data):
    return (
        bytes([PKT_TYPE_STREAM, 0x00, 0x00, stream_type])
        + timestamp.to_bytes(8, "little")
        + data
    )


def _ok_response(seq):
    return build_command_packet(RESP_OK, seq)


@pytest.fixture
def pair():
    client, server = socket.socketpair()
    conn = Conn(client)
    yield conn, server
    conn.close()
    server.close()


def _offline_streamer():
    client, server = socket.socketpair()
    server.close()
    return Streamer(Conn(client)), client


def test_dispatch_video_gyro_sync():
    streamer, sock = _offline_streamer()
    try:
        payload = _stream_packet(
            STREAM_TYPE_VIDEO, 12345678, bytes([0xAA, 0xBB, 0xCC, 0xDD, 0xEE, 0xFF, 0x11, 0x22])
        )
        streamer.dispatch_stream(payload)
        pkt = streamer.video.get(timeout=1)
        assert pkt.type == STREAM_TYPE_VIDEO
        assert pkt.timestamp == 12345678
        assert pkt.data == bytes([0xAA, 0xBB, 0xCC, 0xDD, 0xEE, 0xFF, 0x11, 0x22])

        streamer.dispatch_stream(_stream_packet(STREAM_TYPE_GYRO, 99999, b"\x42"))
        pkt = streamer.gyro.get(timeout=1)
        assert pkt == StreamPacket(type=STREAM_TYPE_GYRO, timestamp=99999, data=b"\x42")

        streamer.dispatch_stream(_stream_packet(STREAM_TYPE_SYNC, 55555, b""))
        pkt = streamer.sync.get(timeout=1)
        assert pkt.type == STREAM_TYPE_SYNC
        assert pkt.timestamp == 55555
        assert pkt.data == b""
    finally:
        sock.close()


def test_dispatch_too_short_is_dropped():
    streamer, sock = _offline_streamer()
    try:
        streamer.dispatch_stream(bytes([0x01, 0x00, 0x00]))
        assert streamer.video.qsize() == 0
        assert streamer.gyro.qsize() == 0
        assert streamer.sync.qsize() == 0
    finally:
        sock.close()


def test_dispatch_unknown_stream_type_is_dropped():
    streamer, sock = _offline_streamer()
    try:
        streamer.dispatch_stream(_stream_packet(0x77, 1, b"abc"))
        assert (streamer.video.qsize(), streamer.gyro.qsize(), streamer.sync.qsize()) == (0, 0, 0)
    finally:
        sock.close()


def test_dispatch_drops_when_queue_full():
    streamer, sock = _offline_streamer()
    try:
        for ts in range(6):
            streamer.dispatch_stream(_stream_packet(STREAM_TYPE_SYNC, ts, b""))
        assert streamer.sync.qsize() == 4
        assert [streamer.sync.get().timestamp for _ in range(4)] == [0, 1, 2, 3]
    finally:
        sock.close()


def test_header_size_is_twelve():
    streamer, sock = _offline_streamer()
    try:
        payload = _stream_packet(STREAM_TYPE_VIDEO, 7, b"xyz")
        assert len(payload) == STREAM_HEADER_SIZE + 3
        streamer.dispatch_stream(payload)
        assert streamer.video.get(timeout=1).data == b"xyz"
    finally:
        sock.close()


class _CollectingWriter:
    def __init__(self, stop_event, expected):
        self.data = bytearray()
        self.stop_event = stop_event
        self.expected = expected

    def write(self, chunk):
        self.data += chunk
        if len(self.data) >= self.expected:
            self.stop_event.set()
        return len(chunk)


def test_write_video_to():
    streamer, sock = _offline_streamer()
    try:
        streamer.video.put(StreamPacket(type=STREAM_TYPE_VIDEO, timestamp=0, data=b"frame1"))
        streamer.video.put(StreamPacket(type=STREAM_TYPE_VIDEO, timestamp=1, data=b"frame2"))
        stop = threading.Event()
        writer = _CollectingWriter(stop, 12)
        streamer.write_video_to(writer, stop)
        assert bytes(writer.data) == b"frame1frame2"
    finally:
        sock.close()


def test_write_video_to_returns_when_already_stopped():
    streamer, sock = _offline_streamer()
    try:
        streamer.video.put(StreamPacket(type=STREAM_TYPE_VIDEO, timestamp=0, data=b"frame1"))
        stop = threading.Event()
        stop.set()
        writer = _CollectingWriter(threading.Event(), 100)
        streamer.write_video_to(writer, stop)
        assert bytes(writer.data) == b""
        assert streamer.video.qsize() == 1
    finally:
        sock.close()


def test_wait_response_routes_other_packets(pair):
    conn, server = pair
    streamer = Streamer(conn)
    _write_packet(server, bytes([PKT_TYPE_KEEPALIVE, 0x00, 0x00]))
    _write_packet(server, bytes([PKT_TYPE_SYNC, 0x00, 0x00]))
    _write_packet(server, _stream_packet(STREAM_TYPE_VIDEO, 10, b"vid"))
    _write_packet(server, build_command_packet(RESP_OK, 99, b"other"))
    _write_packet(server, build_command_packet(RESP_OK, 42, b"\x10\x01"))

    resp = streamer.wait_response(42, 5.0)
    assert resp.sequence == 42
    assert resp.is_ok()
    assert resp.body == b"\x10\x01"

    queued = streamer.responses.get(timeout=1)
    assert queued.sequence == 99
    assert queued.body == b"other"
    assert streamer.video.get(timeout=1).data == b"vid"


def test_wait_response_times_out(pair):
    conn, _server = pair
    streamer = Streamer(conn)
    with pytest.raises(TimeoutError):
        streamer.wait_response(5, 0.2)


def test_wait_response_connection_closed(pair):
    conn, server = pair
    streamer = Streamer(conn)
    server.shutdown(socket.SHUT_WR)
    with pytest.raises(EOFError):
        streamer.wait_response(5, 2.0)


def test_read_loop_demultiplexes_until_eof(pair):
    conn, server = pair
    streamer = Streamer(conn)
    _write_packet(server, _stream_packet(STREAM_TYPE_VIDEO, 1, b"v1"))
    _write_packet(server, _stream_packet(STREAM_TYPE_GYRO, 2, b"g1"))
    _write_packet(server, bytes([PKT_TYPE_KEEPALIVE, 0x00, 0x00]))
    _write_packet(server, bytes([PKT_TYPE_MESSAGE, 0x00, 0x00]))
    _write_packet(server, bytes([PKT_TYPE_MESSAGE, 0x00, 0x00, 0x01]))
    _write_packet(server, build_command_packet(8196, 0))
    _write_packet(server, _stream_packet(STREAM_TYPE_SYNC, 3, b""))
    server.shutdown(socket.SHUT_WR)

    streamer.read_loop(threading.Event())

    assert streamer.video.get_nowait() == StreamPacket(STREAM_TYPE_VIDEO, 1, b"v1")
    assert streamer.gyro.get_nowait() == StreamPacket(STREAM_TYPE_GYRO, 2, b"g1")
    assert streamer.sync.get_nowait() == StreamPacket(STREAM_TYPE_SYNC, 3, b"")
    notification = streamer.responses.get_nowait()
    assert notification.response_code == 8196
    assert notification.is_notification()
    assert streamer.responses.qsize() == 0


def test_read_loop_returns_immediately_when_stopped(pair):
    conn, server = pair
    streamer = Streamer(conn)
    _write_packet(server, _stream_packet(STREAM_TYPE_VIDEO, 1, b"v1"))
    stop = threading.Event()
    stop.set()
    streamer.read_loop(stop)
    assert streamer.video.qsize() == 0


def test_stop_sends_stop_live_stream(pair):
    conn, server = pair
    streamer = Streamer(conn)
    seq = streamer.stop()
    server.settimeout(5)
    resp = parse_message_payload(_read_packet(server))
    assert resp.response_code == CMD_STOP_LIVE_STREAM
    assert resp.sequence == seq
    assert resp.body == b""


def test_full_stream_session():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    video_data = bytes([0x00, 0x00, 0x00, 0x01, 0x65, 0xAA, 0xBB, 0xCC])

    def camera():
        sconn, _ = listener.accept()
        sconn.settimeout(10)
        with sconn:
            _write_packet(sconn, _read_packet(sconn))
            while True:
                payload = _read_packet(sconn)
                if payload[0] == PKT_TYPE_KEEPALIVE:
                    continue
                if payload[0] == PKT_TYPE_MESSAGE:
                    request = parse_message_payload(payload)
                    if request.response_code == CMD_START_LIVE_STREAM:
                        _write_packet(sconn, _ok_response(request.sequence))
                        for i in range(3):
                            _write_packet(
                                sconn, _stream_packet(STREAM_TYPE_VIDEO, i * 33333, video_data)
                            )
                        return
                return

    server_thread = threading.Thread(target=camera, daemon=True)
    server_thread.start()

    conn = dial("127.0.0.1", port, 5.0)
    stop = threading.Event()
    try:
        streamer = Streamer(conn)
        seq = conn.send_command(CMD_START_LIVE_STREAM)
        resp = streamer.wait_response(seq, 5.0)
        assert resp.is_ok()

        streamer.start_reading(stop)
        packets = [streamer.video.get(timeout=5) for _ in range(3)]
        assert [p.type for p in packets] == [STREAM_TYPE_VIDEO] * 3
        assert [p.timestamp for p in packets] == [0, 33333, 66666]
        assert b"".join(p.data for p in packets) == video_data * 3
    finally:
        stop.set()
        conn.close()
        server_thread.join(timeout=5)
        listener.close()