"""Connection to the camera's proprietary WiFi TCP protocol.

The camera runs a WiFi access point (192.168.42.1) and serves a TCP protocol
on port 6666 that multiplexes commands, responses, keep-alives and stream
data on one connection.  Every packet is prefixed with a uint32 LE length
that counts the four prefix bytes themselves.
"""

from __future__ import annotations

import itertools
import logging
import socket
import threading
import time
from dataclasses import dataclass

__all__ = [
    "DEFAULT_ADDR",
    "DEFAULT_PORT",
    "SYNC_MAGIC",
    "KEEPALIVE_INTERVAL",
    "MAX_PACKET_SIZE",
    "READ_BUF_SIZE",
    "HANDSHAKE_TIMEOUT",
    "PKT_TYPE_STREAM",
    "PKT_TYPE_MESSAGE",
    "PKT_TYPE_KEEPALIVE",
    "PKT_TYPE_SYNC",
    "STREAM_TYPE_VIDEO",
    "STREAM_TYPE_GYRO",
    "STREAM_TYPE_SYNC",
    "COMMAND_HEADER_SIZE",
    "CMD_BEGIN",
    "CMD_START_LIVE_STREAM",
    "CMD_STOP_LIVE_STREAM",
    "CMD_TAKE_PICTURE",
    "CMD_START_CAPTURE",
    "CMD_STOP_CAPTURE",
    "CMD_CANCEL_CAPTURE",
    "CMD_SET_OPTIONS",
    "CMD_GET_OPTIONS",
    "CMD_GET_FILE_LIST",
    "CMD_GET_CAPTURE_STATUS",
    "CMD_SET_WIFI_CONNECTION_INFO",
    "CMD_GET_WIFI_CONNECTION_INFO",
    "RESP_OK",
    "RESP_ERROR",
    "NOTIFY_BATTERY_LOW",
    "NOTIFY_STORAGE_UPDATE",
    "NOTIFY_STORAGE_FULL",
    "NOTIFY_CAPTURE_STOPPED",
    "NOTIFY_CURRENT_CAPTURE_STATUS",
    "NOTIFY_WIFI_CONNECTION_RESULT",
    "WifiProtocolError",
    "ParsedResponse",
    "build_command_packet",
    "parse_message_payload",
    "Conn",
    "dial",
]

logger = logging.getLogger(__name__)

DEFAULT_ADDR = "192.168.42.1"
DEFAULT_PORT = 6666

SYNC_MAGIC = b"syNceNdinS"
KEEPALIVE_INTERVAL = 2.0
HANDSHAKE_TIMEOUT = 5.0
MAX_PACKET_SIZE = 1 << 20
READ_BUF_SIZE = 64 * 1024

# Packet types (first byte of a payload).
PKT_TYPE_STREAM = 0x01
PKT_TYPE_MESSAGE = 0x04
PKT_TYPE_KEEPALIVE = 0x05
PKT_TYPE_SYNC = 0x06

# Stream types (byte 3 of a stream payload).
STREAM_TYPE_VIDEO = 0x20
STREAM_TYPE_GYRO = 0x30
STREAM_TYPE_SYNC = 0x40

# WiFi command codes.
CMD_BEGIN = 0
CMD_START_LIVE_STREAM = 1
CMD_STOP_LIVE_STREAM = 2
CMD_TAKE_PICTURE = 3
CMD_START_CAPTURE = 4
CMD_STOP_CAPTURE = 5
CMD_CANCEL_CAPTURE = 6
CMD_SET_OPTIONS = 7
CMD_GET_OPTIONS = 8
CMD_GET_FILE_LIST = 13
CMD_GET_CAPTURE_STATUS = 15
CMD_SET_WIFI_CONNECTION_INFO = 112
CMD_GET_WIFI_CONNECTION_INFO = 113

# Response and notification codes.
RESP_OK = 200
RESP_ERROR = 500
NOTIFY_BATTERY_LOW = 8196
NOTIFY_STORAGE_UPDATE = 8198
NOTIFY_STORAGE_FULL = 8199
NOTIFY_CAPTURE_STOPPED = 8201
NOTIFY_CURRENT_CAPTURE_STATUS = 8208
NOTIFY_WIFI_CONNECTION_RESULT = 8232

COMMAND_HEADER_SIZE = 12

_LENGTH_PREFIX = 4
_SYNC_PAYLOAD = bytes([PKT_TYPE_SYNC, 0x00, 0x00]) + SYNC_MAGIC
_KEEPALIVE_PAYLOAD = bytes([PKT_TYPE_KEEPALIVE, 0x00, 0x00])

_seq_counter = itertools.count(2)
_seq_lock = threading.Lock()


def _next_seq() -> int:
    with _seq_lock:
        return next(_seq_counter)


class WifiProtocolError(Exception):
    """Raised when the camera's WiFi protocol is violated."""


@dataclass(frozen=True)
class ParsedResponse:
    """A MESSAGE packet received from the camera."""

    response_code: int
    sequence: int
    body: bytes = b""

    def is_ok(self) -> bool:
        """True if the response code signals success."""
        return self.response_code == RESP_OK

    def is_error(self) -> bool:
        """True if the response code signals an error."""
        return self.response_code == RESP_ERROR

    def is_notification(self) -> bool:
        """True if this is a notification sent by the camera on its own."""
        return self.response_code >= 8000


def build_command_packet(cmd_code: int, seq: int, body: bytes = b"") -> bytes:
    """Build a MESSAGE payload: 12-byte header followed by *body*.

    Header: packet type (0x04 0x00 0x00), uint16 LE code, 0x02,
    uint24 LE sequence, 0x80, two reserved zero bytes.
    """
    return (
        bytes([PKT_TYPE_MESSAGE, 0x00, 0x00])
        + int(cmd_code).to_bytes(2, "little")
        + b"\x02"
        + (int(seq) & 0xFFFFFF).to_bytes(3, "little")
        + b"\x80\x00\x00"
        + bytes(body)
    )


def parse_message_payload(payload: bytes) -> ParsedResponse:
    """Parse a MESSAGE payload into a ParsedResponse."""
    payload = bytes(payload)
    if len(payload) < COMMAND_HEADER_SIZE:
        raise WifiProtocolError(
            f"message payload too short: {len(payload)} < {COMMAND_HEADER_SIZE}"
        )
    return ParsedResponse(
        response_code=int.from_bytes(payload[3:5], "little"),
        sequence=int.from_bytes(payload[6:9], "little"),
        body=payload[COMMAND_HEADER_SIZE:],
    )


class Conn:
    """A framed connection to the camera over a connected stream socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._write_lock = threading.Lock()
        self._read_lock = threading.Lock()
        self._last_send: float | None = None
        self._buf = bytearray()
        self._keepalive_stop: threading.Event | None = None
        self._keepalive_thread: threading.Thread | None = None

    def _write_packet(self, payload: bytes) -> None:
        payload = bytes(payload)
        header = (len(payload) + _LENGTH_PREFIX).to_bytes(_LENGTH_PREFIX, "little")
        with self._write_lock:
            self._last_send = time.monotonic()
            self._sock.sendall(header + payload)

    def _fill(self, size: int) -> None:
        while len(self._buf) < size:
            chunk = self._sock.recv(READ_BUF_SIZE)
            if not chunk:
                raise EOFError("connection closed by peer")
            self._buf += chunk

    def _read_packet(self) -> bytes:
        with self._read_lock:
            self._fill(_LENGTH_PREFIX)
            pkt_len = int.from_bytes(self._buf[:_LENGTH_PREFIX], "little")
            if pkt_len < _LENGTH_PREFIX:
                raise WifiProtocolError(f"invalid packet length: {pkt_len}")
            if pkt_len > MAX_PACKET_SIZE:
                raise WifiProtocolError(f"packet too large: {pkt_len} bytes")
            self._fill(pkt_len)
            payload = bytes(self._buf[_LENGTH_PREFIX:pkt_len])
            del self._buf[:pkt_len]
            return payload

    def handshake(self) -> None:
        """Send the SYNC packet and check that the camera echoes it back."""
        try:
            self._write_packet(_SYNC_PAYLOAD)
        except OSError as exc:
            raise WifiProtocolError(f"send sync: {exc}") from exc
        logger.debug("sync packet sent, waiting for echo...")

        previous_timeout = self._sock.gettimeout()
        self._sock.settimeout(HANDSHAKE_TIMEOUT)
        try:
            resp = self._read_packet()
        finally:
            self._sock.settimeout(previous_timeout)

        if len(resp) < 3 or resp[0] != PKT_TYPE_SYNC:
            raise WifiProtocolError(f"unexpected response type: {resp.hex().upper()}")
        if len(resp) != len(_SYNC_PAYLOAD):
            raise WifiProtocolError(
                f"sync response length mismatch: got {len(resp)}, want {len(_SYNC_PAYLOAD)}"
            )
        for index, (got, want) in enumerate(zip(resp, _SYNC_PAYLOAD)):
            if got != want:
                raise WifiProtocolError(
                    f"sync response mismatch at byte {index}: got 0x{got:02X}, want 0x{want:02X}"
                )

    def start_keepalive(self) -> None:
        """Start sending keep-alive packets in a background thread."""
        if self._keepalive_thread is not None and self._keepalive_thread.is_alive():
            return
        stop = threading.Event()
        self._keepalive_stop = stop
        self._keepalive_thread = threading.Thread(
            target=self._keepalive_loop, args=(stop,), name="wifi-keepalive", daemon=True
        )
        self._keepalive_thread.start()

    def _keepalive_loop(self, stop: threading.Event) -> None:
        while not stop.wait(KEEPALIVE_INTERVAL):
            with self._write_lock:
                last = self._last_send
            if last is not None and time.monotonic() - last < KEEPALIVE_INTERVAL:
                continue
            try:
                self._write_packet(_KEEPALIVE_PAYLOAD)
            except OSError as exc:
                if not stop.is_set():
                    logger.warning("keep-alive send failed: %s", exc)
                return

    def send_raw(self, payload: bytes) -> None:
        """Send one payload with its length prefix."""
        self._write_packet(payload)

    def read_raw(self) -> bytes:
        """Read one payload, without its length prefix."""
        return self._read_packet()

    def send_command(self, cmd_code: int, body: bytes = b"") -> int:
        """Send a command with an encoded body and return its sequence number."""
        seq = _next_seq()
        packet = build_command_packet(cmd_code, seq, body)
        try:
            self._write_packet(packet)
        except OSError as exc:
            raise WifiProtocolError(f"send command 0x{int(cmd_code):04X}: {exc}") from exc
        return seq

    def set_read_timeout(self, timeout: float | None) -> None:
        """Set the timeout of blocking socket operations; None waits forever."""
        self._sock.settimeout(timeout)

    def remote_addr(self):
        """Return the address of the camera end of the connection."""
        return self._sock.getpeername()

    def close(self) -> None:
        """Stop the keep-alive thread and close the socket."""
        if self._keepalive_stop is not None:
            self._keepalive_stop.set()
        self._sock.close()
        thread = self._keepalive_thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)

    def __enter__(self) -> Conn:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def dial(addr: str = DEFAULT_ADDR, port: int = DEFAULT_PORT, timeout: float = 10.0) -> Conn:
    """Connect to the camera, perform the sync handshake and start keep-alives."""
    if not addr:
        addr = DEFAULT_ADDR
    if not port:
        port = DEFAULT_PORT

    logger.info("connecting to %s:%d...", addr, port)
    sock = socket.create_connection((addr, port), timeout=timeout)
    sock.settimeout(None)
    conn = Conn(sock)
    try:
        conn.handshake()
    except (OSError, EOFError, WifiProtocolError) as exc:
        sock.close()
        raise WifiProtocolError(f"sync handshake: {exc}") from exc

    logger.info("sync handshake complete")
    conn.start_keepalive()
    return conn