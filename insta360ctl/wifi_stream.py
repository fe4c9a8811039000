"""Live preview streaming over the camera's WiFi TCP protocol.

Stream packets carry a 12-byte header: the packet type (three bytes), the
stream type, and a uint64 LE camera timestamp in microseconds.  Received
packets are demultiplexed into per-type queues; command responses and
notifications that arrive meanwhile go to a response queue.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import BinaryIO

from .wifi_conn import (
    CMD_STOP_LIVE_STREAM,
    PKT_TYPE_KEEPALIVE,
    PKT_TYPE_MESSAGE,
    PKT_TYPE_STREAM,
    PKT_TYPE_SYNC,
    STREAM_TYPE_GYRO,
    STREAM_TYPE_SYNC,
    STREAM_TYPE_VIDEO,
    Conn,
    ParsedResponse,
    WifiProtocolError,
    parse_message_payload,
)

__all__ = [
    "STREAM_HEADER_SIZE",
    "VIDEO_QUEUE_SIZE",
    "GYRO_QUEUE_SIZE",
    "SYNC_QUEUE_SIZE",
    "RESPONSE_QUEUE_SIZE",
    "StreamPacket",
    "Streamer",
]

logger = logging.getLogger(__name__)

STREAM_HEADER_SIZE = 12

VIDEO_QUEUE_SIZE = 64
GYRO_QUEUE_SIZE = 16
SYNC_QUEUE_SIZE = 4
RESPONSE_QUEUE_SIZE = 16

_POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class StreamPacket:
    """One received stream data packet."""

    type: int
    timestamp: int
    data: bytes = b""


def _offer(target: queue.Queue, item) -> bool:
    """Put *item* on *target* unless it is full; return whether it was queued."""
    try:
        target.put_nowait(item)
    except queue.Full:
        return False
    return True


class Streamer:
    """Receives and demultiplexes a live preview stream from a connection."""

    def __init__(self, conn: Conn) -> None:
        self.conn = conn
        self.video: queue.Queue[StreamPacket] = queue.Queue(VIDEO_QUEUE_SIZE)
        self.gyro: queue.Queue[StreamPacket] = queue.Queue(GYRO_QUEUE_SIZE)
        self.sync: queue.Queue[StreamPacket] = queue.Queue(SYNC_QUEUE_SIZE)
        self.responses: queue.Queue[ParsedResponse] = queue.Queue(RESPONSE_QUEUE_SIZE)

    def stop(self) -> int:
        """Send the STOP_LIVE_STREAM command and return its sequence number."""
        return self.conn.send_command(CMD_STOP_LIVE_STREAM, b"")

    def wait_response(self, seq: int, timeout: float) -> ParsedResponse:
        """Read packets until the response with sequence *seq* arrives.

        Other responses are queued, stream data is dispatched, keep-alives
        and sync echoes are ignored.  Raises TimeoutError once *timeout*
        seconds have passed.
        """
        deadline = time.monotonic() + timeout
        try:
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError(f"timed out waiting for response seq={seq}")
                self.conn.set_read_timeout(remaining)
                payload = self.conn.read_raw()
                if len(payload) < 3:
                    continue

                kind = payload[0]
                if kind == PKT_TYPE_MESSAGE:
                    try:
                        resp = parse_message_payload(payload)
                    except WifiProtocolError as exc:
                        logger.warning("failed to parse message: %s", exc)
                        continue
                    if resp.sequence == seq:
                        return resp
                    _offer(self.responses, resp)
                elif kind == PKT_TYPE_STREAM:
                    self.dispatch_stream(payload)
        finally:
            self.conn.set_read_timeout(None)

    def dispatch_stream(self, payload: bytes) -> None:
        """Parse a stream payload and queue it by stream type.

        Payloads shorter than the stream header and unknown stream types are
        dropped, as are packets for a queue that is full.
        """
        payload = bytes(payload)
        if len(payload) < STREAM_HEADER_SIZE:
            return

        packet = StreamPacket(
            type=payload[3],
            timestamp=int.from_bytes(payload[4:STREAM_HEADER_SIZE], "little"),
            data=payload[STREAM_HEADER_SIZE:],
        )
        target = {
            STREAM_TYPE_VIDEO: self.video,
            STREAM_TYPE_GYRO: self.gyro,
            STREAM_TYPE_SYNC: self.sync,
        }.get(packet.type)
        if target is not None:
            _offer(target, packet)

    def read_loop(self, stop_event: threading.Event | None = None) -> None:
        """Read and demultiplex packets until stopped or the connection fails."""
        while stop_event is None or not stop_event.is_set():
            try:
                payload = self.conn.read_raw()
            except (OSError, EOFError, WifiProtocolError) as exc:
                if stop_event is None or not stop_event.is_set():
                    logger.warning("read error: %s", exc)
                return

            if len(payload) < 3:
                continue

            kind = payload[0]
            if kind == PKT_TYPE_STREAM:
                self.dispatch_stream(payload)
            elif kind == PKT_TYPE_MESSAGE:
                try:
                    resp = parse_message_payload(payload)
                except WifiProtocolError as exc:
                    logger.warning("failed to parse message: %s", exc)
                    continue
                if not _offer(self.responses, resp):
                    logger.debug(
                        "response queue full, dropping response code=%d seq=%d",
                        resp.response_code,
                        resp.sequence,
                    )
            elif kind == PKT_TYPE_SYNC:
                logger.debug("received sync packet during streaming")
            elif kind == PKT_TYPE_KEEPALIVE:
                pass

    def start_reading(self, stop_event: threading.Event | None = None) -> threading.Thread:
        """Run read_loop in a background thread and return that thread."""
        thread = threading.Thread(
            target=self.read_loop, args=(stop_event,), name="wifi-stream-reader", daemon=True
        )
        thread.start()
        return thread

    def write_video_to(self, writer: BinaryIO, stop_event: threading.Event | None = None) -> None:
        """Write queued video data to *writer* until *stop_event* is set."""
        while stop_event is None or not stop_event.is_set():
            try:
                packet = self.video.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                continue
            writer.write(packet.data)