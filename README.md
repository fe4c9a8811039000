# insta360ctl

Encoders, decoders and a TCP client for the protocols spoken by Insta360
cameras. The package has no runtime dependencies beyond the standard library.

## Modules

- `insta360ctl.messagecode` – `MessageCode`, the command, notification and
  response codes shared by the BLE and WiFi protocols, and `code_name`, which
  gives a code's display name (`Unknown(0xNNNN)` for codes it does not know).
- `insta360ctl.crc` – `crc16_modbus`, the CRC-16/Modbus checksum used by the
  framed BLE messages.
- `insta360ctl.chunker` – `chunk_for_ble` splits a message into packets of at
  most 20 bytes (or a size you give); `reassemble` joins them back.
- `insta360ctl.ffframe` – `encode_ff_frame` and `decode_ff_frame` for the
  padded, checksummed FF frames used by GO 2, GO 3 and GO 3S, decoded into an
  `FFFrame`.
- `insta360ctl.header` – `Header` with `encode` (16-byte header used by X3 /
  ONE R / ONE RS) and `encode_go2` (inner header used by GO 2 / GO 3), plus
  `encode_message`, `decode_message`, `encode_go2_message`,
  `decode_go2_message`, `decode_header` and `decode_go2_header`.
- `insta360ctl.go2blepacket` – the GO 2 / GO 3 BLE envelope:
  `encode_go2_ble_message_packet`, `encode_go2_ble_sync_packet`,
  `encode_go2_ble_packet2`, `decode_go2_ble_packet` (returns a
  `Go2BlePacket` with `data`, `type_byte` and `subtype_byte`) and
  `go2_ble_probe_packet_size`.
- `insta360ctl.uuids` – GATT service and characteristic identifiers, and
  `full_uuid`, which expands a 16-bit short ID on the Bluetooth base UUID.
- `insta360ctl.wifi_conn` – the length-prefixed TCP protocol on port 6666:
  `dial`, `Conn`, `build_command_packet`, `parse_message_payload` and
  `ParsedResponse`.
- `insta360ctl.wifi_stream` – `Streamer`, which sorts incoming live preview
  packets into queues, and `StreamPacket`.

## Checksums and BLE chunks

```python
from insta360ctl.crc import crc16_modbus
from insta360ctl.chunker import chunk_for_ble, reassemble

checksum = crc16_modbus(b"\x01\x02\x03")

message = bytes(range(45))
chunks = chunk_for_ble(message, 20)   # three chunks: 20, 20 and 5 bytes
assert reassemble(chunks) == message
```

A maximum size of `0` or less uses the default of 20 bytes.

## Message codes

```python
from insta360ctl.messagecode import MessageCode, code_name

print(code_name(0x03))              # TakePicture
print(str(MessageCode.RESPONSE_OK))  # OK(200)
print(code_name(0xFE))              # Unknown(0x00FE)
```

## Messages and envelopes

```python
from insta360ctl.header import encode_go2_message, decode_go2_message
from insta360ctl.go2blepacket import (
    encode_go2_ble_message_packet,
    decode_go2_ble_packet,
)

inner = encode_go2_message(0x03, 1, b"")
packet = encode_go2_ble_message_packet(inner)

decoded = decode_go2_ble_packet(packet)
header, payload = decode_go2_message(decoded.data)
```

Decoders raise an exception when input is too short, carries the wrong marker
or fails its checksum: `HeaderError` (and its subclass `UnexpectedEOFError`
for truncated input), `Go2BlePacketError` and `FFFrameError`, all subclasses
of `ValueError`.

## Talking to a camera over WiFi

Join the camera's own access point, then:

```python
from insta360ctl.wifi_conn import CMD_GET_OPTIONS, dial

with dial("192.168.42.1", 6666, 10.0) as conn:
    seq = conn.send_command(CMD_GET_OPTIONS, b"")
    reply = conn.read_raw()
```

`dial` connects, performs the sync handshake (raising `WifiProtocolError` if
the camera does not echo it) and sends keep-alives in a background thread
until the connection is closed. `send_command` returns the sequence number it
used; `parse_message_payload` turns a MESSAGE payload into a `ParsedResponse`
with `is_ok`, `is_error` and `is_notification`.

### Live preview

A `Streamer` wraps a connection. After sending the start-live-stream command
(`CMD_START_LIVE_STREAM`) with a body you have encoded yourself:

- `wait_response(seq, timeout)` reads until the reply to that sequence number
  arrives, queueing other responses and dispatching any stream data;
- `start_reading(stop_event)` runs `read_loop` in a background thread,
  filling the `video`, `gyro`, `sync` and `responses` queues (packets are
  dropped when a queue is full);
- `write_video_to(writer, stop_event)` copies queued video data to a writable
  binary file until the event is set;
- `stop()` sends the stop-live-stream command.

## What this package does not do

- It has no command-line program; it is a library.
- It does not open BLE connections or run a GATT server: it builds and parses
  the bytes, and sending them over Bluetooth is up to you.
- It does not encode or decode the protobuf bodies that commands and
  responses carry; bodies are passed and returned as raw bytes.
- It has no helpers for asking the camera to join another WiFi network.

## Running the tests

```
pip install -e ".[test]"
pytest
```