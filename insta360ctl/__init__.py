"""Wire protocols for controlling Insta360 cameras over BLE and WiFi."""

__version__ = "0.1.0"

__all__ = [
    "messagecode",
    "crc",
    "chunker",
    "ffframe",
    "header",
    "go2blepacket",
    "uuids",
    "wifi_conn",
    "wifi_stream",
]