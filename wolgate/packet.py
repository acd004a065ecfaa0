"""Magic packet construction and MAC address parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

MAC_ADDR_SIZE = 6
REPEAT_COUNT = 16
WOL_PAYLOAD_SIZE = MAC_ADDR_SIZE * REPEAT_COUNT
PACKET_SIZE = MAC_ADDR_SIZE + WOL_PAYLOAD_SIZE

PORT = 8080
WOL_PORT = 8090

SYNC_STREAM = b"\xff" * MAC_ADDR_SIZE

_OCTET = re.compile(r"[0-9A-Fa-f]{1,2}")


@dataclass(frozen=True)
class MacAddress:
    """A six-byte hardware address."""

    octets: bytes

    def __post_init__(self) -> None:
        if len(self.octets) != MAC_ADDR_SIZE:
            raise ValueError(
                f"a MAC address has {MAC_ADDR_SIZE} bytes, got {len(self.octets)}"
            )

    def __str__(self) -> str:
        return ":".join(f"{octet:02X}" for octet in self.octets)


def parse_mac_address(text: str) -> MacAddress:
    """Parse a colon separated MAC address such as ``02:00:00:00:00:01``."""
    if text is None:
        raise TypeError("MAC address text is None")
    parts = text.strip().split(":")
    if len(parts) != MAC_ADDR_SIZE or not all(_OCTET.fullmatch(p) for p in parts):
        raise ValueError(f"could not parse MAC addr: {text!r}")
    return MacAddress(bytes(int(part, 16) for part in parts))


def make_magic_packet(mac: MacAddress | str) -> bytes:
    """Build the sync stream followed by the address repeated sixteen times."""
    if isinstance(mac, str):
        mac = parse_mac_address(mac)
    return SYNC_STREAM + mac.octets * REPEAT_COUNT


def format_packet(packet: bytes) -> str:
    """Render packet bytes as space separated upper-case hex pairs."""
    return " ".join(f"{byte:02X}" for byte in packet)