"""Send a magic packet over UDP and wait for the receiver's reply."""

from __future__ import annotations

import argparse
import socket
import sys

from wolgate.packet import (
    WOL_PORT,
    MacAddress,
    format_packet,
    make_magic_packet,
    parse_mac_address,
)

DEFAULT_HOST = "127.0.0.1"
REPLY_BUFFER_SIZE = 1024


def send_magic_packet(
    mac: MacAddress | str,
    host: str = DEFAULT_HOST,
    port: int = WOL_PORT,
    timeout: float | None = None,
) -> bytes:
    """Send the magic packet for ``mac`` to ``host:port`` and return the reply."""
    packet = make_magic_packet(mac)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(timeout)
        sock.connect((host, port))
        sock.send(packet)
        return sock.recv(REPLY_BUFFER_SIZE)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send a Wake-on-LAN magic packet.")
    parser.add_argument("mac", help="target MAC address, e.g. 02:00:00:00:00:01")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=WOL_PORT)
    parser.add_argument("--timeout", type=float, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse the address, print the packet, send it and print the reply."""
    args = _build_parser().parse_args(argv)
    print(f"argv: {args.mac}")
    try:
        mac = parse_mac_address(args.mac)
    except ValueError:
        print(f"error could not parse MAC addr: {args.mac}")
        return 1

    packet = make_magic_packet(mac)
    print(format_packet(packet))

    try:
        reply = send_magic_packet(mac, args.host, args.port, args.timeout)
    except OSError as exc:
        print(f"failure sending to {args.host}:{args.port}: {exc}", file=sys.stderr)
        return 1

    print(reply.split(b"\0", 1)[0].decode("utf-8", errors="replace"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())