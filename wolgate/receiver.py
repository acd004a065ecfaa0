"""A UDP receiver that accepts one magic packet and acknowledges it."""

from __future__ import annotations

import argparse
import socket

from wolgate.packet import PACKET_SIZE, WOL_PORT, format_packet

REPLY = b"packet received"


def receive_packet(sock: socket.socket) -> tuple[bytes, tuple]:
    """Read one datagram of at most a packet's size; return data and sender."""
    return sock.recvfrom(PACKET_SIZE)


def serve_once(host: str = "", port: int = WOL_PORT) -> bytes:
    """Bind to ``host:port``, receive one packet, acknowledge it and return it."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((host, port))
        data, client = receive_packet(sock)
        sock.sendto(REPLY, client)
        return data


def main(argv: list[str] | None = None) -> int:
    """Receive one packet and print it as hex."""
    parser = argparse.ArgumentParser(description="Receive one magic packet.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=WOL_PORT)
    args = parser.parse_args(argv)
    print(format_packet(serve_once(args.host, args.port)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())