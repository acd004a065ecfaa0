"""A TCP gateway that asks for a password and then starts the packet sender."""

from __future__ import annotations

import argparse
import hmac
import logging
import shlex
import socket
import subprocess
import sys
from collections.abc import Sequence

from wolgate.packet import PORT

log = logging.getLogger(__name__)

PASSWORD = "password"
DEFAULT_TARGET_MAC = "02:00:00:00:00:01"
DEFAULT_COMMAND = (sys.executable, "-m", "wolgate.sender", DEFAULT_TARGET_MAC)

RECEIVE_SIZE = 99

PROMPT = "\n Enter password: \n"
ACCEPTED = "\n correct, sending packet.. \n"
COMMAND_FAILED = "command failed to start\n"
SENT = "WoL packet sent successfully\n"
DENIED = "Authentication failed!\n"


def clean_input(data: bytes | str) -> str:
    """Cut received text at the first NUL, then newline, then carriage return."""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    for terminator in ("\0", "\n", "\r"):
        data = data.split(terminator, 1)[0]
    return data


class Gateway:
    """Authenticates one client and runs the wake command on success."""

    def __init__(
        self,
        password: str = PASSWORD,
        command: Sequence[str] | str = DEFAULT_COMMAND,
    ) -> None:
        self.password = password
        self.command = shlex.split(command) if isinstance(command, str) else list(command)

    def check_password(self, received: bytes | str) -> bool:
        """Compare the cleaned input with the configured password."""
        candidate = clean_input(received).encode("utf-8")
        return hmac.compare_digest(candidate, self.password.encode("utf-8"))

    def _run_command(self) -> bool:
        try:
            subprocess.run(self.command, check=False)
        except OSError as exc:
            log.error("could not start %s: %s", self.command, exc)
            return False
        return True

    def handle_client(self, conn: socket.socket) -> bool:
        """Prompt, read the password and answer; return whether it was accepted."""
        conn.sendall(PROMPT.encode())
        data = conn.recv(RECEIVE_SIZE)
        if not data:
            log.info("No data received or connection closed")
            return False

        if not self.check_password(data):
            conn.sendall(DENIED.encode())
            return False

        conn.sendall(ACCEPTED.encode())
        conn.sendall((SENT if self._run_command() else COMMAND_FAILED).encode())
        return True

    def serve_once(self, host: str = "", port: int = PORT) -> bool:
        """Listen on ``host:port``, serve a single client and stop."""
        with socket.create_server((host, port), backlog=5) as server:
            conn, _ = server.accept()
            with conn:
                return self.handle_client(conn)


def main(argv: list[str] | None = None) -> int:
    """Serve one client on the gateway port."""
    parser = argparse.ArgumentParser(description="Password-protected Wake-on-LAN gateway.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--password", default=PASSWORD)
    parser.add_argument("--command", default=None, help="command to run on success")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    command = args.command if args.command is not None else DEFAULT_COMMAND
    gateway = Gateway(args.password, command)
    try:
        gateway.serve_once(args.host, args.port)
    except OSError as exc:
        print(f"gateway failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())