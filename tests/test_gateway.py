import socket
import sys
import threading
import time

import pytest

from wolgate.gateway import (
    ACCEPTED,
    COMMAND_FAILED,
    DENIED,
    PROMPT,
    SENT,
    Gateway,
    clean_input,
)

OK_COMMAND = [sys.executable, "-c", "pass"]


def _read_all(sock):
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks).decode()


def _run(gateway, payload):
    server, client = socket.socketpair()
    with server, client:
        client.settimeout(10)
        if payload:
            client.sendall(payload)
        else:
            client.shutdown(socket.SHUT_WR)
        result = gateway.handle_client(server)
        server.close()
        return result, _read_all(client)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"abc\r\n", "abc"),
        (b"abc\n", "abc"),
        ("abc\rdef", "abc"),
        (b"abc\0def", "abc"),
        (b"abc", "abc"),
    ],
)
def test_clean_input(data, expected):
    assert clean_input(data) == expected


def test_check_password():
    password = "password"
    gateway = Gateway(password=password, command=OK_COMMAND)
    assert gateway.check_password(b"password\r\n")
    assert not gateway.check_password(b"wrong\n")
    assert not gateway.check_password(b"passwordx")


def test_command_string_is_split():
    gateway = Gateway(command="./sendwol 02:00:00:00:00:01")
    assert gateway.command == ["./sendwol", "02:00:00:00:00:01"]


def test_correct_password_runs_command():
    password = "password"
    result, text = _run(Gateway(password=password, command=OK_COMMAND), b"password\n")
    assert result is True
    assert text == PROMPT + ACCEPTED + SENT


def test_command_that_cannot_start_reports_failure(tmp_path):
    password = "password"
    missing = str(tmp_path / "missing-command")
    result, text = _run(Gateway(password=password, command=[missing]), b"password\r\n")
    assert result is True
    assert text == PROMPT + ACCEPTED + COMMAND_FAILED


def test_wrong_password_is_denied():
    password = "password"
    result, text = _run(Gateway(password=password, command=OK_COMMAND), b"wrong\n")
    assert result is False
    assert text == PROMPT + DENIED


def test_no_data_closes_quietly():
    password = "password"
    result, text = _run(Gateway(password=password, command=OK_COMMAND), b"")
    assert result is False
    assert text == PROMPT


def test_serve_once_over_tcp():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    password = "password"
    gateway = Gateway(password=password, command=OK_COMMAND)
    result = []
    thread = threading.Thread(
        target=lambda: result.append(gateway.serve_once("127.0.0.1", port)), daemon=True
    )
    thread.start()
    client = None
    for _ in range(100):
        try:
            client = socket.create_connection(("127.0.0.1", port), timeout=10)
            break
        except ConnectionRefusedError:
            time.sleep(0.05)
    assert client is not None
    with client:
        client.sendall(b"wrong\n")
        text = _read_all(client)
    thread.join(10)
    assert text == PROMPT + DENIED
    assert result == [False]