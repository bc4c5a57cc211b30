import socket
import threading
from contextlib import contextmanager

import pytest

from dnsq.net import request_tcp, request_udp


@contextmanager
def udp_server(reply):
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)

    def serve():
        try:
            data, addr = sock.recvfrom(4096)
            sock.sendto(reply(data), addr)
        except OSError:
            pass

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield sock.getsockname()[1]
    finally:
        thread.join(6)
        sock.close()


@contextmanager
def tcp_server(reply):
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    sock.settimeout(5)

    def serve():
        try:
            conn, _ = sock.accept()
            with conn:
                data = conn.recv(4096)
                answer = reply(data)
                if answer:
                    conn.sendall(answer)
        except OSError:
            pass

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield sock.getsockname()[1]
    finally:
        thread.join(6)
        sock.close()


def test_udp_echo_round_trip():
    with udp_server(lambda data: data) as port:
        assert request_udp(b"hello", "127.0.0.1", port, 1500) == b"hello"


def test_udp_reply_is_cut_to_max_len():
    with udp_server(lambda data: data * 10) as port:
        result = request_udp(b"abcdefghij", "127.0.0.1", port, 10)
    assert result == b"abcdefghij"


def test_tcp_echo_round_trip():
    with tcp_server(lambda data: data[::-1]) as port:
        assert request_tcp(b"query", "127.0.0.1", port, 4096) == b"yreuq"


def test_tcp_closed_by_peer_gives_empty_reply():
    with tcp_server(lambda data: b"") as port:
        assert request_tcp(b"query", "127.0.0.1", port, 4096) == b""


def test_tcp_reply_is_cut_to_max_len():
    with tcp_server(lambda data: data + data) as port:
        result = request_tcp(b"xyz", "127.0.0.1", port, 3)
    assert len(result) <= 3
    assert b"xyzxyz".startswith(result)


def test_tcp_connection_refused_raises():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(OSError):
        request_tcp(b"query", "127.0.0.1", port, 4096)