"""Sending one request to a server over UDP or TCP and reading the reply."""

from __future__ import annotations

import socket

RECV_TIMEOUT = 2.0
CONNECT_TIMEOUT = 3.0


def request_udp(payload, server, port=53, max_len=1500):
    """Send ``payload`` as one datagram and return the first datagram received.

    At most ``max_len`` bytes of the reply are kept. Raises OSError, including
    ``TimeoutError``, when the exchange fails.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(RECV_TIMEOUT)
        sock.sendto(bytes(payload), (server, port))
        data, _ = sock.recvfrom(max_len)
    return data


def request_tcp(payload, server, port=53, max_len=4096):
    """Connect, send ``payload`` and return what a single read brings back.

    At most ``max_len`` bytes are read; an empty result means the peer closed
    the connection. Raises OSError when connecting, sending or reading fails.
    """
    with socket.create_connection((server, port), timeout=CONNECT_TIMEOUT) as sock:
        sock.settimeout(RECV_TIMEOUT)
        sock.sendall(bytes(payload))
        return sock.recv(max_len)