"""Command line DNS lookup: send one query and print the decoded reply."""

from __future__ import annotations

import argparse
import secrets
import sys

from dnsq.header import Header
from dnsq.hexview import format_hex
from dnsq.message import EDNS0, Question, Resource, encode_name
from dnsq.net import request_tcp, request_udp
from dnsq.types import (
    QR,
    DnsFormatError,
    QClass,
    QType,
    qclass_to_str,
    qtype_to_str,
    str_to_qtype,
)

DEFAULT_QNAME = "."
DEFAULT_QTYPE = "ns"
DEFAULT_SERVER = "8.8.8.8"
DEFAULT_PORT = 53

UDP_MAX = 1500
TCP_MAX = 4096


def make_id():
    """Return a random 16-bit message identifier."""
    return secrets.randbelow(0x10000)


def make_query(qname, qtype=None, query_id=None):
    """Build a recursive query for ``qname`` with an EDNS(0) record asking for DNSSEC.

    ``qtype`` is a type mnemonic; None means A. A random identifier is used
    when ``query_id`` is None.
    """
    rtype = QType.A if qtype is None else str_to_qtype(qtype)
    header = Header(id=make_id() if query_id is None else query_id)
    header.set_qr(QR.QUERY)
    header.qdcount = 1
    header.arcount = 1
    header.rd = 1

    encode_name(qname)
    question = Question(qname, rtype, QClass.IN)
    edns = EDNS0(payload_size=UDP_MAX, version=0, ext_rcode=0, dnssec_ok=True)
    return header.to_bytes() + question.to_bytes() + edns.to_bytes()


def format_header(header):
    """Render the header fields as printed by the lookup command."""
    h = header
    return (
        f"  ID      : {h.id}\n"
        "\n"
        f"  QR      : {h.qr}    "
        f"  OpCode  : {h.opcode}    "
        f"  AA      : {h.aa}\n"
        f"  TC      : {h.tc}    "
        f"  RD      : {h.rd}    "
        f"  RA      : {h.ra}\n"
        f"  Z       : {h.z}    "
        f"  AD      : {h.ad}    "
        f"  CD      : {h.cd}\n"
        f"  RCODE   : {h.rcode}\n"
        "\n"
        f"  QdCount : {h.qdcount}\n"
        f"  AnCount : {h.ancount}\n"
        f"  NsCount : {h.nscount}\n"
        f"  ArCount : {h.arcount}\n"
    )


def format_question(question):
    """Render one question as a tab-separated line."""
    return (
        f"  {question.name_text()}\t{qtype_to_str(question.qtype)}\t"
        f"{qclass_to_str(question.qclass)}\n"
    )


def format_resource(resource):
    """Render one resource record as a tab-separated line; OPT records render empty."""
    if resource.qtype == QType.OPT:
        return ""
    return (
        f"  {resource.name_text()}\t{qtype_to_str(resource.qtype)}\t"
        f"{qclass_to_str(resource.qclass)}\t{resource.ttl}\t"
        f"{resource.rdlength}\t{resource.rdata_text()}\n"
    )


def format_edns0(edns):
    """Render the EDNS(0) parameters of an OPT record."""
    return (
        f"  {qtype_to_str(edns.qtype)}\t"
        f"Payload size  : {edns.payload_size}\n        "
        f"Extended RCode: {edns.ext_rcode}\n        "
        f"Version       : {edns.version}\n"
    )


def _exchange(query, server, port, stream):
    """Send the query over UDP, falling back to TCP when the reply is truncated."""
    use_tcp = False
    while True:
        if use_tcp:
            reply = request_tcp(query, server, port, TCP_MAX)
        else:
            reply = request_udp(query, server, port, UDP_MAX)

        if len(reply) < Header.LENGTH:
            raise DnsFormatError(
                "response error - length of received datagram is less than 12"
            )

        header = Header.parse(reply)
        if not header.tc:
            return reply
        if use_tcp:
            raise DnsFormatError(
                "response error - TC is set with 1 even if tcp-fallback is operated"
            )
        stream.write("TC = 1 , so tcp-fallback is operated\n")
        use_tcp = True


def run(qname=DEFAULT_QNAME, qtype=DEFAULT_QTYPE, server=DEFAULT_SERVER,
        port=DEFAULT_PORT, stream=None):
    """Query ``server`` for ``qname`` and write the dumps and decoded sections.

    Raises DnsFormatError for a malformed or unusable reply and OSError when
    the network exchange fails.
    """
    out = sys.stdout if stream is None else stream
    query = make_query(qname, qtype)
    reply = _exchange(query, server, port, out)

    out.write(format_hex(query, 2))
    out.write(format_hex(reply, 2))

    header = Header.parse(reply)
    out.write("[ Header     ]\n")
    out.write(format_header(header))
    out.write("\n")

    offset = Header.LENGTH
    out.write("[ Question   ]\n")
    for _ in range(header.qdcount):
        question, offset = Question.parse(reply, offset)
        out.write(format_question(question))
    out.write("\n")

    for title, count in (
        ("[ Answer     ]", header.ancount),
        ("[ Authority  ]", header.nscount),
    ):
        out.write(title + "\n")
        for _ in range(count):
            resource, offset = Resource.parse(reply, offset)
            out.write(format_resource(resource))
        out.write("\n")

    out.write("[ Additional ]\n")
    for _ in range(header.arcount):
        resource, end = Resource.parse(reply, offset)
        if resource.qtype == QType.OPT:
            edns, end = EDNS0.parse(reply, offset)
            out.write(format_edns0(edns))
        else:
            out.write(format_resource(resource))
        offset = end
    out.write("\n")
    return header


def _port(text):
    value = int(text)
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port {value} is out of range")
    return value


def main(argv=None):
    """Entry point of the lookup command; returns the exit status."""
    parser = argparse.ArgumentParser(
        prog="q", description="Send one DNS query and print the decoded reply."
    )
    parser.add_argument("qname", nargs="?", default=DEFAULT_QNAME)
    parser.add_argument("qtype", nargs="?", default=DEFAULT_QTYPE)
    parser.add_argument("server", nargs="?", default=DEFAULT_SERVER)
    parser.add_argument("port", nargs="?", type=_port, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    try:
        run(args.qname, args.qtype, args.server, args.port)
    except (ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())