"""The fixed twelve-byte DNS message header."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from dnsq.types import QR, DnsFormatError


@dataclass
class Header:
    """DNS message header: identifier, flag bits and section counts."""

    LENGTH: ClassVar[int] = 12

    id: int = 0
    qr: int = 0
    opcode: int = 0
    aa: int = 0
    tc: int = 0
    rd: int = 0
    ra: int = 0
    z: int = 0
    ad: int = 0
    cd: int = 0
    rcode: int = 0
    qdcount: int = 0
    ancount: int = 0
    nscount: int = 0
    arcount: int = 0

    @classmethod
    def parse(cls, data):
        """Decode a header from the first twelve bytes of ``data``."""
        if len(data) < cls.LENGTH:
            raise DnsFormatError(
                f"header needs {cls.LENGTH} bytes, got {len(data)}"
            )
        b2, b3 = data[2], data[3]
        return cls(
            id=int.from_bytes(data[0:2], "big"),
            qr=(b2 >> 7) & 0x01,
            opcode=(b2 >> 3) & 0x07,
            aa=(b2 >> 2) & 0x01,
            tc=(b2 >> 1) & 0x01,
            rd=b2 & 0x01,
            ra=(b3 >> 7) & 0x01,
            z=(b3 >> 6) & 0x01,
            ad=(b3 >> 5) & 0x01,
            cd=(b3 >> 4) & 0x01,
            rcode=b3 & 0x0F,
            qdcount=int.from_bytes(data[4:6], "big"),
            ancount=int.from_bytes(data[6:8], "big"),
            nscount=int.from_bytes(data[8:10], "big"),
            arcount=int.from_bytes(data[10:12], "big"),
        )

    def to_bytes(self):
        """Encode the header as twelve bytes in network order."""
        flags_hi = (
            ((int(self.qr) << 7) & 0x80)
            | ((int(self.opcode) << 3) & 0x78)
            | ((int(self.aa) << 2) & 0x04)
            | ((int(self.tc) << 1) & 0x02)
            | (int(self.rd) & 0x01)
        )
        flags_lo = (
            ((int(self.ra) << 7) & 0x80)
            | ((int(self.z) << 6) & 0x40)
            | ((int(self.ad) << 5) & 0x20)
            | ((int(self.cd) << 4) & 0x10)
            | (int(self.rcode) & 0x0F)
        )
        words = (self.id, self.qdcount, self.ancount, self.nscount, self.arcount)
        head, *counts = ((int(w) & 0xFFFF).to_bytes(2, "big") for w in words)
        return head + bytes((flags_hi, flags_lo)) + b"".join(counts)

    def set_qr(self, qr):
        """Mark the header as a query, clearing every flag, or as a response."""
        if QR(qr) is QR.QUERY:
            self.qr = 0
            self.opcode = 0
            self.aa = 0
            self.tc = 0
            self.rd = 0
            self.ra = 0
            self.z = 0
            self.ad = 0
            self.cd = 0
            self.rcode = 0
        else:
            self.qr = 1