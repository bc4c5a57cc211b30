"""Questions, resource records and the EDNS(0) OPT pseudo-record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple

from dnsq.rdata import (
    NAME_LIMIT,
    AAAAData,
    AData,
    CNAMEData,
    MBData,
    MDData,
    MFData,
    MGData,
    MRData,
    NSData,
    NullData,
    PTRData,
    RData,
    TXTData,
    decode_name,
    skip_name,
)
from dnsq.records import (
    DNSKEYData,
    HINFOData,
    MINFOData,
    MXData,
    RPData,
    RRSIGData,
    SOAData,
)
from dnsq.types import DnsFormatError, QClass, QType

MAX_LABEL = 63
MAX_NAME = 255

_RDATA_TYPES = {
    QType.A: AData,
    QType.AAAA: AAAAData,
    QType.CNAME: CNAMEData,
    QType.HINFO: HINFOData,
    QType.MB: MBData,
    QType.MD: MDData,
    QType.MF: MFData,
    QType.MG: MGData,
    QType.MINFO: MINFOData,
    QType.MR: MRData,
    QType.MX: MXData,
    QType.NS: NSData,
    QType.NULL: NullData,
    QType.PTR: PTRData,
    QType.RP: RPData,
    QType.SOA: SOAData,
    QType.TXT: TXTData,
    QType.RRSIG: RRSIGData,
    QType.DNSKEY: DNSKEYData,
}


def encode_name(name):
    """Encode a dotted domain name as length-prefixed labels ending in a zero byte.

    A trailing dot is optional; the empty name and "." both give the root.
    Raises ValueError for empty or over-long labels and over-long names.
    """
    text = name[:-1] if name.endswith(".") else name
    if not text:
        return b"\x00"
    parts = []
    for label in text.split("."):
        raw = label.encode("latin-1")
        if not raw:
            raise ValueError(f"empty label in domain name {name!r}")
        if len(raw) > MAX_LABEL:
            raise ValueError(
                f"label {label!r} is {len(raw)} bytes, the limit is {MAX_LABEL}"
            )
        parts.append(bytes((len(raw),)) + raw)
    wire = b"".join(parts) + b"\x00"
    if len(wire) > MAX_NAME:
        raise ValueError(f"domain name is {len(wire)} bytes encoded, the limit is {MAX_NAME}")
    return wire


def make_rdata(qtype, message, offset, length):
    """Decode record data of type ``qtype``; None for types without a decoder."""
    try:
        kind = _RDATA_TYPES[QType(qtype)]
    except KeyError:
        return None
    return kind.parse(message, offset, length)


def _uint16(raw, pos):
    return int.from_bytes(raw[pos:pos + 2], "big")


@dataclass
class Question:
    """One entry of the question section."""

    name: str = ""
    qtype: QType = QType.A
    qclass: QClass = QClass.IN

    @classmethod
    def parse(cls, data, offset=0):
        """Decode a question at ``offset``; return it with the offset just past it."""
        if offset < 0 or offset >= len(data):
            raise DnsFormatError("no data for a question")
        name_len = skip_name(data, offset)
        if name_len > MAX_NAME:
            raise DnsFormatError("question name is too long")
        name = decode_name(data, offset, False, NAME_LIMIT)
        pos = offset + name_len
        if pos + 4 > len(data):
            raise DnsFormatError("question is cut short before its type and class")
        raw = bytes(data[pos:pos + 4])
        question = cls(name, QType(_uint16(raw, 0)), QClass(_uint16(raw, 2)))
        return question, pos + 4

    def to_bytes(self):
        """Encode the question in wire format."""
        return (
            encode_name(self.name)
            + int(self.qtype).to_bytes(2, "big")
            + int(self.qclass).to_bytes(2, "big")
        )

    def name_text(self):
        """The question name, dotted, without a trailing dot; empty for the root."""
        return self.name[:-1] if self.name.endswith(".") else self.name


@dataclass
class Resource:
    """A resource record from the answer, authority or additional section.

    ``rdata`` is None when the type has no decoder or its data cannot be decoded;
    the raw record data is always kept in ``data``.
    """

    name: str
    qtype: QType
    qclass: QClass
    ttl: int
    rdlength: int
    rdata: Optional[RData] = None
    data: bytes = b""

    @classmethod
    def parse(cls, message, offset=0):
        """Decode a record at ``offset`` of the whole ``message``.

        Return it with the offset just past it.
        """
        if offset < 0 or offset >= len(message):
            raise DnsFormatError("no data for a resource record")
        name_len = skip_name(message, offset)
        if name_len > MAX_NAME:
            raise DnsFormatError("resource record name is too long")
        name = decode_name(message, offset, False, NAME_LIMIT)
        pos = offset + name_len
        if pos + 10 > len(message):
            raise DnsFormatError("resource record is cut short before its fixed fields")
        fixed = bytes(message[pos:pos + 10])
        qtype = QType(_uint16(fixed, 0))
        qclass = QClass(_uint16(fixed, 2))
        ttl = int.from_bytes(fixed[4:8], "big", signed=True)
        rdlength = _uint16(fixed, 8)
        start = pos + 10
        end = start + rdlength
        if end > len(message):
            raise DnsFormatError("record data runs past the end of the message")
        rdata = None
        if rdlength:
            try:
                rdata = make_rdata(qtype, message, start, rdlength)
            except DnsFormatError:
                rdata = None
        record = cls(
            name=name,
            qtype=qtype,
            qclass=qclass,
            ttl=ttl,
            rdlength=rdlength,
            rdata=rdata,
            data=bytes(message[start:end]),
        )
        return record, end

    def name_text(self):
        """The owner name, dotted, without a trailing dot; empty for the root."""
        return self.name

    def rdata_text(self):
        """The presentation form of the record data, or "" when it is not decoded."""
        return "" if self.rdata is None else self.rdata.to_text()


@dataclass(frozen=True)
class EDNS0Option:
    """One option carried in the data of an OPT record."""

    code: int
    data: bytes = b""

    @property
    def length(self):
        return len(self.data)

    def to_bytes(self):
        return self.code.to_bytes(2, "big") + self.length.to_bytes(2, "big") + self.data


@dataclass
class EDNS0:
    """The OPT pseudo-record that carries EDNS(0) parameters."""

    FIXED_LENGTH: ClassVar[int] = 11

    payload_size: int = 1500
    version: int = 0
    ext_rcode: int = 0
    dnssec_ok: bool = False
    options: Tuple[EDNS0Option, ...] = field(default_factory=tuple)

    @property
    def qtype(self):
        return QType.OPT

    @classmethod
    def parse(cls, data, offset=0):
        """Decode an OPT record at ``offset``; return it with the offset just past it."""
        fixed = cls.FIXED_LENGTH
        if offset < 0 or len(data) - offset < fixed:
            raise DnsFormatError(f"an OPT record needs at least {fixed} bytes")
        raw = bytes(data[offset:offset + fixed])
        if raw[0] != 0:
            raise DnsFormatError("an OPT record must have the root as its name")
        rtype = _uint16(raw, 1)
        if rtype != QType.OPT:
            raise DnsFormatError(f"record type {rtype} is not OPT")
        rdlength = _uint16(raw, 9)
        end = offset + fixed + rdlength
        if end > len(data):
            raise DnsFormatError("OPT record data runs past the end of the message")
        rdata = bytes(data[offset + fixed:end])
        options = []
        pos = 0
        while pos < len(rdata):
            if pos + 4 > len(rdata):
                raise DnsFormatError("EDNS0 option header is cut short")
            code = _uint16(rdata, pos)
            size = _uint16(rdata, pos + 2)
            pos += 4
            if pos + size > len(rdata):
                raise DnsFormatError("EDNS0 option data is cut short")
            options.append(EDNS0Option(code, rdata[pos:pos + size]))
            pos += size
        record = cls(
            payload_size=_uint16(raw, 3),
            version=raw[6],
            ext_rcode=raw[5],
            dnssec_ok=bool(raw[7] & 0x80),
            options=tuple(options),
        )
        return record, end

    def to_bytes(self):
        """Encode the OPT record in wire format."""
        rdata = b"".join(option.to_bytes() for option in self.options)
        return (
            b"\x00"
            + int(QType.OPT).to_bytes(2, "big")
            + self.payload_size.to_bytes(2, "big")
            + bytes((self.ext_rcode, self.version, 0x80 if self.dnssec_ok else 0x00, 0x00))
            + len(rdata).to_bytes(2, "big")
            + rdata
        )