"""Record data decoding for the structured resource record types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from dnsq.rdata import NAME_LIMIT, RData, decode_name, skip_name
from dnsq.types import DnsFormatError, QType, SECAlgo, is_valid_algo, qtype_to_str

BLOB_LIMIT = 1024


def _name_pair(message, offset, length, fqdn, what):
    """Decode two consecutive domain names that make up a record's data."""
    first_len = skip_name(message, offset, length)
    first = decode_name(message, offset, fqdn, NAME_LIMIT)
    second = decode_name(message, offset + first_len, fqdn, NAME_LIMIT)
    if not first or not second:
        raise DnsFormatError(f"{what} record data holds an empty name")
    return first, second


def _uint32(message, pos, end):
    if pos + 4 > end:
        raise DnsFormatError("record data is too short for a 32-bit field")
    return int.from_bytes(message[pos:pos + 4], "big")


@dataclass(frozen=True)
class HINFOData(RData):
    """Host information: CPU and operating system."""

    cpu: str
    os: str

    @classmethod
    def _from_wire(cls, message, offset, length):
        cpu, os_name = _name_pair(message, offset, length, False, "HINFO")
        return cls(cpu, os_name)

    def to_text(self):
        return f"{self.cpu} {self.os}"


@dataclass(frozen=True)
class MINFOData(RData):
    """Mailbox or mail list information."""

    rmailbx: str
    emailbx: str

    @classmethod
    def _from_wire(cls, message, offset, length):
        rmailbx, emailbx = _name_pair(message, offset, length, True, "MINFO")
        return cls(rmailbx, emailbx)

    def to_text(self):
        return f"{self.rmailbx} {self.emailbx}"


@dataclass(frozen=True)
class MXData(RData):
    """A mail exchange and its preference."""

    preference: int
    exchange: str

    @classmethod
    def _from_wire(cls, message, offset, length):
        if length < 2:
            raise DnsFormatError(f"MX record data needs at least 2 bytes, got {length}")
        preference = int.from_bytes(message[offset:offset + 2], "big")
        exchange = decode_name(message, offset + 2, True, NAME_LIMIT)
        if not exchange:
            raise DnsFormatError("MX record data holds an empty exchange name")
        return cls(preference, exchange)

    def to_text(self):
        return f"{self.preference} {self.exchange}"


@dataclass(frozen=True)
class RPData(RData):
    """Responsible person: a mailbox and a name for TXT records."""

    mbox: str
    txt: str

    @classmethod
    def _from_wire(cls, message, offset, length):
        mbox, txt = _name_pair(message, offset, length, True, "RP")
        return cls(mbox, txt)

    def to_text(self):
        return f"{self.mbox} {self.txt}"


@dataclass(frozen=True)
class SOAData(RData):
    """Start of a zone of authority."""

    mname: str
    rname: str
    serial: int
    refresh: int
    retry: int
    expire: int
    minimum: int

    @classmethod
    def _from_wire(cls, message, offset, length):
        end = offset + length
        mname_len = skip_name(message, offset, length)
        if mname_len >= length:
            raise DnsFormatError("SOA record data ends after the primary name server")
        rname_len = skip_name(message, offset + mname_len, length - mname_len)
        mname = decode_name(message, offset, True, NAME_LIMIT)
        rname = decode_name(message, offset + mname_len, True, NAME_LIMIT)
        if not mname or not rname:
            raise DnsFormatError("SOA record data holds an empty name")
        pos = offset + mname_len + rname_len
        counters = [_uint32(message, pos + 4 * i, end) for i in range(5)]
        return cls(mname, rname, *counters)

    def to_text(self):
        return (
            f"{self.mname} {self.rname} {self.serial} {self.refresh} "
            f"{self.retry} {self.expire} {self.minimum}"
        )


@dataclass(frozen=True)
class RRSIGData(RData):
    """A DNSSEC signature over a record set."""

    FIXED_LENGTH: ClassVar[int] = 18

    type_covered: QType
    algorithm: SECAlgo
    labels: int
    ttl: int
    expiration: int
    inception: int
    key_tag: int
    signer: str
    signature: bytes

    @classmethod
    def _from_wire(cls, message, offset, length):
        fixed = cls.FIXED_LENGTH
        if length <= fixed:
            raise DnsFormatError(
                f"RRSIG record data needs more than {fixed} bytes, got {length}"
            )
        raw = bytes(message[offset:offset + fixed])
        if not is_valid_algo(raw[2]):
            raise DnsFormatError(f"unknown DNSSEC algorithm {raw[2]}")
        name_start = offset + fixed
        signer = decode_name(message, name_start, True, NAME_LIMIT)
        name_len = skip_name(message, name_start, length - fixed)
        signature = bytes(message[name_start + name_len:offset + length])[:BLOB_LIMIT]
        return cls(
            type_covered=QType(int.from_bytes(raw[0:2], "big")),
            algorithm=SECAlgo(raw[2]),
            labels=raw[3],
            ttl=int.from_bytes(raw[4:8], "big"),
            expiration=int.from_bytes(raw[8:12], "big"),
            inception=int.from_bytes(raw[12:16], "big"),
            key_tag=int.from_bytes(raw[16:18], "big"),
            signer=signer,
            signature=signature,
        )

    def to_text(self):
        return (
            f"{qtype_to_str(self.type_covered)}\t{int(self.algorithm)}\t"
            f"{self.labels}\t{self.ttl}\t{self.expiration}\t{self.inception}\t"
            f"0x{self.key_tag:04x}\t{self.signer}\t"
            f"{len(self.signature)} bytes - signature"
        )


@dataclass(frozen=True)
class DNSKEYData(RData):
    """A DNSSEC public key."""

    flags: int
    protocol: int
    algorithm: SECAlgo
    public_key: bytes

    @classmethod
    def _from_wire(cls, message, offset, length):
        if length < 4:
            raise DnsFormatError(f"DNSKEY record data needs at least 4 bytes, got {length}")
        raw = bytes(message[offset:offset + length])
        return cls(
            flags=int.from_bytes(raw[0:2], "big"),
            protocol=raw[2],
            algorithm=SECAlgo(raw[3]),
            public_key=raw[4:4 + BLOB_LIMIT],
        )

    @property
    def zsk(self):
        """Whether the zone key flag is set."""
        return bool(self.flags & 0x0100)

    @property
    def sep(self):
        """Whether the secure entry point flag is set."""
        return bool(self.flags & 0x0001)

    def to_text(self):
        return (
            f"zsk: {int(self.zsk)}\tsep: {int(self.sep)}\tflag: {self.flags:04x}\t"
            f"{self.protocol}\t{int(self.algorithm)}\t"
            f"{len(self.public_key)} bytes - publickey"
        )