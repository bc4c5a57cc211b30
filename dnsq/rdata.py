"""Record data (RDATA) decoding for the basic resource record types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from dnsq.types import DnsFormatError

NAME_LIMIT = 511
TEXT_LIMIT = 511

_POINTER = 0xC0


def _byte(data, index):
    """Return one byte of ``data``, raising DnsFormatError when out of range."""
    if index < 0 or index >= len(data):
        raise DnsFormatError(f"read at offset {index} runs past the end of the data")
    return data[index]


def decode_name(message, offset, fqdn=True, limit=None):
    """Decode the domain name at ``offset``, following compression pointers.

    Pointers are taken relative to the start of ``message``. With ``fqdn`` every
    label is followed by a dot; otherwise dots only separate labels. The root
    name gives the empty string. ``limit`` caps the length of the returned text.
    """
    labels = []
    seen = set()
    pos = offset
    while True:
        size = _byte(message, pos)
        if size == 0:
            break
        if size & _POINTER == _POINTER:
            target = ((size & 0x3F) << 8) | _byte(message, pos + 1)
            if target in seen:
                raise DnsFormatError("compression pointer loop in domain name")
            seen.add(target)
            pos = target
            continue
        end = pos + 1 + size
        if end > len(message):
            raise DnsFormatError("domain name label runs past the end of the data")
        labels.append(bytes(message[pos + 1:end]).decode("latin-1"))
        pos = end

    text = ".".join(labels)
    if fqdn and labels:
        text += "."
    if limit is not None:
        text = text[:limit]
    return text


def skip_name(data, offset=0, length=None):
    """Return how many bytes the encoded name at ``offset`` occupies.

    ``length`` bounds the span the name must fit in; it defaults to the rest of
    ``data``. A compression pointer ends the name after its two bytes.
    """
    if length is None:
        length = len(data) - offset
    if length < 1:
        raise DnsFormatError("no data to hold a domain name")

    pos = 0
    while pos < length and (size := _byte(data, offset + pos)) != 0:
        if size & _POINTER == _POINTER:
            if length <= pos + 1:
                raise DnsFormatError("compression pointer is cut short")
            return pos + 2
        pos += 1 + size
        if pos > length:
            raise DnsFormatError("domain name label runs past the end of the data")

    if pos < length and _byte(data, offset + pos) == 0:
        pos += 1
    return pos


def compress_ipv6(words):
    """Format eight 16-bit words as an IPv6 address, shortening the longest zero run."""
    words = tuple(words)
    if len(words) != 8:
        raise ValueError(f"an IPv6 address has 8 words, got {len(words)}")
    if any(not 0 <= w <= 0xFFFF for w in words):
        raise ValueError("IPv6 address words must be in the range 0..0xFFFF")

    runs = []
    for start in range(8):
        count = 0
        for word in words[start:]:
            if word != 0:
                break
            count += 1
        runs.append(count)

    best = max(range(8), key=lambda i: runs[i])
    best_len = runs[best]

    def join(part):
        return ":".join(f"{w:x}" for w in part)

    if best_len > 1:
        return join(words[:best]) + "::" + join(words[best + best_len:])
    return join(words)


class RData(ABC):
    """Decoded record data of one resource record."""

    @classmethod
    def parse(cls, message, offset=0, length=None):
        """Decode ``length`` bytes of record data found at ``offset`` in ``message``."""
        if length is None:
            length = len(message) - offset
        if length < 1:
            raise DnsFormatError("record data is empty")
        if offset < 0 or offset + length > len(message):
            raise DnsFormatError("record data runs past the end of the message")
        return cls._from_wire(message, offset, length)

    @classmethod
    @abstractmethod
    def _from_wire(cls, message, offset, length):
        """Build the record data from validated wire bytes."""

    @abstractmethod
    def to_text(self):
        """Return the presentation form of the record data."""

    def __str__(self):
        return self.to_text()


@dataclass(frozen=True)
class AData(RData):
    """An IPv4 host address."""

    address: bytes

    @classmethod
    def _from_wire(cls, message, offset, length):
        if length != 4:
            raise DnsFormatError(f"A record data must be 4 bytes, got {length}")
        return cls(bytes(message[offset:offset + 4]))

    def to_text(self):
        return ".".join(str(octet) for octet in self.address)


@dataclass(frozen=True)
class AAAAData(RData):
    """An IPv6 host address as eight 16-bit words."""

    words: Tuple[int, ...]

    @classmethod
    def _from_wire(cls, message, offset, length):
        if length != 16:
            raise DnsFormatError(f"AAAA record data must be 16 bytes, got {length}")
        raw = bytes(message[offset:offset + 16])
        return cls(tuple(int.from_bytes(raw[i:i + 2], "big") for i in range(0, 16, 2)))

    @property
    def address(self):
        """The address as sixteen bytes."""
        return b"".join(w.to_bytes(2, "big") for w in self.words)

    def to_text(self):
        return compress_ipv6(self.words)


@dataclass(frozen=True)
class DomainNameData(RData):
    """Record data that is a single domain name."""

    name: str

    @classmethod
    def _from_wire(cls, message, offset, length):
        return cls(decode_name(message, offset, True, NAME_LIMIT))

    def to_text(self):
        return self.name


class CNAMEData(DomainNameData):
    """The canonical name of an alias."""

    @property
    def cname(self):
        return self.name


class MBData(DomainNameData):
    """A mailbox domain name."""

    @property
    def madname(self):
        return self.name


class MDData(DomainNameData):
    """A mail destination (obsolete)."""

    @property
    def madname(self):
        return self.name


class MFData(DomainNameData):
    """A mail forwarder (obsolete)."""

    @property
    def madname(self):
        return self.name


class MGData(DomainNameData):
    """A mail group member."""

    @property
    def mgmname(self):
        return self.name


class MRData(DomainNameData):
    """A mail rename domain name."""

    @property
    def newname(self):
        return self.name


class NSData(DomainNameData):
    """An authoritative name server."""

    @property
    def nsdname(self):
        return self.name


class PTRData(DomainNameData):
    """A domain name pointer."""

    @property
    def ptrdname(self):
        return self.name


@dataclass(frozen=True)
class NullData(RData):
    """Opaque binary record data."""

    data: bytes

    @classmethod
    def _from_wire(cls, message, offset, length):
        return cls(bytes(message[offset:offset + length]))

    def to_text(self):
        return f"\\# {len(self.data)} " + " ".join(f"{b:02x}" for b in self.data)


@dataclass(frozen=True)
class TXTData(RData):
    """One or more character strings."""

    strings: Tuple[str, ...]

    @classmethod
    def _from_wire(cls, message, offset, length):
        strings = []
        text_len = 0
        pos = offset
        end = offset + length
        while pos < end:
            if text_len >= TEXT_LIMIT:
                break
            size = message[pos]
            pos += 1
            if text_len + size + 2 > TEXT_LIMIT:
                break
            if pos + size > end:
                raise DnsFormatError("character string runs past the end of the record data")
            strings.append(bytes(message[pos:pos + size]).decode("latin-1"))
            pos += size
            text_len += (1 if text_len else 0) + size + 2
        return cls(tuple(strings))

    def to_text(self):
        return " ".join(f'"{s}"' for s in self.strings)