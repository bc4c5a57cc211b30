"""Enumerations shared by the DNS message code and their text forms."""

from __future__ import annotations

from enum import IntEnum


class DnsFormatError(ValueError):
    """Raised when wire data is too short or malformed to decode."""


def _pseudo_member(cls, value, limit, prefix):
    """Build an unnamed enum member for a value the protocol allows but we do not name."""
    if isinstance(value, int) and 0 <= value <= limit:
        member = int.__new__(cls, value)
        member._name_ = f"{prefix}{value}"
        member._value_ = value
        return member
    return None


class QType(IntEnum):
    """Resource record and query types."""

    A = 1
    NS = 2
    MD = 3
    MF = 4
    CNAME = 5
    SOA = 6
    MB = 7
    MG = 8
    MR = 9
    NULL = 10
    WKS = 11
    PTR = 12
    HINFO = 13
    MINFO = 14
    MX = 15
    TXT = 16
    RP = 17
    AAAA = 28
    A6 = 38
    OPT = 41
    RRSIG = 46
    DNSKEY = 48
    AXFR = 252
    MAILB = 253
    MAILA = 254
    ALL = 255
    UNKNOWN = 65535

    @classmethod
    def _missing_(cls, value):
        return _pseudo_member(cls, value, 0xFFFF, "TYPE")


class QClass(IntEnum):
    """Query and resource classes."""

    IN = 1
    CS = 2
    CH = 3
    HS = 4
    ALL = 255

    @classmethod
    def _missing_(cls, value):
        return _pseudo_member(cls, value, 0xFFFF, "CLASS")


class QR(IntEnum):
    """The query/response bit of the header."""

    QUERY = 0
    RESPONSE = 1


class SECAlgo(IntEnum):
    """DNSSEC signing algorithm numbers."""

    RSA_MD5 = 1
    DSA_SHA1 = 2
    RSA_SHA1 = 5
    RSA_SHA1_NSEC3_SHA1 = 7
    RSA_SHA256 = 8
    RSA_SHA512 = 10
    GOST_R_34_10_2011 = 12
    ECDSA_CURVE_P256_SHA256 = 13
    ECDSA_CURVE_P384_SHA384 = 14
    ED25519 = 15
    ED448 = 16

    @classmethod
    def _missing_(cls, value):
        return _pseudo_member(cls, value, 0xFF, "ALGO")


_QTYPE_TEXT = {
    member: member.name
    for member in QType
    if member not in (QType.ALL, QType.UNKNOWN)
}
_QTYPE_TEXT[QType.ALL] = "*"

_TEXT_QTYPE = {name: member for member, name in _QTYPE_TEXT.items() if member != QType.ALL}
_TEXT_QTYPE.update({"*": QType.ALL, "ALL": QType.ALL, "ANY": QType.ALL})

_QCLASS_TEXT = {
    QClass.IN: "IN",
    QClass.CS: "CS",
    QClass.CH: "CH",
    QClass.HS: "HS",
    QClass.ALL: "*",
}

_ALGO_TEXT = {
    SECAlgo.RSA_MD5: "RSA/MD5",
    SECAlgo.DSA_SHA1: "DSA/SHA-1",
    SECAlgo.RSA_SHA1: "RSA/SHA-1",
    SECAlgo.RSA_SHA1_NSEC3_SHA1: "RSA/SHA-1 - NSEC3/SHA-1",
    SECAlgo.RSA_SHA256: "RSA/SHA-256",
    SECAlgo.RSA_SHA512: "RSA/SHA-512",
    SECAlgo.GOST_R_34_10_2011: "GOST R 34.10-2001",
    SECAlgo.ECDSA_CURVE_P256_SHA256: "ECDSA Curve P-256 / SHA-256",
    SECAlgo.ECDSA_CURVE_P384_SHA384: "ECDSA Curve P-384 / SHA-384",
    SECAlgo.ED25519: "ED25519",
    SECAlgo.ED448: "ED448",
}


def qtype_to_str(qtype):
    """Return the mnemonic of a record type, "*" for ALL, "UNKNOWN" otherwise."""
    return _QTYPE_TEXT.get(qtype, "UNKNOWN")


def qclass_to_str(qclass):
    """Return the mnemonic of a class, "*" for ALL, "UNKNOWN" otherwise."""
    return _QCLASS_TEXT.get(qclass, "UNKNOWN")


def str_to_qtype(text):
    """Look up a record type by mnemonic, ignoring case; unknown text gives UNKNOWN."""
    if text is None:
        return QType.UNKNOWN
    return _TEXT_QTYPE.get(text.upper(), QType.UNKNOWN)


def is_valid_algo(algorithm):
    """Tell whether a number is one of the known DNSSEC algorithms."""
    return algorithm in _ALGO_TEXT


def algo_to_str(algorithm):
    """Return the descriptive name of a DNSSEC algorithm, "UNKNOWN" otherwise."""
    return _ALGO_TEXT.get(algorithm, "UNKNOWN")