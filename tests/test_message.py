import pytest

from dnsq.message import (
    EDNS0,
    EDNS0Option,
    Question,
    Resource,
    encode_name,
    make_rdata,
)
from dnsq.rdata import AData, NSData
from dnsq.records import MXData
from dnsq.types import DnsFormatError, QClass, QType

HEADER = b"\x00" * 12
QNAME = b"\x07example\x03com\x00"


def _record(owner, rtype, rdata, ttl=b"\x00\x00\x0e\x10", rclass=1):
    return (
        owner
        + rtype.to_bytes(2, "big")
        + rclass.to_bytes(2, "big")
        + ttl
        + len(rdata).to_bytes(2, "big")
        + rdata
    )


def _message(*records):
    question = QNAME + b"\x00\x01\x00\x01"
    return HEADER + question + b"".join(records)


def test_encode_name_wire_form():
    assert encode_name("example.com") == QNAME


def test_encode_name_trailing_dot_is_optional():
    assert encode_name("example.com.") == encode_name("example.com")


@pytest.mark.parametrize("name", ["", "."])
def test_encode_name_root(name):
    assert encode_name(name) == b"\x00"


def test_encode_name_rejects_long_label():
    with pytest.raises(ValueError):
        encode_name("a" * 64 + ".com")


def test_encode_name_accepts_63_byte_label():
    assert encode_name("a" * 63)[0] == 63


def test_encode_name_rejects_long_name():
    with pytest.raises(ValueError):
        encode_name(".".join(["abcdefghij"] * 30))


def test_question_round_trip():
    question = Question("example.com", QType.MX, QClass.IN)
    wire = question.to_bytes()
    parsed, end = Question.parse(wire, 0)
    assert parsed == question
    assert end == len(wire)


def test_question_parse_at_offset():
    wire = b"\xff\xff" + Question("a.b", QType.NS, QClass.CH).to_bytes()
    parsed, end = Question.parse(wire, 2)
    assert parsed.name_text() == "a.b"
    assert parsed.qtype is QType.NS
    assert parsed.qclass is QClass.CH
    assert end == len(wire)


def test_question_root_name_text():
    parsed, _ = Question.parse(Question(".", QType.NS).to_bytes())
    assert parsed.name_text() == ""


def test_question_name_text_drops_trailing_dot():
    assert Question("example.com.").name_text() == "example.com"


def test_question_truncated():
    with pytest.raises(DnsFormatError):
        Question.parse(QNAME + b"\x00\x01\x00", 0)


def test_resource_a_with_pointer():
    message = _message(_record(b"\xc0\x0c", 1, bytes([93, 184, 216, 34])))
    start = 12 + len(QNAME) + 4
    record, end = Resource.parse(message, start)
    assert record.name_text() == "example.com"
    assert record.qtype is QType.A
    assert record.qclass is QClass.IN
    assert record.ttl == 3600
    assert record.rdlength == 4
    assert isinstance(record.rdata, AData)
    assert record.rdata_text() == "93.184.216.34"
    assert end == len(message)


def test_resource_ttl_is_signed():
    message = _message(_record(b"\xc0\x0c", 1, bytes(4), ttl=b"\xff\xff\xff\xff"))
    record, _ = Resource.parse(message, 12 + len(QNAME) + 4)
    assert record.ttl == -1


def test_resource_ns_with_compressed_rdata():
    rdata = b"\x03ns1\xc0\x0c"
    message = _message(_record(b"\xc0\x0c", 2, rdata))
    record, end = Resource.parse(message, 12 + len(QNAME) + 4)
    assert isinstance(record.rdata, NSData)
    assert record.rdata_text() == "ns1.example.com."
    assert end == len(message)


def test_resource_sequence_offsets():
    first = _record(b"\xc0\x0c", 1, bytes([1, 2, 3, 4]))
    second = _record(b"\xc0\x0c", 1, bytes([5, 6, 7, 8]))
    message = _message(first, second)
    pos = 12 + len(QNAME) + 4
    texts = []
    for _ in range(2):
        record, pos = Resource.parse(message, pos)
        texts.append(record.rdata_text())
    assert texts == ["1.2.3.4", "5.6.7.8"]
    assert pos == len(message)


def test_resource_unsupported_type_has_no_rdata():
    message = _message(_record(b"\xc0\x0c", 11, b"\x01\x02\x03"))
    record, end = Resource.parse(message, 12 + len(QNAME) + 4)
    assert record.rdata is None
    assert record.rdata_text() == ""
    assert record.data == b"\x01\x02\x03"
    assert end == len(message)


def test_resource_bad_rdata_is_kept_raw():
    message = _message(_record(b"\xc0\x0c", 1, b"\x01\x02\x03"))
    record, end = Resource.parse(message, 12 + len(QNAME) + 4)
    assert record.rdata is None
    assert record.rdlength == 3
    assert end == len(message)


def test_resource_truncated_fixed_fields():
    message = _message(b"\xc0\x0c\x00\x01\x00\x01")
    with pytest.raises(DnsFormatError):
        Resource.parse(message, 12 + len(QNAME) + 4)


def test_resource_rdata_past_end():
    record = _record(b"\xc0\x0c", 1, bytes(4))
    message = _message(record[:-2])
    with pytest.raises(DnsFormatError):
        Resource.parse(message, 12 + len(QNAME) + 4)


def test_make_rdata_mx():
    message = _message(b"\x00\x0a\x04mail\xc0\x0c")
    start = 12 + len(QNAME) + 4
    rdata = make_rdata(QType.MX, message, start, len(message) - start)
    assert isinstance(rdata, MXData)
    assert rdata.preference == 10
    assert rdata.exchange == "mail.example.com."


def test_make_rdata_opt_has_no_decoder():
    assert make_rdata(QType.OPT, b"\x00\x00", 0, 2) is None


def test_edns0_default_wire_form():
    edns = EDNS0()
    assert edns.to_bytes() == b"\x00\x00\x29\x05\xdc\x00\x00\x00\x00\x00\x00"
    assert edns.qtype is QType.OPT


def test_edns0_round_trip_with_options():
    edns = EDNS0(
        payload_size=4096,
        version=0,
        ext_rcode=1,
        dnssec_ok=True,
        options=(EDNS0Option(10, b"\x01\x02\x03\x04"), EDNS0Option(12)),
    )
    wire = b"\xaa" + edns.to_bytes()
    parsed, end = EDNS0.parse(wire, 1)
    assert parsed == edns
    assert end == len(wire)


def test_edns0_dnssec_flag_round_trips():
    for flag in (True, False):
        parsed, _ = EDNS0.parse(EDNS0(dnssec_ok=flag).to_bytes())
        assert parsed.dnssec_ok is flag


def test_edns0_option_length():
    assert EDNS0Option(8, b"abc").length == 3


def test_edns0_wrong_type():
    wire = bytearray(EDNS0().to_bytes())
    wire[2] = 1
    with pytest.raises(DnsFormatError):
        EDNS0.parse(bytes(wire))


def test_edns0_too_short():
    with pytest.raises(DnsFormatError):
        EDNS0.parse(EDNS0().to_bytes()[:10])


def test_edns0_truncated_option():
    wire = EDNS0(options=(EDNS0Option(10, b"\x01\x02"),)).to_bytes()
    bad = wire[:9] + (3).to_bytes(2, "big") + wire[11:14]
    with pytest.raises(DnsFormatError):
        EDNS0.parse(bad)