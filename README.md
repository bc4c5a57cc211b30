# dnsq

`dnsq` sends a single DNS question to a name server and prints the response
in a readable form: a hex dump of the query and of the reply, then the
header, question, answer, authority and additional sections.

Every query asks for recursion and carries an EDNS(0) OPT record with a
payload size of 1500 and the DNSSEC OK bit set. The query is first sent over
UDP; when the reply has the TC (truncated) bit set, it is sent again over TCP.

## Installation

```
pip install .
```

No third-party libraries are needed.

## Command line

```
dnsq [QNAME [QTYPE [SERVER [PORT]]]]
```

| Argument | Default   | Meaning                                                  |
|----------|-----------|----------------------------------------------------------|
| QNAME    | `.`       | domain name to ask about                                 |
| QTYPE    | `ns`      | record type, case-insensitive (`a`, `mx`, `any`, `*`, ...) |
| SERVER   | `8.8.8.8` | IPv4 address of the name server                          |
| PORT     | `53`      | port of the name server (0 to 65535)                     |

Examples:

```
dnsq
dnsq example.com
dnsq example.com mx
dnsq example.com aaaa 192.0.2.53 5353
```

A type name that is not known is sent as type 65535. When the reply is
shorter than 12 bytes, when TC is still set on the TCP reply, when the reply
cannot be decoded, or when the network exchange fails (including a two-second
receive timeout), the command prints the error to standard error and exits
with status 1.

Record data is decoded for A, AAAA, NS, CNAME, PTR, MB, MD, MF, MG, MR,
NULL, TXT, HINFO, MINFO, MX, RP, SOA, RRSIG and DNSKEY. Records of other
types, and records whose data cannot be decoded, are listed with their
fields and an empty data column. An OPT record in the additional section is
shown as its payload size, extended RCODE and version.

## As a library

```python
from dnsq.cli import make_query
from dnsq.header import Header
from dnsq.hexview import format_hex

query = make_query("example.com", "mx", 0x1234)
print(format_hex(query, 2))

header = Header.parse(query)
assert header.to_bytes() == query[:12]
```

- `dnsq.types`: the `QType`, `QClass`, `QR` and `SECAlgo` enumerations,
  `str_to_qtype`, `qtype_to_str`, `qclass_to_str`, `is_valid_algo`,
  `algo_to_str`, and the `DnsFormatError` exception (a `ValueError`).
- `dnsq.header`: `Header`, the 12-byte message header, with `parse`,
  `to_bytes` and `set_qr`.
- `dnsq.message`: `Question`, `Resource`, `EDNS0` and `EDNS0Option`,
  `encode_name` and `make_rdata`. `Question.parse`, `Resource.parse` and
  `EDNS0.parse` return the decoded item together with the offset just past it.
- `dnsq.rdata` and `dnsq.records`: one class per decoded record type
  (`AData`, `MXData`, `SOAData`, `RRSIGData`, `DNSKEYData`, ...), each built
  with `parse(message, offset, length)` and rendered with `to_text()`; also
  `decode_name`, which follows compression pointers, `skip_name` and
  `compress_ipv6`.
- `dnsq.net`: `request_udp` and `request_tcp`, one request and one reply.
- `dnsq.hexview`: `format_hex` and `view` for hex dumps.
- `dnsq.cli`: `make_query`, `run`, the `format_*` helpers and `main`.

Malformed wire data raises `dnsq.types.DnsFormatError`.

## What it does not do

- It is not a resolver: it asks one server one question and does not follow
  referrals, retry other servers or cache anything.
- It does not validate DNSSEC signatures; RRSIG and DNSKEY records are only
  decoded and summarised.
- Only questions and the OPT record can be encoded; resource records are
  decoded, never written.
- `request_tcp` sends the query bytes as they are, without a length prefix,
  and makes a single read of at most 4096 bytes, so it is not a full
  DNS-over-TCP client. UDP replies are read up to 1500 bytes.
- UDP queries go to IPv4 servers only.

## Running the tests

```
pip install .[test]
pytest
```