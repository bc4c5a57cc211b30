"""A hex dump of raw bytes with a printable-character column."""

from __future__ import annotations

import sys

_PREFIX = "  "
_DIVIDER = "  "
_BLOCK = 8


def _printable(byte):
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def _row(chunk, width):
    groups = []
    for start in range(0, width, _BLOCK):
        part = chunk[start:start + _BLOCK]
        cells = [f"{b:02x} " for b in part] + ["__ "] * (_BLOCK - len(part))
        groups.append("".join(cells))
    text = "".join(_printable(b) for b in chunk)
    return _PREFIX + _DIVIDER.join(groups) + _DIVIDER + text


def format_hex(data, block_count=1):
    """Render ``data`` as rows of ``block_count`` blocks of eight bytes.

    A block count outside 1..4 falls back to 2. The last row is padded with
    "__" cells. Empty data renders as the empty string.
    """
    data = bytes(data)
    if not data:
        return ""
    blocks = block_count if 1 <= block_count <= 4 else 2
    width = blocks * _BLOCK
    rows = (
        "\n" + _row(data[start:start + width], width)
        for start in range(0, len(data), width)
    )
    return f"\n{_PREFIX}{len(data)} byte(s)\n" + "".join(rows) + "\n\n"


def view(data, block_count=1, stream=None):
    """Write the hex dump of ``data`` to ``stream`` (standard output by default)."""
    out = sys.stdout if stream is None else stream
    out.write(format_hex(data, block_count))