import io

import pytest

from dnsq.hexview import format_hex, view


def _rows(text):
    return [line for line in text.split("\n") if line.startswith("  ") and "byte(s)" not in line]


def test_short_data_two_blocks_exact_output():
    expected = (
        "\n  3 byte(s)\n\n  61 62 63 "
        + "__ " * 5
        + "  "
        + "__ " * 8
        + "  abc\n\n"
    )
    assert format_hex(b"abc", 2) == expected


def test_empty_data_renders_nothing():
    assert format_hex(b"", 2) == ""


def test_byte_count_line():
    text = format_hex(bytes(range(16)), 2)
    assert text.startswith("\n  16 byte(s)\n")
    assert text.endswith("\n\n")


@pytest.mark.parametrize("block_count", [1, 2, 3, 4])
@pytest.mark.parametrize("size", [1, 7, 8, 9, 16, 17, 40, 100])
def test_rows_line_up(block_count, size):
    data = bytes(range(size))
    rows = _rows(format_hex(data, block_count))
    width = block_count * 8
    assert len(rows) == -(-size // width)
    chars = [min(width, size - i * width) for i in range(len(rows))]
    widths = {len(row) - n for row, n in zip(rows, chars)}
    assert len(widths) == 1


def test_unprintable_bytes_show_as_dots():
    rows = _rows(format_hex(b"\x00A\x7f\xff", 1))
    assert rows[0].endswith("  .A..")


def test_padding_only_on_last_row():
    rows = _rows(format_hex(bytes(20), 1))
    assert all("__" not in row for row in rows[:-1])
    assert rows[-1].count("__ ") == 4


@pytest.mark.parametrize("block_count", [0, 5, 9])
def test_out_of_range_block_count_falls_back_to_two(block_count):
    data = b"example.com query data"
    assert format_hex(data, block_count) == format_hex(data, 2)


def test_view_writes_format_to_stream():
    stream = io.StringIO()
    view(b"hello world", 2, stream)
    assert stream.getvalue() == format_hex(b"hello world", 2)