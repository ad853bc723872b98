# tests/test_core/test_row.py
"""Row Tests
============

Unit tests for `Row` and the coordinate-mapping helpers.

This module verifies that:

1. ``render`` expands every TAB to the next multiple of 8 and nothing else.
2. ``highlight`` always has one entry per rendered byte.
3. `char_to_render_col` and `render_to_char_col` agree with each other on
   tab-containing rows and clamp at the row ends.
"""

import pytest

from rowedit.core.Highlighter import Highlight
from rowedit.core.Row import TAB_STOP, Row, char_to_render_col, render_to_char_col


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"", b""),
        (b"abc", b"abc"),
        (b"\t", b" " * 8),
        (b"a\tb", b"a" + b" " * 7 + b"b"),
        (b"1234567\tx", b"1234567 x"),
        (b"12345678\tx", b"12345678" + b" " * 8 + b"x"),
        (b"\t\t", b" " * 16),
    ],
)
def test_render_expands_tabs(raw: bytes, expected: bytes) -> None:
    """Tabs advance to the next multiple of TAB_STOP."""
    row = Row(0, raw)
    assert row.render == expected
    assert len(row.highlight) == len(row.render)
    assert all(tag == Highlight.NORMAL for tag in row.highlight)


def test_render_has_no_tabs_and_width_is_multiple_aligned() -> None:
    row = Row(0, b"\ta\tbc\t")
    assert b"\t" not in row.render
    # every tab ended on a tab stop, the trailing one closes the row
    assert len(row.render) % TAB_STOP == 0


def test_set_raw_rebuilds_render() -> None:
    row = Row(3, b"x")
    row.highlight = [Highlight.KEYWORD1]
    row.set_raw(b"\tyz")
    assert row.render == b" " * 8 + b"yz"
    assert row.highlight == [Highlight.NORMAL] * 10
    assert len(row) == 3
    assert row.position == 3


def test_char_to_render_col_with_tabs() -> None:
    row = Row(0, b"a\tb\tc")
    assert char_to_render_col(row, 0) == 0
    assert char_to_render_col(row, 1) == 1
    assert char_to_render_col(row, 2) == 8
    assert char_to_render_col(row, 3) == 9
    assert char_to_render_col(row, 4) == 16
    # past the end clamps to the full rendered width
    assert char_to_render_col(row, 99) == len(row.render)


def test_render_to_char_col_inside_a_tab() -> None:
    row = Row(0, b"a\tb")
    # visual columns 1..7 all belong to the tab at character 1
    for rx in range(1, 8):
        assert render_to_char_col(row, rx) == 1
    assert render_to_char_col(row, 8) == 2
    assert render_to_char_col(row, 100) == len(row.raw)


def test_mappings_round_trip_on_character_starts() -> None:
    row = Row(0, b"\tif (x)\t{ y; }\t")
    for cx in range(len(row.raw) + 1):
        assert render_to_char_col(row, char_to_render_col(row, cx)) == cx


def test_mappings_on_missing_row() -> None:
    assert char_to_render_col(None, 5) == 0
    assert render_to_char_col(None, 5) == 0
