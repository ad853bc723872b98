# rowedit/core/Row.py
"""rowedit.core.Row
===================
A single line of the document and the tab-expansion rules around it.

A `Row` keeps three parallel views of one line:

- ``raw``: the bytes as they live in the file (authoritative).
- ``render``: ``raw`` with every TAB expanded to spaces up to the next
  multiple of `TAB_STOP`.
- ``highlight``: one `Highlight` tag per byte of ``render``.

``render`` and ``highlight`` are always rebuilt from scratch when ``raw``
changes; nothing patches them in place. The module also owns the two
coordinate-mapping helpers that translate between character offsets in
``raw`` and visual columns in ``render``. Cursor logic works in character
space, rendering and search work in visual space, and these helpers are the
only bridge between the two.
"""

from typing import Optional

from rowedit.core.Highlighter import Highlight


TAB_STOP = 8
TAB = 0x09
SPACE = 0x20


## ==================== Row Class ====================
class Row:
    """Class Row
    ==============
    One logical line of the document.

    Attributes:
        position (int): Index of this row inside its Document. Kept in sync
            by the Document on every structural insert/delete.
        raw (bytes): Authoritative content, without the line terminator.
        render (bytes): Tab-expanded display form of ``raw``.
        highlight (list[Highlight]): Highlight class per byte of ``render``.
        open_comment (bool): True when the row ends inside an unterminated
            block comment; read by the highlighter of the next row.
    """

    __slots__ = ("position", "raw", "render", "highlight", "open_comment")

    def __init__(self, position: int, raw: bytes = b"") -> None:
        self.position: int = position
        self.raw: bytes = bytes(raw)
        self.render: bytes = b""
        self.highlight: list[Highlight] = []
        self.open_comment: bool = False
        self.update_render()

    def __repr__(self) -> str:
        return f"Row(position={self.position}, raw={self.raw!r})"

    def __len__(self) -> int:
        return len(self.raw)

    def update_render(self) -> None:
        """Rebuild ``render`` from ``raw`` and reset ``highlight`` to NORMAL.

        The caller (normally the Document) is responsible for running the
        highlighter afterwards.
        """
        out = bytearray()
        for byte in self.raw:
            if byte == TAB:
                out.append(SPACE)
                while len(out) % TAB_STOP != 0:
                    out.append(SPACE)
            else:
                out.append(byte)
        self.render = bytes(out)
        self.highlight = [Highlight.NORMAL] * len(self.render)

    def set_raw(self, raw: bytes) -> None:
        self.raw = bytes(raw)
        self.update_render()


# --- Coordinate mapping ---
def char_to_render_col(row: Optional[Row], col: int) -> int:
    """Translate a character offset in ``row.raw`` into a visual column.

    Args:
        row: The row to measure. ``None`` (cursor past the last row) maps
            everything to column 0.
        col: Character offset; values past the end are clamped.

    Returns:
        int: The visual column where character ``col`` starts.
    """
    if row is None:
        return 0
    rx = 0
    for byte in row.raw[: max(col, 0)]:
        if byte == TAB:
            rx += TAB_STOP - (rx % TAB_STOP)
        else:
            rx += 1
    return rx


def render_to_char_col(row: Optional[Row], rx: int) -> int:
    """Translate a visual column back into a character offset.

    Returns the first character whose accumulated visual width exceeds
    ``rx``; when ``rx`` lies beyond the rendered width, returns
    ``len(row.raw)``.
    """
    if row is None:
        return 0
    cur_rx = 0
    for cx, byte in enumerate(row.raw):
        if byte == TAB:
            cur_rx += TAB_STOP - (cur_rx % TAB_STOP)
        else:
            cur_rx += 1
        if cur_rx > rx:
            return cx
    return len(row.raw)
