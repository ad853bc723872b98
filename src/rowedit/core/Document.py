# rowedit/core/Document.py
"""rowedit.core.Document
========================
The in-memory document: an ordered list of `Row` objects plus file-level
metadata.

The Document owns every structural mutation. Each operation keeps three
invariants intact:

- ``rows[i].position == i`` for every row, after every insert or delete.
- ``render``/``highlight`` of a touched row are rebuilt, and the highlighter
  propagates any change of block-comment state to the rows below.
- ``dirty`` grows by one per edit and is only reset by `load` or a
  successful save.

Out-of-range indices are silently ignored.
"""

import logging
from typing import Optional

from rowedit.core.Highlighter import Highlighter
from rowedit.core.Row import Row
from rowedit.core.SyntaxRules import SyntaxRegistry, SyntaxRules


## ==================== Document Class ====================
class Document:
    """Class Document
    ===================
    Ordered sequence of rows with the active syntax rules.

    Attributes:
        rows (list[Row]): Rows in file order.
        dirty (int): Edit counter; 0 means unmodified since load/save.
        filename (Optional[str]): Target file, unset for a new buffer.
        syntax (Optional[SyntaxRules]): Active rules; None disables highlighting.
        highlighter (Highlighter): Recomputes highlight arrays after edits.

    Methods:
        insert_row(at, text), delete_row(at):
            Structural insert/delete with renumbering.
        insert_char(at, col, ch), delete_char(at, col), append_bytes(at, data):
            In-row edits.
        split_row(at, col), join_with_previous(at):
            Newline insertion and backspace-at-column-0 joins.
        load(data), to_text():
            Conversion from/to the on-disk byte format.
        set_syntax(rules), select_syntax(filename, registry):
            Change highlighting rules and rehighlight the whole file.
    """

    def __init__(
        self,
        filename: Optional[str] = None,
        syntax: Optional[SyntaxRules] = None,
    ) -> None:
        self.rows: list[Row] = []
        self.dirty: int = 0
        self.filename: Optional[str] = filename
        self.syntax: Optional[SyntaxRules] = syntax
        self.highlighter = Highlighter()

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def row(self, at: int) -> Optional[Row]:
        """Row at index ``at``, or None when out of range."""
        if 0 <= at < len(self.rows):
            return self.rows[at]
        return None

    def _renumber(self, start: int) -> None:
        for idx in range(start, len(self.rows)):
            self.rows[idx].position = idx

    def _refresh(self, at: int) -> None:
        """Rebuild render + highlight for row ``at`` and propagate."""
        self.rows[at].update_render()
        self.highlighter.update(self, at)

    # --- Structural edits ---
    def insert_row(self, at: int, text: bytes = b"") -> None:
        if not 0 <= at <= len(self.rows):
            return

        row = Row(at, text)
        # starts as the inherited state; propagation runs only if the row changes it
        row.open_comment = self.rows[at - 1].open_comment if at > 0 else False
        self.rows.insert(at, row)
        self._renumber(at + 1)
        self.highlighter.update(self, at)
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        if not 0 <= at < len(self.rows):
            return

        del self.rows[at]
        self._renumber(at)
        # The row now at `at` inherits from a different predecessor.
        self.highlighter.update(self, at)
        self.dirty += 1

    # --- In-row edits ---
    def insert_char(self, at: int, col: int, ch: int) -> None:
        """Insert byte ``ch`` into row ``at`` at ``col`` (clamped to the row)."""
        row = self.row(at)
        if row is None:
            return
        col = min(max(col, 0), len(row.raw))
        row.raw = row.raw[:col] + bytes((ch & 0xFF,)) + row.raw[col:]
        self._refresh(at)
        self.dirty += 1

    def delete_char(self, at: int, col: int) -> None:
        row = self.row(at)
        if row is None or not 0 <= col < len(row.raw):
            return
        row.raw = row.raw[:col] + row.raw[col + 1 :]
        self._refresh(at)
        self.dirty += 1

    def append_bytes(self, at: int, data: bytes) -> None:
        row = self.row(at)
        if row is None:
            return
        row.raw = row.raw + bytes(data)
        self._refresh(at)
        self.dirty += 1

    def split_row(self, at: int, col: int) -> None:
        """Break row ``at`` at ``col``; the suffix becomes the next row.

        Splitting at column 0 inserts an empty row before ``at`` and leaves
        the content untouched.
        """
        row = self.row(at)
        if row is None:
            return
        col = min(max(col, 0), len(row.raw))
        if col == 0:
            self.insert_row(at, b"")
            return

        self.insert_row(at + 1, row.raw[col:])
        row.raw = row.raw[:col]
        self._refresh(at)

    def join_with_previous(self, at: int) -> int:
        """Append row ``at`` to row ``at - 1`` and delete it.

        Returns:
            int: The previous row's length before the join (where the cursor
            should land), or -1 when nothing was joined.
        """
        row = self.row(at)
        if row is None or at == 0:
            return -1

        boundary = len(self.rows[at - 1].raw)
        self.append_bytes(at - 1, row.raw)
        self.delete_row(at)
        return boundary

    # --- Persistence ---
    def to_text(self) -> bytes:
        """Every row's raw bytes followed by a newline, in row order."""
        return b"".join(row.raw + b"\n" for row in self.rows)

    def load(self, data: bytes) -> None:
        """Replace the content with ``data`` split on newlines.

        Trailing CR/LF bytes are stripped from each line; nothing else is
        normalized. ``dirty`` is 0 afterwards.
        """
        self.rows = []
        lines = data.split(b"\n")
        if lines and lines[-1] == b"":
            lines.pop()
        for line in lines:
            self.insert_row(len(self.rows), line.rstrip(b"\r\n"))
        self.dirty = 0
        logging.debug(f"Document: loaded {len(self.rows)} rows ({len(data)} bytes).")

    # --- Syntax ---
    def set_syntax(self, rules: Optional[SyntaxRules]) -> None:
        self.syntax = rules
        self.highlighter.rehighlight_all(self)

    def select_syntax(self, filename: Optional[str], registry: SyntaxRegistry) -> Optional[SyntaxRules]:
        """Pick rules for ``filename`` from ``registry`` and rehighlight."""
        self.set_syntax(registry.select(filename))
        return self.syntax
