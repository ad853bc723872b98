# rowedit/core/SearchEngine.py
"""rowedit.core.SearchEngine
============================
Incremental substring search, driven one keystroke at a time.

A `SearchSession` is created when the user starts a search and receives the
current query plus the key that was just pressed, every time the prompt
changes. It keeps its own state (last match row, direction and the
highlight snapshot of the row currently showing MATCH tags), so nothing
lives in module globals and two sessions never share state.

Key handling:

- ESC cancels: the MATCH tags are removed and the session ends. Restoring
  the pre-search cursor is the caller's job.
- ENTER accepts: the cursor stays on the match, the MATCH tags are removed
  and the session ends.
- Right/Down search forward from the last match, Left/Up backward.
- Any other key means the query changed: the search restarts forward from
  the top of the file.
"""

import logging
from typing import TYPE_CHECKING, Optional

from rowedit.core.Highlighter import Highlight
from rowedit.core.Keys import Key
from rowedit.core.Row import render_to_char_col


if TYPE_CHECKING:
    from rowedit.core.Editor import Editor


FORWARD_KEYS = frozenset({Key.ARROW_RIGHT, Key.ARROW_DOWN})
BACKWARD_KEYS = frozenset({Key.ARROW_LEFT, Key.ARROW_UP})


## ==================== SearchSession Class ====================
class SearchSession:
    """Class SearchSession
    ========================
    State of one interactive search.

    Attributes:
        editor (Editor): Editor whose document is searched and whose cursor
            and viewport follow the match.
        last_match (int): Row of the current match, -1 for none.
        direction (int): +1 forward, -1 backward.
        saved_row (Optional[int]): Row whose highlight is currently overwritten.
        saved_highlight (Optional[list[Highlight]]): That row's highlight
            before the MATCH tags were painted.
        active (bool): False once ESC or ENTER ended the session.
    """

    def __init__(self, editor: "Editor") -> None:
        self.editor = editor
        self.last_match: int = -1
        self.direction: int = 1
        self.saved_row: Optional[int] = None
        self.saved_highlight: Optional[list[Highlight]] = None
        self.active: bool = True

    def _reset(self) -> None:
        self.last_match = -1
        self.direction = 1

    def restore_highlight(self) -> None:
        """Put back the highlight overwritten by the last match, if any."""
        if self.saved_highlight is not None and self.saved_row is not None:
            row = self.editor.document.row(self.saved_row)
            if row is not None and len(row.highlight) == len(self.saved_highlight):
                row.highlight = self.saved_highlight
        self.saved_row = None
        self.saved_highlight = None

    def on_key(self, query: bytes, key: int) -> bool:
        """Process one keystroke of the search prompt.

        Args:
            query: Query text as currently typed.
            key: The logical key that was just pressed.

        Returns:
            bool: True if a match was found by this keystroke.
        """
        self.restore_highlight()

        if key in (Key.ESC, Key.ENTER):
            self._reset()
            self.active = False
            return False

        if key in FORWARD_KEYS:
            self.direction = 1
        elif key in BACKWARD_KEYS:
            self.direction = -1
        else:
            self._reset()

        if self.last_match == -1:
            self.direction = 1

        return self.step(query)

    def step(self, query: bytes) -> bool:
        """Find the next row containing ``query`` in the current direction.

        Scans at most ``num_rows`` rows starting after ``last_match``,
        wrapping at either end. On a hit the cursor moves to the match, the
        viewport recenters on it and the matched span is painted MATCH.
        """
        document = self.editor.document
        num_rows = document.num_rows
        if not query or num_rows == 0:
            return False

        current = self.last_match
        for _ in range(num_rows):
            current += self.direction
            if current == -1:
                current = num_rows - 1
            elif current == num_rows:
                current = 0

            row = document.rows[current]
            match_rx = row.render.find(query)
            if match_rx == -1:
                continue

            self.last_match = current
            self.editor.cy = current
            self.editor.cx = render_to_char_col(row, match_rx)
            self.editor.viewport.recenter(current)

            self.saved_row = current
            self.saved_highlight = list(row.highlight)
            end = min(match_rx + len(query), len(row.highlight))
            row.highlight[match_rx:end] = [Highlight.MATCH] * (end - match_rx)
            logging.debug(f"Search: {query!r} found at row {current}, rx {match_rx}.")
            return True

        logging.debug(f"Search: no match for {query!r}.")
        return False
