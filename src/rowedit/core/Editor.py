# rowedit/core/Editor.py
"""rowedit.core.Editor
======================
Editor: the explicit editor-state value for the rowedit terminal editor.

The `Editor` object bundles everything one editing session needs and is
passed to every component that acts on it; nothing is kept in module-level
globals. It manages:

- The `Document` being edited and the registry its syntax comes from.
- The cursor (``cx``, ``cy`` in character space) and the `Viewport`.
- Key processing for already-decoded logical keys (`Key`), including
  navigation, editing, save and the quit confirmation counter.
- File open/save. Loading errors propagate to the caller; a failed save is
  reported in the status message and leaves the document untouched.
- The active `SearchSession` and the cursor position to restore when the
  search is cancelled.
- Render output: per visible row, runs of ``(Highlight, bytes)`` clipped
  to the viewport, ready for a terminal painter.
"""

import logging
import time
from pathlib import Path
from typing import Any, Optional, Union

from rowedit.core.Document import Document
from rowedit.core.Highlighter import Highlight
from rowedit.core.Keys import Key
from rowedit.core.SearchEngine import SearchSession
from rowedit.core.SyntaxRules import SyntaxRegistry
from rowedit.core.Viewport import Viewport


ROWEDIT_VERSION = "0.1.0"
DEFAULT_QUIT_TIMES = 2
DEFAULT_MESSAGE_TIMEOUT = 5.0

# status bar + message bar
RESERVED_SCREEN_ROWS = 2

Run = tuple[Highlight, bytes]


def highlight_runs(render: bytes, highlight: list[Highlight]) -> list[Run]:
    """Group a rendered slice into runs of equal highlight class."""
    runs: list[Run] = []
    start = 0
    for i in range(1, len(render) + 1):
        if i == len(render) or highlight[i] != highlight[start]:
            runs.append((highlight[start], render[start:i]))
            start = i
    return runs


## ==================== Editor Class ====================
class Editor:
    """Class Editor
    =================
    State and operations of one editing session.

    Attributes:
        config (dict): Merged configuration (see ``rowedit.utils.utils``).
        registry (SyntaxRegistry): Languages available for highlighting.
        document (Document): The buffer being edited.
        cx (int): Cursor column, as a character offset into the row.
        cy (int): Cursor row; may equal ``num_rows`` (one past the end).
        rx (int): Cursor visual column, updated by `scroll`.
        viewport (Viewport): Scroll offsets and text-area size.
        status_message (str): Last message for the message bar.
        status_time (float): When ``status_message`` was set.
        quit_times (int): Extra Ctrl-Q presses still required while dirty.
        running (bool): False once the user has quit.
        search (Optional[SearchSession]): Active search, if any.

    Methods:
        process_key(key): Dispatch one logical key.
        insert_char(ch), insert_newline(), delete_char(): Editing at the cursor.
        move_cursor(key): Arrow-key navigation.
        open_file(path), save(filename=None): Persistence.
        start_search(), search_key(query, key): Incremental search.
        render_rows(), status_line(), current_message(): Render output.
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        registry: Optional[SyntaxRegistry] = None,
        screen_size: tuple[int, int] = (24, 80),
    ) -> None:
        self.config: dict[str, Any] = config or {}
        editor_config = self.config.get("editor", {})
        self.registry = registry if registry is not None else SyntaxRegistry.from_config(self.config)

        self.document = Document()
        self.cx: int = 0
        self.cy: int = 0
        self.rx: int = 0

        rows, cols = screen_size
        self.viewport = Viewport(rows - RESERVED_SCREEN_ROWS, cols)

        self.status_message: str = ""
        self.status_time: float = 0.0
        self.message_timeout = float(editor_config.get("message_timeout", DEFAULT_MESSAGE_TIMEOUT))
        self.default_quit_times = int(editor_config.get("quit_times", DEFAULT_QUIT_TIMES))
        self.quit_times: int = self.default_quit_times
        self.running: bool = True

        self.search: Optional[SearchSession] = None
        self._search_saved: Optional[tuple[int, int, tuple[int, int]]] = None

    # --- Status ---
    def set_status_message(self, fmt: str, *args: object) -> None:
        self.status_message = fmt % args if args else fmt
        self.status_time = time.time()

    def current_message(self) -> str:
        """The status message, or "" once it is older than the timeout."""
        if self.status_message and time.time() - self.status_time < self.message_timeout:
            return self.status_message
        return ""

    def status_line(self) -> tuple[str, str]:
        """Left and right halves of the status bar."""
        doc = self.document
        name = doc.filename or "[No Name]"
        left = f"{name[:20]} - {doc.num_rows} lines"
        if doc.dirty:
            left += " (modified)"
        filetype = doc.syntax.filetype if doc.syntax else "no ft"
        right = f"{filetype} | {self.cy + 1}/{doc.num_rows}"
        return left, right

    # --- Window ---
    def resize(self, rows: int, cols: int) -> None:
        self.viewport.resize(rows - RESERVED_SCREEN_ROWS, cols)
        logging.debug(f"Editor: resized text area to {self.viewport.screenrows}x{self.viewport.screencols}.")

    def scroll(self) -> int:
        self.rx = self.viewport.scroll(self.document, self.cy, self.cx)
        return self.rx

    # --- Editing at the cursor ---
    def insert_char(self, ch: int) -> None:
        """Insert a byte at the cursor, appending a row if the cursor is past the end."""
        if self.cy == self.document.num_rows:
            self.document.insert_row(self.document.num_rows, b"")
        self.document.insert_char(self.cy, self.cx, ch)
        self.cx += 1

    def insert_newline(self) -> None:
        if self.cy >= self.document.num_rows:
            self.document.insert_row(self.document.num_rows, b"")
        else:
            self.document.split_row(self.cy, self.cx)
        self.cy += 1
        self.cx = 0

    def delete_char(self) -> None:
        """Backspace: delete left of the cursor, joining rows at column 0."""
        if self.cy >= self.document.num_rows:
            return
        if self.cx == 0 and self.cy == 0:
            return

        if self.cx > 0:
            self.document.delete_char(self.cy, self.cx - 1)
            self.cx -= 1
        else:
            boundary = self.document.join_with_previous(self.cy)
            self.cy -= 1
            self.cx = boundary

    # --- Navigation ---
    def move_cursor(self, key: int) -> None:
        row = self.document.row(self.cy)

        if key == Key.ARROW_LEFT:
            if self.cx != 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = len(self.document.rows[self.cy])
        elif key == Key.ARROW_RIGHT:
            if row is not None and self.cx < len(row):
                self.cx += 1
            elif row is not None and self.cx == len(row):
                self.cy += 1
                self.cx = 0
        elif key == Key.ARROW_UP:
            if self.cy != 0:
                self.cy -= 1
        elif key == Key.ARROW_DOWN:
            if self.cy < self.document.num_rows:
                self.cy += 1

        # snap to the end of a shorter row
        row = self.document.row(self.cy)
        row_len = len(row) if row is not None else 0
        if self.cx > row_len:
            self.cx = row_len

    def _page(self, key: int) -> None:
        if key == Key.PAGE_UP:
            self.cy = self.viewport.rowoff
        else:
            self.cy = min(
                self.viewport.rowoff + self.viewport.screenrows - 1,
                self.document.num_rows,
            )
        step = Key.ARROW_UP if key == Key.PAGE_UP else Key.ARROW_DOWN
        for _ in range(self.viewport.screenrows):
            self.move_cursor(step)

    def process_key(self, key: int) -> bool:
        """Apply one decoded logical key to the editor state.

        Returns:
            bool: False if the key was ignored (nothing to redraw).
        """
        if key == Key.CTRL_Q:
            if self.document.dirty and self.quit_times > 0:
                self.set_status_message(
                    "WARNING! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                    self.quit_times,
                )
                self.quit_times -= 1
                return True
            logging.info("Editor: quit requested.")
            self.running = False
            return True

        handled = True
        if key == Key.ENTER:
            self.insert_newline()
        elif key == Key.CTRL_S:
            self.save()
        elif key == Key.CTRL_F:
            self.start_search()
        elif key in (Key.BACKSPACE, Key.CTRL_H, Key.DEL):
            if key == Key.DEL:
                self.move_cursor(Key.ARROW_RIGHT)
            self.delete_char()
        elif key == Key.HOME:
            self.cx = 0
        elif key == Key.END:
            row = self.document.row(self.cy)
            if row is not None:
                self.cx = len(row)
        elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
            self._page(key)
        elif key in (Key.ARROW_UP, Key.ARROW_DOWN, Key.ARROW_LEFT, Key.ARROW_RIGHT):
            self.move_cursor(key)
        elif key in (Key.CTRL_L, Key.ESC):
            handled = False
        elif 0 <= key <= 0xFF:
            self.insert_char(key)
        else:
            logging.debug(f"Editor: ignoring unknown key code {key}.")
            handled = False

        self.quit_times = self.default_quit_times
        return handled

    # --- File I/O ---
    def open_file(self, path: Union[str, Path]) -> None:
        """Load ``path`` into a fresh document.

        Raises:
            OSError: If the file cannot be read. The caller decides whether
                that is fatal.
        """
        filename = str(path)
        data = Path(path).read_bytes()

        document = Document(filename=filename, syntax=self.registry.select(filename))
        document.load(data)
        self.document = document
        self.cx = self.cy = 0
        self.viewport.restore((0, 0))
        logging.info(
            f"Opened {filename!r}: {document.num_rows} rows, "
            f"syntax={document.syntax.filetype if document.syntax else None}."
        )

    def save(self, filename: Optional[str] = None) -> bool:
        """Write the document to its file (or ``filename``, which becomes its name).

        Returns:
            bool: True on success. On failure the status message carries the
            I/O error and the document (name, syntax and ``dirty``) is
            unchanged.
        """
        target = filename or self.document.filename
        if not target:
            self.set_status_message("Save aborted: no file name")
            return False

        data = self.document.to_text()
        try:
            with open(target, "wb") as f:
                f.write(data)
        except OSError as e:
            logging.error(f"Failed to save {target!r}: {e}")
            self.set_status_message("Can't save! I/O error: %s", e.strerror or str(e))
            return False

        if filename and filename != self.document.filename:
            self.document.filename = filename
            self.document.select_syntax(filename, self.registry)
        self.document.dirty = 0
        self.set_status_message("%d bytes written to disk", len(data))
        logging.info(f"Saved {len(data)} bytes to {target!r}.")
        return True

    # --- Search ---
    def start_search(self) -> SearchSession:
        self.search = SearchSession(self)
        self._search_saved = (self.cx, self.cy, self.viewport.snapshot())
        return self.search

    def search_key(self, query: bytes, key: int) -> bool:
        """Feed one prompt keystroke to the active search session.

        Cancelling (ESC) puts the cursor and scroll offsets back where they
        were when the search started. ENTER on an empty query ends the
        session but not the prompt, so the saved position is kept for the
        session the next keystroke starts.
        """
        if self.search is None:
            if self._search_saved is None:
                self.start_search()
            else:
                self.search = SearchSession(self)
        session = self.search
        found = session.on_key(query, key)

        if not session.active:
            self.search = None
            if key == Key.ESC or query:
                if key == Key.ESC and self._search_saved is not None:
                    self.cx, self.cy, offsets = self._search_saved
                    self.viewport.restore(offsets)
                self._search_saved = None
        return found

    # --- Render output ---
    def render_rows(self) -> list[Optional[list[Run]]]:
        """Visible rows as highlight runs; None for rows past the end of file."""
        self.scroll()
        vp = self.viewport
        lines: list[Optional[list[Run]]] = []
        for y in range(vp.screenrows):
            row = self.document.row(vp.rowoff + y)
            if row is None:
                lines.append(None)
                continue
            start, end = vp.coloff, vp.coloff + vp.screencols
            lines.append(highlight_runs(row.render[start:end], row.highlight[start:end]))
        return lines

    def cursor_screen_position(self) -> tuple[int, int]:
        """Cursor (y, x) relative to the text area, after `scroll`."""
        return self.cy - self.viewport.rowoff, self.rx - self.viewport.coloff
