# rowedit/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen paints the rowedit editor state onto a curses window.

It is responsible for:
- drawing the visible rows as runs of highlight classes, one color pair per class,
- marking lines past the end of the file with ``~`` and showing the welcome
  banner for an empty buffer,
- rendering the status bar (file name, line count, modified flag, filetype,
  cursor line) and the message bar (status message or open prompt),
- placing the terminal cursor.

All geometry (scrolling, clipping to the viewport) comes from the `Editor`;
this class only turns its render output into curses calls. Curses errors are
caught and logged so a failed paint never stops the editor.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional

from rowedit.core.Editor import ROWEDIT_VERSION
from rowedit.core.Highlighter import Highlight, class_to_color
from rowedit.utils.utils import ansi_to_curses_color


if TYPE_CHECKING:
    from rowedit.core.Editor import Editor


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Renders one `Editor` onto ``stdscr``.

    Attributes:
        MIN_WINDOW_WIDTH (int): Narrowest window the editor draws into.
        MIN_WINDOW_HEIGHT (int): Lowest window the editor draws into.
        editor (Editor): Editor whose state is drawn.
        config (dict[str, Any]): Configuration, used for the ``[colors]`` table.
        stdscr (curses.window): The main curses window object.
        colors (dict[Highlight, int]): Curses attribute per highlight class.

    Methods:
        draw(prompt_text=None): Paint the whole screen.
        init_colors(): Create one color pair per highlight class.
    """

    MIN_WINDOW_WIDTH = 20
    MIN_WINDOW_HEIGHT = 5

    def __init__(self, editor: "Editor", stdscr: Any, config: Optional[dict[str, Any]] = None) -> None:
        self.editor = editor
        self.stdscr = stdscr
        self.config = config if config is not None else editor.config
        self.colors: dict[Highlight, int] = {}
        self.init_colors()

    def init_colors(self) -> None:
        """Create one color pair per highlight class.

        Falls back to plain attributes when the terminal has no colors.
        """
        try:
            curses.start_color()
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK

        for hl in Highlight:
            pair = int(hl) + 1
            fg = ansi_to_curses_color(class_to_color(hl), self.config)
            try:
                curses.init_pair(pair, fg, background)
                self.colors[hl] = curses.color_pair(pair)
            except curses.error as exc:
                logging.warning("init_pair failed for %s (%s); using A_NORMAL", hl.name, exc)
                self.colors[hl] = curses.A_REVERSE if hl == Highlight.MATCH else curses.A_NORMAL

    def draw(self, prompt_text: Optional[str] = None) -> None:
        """The main screen drawing method."""
        try:
            height, width = self.stdscr.getmaxyx()
            if height < self.MIN_WINDOW_HEIGHT or width < self.MIN_WINDOW_WIDTH:
                self._show_small_window_error(height, width)
                return

            self.stdscr.erase()
            self._draw_rows(width)
            self._draw_status_bar(width)
            self._draw_message_bar(width, prompt_text)
            self._position_cursor()
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)

    def _show_small_window_error(self, height: int, width: int) -> None:
        msg = f"Window too small ({width}x{height}). Minimum is {self.MIN_WINDOW_WIDTH}x{self.MIN_WINDOW_HEIGHT}."
        try:
            self.stdscr.clear()
            self.stdscr.addstr(height // 2, 0, msg[: max(0, width - 1)])
            self.stdscr.refresh()
        except curses.error:
            pass

    def _welcome_line(self, width: int) -> str:
        welcome = f"Rowedit editor -- version {ROWEDIT_VERSION}"[:width]
        padding = (width - len(welcome)) // 2
        if padding:
            return "~" + " " * (padding - 1) + welcome
        return welcome

    def _draw_rows(self, width: int) -> None:
        lines = self.editor.render_rows()
        num_rows = self.editor.document.num_rows
        screenrows = self.editor.viewport.screenrows

        for y, runs in enumerate(lines):
            if runs is None:
                if num_rows == 0 and y == screenrows // 3:
                    text = self._welcome_line(width)
                else:
                    text = "~"
                self._addstr(y, 0, text, curses.A_NORMAL)
                continue

            x = 0
            for hl, chunk in runs:
                # non-printable bytes show as "?" so columns stay aligned
                text = "".join(chr(b) if 32 <= b < 127 or b >= 160 else "?" for b in chunk)
                self._addstr(y, x, text, self.colors.get(hl, curses.A_NORMAL))
                x += len(text)

    def _draw_status_bar(self, width: int) -> None:
        y = self.editor.viewport.screenrows
        left, right = self.editor.status_line()
        left = left[:width]
        if len(left) + len(right) <= width:
            line = left + " " * (width - len(left) - len(right)) + right
        else:
            line = left + " " * (width - len(left))
        self._addstr(y, 0, line[:width], curses.A_REVERSE)

    def _draw_message_bar(self, width: int, prompt_text: Optional[str]) -> None:
        y = self.editor.viewport.screenrows + 1
        msg = prompt_text if prompt_text is not None else self.editor.current_message()
        if msg:
            self._addstr(y, 0, msg[: max(0, width - 1)], curses.A_NORMAL)

    def _position_cursor(self) -> None:
        cy, cx = self.editor.cursor_screen_position()
        try:
            self.stdscr.move(cy, cx)
        except curses.error:
            logging.debug(f"DrawScreen: cursor ({cy}, {cx}) outside the window.")

    def _addstr(self, y: int, x: int, text: str, attr: int) -> None:
        if not text:
            return
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # writing the last cell of the window raises after a successful write
            pass
