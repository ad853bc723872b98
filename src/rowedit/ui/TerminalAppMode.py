# src/rowedit/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
from typing import Optional


class TerminalAppMode:
    """
    Put the terminal into the state the editor needs while it runs:

    - raw + noecho, so Ctrl-Q/Ctrl-S (normally XON/XOFF flow control) and
      Ctrl-C reach the editor as plain key codes.
    - keypad(True), so arrows and Home/End/PageUp/PageDown arrive decoded.
    - A short ESC delay so a lone ESC (cancel a prompt) is reported quickly.
    - scrollok(False), so writing the last cell never scrolls the screen.

    Always pair `enter(stdscr)` with `exit()` (try/finally), or use it as a
    context manager via `active(stdscr)`.
    """

    ESC_DELAY_MS = 25

    def __init__(self) -> None:
        self._entered: bool = False
        self._stdscr: Optional[curses.window] = None

    def enter(self, stdscr: curses.window) -> None:
        self._stdscr = stdscr
        try:
            curses.raw()
        except curses.error:
            curses.cbreak()  # fallback if raw is unavailable
        curses.noecho()
        stdscr.keypad(True)

        try:
            curses.set_escdelay(self.ESC_DELAY_MS)
        except (AttributeError, curses.error) as e:
            logging.debug("set_escdelay() unavailable: %r", e)

        stdscr.scrollok(False)
        stdscr.clearok(True)
        stdscr.erase()

        self._entered = True
        logging.debug("TerminalAppMode: entered (raw input, keypad).")

    def exit(self) -> None:
        if not self._entered:
            return

        if self._stdscr is not None:
            try:
                self._stdscr.keypad(False)
            except curses.error:
                pass
        try:
            curses.noraw()
            curses.echo()
        except curses.error as e:
            logging.debug("TerminalAppMode: restoring cooked mode failed: %r", e)

        self._entered = False
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    def active(self, stdscr: curses.window) -> "_ActiveMode":
        return _ActiveMode(self, stdscr)


class _ActiveMode:
    def __init__(self, mode: TerminalAppMode, stdscr: curses.window) -> None:
        self.mode = mode
        self.stdscr = stdscr

    def __enter__(self) -> TerminalAppMode:
        self.mode.enter(self.stdscr)
        return self.mode

    def __exit__(self, *exc_info) -> None:
        self.mode.exit()
