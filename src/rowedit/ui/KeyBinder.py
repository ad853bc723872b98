# rowedit/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class turns what curses reports for a key press into the
logical `Key` codes of the editor core and routes each key to its consumer:
the active message-bar prompt if there is one, otherwise `Editor.process_key`.

Key Features:
- Maps curses ``KEY_*`` codes and raw control bytes to `Key` values.
- Decodes VT100/xterm escape sequences for terminals where keypad mode
  does not do it (arrows, Home/End, Delete, Page Up/Down).
- Opens the "Search:" prompt for Ctrl-F and wires it to the editor's
  incremental search.
- Opens the "Save as:" prompt for Ctrl-S when the document has no name.
- Traces decoded keys to the ``rowedit.keyevents`` logger.

Main Methods:
1. get_key_input: Reads a single key or escape sequence from the terminal.
2. translate: Maps one raw code to a logical key.
3. handle_input: Dispatches one logical key.
"""

import curses
import logging
import re
from typing import TYPE_CHECKING, Optional

from rowedit.core.Keys import Key
from rowedit.ui.Prompt import PromptSession
from rowedit.utils.logging_config import KEY_LOGGER

if TYPE_CHECKING:
    from rowedit.core.Editor import Editor


SEARCH_PROMPT = "Search: %s (Use ESC/Arrows/Enter)"
SAVE_AS_PROMPT = "Save as: %s (ESC to cancel)"


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Input decoding and dispatch for one `Editor`.

    Attributes:
        editor (Editor): The editor receiving the keys.
        stdscr: The curses window keys are read from (may be None in tests).
        key_map (dict[int, Key]): Raw code to logical key.
        prompt (Optional[PromptSession]): Prompt currently shown, if any.
    """
    # Escape sequences without the leading ESC, as read by get_key_input().
    ESCAPE_SEQUENCE_MAP: dict[str, Key] = {
        "[A": Key.ARROW_UP, "[B": Key.ARROW_DOWN,
        "[C": Key.ARROW_RIGHT, "[D": Key.ARROW_LEFT,
        "OA": Key.ARROW_UP, "OB": Key.ARROW_DOWN,
        "OC": Key.ARROW_RIGHT, "OD": Key.ARROW_LEFT,
        "[H": Key.HOME, "[F": Key.END, "OH": Key.HOME, "OF": Key.END,
        "[1~": Key.HOME, "[7~": Key.HOME, "[4~": Key.END, "[8~": Key.END,
        "[3~": Key.DEL, "[5~": Key.PAGE_UP, "[6~": Key.PAGE_DOWN,
    }

    def __init__(self, editor: "Editor", stdscr=None):
        logging.debug("KeyBinder initialized with editor: %s", editor)
        self.editor = editor
        self.stdscr = stdscr
        self.key_map = self._build_key_map()
        self.prompt: Optional[PromptSession] = None

    @staticmethod
    def _build_key_map() -> dict[int, Key]:
        return {
            curses.KEY_UP: Key.ARROW_UP,
            curses.KEY_DOWN: Key.ARROW_DOWN,
            curses.KEY_LEFT: Key.ARROW_LEFT,
            curses.KEY_RIGHT: Key.ARROW_RIGHT,
            curses.KEY_HOME: Key.HOME,
            curses.KEY_END: Key.END,
            curses.KEY_PPAGE: Key.PAGE_UP,
            curses.KEY_NPAGE: Key.PAGE_DOWN,
            curses.KEY_DC: Key.DEL,
            curses.KEY_BACKSPACE: Key.BACKSPACE,
            curses.KEY_ENTER: Key.ENTER,
            10: Key.ENTER,  # curses reports Enter as '\n'
            13: Key.ENTER,
            127: Key.BACKSPACE,
            8: Key.CTRL_H,
        }

    def translate(self, key_input: int) -> Optional[int]:
        """Map a raw code to a logical key.

        Returns:
            The `Key`, the byte value for plain input, or None for codes the
            editor has no use for (e.g. function keys).
        """
        if isinstance(key_input, Key):
            return key_input
        if key_input in self.key_map:
            return self.key_map[key_input]
        if 0 <= key_input <= 0xFF:
            return key_input
        return None

    def get_key_input(self, window=None) -> int:
        """Read a single key or key sequence from the terminal.

        Returns:
            int: a curses key code, a logical `Key` for decoded escape
            sequences, 27 for a lone ESC or an unknown sequence, and
            ``curses.ERR`` when nothing could be read.
        """
        target = window or self.stdscr
        try:
            ch = target.getch()
            if ch != 27:
                return ch

            seq = ""
            target.nodelay(True)
            try:
                while True:
                    nx = target.getch()
                    if nx == curses.ERR:
                        break
                    if 0 <= nx <= 255:
                        seq += chr(nx)
            finally:
                target.nodelay(False)

            if not seq:
                return Key.ESC

            mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
            if mapped is None:
                cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
                mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)
            if mapped is not None:
                return mapped

            logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
            return Key.ESC
        except curses.error:
            return curses.ERR

    # --- Prompts ---
    def open_search_prompt(self) -> PromptSession:
        self.editor.start_search()

        def on_search_key(buffer: str, key: int) -> None:
            self.editor.search_key(buffer.encode("latin-1"), key)

        self.prompt = PromptSession(SEARCH_PROMPT, on_search_key)
        return self.prompt

    def open_save_prompt(self) -> PromptSession:
        self.prompt = PromptSession(SAVE_AS_PROMPT)
        return self.prompt

    def _finish_prompt(self) -> None:
        prompt, self.prompt = self.prompt, None
        if prompt.message == SAVE_AS_PROMPT:
            if prompt.result is None:
                self.editor.set_status_message("Save aborted")
            else:
                self.editor.save(prompt.result)

    def prompt_text(self) -> Optional[str]:
        """Message bar text while a prompt is open."""
        return self.prompt.text() if self.prompt is not None else None

    # --- Dispatch ---
    def handle_input(self, key_input: int) -> bool:
        """Process one raw key event.

        Returns:
            bool: True if the screen needs a redraw.
        """
        if key_input == curses.ERR:
            return False
        if key_input == curses.KEY_RESIZE:
            if self.stdscr is not None:
                self.editor.resize(*self.stdscr.getmaxyx())
            return True

        key = self.translate(key_input)
        KEY_LOGGER.debug("raw=%r key=%r prompt=%s", key_input, key, self.prompt is not None)
        if key is None:
            return False

        if self.prompt is not None:
            if self.prompt.feed(key):
                self._finish_prompt()
            return True

        if key == Key.CTRL_F:
            self.open_search_prompt()
            return True
        if key == Key.CTRL_S and not self.editor.document.filename:
            self.open_save_prompt()
            return True
        return self.editor.process_key(key)
