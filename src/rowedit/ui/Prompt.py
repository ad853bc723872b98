# rowedit/ui/Prompt.py
"""rowedit.ui.Prompt
====================
Single-line prompt shown in the message bar ("Save as: ...", "Search: ...").

A `PromptSession` owns the text typed so far and is fed decoded keys by the
`KeyBinder` until it finishes. The optional callback sees the buffer and the
key after every keystroke, which is how incremental search follows typing.
"""

import logging
from typing import Callable, Optional

from rowedit.core.Keys import Key, is_printable


PromptCallback = Callable[[str, int], object]


## ==================== PromptSession Class ====================
class PromptSession:
    """Class PromptSession
    ========================
    Collects one line of input in the message bar.

    Attributes:
        message (str): Format string; ``%s`` is replaced by the buffer.
        callback (Optional[PromptCallback]): Called as ``callback(buffer, key)``
            after every key, including the final ENTER/ESC.
        buffer (str): Text typed so far.
        done (bool): True once the prompt was accepted or cancelled.
        result (Optional[str]): The accepted text, None if cancelled.
    """

    def __init__(self, message: str, callback: Optional[PromptCallback] = None) -> None:
        self.message = message
        self.callback = callback
        self.buffer: str = ""
        self.done: bool = False
        self.result: Optional[str] = None

    def text(self) -> str:
        """Message bar text for the current buffer."""
        return self.message % self.buffer if "%s" in self.message else self.message + self.buffer

    def feed(self, key: int) -> bool:
        """Apply one key. Returns True when the prompt has finished."""
        if self.done:
            return True

        if key in (Key.DEL, Key.CTRL_H, Key.BACKSPACE):
            self.buffer = self.buffer[:-1]
        elif key == Key.ESC:
            self.done = True
            self.result = None
            logging.debug("Prompt: cancelled.")
        elif key == Key.ENTER:
            if self.buffer:
                self.done = True
                self.result = self.buffer
                logging.debug(f"Prompt: accepted {self.buffer!r}.")
        elif is_printable(key):
            self.buffer += chr(key)

        if self.callback is not None:
            self.callback(self.buffer, key)
        return self.done
