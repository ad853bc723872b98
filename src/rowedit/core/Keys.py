# rowedit/core/Keys.py
"""Logical key codes consumed by the editor core.

The front end decodes whatever the terminal sends into one of these values
before handing it to `Editor.process_key`. Printable input is passed through
as its byte value (0-255); everything else lives above that range.
"""

from enum import IntEnum


def ctrl_key(letter: str) -> int:
    """Return the control code for a letter, e.g. ``ctrl_key("q") == 17``."""
    return ord(letter) & 0x1F


class Key(IntEnum):
    CTRL_F = 6
    CTRL_H = 8
    TAB = 9
    CTRL_L = 12
    ENTER = 13
    CTRL_Q = 17
    CTRL_S = 19
    ESC = 27
    BACKSPACE = 127

    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DEL = 1004
    HOME = 1005
    END = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


NAVIGATION_KEYS = frozenset(
    {Key.ARROW_LEFT, Key.ARROW_RIGHT, Key.ARROW_UP, Key.ARROW_DOWN}
)


def is_printable(key: int) -> bool:
    """True for bytes the prompt accepts as query text (printable ASCII)."""
    return 32 <= key < 127
