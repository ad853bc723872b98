# tests/ui/test_draw_screen.py
"""Unit tests for the `DrawScreen` UI renderer.
=================================================================

This module validates how the editor state is painted:

- One color pair per highlight class, colored from the ``[colors]`` table.
- Rows drawn as highlight runs, ``~`` past the end of file, and the welcome
  banner for an empty buffer.
- Status bar and message bar composition.
- Cursor placement relative to the scroll offsets.

The suite relies on a module-scoped autouse fixture that mocks `curses`
symbols used inside `rowedit.ui.DrawScreen` to ensure tests are hermetic and
do not require a real terminal.
"""

from typing import Any, Generator
from unittest.mock import MagicMock, call, patch

import pytest


# --- Global `curses` mock -----------------------------------------------------
@pytest.fixture(scope="module", autouse=True)
def mock_curses_module() -> Generator[MagicMock, None, None]:
    """Provide a module-level mock of `curses` for DrawScreen.

    Yields:
        MagicMock: The mock, patched into `rowedit.ui.DrawScreen` only.
    """
    curses_mock = MagicMock()

    class CursesError(Exception):
        """Minimal replacement for `curses.error` used in tests."""

    curses_mock.error = CursesError
    for name, val in {"A_NORMAL": 0, "A_REVERSE": 1, "COLOR_BLACK": 0}.items():
        setattr(curses_mock, name, val)

    # pair n -> 100 + n so color attributes are easy to recognize
    curses_mock.color_pair.side_effect = lambda x: 100 + x

    with patch("rowedit.ui.DrawScreen.curses", curses_mock):
        yield curses_mock


from rowedit.core.Editor import Editor  # noqa: E402
from rowedit.core.Highlighter import Highlight  # noqa: E402
from rowedit.core.SyntaxRules import C_RULES  # noqa: E402
from rowedit.ui.DrawScreen import DrawScreen  # noqa: E402


@pytest.fixture
def screen(editor: Editor, mock_stdscr: MagicMock, mock_curses_module: MagicMock) -> DrawScreen:
    mock_curses_module.reset_mock()
    return DrawScreen(editor, mock_stdscr)


def addstr_calls(stdscr: MagicMock) -> list[tuple[Any, ...]]:
    return [c.args for c in stdscr.addstr.call_args_list]


def test_color_pairs_follow_config(editor: Editor, mock_stdscr: MagicMock, mock_curses_module: MagicMock) -> None:
    mock_curses_module.reset_mock()
    editor.config["colors"] = {"33": "blue"}
    screen = DrawScreen(editor, mock_stdscr)

    # KEYWORD1 is ANSI 33 -> remapped to blue (4); unknown codes fall back to white
    keyword_pair = int(Highlight.KEYWORD1) + 1
    mock_curses_module.init_pair.assert_any_call(keyword_pair, 4, -1)
    mock_curses_module.init_pair.assert_any_call(int(Highlight.NUMBER) + 1, 7, -1)
    assert screen.colors[Highlight.KEYWORD1] == 100 + keyword_pair
    assert len(screen.colors) == len(Highlight)


def test_empty_buffer_shows_tildes_and_welcome(screen: DrawScreen, mock_stdscr: MagicMock) -> None:
    screen.draw()
    calls = addstr_calls(mock_stdscr)
    rows = {args[0]: args[2] for args in calls if args[0] < 22}
    assert len(rows) == 22
    assert rows[0] == "~"
    assert "Rowedit editor -- version" in rows[22 // 3]
    assert rows[22 // 3].startswith("~ ")


def test_rows_are_drawn_as_colored_runs(screen: DrawScreen, editor: Editor, mock_stdscr: MagicMock) -> None:
    editor.document.set_syntax(C_RULES)
    editor.document.load(b"int x; // c\n")
    screen.draw()

    calls = addstr_calls(mock_stdscr)
    assert (0, 0, "int", screen.colors[Highlight.KEYWORD2]) in calls
    assert (0, 3, " x; ", screen.colors[Highlight.NORMAL]) in calls
    assert (0, 7, "// c", screen.colors[Highlight.COMMENT]) in calls
    assert (1, 0, "~", 0) in calls


def test_non_printable_bytes_are_replaced(screen: DrawScreen, editor: Editor, mock_stdscr: MagicMock) -> None:
    editor.document.load(b"a\x01b\n")
    screen.draw()
    assert (0, 0, "a?b", screen.colors[Highlight.NORMAL]) in addstr_calls(mock_stdscr)


def test_status_and_message_bars(screen: DrawScreen, editor: Editor, mock_stdscr: MagicMock) -> None:
    editor.document.load(b"one\ntwo\n")
    editor.document.filename = "notes.txt"
    editor.set_status_message("hello")
    screen.draw()

    calls = addstr_calls(mock_stdscr)
    status = [args for args in calls if args[0] == 22]
    assert len(status) == 1
    text, attr = status[0][2], status[0][3]
    assert attr == 1  # A_REVERSE
    assert len(text) == 80
    assert text.startswith("notes.txt - 2 lines")
    assert text.endswith("no ft | 1/2")

    assert (23, 0, "hello", 0) in calls


def test_prompt_text_replaces_message(screen: DrawScreen, editor: Editor, mock_stdscr: MagicMock) -> None:
    editor.set_status_message("hello")
    screen.draw(prompt_text="Search: x")
    calls = addstr_calls(mock_stdscr)
    assert (23, 0, "Search: x", 0) in calls
    assert not any(args[2] == "hello" for args in calls)


def test_cursor_is_positioned_relative_to_offsets(screen: DrawScreen, editor: Editor, mock_stdscr: MagicMock) -> None:
    editor.document.load(b"x\n" * 50 + b"\tabc\n")
    editor.cy, editor.cx = 50, 2
    screen.draw()
    assert editor.viewport.rowoff == 29
    assert mock_stdscr.move.call_args == call(21, 9)


def test_small_window_shows_error(screen: DrawScreen, mock_stdscr: MagicMock) -> None:
    mock_stdscr.getmaxyx.return_value = (3, 40)
    screen.draw()
    text = mock_stdscr.addstr.call_args.args[2]
    assert text.startswith("Window too")
    mock_stdscr.move.assert_not_called()


def test_curses_errors_are_swallowed(screen: DrawScreen, mock_stdscr: MagicMock, mock_curses_module: MagicMock) -> None:
    mock_stdscr.addstr.side_effect = mock_curses_module.error("write past end")
    mock_stdscr.move.side_effect = mock_curses_module.error("bad position")
    screen.draw()  # must not raise
    mock_stdscr.noutrefresh.assert_called_once()
