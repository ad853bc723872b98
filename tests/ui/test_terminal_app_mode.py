# tests/ui/test_terminal_app_mode.py
"""Unit tests for `TerminalAppMode` with a mocked `curses` module."""

from unittest.mock import MagicMock, patch

import pytest

from rowedit.ui.TerminalAppMode import TerminalAppMode


@pytest.fixture
def curses_mock():
    mock = MagicMock()

    class CursesError(Exception):
        pass

    mock.error = CursesError
    with patch("rowedit.ui.TerminalAppMode.curses", mock):
        yield mock


def test_enter_and_exit(curses_mock: MagicMock, mock_stdscr: MagicMock) -> None:
    mode = TerminalAppMode()
    with mode.active(mock_stdscr):
        curses_mock.raw.assert_called_once()
        curses_mock.noecho.assert_called_once()
        curses_mock.set_escdelay.assert_called_once_with(TerminalAppMode.ESC_DELAY_MS)
        mock_stdscr.keypad.assert_called_with(True)
        mock_stdscr.scrollok.assert_called_with(False)

    curses_mock.noraw.assert_called_once()
    curses_mock.echo.assert_called_once()
    mock_stdscr.keypad.assert_called_with(False)


def test_raw_failure_falls_back_to_cbreak(curses_mock: MagicMock, mock_stdscr: MagicMock) -> None:
    curses_mock.raw.side_effect = curses_mock.error("no raw")
    mode = TerminalAppMode()
    mode.enter(mock_stdscr)
    curses_mock.cbreak.assert_called_once()
    mode.exit()


def test_exit_without_enter_is_noop(curses_mock: MagicMock) -> None:
    TerminalAppMode().exit()
    curses_mock.noraw.assert_not_called()


def test_exit_restores_even_on_error(curses_mock: MagicMock, mock_stdscr: MagicMock) -> None:
    mode = TerminalAppMode()
    with pytest.raises(RuntimeError):
        with mode.active(mock_stdscr):
            raise RuntimeError("boom")
    curses_mock.noraw.assert_called_once()
