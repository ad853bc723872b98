# tests/conftest.py
"""Pytest configuration with shared fixtures for the rowedit editor tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from rowedit.core.Document import Document
from rowedit.core.Editor import Editor
from rowedit.core.SyntaxRules import C_RULES, SyntaxRegistry
from rowedit.utils.utils import DEFAULT_CONFIG, deep_merge


# Four-row C snippet used across the core tests.
C_SCENARIO = b"int x = 1; // init\n/* block\nstill comment */\ndone\n"


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr for testing UI components.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """The embedded defaults, with pygments guessing disabled for determinism."""
    return deep_merge(DEFAULT_CONFIG, {"syntax": {"guess_with_pygments": False}})


@pytest.fixture
def c_registry() -> SyntaxRegistry:
    """Registry with only the built-in C rules."""
    return SyntaxRegistry(rules=(C_RULES,), guess_with_pygments=False)


@pytest.fixture
def c_document() -> Document:
    """The four-row C scenario, highlighted with the C rules."""
    doc = Document(filename="main.c", syntax=C_RULES)
    doc.load(C_SCENARIO)
    return doc


@pytest.fixture
def editor(mock_config: dict[str, Any]) -> Editor:
    """A fresh editor on a 24x80 screen with an empty, unnamed document."""
    return Editor(config=mock_config, screen_size=(24, 80))


@pytest.fixture
def c_editor(editor: Editor, c_document: Document) -> Editor:
    """Editor holding the C scenario document."""
    editor.document = c_document
    return editor
