#!/usr/bin/env python3
# /rowedit/main.py
"""
Rowedit Main Entry Point
========================

This script is the primary entry point for launching the rowedit editor. It performs:
1) Path Setup: ensures the rowedit package under src/ is importable from a checkout.
2) Configuration & Logging: loads config and initializes logging ASAP.
3) Core Import: imports the editor classes after logging is ready.
4) File Loading: reads the file named on the command line, if any. A file
   that cannot be read is fatal and exits with status 1.
5) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
6) Application Run: draws, reads a key and dispatches it until the user quits.
"""

from __future__ import annotations

import curses
import locale
import logging
import os
import sys
from typing import Any, Optional

# --- Step 1: Set up the Python Path ---
project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if os.path.isdir(src_dir) and src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# --- Step 2: Immediate Logging and Configuration Setup ---
try:
    from rowedit.utils.logging_config import setup_logging
    from rowedit.utils.utils import load_config

    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger = logging.getLogger("rowedit")
except Exception as e:
    # Logging is not ready; print to stderr and exit.
    print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
    import traceback
    traceback.print_exc()
    sys.exit(1)

# --- Step 3: Import the Core Application ---
try:
    from rowedit.core.Editor import Editor
    from rowedit.ui.DrawScreen import DrawScreen
    from rowedit.ui.KeyBinder import KeyBinder
    from rowedit.ui.TerminalAppMode import TerminalAppMode
except ImportError as e:
    logger.critical("Failed to import a critical application component: %s", e, exc_info=True)
    sys.exit(1)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


def run_editor(stdscr: curses.window, editor: Editor) -> None:
    """
    Target for `curses.wrapper`: the draw, read, dispatch loop.

    Runs until `editor.running` is False.
    """
    with TerminalAppMode().active(stdscr):
        editor.resize(*stdscr.getmaxyx())
        screen = DrawScreen(editor, stdscr)
        keys = KeyBinder(editor, stdscr)
        editor.set_status_message(HELP_MESSAGE)

        while editor.running:
            screen.draw(keys.prompt_text())
            keys.handle_input(keys.get_key_input())


def start(argv: Optional[list[str]] = None) -> int:
    """
    Loads the file named in argv (if any) and runs the curses application.

    Returns:
        int: Process exit status.
    """
    argv = sys.argv if argv is None else argv
    logger.info("Rowedit editor starting up...")

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    editor = Editor(config=config)
    if len(argv) > 1:
        try:
            editor.open_file(argv[1])
        except OSError as e:
            logger.critical("Cannot open %r: %s", argv[1], e)
            print(f"rowedit: {argv[1]}: {e.strerror or e}", file=sys.stderr)
            return 1

    try:
        curses.wrapper(run_editor, editor)
        logger.info("Rowedit editor shut down gracefully.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(start())
