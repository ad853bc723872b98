# rowedit/core/Highlighter.py
"""rowedit.core.Highlighter
===========================
Syntax highlighting for document rows.

Each row is highlighted by a single left-to-right scan over its ``render``
bytes. The only state carried between rows is whether the previous row ended
inside a block comment (``Row.open_comment``). When a rescan changes that
trailing state, the next row has to be rescanned too, and so on down the file
until a row's state stops changing. That forward walk is a plain loop over
row indices, so a block comment spanning thousands of lines costs time but
never stack depth.

Policy: the single-line comment marker is not recognized inside a string
literal, so ``"http://x"`` stays a string.
"""

import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Optional


if TYPE_CHECKING:
    from rowedit.core.Document import Document
    from rowedit.core.Row import Row
    from rowedit.core.SyntaxRules import SyntaxRules


class Highlight(IntEnum):
    """Highlight class of one rendered byte. Used only to pick a color."""

    NORMAL = 0
    COMMENT = 1
    MLCOMMENT = 2
    KEYWORD1 = 3
    KEYWORD2 = 4
    STRING = 5
    NUMBER = 6
    MATCH = 7


# ANSI foreground codes; the curses painter maps them onto color pairs.
HIGHLIGHT_COLORS: dict[Highlight, int] = {
    Highlight.NORMAL: 37,
    Highlight.COMMENT: 36,
    Highlight.MLCOMMENT: 36,
    Highlight.KEYWORD1: 33,
    Highlight.KEYWORD2: 32,
    Highlight.STRING: 35,
    Highlight.NUMBER: 31,
    Highlight.MATCH: 34,
}

SEPARATORS = frozenset(b",.()+-/*=~%<>[];")
WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")
QUOTES = frozenset(b"\"'")
BACKSLASH = 0x5C
DOT = 0x2E


def class_to_color(hl: Highlight) -> int:
    """Map a highlight class to its fixed ANSI color code."""
    return HIGHLIGHT_COLORS.get(hl, 37)


def is_separator(byte: int) -> bool:
    """Whitespace, NUL, or one of ``,.()+-/*=~%<>[];``."""
    return byte == 0 or byte in WHITESPACE or byte in SEPARATORS


def _is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


## ==================== Highlighter Class ====================
class Highlighter:
    """Class Highlighter
    ======================
    Recomputes ``Row.highlight`` and ``Row.open_comment``.

    The class is stateless between calls; everything it needs comes from the
    row, the previous row's stored ``open_comment`` and the active
    `SyntaxRules`.

    Methods:
        highlight_row(row, syntax, open_comment) -> bool:
            Scan one row and return its final block-comment state.
        update(document, at) -> int:
            Rescan row ``at`` and propagate forward; returns rows scanned.
        rehighlight_all(document) -> None:
            Rescan every row top to bottom (after a syntax change).
    """

    def highlight_row(
        self, row: "Row", syntax: Optional["SyntaxRules"], open_comment: bool
    ) -> bool:
        """Fill ``row.highlight`` from ``row.render``.

        Args:
            row: Row to scan. Its ``render`` must be current.
            syntax: Active rules, or None for all-NORMAL.
            open_comment: Final block-comment state of the previous row.

        Returns:
            bool: True if the row ends inside a block comment.
        """
        text = row.render
        n = len(text)
        hl = [Highlight.NORMAL] * n
        row.highlight = hl
        if syntax is None:
            return False

        scs, mcs, mce = syntax.markers
        keywords = syntax.keyword_table
        strings_on = syntax.highlight_strings
        numbers_on = syntax.highlight_numbers

        prev_sep = True
        in_string = 0
        in_comment = bool(mcs) and open_comment

        i = 0
        while i < n:
            c = text[i]
            prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

            if scs and not in_string and not in_comment and text.startswith(scs, i):
                hl[i:] = [Highlight.COMMENT] * (n - i)
                break

            if mcs and not in_string:
                if in_comment:
                    if text.startswith(mce, i):
                        end = i + len(mce)
                        hl[i:end] = [Highlight.MLCOMMENT] * (end - i)
                        i = end
                        in_comment = False
                        prev_sep = True
                        continue
                    hl[i] = Highlight.MLCOMMENT
                    i += 1
                    continue
                if text.startswith(mcs, i):
                    end = i + len(mcs)
                    hl[i:end] = [Highlight.MLCOMMENT] * (end - i)
                    i = end
                    in_comment = True
                    continue

            if strings_on:
                if in_string:
                    hl[i] = Highlight.STRING
                    if c == BACKSLASH and i + 1 < n:
                        hl[i + 1] = Highlight.STRING
                        i += 2
                        continue
                    if c == in_string:
                        in_string = 0
                    i += 1
                    prev_sep = True
                    continue
                if c in QUOTES:
                    in_string = c
                    hl[i] = Highlight.STRING
                    i += 1
                    continue

            if numbers_on:
                if (_is_digit(c) and (prev_sep or prev_hl == Highlight.NUMBER)) or (
                    c == DOT and prev_hl == Highlight.NUMBER
                ):
                    hl[i] = Highlight.NUMBER
                    i += 1
                    prev_sep = False
                    continue

            if prev_sep:
                matched = self._match_keyword(text, i, keywords)
                if matched is not None:
                    length, secondary = matched
                    tag = Highlight.KEYWORD2 if secondary else Highlight.KEYWORD1
                    hl[i : i + length] = [tag] * length
                    i += length
                    prev_sep = False
                    continue

            prev_sep = is_separator(c)
            i += 1

        return in_comment

    @staticmethod
    def _match_keyword(
        text: bytes, i: int, keywords: tuple[tuple[bytes, bool], ...]
    ) -> Optional[tuple[int, bool]]:
        # keywords are sorted longest first, so the first hit is the longest
        for word, secondary in keywords:
            if not text.startswith(word, i):
                continue
            end = i + len(word)
            if end == len(text) or is_separator(text[end]):
                return len(word), secondary
        return None

    def update(self, document: "Document", at: int) -> int:
        """Rescan row ``at`` and every following row whose inherited state changed.

        Returns:
            int: Number of rows scanned (0 if ``at`` is out of range).
        """
        rows = document.rows
        if not 0 <= at < len(rows):
            return 0

        scanned = 0
        idx = at
        while idx < len(rows):
            row = rows[idx]
            inherited = rows[idx - 1].open_comment if idx > 0 else False
            closing = self.highlight_row(row, document.syntax, inherited)
            scanned += 1
            if closing == row.open_comment:
                break
            row.open_comment = closing
            idx += 1

        if scanned > 1:
            logging.debug(f"Highlighter: open-comment change at row {at} rescanned {scanned} rows.")
        return scanned

    def rehighlight_all(self, document: "Document") -> None:
        inherited = False
        for row in document.rows:
            row.open_comment = self.highlight_row(row, document.syntax, inherited)
            inherited = row.open_comment
