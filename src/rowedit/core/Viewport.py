# rowedit/core/Viewport.py
"""Scroll offsets for the text area.

Offsets jump discretely: whenever the cursor leaves the visible window the
offset moves just far enough to bring it back. The cursor itself stays in
character space; only the horizontal check uses the visual column.
"""

from typing import TYPE_CHECKING

from rowedit.core.Row import char_to_render_col


if TYPE_CHECKING:
    from rowedit.core.Document import Document


class Viewport:
    """Visible window into the document.

    Attributes:
        screenrows (int): Text rows available (window height minus bars).
        screencols (int): Text columns available.
        rowoff (int): First document row shown.
        coloff (int): First visual column shown.
    """

    def __init__(self, screenrows: int = 24, screencols: int = 80) -> None:
        self.screenrows = max(1, screenrows)
        self.screencols = max(1, screencols)
        self.rowoff = 0
        self.coloff = 0

    def resize(self, screenrows: int, screencols: int) -> None:
        self.screenrows = max(1, screenrows)
        self.screencols = max(1, screencols)

    def scroll(self, document: "Document", cy: int, cx: int) -> int:
        """Adjust the offsets so the cursor (cy, cx) is visible.

        Returns:
            int: The cursor's visual column, for placing the terminal cursor.
        """
        rx = char_to_render_col(document.row(cy), cx)

        if cy < self.rowoff:
            self.rowoff = cy
        if cy >= self.rowoff + self.screenrows:
            self.rowoff = cy - self.screenrows + 1
        if rx < self.coloff:
            self.coloff = rx
        if rx >= self.coloff + self.screencols:
            self.coloff = rx - self.screencols + 1
        return rx

    def recenter(self, row: int) -> None:
        """Jump so that ``row`` sits in the middle of the window."""
        self.rowoff = max(0, row - self.screenrows // 2)
        self.coloff = 0

    def snapshot(self) -> tuple[int, int]:
        return self.rowoff, self.coloff

    def restore(self, offsets: tuple[int, int]) -> None:
        self.rowoff, self.coloff = offsets
