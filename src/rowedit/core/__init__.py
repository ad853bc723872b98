# src/rowedit/core/__init__.py
"""Public facade for rowedit.core: re-export main classes from CamelCase modules.

Keeps one CamelCase module per component (Document.py, Highlighter.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Document import Document  # noqa: F401
from .Editor import Editor  # noqa: F401
from .Highlighter import Highlight, Highlighter, class_to_color  # noqa: F401
from .Keys import Key  # noqa: F401
from .Row import Row, char_to_render_col, render_to_char_col  # noqa: F401
from .SearchEngine import SearchSession  # noqa: F401
from .SyntaxRules import SyntaxRegistry, SyntaxRules  # noqa: F401
from .Viewport import Viewport  # noqa: F401


__all__ = [
    "Document",
    "Editor",
    "Highlight",
    "Highlighter",
    "class_to_color",
    "Key",
    "Row",
    "char_to_render_col",
    "render_to_char_col",
    "SearchSession",
    "SyntaxRegistry",
    "SyntaxRules",
    "Viewport",
]
