# rowedit/core/SyntaxRules.py
"""rowedit.core.SyntaxRules
===========================
Language descriptors for the highlighter and the registry that selects one
for a filename.

A `SyntaxRules` value is immutable: its keyword list, comment markers and
feature flags never change once the registry is built. The `SyntaxRegistry`
maps a filetype identifier to its descriptor, so new languages can be added
at startup (from ``config.toml``) without touching this module.

Selection order for a filename:

1. Registry patterns. Patterns starting with ``.`` must match the end of the
   file name; any other pattern is a substring match.
2. Pygments fallback. When enabled, ``pygments`` resolves the filename to a
   lexer and the lexer's aliases are looked up in the registry. This lets
   ``widget.cxx`` or ``setup.pyw`` pick up the C or Python rules without
   listing every extension by hand.
3. No match: highlighting is disabled (``None``).
"""

import functools
import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound


HL_HIGHLIGHT_NUMBERS = 1 << 0
HL_HIGHLIGHT_STRINGS = 1 << 1

SECONDARY_MARKER = "|"


## ==================== SyntaxRules ====================
@dataclass(frozen=True)
class SyntaxRules:
    """Immutable description of one language.

    Attributes:
        filetype: Registry key and the name shown in the status bar.
        filematch: Filename patterns (``.ext`` suffixes or substrings).
        keywords: Keyword list. A trailing ``|`` marks a secondary keyword
            (types in the C table), highlighted with KEYWORD2.
        singleline_comment_start: Marker that comments out the rest of a row.
        multiline_comment_start: Block comment opener ("" disables).
        multiline_comment_end: Block comment closer.
        flags: ``HL_HIGHLIGHT_NUMBERS`` / ``HL_HIGHLIGHT_STRINGS`` bits.
        aliases: Language aliases matched against pygments lexer aliases.
    """

    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[str, ...] = ()
    singleline_comment_start: str = ""
    multiline_comment_start: str = ""
    multiline_comment_end: str = ""
    flags: int = 0
    aliases: tuple[str, ...] = ()

    @property
    def highlight_numbers(self) -> bool:
        return bool(self.flags & HL_HIGHLIGHT_NUMBERS)

    @property
    def highlight_strings(self) -> bool:
        return bool(self.flags & HL_HIGHLIGHT_STRINGS)

    @functools.cached_property
    def keyword_table(self) -> tuple[tuple[bytes, bool], ...]:
        """Keywords as ``(bytes, is_secondary)``, longest first."""
        table: list[tuple[bytes, bool]] = []
        for keyword in self.keywords:
            secondary = keyword.endswith(SECONDARY_MARKER)
            word = keyword[:-1] if secondary else keyword
            if word:
                table.append((word.encode("latin-1"), secondary))
        table.sort(key=lambda entry: len(entry[0]), reverse=True)
        return tuple(table)

    @functools.cached_property
    def markers(self) -> tuple[bytes, bytes, bytes]:
        """Comment markers as bytes: (single-line, block start, block end)."""
        scs = self.singleline_comment_start.encode("latin-1")
        mcs = self.multiline_comment_start.encode("latin-1")
        mce = self.multiline_comment_end.encode("latin-1")
        if not (mcs and mce):
            mcs = mce = b""
        return scs, mcs, mce

    def matches_filename(self, filename: str) -> bool:
        """True when one of ``filematch`` applies to ``filename``."""
        name = os.path.basename(filename)
        for pattern in self.filematch:
            if pattern.startswith("."):
                if name.endswith(pattern):
                    return True
            elif pattern in filename:
                return True
        return False


# --- Built-in languages ---
C_RULES = SyntaxRules(
    filetype="c",
    filematch=(".c", ".h", ".cpp", ".hpp", ".cc"),
    keywords=(
        "switch", "if", "while", "for", "break", "continue", "return", "else",
        "struct", "union", "typedef", "static", "enum", "class", "case",
        "default", "do", "goto", "sizeof", "extern", "volatile", "register",
        "const", "inline", "namespace", "template", "typename", "public",
        "private", "protected", "virtual", "new", "delete", "this", "true",
        "false", "nullptr", "NULL", "#include", "#define", "#ifdef",
        "#ifndef", "#endif",
        "int|", "long|", "double|", "float|", "char|", "unsigned|", "signed|",
        "void|", "short|", "bool|", "size_t|",
    ),
    singleline_comment_start="//",
    multiline_comment_start="/*",
    multiline_comment_end="*/",
    flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    aliases=("c", "cpp", "c++", "objective-c"),
)

PYTHON_RULES = SyntaxRules(
    filetype="python",
    filematch=(".py",),
    keywords=(
        "and", "as", "assert", "async", "await", "break", "class", "continue",
        "def", "del", "elif", "else", "except", "finally", "for", "from",
        "global", "if", "import", "in", "is", "lambda", "nonlocal", "not",
        "or", "pass", "raise", "return", "try", "while", "with", "yield",
        "None", "True", "False",
        "int|", "str|", "float|", "bool|", "bytes|", "list|", "dict|",
        "tuple|", "set|", "self|",
    ),
    singleline_comment_start="#",
    flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    aliases=("python", "py", "python3", "py3"),
)

BUILTIN_SYNTAXES: tuple[SyntaxRules, ...] = (C_RULES, PYTHON_RULES)


def rules_from_config(filetype: str, table: dict[str, Any]) -> SyntaxRules:
    """Build a `SyntaxRules` from a ``[syntax.languages.<filetype>]`` table.

    Raises:
        ValueError: If the table is malformed (missing ``filematch``, bad
            ``block_comment`` shape, non-string entries).
    """
    if not isinstance(table, dict):
        raise ValueError(f"language '{filetype}' must be a table")

    filematch = table.get("filematch")
    if not filematch or not isinstance(filematch, list):
        raise ValueError(f"language '{filetype}' needs a non-empty 'filematch' list")

    block = table.get("block_comment", ["", ""])
    if not isinstance(block, list) or len(block) != 2:
        raise ValueError(f"language '{filetype}': 'block_comment' must be [start, end]")

    keywords = table.get("keywords", [])
    aliases = table.get("aliases", [filetype])
    for name, values in (("filematch", filematch), ("keywords", keywords),
                         ("aliases", aliases), ("block_comment", block)):
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValueError(f"language '{filetype}': '{name}' must be a list of strings")

    flags = 0
    if table.get("highlight_numbers", True):
        flags |= HL_HIGHLIGHT_NUMBERS
    if table.get("highlight_strings", True):
        flags |= HL_HIGHLIGHT_STRINGS

    return SyntaxRules(
        filetype=filetype,
        filematch=tuple(filematch),
        keywords=tuple(keywords),
        singleline_comment_start=str(table.get("singleline_comment", "")),
        multiline_comment_start=block[0],
        multiline_comment_end=block[1],
        flags=flags,
        aliases=tuple(aliases),
    )


## ==================== SyntaxRegistry ====================
class SyntaxRegistry:
    """Class SyntaxRegistry
    =========================
    Mapping from filetype identifier to `SyntaxRules`, read-only once the
    editor is running.

    Attributes:
        guess_with_pygments (bool): Whether `select` falls back to pygments
            lexer aliases when no pattern matches.
    """

    def __init__(
        self,
        rules: Iterable[SyntaxRules] = BUILTIN_SYNTAXES,
        guess_with_pygments: bool = True,
    ) -> None:
        self._rules: dict[str, SyntaxRules] = {}
        self.guess_with_pygments = guess_with_pygments
        for entry in rules:
            self.register(entry)

    @classmethod
    def from_config(cls, config: Optional[dict[str, Any]] = None) -> "SyntaxRegistry":
        """Builds the registry: built-ins first, then user languages.

        User languages with the same filetype replace the built-in entry.
        Malformed entries are logged and skipped.
        """
        syntax_config = (config or {}).get("syntax", {})
        registry = cls(guess_with_pygments=bool(syntax_config.get("guess_with_pygments", True)))

        for filetype, table in syntax_config.get("languages", {}).items():
            try:
                registry.register(rules_from_config(filetype, table))
            except (ValueError, TypeError) as e:
                logging.warning(f"Skipping invalid syntax definition '{filetype}': {e}")
                continue
            logging.info(f"Registered syntax rules for '{filetype}' from config.")
        return registry

    def register(self, rules: SyntaxRules) -> None:
        self._rules[rules.filetype] = rules

    def get(self, filetype: str) -> Optional[SyntaxRules]:
        return self._rules.get(filetype)

    def __contains__(self, filetype: object) -> bool:
        return filetype in self._rules

    def __iter__(self) -> Iterator[SyntaxRules]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def match_filename(self, filename: str) -> Optional[SyntaxRules]:
        """First registered entry whose patterns match, in registration order."""
        for rules in self._rules.values():
            if rules.matches_filename(filename):
                return rules
        return None

    def select(self, filename: Optional[str]) -> Optional[SyntaxRules]:
        """Choose the rules for ``filename``, or None to disable highlighting."""
        if not filename:
            return None

        rules = self.match_filename(filename)
        if rules is not None:
            logging.debug(f"Syntax: '{rules.filetype}' selected for {filename!r} by pattern.")
            return rules

        if self.guess_with_pygments:
            rules = self._guess_with_pygments(filename)
            if rules is not None:
                logging.debug(f"Syntax: '{rules.filetype}' selected for {filename!r} via pygments.")
                return rules

        logging.debug(f"Syntax: no rules for {filename!r}; highlighting disabled.")
        return None

    def _guess_with_pygments(self, filename: str) -> Optional[SyntaxRules]:
        try:
            lexer = get_lexer_for_filename(filename)
        except ClassNotFound:
            return None

        lexer_aliases = set(lexer.aliases)
        for rules in self._rules.values():
            if lexer_aliases.intersection(rules.aliases):
                return rules
        return None
