"""
Line store for one input unit.

Holds the raw source lines the AST provider parsed, addressed by the same
1-based line numbers the provider reports in its declaration events.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from headerdoc.core.exceptions import SourceReadError

DIRECTIVE_MARKER = "#"


def is_directive(line: str) -> bool:
    """True for preprocessor lines (first non-blank character is '#')."""
    return line.lstrip(" \t").startswith(DIRECTIVE_MARKER)


class LineStore:
    """
    Immutable, 1-based view over the lines of a source file.

    Example:
        store = LineStore.from_text("// doc\\nint x;\\n")
        store.line(2)        # "int x;"
        store.span(1, 9)     # ["// doc", "int x;"] (clipped to the file)
    """

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines: List[str] = list(lines)

    @classmethod
    def from_text(cls, text: str, strip_directives: bool = True) -> "LineStore":
        """
        Build a store from file text.

        Preprocessor lines are dropped when ``strip_directives`` is set, so
        the parser never has to resolve includes. Line numbers then refer
        to the filtered text, which is also what the provider parses.
        """
        lines = text.splitlines()
        if strip_directives:
            lines = [line for line in lines if not is_directive(line)]
        return cls(lines)

    @classmethod
    def from_file(cls, path: Path, strip_directives: bool = True) -> "LineStore":
        """Read ``path`` as UTF-8 and build a store from it."""
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Could not read source file {path}: {e}") from e
        return cls.from_text(text, strip_directives=strip_directives)

    @property
    def text(self) -> str:
        """The stored lines joined back into file text."""
        return "".join(f"{line}\n" for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __contains__(self, line_number: object) -> bool:
        return isinstance(line_number, int) and 1 <= line_number <= len(self._lines)

    def line(self, line_number: int) -> str:
        """Return line ``line_number`` (1-based); IndexError outside the file."""
        if line_number not in self:
            raise IndexError(f"line {line_number} outside 1..{len(self._lines)}")
        return self._lines[line_number - 1]

    def get(self, line_number: int) -> Optional[str]:
        """Return line ``line_number`` or None outside the file."""
        if line_number not in self:
            return None
        return self._lines[line_number - 1]

    def span(self, start: int, end: int) -> List[str]:
        """Lines of the inclusive range ``start..end``, clipped to the file."""
        first = max(start, 1)
        last = min(end, len(self._lines))
        if first > last:
            return []
        return self._lines[first - 1 : last]

    def trimmed_span(self, start: int, end: int) -> List[str]:
        """Like span() with surrounding whitespace stripped from each line."""
        return [line.strip() for line in self.span(start, end)]
