"""
Documentation comment lookup.

A declaration is documented by the block of ``//`` line comments directly
above it:

    // Constructor for Vec3
    //
    // Components default to zero.
    Vec3(float x = 0, float y = 0, float z = 0);

One blank line between the block and the declaration is tolerated. Any
other line in between means the declaration is undocumented.
"""

from __future__ import annotations

from typing import List, Optional

from headerdoc.declarations.models import SourceRange
from headerdoc.source.line_store import LineStore

COMMENT_MARKER = "//"

# Blank lines allowed between a comment block and its declaration
MAX_GAP_LINES = 1

# Leading slashes stripped from a comment line ("///" doc comments included)
MAX_MARKER_SLASHES = 3

PARAGRAPH_BREAK = "\n\n"


def is_comment_line(line: str) -> bool:
    """True if the line, ignoring indentation, starts with '//'."""
    return line.lstrip(" \t").startswith(COMMENT_MARKER)


class CommentLocator:
    """Finds the comment block documenting a declaration."""

    def __init__(self, lines: LineStore) -> None:
        self.lines = lines

    def locate(self, start_line: int) -> Optional[SourceRange]:
        """
        Find the comment block above the declaration starting at ``start_line``.

        Scans upward from the preceding line, never past line 1.

        Returns:
            Range from the topmost to the bottom line of the comment block,
            or None when the declaration is undocumented.
        """
        line_number = start_line - 1
        if line_number not in self.lines:
            return None

        gap = 0
        while line_number >= 1 and not is_comment_line(self.lines.line(line_number)):
            if self.lines.line(line_number).strip() or gap >= MAX_GAP_LINES:
                return None
            gap += 1
            line_number -= 1

        if line_number < 1:
            return None

        bottom = line_number
        while line_number > 1 and is_comment_line(self.lines.line(line_number - 1)):
            line_number -= 1

        return SourceRange(line_number, bottom)


def _strip_marker(line: str) -> str:
    """Remove indentation, up to three slashes and one following space."""
    text = line.lstrip(" \t")
    slashes = len(text) - len(text.lstrip("/"))
    text = text[min(slashes, MAX_MARKER_SLASHES) :]
    if text.startswith(" "):
        text = text[1:]
    return text


def extract_comment(lines: LineStore, doc_range: SourceRange) -> str:
    """
    Turn a comment block into markdown text.

    Lines are joined with single spaces; an empty comment line becomes a
    paragraph break. Extra indentation after the marker is kept, so an
    indented block inside a comment still renders as code.
    """
    parts: List[str] = []
    for line_number in range(doc_range.start, doc_range.end + 1):
        text = _strip_marker(lines.get(line_number) or "")
        if not text:
            parts.append(PARAGRAPH_BREAK)
            continue
        if line_number < doc_range.end:
            text += " "
        parts.append(text)
    return "".join(parts)
