"""
Declaration signature reconstruction.

Providers report the full extent of a declaration, including any body. The
rendered document only shows the declaration head, so reconstruction stops
at the first line holding an opening brace:

    static inline Vec3 scaled(float k) const {      ->  static inline Vec3 scaled(float k) const
        return {x * k, y * k, z * k};
    }
"""

from __future__ import annotations

from typing import List

from headerdoc.source.line_store import LineStore

BODY_OPEN = "{"


def reconstruct_signature(lines: LineStore, start: int, end: int, indent: int = 0) -> str:
    """
    Rebuild the declaration head spanning lines ``start..end``.

    Each line loses its leading tabs and trailing semicolons and gets
    ``indent`` spaces prepended. The first line containing '{' loses its
    trailing braces and spaces and ends the signature; a one-line body
    such as ``struct P { int x; }`` is kept whole.

    Returns:
        Newline-joined signature; "" when ``start`` is outside the file.
    """
    if start not in lines:
        return ""

    pad = " " * indent
    out: List[str] = []
    for text in lines.span(start, end):
        text = text.lstrip("\t").rstrip(";")
        if BODY_OPEN in text:
            out.append(pad + text.rstrip("{ "))
            break
        out.append(pad + text)
    return "\n".join(out)
