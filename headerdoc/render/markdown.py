"""
Markdown renderer for a declaration tree.

Document Layout
---------------
    # include/vec.h                     title
    * [Vec3](#struct-vec3)              table of contents (optional)
    ---
    ## Struct `Vec3`                    one section per top-level container
    ```cpp
    struct Vec3 {
        float x, y, z;
        ...
    };
    ```
    <container comment>
    #### Member Variables              documented fields
    ### Constructor `Vec3::Vec3`        documented members
    ---
    ## Function `dot`                   documented free declarations

Ordering
--------
Sections at every level follow qualified-name order. The member list
inside a container's code block follows source order instead, so the
block reads like the original declaration.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from headerdoc.core.config import RenderConfig
from headerdoc.declarations.kinds import (
    AccessLevel,
    DeclKind,
    is_class,
    is_container,
    kind_label,
)
from headerdoc.declarations.models import DeclarationNode, sort_by_name
from headerdoc.source.comments import extract_comment
from headerdoc.source.line_store import LineStore
from headerdoc.source.signature import reconstruct_signature

CODE_LANGUAGE = "cpp"
MEMBER_INDENT = 4
TOC_INDENT = 4
SECTION_SEPARATOR = "\n---\n\n"
FIELD_SUMMARY_HEADING = "#### Member Variables\n"

ACCESS_HEADERS: Dict[AccessLevel, str] = {
    AccessLevel.PUBLIC: "public:\n",
    AccessLevel.PROTECTED: "protected:\n",
    AccessLevel.PRIVATE: "private:\n",
}


def generate_anchor(text: str) -> str:
    """Generate GitHub-style anchor from header text."""
    anchor = text.lower()

    # Remove special characters except spaces and hyphens
    anchor = re.sub(r"[^\w\s-]", "", anchor)

    anchor = re.sub(r"\s+", "-", anchor)
    anchor = re.sub(r"-+", "-", anchor)

    return anchor.strip("-")


def heading_level(depth: int) -> str:
    return "##" if depth == 0 else "###"


@dataclass
class RenderedDocument:
    """Ordered text fragments of one rendered document."""

    fragments: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.fragments)


class MarkdownRenderer:
    """
    Renders a declaration tree as markdown.

    The renderer holds no state between calls: rendering the same tree
    twice yields the same document.
    """

    def __init__(self, lines: LineStore, config: Optional[RenderConfig] = None) -> None:
        self.lines = lines
        self.config = config or RenderConfig()

    def render(self, title: str, roots: Dict[str, DeclarationNode]) -> RenderedDocument:
        """Render the full document: title, table of contents and body."""
        out: List[str] = [f"# {title}\n\n"]
        if self.config.build_toc:
            out.extend(self.build_toc(roots))
            out.append(SECTION_SEPARATOR)
        self._render_nodes(out, roots, 0)
        return RenderedDocument(out)

    # ------------------------------------------------------------------
    # Table of contents
    # ------------------------------------------------------------------

    def build_toc(self, roots: Dict[str, DeclarationNode]) -> List[str]:
        """Table of contents entries for the tree."""
        toc: List[str] = []
        self._toc_nodes(toc, roots, 0)
        return toc

    def _toc_nodes(self, toc: List[str], nodes: Dict[str, DeclarationNode], depth: int) -> None:
        for node in sort_by_name(nodes):
            if not self._is_linkable(node):
                continue
            anchor = generate_anchor(f"{kind_label(node.kind)}-{node.qualified_name}")
            toc.append(f"{' ' * (depth * TOC_INDENT)}* [{node.name}](#{anchor})\n")
            if node.children:
                self._toc_nodes(toc, node.children, depth + 1)

    def _is_linkable(self, node: DeclarationNode) -> bool:
        if not node.is_documented and not is_container(node.kind):
            return False
        # Fields are listed in their container's summary, not as sections
        if node.kind == DeclKind.FIELD:
            return False
        if kind_label(node.kind) is None or not node.name:
            return False
        return self._is_visible(node)

    def _is_visible(self, node: DeclarationNode) -> bool:
        return self.config.include_private or node.access != AccessLevel.PRIVATE

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def _render_nodes(self, out: List[str], nodes: Dict[str, DeclarationNode], depth: int) -> None:
        for node in sort_by_name(nodes):
            label = kind_label(node.kind)
            if label is None or not self._is_visible(node):
                continue

            # A one-line container such as 'enum E { A, B };' already shows
            # its members in the signature; only multi-line bodies get a
            # member list and nested sections.
            if is_container(node.kind) and not node.declaration_range.is_single_line:
                self._render_container(out, node, label, depth)
                continue

            if node.is_documented and node.kind != DeclKind.FIELD:
                self._render_declaration(out, node, label, depth)

    def _render_container(
        self, out: List[str], node: DeclarationNode, label: str, depth: int
    ) -> None:
        signature = reconstruct_signature(
            self.lines, node.declaration_range.start, node.declaration_range.end
        )
        out.append(f"{heading_level(depth)} {label} `{node.qualified_name}`\n\n")
        out.append(f"```{CODE_LANGUAGE}\n")
        out.append(f"{signature} {{\n")
        self._render_member_list(out, node)
        out.append("};\n")
        out.append("```\n")

        if node.documentation_range is not None:
            out.append(f"{extract_comment(self.lines, node.documentation_range)}\n\n")

        self._render_field_summary(out, node)
        self._render_nodes(out, node.children, depth + 1)

        if depth == 0:
            out.append(SECTION_SEPARATOR)

    def _render_declaration(
        self, out: List[str], node: DeclarationNode, label: str, depth: int
    ) -> None:
        signature = reconstruct_signature(
            self.lines, node.declaration_range.start, node.declaration_range.end
        )
        terminator = "" if node.kind == DeclKind.ENUM_CONSTANT else ";"
        out.append(f"{heading_level(depth)} {label} `{node.qualified_name}`\n\n")
        out.append(f"```{CODE_LANGUAGE}\n")
        out.append(f"{signature}{terminator}\n")
        out.append("```\n")
        out.append(f"{extract_comment(self.lines, node.documentation_range)}\n\n")

    def _render_member_list(self, out: List[str], parent: DeclarationNode) -> None:
        """Members in source order with access headers, inside the code block."""
        emitted_lines: Set[int] = set()
        access: Optional[AccessLevel] = None

        for node in parent.members_in_source_order():
            if not self._is_visible(node):
                continue

            # 'float x, y, z;' yields three fields on one line; print it once
            if node.start_line in emitted_lines:
                continue
            emitted_lines.add(node.start_line)

            if node.access != access:
                header = ACCESS_HEADERS.get(node.access)
                # Struct and union members are public by default
                if node.access == AccessLevel.PUBLIC and not is_class(parent.kind):
                    header = None
                if header:
                    out.append(header)
                access = node.access

            signature = reconstruct_signature(
                self.lines,
                node.declaration_range.start,
                node.declaration_range.end,
                indent=MEMBER_INDENT,
            )
            if node.kind == DeclKind.ENUM_CONSTANT:
                out.append(f"{signature}\n")
            else:
                out.append(f"{signature};\n\n")

        # No blank line before the closing brace
        last = out[-1]
        if len(last) > 1 and last[-2] == "\n":
            out[-1] = last[:-1]

    def _render_field_summary(self, out: List[str], parent: DeclarationNode) -> None:
        """Bulleted list of documented fields; omitted when there are none."""
        entries = [
            f"* `{node.name}`  {extract_comment(self.lines, node.documentation_range)}\n"
            for node in parent.sorted_children()
            if node.kind == DeclKind.FIELD
            and node.documentation_range is not None
            and self._is_visible(node)
        ]
        if not entries:
            return
        out.append(FIELD_SUMMARY_HEADING)
        out.extend(entries)
        out.append("\n")
