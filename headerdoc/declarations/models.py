"""
Declaration data model.

DeclarationEvent is what an AST provider reports; DeclarationNode is what
the tree builder keeps. Line numbers are 1-based and inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from headerdoc.declarations.kinds import AccessLevel, DeclKind


@dataclass(frozen=True)
class SourceRange:
    """Inclusive range of source lines."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"range start {self.start} is after end {self.end}")

    @property
    def is_single_line(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class DeclarationEvent:
    """
    One declaration reported by an AST provider.

    ``parent_kind``/``parent_qualified_name`` describe the semantic parent;
    both are empty for declarations at translation-unit scope.
    """

    kind: DeclKind
    name: str
    qualified_name: str
    access: AccessLevel
    start_line: int
    end_line: int
    parent_kind: Optional[DeclKind] = None
    parent_qualified_name: str = ""

    @property
    def declaration_range(self) -> SourceRange:
        return SourceRange(self.start_line, self.end_line)


@dataclass
class DeclarationNode:
    """A documented declaration and the declarations nested in it."""

    name: str
    qualified_name: str
    kind: DeclKind
    access: AccessLevel
    declaration_range: SourceRange
    documentation_range: Optional[SourceRange] = None
    children: Dict[str, "DeclarationNode"] = field(default_factory=dict)

    @classmethod
    def from_event(
        cls, event: DeclarationEvent, documentation_range: Optional[SourceRange]
    ) -> "DeclarationNode":
        return cls(
            name=event.name,
            qualified_name=event.qualified_name,
            kind=event.kind,
            access=event.access,
            declaration_range=event.declaration_range,
            documentation_range=documentation_range,
        )

    @property
    def is_documented(self) -> bool:
        return self.documentation_range is not None

    @property
    def start_line(self) -> int:
        return self.declaration_range.start

    def sorted_children(self) -> List["DeclarationNode"]:
        """Children in qualified-name order."""
        return sort_by_name(self.children)

    def members_in_source_order(self) -> List["DeclarationNode"]:
        """Children in declaration order; ties keep qualified-name order."""
        return sorted(self.sorted_children(), key=lambda node: node.start_line)


def sort_by_name(nodes: Dict[str, DeclarationNode]) -> List[DeclarationNode]:
    """Nodes of a mapping in qualified-name order."""
    return [nodes[key] for key in sorted(nodes)]
