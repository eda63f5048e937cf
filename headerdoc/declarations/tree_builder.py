"""
Declaration tree builder.

Consumes the provider's depth-first declaration stream and nests every
declaration under its enclosing class, struct, union or enum. Namespaces do
not own nodes: their members sit at the root under their qualified names
(``ns::Vec3``).

Duplicate Declarations
----------------------
A qualified name appears once in the tree. When a declaration is seen
again (forward declaration then definition, in-class declaration then
out-of-line definition) the documented node wins; if neither is documented
the most recent one replaces the existing node in place and adopts its
children.

Lookup
------
Nodes are found through a qualified-name index kept in step with every
insertion and replacement, so ingesting a file stays linear in the number
of declarations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from headerdoc.core.logging import get_logger
from headerdoc.declarations.kinds import is_container, is_documentable, is_function, kind_label
from headerdoc.declarations.models import DeclarationEvent, DeclarationNode
from headerdoc.source.comments import CommentLocator
from headerdoc.source.line_store import LineStore

logger = get_logger(__name__)

NodeMap = Dict[str, DeclarationNode]


@dataclass
class BuildStats:
    """What happened to the events of one unit."""

    inserted: int = 0
    replaced: int = 0
    kept_documented: int = 0
    skipped_kind: int = 0
    discarded_local: int = 0
    orphaned: int = 0


class DeclarationTreeBuilder:
    """
    Builds the declaration tree of one input unit.

    Example:
        builder = DeclarationTreeBuilder(lines)
        roots = builder.ingest_all(provider.parse(path, lines))
    """

    def __init__(self, lines: LineStore, locator: Optional[CommentLocator] = None) -> None:
        self.lines = lines
        self.locator = locator or CommentLocator(lines)
        self.roots: NodeMap = {}
        self.stats = BuildStats()
        self._index: NodeMap = {}
        self._owners: Dict[str, NodeMap] = {}

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._index

    def find(self, qualified_name: str) -> Optional[DeclarationNode]:
        """Node with this qualified name anywhere in the tree, or None."""
        return self._index.get(qualified_name)

    def ingest_all(self, events: Iterable[DeclarationEvent]) -> NodeMap:
        """Ingest a whole event stream and return the root map."""
        for event in events:
            self.ingest(event)
        return self.roots

    def ingest(self, event: DeclarationEvent) -> None:
        """Insert one declaration event into the tree."""
        if not is_documentable(event.kind):
            self.stats.skipped_kind += 1
            return

        node = DeclarationNode.from_event(event, self.locator.locate(event.start_line))
        logger.debug(
            "Declaration",
            lines=f"{event.start_line}-{event.end_line}",
            kind=kind_label(event.kind) or event.kind.value,
            name=event.qualified_name,
        )

        if event.qualified_name in self._index:
            self._resolve_duplicate(node)
            return

        if is_function(event.parent_kind):
            # Names declared inside a function body are never documented
            self.stats.discarded_local += 1
            return

        if is_container(event.parent_kind):
            parent = self._index.get(event.parent_qualified_name)
            if parent is None:
                self.stats.orphaned += 1
                logger.warning(
                    "Dropping declaration whose parent is not in the tree",
                    name=event.qualified_name,
                    parent=event.parent_qualified_name,
                )
                return
            self._insert(parent.children, node)
            return

        self._insert(self.roots, node)

    def _insert(self, owner: NodeMap, node: DeclarationNode) -> None:
        owner[node.qualified_name] = node
        self._index[node.qualified_name] = node
        self._owners[node.qualified_name] = owner
        self.stats.inserted += 1

    def _resolve_duplicate(self, node: DeclarationNode) -> None:
        """Keep a documented node, otherwise let the newest node replace it."""
        qualified_name = node.qualified_name
        current = self._index[qualified_name]
        if current.is_documented:
            self.stats.kept_documented += 1
            return

        node.children = current.children
        self._owners[qualified_name][qualified_name] = node
        self._index[qualified_name] = node
        self.stats.replaced += 1
