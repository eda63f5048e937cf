"""Declaration kinds, the declaration data model and the tree builder.

The tree builder lives in headerdoc.declarations.tree_builder and is not
re-exported here, since it depends on headerdoc.source.
"""

from headerdoc.declarations.kinds import AccessLevel, DeclKind
from headerdoc.declarations.models import DeclarationEvent, DeclarationNode, SourceRange

__all__ = [
    "AccessLevel",
    "DeclKind",
    "DeclarationEvent",
    "DeclarationNode",
    "SourceRange",
]
