"""
AST provider interface.

A provider turns one unit's text into a flat stream of declaration events.
The tree builder consumes the stream; it never sees the provider's own
syntax tree.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from headerdoc.declarations.models import DeclarationEvent
from headerdoc.source.line_store import LineStore


class AstProvider(ABC):
    """
    Source of declaration events for one input unit.

    Implementations report, in depth-first document order, every
    documentable declaration located in the unit itself (never from included
    files), with 1-based inclusive line ranges that index into ``lines``.
    """

    name: str = ""

    @abstractmethod
    def parse(self, path: Path, lines: LineStore) -> List[DeclarationEvent]:
        """
        Parse ``lines`` (the contents of ``path``) into declaration events.

        Raises:
            UnparseableUnitError: No syntax tree could be produced
            ProviderUnavailableError: The parser backend cannot be loaded
        """

    def is_available(self) -> bool:
        """Check whether the backend can be loaded."""
        return True
