"""
AST providers.

``get_provider`` picks the backend named in the parser configuration.
"""

from typing import Optional

from headerdoc.core.config import ParserConfig
from headerdoc.core.exceptions import ConfigValidationError
from headerdoc.providers.base import AstProvider
from headerdoc.providers.clang_provider import ClangProvider
from headerdoc.providers.tree_sitter_provider import TreeSitterProvider


def get_provider(config: Optional[ParserConfig] = None) -> AstProvider:
    """Create the AST provider selected by ``config.provider``."""
    config = config or ParserConfig()
    if config.provider == ClangProvider.name:
        return ClangProvider(config)
    if config.provider == TreeSitterProvider.name:
        return TreeSitterProvider()
    raise ConfigValidationError(
        f"Unknown parser provider: {config.provider}",
        field="parser.provider",
        value=config.provider,
    )


__all__ = ["AstProvider", "ClangProvider", "TreeSitterProvider", "get_provider"]
