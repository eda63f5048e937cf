"""headerdoc - Markdown API reference generator for C/C++ headers.

Parses a header with an AST provider, rebuilds the declaration tree and
renders it as a markdown document with its inline ``//`` documentation.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
