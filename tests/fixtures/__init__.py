"""
Fixture modules for headerdoc tests.

Modules
-------
- headers: Sample header text and the declaration events a parser
  reports for it, plus an AST provider fake
"""

from tests.fixtures.headers import SAMPLE_HEADER, StaticProvider, event

__all__ = ["SAMPLE_HEADER", "StaticProvider", "event"]
