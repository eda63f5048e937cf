"""Source-text helpers: the line store, comment lookup and signatures."""

from headerdoc.source.comments import CommentLocator, extract_comment
from headerdoc.source.line_store import LineStore
from headerdoc.source.signature import reconstruct_signature

__all__ = ["CommentLocator", "LineStore", "extract_comment", "reconstruct_signature"]
