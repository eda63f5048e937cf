"""Document rendering."""

from headerdoc.render.markdown import MarkdownRenderer, RenderedDocument, generate_anchor

__all__ = ["MarkdownRenderer", "RenderedDocument", "generate_anchor"]
