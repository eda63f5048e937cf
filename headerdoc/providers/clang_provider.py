"""
libclang AST provider.

Parses a unit with libclang through the ``clang.cindex`` bindings and walks
the cursor tree depth-first, reporting every documentable declaration that
lives in the unit itself.

Parsing Setup
-------------
The line store's text (preprocessor lines already removed) is handed to
libclang as an unsaved file, so line numbers in the cursor extents match
the store exactly and includes never need resolving. Function bodies are
skipped: nothing declared inside them is documented.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from headerdoc.core.config import ParserConfig
from headerdoc.core.exceptions import ProviderUnavailableError, UnparseableUnitError
from headerdoc.core.logging import get_logger
from headerdoc.declarations.kinds import AccessLevel, DeclKind, is_documentable
from headerdoc.declarations.models import DeclarationEvent
from headerdoc.providers.base import AstProvider
from headerdoc.source.line_store import LineStore

logger = get_logger(__name__)

BASE_ARGS = ["-x", "c++"]
MAX_AST_DEPTH = 256

# cindex.CursorKind names
CLANG_KIND_MAP: Dict[str, DeclKind] = {
    "CLASS_DECL": DeclKind.CLASS,
    "CLASS_TEMPLATE": DeclKind.CLASS_TEMPLATE,
    "CLASS_TEMPLATE_PARTIAL_SPECIALIZATION": DeclKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION,
    "STRUCT_DECL": DeclKind.STRUCT,
    "UNION_DECL": DeclKind.UNION,
    "ENUM_DECL": DeclKind.ENUM,
    "ENUM_CONSTANT_DECL": DeclKind.ENUM_CONSTANT,
    "CXX_METHOD": DeclKind.METHOD,
    "FUNCTION_DECL": DeclKind.FUNCTION,
    "FUNCTION_TEMPLATE": DeclKind.FUNCTION_TEMPLATE,
    "CONSTRUCTOR": DeclKind.CONSTRUCTOR,
    "DESTRUCTOR": DeclKind.DESTRUCTOR,
    "FIELD_DECL": DeclKind.FIELD,
    "VAR_DECL": DeclKind.VARIABLE,
    "TYPEDEF_DECL": DeclKind.TYPEDEF,
    "TYPE_ALIAS_DECL": DeclKind.TYPE_ALIAS,
    "TYPE_ALIAS_TEMPLATE_DECL": DeclKind.TYPE_ALIAS_TEMPLATE,
    "USING_DECLARATION": DeclKind.USING,
    "NAMESPACE": DeclKind.NAMESPACE,
}

# cindex.AccessSpecifier names
CLANG_ACCESS_MAP: Dict[str, AccessLevel] = {
    "PUBLIC": AccessLevel.PUBLIC,
    "PROTECTED": AccessLevel.PROTECTED,
    "PRIVATE": AccessLevel.PRIVATE,
}

# Keywords used to key anonymous records, matching the tree-sitter backend
RECORD_KEYWORDS: Dict[str, str] = {
    "CLASS_DECL": "class",
    "STRUCT_DECL": "struct",
    "UNION_DECL": "union",
    "ENUM_DECL": "enum",
}


def map_kind(kind_name: str) -> DeclKind:
    return CLANG_KIND_MAP.get(kind_name, DeclKind.OTHER)


def map_access(access_name: str) -> AccessLevel:
    return CLANG_ACCESS_MAP.get(access_name, AccessLevel.NOT_APPLICABLE)


def _is_translation_unit(cursor: Any) -> bool:
    return cursor is None or cursor.kind.name == "TRANSLATION_UNIT"


def cursor_name(cursor: Any) -> str:
    """
    Declared name of the cursor; "" for anonymous namespaces and records.

    Recent libclang spells unnamed records ``(anonymous union at f.h:3:5)``;
    no identifier starts with a parenthesis.
    """
    spelling = cursor.spelling
    if spelling.startswith("(") or cursor.is_anonymous():
        return ""
    return spelling


def scope_component(cursor: Any) -> str:
    """Name the cursor contributes to qualified names below it."""
    name = cursor_name(cursor)
    keyword = RECORD_KEYWORDS.get(cursor.kind.name)
    if name or keyword is None:
        return name
    return f"(anonymous {keyword} at line {cursor.extent.start.line})"


def qualified_name(cursor: Any) -> str:
    """
    ``::``-joined names of the cursor and its semantic parents.

    Anonymous namespaces add no component. Anonymous records are keyed by
    keyword and line so that two of them in one scope stay apart.
    """
    if _is_translation_unit(cursor):
        return ""
    prefix = qualified_name(cursor.semantic_parent)
    component = scope_component(cursor)
    if not component:
        return prefix
    if not prefix:
        return component
    return f"{prefix}::{component}"


class ClangProvider(AstProvider):
    """
    Declaration events from libclang.

    Example:
        provider = ClangProvider(ParserConfig(clang_args=["-std=c++17"]))
        events = provider.parse(Path("vec.h"), LineStore.from_file(Path("vec.h")))
    """

    name = "clang"

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()

    @property
    def args(self) -> List[str]:
        return BASE_ARGS + list(self.config.clang_args)

    def is_available(self) -> bool:
        """Check if the clang bindings are importable."""
        try:
            from clang import cindex  # noqa: F401

            return True
        except ImportError:
            return False

    def _load_cindex(self) -> Any:
        try:
            from clang import cindex
        except ImportError as e:
            raise ProviderUnavailableError(
                "The clang parser needs the libclang Python package"
            ) from e

        # The library path can only be set before libclang is first loaded
        if self.config.library_file and not cindex.Config.loaded:
            cindex.Config.set_library_file(self.config.library_file)
        return cindex

    def _create_index(self, cindex: Any) -> Any:
        try:
            return cindex.Index.create()
        except cindex.LibclangError as e:
            raise ProviderUnavailableError(f"Could not load libclang: {e}") from e

    def parse(self, path: Path, lines: LineStore) -> List[DeclarationEvent]:
        """Parse the unit and return its declaration events in document order."""
        cindex = self._load_cindex()
        index = self._create_index(cindex)
        filename = str(path)

        try:
            tu = index.parse(
                filename,
                args=self.args,
                unsaved_files=[(filename, lines.text)],
                options=cindex.TranslationUnit.PARSE_SKIP_FUNCTION_BODIES,
            )
        except cindex.TranslationUnitLoadError as e:
            raise UnparseableUnitError(f"could not parse c++ source file: {path}") from e

        for diagnostic in tu.diagnostics:
            if diagnostic.severity >= cindex.Diagnostic.Error:
                logger.warning(
                    "Parser diagnostic",
                    file=filename,
                    line=diagnostic.location.line,
                    detail=diagnostic.spelling,
                )

        events: List[DeclarationEvent] = []
        for child in tu.cursor.get_children():
            self._walk(child, tu.spelling, events, 0)
        return events

    def _walk(self, cursor: Any, main_file: str, events: List[DeclarationEvent], depth: int) -> None:
        if depth > MAX_AST_DEPTH:
            logger.warning("AST nesting too deep, skipping subtree", name=cursor.spelling)
            return

        # Cursors from included files are skipped along with their subtrees
        location = cursor.location
        if location.file is None or location.file.name != main_file:
            return

        if cursor.kind.is_declaration():
            event = self._to_event(cursor)
            if event is not None:
                events.append(event)

        for child in cursor.get_children():
            self._walk(child, main_file, events, depth + 1)

    def _to_event(self, cursor: Any) -> Optional[DeclarationEvent]:
        kind = map_kind(cursor.kind.name)
        if not is_documentable(kind):
            return None

        parent = cursor.semantic_parent
        if _is_translation_unit(parent):
            parent_kind = None
            parent_qname = ""
        else:
            parent_kind = map_kind(parent.kind.name)
            parent_qname = qualified_name(parent)

        extent = cursor.extent
        return DeclarationEvent(
            kind=kind,
            name=cursor_name(cursor),
            qualified_name=qualified_name(cursor),
            access=map_access(cursor.access_specifier.name),
            start_line=extent.start.line,
            end_line=extent.end.line,
            parent_kind=parent_kind,
            parent_qualified_name=parent_qname,
        )
