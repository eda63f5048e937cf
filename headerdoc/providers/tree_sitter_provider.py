"""
tree-sitter AST provider.

Derives declaration events from the tree-sitter C++ grammar without a
compiler. Scopes come from namespace and record nesting, access levels
from ``public:``/``protected:``/``private:`` labels (classes default to
private, structs and unions to public). Out-of-line definitions such as
``void Vec3::normalize() {}`` are attached to ``Vec3`` when it is a record
already seen in the unit.

The grammar is syntactic only, so results can differ from libclang where
semantic analysis matters (macros, dependent names). Files with syntax
errors are still walked; the grammar recovers around the error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from headerdoc.core.exceptions import ProviderUnavailableError, UnparseableUnitError
from headerdoc.core.logging import get_logger
from headerdoc.declarations.kinds import AccessLevel, DeclKind, is_class, is_container
from headerdoc.declarations.models import DeclarationEvent
from headerdoc.providers.base import AstProvider
from headerdoc.source.line_store import LineStore

logger = get_logger(__name__)

LANGUAGE = "cpp"
MAX_AST_DEPTH = 256

RECORD_KINDS: Dict[str, DeclKind] = {
    "class_specifier": DeclKind.CLASS,
    "struct_specifier": DeclKind.STRUCT,
    "union_specifier": DeclKind.UNION,
    "enum_specifier": DeclKind.ENUM,
}

ACCESS_LABELS: Dict[str, AccessLevel] = {
    "public": AccessLevel.PUBLIC,
    "protected": AccessLevel.PROTECTED,
    "private": AccessLevel.PRIVATE,
}

# Declarator wrappers that sit between a declaration and its name
DECLARATOR_WRAPPERS = frozenset(
    {
        "init_declarator",
        "pointer_declarator",
        "reference_declarator",
        "array_declarator",
        "parenthesized_declarator",
        "attributed_declarator",
    }
)

NAME_NODES = frozenset(
    {
        "identifier",
        "field_identifier",
        "type_identifier",
        "qualified_identifier",
        "destructor_name",
        "operator_name",
        "operator_cast",
        "template_function",
    }
)

TEMPLATE_ARGS = re.compile(r"<[^<>]*>")
WHITESPACE = re.compile(r"\s+")


def strip_template_args(text: str) -> str:
    """``Vec<T, N>::size`` -> ``Vec::size``"""
    previous = None
    while previous != text:
        previous = text
        text = TEMPLATE_ARGS.sub("", text)
    return text


def join_name(prefix: str, name: str) -> str:
    return f"{prefix}::{name}" if prefix else name


@dataclass
class Scope:
    """Enclosing declaration while walking; ``kind`` is None at file scope."""

    kind: Optional[DeclKind]
    qualified_name: str
    name: str = ""
    access: AccessLevel = AccessLevel.NOT_APPLICABLE


@dataclass
class TemplateContext:
    """A ``template <...>`` header wrapping the declaration being visited."""

    start_line: int
    has_parameters: bool


class _UnitWalker:
    """Walks one parsed unit; holds all per-unit state."""

    def __init__(self, source: bytes) -> None:
        self.source = source
        self.events: List[DeclarationEvent] = []
        self.scopes: Dict[str, DeclKind] = {}
        self.access_by_name: Dict[str, AccessLevel] = {}

    def text(self, node: Any) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def emit(
        self,
        kind: DeclKind,
        name: str,
        qname: str,
        node: Any,
        scope: Scope,
        access: Optional[AccessLevel] = None,
        template: Optional[TemplateContext] = None,
        end_line: Optional[int] = None,
    ) -> None:
        start = template.start_line if template else node.start_point[0] + 1
        if access is None:
            access = scope.access if is_container(scope.kind) else AccessLevel.NOT_APPLICABLE
        self.access_by_name.setdefault(qname, access)
        self.events.append(
            DeclarationEvent(
                kind=kind,
                name=name,
                qualified_name=qname,
                access=access,
                start_line=start,
                end_line=end_line or node.end_point[0] + 1,
                parent_kind=scope.kind,
                parent_qualified_name=scope.qualified_name,
            )
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def walk_body(self, body: Any, scope: Scope, depth: int) -> None:
        """Visit the items of a translation unit, namespace or record body."""
        if depth > MAX_AST_DEPTH:
            logger.warning("AST nesting too deep, skipping subtree", scope=scope.qualified_name)
            return
        for child in body.named_children:
            if child.type == "access_specifier":
                label = self.text(child).rstrip(":").strip()
                scope.access = ACCESS_LABELS.get(label, scope.access)
                continue
            self.visit(child, scope, depth)

    def visit(
        self,
        node: Any,
        scope: Scope,
        depth: int,
        template: Optional[TemplateContext] = None,
    ) -> None:
        kind = node.type
        if kind == "namespace_definition":
            self.visit_namespace(node, scope, depth)
        elif kind == "linkage_specification":
            body = node.child_by_field_name("body")
            if body is not None and body.type == "declaration_list":
                self.walk_body(body, scope, depth + 1)
            elif body is not None:
                self.visit(body, scope, depth + 1)
        elif kind == "template_declaration":
            self.visit_template(node, scope, depth)
        elif kind in RECORD_KINDS:
            self.visit_record(node, scope, depth, template)
        elif kind == "function_definition":
            self.visit_function(node, node.child_by_field_name("declarator"), scope, template)
        elif kind in ("declaration", "field_declaration"):
            self.visit_declaration(node, scope, depth, template)
        elif kind == "type_definition":
            self.visit_typedef(node, scope, depth)
        elif kind == "alias_declaration":
            self.visit_alias(node, scope, template)
        elif kind == "using_declaration":
            self.visit_using(node, scope)

    # ------------------------------------------------------------------
    # Scopes
    # ------------------------------------------------------------------

    def visit_namespace(self, node: Any, scope: Scope, depth: int) -> None:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        # Anonymous namespaces add no name component
        name = WHITESPACE.sub("", self.text(name_node)) if name_node is not None else ""
        qname = join_name(scope.qualified_name, name) if name else scope.qualified_name
        inner = Scope(kind=DeclKind.NAMESPACE, qualified_name=qname, name=name)
        self.scopes[qname] = DeclKind.NAMESPACE
        if body is not None:
            self.walk_body(body, inner, depth + 1)

    def visit_template(self, node: Any, scope: Scope, depth: int) -> None:
        params = node.child_by_field_name("parameters")
        context = TemplateContext(
            start_line=node.start_point[0] + 1,
            has_parameters=params is not None and params.named_child_count > 0,
        )
        for child in node.named_children:
            if child.type in ("template_parameter_list", "comment"):
                continue
            if child.type in RECORD_KINDS:
                self.visit_record(child, scope, depth, context, standalone=True)
            else:
                self.visit(child, scope, depth + 1, context)

    def visit_record(
        self,
        node: Any,
        scope: Scope,
        depth: int,
        template: Optional[TemplateContext] = None,
        standalone: bool = True,
    ) -> None:
        """Class, struct, union or enum specifier."""
        body = node.child_by_field_name("body")
        # 'struct A a;' names a type without declaring it
        if body is None and not standalone:
            return

        keyword = node.type.split("_")[0]
        name_node = node.child_by_field_name("name")
        kind = RECORD_KINDS[node.type]
        if name_node is None:
            name = ""
            qname = join_name(
                scope.qualified_name, f"(anonymous {keyword} at line {node.start_point[0] + 1})"
            )
        elif name_node.type == "template_type":
            name = self.text(name_node.child_by_field_name("name"))
            qname = join_name(scope.qualified_name, name)
            if template is not None and template.has_parameters:
                kind = DeclKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION
        else:
            name = WHITESPACE.sub("", self.text(name_node))
            qname = join_name(scope.qualified_name, name)
            if template is not None and template.has_parameters and kind != DeclKind.ENUM:
                kind = DeclKind.CLASS_TEMPLATE

        self.emit(kind, name, qname, node, scope, template=template)
        self.scopes[qname] = kind
        if body is None:
            return

        if kind == DeclKind.ENUM:
            self.visit_enumerators(body, qname, name)
            return

        default = AccessLevel.PRIVATE if keyword == "class" else AccessLevel.PUBLIC
        inner = Scope(kind=kind, qualified_name=qname, name=name, access=default)
        self.walk_body(body, inner, depth + 1)

    def visit_enumerators(self, body: Any, qname: str, name: str) -> None:
        scope = Scope(kind=DeclKind.ENUM, qualified_name=qname, name=name)
        for child in body.named_children:
            if child.type != "enumerator":
                continue
            const_name = self.text(child.child_by_field_name("name"))
            self.emit(
                DeclKind.ENUM_CONSTANT,
                const_name,
                join_name(qname, const_name),
                child,
                scope,
                access=AccessLevel.NOT_APPLICABLE,
            )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def unwrap_declarator(self, node: Any) -> Tuple[Optional[Any], bool]:
        """Name node of a declarator and whether it declares a function."""
        is_function = False
        while node is not None and node.type not in NAME_NODES:
            if node.type == "function_declarator":
                inner = node.child_by_field_name("declarator")
                # 'int (*fp)(int)' is a pointer variable, not a function
                if inner is not None and inner.type != "parenthesized_declarator":
                    is_function = True
                node = inner
            elif node.type in DECLARATOR_WRAPPERS:
                inner = node.child_by_field_name("declarator")
                if inner is None and node.named_child_count:
                    inner = node.named_children[-1]
                node = inner
            else:
                return None, False
        return node, is_function

    def is_static(self, node: Any) -> bool:
        return any(
            child.type == "storage_class_specifier" and self.text(child) == "static"
            for child in node.children
        )

    def visit_declaration(
        self, node: Any, scope: Scope, depth: int, template: Optional[TemplateContext]
    ) -> None:
        """``declaration`` or ``field_declaration``: variables, fields, prototypes."""
        declarators = node.children_by_field_name("declarator")
        type_node = node.child_by_field_name("type")
        if type_node is not None and type_node.type in RECORD_KINDS:
            self.visit_record(type_node, scope, depth, template, standalone=not declarators)

        for declarator in declarators:
            name_node, is_function = self.unwrap_declarator(declarator)
            if name_node is None:
                continue
            if is_function:
                self.visit_function(node, declarator, scope, template)
                continue

            name = self.text(name_node)
            if is_class(scope.kind) or scope.kind in (DeclKind.STRUCT, DeclKind.UNION):
                kind = DeclKind.VARIABLE if self.is_static(node) else DeclKind.FIELD
            else:
                kind = DeclKind.VARIABLE
            self.emit(kind, name, join_name(scope.qualified_name, name), node, scope, template=template)

    def visit_function(
        self,
        node: Any,
        declarator: Any,
        scope: Scope,
        template: Optional[TemplateContext],
    ) -> None:
        name_node, _ = self.unwrap_declarator(declarator)
        if name_node is None:
            return

        raw = strip_template_args(WHITESPACE.sub("", self.text(name_node)))
        qualifier, _, name = raw.rpartition("::")
        owner = scope
        access = None
        if qualifier:
            owner = self.resolve_qualifier(qualifier, scope)
            access = self.access_by_name.get(join_name(owner.qualified_name, name))
            if access is None:
                access = owner.access if is_container(owner.kind) else AccessLevel.NOT_APPLICABLE

        if template is not None:
            kind = DeclKind.FUNCTION_TEMPLATE
        elif name.startswith("~"):
            kind = DeclKind.DESTRUCTOR
        elif is_container(owner.kind) and name == owner.name:
            kind = DeclKind.CONSTRUCTOR
        elif is_container(owner.kind):
            kind = DeclKind.METHOD
        else:
            kind = DeclKind.FUNCTION

        # A definition ends at its declarator; initializer lists and bodies are not part of it
        end_line = None
        if node.child_by_field_name("body") is not None:
            end_line = declarator.end_point[0] + 1

        self.emit(
            kind,
            name,
            join_name(owner.qualified_name, name),
            node,
            owner,
            access=access,
            template=template,
            end_line=end_line,
        )

    def resolve_qualifier(self, qualifier: str, scope: Scope) -> Scope:
        """Scope named by the ``A::`` part of an out-of-line definition."""
        for candidate in (join_name(scope.qualified_name, qualifier), qualifier.lstrip(":")):
            kind = self.scopes.get(candidate)
            if kind is None:
                continue
            access = AccessLevel.PRIVATE if kind == DeclKind.CLASS else AccessLevel.PUBLIC
            return Scope(
                kind=kind,
                qualified_name=candidate,
                name=candidate.rpartition("::")[2],
                access=access,
            )
        # Unknown qualifier: keep it as part of the name
        return Scope(
            kind=scope.kind,
            qualified_name=join_name(scope.qualified_name, qualifier),
            name=scope.name,
            access=scope.access,
        )

    def visit_typedef(self, node: Any, scope: Scope, depth: int) -> None:
        type_node = node.child_by_field_name("type")
        if type_node is not None and type_node.type in RECORD_KINDS:
            self.visit_record(type_node, scope, depth, standalone=False)
        for declarator in node.children_by_field_name("declarator"):
            name_node, _ = self.unwrap_declarator(declarator)
            if name_node is None:
                continue
            name = self.text(name_node)
            self.emit(DeclKind.TYPEDEF, name, join_name(scope.qualified_name, name), node, scope)

    def visit_alias(self, node: Any, scope: Scope, template: Optional[TemplateContext]) -> None:
        name = self.text(node.child_by_field_name("name"))
        kind = DeclKind.TYPE_ALIAS_TEMPLATE if template is not None else DeclKind.TYPE_ALIAS
        self.emit(kind, name, join_name(scope.qualified_name, name), node, scope, template=template)

    def visit_using(self, node: Any, scope: Scope) -> None:
        # 'using namespace x;' is a directive, not a declaration
        if any(child.type == "namespace" for child in node.children):
            return
        target = node.named_children[-1] if node.named_child_count else None
        if target is None:
            return
        name = WHITESPACE.sub("", self.text(target)).rpartition("::")[2]
        self.emit(DeclKind.USING, name, join_name(scope.qualified_name, name), node, scope)


class TreeSitterProvider(AstProvider):
    """
    Declaration events from the tree-sitter C++ grammar.

    Example:
        provider = TreeSitterProvider()
        if provider.is_available():
            events = provider.parse(Path("vec.h"), lines)
    """

    name = "tree-sitter"

    def is_available(self) -> bool:
        """Check if tree-sitter is available."""
        try:
            from tree_sitter_languages import get_parser  # noqa: F401

            return True
        except ImportError:
            return False

    def _get_parser(self) -> Any:
        """A fresh parser per call; parsers are not shared between threads."""
        try:
            from tree_sitter_languages import get_parser
        except ImportError as e:
            raise ProviderUnavailableError(
                "The tree-sitter parser needs the tree-sitter-languages package"
            ) from e

        try:
            return get_parser(LANGUAGE)
        except Exception as e:
            raise ProviderUnavailableError(f"Could not load the {LANGUAGE} grammar: {e}") from e

    def parse(self, path: Path, lines: LineStore) -> List[DeclarationEvent]:
        """Parse the unit and return its declaration events in document order."""
        source = lines.text.encode("utf-8")
        tree = self._get_parser().parse(source)
        if tree is None:
            raise UnparseableUnitError(f"could not parse c++ source file: {path}")

        root = tree.root_node
        if root.has_error:
            logger.warning("Syntax errors in unit, results may be incomplete", file=str(path))

        walker = _UnitWalker(source)
        walker.walk_body(root, Scope(kind=None, qualified_name=""), 0)
        return walker.events
