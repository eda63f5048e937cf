"""
Declaration kinds and access levels.

Providers translate their own node types into DeclKind. The category
predicates below decide how the tree builder nests a declaration and how
the renderer prints it.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional


class DeclKind(str, Enum):
    """Kind of a declaration reported by an AST provider."""

    CLASS = "class"
    CLASS_TEMPLATE = "class_template"
    CLASS_TEMPLATE_PARTIAL_SPECIALIZATION = "class_template_partial_specialization"
    STRUCT = "struct"
    UNION = "union"
    ENUM = "enum"
    ENUM_CONSTANT = "enum_constant"
    METHOD = "method"
    FUNCTION = "function"
    FUNCTION_TEMPLATE = "function_template"
    CONSTRUCTOR = "constructor"
    DESTRUCTOR = "destructor"
    FIELD = "field"
    VARIABLE = "variable"
    TYPEDEF = "typedef"
    TYPE_ALIAS = "type_alias"
    TYPE_ALIAS_TEMPLATE = "type_alias_template"
    USING = "using"
    NAMESPACE = "namespace"
    OTHER = "other"


class AccessLevel(str, Enum):
    """C++ access specifier of a declaration."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    NOT_APPLICABLE = "not_applicable"


CLASS_KINDS: FrozenSet[DeclKind] = frozenset(
    {
        DeclKind.CLASS,
        DeclKind.CLASS_TEMPLATE,
        DeclKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION,
    }
)

CONTAINER_KINDS: FrozenSet[DeclKind] = CLASS_KINDS | {
    DeclKind.STRUCT,
    DeclKind.UNION,
    DeclKind.ENUM,
    DeclKind.ENUM_CONSTANT,
}

FUNCTION_KINDS: FrozenSet[DeclKind] = frozenset(
    {
        DeclKind.METHOD,
        DeclKind.FUNCTION,
        DeclKind.FUNCTION_TEMPLATE,
        DeclKind.CONSTRUCTOR,
        DeclKind.DESTRUCTOR,
    }
)

DOCUMENTABLE_KINDS: FrozenSet[DeclKind] = (
    CONTAINER_KINDS
    | FUNCTION_KINDS
    | {
        DeclKind.FIELD,
        DeclKind.USING,
        DeclKind.TYPEDEF,
        DeclKind.TYPE_ALIAS,
        DeclKind.TYPE_ALIAS_TEMPLATE,
        DeclKind.VARIABLE,
    }
)

# Heading label per kind; kinds missing here are never printed
KIND_LABELS: Dict[DeclKind, str] = {
    DeclKind.STRUCT: "Struct",
    DeclKind.UNION: "Union",
    DeclKind.ENUM: "Enum",
    DeclKind.ENUM_CONSTANT: "Enum Constant",
    DeclKind.CLASS: "Class",
    DeclKind.CLASS_TEMPLATE: "Class",
    DeclKind.METHOD: "Function",
    DeclKind.FUNCTION: "Function",
    DeclKind.FUNCTION_TEMPLATE: "Function",
    DeclKind.CONSTRUCTOR: "Constructor",
    DeclKind.DESTRUCTOR: "Destructor",
    DeclKind.USING: "Using",
    DeclKind.TYPEDEF: "Typedef",
    DeclKind.TYPE_ALIAS: "Type Alias",
    DeclKind.TYPE_ALIAS_TEMPLATE: "Type Alias",
    DeclKind.VARIABLE: "Variable",
    DeclKind.FIELD: "Field",
}


def is_class(kind: Optional[DeclKind]) -> bool:
    """Class-like containers, whose members default to private."""
    return kind in CLASS_KINDS


def is_container(kind: Optional[DeclKind]) -> bool:
    """Kinds that own nested declarations."""
    return kind in CONTAINER_KINDS


def is_function(kind: Optional[DeclKind]) -> bool:
    """Function-like kinds; their bodies never contribute declarations."""
    return kind in FUNCTION_KINDS


def is_documentable(kind: Optional[DeclKind]) -> bool:
    """Kinds that become tree nodes."""
    return kind in DOCUMENTABLE_KINDS


def kind_label(kind: DeclKind) -> Optional[str]:
    """Printable category label, or None for kinds that are never printed."""
    return KIND_LABELS.get(kind)
