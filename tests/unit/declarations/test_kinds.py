"""Tests for declaration kind categories and labels."""

import pytest

from headerdoc.declarations.kinds import (
    DeclKind,
    is_class,
    is_container,
    is_documentable,
    is_function,
    kind_label,
)


class TestCategories:
    """Tests for the category predicates."""

    @pytest.mark.parametrize(
        "kind",
        [DeclKind.CLASS, DeclKind.CLASS_TEMPLATE, DeclKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION],
    )
    def test_class_kinds(self, kind):
        assert is_class(kind)
        assert is_container(kind)

    def test_struct_is_container_not_class(self):
        assert is_container(DeclKind.STRUCT)
        assert not is_class(DeclKind.STRUCT)

    def test_enum_constant_is_container(self):
        assert is_container(DeclKind.ENUM_CONSTANT)

    @pytest.mark.parametrize(
        "kind",
        [
            DeclKind.METHOD,
            DeclKind.FUNCTION,
            DeclKind.FUNCTION_TEMPLATE,
            DeclKind.CONSTRUCTOR,
            DeclKind.DESTRUCTOR,
        ],
    )
    def test_function_kinds(self, kind):
        assert is_function(kind)
        assert not is_container(kind)

    def test_namespace_not_documentable(self):
        assert not is_documentable(DeclKind.NAMESPACE)
        assert not is_documentable(DeclKind.OTHER)
        assert not is_container(DeclKind.NAMESPACE)

    def test_none_parent(self):
        assert not is_container(None)
        assert not is_function(None)

    def test_field_and_aliases_documentable(self):
        for kind in (DeclKind.FIELD, DeclKind.USING, DeclKind.TYPEDEF, DeclKind.TYPE_ALIAS):
            assert is_documentable(kind)


class TestKindLabel:
    """Tests for kind_label()."""

    @pytest.mark.parametrize(
        "kind, label",
        [
            (DeclKind.STRUCT, "Struct"),
            (DeclKind.CLASS_TEMPLATE, "Class"),
            (DeclKind.METHOD, "Function"),
            (DeclKind.FUNCTION_TEMPLATE, "Function"),
            (DeclKind.ENUM_CONSTANT, "Enum Constant"),
            (DeclKind.TYPE_ALIAS_TEMPLATE, "Type Alias"),
            (DeclKind.VARIABLE, "Variable"),
        ],
    )
    def test_labels(self, kind, label):
        assert kind_label(kind) == label

    def test_unlabelled_kinds(self):
        assert kind_label(DeclKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION) is None
        assert kind_label(DeclKind.NAMESPACE) is None
        assert kind_label(DeclKind.OTHER) is None
