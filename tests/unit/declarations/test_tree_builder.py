"""
Tests for the DeclarationTreeBuilder.

Test Strategy
-------------
- Events are built by hand; no parser involved
- Each test ingests a short event stream over a small header and checks
  the resulting tree and build statistics

Organization
------------
- TestNesting: where declarations end up
- TestDuplicates: forward declarations and repeated declarations
- TestFiltering: kinds and scopes that never become nodes
- TestOrphans: children whose parent is unknown
"""

import logging

import pytest

from headerdoc.declarations.kinds import AccessLevel, DeclKind
from headerdoc.declarations.models import SourceRange
from headerdoc.declarations.tree_builder import DeclarationTreeBuilder
from headerdoc.source.line_store import LineStore
from tests.fixtures.headers import event


def builder_for(text: str) -> DeclarationTreeBuilder:
    return DeclarationTreeBuilder(LineStore.from_text(text))


class TestNesting:
    """Tests for parent/child placement."""

    def test_sample_header_tree(self, sample_lines, sample_events_list):
        builder = DeclarationTreeBuilder(sample_lines)

        roots = builder.ingest_all(sample_events_list)

        assert sorted(roots) == ["Vec3", "dot"]
        assert sorted(roots["Vec3"].children) == ["Vec3::length", "Vec3::x", "Vec3::y"]
        assert len(builder) == 5
        assert builder.stats.inserted == 5

    def test_documentation_ranges_located(self, sample_lines, sample_events_list):
        builder = DeclarationTreeBuilder(sample_lines)
        builder.ingest_all(sample_events_list)

        assert builder.find("Vec3").documentation_range == SourceRange(1, 1)
        assert builder.find("Vec3::x").documentation_range == SourceRange(3, 3)
        assert builder.find("Vec3::y").documentation_range is None
        assert builder.find("dot").documentation_range == SourceRange(11, 11)

    def test_namespace_members_at_root(self):
        builder = builder_for("namespace ns {\nstruct A {};\n}\n")
        a = event(
            DeclKind.STRUCT,
            "ns::A",
            2,
            parent_kind=DeclKind.NAMESPACE,
            parent_qualified_name="ns",
        )

        roots = builder.ingest_all([a])

        assert list(roots) == ["ns::A"]

    def test_nested_containers(self):
        builder = builder_for("struct A {\n\tstruct B {\n\t\tint x;\n\t};\n};\n")
        a = event(DeclKind.STRUCT, "A", 1, 5)
        b = event(DeclKind.STRUCT, "A::B", 2, 4, access=AccessLevel.PUBLIC, parent=a)
        x = event(DeclKind.FIELD, "A::B::x", 3, access=AccessLevel.PUBLIC, parent=b)

        roots = builder.ingest_all([a, b, x])

        assert list(roots["A"].children["A::B"].children) == ["A::B::x"]
        assert "A::B::x" in builder

    def test_enum_constants_under_enum(self):
        builder = builder_for("enum class Color {\n\tRed,\n\tGreen,\n};\n")
        color = event(DeclKind.ENUM, "Color", 1, 4)
        red = event(DeclKind.ENUM_CONSTANT, "Color::Red", 2, parent=color)
        green = event(DeclKind.ENUM_CONSTANT, "Color::Green", 3, parent=color)

        roots = builder.ingest_all([color, red, green])

        assert sorted(roots["Color"].children) == ["Color::Green", "Color::Red"]


class TestDuplicates:
    """Tests for repeated qualified names."""

    def test_forward_declaration_replaced_by_definition(self):
        text = "struct A;\n\n\nstruct A {\n\tint x;\n};\n"
        builder = builder_for(text)
        forward = event(DeclKind.STRUCT, "A", 1)
        definition = event(DeclKind.STRUCT, "A", 4, 6)

        roots = builder.ingest_all([forward, definition])

        assert roots["A"].declaration_range == SourceRange(4, 6)
        assert builder.stats.replaced == 1
        assert len(builder) == 1

    def test_documented_first_declaration_kept(self):
        text = "// Computes things\nvoid f();\n\n\nvoid f();\n"
        builder = builder_for(text)

        roots = builder.ingest_all([event(DeclKind.FUNCTION, "f", 2), event(DeclKind.FUNCTION, "f", 5)])

        assert roots["f"].declaration_range == SourceRange(2, 2)
        assert roots["f"].documentation_range == SourceRange(1, 1)
        assert builder.stats.kept_documented == 1

    def test_documented_second_declaration_wins(self):
        text = "void f();\n\n\n// Computes things\nvoid f() {}\n"
        builder = builder_for(text)

        roots = builder.ingest_all([event(DeclKind.FUNCTION, "f", 1), event(DeclKind.FUNCTION, "f", 5)])

        assert roots["f"].declaration_range == SourceRange(5, 5)
        assert roots["f"].is_documented

    def test_both_undocumented_most_recent_wins(self):
        text = "void f();\n\n\nvoid f();\n"
        builder = builder_for(text)

        roots = builder.ingest_all([event(DeclKind.FUNCTION, "f", 1), event(DeclKind.FUNCTION, "f", 4)])

        assert roots["f"].declaration_range == SourceRange(4, 4)

    def test_both_documented_first_wins(self):
        text = "// one\nvoid f();\n// two\nvoid f();\n"
        builder = builder_for(text)

        roots = builder.ingest_all([event(DeclKind.FUNCTION, "f", 2), event(DeclKind.FUNCTION, "f", 4)])

        assert roots["f"].documentation_range == SourceRange(1, 1)

    def test_replacement_adopts_children(self):
        text = "struct A {\n\tint x;\n};\n\nstruct A;\n"
        builder = builder_for(text)
        a = event(DeclKind.STRUCT, "A", 1, 3)
        x = event(DeclKind.FIELD, "A::x", 2, access=AccessLevel.PUBLIC, parent=a)
        redeclared = event(DeclKind.STRUCT, "A", 5)

        roots = builder.ingest_all([a, x, redeclared])

        assert roots["A"].declaration_range == SourceRange(5, 5)
        assert list(roots["A"].children) == ["A::x"]

    def test_out_of_line_member_definition_is_duplicate(self):
        text = "struct A {\n\t// Resets\n\tvoid reset();\n};\n\nvoid A::reset() {}\n"
        builder = builder_for(text)
        a = event(DeclKind.STRUCT, "A", 1, 4)
        inside = event(DeclKind.METHOD, "A::reset", 3, access=AccessLevel.PUBLIC, parent=a)
        outside = event(DeclKind.METHOD, "A::reset", 6, access=AccessLevel.PUBLIC, parent=a)

        roots = builder.ingest_all([a, inside, outside])

        assert roots["A"].children["A::reset"].declaration_range == SourceRange(3, 3)
        assert "A::reset" not in roots
        assert len(builder) == 2

    def test_duplicate_of_nested_node_replaced_in_place(self):
        text = "struct A {\n\tvoid f();\n};\n\nvoid A::f() {}\n"
        builder = builder_for(text)
        a = event(DeclKind.STRUCT, "A", 1, 3)
        inside = event(DeclKind.METHOD, "A::f", 2, access=AccessLevel.PUBLIC, parent=a)
        outside = event(DeclKind.METHOD, "A::f", 5, access=AccessLevel.PUBLIC, parent=a)

        roots = builder.ingest_all([a, inside, outside])

        replaced = roots["A"].children["A::f"]
        assert replaced.declaration_range == SourceRange(5, 5)
        assert builder.find("A::f") is replaced


class TestFiltering:
    """Tests for declarations that never become nodes."""

    def test_non_documentable_kind_skipped(self):
        builder = builder_for("namespace ns {}\n")

        roots = builder.ingest_all([event(DeclKind.NAMESPACE, "ns", 1)])

        assert roots == {}
        assert builder.stats.skipped_kind == 1

    def test_function_locals_discarded(self):
        text = "inline int f() {\n\tint local = 1;\n\treturn local;\n}\n"
        builder = builder_for(text)
        f = event(DeclKind.FUNCTION, "f", 1, 4)
        local = event(DeclKind.VARIABLE, "f::local", 2, parent=f)

        roots = builder.ingest_all([f, local])

        assert list(roots) == ["f"]
        assert roots["f"].children == {}
        assert builder.stats.discarded_local == 1

    def test_method_locals_discarded(self):
        text = "struct A {\n\tstatic int g() {\n\t\tint v = 2;\n\t\treturn v;\n\t}\n};\n"
        builder = builder_for(text)
        a = event(DeclKind.STRUCT, "A", 1, 6)
        g = event(DeclKind.METHOD, "A::g", 2, 5, access=AccessLevel.PUBLIC, parent=a)
        v = event(DeclKind.VARIABLE, "A::g::v", 3, parent=g)

        roots = builder.ingest_all([a, g, v])

        assert roots["A"].children["A::g"].children == {}
        assert "A::g::v" not in builder


class TestOrphans:
    """Tests for children whose parent was never ingested."""

    def test_orphan_dropped_and_counted(self):
        builder = builder_for("int x;\n")
        x = event(
            DeclKind.FIELD,
            "Missing::x",
            1,
            parent_kind=DeclKind.STRUCT,
            parent_qualified_name="Missing",
        )

        roots = builder.ingest_all([x])

        assert roots == {}
        assert builder.stats.orphaned == 1

    def test_orphan_logs_warning(self, caplog: pytest.LogCaptureFixture):
        builder = builder_for("int x;\n")
        x = event(
            DeclKind.FIELD,
            "Missing::x",
            1,
            parent_kind=DeclKind.STRUCT,
            parent_qualified_name="Missing",
        )

        with caplog.at_level(logging.WARNING):
            builder.ingest(x)

        assert "Missing::x" in caplog.text
