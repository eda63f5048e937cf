"""
Tests for the libclang provider.

Test Strategy
-------------
- Name and kind mapping run against lightweight fake cursors
- Real parsing needs the libclang package and its shared library;
  those tests are skipped when either is missing

Organization
------------
- TestMapping: cursor kind and access translation
- TestQualifiedName: qualified names built from semantic parents
- TestToEvent: cursor to DeclarationEvent conversion
- TestCursorName: names of anonymous and unnamed declarations
- TestParse: end-to-end parsing with libclang
"""

import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

import pytest

from headerdoc.declarations.kinds import AccessLevel, DeclKind
from headerdoc.providers.clang_provider import (
    ClangProvider,
    cursor_name,
    map_access,
    map_kind,
    qualified_name,
)
from headerdoc.source.line_store import LineStore
from tests.fixtures.headers import SAMPLE_HEADER


def cursor(
    kind: str,
    spelling: str = "",
    parent: Optional[SimpleNamespace] = None,
    access: str = "INVALID",
    lines: tuple = (1, 1),
    anonymous: bool = False,
) -> SimpleNamespace:
    """Fake cursor with the attributes the provider reads."""
    return SimpleNamespace(
        kind=SimpleNamespace(name=kind),
        spelling=spelling,
        is_anonymous=lambda: anonymous,
        semantic_parent=parent,
        access_specifier=SimpleNamespace(name=access),
        extent=SimpleNamespace(
            start=SimpleNamespace(line=lines[0]),
            end=SimpleNamespace(line=lines[1]),
        ),
    )


TU = cursor("TRANSLATION_UNIT", "vec.h")


class TestMapping:
    """Tests for map_kind() and map_access()."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("STRUCT_DECL", DeclKind.STRUCT),
            ("CLASS_TEMPLATE", DeclKind.CLASS_TEMPLATE),
            ("CXX_METHOD", DeclKind.METHOD),
            ("FIELD_DECL", DeclKind.FIELD),
            ("ENUM_CONSTANT_DECL", DeclKind.ENUM_CONSTANT),
            ("NAMESPACE", DeclKind.NAMESPACE),
        ],
    )
    def test_known_kinds(self, name, expected):
        assert map_kind(name) == expected

    def test_unknown_kind_is_other(self):
        assert map_kind("PARM_DECL") == DeclKind.OTHER

    def test_access(self):
        assert map_access("PRIVATE") == AccessLevel.PRIVATE
        assert map_access("INVALID") == AccessLevel.NOT_APPLICABLE


class TestQualifiedName:
    """Tests for qualified_name()."""

    def test_top_level(self):
        assert qualified_name(cursor("STRUCT_DECL", "Vec3", TU)) == "Vec3"

    def test_nested(self):
        ns = cursor("NAMESPACE", "geo", TU)
        vec = cursor("STRUCT_DECL", "Vec3", ns)

        assert qualified_name(cursor("CXX_METHOD", "length", vec)) == "geo::Vec3::length"

    def test_anonymous_namespace_adds_nothing(self):
        anon = cursor("NAMESPACE", "", TU)

        assert qualified_name(cursor("FUNCTION_DECL", "helper", anon)) == "helper"

    def test_translation_unit_is_empty(self):
        assert qualified_name(TU) == ""

    def test_anonymous_record_keyed_by_line(self):
        s = cursor("STRUCT_DECL", "S", TU)
        union = cursor("UNION_DECL", "(anonymous union at s.h:2:2)", s, lines=(2, 5), anonymous=True)

        assert qualified_name(cursor("FIELD_DECL", "a", union)) == "S::(anonymous union at line 2)::a"

    def test_unnamed_record_with_empty_spelling(self):
        record = cursor("STRUCT_DECL", "", TU, lines=(7, 9), anonymous=True)

        assert qualified_name(record) == "(anonymous struct at line 7)"


class TestToEvent:
    """Tests for ClangProvider._to_event()."""

    def test_member_event(self):
        vec = cursor("STRUCT_DECL", "Vec3", TU, lines=(2, 9))
        field = cursor("FIELD_DECL", "x", vec, access="PUBLIC", lines=(4, 4))

        event = ClangProvider()._to_event(field)

        assert event.kind == DeclKind.FIELD
        assert event.qualified_name == "Vec3::x"
        assert event.access == AccessLevel.PUBLIC
        assert event.parent_kind == DeclKind.STRUCT
        assert event.parent_qualified_name == "Vec3"
        assert (event.start_line, event.end_line) == (4, 4)

    def test_top_level_event_has_no_parent(self):
        event = ClangProvider()._to_event(cursor("FUNCTION_DECL", "dot", TU, lines=(12, 12)))

        assert event.parent_kind is None
        assert event.parent_qualified_name == ""

    def test_undocumentable_kind_dropped(self):
        assert ClangProvider()._to_event(cursor("PARM_DECL", "a", TU)) is None

    def test_namespace_dropped(self):
        assert ClangProvider()._to_event(cursor("NAMESPACE", "geo", TU)) is None

    def test_anonymous_union_has_empty_name(self):
        s = cursor("STRUCT_DECL", "S", TU, lines=(1, 6))
        union = cursor("UNION_DECL", "(anonymous union at s.h:2:2)", s, access="PUBLIC", lines=(2, 5))

        event = ClangProvider()._to_event(union)

        assert event.name == ""
        assert event.qualified_name == "S::(anonymous union at line 2)"


class TestCursorName:
    """Tests for cursor_name()."""

    def test_named(self):
        assert cursor_name(cursor("STRUCT_DECL", "Vec3", TU)) == "Vec3"

    def test_anonymous_namespace(self):
        assert cursor_name(cursor("NAMESPACE", "", TU, anonymous=True)) == ""

    def test_unnamed_record_spelling(self):
        assert cursor_name(cursor("STRUCT_DECL", "(unnamed struct at s.h:1:1)", TU)) == ""


def _require_libclang():
    cindex = pytest.importorskip("clang.cindex")
    try:
        cindex.Index.create()
    except cindex.LibclangError as e:
        pytest.skip(f"libclang shared library not loadable: {e}")


class TestParse:
    """End-to-end tests for ClangProvider.parse()."""

    def test_sample_header(self):
        _require_libclang()
        lines = LineStore.from_text(SAMPLE_HEADER)

        events = ClangProvider().parse(Path("vec.h"), lines)

        assert [(e.kind, e.qualified_name) for e in events] == [
            (DeclKind.STRUCT, "Vec3"),
            (DeclKind.FIELD, "Vec3::x"),
            (DeclKind.FIELD, "Vec3::y"),
            (DeclKind.METHOD, "Vec3::length"),
            (DeclKind.FUNCTION, "dot"),
        ]
        assert (events[0].start_line, events[0].end_line) == (2, 9)
        assert events[3].start_line == 8

    def test_class_access(self):
        _require_libclang()
        lines = LineStore.from_text("class W {\npublic:\n\tvoid open();\nprivate:\n\tint h;\n};\n")

        events = ClangProvider().parse(Path("w.h"), lines)
        access = {e.qualified_name: e.access for e in events}

        assert access["W::open"] == AccessLevel.PUBLIC
        assert access["W::h"] == AccessLevel.PRIVATE

    def test_directives_removed_before_parsing(self):
        _require_libclang()
        lines = LineStore.from_text('#include "missing.h"\n// Doc\nint f();\n')

        events = ClangProvider().parse(Path("f.h"), lines)

        assert [(e.qualified_name, e.start_line) for e in events] == [("f", 2)]

    def test_unresolved_types_still_parsed(self, caplog):
        _require_libclang()
        lines = LineStore.from_text(
            "#include <string>\n// A name\nstd::string name;\n// A count\nint count;\n"
        )

        with caplog.at_level(logging.WARNING):
            events = ClangProvider().parse(Path("names.h"), lines)

        assert "count" in [e.qualified_name for e in events]
        assert "Parser diagnostic" in caplog.text

    def test_anonymous_union_member(self):
        _require_libclang()
        text = "struct S {\n\tunion {\n\t\tint a;\n\t\tfloat b;\n\t};\n};\n"

        events = ClangProvider().parse(Path("s.h"), LineStore.from_text(text))
        by_key = {e.qualified_name: e for e in events}

        union = by_key["S::(anonymous union at line 2)"]
        assert union.kind == DeclKind.UNION
        assert union.name == ""
        assert by_key["S::(anonymous union at line 2)::a"].parent_qualified_name == (
            "S::(anonymous union at line 2)"
        )
