# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for match projection rules, using hand-built matches."""

import pytest

from treeq.codebase import projector
from treeq.languages.base import DocCommentPattern
from treeq.models import (
    Capture,
    Match,
    Position,
    Range,
    ReferenceKind,
    SymbolKind,
    Visibility,
)


def cap(name, text, node_type="identifier", line=1, column=1, end_line=None, end_column=None):
    end = Position(
        line=end_line if end_line is not None else line,
        column=end_column if end_column is not None else column + len(text),
    )
    return Capture(
        name=name,
        node_type=node_type,
        text=text,
        range=Range(start=Position(line=line, column=column), end=end),
    )


def match(*captures, file="main.go"):
    return Match(file=file, captures=list(captures))


class TestClassifySymbol:
    def test_no_captures_is_rejected(self):
        assert projector.classify_symbol({}) is None
        assert projector.symbol_from_match(match()) is None

    def test_unrelated_captures_are_rejected(self):
        captures = projector.index_captures(match(cap("name", "x"), cap("params", "()")))
        assert projector.classify_symbol(captures) is None

    def test_const_wins_over_type(self):
        m = match(
            cap("const", "x int = 1", node_type="const_spec"),
            cap("name", "x"),
            cap("type", "int", node_type="type_identifier", column=3),
        )
        assert projector.classify_symbol(projector.index_captures(m)) == SymbolKind.CONST

        symbol = projector.symbol_from_match(m)
        assert symbol.kind == SymbolKind.CONST
        assert symbol.name == "x"

    def test_var_wins_over_function(self):
        captures = projector.index_captures(match(cap("var", "v"), cap("function", "f")))
        assert projector.classify_symbol(captures) == SymbolKind.VAR

    @pytest.mark.parametrize(
        "node_type, expected",
        [
            ("struct_type", SymbolKind.STRUCT),
            ("interface_type", SymbolKind.INTERFACE),
            ("map_type", SymbolKind.TYPE),
            ("type_identifier", SymbolKind.TYPE),
        ],
    )
    def test_type_refined_by_definition_node(self, node_type, expected):
        captures = projector.index_captures(
            match(cap("type", "type T x"), cap("name", "T"), cap("type_def", "x", node_type=node_type))
        )
        assert projector.classify_symbol(captures) == expected

    def test_type_without_definition_is_plain_type(self):
        captures = projector.index_captures(match(cap("type", "type T = U"), cap("name", "T")))
        assert projector.classify_symbol(captures) == SymbolKind.TYPE

    def test_index_captures_last_write_wins(self):
        captures = projector.index_captures(match(cap("name", "a"), cap("name", "b")))
        assert captures["name"].text == "b"


class TestVisibility:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Hello", Visibility.PUBLIC),
            ("hello", Visibility.PRIVATE),
            ("_hidden", Visibility.PRIVATE),
            ("Ñandú", Visibility.PUBLIC),
            ("ñandú", Visibility.PRIVATE),
            ("Δelta", Visibility.PUBLIC),
            ("", Visibility.PRIVATE),
        ],
    )
    def test_visibility_follows_first_character_case(self, name, expected):
        assert projector.visibility_of(name) == expected


class TestSignature:
    def test_function_signature(self):
        captures = projector.index_captures(match(cap("name", "Hello"), cap("params", "()")))
        assert projector.build_signature(captures) == "func Hello ()"

    def test_method_signature_with_result(self):
        captures = projector.index_captures(
            match(
                cap("receiver", "(s *Server)"),
                cap("name", "Start"),
                cap("params", "(ctx context.Context)"),
                cap("result", "error"),
            )
        )
        assert (
            projector.build_signature(captures)
            == "func (s *Server) Start (ctx context.Context) error"
        )

    def test_absent_parts_are_omitted(self):
        assert projector.build_signature({}) == "func"

    @pytest.mark.parametrize(
        "receiver, expected",
        [
            ("(s *Server)", "Server"),
            ("(s Server)", "Server"),
            ("(Server)", "Server"),
            ("(*Server)", "Server"),
            ("(c *pkg.Client)", "pkg.Client"),
            ("()", ""),
        ],
    )
    def test_receiver_type(self, receiver, expected):
        assert projector.receiver_type(receiver) == expected


class TestTruncateSource:
    def test_non_positive_limit_keeps_everything(self):
        text = "a\nb\nc"
        assert projector.truncate_source(text, 0) == text
        assert projector.truncate_source(text, -1) == text

    def test_short_source_unchanged(self):
        assert projector.truncate_source("a\nb", 2) == "a\nb"

    def test_long_source_cut_with_marker(self):
        assert projector.truncate_source("a\nb\nc\nd", 2) == "a\nb\n..."


class TestExtractDoc:
    pattern = DocCommentPattern(line_prefixes=["//"])

    def test_contiguous_comment_block(self):
        lines = [
            "package main",
            "",
            "// Hello greets.",
            "//   indented detail",
            "func Hello() {}",
        ]
        assert projector.extract_doc(lines, 5, self.pattern) == "Hello greets.\n  indented detail"

    def test_blank_line_breaks_block(self):
        lines = ["// unrelated", "", "func Hello() {}"]
        assert projector.extract_doc(lines, 3, self.pattern) is None

    def test_no_pattern_no_doc(self):
        assert projector.extract_doc(["// doc", "func A() {}"], 2, None) is None

    def test_first_line_declaration(self):
        assert projector.extract_doc(["func A() {}"], 1, self.pattern) is None


class TestSymbolFromMatch:
    def test_function_fields(self):
        m = match(
            cap("function", "func Hello() {}", node_type="function_declaration", end_column=16),
            cap("name", "Hello", column=6),
            cap("params", "()", node_type="parameter_list", column=11),
        )
        symbol = projector.symbol_from_match(m)

        assert symbol.name == "Hello"
        assert symbol.kind == SymbolKind.FUNCTION
        assert symbol.visibility == Visibility.PUBLIC
        assert symbol.signature == "func Hello ()"
        assert symbol.range.start == Position(line=1, column=6)
        assert symbol.source is None
        assert symbol.receiver is None

    def test_method_receiver(self):
        m = match(
            cap("method", "func (s *Server) run() {}", node_type="method_declaration"),
            cap("receiver", "(s *Server)", node_type="parameter_list", column=6),
            cap("name", "run", column=18),
            cap("params", "()", column=21),
        )
        symbol = projector.symbol_from_match(m)

        assert symbol.kind == SymbolKind.METHOD
        assert symbol.receiver == "Server"
        assert symbol.visibility == Visibility.PRIVATE

    def test_type_range_comes_from_declaration(self):
        m = match(
            cap("type", "type Point struct{}", node_type="type_declaration", line=3, column=1),
            cap("name", "Point", node_type="type_identifier", line=3, column=6),
            cap("type_def", "struct{}", node_type="struct_type", line=3, column=12),
        )
        symbol = projector.symbol_from_match(m)

        assert symbol.kind == SymbolKind.STRUCT
        assert symbol.range.start == Position(line=3, column=1)
        assert symbol.signature is None

    def test_include_source_uses_outer_capture(self):
        body = "func Big() {\n\ta()\n\tb()\n\tc()\n}"
        m = match(
            cap("function", body, node_type="function_declaration", end_line=5, end_column=2),
            cap("name", "Big", column=6),
        )
        symbol = projector.symbol_from_match(m, include_source=True, max_source_lines=2)

        assert symbol.source == "func Big() {\n\ta()\n..."
        assert symbol.range.start == Position(line=1, column=1)
        assert symbol.range.end == Position(line=5, column=2)

    def test_missing_or_empty_name_rejected(self):
        assert projector.symbol_from_match(match(cap("function", "func() {}"))) is None
        assert projector.symbol_from_match(match(cap("function", "f"), cap("name", ""))) is None

    def test_doc_attached_from_lines(self):
        lines = ["package main", "// Hello greets.", "func Hello() {}"]
        m = match(
            cap("function", "func Hello() {}", line=3),
            cap("name", "Hello", line=3, column=6),
        )
        symbol = projector.symbol_from_match(
            m, lines=lines, doc_pattern=DocCommentPattern(line_prefixes=["//"])
        )
        assert symbol.doc == "Hello greets."

    def test_omit_if_empty_serialization(self):
        symbol = projector.symbol_from_match(match(cap("var", "v"), cap("name", "v")))
        data = symbol.to_dict()

        assert data["kind"] == "var"
        assert data["visibility"] == "private"
        for key in ("signature", "source", "receiver", "doc"):
            assert key not in data


class TestExtractSymbols:
    @pytest.fixture
    def matches(self):
        return [
            match(cap("function", "f"), cap("name", "Public")),
            match(cap("function", "f"), cap("name", "private")),
            match(cap("name", "orphan")),
        ]

    def test_all(self, matches):
        names = [s.name for s in projector.extract_symbols(matches)]
        assert names == ["Public", "private"]

    def test_public_only(self, matches):
        names = [s.name for s in projector.extract_symbols(matches, visibility="public")]
        assert names == ["Public"]

    def test_private_only(self, matches):
        names = [s.name for s in projector.extract_symbols(matches, visibility="private")]
        assert names == ["private"]

    def test_idempotent(self, matches):
        first = [s.to_dict() for s in projector.extract_symbols(matches)]
        second = [s.to_dict() for s in projector.extract_symbols(matches)]
        assert first == second


class TestBuildOutline:
    def test_outline_folding(self):
        matches = [
            match(cap("package", "main", node_type="package_identifier")),
            match(cap("path", '"fmt"', node_type="interpreted_string_literal")),
            match(cap("alias", "str"), cap("path", "`strings`", node_type="raw_string_literal")),
            match(
                cap("method", "func (s *Server) Run() {}"),
                cap("receiver_type", "*Server", node_type="pointer_type"),
                cap("method_name", "Run"),
            ),
            match(cap("struct", "type Server struct{}"), cap("type_name", "Server")),
            match(cap("type_map", "type Index map[string]int"), cap("type_name", "Index")),
            match(cap("const", "limit = 3"), cap("const_name", "limit")),
            match(cap("function", "func x() {}")),
        ]
        outline = projector.build_outline("main.go", matches)

        assert outline.package == "main"
        assert [(i.path, i.alias) for i in outline.imports] == [("fmt", None), ("strings", "str")]
        assert [(s.name, s.kind) for s in outline.symbols] == [
            ("Run", SymbolKind.METHOD),
            ("Server", SymbolKind.STRUCT),
            ("Index", SymbolKind.TYPE),
            ("limit", SymbolKind.CONST),
        ]
        assert outline.symbols[0].receiver == "Server"

    def test_outline_source_truncated(self):
        matches = [
            match(cap("function", "func A() {\n\t1\n\t2\n}"), cap("func_name", "A")),
        ]
        outline = projector.build_outline("a.go", matches, include_source=True, max_source_lines=1)
        assert outline.symbols[0].source == "func A() {\n..."

    def test_empty_imports_omitted(self):
        data = projector.build_outline("a.go", []).to_dict()
        assert data == {"file": "a.go", "package": "", "symbols": []}


class TestReferences:
    @pytest.mark.parametrize(
        "capture_name, expected",
        [
            ("call", ReferenceKind.CALL),
            ("type_ref", ReferenceKind.TYPE_REF),
            ("composite_type", ReferenceKind.TYPE_REF),
            ("field", ReferenceKind.FIELD_ACCESS),
            ("ident", ReferenceKind.IDENTIFIER),
            ("short_var", ReferenceKind.IDENTIFIER),
            ("package", ReferenceKind.REFERENCE),
            ("anything", ReferenceKind.REFERENCE),
        ],
    )
    def test_reference_kind(self, capture_name, expected):
        assert projector.reference_kind(capture_name) == expected

    def test_exact_text_only(self):
        matches = [
            match(cap("ident", "Foo", line=1)),
            match(cap("ident", "FooBar", line=2)),
            match(cap("ident", "foo", line=3)),
        ]
        refs = projector.find_references(matches, "Foo")
        assert [r.position.line for r in refs] == [1]

    def test_same_position_keeps_most_specific(self):
        matches = [
            match(cap("ident", "Foo", line=4, column=2)),
            match(cap("call", "Foo", line=4, column=2)),
            match(cap("type_ref", "Foo", line=7, column=5)),
        ]
        refs = projector.find_references(matches, "Foo")

        assert [(r.kind, r.position.line) for r in refs] == [
            (ReferenceKind.CALL, 4),
            (ReferenceKind.TYPE_REF, 7),
        ]
        assert all(r.symbol == "Foo" for r in refs)

    def test_non_overlapping_captures_one_reference_each(self):
        matches = [
            match(cap("ident", "Foo", line=2, column=1), cap("ident", "Foo", line=2, column=9)),
            match(cap("field", "Foo", line=5, column=3)),
            match(cap("field", "Foo", line=5, column=3), file="other.go"),
        ]
        refs = projector.find_references(matches, "Foo")

        assert [(r.file, r.position.line, r.position.column, r.kind) for r in refs] == [
            ("main.go", 2, 1, ReferenceKind.IDENTIFIER),
            ("main.go", 2, 9, ReferenceKind.IDENTIFIER),
            ("main.go", 5, 3, ReferenceKind.FIELD_ACCESS),
            ("other.go", 5, 3, ReferenceKind.FIELD_ACCESS),
        ]

    def test_context_is_stripped_line(self):
        lines = ["package main", "", "\tx := Foo()   "]
        refs = projector.find_references(
            [match(cap("call", "Foo", line=3, column=7))], "Foo", include_context=True, lines=lines
        )
        assert refs[0].context == "x := Foo()"

    def test_context_omitted_by_default(self):
        refs = projector.find_references([match(cap("call", "Foo"))], "Foo", lines=["Foo()"])
        assert "context" not in refs[0].to_dict()
