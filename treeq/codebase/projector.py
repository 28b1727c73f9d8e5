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

"""Projection of raw query matches into symbols, outlines and references.

Everything here is a pure function of its inputs. The rules are driven by
capture names only (see ``TreeSitterQueries`` for the naming contract), so
the same projector serves any grammar whose queries follow it.

Symbol kind precedence is fixed: const, var, function, method, type. Go
const and var specs also carry a ``@type`` capture for their type
annotation; checking ``type`` last keeps ``const x int = 1`` a const.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from treeq.languages.base import DocCommentPattern
from treeq.models import (
    Capture,
    FileOutline,
    ImportInfo,
    Match,
    Position,
    Reference,
    ReferenceKind,
    Symbol,
    SymbolKind,
    Visibility,
)

# Capture name checked -> kind, in precedence order
SYMBOL_PRECEDENCE: Tuple[Tuple[str, SymbolKind], ...] = (
    ("const", SymbolKind.CONST),
    ("var", SymbolKind.VAR),
    ("function", SymbolKind.FUNCTION),
    ("method", SymbolKind.METHOD),
    ("type", SymbolKind.TYPE),
)

# Captures spanning the whole declaration (source snippet and doc anchor)
OUTER_CAPTURES = frozenset(name for name, _ in SYMBOL_PRECEDENCE)

# (declaration capture, name capture, kind) for outline queries, in order
OUTLINE_DECLARATIONS: Tuple[Tuple[str, str, SymbolKind], ...] = (
    ("function", "func_name", SymbolKind.FUNCTION),
    ("method", "method_name", SymbolKind.METHOD),
    ("struct", "type_name", SymbolKind.STRUCT),
    ("interface", "type_name", SymbolKind.INTERFACE),
    ("type_alias", "type_name", SymbolKind.TYPE),
    ("type_named", "type_name", SymbolKind.TYPE),
    ("type_ptr", "type_name", SymbolKind.TYPE),
    ("type_slice", "type_name", SymbolKind.TYPE),
    ("type_map", "type_name", SymbolKind.TYPE),
    ("type_func", "type_name", SymbolKind.TYPE),
    ("type_chan", "type_name", SymbolKind.TYPE),
    ("const", "const_name", SymbolKind.CONST),
    ("var", "var_name", SymbolKind.VAR),
)

REFERENCE_KINDS: Dict[str, ReferenceKind] = {
    "call": ReferenceKind.CALL,
    "type_ref": ReferenceKind.TYPE_REF,
    "composite_type": ReferenceKind.TYPE_REF,
    "field": ReferenceKind.FIELD_ACCESS,
    "ident": ReferenceKind.IDENTIFIER,
    "short_var": ReferenceKind.IDENTIFIER,
}

# Lower wins when several patterns capture the same position
_REFERENCE_SPECIFICITY: Dict[ReferenceKind, int] = {
    ReferenceKind.CALL: 0,
    ReferenceKind.TYPE_REF: 1,
    ReferenceKind.FIELD_ACCESS: 2,
    ReferenceKind.IDENTIFIER: 3,
    ReferenceKind.REFERENCE: 4,
}

TRUNCATION_MARKER = "..."


# ---------------------------------------------------------------------------
# Field derivation
# ---------------------------------------------------------------------------


def index_captures(match: Match) -> Dict[str, Capture]:
    """Index a match's captures by name; a repeated name keeps the last one."""
    return {capture.name: capture for capture in match.captures}


def refine_type_kind(type_def: Optional[Capture]) -> SymbolKind:
    """Turn a type declaration into struct, interface or plain type."""
    if type_def is None:
        return SymbolKind.TYPE
    if type_def.node_type.startswith("struct"):
        return SymbolKind.STRUCT
    if type_def.node_type.startswith("interface"):
        return SymbolKind.INTERFACE
    return SymbolKind.TYPE


def classify_symbol(captures: Dict[str, Capture]) -> Optional[SymbolKind]:
    """Decide which kind of symbol a capture set describes.

    Returns:
        The symbol kind, or None when the match is not a declaration
    """
    for capture_name, kind in SYMBOL_PRECEDENCE:
        if capture_name in captures:
            if kind is SymbolKind.TYPE:
                return refine_type_kind(captures.get("type_def"))
            return kind
    return None


def visibility_of(name: str) -> Visibility:
    """Public iff the first character is upper-case (Go naming convention).

    This is a lexical heuristic and says nothing about real access control
    in languages that have modifiers.
    """
    if name and name[0].isupper():
        return Visibility.PUBLIC
    return Visibility.PRIVATE


def build_signature(captures: Dict[str, Capture]) -> str:
    """Build ``func (r *T) Name (params) result`` from the available captures.

    Parts are joined by single spaces; absent captures are left out.
    """
    parts = ["func"]
    for capture_name in ("receiver", "name", "params", "result"):
        if capture_name in captures:
            parts.append(captures[capture_name].text)
    return " ".join(parts)


def receiver_type(receiver: str) -> str:
    """Extract the bare type name from a receiver, e.g. ``(r *MyType)`` -> ``MyType``."""
    if receiver.startswith("("):
        receiver = receiver[1:]
    if receiver.endswith(")"):
        receiver = receiver[:-1]
    parts = receiver.split()
    if not parts:
        return receiver
    last = parts[-1]
    return last[1:] if last.startswith("*") else last


def truncate_source(source: str, max_lines: int) -> str:
    """Keep the first ``max_lines`` lines and mark the cut; <= 0 keeps all."""
    if max_lines <= 0:
        return source

    lines = source.split("\n")
    if len(lines) <= max_lines:
        return source

    return "\n".join(lines[:max_lines]) + "\n" + TRUNCATION_MARKER


def source_lines(source: bytes) -> List[str]:
    """Split raw file bytes into lines for context and doc lookup."""
    return source.decode("utf-8", errors="replace").split("\n")


def extract_doc(
    lines: Sequence[str], decl_line: int, pattern: Optional[DocCommentPattern]
) -> Optional[str]:
    """Collect the comment block directly above a declaration.

    Args:
        lines: File lines
        decl_line: 1-based first line of the declaration
        pattern: The language's doc comment syntax

    Returns:
        Comment text without prefixes, or None when there is none
    """
    if pattern is None or pattern.location != "before" or not pattern.line_prefixes:
        return None

    collected: List[str] = []
    index = decl_line - 2
    while 0 <= index < len(lines):
        stripped = lines[index].strip()
        prefix = next((p for p in pattern.line_prefixes if stripped.startswith(p)), None)
        if prefix is None:
            break
        text = stripped[len(prefix) :]
        collected.append(text[1:] if text.startswith(" ") else text)
        index -= 1

    if not collected:
        return None
    return "\n".join(reversed(collected))


def _outer_capture(match: Match) -> Optional[Capture]:
    for capture in match.captures:
        if capture.name in OUTER_CAPTURES:
            return capture
    return None


# ---------------------------------------------------------------------------
# Symbols
# ---------------------------------------------------------------------------


def symbol_from_match(
    match: Match,
    include_source: bool = False,
    max_source_lines: int = 0,
    lines: Optional[Sequence[str]] = None,
    doc_pattern: Optional[DocCommentPattern] = None,
) -> Optional[Symbol]:
    """Project one symbols-query match into a Symbol.

    Returns:
        The symbol, or None for matches that are not declarations or have
        no name
    """
    captures = index_captures(match)
    kind = classify_symbol(captures)
    if kind is None:
        return None

    name = captures.get("name")
    if name is None or not name.text:
        return None

    symbol = Symbol(
        name=name.text,
        kind=kind,
        visibility=visibility_of(name.text),
        file=match.file,
        range=name.range,
    )

    if kind in (SymbolKind.TYPE, SymbolKind.STRUCT, SymbolKind.INTERFACE):
        symbol.range = captures["type"].range
    elif kind in (SymbolKind.FUNCTION, SymbolKind.METHOD):
        symbol.signature = build_signature(captures)
        if kind is SymbolKind.METHOD and "receiver" in captures:
            symbol.receiver = receiver_type(captures["receiver"].text) or None

    outer = _outer_capture(match)
    if outer is not None:
        if include_source:
            symbol.source = truncate_source(outer.text, max_source_lines)
            symbol.range = outer.range
        if lines is not None:
            symbol.doc = extract_doc(lines, outer.range.start.line, doc_pattern)

    return symbol


def extract_symbols(
    matches: List[Match],
    visibility: str = "all",
    include_source: bool = False,
    max_source_lines: int = 0,
    lines: Optional[Sequence[str]] = None,
    doc_pattern: Optional[DocCommentPattern] = None,
) -> List[Symbol]:
    """Project a file's matches into symbols, filtered by visibility."""
    symbols: List[Symbol] = []

    for match in matches:
        symbol = symbol_from_match(match, include_source, max_source_lines, lines, doc_pattern)
        if symbol is None:
            continue
        if visibility != "all" and symbol.visibility.value != visibility:
            continue
        symbols.append(symbol)

    return symbols


# ---------------------------------------------------------------------------
# Outline
# ---------------------------------------------------------------------------


def build_outline(
    file: str,
    matches: List[Match],
    include_source: bool = False,
    max_source_lines: int = 0,
    lines: Optional[Sequence[str]] = None,
    doc_pattern: Optional[DocCommentPattern] = None,
) -> FileOutline:
    """Fold outline-query matches into a FileOutline."""
    outline = FileOutline(file=file)

    for match in matches:
        captures = index_captures(match)

        if "package" in captures:
            outline.package = captures["package"].text
            continue

        if "path" in captures:
            imp = ImportInfo(path=captures["path"].text.strip('"`'))
            if "alias" in captures:
                imp.alias = captures["alias"].text
            outline.imports.append(imp)
            continue

        for decl_name, name_capture, kind in OUTLINE_DECLARATIONS:
            decl = captures.get(decl_name)
            if decl is None:
                continue
            name = captures.get(name_capture)
            if name is not None and name.text:
                symbol = Symbol(
                    name=name.text,
                    kind=kind,
                    visibility=visibility_of(name.text),
                    file=file,
                    range=decl.range,
                )
                if kind is SymbolKind.METHOD and "receiver_type" in captures:
                    symbol.receiver = captures["receiver_type"].text.lstrip("*") or None
                if include_source:
                    symbol.source = truncate_source(decl.text, max_source_lines)
                if lines is not None:
                    symbol.doc = extract_doc(lines, decl.range.start.line, doc_pattern)
                outline.symbols.append(symbol)
            break

    return outline


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------


def reference_kind(capture_name: str) -> ReferenceKind:
    """Map a refs-query capture name to a reference kind (never rejects)."""
    return REFERENCE_KINDS.get(capture_name, ReferenceKind.REFERENCE)


def find_references(
    matches: List[Match],
    symbol_name: str,
    include_context: bool = False,
    lines: Optional[Sequence[str]] = None,
) -> List[Reference]:
    """Find captures whose text is exactly ``symbol_name``.

    Matching is textual: no scope or type resolution. Every matching
    capture yields a reference, except that captures sharing a start
    position in one file collapse into one reference with the most
    specific kind. This collapse is a deliberate change from plain
    one-per-capture output: the bundled refs queries overlap (a called
    identifier is also an ``@ident``), and without it every call would
    be reported twice. Queries whose patterns never overlap get exactly
    one reference per capture.
    """
    found: Dict[Tuple[str, int, int], Reference] = {}

    for match in matches:
        for capture in match.captures:
            if capture.text != symbol_name:
                continue

            kind = reference_kind(capture.name)
            start = capture.range.start
            key = (match.file, start.line, start.column)

            existing = found.get(key)
            if existing is not None:
                if _REFERENCE_SPECIFICITY[existing.kind] > _REFERENCE_SPECIFICITY[kind]:
                    existing.kind = kind
                continue

            ref = Reference(
                symbol=symbol_name,
                kind=kind,
                file=match.file,
                position=Position(line=start.line, column=start.column),
            )
            if include_context and lines is not None and 0 <= start.line - 1 < len(lines):
                ref.context = lines[start.line - 1].strip() or None
            found[key] = ref

    return list(found.values())
