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

"""Result shapes produced by treeq.

Every model here is created fresh per call and never persisted. The
``to_dict`` helpers are the wire contract used by the CLI: optional fields
(signature, source, receiver, doc, alias, context) are omitted when empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SymbolKind(str, Enum):
    """Kinds of declarations a symbol can be."""

    FUNCTION = "function"
    METHOD = "method"
    STRUCT = "struct"
    INTERFACE = "interface"
    TYPE = "type"
    CONST = "const"
    VAR = "var"


class Visibility(str, Enum):
    """Naming-convention visibility (leading upper-case letter = public)."""

    PUBLIC = "public"
    PRIVATE = "private"


class ReferenceKind(str, Enum):
    """How a reference uses the symbol."""

    CALL = "call"
    TYPE_REF = "type_ref"
    FIELD_ACCESS = "field_access"
    IDENTIFIER = "identifier"
    REFERENCE = "reference"


class Position(BaseModel):
    """A location in a source file (1-based line and column)."""

    line: int
    column: int


class Range(BaseModel):
    """A span in a source file; ``end`` is inclusive."""

    start: Position
    end: Position


class Capture(BaseModel):
    """A single named capture within a query match."""

    name: str
    node_type: str
    text: str
    range: Range


class Match(BaseModel):
    """A raw tree-sitter query match."""

    file: str
    pattern: int = 0
    captures: List[Capture] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class Symbol(BaseModel):
    """A code symbol (function, type, variable, ...).

    Identity is (file, range, name). Duplicates across files are expected,
    e.g. the same private helper name in two packages.
    """

    name: str
    kind: SymbolKind
    visibility: Visibility
    file: str
    range: Range
    signature: Optional[str] = None  # function signature
    source: Optional[str] = None  # truncated source snippet
    receiver: Optional[str] = None  # for methods: the receiver type
    doc: Optional[str] = None  # documentation comment

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ImportInfo(BaseModel):
    """An import statement."""

    path: str
    alias: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class FileOutline(BaseModel):
    """Structural overview of a single file."""

    file: str
    package: str = ""
    imports: List[ImportInfo] = Field(default_factory=list)
    symbols: List[Symbol] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"file": self.file, "package": self.package}
        if self.imports:
            data["imports"] = [imp.to_dict() for imp in self.imports]
        data["symbols"] = [sym.to_dict() for sym in self.symbols]
        return data


class Reference(BaseModel):
    """A usage of a symbol."""

    symbol: str
    kind: ReferenceKind
    file: str
    position: Position
    context: Optional[str] = None  # stripped source line

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class SymbolsResult(BaseModel):
    """Symbols found in one file."""

    file: str
    symbols: List[Symbol] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "symbols": [sym.to_dict() for sym in self.symbols]}


class RefsResult(BaseModel):
    """All references to one symbol."""

    symbol: str
    references: List[Reference] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "references": [ref.to_dict() for ref in self.references],
        }


@dataclass(frozen=True)
class FileJob:
    """A file to be processed.

    Owned by a single dispatcher worker for one parse+match cycle.
    """

    abs_path: str
    display_path: str
