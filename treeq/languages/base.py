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
"""Base types for language plugins.

Defines the interfaces and data structures a language binding provides:
file extensions, doc comment syntax, the three tree-sitter queries
(symbols, outline, references) that the projection pipeline runs, and a
set of example queries for users writing their own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple, runtime_checkable


# ---------------------------------------------------------------------------
# Tree-sitter Query Types
# ---------------------------------------------------------------------------


@dataclass
class TreeSitterQueries:
    """Collection of tree-sitter queries for a language.

    Capture names are the contract with ``treeq.codebase.projector``:

    symbols:
        @function / @method / @type / @const / @var mark the declaration,
        @name the symbol name, @type_def the declared type node,
        @receiver, @params and @result feed the signature.
    outline:
        @package, @path / @alias for imports, then @function + @func_name,
        @method + @method_name + @receiver_type, @struct / @interface /
        @type_alias / @type_named / @type_ptr / @type_slice / @type_map /
        @type_func / @type_chan + @type_name, @const + @const_name,
        @var + @var_name.
    references:
        @call, @type_ref, @composite_type, @field, @ident, @short_var; any
        other capture name is reported as a plain reference.
    examples:
        (title, pattern) pairs; free-form, not read by the projector.
    """

    symbols: str = ""
    outline: str = ""
    references: str = ""
    examples: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class DocCommentPattern:
    """How documentation comments look for a language.

    Attributes:
        line_prefixes: Prefixes for doc comment lines (e.g., ["//"] for Go)
        location: Where doc comments appear relative to the symbol.
            Only "before" is supported by the projector.
    """

    line_prefixes: List[str] = field(default_factory=list)
    location: str = "before"


@dataclass
class LanguageConfig:
    """Configuration for a programming language."""

    # Identity
    name: str  # Canonical name (e.g., "go")
    display_name: str  # Human-readable name (e.g., "Go")
    aliases: List[str] = field(default_factory=list)  # Alternative names

    # Files the scanner picks up
    extensions: List[str] = field(default_factory=list)  # .go

    # Tree-sitter grammar name (key into tree_sitter_manager.LANGUAGE_MODULES)
    tree_sitter_language: Optional[str] = None

    # Documentation comment pattern
    doc_comment_pattern: Optional[DocCommentPattern] = None


@runtime_checkable
class LanguagePlugin(Protocol):
    """Protocol for language plugins."""

    @property
    def config(self) -> LanguageConfig:
        ...

    @property
    def tree_sitter_queries(self) -> TreeSitterQueries:
        ...


class BaseLanguagePlugin(ABC):
    """Base class for language plugins; builds config and queries lazily."""

    def __init__(self):
        self._config: Optional[LanguageConfig] = None
        self._tree_sitter_queries: Optional[TreeSitterQueries] = None

    @property
    def config(self) -> LanguageConfig:
        if self._config is None:
            self._config = self._create_config()
        return self._config

    @property
    def tree_sitter_queries(self) -> TreeSitterQueries:
        if self._tree_sitter_queries is None:
            self._tree_sitter_queries = self._create_tree_sitter_queries()
        return self._tree_sitter_queries

    @abstractmethod
    def _create_config(self) -> LanguageConfig:
        """Create language configuration."""
        ...

    @abstractmethod
    def _create_tree_sitter_queries(self) -> TreeSitterQueries:
        """Create tree-sitter queries for this language."""
        ...
