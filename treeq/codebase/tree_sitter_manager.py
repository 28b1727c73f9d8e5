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

"""Narrow adapter over py-tree-sitter.

Everything else in treeq sees the engine only through ``new_parser``,
``parse_file``, ``compile_query`` and ``CompiledQuery.run``; no other module
touches tree-sitter nodes.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Tuple

from tree_sitter import Language, Parser, Query, QueryCursor, QueryError

from treeq.errors import ConfigurationError, QueryCompileError
from treeq.models import Capture, Match, Position, Range

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

logger = logging.getLogger(__name__)

# Language package mapping for tree-sitter 0.25+
# These use pre-compiled language packages instead of runtime compilation
# Install with: pip install tree-sitter-<language>
# Format: "language_name": ("module_name", "function_name")
LANGUAGE_MODULES: Dict[str, tuple] = {
    "go": ("tree_sitter_go", "language"),
}

_language_cache: Dict[str, Language] = {}


def get_language(language: str) -> Language:
    """
    Loads a tree-sitter Language object using pre-compiled language packages.

    Language objects are immutable and safe to share between threads, so
    they are cached. Parsers are not; see ``new_parser``.
    """
    if language in _language_cache:
        return _language_cache[language]

    module_info = LANGUAGE_MODULES.get(language)
    if not module_info:
        raise ValueError(f"Unsupported language for tree-sitter: {language}")

    module_name, func_name = module_info

    try:
        language_module = __import__(module_name)
        lang_func = getattr(language_module, func_name)
    except ImportError:
        raise ImportError(
            f"Language package '{module_name}' not installed. "
            f"Install it with: pip install {module_name.replace('_', '-')}"
        )
    except AttributeError:
        raise AttributeError(
            f"Language module '{module_name}' does not have function '{func_name}'. "
            f"Check the tree-sitter package version and update LANGUAGE_MODULES."
        )

    lang_obj = lang_func()
    # Some grammar packages expose a PyCapsule; wrap via Language
    lang = Language(lang_obj) if not isinstance(lang_obj, Language) else lang_obj

    _language_cache[language] = lang
    return lang


def new_parser(language: str) -> Parser:
    """Return a new Parser for ``language``.

    Every dispatcher worker owns the parser it gets here and reuses it for
    its sequential jobs. Parsers are never shared between workers.
    """
    return Parser(get_language(language))


def parse_file(parser: Parser, path: str) -> Tuple["Tree", bytes]:
    """Read and parse a file.

    Raises:
        OSError: If the file cannot be read
    """
    source = Path(path).read_bytes()
    return parser.parse(source), source


class CompiledQuery:
    """A compiled tree-sitter query bound to one grammar.

    Compiled queries are read-only and shared by all workers; each ``run``
    call uses its own ``QueryCursor``.
    """

    def __init__(self, query: Query, text: str, language: str):
        self._query = query
        self.text = text
        self.language = language

    @property
    def pattern_count(self) -> int:
        return self._query.pattern_count

    def run(self, tree: "Tree", source: bytes, display_path: str) -> List[Match]:
        """Execute the query on a syntax tree and return its matches.

        Matches keep the engine's order. Captures inside a match are ordered
        by node start position, the enclosing node first on ties.
        """
        cursor = QueryCursor(self._query)
        matches: List[Match] = []

        for pattern_index, capture_dict in cursor.matches(tree.root_node):
            nodes: List[Tuple[str, "Node"]] = [
                (name, node) for name, captured in capture_dict.items() for node in captured
            ]
            nodes.sort(key=lambda item: (item[1].start_byte, -item[1].end_byte))

            matches.append(
                Match(
                    file=display_path,
                    pattern=pattern_index,
                    captures=[_to_capture(name, node, source) for name, node in nodes],
                )
            )

        return matches


def _to_capture(name: str, node: "Node", source: bytes) -> Capture:
    start = node.start_point
    end = node.end_point
    return Capture(
        name=name,
        node_type=node.type,
        text=source[node.start_byte : node.end_byte].decode("utf-8", errors="replace"),
        range=Range(
            start=Position(line=start[0] + 1, column=start[1] + 1),
            end=Position(line=end[0] + 1, column=end[1] + 1),
        ),
    )


def compile_query(text: str, language: str) -> CompiledQuery:
    """Compile a tree-sitter query string for ``language``.

    Raises:
        ConfigurationError: If the query text is empty
        QueryCompileError: If the pattern is malformed
    """
    if not text or not text.strip():
        raise ConfigurationError("query is required")

    lang = get_language(language)
    try:
        query = Query(lang, text)
    except QueryError as e:
        raise QueryCompileError(f"compile query: {e}", query=text) from e

    logger.debug(f"Compiled {language} query with {query.pattern_count} patterns")
    return CompiledQuery(query, text, language)
