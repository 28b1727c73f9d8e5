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

"""Public operations: query, symbols, outline and refs.

Each operation resolves its options, compiles its query once, and then
either dispatches the file set to the worker pool (query, symbols, refs)
or parses a single file inline (outline).

Usage:
    from treeq import api
    from treeq.options import SymbolsOptions

    for result in api.symbols(SymbolsOptions(path="./src", visibility="public")):
        print(result.file, [s.name for s in result.symbols])
"""

import logging
import os
import time
from typing import Iterator, List, Optional, Tuple

from treeq.codebase import dispatcher, projector, scanner
from treeq.codebase.tree_sitter_manager import compile_query, new_parser, parse_file
from treeq.errors import ConfigurationError
from treeq.languages.base import LanguagePlugin
from treeq.languages.registry import LanguageRegistry, create_default_registry
from treeq.models import FileJob, FileOutline, Match, Reference, RefsResult, SymbolsResult
from treeq.options import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_BYTES,
    DEFAULT_OUTLINE_SOURCE_LINES,
    DEFAULT_SYMBOLS_SOURCE_LINES,
    OutlineOptions,
    QueryOptions,
    RefsOptions,
    ScanOptions,
    SymbolsOptions,
)

logger = logging.getLogger(__name__)


def _resolve_plugin(language: str, registry: Optional[LanguageRegistry]) -> LanguagePlugin:
    if registry is None:
        registry = create_default_registry()
    try:
        return registry.get(language)
    except KeyError as e:
        raise ConfigurationError(f"unsupported language: {language}") from e


def _grammar(plugin: LanguagePlugin) -> str:
    return plugin.config.tree_sitter_language or plugin.config.name


def _resolve_files(options: ScanOptions, plugin: LanguagePlugin) -> Tuple[List[FileJob], int]:
    """Turn scan options into the file set and the requested worker count.

    Only zero selects a default. A negative ``jobs`` is clamped to one
    worker by the dispatcher; a negative ``max_bytes`` disables the ceiling.
    """
    jobs = (os.cpu_count() or 1) if options.jobs == 0 else options.jobs

    if options.file:
        return [scanner.single(options.file)], jobs

    max_bytes = DEFAULT_MAX_BYTES if options.max_bytes == 0 else options.max_bytes
    files = scanner.discover(options.path, plugin.config.extensions, max_bytes=max_bytes)
    return files, jobs


def _source_lines_default(requested: int, default: int) -> int:
    # 0 selects the default, negative disables truncation
    return default if requested == 0 else requested


def query(options: QueryOptions, registry: Optional[LanguageRegistry] = None) -> List[Match]:
    """Run a custom tree-sitter query over every matching file.

    Raises:
        ConfigurationError: If the query text is empty or the language unknown
        QueryCompileError: If the query does not compile
    """
    if not options.query.strip():
        raise ConfigurationError("query is required")

    plugin = _resolve_plugin(options.language, registry)
    compiled = compile_query(options.query, _grammar(plugin))

    files, jobs = _resolve_files(options, plugin)
    if not files:
        return []

    def process(job: FileJob, matches: List[Match], source: bytes) -> List[Match]:
        return matches

    start_time = time.time()
    matches = dispatcher.dispatch(files, compiled, jobs, process)
    logger.info(
        f"query: {len(matches)} matches in {len(files)} files ({time.time() - start_time:.2f}s)"
    )
    return matches


def symbols(
    options: SymbolsOptions, registry: Optional[LanguageRegistry] = None
) -> List[SymbolsResult]:
    """Extract symbol declarations from every matching file.

    Returns:
        One SymbolsResult per file that has at least one symbol
    """
    plugin = _resolve_plugin(options.language, registry)
    compiled = compile_query(plugin.tree_sitter_queries.symbols, _grammar(plugin))
    max_lines = _source_lines_default(options.max_source_lines, DEFAULT_SYMBOLS_SOURCE_LINES)
    doc_pattern = plugin.config.doc_comment_pattern

    files, jobs = _resolve_files(options, plugin)
    if not files:
        return []

    def process(job: FileJob, matches: List[Match], source: bytes) -> Iterator[SymbolsResult]:
        found = projector.extract_symbols(
            matches,
            visibility=options.visibility,
            include_source=options.include_source,
            max_source_lines=max_lines,
            lines=projector.source_lines(source),
            doc_pattern=doc_pattern,
        )
        if found:
            yield SymbolsResult(file=job.display_path, symbols=found)

    start_time = time.time()
    results = dispatcher.dispatch(files, compiled, jobs, process)
    logger.info(
        f"symbols: {sum(len(r.symbols) for r in results)} symbols in {len(results)}/"
        f"{len(files)} files ({time.time() - start_time:.2f}s)"
    )
    return results


def outline(options: OutlineOptions, registry: Optional[LanguageRegistry] = None) -> FileOutline:
    """Build the structural outline of a single file.

    Runs inline without the worker pool.

    Raises:
        ConfigurationError: If no file is given or the language is unknown
        OSError: If the file cannot be read
    """
    if not options.file:
        raise ConfigurationError("file is required")

    plugin = _resolve_plugin(options.language, registry)
    grammar = _grammar(plugin)
    compiled = compile_query(plugin.tree_sitter_queries.outline, grammar)
    max_lines = _source_lines_default(options.max_source_lines, DEFAULT_OUTLINE_SOURCE_LINES)

    job = scanner.single(options.file)
    tree, source = parse_file(new_parser(grammar), job.abs_path)
    matches = compiled.run(tree, source, job.display_path)

    return projector.build_outline(
        job.display_path,
        matches,
        include_source=options.include_source,
        max_source_lines=max_lines,
        lines=projector.source_lines(source),
        doc_pattern=plugin.config.doc_comment_pattern,
    )


def refs(options: RefsOptions, registry: Optional[LanguageRegistry] = None) -> RefsResult:
    """Find textual references to a symbol name.

    Raises:
        ConfigurationError: If the symbol is empty or the language unknown
    """
    if not options.symbol:
        raise ConfigurationError("symbol is required")

    plugin = _resolve_plugin(options.language, registry)
    compiled = compile_query(plugin.tree_sitter_queries.references, _grammar(plugin))

    files, jobs = _resolve_files(options, plugin)
    if not files:
        return RefsResult(symbol=options.symbol)

    def process(job: FileJob, matches: List[Match], source: bytes) -> List[Reference]:
        lines = projector.source_lines(source) if options.include_context else None
        return projector.find_references(
            matches, options.symbol, include_context=options.include_context, lines=lines
        )

    start_time = time.time()
    references = dispatcher.dispatch(files, compiled, jobs, process)
    logger.info(
        f"refs: {len(references)} references to {options.symbol!r} in {len(files)} files "
        f"({time.time() - start_time:.2f}s)"
    )
    return RefsResult(symbol=options.symbol, references=references)


def example_queries(
    language: str = DEFAULT_LANGUAGE, registry: Optional[LanguageRegistry] = None
) -> List[Tuple[str, str]]:
    """Return the (title, pattern) example queries a language plugin ships.

    Raises:
        ConfigurationError: If the language is unknown
    """
    plugin = _resolve_plugin(language, registry)
    return list(plugin.tree_sitter_queries.examples)
