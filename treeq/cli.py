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

"""Command-line front end.

Results are printed as JSON on stdout; failures as ``{"error": ...}`` on
stderr with exit status 1. ``example-queries`` prints plain text.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from rich.console import Console

from treeq import api
from treeq.errors import TreeqError
from treeq.options import (
    DEFAULT_LANGUAGE,
    OutlineOptions,
    QueryOptions,
    RefsOptions,
    SymbolsOptions,
)

logger = logging.getLogger(__name__)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--compact", action="store_true", help="minimize output")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--language", default=DEFAULT_LANGUAGE, help="language to parse (default: go)"
    )


def _add_scan(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--path", default=".", help="root path to scan")
    parser.add_argument("-f", "--file", default=None, help="single file to process")
    parser.add_argument(
        "-j", "--jobs", type=int, default=0, help="number of parallel workers (0 = CPU count)"
    )
    parser.add_argument(
        "--max-bytes", type=int, default=0, help="skip files larger than this (0 = 2 MiB)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treeq", description="Tree-sitter powered code queries with JSON output"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    query_p = sub.add_parser("query", help="run a custom tree-sitter query")
    source = query_p.add_mutually_exclusive_group(required=True)
    source.add_argument("-q", "--query", help="tree-sitter query pattern")
    source.add_argument("--query-file", help="file containing the query pattern")
    _add_scan(query_p)
    _add_common(query_p)

    symbols_p = sub.add_parser("symbols", help="extract symbols from code")
    symbols_p.add_argument(
        "--visibility", choices=["all", "public", "private"], default="all",
        help="filter by visibility",
    )
    symbols_p.add_argument(
        "--include-source", action="store_true", help="include source code snippets"
    )
    symbols_p.add_argument(
        "--max-source-lines", type=int, default=0, help="max lines for source snippets"
    )
    _add_scan(symbols_p)
    _add_common(symbols_p)

    outline_p = sub.add_parser("outline", help="get file structure overview")
    outline_p.add_argument("-f", "--file", required=True, help="file to analyze")
    outline_p.add_argument(
        "--include-source", action="store_true", help="include source code snippets"
    )
    outline_p.add_argument(
        "--max-source-lines", type=int, default=0, help="max lines for source snippets"
    )
    _add_common(outline_p)

    refs_p = sub.add_parser("refs", help="find references to a symbol")
    refs_p.add_argument("-s", "--symbol", required=True, help="symbol name to find")
    context = refs_p.add_mutually_exclusive_group()
    context.add_argument(
        "--include-context", dest="include_context", action="store_true", default=True,
        help="include the source line (default)",
    )
    context.add_argument(
        "--no-context", dest="include_context", action="store_false",
        help="omit the source line",
    )
    _add_scan(refs_p)
    _add_common(refs_p)

    examples_p = sub.add_parser(
        "example-queries",
        help="show example tree-sitter queries",
        description="Print example query patterns, one '# title' line before each pattern. "
        "The output is meant for grep, e.g. `treeq example-queries | grep -A1 struct`.",
    )
    _add_common(examples_p)

    return parser


def format_examples(examples: List[Tuple[str, str]]) -> str:
    return "\n".join(f"# {title}\n{pattern}\n" for title, pattern in examples)


def _run(args: argparse.Namespace) -> Any:
    if args.command == "query":
        text = args.query
        if args.query_file:
            text = Path(args.query_file).read_text(encoding="utf-8")
        options = QueryOptions(
            language=args.language, path=args.path, file=args.file, jobs=args.jobs,
            max_bytes=args.max_bytes, query=text,
        )
        return [m.to_dict() for m in api.query(options)]

    if args.command == "symbols":
        options = SymbolsOptions(
            language=args.language, path=args.path, file=args.file, jobs=args.jobs,
            max_bytes=args.max_bytes, visibility=args.visibility,
            include_source=args.include_source, max_source_lines=args.max_source_lines,
        )
        return [r.to_dict() for r in api.symbols(options)]

    if args.command == "outline":
        options = OutlineOptions(
            language=args.language, file=args.file, include_source=args.include_source,
            max_source_lines=args.max_source_lines,
        )
        return api.outline(options).to_dict()

    options = RefsOptions(
        language=args.language, path=args.path, file=args.file, jobs=args.jobs,
        max_bytes=args.max_bytes, symbol=args.symbol, include_context=args.include_context,
    )
    return api.refs(options).to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "example-queries":
            text = format_examples(api.example_queries(args.language))
            Console().print(
                text, markup=False, emoji=False, highlight=False, soft_wrap=True, end=""
            )
            return 0
        data = _run(args)
    except (TreeqError, OSError) as e:
        logger.debug(f"{args.command} failed: {e}")
        Console(stderr=True).print_json(data={"error": str(e)}, indent=None, highlight=False)
        return 1

    Console().print_json(data=data, indent=None if args.compact else 2, highlight=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
