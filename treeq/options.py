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

"""Options for the query, symbols, outline and refs operations.

Zero values for ``jobs``, ``max_bytes`` and ``max_source_lines`` mean
"use the default" and are resolved by the operations in ``treeq.api``.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_LANGUAGE = "go"
DEFAULT_MAX_BYTES = 2 * 1024 * 1024
DEFAULT_SYMBOLS_SOURCE_LINES = 10
DEFAULT_OUTLINE_SOURCE_LINES = 5

VisibilityFilter = Literal["all", "public", "private"]


class ScanOptions(BaseModel):
    """Options shared by the multi-file operations."""

    language: str = Field(default=DEFAULT_LANGUAGE, description="Registered language name")
    path: str = Field(default=".", description="Root directory to scan")
    file: Optional[str] = Field(
        default=None, description="Single file to process; when set, path is ignored"
    )
    jobs: int = Field(default=0, description="Parallel workers (0 = number of CPUs)")
    max_bytes: int = Field(
        default=0, description="Skip files larger than this (0 = 2 MiB ceiling)"
    )


class QueryOptions(ScanOptions):
    """Options for running a custom tree-sitter query."""

    query: str = Field(default="", description="Tree-sitter query text (required)")


class SymbolsOptions(ScanOptions):
    """Options for symbol extraction."""

    visibility: VisibilityFilter = Field(default="all", description="all, public or private")
    include_source: bool = Field(default=False, description="Attach source snippets")
    max_source_lines: int = Field(
        default=0, description="Max lines per snippet (0 = 10, negative = unlimited)"
    )


class OutlineOptions(BaseModel):
    """Options for a single-file outline."""

    language: str = Field(default=DEFAULT_LANGUAGE, description="Registered language name")
    file: str = Field(default="", description="File to analyze (required)")
    include_source: bool = Field(default=False, description="Attach source snippets")
    max_source_lines: int = Field(
        default=0, description="Max lines per snippet (0 = 5, negative = unlimited)"
    )


class RefsOptions(ScanOptions):
    """Options for reference finding."""

    symbol: str = Field(default="", description="Symbol name to search for (required)")
    include_context: bool = Field(default=False, description="Attach the source line")
