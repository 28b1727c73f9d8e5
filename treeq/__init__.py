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

"""treeq: tree-sitter queries over source trees, projected into JSON records.

Package Structure:
    api.py        - query, symbols, outline and refs operations
    options.py    - Option models for each operation
    models.py     - Result models (Symbol, Reference, FileOutline, ...)
    errors.py     - Exception hierarchy
    cli.py        - Command-line front end
    codebase/     - Parsing, discovery, dispatch and projection
    languages/    - Language plugins and the registry

Usage:
    from treeq import api, create_default_registry
    from treeq.options import RefsOptions

    registry = create_default_registry()
    result = api.refs(RefsOptions(path=".", symbol="NewServer"), registry=registry)
"""

from treeq import api
from treeq.errors import ConfigurationError, QueryCompileError, TreeqError
from treeq.languages import LanguageRegistry, create_default_registry
from treeq.models import (
    Capture,
    FileOutline,
    ImportInfo,
    Match,
    Position,
    Range,
    Reference,
    ReferenceKind,
    RefsResult,
    Symbol,
    SymbolKind,
    SymbolsResult,
    Visibility,
)
from treeq.options import OutlineOptions, QueryOptions, RefsOptions, SymbolsOptions

__version__ = "0.1.0"

__all__ = [
    "api",
    # Errors
    "ConfigurationError",
    "QueryCompileError",
    "TreeqError",
    # Languages
    "LanguageRegistry",
    "create_default_registry",
    # Models
    "Capture",
    "FileOutline",
    "ImportInfo",
    "Match",
    "Position",
    "Range",
    "Reference",
    "ReferenceKind",
    "RefsResult",
    "Symbol",
    "SymbolKind",
    "SymbolsResult",
    "Visibility",
    # Options
    "OutlineOptions",
    "QueryOptions",
    "RefsOptions",
    "SymbolsOptions",
]
