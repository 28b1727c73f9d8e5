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

"""Language support for treeq.

Architecture:
    ┌─────────────────────────────────────────────────────────────┐
    │                   Language Registry                          │
    │  (Built by the caller, maps names/aliases to plugins)       │
    └─────────────────────────────────────────────────────────────┘
                              │
                              ▼
                        ┌───────────┐
                        │    Go     │
                        │  Plugin   │
                        └───────────┘

Each language plugin provides:
- File extension mappings
- Doc comment syntax
- The symbols, outline and references tree-sitter queries
- Example queries for `treeq example-queries`
"""

from treeq.languages.base import (
    BaseLanguagePlugin,
    DocCommentPattern,
    LanguageConfig,
    LanguagePlugin,
    TreeSitterQueries,
)
from treeq.languages.registry import LanguageRegistry, create_default_registry

__all__ = [
    # Base types
    "BaseLanguagePlugin",
    "DocCommentPattern",
    "LanguageConfig",
    "LanguagePlugin",
    "TreeSitterQueries",
    # Registry
    "LanguageRegistry",
    "create_default_registry",
]
